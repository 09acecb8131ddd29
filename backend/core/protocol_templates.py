"""
Progressive Density Program (PDP) template tables.

A PDP session always has the same shape: six blocks in the order BOOST,
BASE, BUILD-A, BUILD-B, BURN-A, BURN-B holding 2, 1, 1, 1, 2, 2 exercise
slots. BOOST and BURN blocks are supersets, so their second slot is
grouped. The protocol only changes how each slot is prescribed:

- PDP-T: work for a fixed time cap
- PDP-R: complete target reps as fast as possible
- PDP-E: EMOM, N minutes of a fixed number of reps per round

Everything here is data plus the functions that instantiate it; the merge
with user content lives in ``protocol_engine``.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from domain.models import (
    BlockParams,
    BlockRole,
    BlockType,
    ExerciseConfig,
    ExerciseItem,
    ExerciseSet,
    IntensityType,
    ProtocolType,
    VolumeType,
)


# =============================================================================
# Constants
# =============================================================================


@dataclass(frozen=True)
class BlockConstants:
    """Numeric presets of one block type."""

    time_cap_seconds: int
    target_reps: int
    emom_minutes: int
    emom_reps_per_round: int


PROTOCOL_CONSTANTS: Dict[BlockType, BlockConstants] = {
    BlockType.BOOST: BlockConstants(time_cap_seconds=240, target_reps=30, emom_minutes=4, emom_reps_per_round=6),
    BlockType.BASE: BlockConstants(time_cap_seconds=240, target_reps=30, emom_minutes=4, emom_reps_per_round=6),
    BlockType.BUILD: BlockConstants(time_cap_seconds=300, target_reps=40, emom_minutes=5, emom_reps_per_round=8),
    BlockType.BURN: BlockConstants(time_cap_seconds=360, target_reps=60, emom_minutes=6, emom_reps_per_round=10),
}

DEFAULT_INTENSITY = "2-3"  # RIR
PLACEHOLDER_PATTERN = "Global"
PLACEHOLDER_QUALITY = "F"

# Block types run as supersets; their odd slots are chained to the previous one.
PAIRED_BLOCK_TYPES = frozenset({BlockType.BOOST, BlockType.BURN})

# Fallback block type by position when a block's name carries no type.
POSITIONAL_BLOCK_TYPES: Tuple[BlockType, ...] = (
    BlockType.BOOST,
    BlockType.BASE,
    BlockType.BUILD,
    BlockType.BUILD,
    BlockType.BURN,
    BlockType.BURN,
)


# =============================================================================
# Layout
# =============================================================================


@dataclass(frozen=True)
class SlotTemplate:
    """One exercise slot of the canonical layout."""

    role: BlockRole
    slot_index: int
    grouped: bool

    @property
    def block_type(self) -> BlockType:
        return self.role.block_type


CANONICAL_ROLES: Tuple[BlockRole, ...] = (
    BlockRole.BOOST,
    BlockRole.BASE,
    BlockRole.BUILD_A,
    BlockRole.BUILD_B,
    BlockRole.BURN_A,
    BlockRole.BURN_B,
)

SLOT_TEMPLATES: Tuple[SlotTemplate, ...] = (
    SlotTemplate(BlockRole.BOOST, 0, grouped=False),
    SlotTemplate(BlockRole.BOOST, 1, grouped=True),
    SlotTemplate(BlockRole.BASE, 0, grouped=False),
    SlotTemplate(BlockRole.BUILD_A, 0, grouped=False),
    SlotTemplate(BlockRole.BUILD_B, 0, grouped=False),
    SlotTemplate(BlockRole.BURN_A, 0, grouped=False),
    SlotTemplate(BlockRole.BURN_A, 1, grouped=True),
    SlotTemplate(BlockRole.BURN_B, 0, grouped=False),
    SlotTemplate(BlockRole.BURN_B, 1, grouped=True),
)

BLOCK_NAMES: Dict[BlockRole, str] = {
    BlockRole.BOOST: "BOOST - Activation",
    BlockRole.BASE: "BASE - Strength",
    BlockRole.BUILD_A: "BUILD A - Capacity",
    BlockRole.BUILD_B: "BUILD B - Capacity",
    BlockRole.BURN_A: "BURN A - Conditioning",
    BlockRole.BURN_B: "BURN B - Conditioning",
}

_BLOCK_FOCUS: Dict[BlockType, str] = {
    BlockType.BOOST: "Dynamic activation (superset)",
    BlockType.BASE: "Foundational strength (single)",
    BlockType.BUILD: "Capacity building (single)",
    BlockType.BURN: "Metabolic (superset)",
}

SESSION_DESCRIPTIONS: Dict[ProtocolType, str] = {
    ProtocolType.PDP_T: (
        "Progressive Density Program under a time cap. Work format: maximum density in a fixed time.\n\n"
        "• BOOST (4 min): activation superset alternating 2 exercises.\n"
        "• BASE (4 min): strength work on 1 main exercise.\n"
        "• BUILD A/B (5 min each): capacity work on single exercises.\n"
        "• BURN A/B (6 min each): 2 AMRAP-style conditioning supersets."
    ),
    ProtocolType.PDP_R: (
        "Progressive Density Program based on reps. Work format: complete the target reps in the least time.\n\n"
        "• BOOST (30 reps): superset sharing the reps (15+15).\n"
        "• BASE (30 reps): strength work on 1 exercise.\n"
        "• BUILD A/B (40 reps each): capacity on single exercises.\n"
        "• BURN A/B (60 reps each): conditioning supersets (60 reps per exercise)."
    ),
    ProtocolType.PDP_E: (
        "Progressive Density Program in EMOM format. Work format: Every Minute On the Minute.\n\n"
        "• BOOST (4 min): superset A+B (6 reps/min).\n"
        "• BASE (4 min): 1 exercise (6 reps/min).\n"
        "• BUILD A/B (5 min each): 1 exercise (8 reps/min).\n"
        "• BURN A/B (6 min each): supersets (10+10 reps/min)."
    ),
}


def canonical_slot_count(block_type: BlockType) -> int:
    """Canonical exercises for a block type (2 for paired types, else 1)."""
    return 2 if block_type in PAIRED_BLOCK_TYPES else 1


def is_grouped_slot(block_type: BlockType, slot_index: int) -> bool:
    return block_type in PAIRED_BLOCK_TYPES and slot_index % 2 == 1


def session_title(protocol: ProtocolType) -> str:
    return f"Session {protocol.value}"


# =============================================================================
# Instantiation
# =============================================================================


def _constants(block_type: BlockType) -> BlockConstants:
    return PROTOCOL_CONSTANTS.get(block_type, PROTOCOL_CONSTANTS[BlockType.BASE])


def build_config(protocol: ProtocolType, block_type: BlockType) -> ExerciseConfig:
    """
    Build the canonical set configuration of one slot.

    BOOST splits its time cap or rep target between its two exercises
    (floor division).

    Raises:
        ValueError: If ``protocol`` is not a PDP protocol.

    Examples:
        >>> config = build_config(ProtocolType.PDP_R, BlockType.BOOST)
        >>> config.sets[0].volume_value
        15
    """
    values = _constants(block_type)

    if protocol == ProtocolType.PDP_T:
        volume = values.time_cap_seconds // 2 if block_type == BlockType.BOOST else values.time_cap_seconds
        return ExerciseConfig(
            volume_type=VolumeType.TIME,
            intensity_type=IntensityType.RIR,
            sets=[ExerciseSet(volume_value=volume, intensity_value=DEFAULT_INTENSITY, rest_seconds=0)],
            shared_time=block_type == BlockType.BURN,
        )

    if protocol == ProtocolType.PDP_R:
        volume = values.target_reps // 2 if block_type == BlockType.BOOST else values.target_reps
        return ExerciseConfig(
            volume_type=VolumeType.REPS,
            intensity_type=IntensityType.RIR,
            sets=[ExerciseSet(volume_value=volume, intensity_value=DEFAULT_INTENSITY, rest_seconds=0)],
        )

    if protocol == ProtocolType.PDP_E:
        sets: List[ExerciseSet] = [
            ExerciseSet(volume_value=values.emom_reps_per_round, intensity_value=DEFAULT_INTENSITY, rest_seconds=0)
            for _ in range(values.emom_minutes)
        ]
        return ExerciseConfig(
            volume_type=VolumeType.REPS,
            intensity_type=IntensityType.RIR,
            sets=sets,
            is_emom=True,
        )

    raise ValueError(f"Protocol {protocol.value} has no set template")


def build_params(protocol: ProtocolType, block_type: BlockType) -> BlockParams:
    """Block params carrying only the value the protocol runs on."""
    values = _constants(block_type)
    if protocol == ProtocolType.PDP_T:
        return BlockParams(time_cap_seconds=values.time_cap_seconds)
    if protocol == ProtocolType.PDP_R:
        return BlockParams(target_reps=values.target_reps)
    if protocol == ProtocolType.PDP_E:
        return BlockParams(emom_minutes=values.emom_minutes)
    raise ValueError(f"Protocol {protocol.value} has no block params")


def block_description(protocol: ProtocolType, block_type: BlockType) -> str:
    """Short description of a templated block, e.g. '5 min - Capacity building (single)'."""
    values = _constants(block_type)
    focus = _BLOCK_FOCUS[block_type]
    if protocol == ProtocolType.PDP_T:
        return f"{values.time_cap_seconds // 60} min - {focus}"
    if protocol == ProtocolType.PDP_R:
        return f"{values.target_reps} reps - {focus}"
    return f"EMOM {values.emom_minutes} min - {values.emom_reps_per_round} reps/min"


def build_placeholder(protocol: ProtocolType, block_type: BlockType, slot_index: int) -> ExerciseItem:
    """
    Generic exercise for an unfilled slot, named after its position in the block.

    Examples:
        >>> build_placeholder(ProtocolType.PDP_R, BlockType.BOOST, 1).name
        'Exercise 2'
    """
    return ExerciseItem(
        name=f"Exercise {slot_index + 1}",
        pattern=PLACEHOLDER_PATTERN,
        quality=PLACEHOLDER_QUALITY,
        config=build_config(protocol, block_type),
        is_grouped=is_grouped_slot(block_type, slot_index),
    )
