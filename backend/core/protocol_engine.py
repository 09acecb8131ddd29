"""
Protocol engine: restructure a session (or one block) into a PDP layout.

Session-level application rebuilds the six canonical blocks and migrates
the user's exercises into them:

1. Flatten every exercise of the session, in reading order, into a FIFO
   queue (rest items are dropped).
2. Walk the slot table; each slot pops the next exercise and keeps its
   identity (name, media, instructions, pattern, equipment...) while its
   configuration and grouping are overwritten by the slot preset.
3. Slots left over once the queue is empty get placeholder exercises.
4. Exercises still queued after the last slot do not fit; they are
   returned in ``ProtocolApplication.discarded`` and reported as warnings.

Overwriting existing work needs ``confirmed=True``; without it only the
protocol tag changes.
"""

import itertools
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Optional, Set, Union

from backend.core.cardio import enable_cardio
from backend.core.grouping import normalize_grouping
from backend.core.protocol_templates import (
    BLOCK_NAMES,
    CANONICAL_ROLES,
    POSITIONAL_BLOCK_TYPES,
    SESSION_DESCRIPTIONS,
    SLOT_TEMPLATES,
    SlotTemplate,
    block_description,
    build_params,
    build_placeholder,
    canonical_slot_count,
    session_title,
)
from domain.models import (
    Block,
    BlockRole,
    BlockType,
    ExerciseItem,
    ProtocolType,
    Session,
    WorkItem,
    new_id,
)

logger = logging.getLogger(__name__)


class CardioSessionError(Exception):
    """Raised when a PDP restructure is requested on a cardio session."""

    def __init__(self, message: str = "Cardio sessions cannot be restructured by a protocol template"):
        self.message = message
        super().__init__(message)


@dataclass
class ProtocolApplication:
    """Outcome of applying a protocol."""

    session: Session
    protocol: ProtocolType
    restructured: bool = False
    discarded: List[ExerciseItem] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def needs_confirmation(self) -> bool:
        """True when the restructure was skipped for lack of confirmation."""
        return self.protocol.is_pdp and not self.restructured


def _keep_identity(source: ExerciseItem, preset: ExerciseItem) -> ExerciseItem:
    """Source identity, preset configuration and grouping, fresh id."""
    return source.model_copy(
        update={
            "id": new_id(),
            "name": source.name or preset.name,
            "pattern": source.pattern or preset.pattern,
            "config": preset.config,
            "is_grouped": preset.is_grouped,
        },
        deep=True,
    )


def _fill_slot(slot: SlotTemplate, protocol: ProtocolType, queue: Deque[ExerciseItem]) -> ExerciseItem:
    preset = build_placeholder(protocol, slot.block_type, slot.slot_index)
    if not queue:
        return preset
    return _keep_identity(queue.popleft(), preset)


def _stable_ids_by_role(existing: List[Block]) -> Dict[BlockRole, str]:
    """
    Lineage ids for the canonical blocks.

    A role reuses the stable id of an existing block with the same role,
    else of the existing block at the same position. Roles left out get a
    new id when their block is built.
    """
    assigned: Dict[BlockRole, str] = {}
    used: Set[str] = set()

    for role in CANONICAL_ROLES:
        for block in existing:
            if block.role == role and block.stable_id and block.stable_id not in used:
                assigned[role] = block.stable_id
                used.add(block.stable_id)
                break

    for position, role in enumerate(CANONICAL_ROLES):
        if role in assigned or position >= len(existing):
            continue
        candidate = existing[position].stable_id
        if candidate and candidate not in used:
            assigned[role] = candidate
            used.add(candidate)

    return assigned


def _restructure(session: Session, protocol: ProtocolType) -> ProtocolApplication:
    queue: Deque[ExerciseItem] = deque(session.iter_exercises())
    stable_ids = _stable_ids_by_role(session.blocks)
    blocks: List[Block] = []

    for role, slots in itertools.groupby(SLOT_TEMPLATES, key=lambda slot: slot.role):
        block_type = role.block_type
        blocks.append(
            Block(
                stable_id=stable_ids.get(role) or new_id(),
                name=BLOCK_NAMES[role],
                description=block_description(protocol, block_type),
                role=role,
                params=build_params(protocol, block_type),
                items=[_fill_slot(slot, protocol, queue) for slot in slots],
            )
        )

    discarded = list(queue)
    warnings: List[str] = []
    if discarded:
        names = ", ".join(ex.name or "(unnamed)" for ex in discarded)
        message = (
            f"{len(discarded)} exercise(s) did not fit the {protocol.value} layout "
            f"of {len(SLOT_TEMPLATES)} slots and were removed: {names}"
        )
        warnings.append(message)
        logger.warning(message)

    restructured = session.model_copy(
        update={
            "protocol": protocol,
            "title": session_title(protocol),
            "description": SESSION_DESCRIPTIONS[protocol],
            "blocks": blocks,
        }
    )
    logger.info(
        "Applied %s to session '%s': %d migrated, %d discarded",
        protocol.value,
        session.title,
        min(session.exercise_count, len(SLOT_TEMPLATES)),
        len(discarded),
    )

    return ProtocolApplication(
        session=restructured,
        protocol=protocol,
        restructured=True,
        discarded=discarded,
        warnings=warnings,
    )


def apply_session_protocol(
    session: Session,
    protocol: Union[ProtocolType, str],
    confirmed: bool = False,
) -> ProtocolApplication:
    """
    Apply a protocol to the whole session.

    Args:
        session: Session to restructure.
        protocol: Target protocol.
        confirmed: Whether the user accepted overwriting existing exercises.
            Ignored for an empty session.

    Returns:
        ProtocolApplication with the new session. For LIBRE only the tag,
        block overrides and params are cleared and cardio mode is switched
        off. For CARDIO the session is switched to cardio mode.

    Raises:
        CardioSessionError: If a PDP protocol is applied to a cardio session.
    """
    protocol = ProtocolType(protocol)

    if protocol == ProtocolType.CARDIO:
        return ProtocolApplication(session=enable_cardio(session), protocol=protocol)

    if protocol == ProtocolType.LIBRE:
        blocks = [block.model_copy(update={"protocol": None, "params": None}) for block in session.blocks]
        return ProtocolApplication(
            session=session.model_copy(update={"protocol": ProtocolType.LIBRE, "is_cardio": False, "blocks": blocks}),
            protocol=protocol,
        )

    if session.is_cardio:
        raise CardioSessionError()

    if not session.is_empty and not confirmed:
        logger.info("Protocol %s not confirmed; updating tag only", protocol.value)
        return ProtocolApplication(
            session=session.model_copy(update={"protocol": protocol}),
            protocol=protocol,
            warnings=[f"Applying {protocol.value} would overwrite {session.exercise_count} exercise(s); confirmation required"],
        )

    return _restructure(session, protocol)


# =============================================================================
# Block-level application
# =============================================================================


def infer_block_type(block: Block, position: int) -> BlockType:
    """
    Block type from the block's role or name, else from its position.

    Examples:
        >>> infer_block_type(Block(name="burn finisher"), 0)
        <BlockType.BURN: 'BURN'>
        >>> infer_block_type(Block(name="Main"), 2)
        <BlockType.BUILD: 'BUILD'>
    """
    if block.role is not None:
        return block.role.block_type

    upper_name = block.name.upper()
    for block_type in BlockType:
        if block_type.value in upper_name:
            return block_type

    if position < len(POSITIONAL_BLOCK_TYPES):
        return POSITIONAL_BLOCK_TYPES[position]
    return BlockType.BASE


def apply_block_protocol(
    session: Session,
    block_index: int,
    protocol: Union[ProtocolType, str],
    confirmed: bool = False,
) -> ProtocolApplication:
    """
    Apply a protocol to a single block as an override.

    The block keeps all its exercises (at least the canonical count for
    its type, padding with placeholders); each one keeps its identity and
    gets the preset configuration and grouping of its position.

    Raises:
        CardioSessionError: If a PDP protocol is applied in a cardio session.
        ValueError: If ``protocol`` is CARDIO (a session-level mode).
    """
    protocol = ProtocolType(protocol)
    block = session.blocks[block_index]

    if protocol == ProtocolType.CARDIO:
        raise ValueError("Cardio is a session-level mode and cannot be applied to one block")

    if protocol == ProtocolType.LIBRE:
        updated = block.model_copy(update={"protocol": ProtocolType.LIBRE, "params": None})
        return ProtocolApplication(session=session.replace_block(block_index, updated), protocol=protocol)

    if session.is_cardio:
        raise CardioSessionError()

    if block.exercise_count and not confirmed:
        updated = block.model_copy(update={"protocol": protocol})
        return ProtocolApplication(
            session=session.replace_block(block_index, updated),
            protocol=protocol,
            warnings=[f"Applying {protocol.value} would overwrite {block.exercise_count} exercise(s); confirmation required"],
        )

    block_type = infer_block_type(block, block_index)
    items: List[WorkItem] = []
    exercise_index = 0
    for item in block.items:
        if isinstance(item, ExerciseItem):
            preset = build_placeholder(protocol, block_type, exercise_index)
            items.append(
                item.model_copy(
                    update={"config": preset.config, "is_grouped": preset.is_grouped, "name": item.name or preset.name}
                )
            )
            exercise_index += 1
        else:
            items.append(item)

    target = max(canonical_slot_count(block_type), exercise_index)
    for slot_index in range(exercise_index, target):
        items.append(build_placeholder(protocol, block_type, slot_index))

    updated = block.model_copy(
        update={"protocol": protocol, "params": build_params(protocol, block_type), "items": items}
    )
    return ProtocolApplication(
        session=session.replace_block(block_index, normalize_grouping(updated)),
        protocol=protocol,
        restructured=True,
    )


def needs_confirmation(session: Session, block_index: Optional[int] = None) -> bool:
    """Whether applying a PDP protocol would overwrite existing exercises."""
    if block_index is None:
        return not session.is_empty
    return session.blocks[block_index].exercise_count > 0
