"""
Block model: a named phase of a session.

Blocks carry two identifiers:
- ``id``: transient, regenerated whenever the block is duplicated or
  imported so copies never alias each other.
- ``stable_id``: lineage identity, kept across protocol reapplication and
  module import. Only a genuine duplicate gets a new one.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from domain.models.work_item import ExerciseItem, WorkItem, new_id


class ProtocolType(str, Enum):
    """Structural protocol applied to a session or block."""

    LIBRE = "LIBRE"  # free-form, no template
    PDP_T = "PDP-T"  # density under a time cap
    PDP_R = "PDP-R"  # target reps for time
    PDP_E = "PDP-E"  # EMOM
    CARDIO = "CARDIO"

    @property
    def is_pdp(self) -> bool:
        """True for the templated Progressive Density protocols."""
        return self in (ProtocolType.PDP_T, ProtocolType.PDP_R, ProtocolType.PDP_E)


class BlockType(str, Enum):
    """Functional type of a templated block."""

    BOOST = "BOOST"
    BASE = "BASE"
    BUILD = "BUILD"
    BURN = "BURN"


class BlockRole(str, Enum):
    """Position of a block in the canonical PDP layout."""

    BOOST = "BOOST"
    BASE = "BASE"
    BUILD_A = "BUILD-A"
    BUILD_B = "BUILD-B"
    BURN_A = "BURN-A"
    BURN_B = "BURN-B"

    @property
    def block_type(self) -> BlockType:
        """Block type shared by the A/B variants of a role."""
        return BlockType(self.value.split("-")[0])


class BlockParams(BaseModel):
    """Protocol parameters attached to a templated block."""

    time_cap_seconds: Optional[int] = Field(default=None, ge=0)
    target_reps: Optional[int] = Field(default=None, ge=0)
    emom_minutes: Optional[int] = Field(default=None, ge=0)

    model_config = {"frozen": True}


class Block(BaseModel):
    """
    A named, ordered list of work items.

    Examples:
        >>> block = Block(name="BASE - Strength", items=[ExerciseItem(name="Squat")])
        >>> block.exercise_count
        1
    """

    id: str = Field(default_factory=new_id)
    stable_id: Optional[str] = Field(default_factory=new_id)
    name: str = Field(default="", description="Display name")
    description: Optional[str] = None
    role: Optional[BlockRole] = Field(default=None, description="Canonical role when built from a template")
    protocol: Optional[ProtocolType] = Field(default=None, description="Per-block protocol override")
    params: Optional[BlockParams] = None
    items: List[WorkItem] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def exercises(self) -> List[ExerciseItem]:
        """Exercise items in reading order, rests excluded."""
        return [item for item in self.items if isinstance(item, ExerciseItem)]

    @property
    def exercise_count(self) -> int:
        return len(self.exercises)

    def with_items(self, items: List[WorkItem]) -> "Block":
        """Return a copy holding ``items``."""
        return self.model_copy(update={"items": list(items)})

    def duplicate(self) -> "Block":
        """
        Deep copy as a new block.

        The copy is a different block, so both ``id`` and ``stable_id`` are
        fresh, and every item gets a new transient id.
        """
        return self.model_copy(
            update={
                "id": new_id(),
                "stable_id": new_id(),
                "items": [item.duplicate() for item in self.items],
            },
            deep=True,
        )

    def __str__(self) -> str:
        names = ", ".join(ex.name for ex in self.exercises[:3])
        if self.exercise_count > 3:
            names += f" (+{self.exercise_count - 3} more)"
        return f"{self.name} [{names}]"
