"""
Session aggregate root.

A session is a complete planned workout: a title, a protocol tag and an
ordered list of blocks. Sessions are immutable; every edit returns a new
Session so an operation is either fully applied or not visible at all.
"""

from datetime import datetime
from typing import Iterator, List, Optional

from pydantic import BaseModel, Field

from domain.models.block import Block, ProtocolType
from domain.models.work_item import ExerciseItem

DEFAULT_SESSION_TITLE = "New Session"
DEFAULT_BLOCK_NAME = "Block 1"


class SessionMetadata(BaseModel):
    """Summary figures computed when the session is saved."""

    duration_minutes: int = Field(default=0, ge=0)
    block_count: int = Field(default=0, ge=0)
    total_exercises: int = Field(default=0, ge=0)

    model_config = {"frozen": True}


class Session(BaseModel):
    """
    A structured workout session.

    Examples:
        >>> session = Session.new()
        >>> session.title
        'New Session'
        >>> len(session.blocks)
        1
    """

    id: Optional[str] = Field(default=None, description="Persistence id (None until saved)")
    title: str = ""
    group: Optional[str] = Field(default=None, description="Grouping label, e.g. a program or week")
    description: str = ""
    protocol: ProtocolType = ProtocolType.LIBRE
    is_cardio: bool = False
    blocks: List[Block] = Field(default_factory=list)
    metadata: Optional[SessionMetadata] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"frozen": True}

    @classmethod
    def new(cls) -> "Session":
        """Blank session with one empty block."""
        return cls(title=DEFAULT_SESSION_TITLE, blocks=[Block(name=DEFAULT_BLOCK_NAME)])

    @property
    def has_default_title(self) -> bool:
        """True while the title is empty or still the placeholder."""
        return not self.title.strip() or DEFAULT_SESSION_TITLE.lower() in self.title.lower()

    @property
    def exercise_count(self) -> int:
        return sum(block.exercise_count for block in self.blocks)

    @property
    def is_empty(self) -> bool:
        """True when no block holds an exercise."""
        return self.exercise_count == 0

    def iter_exercises(self) -> Iterator[ExerciseItem]:
        """Yield every exercise item across blocks in reading order."""
        for block in self.blocks:
            yield from block.exercises

    def with_blocks(self, blocks: List[Block]) -> "Session":
        return self.model_copy(update={"blocks": list(blocks)})

    def replace_block(self, index: int, block: Block) -> "Session":
        """Return a copy with ``blocks[index]`` swapped for ``block``."""
        blocks = list(self.blocks)
        blocks[index] = block
        return self.with_blocks(blocks)

    def with_id(self, session_id: str) -> "Session":
        """Return a copy carrying the persistence id."""
        return self.model_copy(update={"id": session_id})

    def __str__(self) -> str:
        return f"{self.title} ({self.protocol.value}, {len(self.blocks)} blocks, {self.exercise_count} exercises)"
