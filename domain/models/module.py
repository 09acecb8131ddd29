"""
Reusable block templates ("modules") and catalog exercise records.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from domain.models.work_item import WorkItem

MODULE_PROTOCOL = "HYBRID"


class Module(BaseModel):
    """
    A block saved to the module library.

    ``id`` is the library record id; ``stable_id`` is the lineage id of the
    block it was saved from. Imported copies inherit the lineage id (or the
    record id when the module predates lineage tracking).
    """

    id: Optional[str] = None
    stable_id: Optional[str] = None
    name: str
    description: Optional[str] = None
    protocol: str = MODULE_PROTOCOL
    items: List[WorkItem] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    model_config = {"frozen": True}

    @property
    def lineage_id(self) -> Optional[str]:
        return self.stable_id or self.id


class ExerciseIdentity(BaseModel):
    """Reference record for one exercise in the user library or bulk catalog."""

    id: str
    name: str
    translated_name: Optional[str] = None
    instructions: List[str] = Field(default_factory=list)
    translated_instructions: List[str] = Field(default_factory=list)
    description: Optional[str] = None
    media_url: Optional[str] = None
    gif_url: Optional[str] = None
    video_url: Optional[str] = None
    pattern: Optional[str] = None
    equipment: Optional[str] = None
    quality: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def best_media_url(self) -> Optional[str]:
        return self.media_url or self.gif_url
