"""
Work items: the exercise and rest entries that make up a block.

A block holds an ordered list of work items. Each item is either an
ExerciseItem (an exercise with its set configuration) or a RestItem (a
timed rest). The two are a tagged union on the ``type`` field so that the
persisted JSON can be validated back into the right class.
"""

import uuid
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator


def new_id() -> str:
    """Generate a fresh transient identifier."""
    return str(uuid.uuid4())


class VolumeType(str, Enum):
    """Unit in which the volume of a set is prescribed."""

    REPS = "REPS"
    TIME = "TIME"  # seconds
    KCAL = "KCAL"
    METROS = "METROS"  # meters
    KM = "KM"


class IntensityType(str, Enum):
    """Unit in which the intensity of a set is prescribed."""

    RIR = "RIR"  # reps in reserve
    PESO = "PESO"  # load in kg
    PERCENT = "PERCENT"  # % of 1RM
    RPE = "RPE"
    WATTS = "WATTS"
    BPM = "BPM"
    RITMO = "RITMO"  # pace, min/km
    NIVEL = "NIVEL"  # machine level


# Spellings found in older session records.
_VOLUME_ALIASES = {
    "DISTANCE": VolumeType.METROS,
    "METERS": VolumeType.METROS,
    "M": VolumeType.METROS,
    "SECONDS": VolumeType.TIME,
    "CAL": VolumeType.KCAL,
}

_INTENSITY_ALIASES = {
    "%": IntensityType.PERCENT,
    "KG": IntensityType.PESO,
    "WEIGHT": IntensityType.PESO,
    "PACE": IntensityType.RITMO,
    "LEVEL": IntensityType.NIVEL,
}

CARDIO_VOLUME_TYPES = frozenset({VolumeType.TIME, VolumeType.KCAL, VolumeType.METROS, VolumeType.KM})
CARDIO_INTENSITY_TYPES = frozenset(
    {IntensityType.RPE, IntensityType.WATTS, IntensityType.BPM, IntensityType.RITMO, IntensityType.NIVEL}
)

SetValue = Union[int, float, str]


class ExerciseSet(BaseModel):
    """
    A single prescribed set.

    ``intensity_value`` accepts strings so that ranges like "2-3" RIR or a
    pace like "5:00" survive unchanged.

    Examples:
        >>> ExerciseSet(volume_value=10, intensity_value="2-3", rest_seconds=60)
        ExerciseSet(volume_value=10, intensity_value='2-3', rest_seconds=60)
    """

    volume_value: Optional[SetValue] = Field(default=None, description="Reps, seconds, kcal or distance")
    intensity_value: Optional[SetValue] = Field(default=None, description="Value in the config's intensity unit")
    rest_seconds: int = Field(default=60, ge=0, description="Rest after the set in seconds")

    model_config = {"frozen": True}


class ExerciseConfig(BaseModel):
    """Set prescription for one exercise item."""

    volume_type: VolumeType = Field(default=VolumeType.REPS)
    intensity_type: IntensityType = Field(default=IntensityType.RIR)
    sets: List[ExerciseSet] = Field(default_factory=list)
    shared_time: bool = Field(default=False, description="Time cap is shared by the whole chain")
    is_emom: bool = Field(default=False, description="Every minute on the minute")

    @field_validator("volume_type", mode="before")
    @classmethod
    def normalize_volume_type(cls, v):
        """Accept lowercase and legacy spellings; reject anything else."""
        if isinstance(v, str):
            key = v.strip().upper()
            return _VOLUME_ALIASES.get(key, key)
        return v

    @field_validator("intensity_type", mode="before")
    @classmethod
    def normalize_intensity_type(cls, v):
        """Accept lowercase and legacy spellings; reject anything else."""
        if isinstance(v, str):
            key = v.strip().upper()
            return _INTENSITY_ALIASES.get(key, key)
        return v

    model_config = {"frozen": True}


class ExerciseItem(BaseModel):
    """
    An exercise placed in a block.

    Identity fields (catalog id, names, instructions, media, pattern,
    equipment) describe WHAT the exercise is; ``config`` and
    ``is_grouped`` describe HOW it is performed in this block. Protocol
    templates overwrite the latter and keep the former.

    ``id`` is the transient item identifier and is regenerated on every
    copy. ``exercise_id`` points at the catalog entry.
    """

    type: Literal["exercise"] = "exercise"
    id: str = Field(default_factory=new_id)
    exercise_id: Optional[str] = Field(default=None, description="Catalog identifier")
    name: str = Field(default="", description="Exercise name in the source language")
    translated_name: Optional[str] = Field(default=None, description="Name in the target language")
    instructions: List[str] = Field(default_factory=list)
    translated_instructions: List[str] = Field(default_factory=list)
    description: Optional[str] = None
    media_url: Optional[str] = None
    video_url: Optional[str] = None
    pattern: Optional[str] = Field(default=None, description="Movement pattern (Squat, Push, Pull...)")
    equipment: Optional[str] = None
    quality: Optional[str] = Field(default=None, description="Physical quality tag (F, E, C...)")
    notes: Optional[str] = None
    is_grouped: bool = Field(default=False, description="Chained to the previous exercise")
    config: ExerciseConfig = Field(default_factory=ExerciseConfig)
    cardio_override: bool = Field(default=False, description="Unlock cardio-only units for this exercise")

    model_config = {"frozen": True}

    @property
    def display_name(self) -> str:
        """Translated name when available, otherwise the source name."""
        return self.translated_name or self.name

    def duplicate(self) -> "ExerciseItem":
        """Deep copy with a fresh transient id."""
        return self.model_copy(update={"id": new_id()}, deep=True)

    def with_sets(self, sets: List[ExerciseSet]) -> "ExerciseItem":
        """Return a copy with the given sets."""
        return self.model_copy(update={"config": self.config.model_copy(update={"sets": list(sets)})})

    def add_set(self) -> "ExerciseItem":
        """Append a set copied from the last one (or a default set)."""
        sets = list(self.config.sets)
        if sets:
            sets.append(sets[-1].model_copy())
        else:
            sets.append(ExerciseSet(volume_value=10, intensity_value=2, rest_seconds=60))
        return self.with_sets(sets)

    def remove_set(self, index: int) -> "ExerciseItem":
        """Return a copy without the set at ``index``."""
        sets = list(self.config.sets)
        del sets[index]
        return self.with_sets(sets)


class RestItem(BaseModel):
    """A timed rest between exercises."""

    type: Literal["rest"] = "rest"
    id: str = Field(default_factory=new_id)
    duration_seconds: int = Field(default=60, ge=0)

    model_config = {"frozen": True}

    def duplicate(self) -> "RestItem":
        """Copy with a fresh transient id."""
        return self.model_copy(update={"id": new_id()})


WorkItem = Annotated[Union[ExerciseItem, RestItem], Field(discriminator="type")]
