"""
Domain models for the session composer.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).

These models represent the core business concepts:
- Session: The aggregate root containing ordered blocks
- Block: A named phase holding exercise and rest items
- ExerciseItem / RestItem: The work items inside a block
- ExerciseConfig / ExerciseSet: How an exercise is prescribed
- Module: A block saved to the reusable module library
- ExerciseIdentity: A reference exercise from the library or bulk catalog

Usage:
    >>> from domain.models import Session, Block, ExerciseItem

    >>> session = Session(
    ...     title="Lower Body",
    ...     blocks=[Block(name="Main", items=[ExerciseItem(name="Squat")])],
    ... )

    >>> # Serialize to JSON
    >>> json_str = session.model_dump_json(indent=2)

    >>> # Deserialize from JSON
    >>> session = Session.model_validate_json(json_str)
"""

from domain.models.block import Block, BlockParams, BlockRole, BlockType, ProtocolType
from domain.models.module import MODULE_PROTOCOL, ExerciseIdentity, Module
from domain.models.session import (
    DEFAULT_BLOCK_NAME,
    DEFAULT_SESSION_TITLE,
    Session,
    SessionMetadata,
)
from domain.models.work_item import (
    CARDIO_INTENSITY_TYPES,
    CARDIO_VOLUME_TYPES,
    ExerciseConfig,
    ExerciseItem,
    ExerciseSet,
    IntensityType,
    RestItem,
    VolumeType,
    WorkItem,
    new_id,
)

__all__ = [
    # Main entities
    "Session",
    "SessionMetadata",
    "Block",
    "BlockParams",
    "ExerciseItem",
    "ExerciseConfig",
    "ExerciseSet",
    "RestItem",
    "WorkItem",
    "Module",
    "ExerciseIdentity",
    # Enums
    "ProtocolType",
    "BlockType",
    "BlockRole",
    "VolumeType",
    "IntensityType",
    # Constants
    "DEFAULT_SESSION_TITLE",
    "DEFAULT_BLOCK_NAME",
    "MODULE_PROTOCOL",
    "CARDIO_VOLUME_TYPES",
    "CARDIO_INTENSITY_TYPES",
    # Helpers
    "new_id",
]
