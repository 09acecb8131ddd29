"""
Domain layer for the session composer.

This package contains pure domain models and converters that are
independent of infrastructure concerns (database, API, external services).
"""

from domain.models import (
    Block,
    ExerciseItem,
    Module,
    ProtocolType,
    RestItem,
    Session,
)

__all__ = [
    "Block",
    "ExerciseItem",
    "Module",
    "ProtocolType",
    "RestItem",
    "Session",
]
