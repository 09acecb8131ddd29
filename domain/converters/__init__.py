"""
Domain converters for moving sessions across the persistence boundary.

- session_to_db_row / db_row_to_session: Session <-> Supabase row
- module_to_db_row / db_row_to_module: Module <-> Supabase row
- db_row_to_exercise_identity: user library row -> ExerciseIdentity
- legacy_document_to_session: legacy camelCase editor document -> Session
- normalize_nulls: outgoing payload normalization

All converters are pure functions with no side effects.

Examples:
    >>> from domain.converters import session_to_db_row, db_row_to_session
    >>> from domain.models import Session

    >>> row = session_to_db_row(Session.new())
    >>> session = db_row_to_session(row)
"""

from domain.converters.db_converters import (
    db_row_to_exercise_identity,
    db_row_to_module,
    db_row_to_session,
    is_legacy_row,
    module_to_db_row,
    normalize_nulls,
    session_to_db_row,
)
from domain.converters.legacy_converters import legacy_document_to_session

__all__ = [
    "session_to_db_row",
    "db_row_to_session",
    "is_legacy_row",
    "module_to_db_row",
    "db_row_to_module",
    "db_row_to_exercise_identity",
    "legacy_document_to_session",
    "normalize_nulls",
]
