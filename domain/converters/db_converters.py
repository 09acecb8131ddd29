"""
Converters between domain models and Supabase rows.

Rows are plain dicts ready for ``table.insert()``/``table.update()``. Block
and item trees are stored as JSON in a single column so that a session is
persisted and loaded atomically.

Every outgoing row goes through ``normalize_nulls`` so that the payload
never carries a value the database or the JSON encoder cannot represent
(NaN, infinities, enum instances, datetimes).
"""

import logging
import math
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from domain.converters.legacy_converters import legacy_document_to_session
from domain.models import ExerciseIdentity, Module, Session

logger = logging.getLogger(__name__)


def normalize_nulls(value: Any) -> Any:
    """
    Recursively normalize a payload for transmission.

    - NaN and infinities become None
    - Enums become their value
    - datetimes/dates become ISO strings
    - tuples and sets become lists

    Examples:
        >>> normalize_nulls({"a": float("nan"), "b": [1, (2, 3)]})
        {'a': None, 'b': [1, [2, 3]]}
    """
    if isinstance(value, dict):
        return {str(k): normalize_nulls(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [normalize_nulls(v) for v in value]
    if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
        return None
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def session_to_db_row(session: Session) -> Dict[str, Any]:
    """
    Convert a Session to a database row.

    All model fields are emitted explicitly (unset optionals as None), so
    the stored JSON has a key for every field.

    Examples:
        >>> from domain.models import Session
        >>> row = session_to_db_row(Session.new())
        >>> row["title"]
        'New Session'
        >>> row["protocol"]
        'LIBRE'
    """
    row: Dict[str, Any] = {
        "title": session.title,
        "group_name": session.group,
        "description": session.description,
        "protocol": session.protocol.value,
        "is_cardio": session.is_cardio,
        "blocks": [block.model_dump(mode="json") for block in session.blocks],
        "metadata": session.metadata.model_dump(mode="json") if session.metadata else None,
    }

    if session.id:
        row["id"] = session.id

    return normalize_nulls(row)


def is_legacy_row(row: Dict[str, Any]) -> bool:
    """True for rows written by the old editor (blocks carry ``exercises``)."""
    return any(
        isinstance(block, dict) and "exercises" in block and "items" not in block
        for block in row.get("blocks") or []
    )


def db_row_to_session(row: Dict[str, Any]) -> Session:
    """
    Convert a database row to a Session.

    Enum fields are validated here; an unknown volume or intensity unit in
    the stored JSON raises ``pydantic.ValidationError``. Blocks stored
    before lineage tracking get their ``stable_id`` from their ``id``.
    Rows written by the old editor go through the legacy converter.
    """
    if is_legacy_row(row):
        session = legacy_document_to_session({**row, "group": row.get("group_name") or row.get("group")})
        return session.model_copy(
            update={
                "id": _str_or_none(row.get("id")),
                "created_at": row.get("created_at"),
                "updated_at": row.get("updated_at"),
            }
        )

    blocks: List[Dict[str, Any]] = []
    for block_data in row.get("blocks") or []:
        block_data = dict(block_data)
        if not block_data.get("stable_id") and block_data.get("id"):
            block_data["stable_id"] = block_data["id"]
        blocks.append(block_data)

    return Session.model_validate(
        {
            "id": _str_or_none(row.get("id")),
            "title": row.get("title") or "",
            "group": row.get("group_name"),
            "description": row.get("description") or "",
            "protocol": row.get("protocol") or "LIBRE",
            "is_cardio": bool(row.get("is_cardio", False)),
            "blocks": blocks,
            "metadata": row.get("metadata"),
            "created_at": row.get("created_at"),
            "updated_at": row.get("updated_at"),
        }
    )


def module_to_db_row(module: Module) -> Dict[str, Any]:
    """Convert a Module to a database row."""
    row: Dict[str, Any] = {
        "name": module.name,
        "description": module.description,
        "stable_id": module.stable_id,
        "protocol": module.protocol,
        "items": [item.model_dump(mode="json") for item in module.items],
        "created_at": module.created_at,
    }
    if module.id:
        row["id"] = module.id
    return normalize_nulls(row)


def db_row_to_module(row: Dict[str, Any]) -> Module:
    """Convert a database row to a Module."""
    return Module.model_validate(
        {
            "id": _str_or_none(row.get("id")),
            "stable_id": row.get("stable_id"),
            "name": row.get("name") or "",
            "description": row.get("description"),
            "protocol": row.get("protocol") or "HYBRID",
            "items": row.get("items") or [],
            "created_at": row.get("created_at"),
        }
    )


def db_row_to_exercise_identity(row: Dict[str, Any]) -> Optional[ExerciseIdentity]:
    """
    Convert a user-library exercise row to an ExerciseIdentity.

    Returns None for rows without an id or name; the library is user
    editable and may hold half-filled drafts.
    """
    if not row.get("id") or not row.get("name"):
        logger.debug("Skipping library exercise without id/name: %s", row.get("id"))
        return None

    return ExerciseIdentity(
        id=str(row["id"]),
        name=row["name"],
        translated_name=row.get("translated_name") or None,
        instructions=_as_lines(row.get("instructions")),
        translated_instructions=_as_lines(row.get("translated_instructions")),
        description=row.get("description") or None,
        media_url=row.get("media_url") or None,
        gif_url=row.get("gif_url") or None,
        video_url=row.get("video_url") or None,
        pattern=row.get("pattern") or None,
        equipment=row.get("equipment") or None,
        quality=row.get("quality") or None,
    )


def _as_lines(value: Any) -> List[str]:
    """Accept a list of lines or a newline-joined string."""
    if not value:
        return []
    if isinstance(value, str):
        return [line for line in value.split("\n") if line.strip()]
    return [str(line) for line in value if line]


def _str_or_none(value: Any) -> Optional[str]:
    return str(value) if value is not None else None
