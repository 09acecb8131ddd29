"""
Converter: legacy editor documents to the Session model.

Older sessions were stored by the web editor in a camelCase document:

    {
        "name": "...", "group": "...", "type": "PDP-T", "isCardio": false,
        "blocks": [{
            "id": "...", "stableId": "...", "name": "...",
            "params": {"timeCap": 240, "targetReps": null, "emomMinutes": null},
            "exercises": [
                {"type": "REST", "duration": 60},
                {"id": "...", "name": "...", "name_es": "...", "isGrouped": true,
                 "config": {"volType": "TIME", "intType": "RIR",
                            "sets": [{"reps": 240, "rir": "2-3", "rest": 0}]}}
            ]
        }]
    }

Missing translations, instructions and media are left empty here; the
hydration service backfills them at load time.
"""

import logging
from typing import Any, Dict, List, Optional

from domain.models import (
    Block,
    BlockParams,
    ExerciseConfig,
    ExerciseItem,
    ExerciseSet,
    IntensityType,
    RestItem,
    Session,
    WorkItem,
    new_id,
)

logger = logging.getLogger(__name__)


def _parse_set(set_data: Dict[str, Any], intensity_type: IntensityType) -> ExerciseSet:
    """Map a legacy ``{reps, rir, weight, rest}`` set."""
    intensity = set_data.get("rir")
    if intensity_type == IntensityType.PESO and set_data.get("weight") not in (None, ""):
        intensity = set_data.get("weight")

    rest = set_data.get("rest")
    try:
        rest_seconds = int(rest) if rest not in (None, "") else 60
    except (TypeError, ValueError):
        rest_seconds = 60

    return ExerciseSet(
        volume_value=_blank_to_none(set_data.get("reps")),
        intensity_value=_blank_to_none(intensity),
        rest_seconds=max(rest_seconds, 0),
    )


def _convert_config(config_data: Optional[Dict[str, Any]]) -> ExerciseConfig:
    config_data = config_data or {}
    # Validating through the model maps legacy spellings like "%" and rejects unknown units.
    base = ExerciseConfig.model_validate(
        {
            "volume_type": config_data.get("volType") or "REPS",
            "intensity_type": config_data.get("intType") or "RIR",
            "shared_time": bool(config_data.get("sharedTime", False)),
            "is_emom": bool(config_data.get("isEMOM", False)),
        }
    )
    sets = [_parse_set(s, base.intensity_type) for s in config_data.get("sets") or []]
    return base.model_copy(update={"sets": sets})


def _convert_item(item_data: Dict[str, Any]) -> WorkItem:
    if str(item_data.get("type", "")).upper() == "REST":
        return RestItem(duration_seconds=int(item_data.get("duration") or 60))

    config_data = item_data.get("config") or {}
    return ExerciseItem(
        exercise_id=_blank_to_none(item_data.get("id")),
        name=item_data.get("name") or "",
        translated_name=_blank_to_none(item_data.get("name_es")),
        instructions=list(item_data.get("instructions") or []),
        translated_instructions=list(item_data.get("instructions_es") or []),
        description=_blank_to_none(item_data.get("description")),
        media_url=_blank_to_none(item_data.get("mediaUrl") or item_data.get("imageStart")),
        video_url=_blank_to_none(item_data.get("youtubeUrl")),
        pattern=_blank_to_none(item_data.get("pattern")),
        equipment=_blank_to_none(item_data.get("equipment")),
        quality=_blank_to_none(item_data.get("quality")),
        notes=_blank_to_none(item_data.get("notes")),
        is_grouped=bool(item_data.get("isGrouped", False)),
        config=_convert_config(config_data),
        cardio_override=bool(config_data.get("forceCardio", False)),
    )


def _convert_params(params_data: Optional[Dict[str, Any]]) -> Optional[BlockParams]:
    if not params_data:
        return None
    return BlockParams(
        time_cap_seconds=params_data.get("timeCap"),
        target_reps=params_data.get("targetReps"),
        emom_minutes=params_data.get("emomMinutes"),
    )


def _convert_block(block_data: Dict[str, Any]) -> Block:
    items: List[WorkItem] = [_convert_item(item) for item in block_data.get("exercises") or []]
    protocol = block_data.get("protocol") or None
    return Block(
        id=block_data.get("id") or new_id(),
        # Left empty when absent; hydration backfills it from the id.
        stable_id=block_data.get("stableId") or None,
        name=block_data.get("name") or "",
        description=_blank_to_none(block_data.get("description")),
        protocol=protocol,
        params=_convert_params(block_data.get("params")),
        items=items,
    )


def legacy_document_to_session(doc: Dict[str, Any]) -> Session:
    """
    Convert a legacy editor document to a Session.

    Args:
        doc: Legacy camelCase session document.

    Returns:
        Session with the document's structure. Enum fields are validated;
        an unknown unit raises ``pydantic.ValidationError``.

    Examples:
        >>> session = legacy_document_to_session({
        ...     "name": "Legs",
        ...     "blocks": [{"name": "Main", "exercises": [{"name": "Squat"}]}],
        ... })
        >>> session.blocks[0].exercises[0].name
        'Squat'
    """
    blocks = [_convert_block(b) for b in doc.get("blocks") or []]
    logger.debug("Converted legacy session '%s' with %d blocks", doc.get("name"), len(blocks))

    return Session(
        id=_blank_to_none(doc.get("id")),
        title=doc.get("name") or doc.get("title") or "",
        group=_blank_to_none(doc.get("group")),
        description=doc.get("description") or "",
        protocol=doc.get("type") or "LIBRE",
        is_cardio=bool(doc.get("isCardio", False)),
        blocks=blocks,
    )


def _blank_to_none(value: Any) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return value
