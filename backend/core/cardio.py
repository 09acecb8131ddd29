"""
Cardio mode.

``Session.is_cardio`` switches a session to cardio work: structural set
configuration is hidden, protocol templates are not applied, and cardio
units (time, distance, kcal / RPE, watts, heart rate, pace, level) are
offered for every exercise. Outside cardio sessions a single exercise can
unlock the cardio units through its ``cardio_override`` flag, or by being
recognisably cardio (quality tag or name).
"""

import logging
from typing import Optional

from domain.models import (
    Block,
    ExerciseConfig,
    ExerciseItem,
    ExerciseSet,
    IntensityType,
    ProtocolType,
    Session,
    VolumeType,
)

logger = logging.getLogger(__name__)

CARDIO_SESSION_TITLE = "New Cardio Session"
CARDIO_SESSION_DESCRIPTION = "Cardiovascular work session."
CARDIO_BLOCK_NAME = "Cardio Block"
CARDIO_EXERCISE_NAME = "Run / Bike / Row"
CARDIO_QUALITY = "E"

CARDIO_QUALITIES = frozenset({"E", "ENERGY", "ENERGÍA", "ENERGIA", "CARDIO", "ENDURANCE", "RESISTENCIA", "C"})

CARDIO_KEYWORDS = (
    "bike",
    "cycling",
    "ciclismo",
    "running",
    "carrera",
    "rowing",
    "rower",
    "remo",
    "swim",
    "natación",
    "cardio",
    "walking",
    "elliptical",
    "elíptica",
)


def build_cardio_exercise() -> ExerciseItem:
    """Default cardio exercise: 10 minutes at RPE 6."""
    return ExerciseItem(
        name=CARDIO_EXERCISE_NAME,
        quality=CARDIO_QUALITY,
        pattern="Global",
        config=ExerciseConfig(
            volume_type=VolumeType.TIME,
            intensity_type=IntensityType.RPE,
            sets=[ExerciseSet(volume_value=600, intensity_value=6, rest_seconds=0)],
        ),
    )


def enable_cardio(session: Session) -> Session:
    """
    Switch a session to cardio mode.

    An empty session is rebuilt as one cardio block with one default
    exercise. A session with exercises keeps its structure; only a
    placeholder title is replaced.

    Examples:
        >>> cardio = enable_cardio(Session.new())
        >>> len(cardio.blocks), cardio.blocks[0].exercise_count
        (1, 1)
    """
    update = {
        "is_cardio": True,
        "protocol": ProtocolType.CARDIO,
        "description": CARDIO_SESSION_DESCRIPTION,
    }

    if session.is_empty:
        update["blocks"] = [Block(name=CARDIO_BLOCK_NAME, items=[build_cardio_exercise()])]
        update["title"] = CARDIO_SESSION_TITLE
    elif session.has_default_title:
        update["title"] = CARDIO_SESSION_TITLE

    logger.debug("Enabled cardio mode on session '%s'", session.title)
    return session.model_copy(update=update)


def disable_cardio(session: Session) -> Session:
    """Leave cardio mode; the CARDIO tag falls back to LIBRE, structure is untouched."""
    protocol = ProtocolType.LIBRE if session.protocol == ProtocolType.CARDIO else session.protocol
    return session.model_copy(update={"is_cardio": False, "protocol": protocol})


def _has_cardio_quality(quality: Optional[str]) -> bool:
    if not quality:
        return False
    tags = {tag.strip().upper() for tag in quality.replace("/", ",").split(",")}
    return bool(tags & CARDIO_QUALITIES)


def is_cardio_capable(exercise: ExerciseItem, session: Optional[Session] = None) -> bool:
    """
    Whether cardio units should be offered for ``exercise``.

    True if the session is a cardio session, the exercise has its override
    flag set, its quality tag is a cardio quality, or its name contains a
    cardio keyword.

    Examples:
        >>> is_cardio_capable(ExerciseItem(name="Airbike Sprint"))
        True
        >>> is_cardio_capable(ExerciseItem(name="Back Squat", quality="F"))
        False
    """
    if session is not None and session.is_cardio:
        return True
    if exercise.cardio_override:
        return True
    if _has_cardio_quality(exercise.quality):
        return True

    names = " ".join(n for n in (exercise.translated_name, exercise.name) if n).lower()
    return any(keyword in names for keyword in CARDIO_KEYWORDS)
