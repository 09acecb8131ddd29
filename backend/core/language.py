"""
Spanish-language heuristics used when hydrating exercise names.

The bulk catalog is English; sessions are written for Spanish speaking
athletes. Names a coach typed in Spanish must not be sent to the
translator, and machine translations read better in the informal
imperative the coaches use ("Mantén" rather than "Mantenga").
"""

import re
from typing import Dict

_DIACRITICS = re.compile(r"[áéíóúÁÉÍÓÚñÑüÜ]")

SPANISH_STOP_WORDS = frozenset({"con", "de", "del", "el", "la", "las", "los", "un", "una", "en", "por", "sobre", "para", "y"})

# Formal imperative -> informal imperative.
_IMPERATIVES: Dict[str, str] = {
    "Mantenga": "Mantén",
    "Coloque": "Coloca",
    "Asegúrese": "Asegúrate",
    "Respire": "Respira",
    "Realice": "Realiza",
    "Extienda": "Extiende",
    "Flexione": "Flexiona",
    "Inhale": "Inhala",
    "Exhale": "Exhala",
    "Apriete": "Aprieta",
    "Empuje": "Empuja",
    "Tire": "Tira",
    "Baje": "Baja",
    "Suba": "Sube",
    "Sostenga": "Sostén",
    "Evite": "Evita",
    "Procure": "Procura",
    "Trate": "Trata",
    "Comience": "Comienza",
    "Repita": "Repite",
}

_IMPERATIVE_PATTERN = re.compile(r"\b(" + "|".join(_IMPERATIVES) + r")\b")


def looks_spanish(text: str) -> bool:
    """
    Guess whether ``text`` is already Spanish.

    Examples:
        >>> looks_spanish("Sentadilla búlgara")
        True
        >>> looks_spanish("Press de banca")
        True
        >>> looks_spanish("Bench Press")
        False
    """
    if not text:
        return False
    if _DIACRITICS.search(text):
        return True
    tokens = set(re.findall(r"\w+", text.lower()))
    return bool(tokens & SPANISH_STOP_WORDS)


def informal_imperative(text: str) -> str:
    """Rewrite formal imperatives produced by machine translation."""
    if not text:
        return ""
    return _IMPERATIVE_PATTERN.sub(lambda m: _IMPERATIVES[m.group(1)], text)
