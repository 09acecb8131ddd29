"""
Unit tests for Spanish-language heuristics.
"""

import pytest

from backend.core.language import informal_imperative, looks_spanish


@pytest.mark.unit
class TestLooksSpanish:
    @pytest.mark.parametrize("text", ["Sentadilla búlgara", "Press de banca", "Remo con mancuerna", "Extensión"])
    def test_spanish(self, text):
        assert looks_spanish(text)

    @pytest.mark.parametrize("text", ["Bench Press", "Dumbbell Row", "", "Deadlift"])
    def test_not_spanish(self, text):
        assert not looks_spanish(text)


@pytest.mark.unit
class TestInformalImperative:
    def test_rewrites_formal_verbs(self):
        assert informal_imperative("Mantenga la espalda recta. Respire.") == "Mantén la espalda recta. Respira."

    def test_leaves_other_words(self):
        assert informal_imperative("Mantengamos el ritmo") == "Mantengamos el ritmo"

    def test_empty(self):
        assert informal_imperative("") == ""
