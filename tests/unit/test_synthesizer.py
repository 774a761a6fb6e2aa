"""Unit tests for acronym synthesis."""

import pytest

from acronym_assist.generation import significant_words, synthesize_acronym


class TestSignificantWords:
    """Tests for word filtering."""

    def test_drops_stop_words_short_words_and_numbers(self) -> None:
        """Stop words, single characters and pure numbers are skipped."""
        assert significant_words("The 2024 state of a B web API") == ["state", "web", "api"]

    def test_lowercases(self) -> None:
        """Words are compared and returned in lowercase."""
        assert significant_words("Machine Learning") == ["machine", "learning"]


class TestSynthesizeAcronym:
    """Tests for the three letter-selection strategies."""

    PHRASE = "application programming interface"

    @pytest.mark.parametrize(
        "attempt,expected",
        [(0, "API"), (1, "APPI"), (2, "APRIN"), (3, "API"), (4, "APPI"), (5, "APRIN")],
    )
    def test_strategies_cycle_by_attempt(self, attempt: int, expected: str) -> None:
        """attempt % 3 picks the strategy."""
        assert synthesize_acronym(self.PHRASE, attempt) == expected

    def test_deterministic(self) -> None:
        """Same phrase and attempt always give the same label."""
        labels = {synthesize_acronym("natural language processing", 1) for _ in range(10)}
        assert labels == {"NALP"}

    def test_stop_words_are_skipped(self) -> None:
        """Stop words contribute no letters."""
        assert synthesize_acronym("the quick brown fox") == "QBF"

    def test_single_significant_word(self) -> None:
        """With one survivor every strategy falls back to its first letter."""
        assert [synthesize_acronym("the database", a) for a in range(3)] == ["D", "D", "D"]

    def test_only_stop_words(self) -> None:
        """A phrase of only stop words uses every word's first letter."""
        assert synthesize_acronym("to be or not", 0) == "TBON"
        assert synthesize_acronym("to be or not", 2) == "TBON"

    def test_blank_phrase(self) -> None:
        """A blank phrase gives an empty label."""
        assert synthesize_acronym("   ") == ""

    def test_result_is_uppercase(self) -> None:
        """Labels are uppercase whatever the input case."""
        assert synthesize_acronym("Machine Learning Ops", 2) == "MLEOP"

    def test_negative_attempt_rejected(self) -> None:
        """Negative attempts are a programming error."""
        with pytest.raises(ValueError):
            synthesize_acronym(self.PHRASE, -1)
