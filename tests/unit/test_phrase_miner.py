"""Unit tests for repeated-phrase mining."""

from dataclasses import dataclass

from acronym_assist.generation import mine_phrases, tokenize


@dataclass
class Entry:
    id: int
    content: str


def entries(*texts: str) -> list[Entry]:
    return [Entry(id=i, content=text) for i, text in enumerate(texts, start=1)]


class TestTokenize:
    """Tests for tokenization."""

    def test_lowercases_and_drops_single_characters(self) -> None:
        """Single-character tokens are removed."""
        assert tokenize("The quick  brown fox is a Common pangram") == [
            "the", "quick", "brown", "fox", "is", "common", "pangram",
        ]  # fmt: skip

    def test_punctuation_stays_attached(self) -> None:
        """Splitting is on whitespace only."""
        assert tokenize("lazy dog.") == ["lazy", "dog."]


class TestMinePhrases:
    """Tests for mine_phrases."""

    def test_quick_brown_fox(self) -> None:
        """The shared phrase is found in both entries."""
        candidates = mine_phrases(
            entries(
                "the quick brown fox jumps over the lazy dog",
                "the quick brown fox is a common pangram",
            )
        )

        by_phrase = {c.phrase: c for c in candidates}
        assert by_phrase["the quick brown fox"].entry_ids == [1, 2]
        assert [c.phrase for c in candidates] == [
            "the quick brown",
            "quick brown fox",
            "the quick brown fox",
        ]

    def test_results_meet_thresholds(self) -> None:
        """Every candidate is long enough and in at least two entries."""
        candidates = mine_phrases(
            entries(
                "we deploy the service to the staging cluster today",
                "deploy the service to the staging cluster again",
                "nothing in common here at all",
            )
        )

        assert candidates
        for candidate in candidates:
            assert candidate.occurrences >= 2
            assert len(candidate.phrase) >= 10
            assert 3 <= len(candidate.phrase.split()) <= 8

    def test_ranked_by_entry_count_then_first_seen(self) -> None:
        """More entries rank higher; ties keep first-seen order."""
        candidates = mine_phrases(
            entries(
                "alpha beta gamma delta",
                "alpha beta gamma delta",
                "beta gamma delta",
            )
        )

        assert [(c.phrase, c.occurrences) for c in candidates] == [
            ("beta gamma delta", 3),
            ("alpha beta gamma", 2),
            ("alpha beta gamma delta", 2),
        ]

    def test_entry_counts_once(self) -> None:
        """A phrase repeated inside one entry is not a repeat across entries."""
        candidates = mine_phrases(entries("red green blue red green blue red green blue"))
        assert candidates == []

    def test_short_phrases_are_dropped(self) -> None:
        """Joined phrases under ten characters are ignored."""
        assert mine_phrases(entries("ab cd ef", "ab cd ef")) == []

    def test_limit(self) -> None:
        """Only the top candidates are returned."""
        texts = ["one two three four five six seven eight nine ten"] * 2
        assert len(mine_phrases(entries(*texts), limit=4)) == 4
        assert len(mine_phrases(entries(*texts), limit=None)) > 10

    def test_custom_thresholds(self) -> None:
        """Occurrence and window thresholds are parameters."""
        candidates = mine_phrases(
            entries("machine learning model", "machine learning rocks", "machine learning"),
            min_occurrences=3,
            min_words=2,
            min_chars=5,
        )
        assert [(c.phrase, c.entry_ids) for c in candidates] == [
            ("machine learning", [1, 2, 3])
        ]
