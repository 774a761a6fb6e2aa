"""Repeated-phrase mining over captured entries.

A phrase is any run of 3 to 8 consecutive words (lowercased, words of one
character dropped) at least 10 characters long. Phrases found in at least
two distinct entries are ranked by how many entries contain them; equal
counts keep the order in which the phrases were first seen.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol


class MinableEntry(Protocol):
    """Anything with an id and text, e.g. ``CapturedEntry``."""

    id: int
    content: str


@dataclass
class PhraseCandidate:
    """A repeated phrase and the entries it was found in.

    ``entry_ids`` keeps first-occurrence order and never repeats an id.
    """

    phrase: str
    entry_ids: list[int] = field(default_factory=list)

    @property
    def occurrences(self) -> int:
        return len(self.entry_ids)


def tokenize(text: str) -> list[str]:
    """Lowercase, split on whitespace, drop one-character tokens."""
    return [word for word in text.lower().split() if len(word) > 1]


def mine_phrases(
    entries: Iterable[MinableEntry],
    *,
    min_occurrences: int = 2,
    min_words: int = 3,
    max_words: int = 8,
    min_chars: int = 10,
    limit: int | None = 10,
) -> list[PhraseCandidate]:
    """Find phrases that repeat across entries.

    Args:
        entries: Entries to scan, in creation order.
        min_occurrences: Minimum number of distinct entries containing a phrase.
        min_words: Smallest window size.
        max_words: Largest window size (capped by each entry's token count).
        min_chars: Minimum length of the joined phrase.
        limit: Maximum number of candidates returned (None for all).

    Returns:
        Candidates ranked by distinct-entry count, descending.

    Performance:
        O(T * W) phrases per entry, T tokens and W window sizes (at most 6
        with the defaults).
    """
    candidates: dict[str, PhraseCandidate] = {}

    for entry in entries:
        words = tokenize(entry.content)
        for size in range(min_words, min(max_words, len(words)) + 1):
            for start in range(len(words) - size + 1):
                phrase = " ".join(words[start : start + size])
                if len(phrase) < min_chars:
                    continue

                candidate = candidates.get(phrase)
                if candidate is None:
                    candidate = candidates[phrase] = PhraseCandidate(phrase)
                # One entry counts once, however many windows repeat the phrase
                if entry.id not in candidate.entry_ids:
                    candidate.entry_ids.append(entry.id)

    # sorted() is stable, so dict (first-seen) order breaks ties
    ranked = sorted(
        (c for c in candidates.values() if c.occurrences >= min_occurrences),
        key=lambda c: c.occurrences,
        reverse=True,
    )
    return ranked if limit is None else ranked[:limit]
