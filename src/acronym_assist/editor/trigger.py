"""Trigger detection: the word token immediately left of the caret."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Trigger:
    """A candidate acronym token and its ``[start, end)`` span in the buffer."""

    text: str
    start: int
    end: int

    def is_at_caret(self, value: str, caret: int) -> bool:
        """True if detecting at ``caret`` in ``value`` yields this same trigger.

        Both the text and the span must match, so a trigger is stale once the
        caret moves or the word grows, shrinks or ends.
        """
        return 0 <= caret <= len(value) and detect_trigger(value, caret) == self


def is_word_char(char: str) -> bool:
    """Word characters are letters, digits and underscore."""
    return char.isalnum() or char == "_"


def detect_trigger(text: str, caret: int) -> Trigger | None:
    """Return the longest run of word characters ending exactly at ``caret``.

    Whitespace or punctuation directly before the caret means no trigger.

    Raises:
        ValueError: If ``caret`` lies outside ``[0, len(text)]``.

    Example:
        >>> detect_trigger("see the api", 11)
        Trigger(text='api', start=8, end=11)
        >>> detect_trigger("see the api ", 12) is None
        True
    """
    if not 0 <= caret <= len(text):
        raise ValueError(f"Caret {caret} outside text of length {len(text)}")

    start = caret
    while start > 0 and is_word_char(text[start - 1]):
        start -= 1

    if start == caret:
        return None
    return Trigger(text=text[start:caret], start=start, end=caret)
