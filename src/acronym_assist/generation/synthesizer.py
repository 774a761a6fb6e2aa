"""Deterministic acronym synthesis from a phrase.

Three letter-selection strategies are cycled by attempt number, so a caller
that hits a collision can ask for the next attempt and get a different
label for the same phrase:

    attempt % 3 == 0:  first letter of each word            -> API
    attempt % 3 == 1:  two letters of the first word, then
                       first letter of each other word      -> APPI
    attempt % 3 == 2:  first letter of the first word, then
                       two letters of each other word       -> APRIN

("application programming interface" shown.)

Words in STOP_WORDS, single characters and pure numbers are skipped. A
phrase made only of such words falls back to the first letter of every
word, whatever the attempt.
"""

import re

STOP_WORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by",
        "is", "are", "was", "were", "be", "been", "being", "have", "has", "had", "do", "does",
        "did", "will", "would", "shall", "should", "may", "might", "must", "can", "could",
        "this", "that", "these", "those", "my", "your", "his", "her", "its", "our", "their",
        "as", "from", "up", "about", "into", "over", "after", "again", "further", "then",
        "once", "here", "there", "when", "where", "why", "how", "all", "any", "both", "each",
        "few", "more", "most", "other", "some", "such", "no", "nor", "not", "only", "own",
        "same", "so", "than", "too", "very", "s", "t", "just", "now",
    }
)  # fmt: skip

STRATEGY_COUNT = 3

_NUMBER_RE = re.compile(r"[0-9]+")


def significant_words(phrase: str) -> list[str]:
    """Lowercased words of ``phrase`` that can contribute letters."""
    return [
        word
        for word in phrase.lower().split()
        if word not in STOP_WORDS and len(word) > 1 and not _NUMBER_RE.fullmatch(word)
    ]


def synthesize_acronym(phrase: str, attempt: int = 0) -> str:
    """Build a candidate label for ``phrase``.

    Args:
        phrase: Phrase to abbreviate.
        attempt: Zero-based attempt index; ``attempt % 3`` picks the strategy.

    Returns:
        Uppercase label (empty for a blank phrase).

    Raises:
        ValueError: If ``attempt`` is negative.
    """
    if attempt < 0:
        raise ValueError("attempt must be >= 0")

    words = significant_words(phrase)
    if not words:
        return "".join(word[0] for word in phrase.lower().split()).upper()

    first, rest = words[0], words[1:]
    strategy = attempt % STRATEGY_COUNT

    # Strategies 1 and 2 need a second word to differ from strategy 0
    if strategy == 0 or not rest:
        label = "".join(word[0] for word in words)
    elif strategy == 1:
        label = first[:2] + "".join(word[0] for word in rest)
    else:
        label = first[0] + "".join(word[:2] for word in rest)

    return label.upper()
