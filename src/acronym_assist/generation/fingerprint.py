"""Cheap character-composition fingerprints for near-duplicate detection."""

import math
from abc import ABC, abstractmethod
from collections.abc import Sequence

from .exceptions import FingerprintDimensionError

Fingerprint = list[float]


def normalize(vector: Sequence[float]) -> Fingerprint:
    """Scale a vector to unit Euclidean magnitude.

    The zero vector is returned unchanged (as a new list).
    """
    magnitude = math.sqrt(sum(v * v for v in vector))
    if magnitude == 0:
        return list(vector)
    return [v / magnitude for v in vector]


def dot_similarity(left: Sequence[float], right: Sequence[float]) -> float:
    """Dot product of two fingerprints (cosine similarity for unit vectors).

    Raises:
        FingerprintDimensionError: If the fingerprints differ in length.
    """
    if len(left) != len(right):
        raise FingerprintDimensionError(len(left), len(right))
    return sum(a * b for a, b in zip(left, right))


class Fingerprinter(ABC):
    """Turns a string into a fixed-length similarity signal.

    The orchestrator and the similarity gate only talk to this interface,
    so the letter-frequency signal can be swapped for a real text-similarity
    measure without touching their control flow.
    """

    @property
    @abstractmethod
    def dimensions(self) -> int:
        """Length of every fingerprint this instance produces."""
        pass

    @abstractmethod
    def fingerprint(self, text: str) -> Fingerprint:
        """Compute the unit-normalized fingerprint of ``text``."""
        pass

    def similarity(self, left: Sequence[float], right: Sequence[float]) -> float:
        """Agreement score between two fingerprints, higher is more similar."""
        return dot_similarity(left, right)


class LetterFrequencyFingerprinter(Fingerprinter):
    """26 letter counters (a-z, case-folded), normalized to unit length.

    Digits, punctuation, whitespace and non-ASCII letters are ignored, so
    "API", "a.p.i" and "PIA" all share one fingerprint.

    Example:
        >>> LetterFrequencyFingerprinter().fingerprint("ab")[:3]
        [0.7071067811865475, 0.7071067811865475, 0.0]
    """

    DIMENSIONS = 26

    @property
    def dimensions(self) -> int:
        return self.DIMENSIONS

    def fingerprint(self, text: str) -> Fingerprint:
        counts = [0.0] * self.DIMENSIONS
        for char in text.lower():
            index = ord(char) - ord("a")
            if 0 <= index < self.DIMENSIONS:
                counts[index] += 1
        return normalize(counts)
