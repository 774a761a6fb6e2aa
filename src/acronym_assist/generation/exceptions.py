"""Custom exceptions for acronym generation."""


class GenerationError(Exception):
    """Base exception for generation errors."""

    pass


class FingerprintDimensionError(GenerationError):
    """Two fingerprints of different length were compared.

    This is a programming error (mixing fingerprinters), never a data
    problem, so the orchestrator lets it propagate instead of isolating it
    per batch.
    """

    def __init__(self, left: int, right: int):
        super().__init__(f"Fingerprints must have the same length ({left} != {right})")
        self.left = left
        self.right = right
