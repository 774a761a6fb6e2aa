"""Phrase mining and acronym synthesis."""

from .exceptions import FingerprintDimensionError, GenerationError
from .fingerprint import Fingerprinter, LetterFrequencyFingerprinter, dot_similarity, normalize
from .miner import PhraseCandidate, mine_phrases, tokenize
from .orchestrator import GENERATED_TAGS, GenerationOrchestrator
from .report import GenerationReport
from .similarity import SimilarityGate
from .synthesizer import STOP_WORDS, significant_words, synthesize_acronym

__all__ = [
    "GenerationError",
    "FingerprintDimensionError",
    "Fingerprinter",
    "LetterFrequencyFingerprinter",
    "dot_similarity",
    "normalize",
    "PhraseCandidate",
    "mine_phrases",
    "tokenize",
    "GENERATED_TAGS",
    "GenerationOrchestrator",
    "GenerationReport",
    "SimilarityGate",
    "STOP_WORDS",
    "significant_words",
    "synthesize_acronym",
]
