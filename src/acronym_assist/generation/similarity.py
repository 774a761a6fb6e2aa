"""Similarity gate and feedback adjuster.

The gate keeps two private caches for the lifetime of one orchestrator:

- phrase signals: fingerprints of mined phrases, keyed by phrase
- label signals: fingerprints of labels (existing and accepted), keyed by label

Candidates are compared against label signals only. Feedback rescales a
label signal in place and re-normalizes it, so later comparisons against
that label use the adjusted signal.
"""

from collections.abc import Iterable

from acronym_assist.logging_config import get_logger

from .fingerprint import Fingerprint, Fingerprinter, LetterFrequencyFingerprinter, normalize

logger = get_logger(__name__)


class SimilarityGate:
    """Rejects candidate labels that look too much like existing ones.

    Args:
        fingerprinter: Signal implementation (letter frequency by default).
        threshold: Similarities strictly above this reject a candidate.
        learning_rate: Scale step applied by ``reinforce``.

    Example:
        >>> gate = SimilarityGate(threshold=0.7)
        >>> gate.find_similar("PIA", ["API"])[0]
        'API'
    """

    def __init__(
        self,
        fingerprinter: Fingerprinter | None = None,
        threshold: float = 0.7,
        learning_rate: float = 0.1,
    ):
        if not 0.0 <= learning_rate < 1.0:
            raise ValueError("learning_rate must be in [0, 1)")
        self.fingerprinter = fingerprinter or LetterFrequencyFingerprinter()
        self.threshold = threshold
        self.learning_rate = learning_rate
        self._phrase_signals: dict[str, Fingerprint] = {}
        self._label_signals: dict[str, Fingerprint] = {}

    def remember_phrase(self, phrase: str) -> Fingerprint:
        """Compute and cache the fingerprint of a mined phrase."""
        signal = self.fingerprinter.fingerprint(phrase)
        self._phrase_signals[phrase] = signal
        return list(signal)

    def label_signal(self, label: str) -> Fingerprint:
        """Cached fingerprint of a label, computed and cached on first use."""
        signal = self._label_signals.get(label)
        if signal is None:
            signal = self.fingerprinter.fingerprint(label)
            self._label_signals[label] = signal
        return signal

    def find_similar(self, candidate: str, existing: Iterable[str]) -> tuple[str, float] | None:
        """First existing label whose similarity to ``candidate`` exceeds the threshold.

        Returns:
            ``(label, similarity)`` of the first offending label, or None.
        """
        candidate_signal = self.fingerprinter.fingerprint(candidate)
        for label in existing:
            score = self.fingerprinter.similarity(candidate_signal, self.label_signal(label))
            if score > self.threshold:
                return label, score
        return None

    def accept(self, label: str) -> None:
        """Cache the fingerprint of an accepted label for future comparisons."""
        self._label_signals[label] = self.fingerprinter.fingerprint(label)

    def has_signal(self, label: str) -> bool:
        return label in self._label_signals

    def signal(self, label: str) -> Fingerprint | None:
        """Copy of the cached label fingerprint, if any."""
        signal = self._label_signals.get(label)
        return list(signal) if signal is not None else None

    def phrase_signal(self, phrase: str) -> Fingerprint | None:
        signal = self._phrase_signals.get(phrase)
        return list(signal) if signal is not None else None

    def reinforce(self, label: str, is_good: bool) -> bool:
        """Apply accept/reject feedback to a label's signal.

        Every component is scaled by ``1 + learning_rate`` (good) or
        ``1 - learning_rate`` (bad), then the vector is re-normalized to unit
        magnitude and stored back under the same label.

        Returns:
            False if the label has no cached signal (nothing changed).
        """
        signal = self._label_signals.get(label)
        if signal is None:
            logger.debug("feedback_ignored", acronym=label, reason="no_signal")
            return False

        factor = 1 + self.learning_rate if is_good else 1 - self.learning_rate
        self._label_signals[label] = normalize([v * factor for v in signal])
        logger.info("feedback_applied", acronym=label, is_good=is_good)
        return True
