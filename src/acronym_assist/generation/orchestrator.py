"""Generation orchestrator: captured entries in, new acronyms out.

Pipeline Flow (per batch):
    1. Mine repeated phrases from the batch (top N by distinct-entry count)
    2. For each phrase, synthesize a label that is neither an existing label
       nor too similar to one (falls back to a numeric suffix)
    3. Drop labels outside the allowed length range
    4. Write the record unless a store search already finds the label
    5. Mark every entry of the batch processed

Design Decisions:

1. One Run at a Time:
   - An asyncio.Lock guards process_new_entries
   - A request arriving while a run is in flight returns a "skipped" report
     instead of queueing; the entries it would have seen stay unprocessed and
     are picked up by the next run
   - Rationale: two runs must never share the gate's fingerprint caches

2. Failure Isolation:
   - A failing batch is logged and recorded in the report; later batches
     still run
   - Each entry's failed-batch count is tracked; at the limit the entry is
     marked processed (abandoned) so it cannot be retried forever
   - A failing record write skips that phrase only
   - FingerprintDimensionError is a programming error and propagates

3. Processing Semantics:
   - "Processed" means "mining was attempted", not "an acronym was produced"
"""

import asyncio
import random
from collections.abc import Sequence
from datetime import UTC, datetime

from acronym_assist.config import settings
from acronym_assist.logging_config import get_logger
from acronym_assist.schemas import AcronymCreate, CapturedEntry
from acronym_assist.store import AcronymStore, StoreCapability, StoreError

from .exceptions import FingerprintDimensionError
from .fingerprint import Fingerprinter
from .miner import mine_phrases
from .report import GenerationReport
from .similarity import SimilarityGate
from .synthesizer import synthesize_acronym

logger = get_logger(__name__)

GENERATED_TAGS = ("auto-generated", "machine-generated")


class GenerationOrchestrator:
    """Turns captured text into acronym records.

    Args:
        store: Store declaring LOOKUP, WRITE and CAPTURE.
        fingerprinter: Similarity signal for the gate (letter frequency by default).
        batch_size: Entries per batch.
        max_attempts: Synthesis attempts before the numeric-suffix fallback.
        similarity_threshold: Gate rejection threshold.
        learning_rate: Feedback step.
        max_batch_failures: Failed batches after which an entry is abandoned.
        label_min_length, label_max_length: Accepted label length range.
        min_occurrences, min_words, max_words, min_phrase_chars, top_phrases:
            Phrase mining thresholds (see ``mine_phrases``).
        rng: Random source for fallback suffixes (inject a seeded one in tests).

    All numeric options default to the values in ``settings``.

    Usage:
        orchestrator = GenerationOrchestrator(store)
        report = await orchestrator.process_new_entries()
        orchestrator.provide_feedback("API", is_good=False)
    """

    REQUIRED_CAPABILITIES = StoreCapability.LOOKUP | StoreCapability.WRITE | StoreCapability.CAPTURE

    def __init__(
        self,
        store: AcronymStore,
        *,
        fingerprinter: Fingerprinter | None = None,
        batch_size: int | None = None,
        max_attempts: int | None = None,
        similarity_threshold: float | None = None,
        learning_rate: float | None = None,
        max_batch_failures: int | None = None,
        label_min_length: int | None = None,
        label_max_length: int | None = None,
        min_occurrences: int | None = None,
        min_words: int | None = None,
        max_words: int | None = None,
        min_phrase_chars: int | None = None,
        top_phrases: int | None = None,
        rng: random.Random | None = None,
    ):
        if not store.supports(self.REQUIRED_CAPABILITIES):
            raise ValueError(
                f"{type(store).__name__} must support LOOKUP, WRITE and CAPTURE for generation"
            )

        self.store = store
        self.batch_size = batch_size if batch_size is not None else settings.generation_batch_size
        self.max_attempts = (
            max_attempts if max_attempts is not None else settings.synthesis_max_attempts
        )
        self.max_batch_failures = (
            max_batch_failures
            if max_batch_failures is not None
            else settings.generation_max_batch_failures
        )
        if self.batch_size < 1 or self.max_attempts < 1 or self.max_batch_failures < 1:
            raise ValueError("batch_size, max_attempts and max_batch_failures must be >= 1")

        self.label_min_length = (
            label_min_length if label_min_length is not None else settings.label_min_length
        )
        self.label_max_length = (
            label_max_length if label_max_length is not None else settings.label_max_length
        )
        if not 1 <= self.label_min_length <= self.label_max_length:
            raise ValueError("Label lengths must satisfy 1 <= label_min_length <= label_max_length")

        self.mining_options = {
            "min_occurrences": (
                min_occurrences if min_occurrences is not None else settings.mining_min_occurrences
            ),
            "min_words": min_words if min_words is not None else settings.mining_min_words,
            "max_words": max_words if max_words is not None else settings.mining_max_words,
            "min_chars": (
                min_phrase_chars
                if min_phrase_chars is not None
                else settings.mining_min_phrase_chars
            ),
            "limit": top_phrases if top_phrases is not None else settings.mining_top_phrases,
        }

        self.gate = SimilarityGate(
            fingerprinter=fingerprinter,
            threshold=(
                similarity_threshold
                if similarity_threshold is not None
                else settings.similarity_threshold
            ),
            learning_rate=(
                learning_rate if learning_rate is not None else settings.feedback_learning_rate
            ),
        )
        self.rng = rng or random.Random()
        self._lock = asyncio.Lock()
        self._failure_counts: dict[int, int] = {}

    @property
    def is_running(self) -> bool:
        return self._lock.locked()

    async def generate_unique_acronym(self, phrase: str) -> str:
        """Synthesize a label for ``phrase`` that does not collide with the store.

        Attempts ``0..max_attempts-1`` in order. An attempt is skipped when its
        label already exists or is too similar to an existing label. If every
        attempt is skipped, attempt 0's label plus a random three-digit
        suffix is returned without further checks.
        """
        records = await self.store.get_all_acronyms()
        existing = [record.acronym for record in records]
        existing_set = set(existing)

        self.gate.remember_phrase(phrase)

        for attempt in range(self.max_attempts):
            candidate = synthesize_acronym(phrase, attempt)
            if candidate in existing_set:
                logger.debug("candidate_exists", phrase=phrase, attempt=attempt, acronym=candidate)
                continue

            similar = self.gate.find_similar(candidate, existing)
            if similar is not None:
                logger.debug(
                    "candidate_too_similar",
                    phrase=phrase,
                    attempt=attempt,
                    acronym=candidate,
                    similar_to=similar[0],
                    similarity=round(similar[1], 4),
                )
                continue

            self.gate.accept(candidate)
            return candidate

        fallback = f"{synthesize_acronym(phrase, 0)}{self.rng.randrange(1000):03d}"
        self.gate.accept(fallback)
        logger.info("candidate_fallback", phrase=phrase, acronym=fallback)
        return fallback

    async def process_batch(
        self,
        entries: Sequence[CapturedEntry],
        report: GenerationReport | None = None,
    ) -> list[str]:
        """Mine one batch, write new acronyms and mark the entries processed.

        Args:
            entries: Batch in creation order.
            report: Optional report receiving per-write errors.

        Returns:
            Labels written to the store.

        Raises:
            StoreError: If loading labels or marking entries fails (the batch
                is then considered failed by ``process_new_entries``).
        """
        if not entries:
            return []

        created: list[str] = []
        for candidate in mine_phrases(entries, **self.mining_options):
            label = await self.generate_unique_acronym(candidate.phrase)

            if not self.label_min_length <= len(label) <= self.label_max_length:
                logger.debug("acronym_length_rejected", phrase=candidate.phrase, acronym=label)
                continue

            try:
                if await self.store.search_acronyms(label):
                    logger.debug("acronym_already_present", acronym=label)
                    continue
                await self.store.add_acronym(
                    AcronymCreate(
                        acronym=label,
                        expansion=candidate.phrase,
                        description=(
                            f"Generated from repeated phrase in {candidate.occurrences} entries"
                        ),
                        is_enabled=True,
                        tags=list(GENERATED_TAGS),
                    )
                )
            except StoreError as e:
                logger.warning("acronym_write_failed", acronym=label, error=str(e))
                if report is not None:
                    report.record_error(label, str(e))
                continue

            created.append(label)
            logger.info(
                "acronym_created",
                acronym=label,
                phrase=candidate.phrase,
                entries=candidate.occurrences,
            )

        for entry in entries:
            await self.store.mark_entry_processed(entry.id)

        return created

    async def process_new_entries(self) -> GenerationReport:
        """Process every unprocessed entry, batch by batch, in creation order.

        Returns:
            Report of the run, with status ``skipped`` if a run was already
            in flight, ``failed`` if the entries could not be loaded.
        """
        if self._lock.locked():
            now = datetime.now(UTC)
            logger.info("generation_skipped", reason="already_running")
            return GenerationReport(
                status="skipped",
                message="Generation already running",
                started_at=now,
                completed_at=now,
            )

        async with self._lock:
            report = GenerationReport(status="running", started_at=datetime.now(UTC))

            try:
                entries = await self.store.get_unprocessed_entries()
            except StoreError as e:
                logger.error("generation_load_failed", error=str(e))
                report.status = "failed"
                report.message = f"Loading entries failed: {e}"
                report.completed_at = datetime.now(UTC)
                return report

            report.total_entries = len(entries)
            if entries:
                logger.info("generation_started", entries=len(entries), batch_size=self.batch_size)

            for start in range(0, len(entries), self.batch_size):
                batch = entries[start : start + self.batch_size]
                try:
                    created = await self.process_batch(batch, report)
                except FingerprintDimensionError:
                    raise
                except Exception as e:
                    logger.exception(
                        "generation_batch_failed",
                        first_entry=batch[0].id,
                        size=len(batch),
                        error=str(e),
                    )
                    report.batches_failed += 1
                    report.record_error(f"batch:{batch[0].id}", str(e))
                    await self._record_batch_failure(batch, report)
                    continue

                report.batches_processed += 1
                report.processed_entries += len(batch)
                report.created_acronyms.extend(created)
                for entry in batch:
                    self._failure_counts.pop(entry.id, None)

            report.status = "completed"
            report.completed_at = datetime.now(UTC)
            if entries:
                logger.info(
                    "generation_completed",
                    processed=report.processed_entries,
                    created=len(report.created_acronyms),
                    failed_batches=report.batches_failed,
                )
            return report

    async def _record_batch_failure(
        self, batch: Sequence[CapturedEntry], report: GenerationReport
    ) -> None:
        """Count a failure against every entry; abandon entries at the limit."""
        for entry in batch:
            failures = self._failure_counts.get(entry.id, 0) + 1
            if failures < self.max_batch_failures:
                self._failure_counts[entry.id] = failures
                continue

            try:
                await self.store.mark_entry_processed(entry.id)
            except StoreError as e:
                # Keep the count so the next failure retries the abandon
                self._failure_counts[entry.id] = failures
                logger.error("entry_abandon_failed", entry_id=entry.id, error=str(e))
                continue

            self._failure_counts.pop(entry.id, None)
            report.abandoned_entries += 1
            logger.error("entry_abandoned", entry_id=entry.id, failures=failures)

    def provide_feedback(self, acronym: str, is_good: bool) -> bool:
        """Adjust the similarity signal of a previously generated label.

        Returns:
            False if this orchestrator has no signal for the label.
        """
        return self.gate.reinforce(acronym, is_good)
