"""Prompt capture: save finished sentences for phrase mining.

Design Decisions:

1. Debounce as Data:
   - The last successful capture time is an explicit attribute
   - ``debounce_elapsed`` is a pure comparison; the clock is injected so
     tests advance time by hand
   - A capture inside the interval is skipped, not queued

2. Failure Handling:
   - Store and generation failures are logged and swallowed here; typing
     must never fail because capture did
   - The timestamp only moves on a successful write
"""

import time
from collections.abc import Callable

from acronym_assist.config import settings
from acronym_assist.logging_config import get_logger
from acronym_assist.schemas import CapturedEntry
from acronym_assist.store import AcronymStore, StoreCapability, StoreError

logger = get_logger(__name__)

Clock = Callable[[], float]


def debounce_elapsed(now: float, last: float | None, interval: float) -> bool:
    """True if a capture at ``now`` is allowed after one at ``last``.

    Example:
        >>> debounce_elapsed(10.0, None, 2.0)
        True
        >>> debounce_elapsed(11.5, 10.0, 2.0)
        False
    """
    return last is None or now - last > interval


class CaptureDebouncer:
    """Last-capture timestamp plus the interval it is compared against."""

    def __init__(self, interval: float, clock: Clock = time.monotonic):
        if interval < 0:
            raise ValueError("Debounce interval must be >= 0")
        self.interval = interval
        self.clock = clock
        self.last_capture_at: float | None = None

    def ready(self) -> bool:
        return debounce_elapsed(self.clock(), self.last_capture_at, self.interval)

    def mark(self) -> None:
        self.last_capture_at = self.clock()


class PromptCapture:
    """Stores the buffer as a captured entry when a terminator is typed.

    Args:
        store: Store; capture is inert unless it declares ``CAPTURE``.
        orchestrator: Optional generator asked to process new entries after
            each capture (anything with an async ``process_new_entries``).
        debounce_ms: Minimum milliseconds between captures.
        clock: Monotonic clock in seconds.
        terminators: Characters that end a capturable span.
    """

    def __init__(
        self,
        store: AcronymStore,
        orchestrator=None,
        debounce_ms: int | None = None,
        clock: Clock | None = None,
        terminators: str | None = None,
    ):
        self.store = store
        self.orchestrator = orchestrator
        interval_ms = debounce_ms if debounce_ms is not None else settings.capture_debounce_ms
        self.debouncer = CaptureDebouncer(interval_ms / 1000.0, clock or time.monotonic)
        self.terminators = terminators if terminators is not None else settings.capture_terminators

    @property
    def enabled(self) -> bool:
        return self.store.supports(StoreCapability.CAPTURE)

    def is_terminal(self, inserted: str) -> bool:
        """True if the last typed character ends a sentence or paragraph."""
        return bool(inserted) and inserted[-1] in self.terminators

    async def on_text_typed(self, value: str, inserted: str) -> CapturedEntry | None:
        """Capture ``value`` if ``inserted`` ends with a terminator."""
        if not self.is_terminal(inserted):
            return None
        return await self.capture(value)

    async def capture(self, value: str) -> CapturedEntry | None:
        """Store the trimmed text and kick off generation.

        Returns:
            The stored entry, or None if nothing was captured (empty text,
            no capture capability, debounced, or the write failed).
        """
        content = value.strip()
        if not content or not self.enabled:
            return None

        if not self.debouncer.ready():
            logger.debug("capture_debounced", since_last=self.debouncer.last_capture_at)
            return None

        try:
            entry = await self.store.add_captured_entry(content)
        except StoreError as e:
            logger.warning("capture_failed", error=str(e))
            return None

        self.debouncer.mark()
        logger.debug("prompt_captured", entry_id=entry.id, length=len(content))

        if self.orchestrator is not None:
            try:
                await self.orchestrator.process_new_entries()
            except Exception as e:
                logger.exception("generation_after_capture_failed", error=str(e))

        return entry
