"""Replacing a trigger token with an acronym's expansion."""

import asyncio
from dataclasses import dataclass

from acronym_assist.logging_config import get_logger
from acronym_assist.schemas import AcronymRecord
from acronym_assist.store import AcronymStore, StoreCapability, StoreError

from .buffer import TextBuffer
from .trigger import Trigger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ExpansionResult:
    """Outcome of an expansion request.

    ``expanded`` is False for validation failures (no selection, stale
    trigger); ``error`` then says why. ``value``/``caret`` always describe the
    buffer after the request.
    """

    expanded: bool
    value: str
    caret: int
    record: AcronymRecord | None = None
    error: str | None = None


class ExpansionEngine:
    """Writes expansions into the buffer and reports usage to the store.

    The usage increment runs as a tracked background task: the edit is
    complete before the store is contacted, and a failing increment is
    logged without affecting the buffer. ``drain`` awaits outstanding
    increments.
    """

    def __init__(self, store: AcronymStore):
        self.store = store
        self._pending: set[asyncio.Task[None]] = set()

    def expand(
        self, buffer: TextBuffer, trigger: Trigger, record: AcronymRecord
    ) -> ExpansionResult:
        """Replace ``trigger``'s span with ``record.expansion`` plus one space.

        The expansion is refused unless ``trigger`` is still the token ending
        at the caret, with the same text and span. An edit whose lookup has
        not run yet makes the held trigger stale.

        Must be called from a running event loop (the usage report is
        scheduled on it).
        """
        if not trigger.is_at_caret(buffer.value, buffer.caret):
            logger.info("expansion_trigger_stale", trigger=trigger.text, acronym=record.acronym)
            return ExpansionResult(
                expanded=False,
                value=buffer.value,
                caret=buffer.caret,
                record=record,
                error=f"Trigger '{trigger.text}' is no longer at the caret",
            )

        caret = buffer.replace_span(trigger.start, trigger.end, f"{record.expansion} ")
        logger.debug("acronym_expanded", acronym=record.acronym, trigger=trigger.text)

        if self.store.supports(StoreCapability.USAGE):
            task = asyncio.get_running_loop().create_task(self._record_usage(record))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

        return ExpansionResult(expanded=True, value=buffer.value, caret=caret, record=record)

    async def _record_usage(self, record: AcronymRecord) -> None:
        try:
            await self.store.increment_usage(record.id)
        except StoreError as e:
            logger.warning("usage_increment_failed", acronym_id=record.id, error=str(e))

    async def drain(self) -> None:
        """Wait for outstanding usage reports."""
        while self._pending:
            await asyncio.gather(*list(self._pending))
