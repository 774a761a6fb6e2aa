"""Acronym-aware text input.

Wires a ``TextBuffer`` to trigger detection, suggestions, expansion and
prompt capture. Hosts forward key presses to ``handle_key_down`` and focus
loss to ``handle_blur``; typed text reaches the input through the buffer's
change notifications.

Event Flow:
    user edit -> trigger detection -> suggestion refresh (background task)
              -> terminator typed? -> prompt capture -> generation
    Tab / Enter / pointer -> expansion -> usage increment (background task)

Programmatic buffer changes (``set_value``, expansions) never trigger
suggestion lookups or captures.
"""

import asyncio
from collections.abc import Callable, Coroutine
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from acronym_assist.config import settings
from acronym_assist.generation import GenerationOrchestrator
from acronym_assist.logging_config import get_logger
from acronym_assist.store import AcronymStore

from .buffer import BufferChange, TextBuffer
from .capture import Clock, PromptCapture
from .expansion import ExpansionEngine, ExpansionResult
from .suggestions import SuggestionController, SuggestionState
from .trigger import detect_trigger

logger = get_logger(__name__)


class Key(str, Enum):
    """Keys the input reacts to (names follow DOM ``KeyboardEvent.key``)."""

    TAB = "Tab"
    ENTER = "Enter"
    ARROW_UP = "ArrowUp"
    ARROW_DOWN = "ArrowDown"


class TextInputOptions(BaseModel):
    """Behaviour switches for ``AcronymTextInput``.

    Defaults come from ``settings`` at construction time. The generation
    fields are used only when the input builds its own orchestrator.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    show_suggestions: bool = Field(default_factory=lambda: settings.show_suggestions)
    max_suggestions: int = Field(
        default_factory=lambda: settings.max_suggestions,
        ge=1,
        description="Maximum suggestions shown for one trigger",
    )
    auto_expand: bool = Field(
        default_factory=lambda: settings.auto_expand,
        description="Tab expands the top suggestion",
    )
    capture_debounce_ms: int = Field(
        default_factory=lambda: settings.capture_debounce_ms,
        ge=0,
        description="Minimum milliseconds between prompt captures",
    )
    generation_batch_size: int = Field(
        default_factory=lambda: settings.generation_batch_size, ge=1
    )
    synthesis_max_attempts: int = Field(
        default_factory=lambda: settings.synthesis_max_attempts, ge=1
    )
    similarity_threshold: float = Field(
        default_factory=lambda: settings.similarity_threshold, ge=0.0, le=1.0
    )
    feedback_learning_rate: float = Field(
        default_factory=lambda: settings.feedback_learning_rate, ge=0.0, lt=1.0
    )
    on_text_change: Callable[[str], None] | None = Field(
        default=None,
        description="Called with the full text after every user edit",
        exclude=True,
    )


class AcronymTextInput:
    """Suggest and expand acronyms while the user types.

    Args:
        store: Acronym store used for lookups, usage counts and capture.
        options: Behaviour switches (defaults from settings).
        orchestrator: Generator run after each capture. When omitted, one is
            built from ``options`` if the store supports generation.
        clock: Monotonic clock for the capture debouncer.

    Usage:
        text_input = AcronymTextInput(store)
        buffer = TextBuffer()
        text_input.attach(buffer)
        buffer.insert("mach")
        await text_input.flush()
        await text_input.handle_key_down(Key.TAB)
    """

    def __init__(
        self,
        store: AcronymStore,
        options: TextInputOptions | None = None,
        orchestrator: GenerationOrchestrator | None = None,
        clock: Clock | None = None,
    ):
        self.store = store
        self.options = options or TextInputOptions()

        if orchestrator is None and store.supports(GenerationOrchestrator.REQUIRED_CAPABILITIES):
            orchestrator = GenerationOrchestrator(
                store,
                batch_size=self.options.generation_batch_size,
                max_attempts=self.options.synthesis_max_attempts,
                similarity_threshold=self.options.similarity_threshold,
                learning_rate=self.options.feedback_learning_rate,
            )
        self.orchestrator = orchestrator

        self._suggestions = SuggestionController(
            store,
            max_suggestions=self.options.max_suggestions,
            show_suggestions=self.options.show_suggestions,
        )
        self._expansion = ExpansionEngine(store)
        self._capture = PromptCapture(
            store,
            orchestrator=orchestrator,
            debounce_ms=self.options.capture_debounce_ms,
            clock=clock,
        )

        self.buffer: TextBuffer | None = None
        self._unsubscribe: Callable[[], None] | None = None
        self._tasks: set[asyncio.Task[Any]] = set()

    # ------------------------------------------------------------------
    # Buffer binding
    # ------------------------------------------------------------------

    def attach(self, buffer: TextBuffer) -> None:
        """Start listening to ``buffer`` (replaces any previous buffer)."""
        self.detach()
        self.buffer = buffer
        self._unsubscribe = buffer.subscribe(self._on_change)

    def detach(self) -> None:
        """Stop listening. In-flight work completes; its results are ignored."""
        if self._unsubscribe is not None:
            self._unsubscribe()
        self._unsubscribe = None
        self.buffer = None
        self._suggestions.clear()

    @property
    def suggestions(self) -> SuggestionState:
        return self._suggestions.state

    def get_value(self) -> str:
        return self._require_buffer().value

    def set_value(self, value: str) -> None:
        """Replace the text without triggering lookups or capture."""
        self._require_buffer().set_value(value)
        self._suggestions.clear()

    def _require_buffer(self) -> TextBuffer:
        if self.buffer is None:
            raise RuntimeError("No buffer attached")
        return self.buffer

    def _on_change(self, change: BufferChange) -> None:
        if change.source != "user":
            return

        if self.options.on_text_change is not None:
            self.options.on_text_change(change.value)

        self._spawn(self.handle_input())
        if change.inserted:
            self._spawn(self._capture.on_text_typed(change.value, change.inserted))

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("text_input_task_failed", error=str(task.exception()))

    async def flush(self) -> None:
        """Wait for pending lookups, captures and usage reports."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
        await self._expansion.drain()

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    async def handle_input(self) -> None:
        """Refresh suggestions for the token at the caret."""
        if self.buffer is None:
            return
        trigger = detect_trigger(self.buffer.value, self.buffer.caret)
        await self._suggestions.refresh(trigger)

    async def handle_key_down(self, key: Key | str) -> bool:
        """React to a key press.

        Returns:
            True if the key was consumed (the host should suppress its
            default action).
        """
        try:
            key = Key(key)
        except ValueError:
            return False

        if key is Key.TAB:
            if not (self.options.auto_expand and self._suggestions.has_items):
                return False
            self._suggestions.select(0)
            return (await self.expand_selected()).expanded

        if key in (Key.ARROW_UP, Key.ARROW_DOWN):
            if not self._suggestions.has_items:
                return False
            self._suggestions.move_selection(1 if key is Key.ARROW_DOWN else -1)
            return True

        # Enter
        if self.suggestions.selected_index is None:
            return False
        return (await self.expand_selected()).expanded

    def handle_blur(self) -> None:
        self._suggestions.clear()

    async def select_suggestion(self, index: int) -> ExpansionResult:
        """Pointer selection: select ``index`` and expand it.

        Raises:
            IndexError: If ``index`` is outside the visible list.
        """
        if not self.suggestions.visible:
            return self._failure("Suggestions are not visible")
        self._suggestions.select(index)
        return await self.expand_selected()

    async def expand_selected(self) -> ExpansionResult:
        """Expand the selected suggestion at its trigger span."""
        state = self.suggestions
        record = state.selected
        if record is None or state.trigger is None:
            return self._failure("No suggestion selected")

        result = self._expansion.expand(self._require_buffer(), state.trigger, record)
        self._suggestions.clear()
        return result

    def _failure(self, error: str) -> ExpansionResult:
        buffer = self.buffer
        return ExpansionResult(
            expanded=False,
            value=buffer.value if buffer else "",
            caret=buffer.caret if buffer else 0,
            error=error,
        )
