"""Cursor-addressable text buffer with change notifications.

Stands in for the host's text widget: the editor components never touch a
widget directly, only this buffer. Hosts mirror widget edits into it with
``insert``/``delete_backward`` (user edits) and read it back after an
expansion.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

BufferSource = Literal["user", "programmatic"]


@dataclass(frozen=True)
class BufferChange:
    """One edit, as seen by listeners after it was applied."""

    value: str
    caret: int
    inserted: str  # Text typed by this edit ("" for deletions and caret moves)
    source: BufferSource


BufferListener = Callable[[BufferChange], None]


class TextBuffer:
    """Mutable text plus a caret offset in ``[0, len(value)]``.

    Listeners are called synchronously, in subscription order, after every
    change.
    """

    def __init__(self, value: str = "", caret: int | None = None):
        self._value = value
        self._caret = len(value) if caret is None else self._checked(caret, value)
        self._listeners: list[BufferListener] = []

    @staticmethod
    def _checked(caret: int, value: str) -> int:
        if not 0 <= caret <= len(value):
            raise ValueError(f"Caret {caret} outside buffer of length {len(value)}")
        return caret

    @property
    def value(self) -> str:
        return self._value

    @property
    def caret(self) -> int:
        return self._caret

    def subscribe(self, listener: BufferListener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def insert(self, text: str) -> None:
        """Type ``text`` at the caret (user edit)."""
        self._value = self._value[: self._caret] + text + self._value[self._caret :]
        self._caret += len(text)
        self._emit(inserted=text, source="user")

    def delete_backward(self, count: int = 1) -> None:
        """Backspace ``count`` characters before the caret (user edit)."""
        start = max(0, self._caret - count)
        self._value = self._value[:start] + self._value[self._caret :]
        self._caret = start
        self._emit(inserted="", source="user")

    def move_caret(self, caret: int) -> None:
        """Place the caret (user navigation)."""
        self._caret = self._checked(caret, self._value)
        self._emit(inserted="", source="user")

    def set_value(self, value: str, caret: int | None = None) -> None:
        """Replace the whole text (programmatic); caret defaults to the end."""
        self._caret = len(value) if caret is None else self._checked(caret, value)
        self._value = value
        self._emit(inserted="", source="programmatic")

    def replace_span(self, start: int, end: int, replacement: str) -> int:
        """Replace ``value[start:end]`` and put the caret after the replacement.

        Text outside the span is left untouched.

        Returns:
            The new caret offset.
        """
        if not 0 <= start <= end <= len(self._value):
            raise ValueError(f"Invalid span [{start}, {end}) for length {len(self._value)}")
        self._value = self._value[:start] + replacement + self._value[end:]
        self._caret = start + len(replacement)
        self._emit(inserted="", source="programmatic")
        return self._caret

    def _emit(self, inserted: str, source: BufferSource) -> None:
        change = BufferChange(
            value=self._value, caret=self._caret, inserted=inserted, source=source
        )
        for listener in list(self._listeners):
            listener(change)
