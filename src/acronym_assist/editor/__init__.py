"""Editor-side components: triggers, suggestions, expansion and capture."""

from .buffer import BufferChange, TextBuffer
from .capture import CaptureDebouncer, PromptCapture, debounce_elapsed
from .expansion import ExpansionEngine, ExpansionResult
from .suggestions import SuggestionController, SuggestionState
from .text_input import AcronymTextInput, Key, TextInputOptions
from .trigger import Trigger, detect_trigger, is_word_char

__all__ = [
    "AcronymTextInput",
    "BufferChange",
    "CaptureDebouncer",
    "ExpansionEngine",
    "ExpansionResult",
    "Key",
    "PromptCapture",
    "SuggestionController",
    "SuggestionState",
    "TextBuffer",
    "TextInputOptions",
    "Trigger",
    "debounce_elapsed",
    "detect_trigger",
    "is_word_char",
]
