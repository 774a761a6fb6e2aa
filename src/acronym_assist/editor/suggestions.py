"""Suggestion list state and lookup sequencing.

Every lookup is tagged with a request sequence number. ``refresh`` and
``clear`` both advance the sequence, so a lookup that resolves after a newer
edit, a blur or an expansion is dropped instead of overwriting fresher state.
"""

from dataclasses import dataclass, field

from acronym_assist.logging_config import get_logger
from acronym_assist.schemas import AcronymRecord
from acronym_assist.store import AcronymStore, StoreError

from .trigger import Trigger

logger = get_logger(__name__)


@dataclass
class SuggestionState:
    """Current suggestions for one attached buffer."""

    items: list[AcronymRecord] = field(default_factory=list)
    trigger: Trigger | None = None
    visible: bool = False
    selected_index: int | None = None

    @property
    def selected(self) -> AcronymRecord | None:
        if self.selected_index is None:
            return None
        return self.items[self.selected_index]


class SuggestionController:
    """Queries the store for a trigger and holds the ranked, navigable result.

    Args:
        store: Lookup collaborator.
        max_suggestions: Cap on the number of items kept.
        show_suggestions: Whether a non-empty list becomes visible.
    """

    def __init__(
        self, store: AcronymStore, max_suggestions: int = 5, show_suggestions: bool = True
    ):
        self.store = store
        self.max_suggestions = max_suggestions
        self.show_suggestions = show_suggestions
        self.state = SuggestionState()
        self._sequence = 0

    @property
    def has_items(self) -> bool:
        return bool(self.state.items)

    async def refresh(self, trigger: Trigger | None) -> bool:
        """Rebuild the list for ``trigger`` (clears it when None).

        Returns:
            True if the result was applied, False if it was superseded by a
            newer refresh or clear while the lookup was pending.
        """
        if trigger is None:
            self.clear()
            return True

        self._sequence += 1
        request = self._sequence

        try:
            records = await self.store.search_acronyms(trigger.text)
        except StoreError as e:
            logger.warning("suggestion_lookup_failed", trigger=trigger.text, error=str(e))
            records = []

        if request != self._sequence:
            logger.debug("suggestion_response_stale", trigger=trigger.text)
            return False

        items = [r for r in records if r.is_enabled][: self.max_suggestions]
        if not items:
            self.clear()
            return True

        self.state = SuggestionState(
            items=items,
            trigger=trigger,
            visible=self.show_suggestions,
            selected_index=None,
        )
        return True

    def clear(self) -> None:
        """Drop the list and hide it; pending lookups become stale."""
        self._sequence += 1
        self.state = SuggestionState()

    def move_selection(self, delta: int) -> int | None:
        """Move the selection by ``delta``, clamped to the list (no wrap-around).

        From no selection, any move lands on index 0.

        Returns:
            The new selected index (None if the list is empty).
        """
        if not self.state.items:
            return None
        current = self.state.selected_index
        target = 0 if current is None else current + delta
        self.state.selected_index = max(0, min(len(self.state.items) - 1, target))
        return self.state.selected_index

    def select(self, index: int) -> AcronymRecord:
        """Select an item directly (pointer).

        Raises:
            IndexError: If ``index`` is outside the list.
        """
        if not 0 <= index < len(self.state.items):
            raise IndexError(f"No suggestion at index {index}")
        self.state.selected_index = index
        return self.state.items[index]
