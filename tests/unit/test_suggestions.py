"""Unit tests for the suggestion controller."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from acronym_assist.editor import SuggestionController, Trigger
from acronym_assist.schemas import AcronymCreate, AcronymRecord
from acronym_assist.store import InMemoryAcronymStore, StoreError


class GatedStore(InMemoryAcronymStore):
    """In-memory store whose searches for chosen queries wait on an event."""

    def __init__(self) -> None:
        super().__init__()
        self.gates: dict[str, asyncio.Event] = {}

    async def search_acronyms(self, query: str) -> list[AcronymRecord]:
        gate = self.gates.get(query)
        if gate is not None:
            await gate.wait()
        return await super().search_acronyms(query)


def trigger(text: str) -> Trigger:
    return Trigger(text=text, start=0, end=len(text))


@pytest.mark.asyncio
class TestRefresh:
    """Tests for building the suggestion list."""

    async def test_matching_records_become_visible(
        self, seeded_store: InMemoryAcronymStore
    ) -> None:
        """A trigger with matches shows them with no selection."""
        controller = SuggestionController(seeded_store)

        applied = await controller.refresh(trigger("mach"))

        assert applied is True
        assert [r.acronym for r in controller.state.items] == ["ML"]
        assert controller.state.visible is True
        assert controller.state.selected_index is None
        assert controller.state.trigger == trigger("mach")

    async def test_disabled_records_are_dropped(self, store: InMemoryAcronymStore) -> None:
        """Disabled acronyms are never suggested."""
        await store.add_acronym(AcronymCreate(acronym="ML", expansion="machine learning"))
        await store.add_acronym(
            AcronymCreate(acronym="MT", expansion="machine translation", is_enabled=False)
        )
        controller = SuggestionController(store)

        await controller.refresh(trigger("mach"))

        assert [r.acronym for r in controller.state.items] == ["ML"]

    async def test_list_is_truncated_in_store_order(
        self, seeded_store: InMemoryAcronymStore
    ) -> None:
        """At most max_suggestions items are kept, in returned order."""
        controller = SuggestionController(seeded_store, max_suggestions=2)

        await controller.refresh(trigger("a"))

        assert [r.acronym for r in controller.state.items] == ["ML", "API"]

    async def test_most_used_first(self, seeded_store: InMemoryAcronymStore) -> None:
        """Usage counts order the list."""
        records = await seeded_store.get_all_acronyms()
        db = next(r for r in records if r.acronym == "DB")
        await seeded_store.increment_usage(db.id)
        controller = SuggestionController(seeded_store)

        await controller.refresh(trigger("a"))

        assert controller.state.items[0].acronym == "DB"

    async def test_no_trigger_clears(self, seeded_store: InMemoryAcronymStore) -> None:
        """A None trigger hides and empties the list."""
        controller = SuggestionController(seeded_store)
        await controller.refresh(trigger("mach"))

        await controller.refresh(None)

        assert controller.state.items == []
        assert controller.state.visible is False

    async def test_no_matches_clears(self, seeded_store: InMemoryAcronymStore) -> None:
        """An empty lookup hides the list."""
        controller = SuggestionController(seeded_store)

        await controller.refresh(trigger("zzz"))

        assert controller.has_items is False
        assert controller.state.visible is False

    async def test_hidden_when_suggestions_disabled(
        self, seeded_store: InMemoryAcronymStore
    ) -> None:
        """Items are kept but not shown when show_suggestions is off."""
        controller = SuggestionController(seeded_store, show_suggestions=False)

        await controller.refresh(trigger("mach"))

        assert controller.has_items is True
        assert controller.state.visible is False

    async def test_lookup_failure_is_treated_as_empty(self) -> None:
        """A failing store yields an empty, hidden list."""
        store = InMemoryAcronymStore()
        store.search_acronyms = AsyncMock(side_effect=StoreError("connection lost"))
        controller = SuggestionController(store)

        applied = await controller.refresh(trigger("mach"))

        assert applied is True
        assert controller.has_items is False
        assert controller.state.visible is False


@pytest.mark.asyncio
class TestStaleResponses:
    """Tests for discarding out-of-order lookups."""

    async def test_older_response_is_discarded(self) -> None:
        """A slow lookup finishing after a newer one does not overwrite it."""
        store = GatedStore()
        await store.add_acronym(AcronymCreate(acronym="ML", expansion="machine learning"))
        await store.add_acronym(AcronymCreate(acronym="MA", expansion="master of arts"))
        gate = store.gates["ma"] = asyncio.Event()
        controller = SuggestionController(store)

        slow = asyncio.create_task(controller.refresh(trigger("ma")))
        await asyncio.sleep(0)
        assert await controller.refresh(trigger("mach")) is True

        gate.set()
        assert await slow is False
        assert controller.state.trigger == trigger("mach")
        assert [r.acronym for r in controller.state.items] == ["ML"]

    async def test_clear_discards_pending_lookup(self) -> None:
        """A lookup pending across a clear does not resurrect the list."""
        store = GatedStore()
        await store.add_acronym(AcronymCreate(acronym="ML", expansion="machine learning"))
        gate = store.gates["mach"] = asyncio.Event()
        controller = SuggestionController(store)

        pending = asyncio.create_task(controller.refresh(trigger("mach")))
        await asyncio.sleep(0)
        controller.clear()

        gate.set()
        assert await pending is False
        assert controller.has_items is False
        assert controller.state.visible is False


@pytest.mark.asyncio
class TestSelection:
    """Tests for keyboard and pointer selection."""

    async def test_first_move_down_selects_top(self, seeded_store: InMemoryAcronymStore) -> None:
        """Arrow-down from no selection selects index 0."""
        controller = SuggestionController(seeded_store)
        await controller.refresh(trigger("a"))

        assert controller.move_selection(1) == 0

    async def test_first_move_up_selects_top(self, seeded_store: InMemoryAcronymStore) -> None:
        """Arrow-up from no selection also selects index 0."""
        controller = SuggestionController(seeded_store)
        await controller.refresh(trigger("a"))

        assert controller.move_selection(-1) == 0

    async def test_moves_clamp_without_wrapping(self, seeded_store: InMemoryAcronymStore) -> None:
        """Selection stops at both ends of the list."""
        controller = SuggestionController(seeded_store)
        await controller.refresh(trigger("a"))

        moves = [controller.move_selection(1) for _ in range(5)]
        assert moves == [0, 1, 2, 2, 2]

        moves = [controller.move_selection(-1) for _ in range(4)]
        assert moves == [1, 0, 0, 0]
        assert controller.state.selected.acronym == "ML"

    async def test_move_on_empty_list(self, store: InMemoryAcronymStore) -> None:
        """Moving without items selects nothing."""
        controller = SuggestionController(store)

        assert controller.move_selection(1) is None
        assert controller.state.selected is None

    async def test_select_by_index(self, seeded_store: InMemoryAcronymStore) -> None:
        """Pointer selection picks the given item."""
        controller = SuggestionController(seeded_store)
        await controller.refresh(trigger("a"))

        record = controller.select(1)

        assert record.acronym == "API"
        assert controller.state.selected_index == 1

    async def test_select_out_of_range(self, seeded_store: InMemoryAcronymStore) -> None:
        """Selecting a missing index raises IndexError."""
        controller = SuggestionController(seeded_store)
        await controller.refresh(trigger("mach"))

        with pytest.raises(IndexError):
            controller.select(3)

    async def test_refresh_resets_selection(self, seeded_store: InMemoryAcronymStore) -> None:
        """A new list starts with no selection."""
        controller = SuggestionController(seeded_store)
        await controller.refresh(trigger("a"))
        controller.move_selection(1)

        await controller.refresh(trigger("ap"))

        assert controller.state.selected_index is None
