"""In-process acronym store.

Holds records and captured entries in dictionaries keyed by id. Useful for
tests, for embedding the editor without a database, and as the reference
behaviour the SQLAlchemy store must match.
"""

import itertools
from datetime import UTC, datetime

from acronym_assist.logging_config import get_logger
from acronym_assist.schemas import AcronymCreate, AcronymRecord, AcronymUpdate, CapturedEntry

from .base import AcronymStore, StoreCapability
from .exceptions import AcronymNotFoundError, DuplicateAcronymError, EntryNotFoundError

logger = get_logger(__name__)


class InMemoryAcronymStore(AcronymStore):
    """Dictionary-backed store declaring every capability.

    Records are kept as pydantic models and copied on the way out, so
    callers can never mutate store state through a returned record.

    Example:
        >>> store = InMemoryAcronymStore()
        >>> create = AcronymCreate(acronym="ML", expansion="machine learning")
        >>> record = await store.add_acronym(create)
        >>> [r.acronym for r in await store.search_acronyms("mach")]
        ['ML']
    """

    capabilities = StoreCapability.ALL

    def __init__(self) -> None:
        self._acronyms: dict[int, AcronymRecord] = {}
        self._entries: dict[int, CapturedEntry] = {}
        self._acronym_ids = itertools.count(1)
        self._entry_ids = itertools.count(1)

    def _ranked(self, records: list[AcronymRecord]) -> list[AcronymRecord]:
        # Ids increase with creation, so they break usage ties in creation order
        ranked = sorted(records, key=lambda r: (-r.usage_count, r.id))
        return [r.model_copy(deep=True) for r in ranked]

    async def search_acronyms(self, query: str) -> list[AcronymRecord]:
        needle = query.lower()
        matches = [
            r
            for r in self._acronyms.values()
            if needle in r.acronym.lower()
            or needle in r.expansion.lower()
            or (r.description is not None and needle in r.description.lower())
        ]
        return self._ranked(matches)

    async def get_all_acronyms(self) -> list[AcronymRecord]:
        return self._ranked(list(self._acronyms.values()))

    async def get_acronym(self, acronym_id: int) -> AcronymRecord | None:
        record = self._acronyms.get(acronym_id)
        return record.model_copy(deep=True) if record is not None else None

    async def add_acronym(self, data: AcronymCreate) -> AcronymRecord:
        if any(r.acronym == data.acronym for r in self._acronyms.values()):
            raise DuplicateAcronymError(data.acronym)

        now = datetime.now(UTC)
        record = AcronymRecord(
            id=next(self._acronym_ids),
            created_at=now,
            updated_at=now,
            usage_count=0,
            **data.model_dump(),
        )
        self._acronyms[record.id] = record
        logger.debug("acronym_added", acronym_id=record.id, acronym=record.acronym)
        return record.model_copy(deep=True)

    async def increment_usage(self, acronym_id: int) -> None:
        record = self._acronyms.get(acronym_id)
        if record is None:
            raise AcronymNotFoundError(acronym_id)
        record.usage_count += 1

    async def update_acronym(self, acronym_id: int, updates: AcronymUpdate) -> AcronymRecord:
        record = self._acronyms.get(acronym_id)
        if record is None:
            raise AcronymNotFoundError(acronym_id)

        changes = updates.changes()
        new_label = changes.get("acronym")
        if new_label is not None and new_label != record.acronym:
            if any(r.acronym == new_label for r in self._acronyms.values()):
                raise DuplicateAcronymError(new_label)

        updated = record.model_copy(update={**changes, "updated_at": datetime.now(UTC)})
        self._acronyms[acronym_id] = updated
        return updated.model_copy(deep=True)

    async def delete_acronym(self, acronym_id: int) -> None:
        self._acronyms.pop(acronym_id, None)

    async def clear_acronyms(self) -> None:
        self._acronyms.clear()

    async def add_captured_entry(self, content: str) -> CapturedEntry:
        entry = CapturedEntry(
            id=next(self._entry_ids),
            content=content,
            processed=False,
            created_at=datetime.now(UTC),
        )
        self._entries[entry.id] = entry
        return entry.model_copy()

    async def get_captured_entry(self, entry_id: int) -> CapturedEntry | None:
        entry = self._entries.get(entry_id)
        return entry.model_copy() if entry is not None else None

    async def get_unprocessed_entries(self) -> list[CapturedEntry]:
        # Dict preserves insertion order, which is creation order
        return [e.model_copy() for e in self._entries.values() if not e.processed]

    async def mark_entry_processed(self, entry_id: int) -> None:
        entry = self._entries.get(entry_id)
        if entry is None:
            raise EntryNotFoundError(entry_id)
        entry.processed = True
