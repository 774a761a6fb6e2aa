"""Abstract base class for acronym stores."""

from abc import ABC, abstractmethod
from enum import Flag, auto
from typing import ClassVar

from acronym_assist.schemas import AcronymCreate, AcronymRecord, AcronymUpdate, CapturedEntry

from .exceptions import UnsupportedCapabilityError


class StoreCapability(Flag):
    """Features a store declares up front.

    The editor and generator branch on these flags instead of probing for
    methods, e.g. prompt capture only runs against stores with ``CAPTURE``.
    """

    NONE = 0
    LOOKUP = auto()  # search_acronyms, get_all_acronyms, get_acronym
    WRITE = auto()  # add_acronym
    USAGE = auto()  # increment_usage
    CAPTURE = auto()  # captured entries
    ADMIN = auto()  # update_acronym, delete_acronym, clear_acronyms

    ALL = LOOKUP | WRITE | USAGE | CAPTURE | ADMIN


class AcronymStore(ABC):
    """Collaborator holding acronym records and captured entries.

    Design Decision: ABC with declared capabilities
    - Lookup is the only mandatory surface (abstract methods)
    - Optional surfaces have default implementations that raise
      UnsupportedCapabilityError; implementations override the ones they
      declare in ``capabilities``
    - Every method is async: store calls are the only suspension points of
      the editor and the generator

    Ordering contract: ``search_acronyms`` and ``get_all_acronyms`` return
    records by usage count descending, ties in creation order.
    """

    capabilities: ClassVar[StoreCapability] = StoreCapability.LOOKUP

    def supports(self, capability: StoreCapability) -> bool:
        """Check whether every flag in ``capability`` is declared."""
        return (self.capabilities & capability) == capability

    def _unsupported(self, capability: StoreCapability) -> UnsupportedCapabilityError:
        return UnsupportedCapabilityError(
            f"{type(self).__name__} does not support {capability.name}"
        )

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @abstractmethod
    async def search_acronyms(self, query: str) -> list[AcronymRecord]:
        """Case-insensitive substring match over label, expansion and description.

        Args:
            query: Text to look for (typically the trigger token).

        Returns:
            Matching records, most used first.
        """
        pass

    @abstractmethod
    async def get_all_acronyms(self) -> list[AcronymRecord]:
        """Return every record, most used first."""
        pass

    @abstractmethod
    async def get_acronym(self, acronym_id: int) -> AcronymRecord | None:
        """Return one record or None."""
        pass

    # ------------------------------------------------------------------
    # Write / usage
    # ------------------------------------------------------------------

    async def add_acronym(self, data: AcronymCreate) -> AcronymRecord:
        """Create a record.

        Raises:
            DuplicateAcronymError: If the label is already present.
        """
        raise self._unsupported(StoreCapability.WRITE)

    async def increment_usage(self, acronym_id: int) -> None:
        """Add one to the record's usage counter.

        Raises:
            AcronymNotFoundError: If the id is unknown.
        """
        raise self._unsupported(StoreCapability.USAGE)

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------

    async def update_acronym(self, acronym_id: int, updates: AcronymUpdate) -> AcronymRecord:
        """Apply a partial update and bump ``updated_at``."""
        raise self._unsupported(StoreCapability.ADMIN)

    async def delete_acronym(self, acronym_id: int) -> None:
        """Delete one record (missing ids are ignored)."""
        raise self._unsupported(StoreCapability.ADMIN)

    async def clear_acronyms(self) -> None:
        """Delete every record."""
        raise self._unsupported(StoreCapability.ADMIN)

    # ------------------------------------------------------------------
    # Captured entries
    # ------------------------------------------------------------------

    async def add_captured_entry(self, content: str) -> CapturedEntry:
        """Store one captured span of text, unprocessed."""
        raise self._unsupported(StoreCapability.CAPTURE)

    async def get_captured_entry(self, entry_id: int) -> CapturedEntry | None:
        """Return one captured entry or None."""
        raise self._unsupported(StoreCapability.CAPTURE)

    async def get_unprocessed_entries(self) -> list[CapturedEntry]:
        """Return unprocessed entries in creation order."""
        raise self._unsupported(StoreCapability.CAPTURE)

    async def mark_entry_processed(self, entry_id: int) -> None:
        """Flag an entry as processed.

        Raises:
            EntryNotFoundError: If the id is unknown.
        """
        raise self._unsupported(StoreCapability.CAPTURE)
