"""Custom exceptions for acronym stores."""


class StoreError(Exception):
    """Base exception for store failures.

    Callers in the editor and the generator catch this to treat a failed
    collaborator call as "did not happen".
    """

    pass


class DuplicateAcronymError(StoreError):
    """An acronym with the same label already exists."""

    def __init__(self, acronym: str):
        super().__init__(f"Acronym already exists: {acronym}")
        self.acronym = acronym


class AcronymNotFoundError(StoreError):
    """No acronym with the given id."""

    def __init__(self, acronym_id: int):
        super().__init__(f"Acronym not found: {acronym_id}")
        self.acronym_id = acronym_id


class EntryNotFoundError(StoreError):
    """No captured entry with the given id."""

    def __init__(self, entry_id: int):
        super().__init__(f"Captured entry not found: {entry_id}")
        self.entry_id = entry_id


class UnsupportedCapabilityError(StoreError):
    """The store does not declare the capability the operation needs."""

    pass
