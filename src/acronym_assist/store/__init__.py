"""Acronym store interface and implementations."""

from .base import AcronymStore, StoreCapability
from .exceptions import (
    AcronymNotFoundError,
    DuplicateAcronymError,
    EntryNotFoundError,
    StoreError,
    UnsupportedCapabilityError,
)
from .memory import InMemoryAcronymStore
from .sql import SqlAlchemyAcronymStore

__all__ = [
    "AcronymStore",
    "StoreCapability",
    "InMemoryAcronymStore",
    "SqlAlchemyAcronymStore",
    "StoreError",
    "DuplicateAcronymError",
    "AcronymNotFoundError",
    "EntryNotFoundError",
    "UnsupportedCapabilityError",
]
