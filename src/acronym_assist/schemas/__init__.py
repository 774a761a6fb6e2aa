"""Pydantic schemas shared by the store, editor and generator."""

from .acronym import AcronymCreate, AcronymRecord, AcronymUpdate, CapturedEntry

__all__ = [
    "AcronymCreate",
    "AcronymRecord",
    "AcronymUpdate",
    "CapturedEntry",
]
