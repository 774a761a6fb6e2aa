"""Acronym and captured-entry schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# =============================================================================
# Acronym Schemas
# =============================================================================


class AcronymCreate(BaseModel):
    """Payload for creating an acronym.

    The store assigns ``id``, timestamps and ``usage_count``.
    """

    acronym: str = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Short label typed by the user",
        examples=["API"],
    )
    expansion: str = Field(
        ...,
        min_length=1,
        description="Phrase the label expands to",
        examples=["application programming interface"],
    )
    description: str | None = Field(default=None, description="Optional description")
    is_enabled: bool = Field(default=True, description="Whether the acronym is suggested")
    tags: list[str] = Field(default_factory=list, description="Free-form tags")

    @field_validator("acronym")
    @classmethod
    def validate_acronym(cls, v: str) -> str:
        """Labels are single tokens: no surrounding or inner whitespace."""
        if not v.strip() or any(ch.isspace() for ch in v):
            raise ValueError("Acronym must be a single token without whitespace")
        return v


class AcronymUpdate(BaseModel):
    """Partial update payload; only fields that are set are applied."""

    acronym: str | None = Field(default=None, min_length=1, max_length=64)
    expansion: str | None = Field(default=None, min_length=1)
    description: str | None = None
    is_enabled: bool | None = None
    tags: list[str] | None = None

    def changes(self) -> dict[str, Any]:
        """Fields explicitly set on this update.

        Only ``description`` may be cleared by setting it to None; a None on any
        other field means "leave unchanged".
        """
        changes = self.model_dump(exclude_unset=True)
        return {k: v for k, v in changes.items() if v is not None or k == "description"}


class AcronymRecord(BaseModel):
    """An acronym as held by the store."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Store-assigned identifier")
    acronym: str = Field(..., description="Short label, unique across the store")
    expansion: str = Field(..., description="Phrase the label expands to")
    description: str | None = None
    is_enabled: bool = True
    created_at: datetime
    updated_at: datetime
    usage_count: int = Field(default=0, ge=0)
    tags: list[str] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def default_tags(cls, v: list[str] | None) -> list[str]:
        """Stores may hold NULL tags."""
        return v or []


# =============================================================================
# Captured Entry Schemas
# =============================================================================


class CapturedEntry(BaseModel):
    """A span of user text captured for phrase mining."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Identifier, increasing in creation order")
    content: str
    processed: bool = False
    created_at: datetime
