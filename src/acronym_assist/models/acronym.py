"""Acronym database model."""

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Integer, String, Text, func, true
from sqlalchemy.orm import Mapped, mapped_column

from acronym_assist.database import Base


class Acronym(Base):
    """Acronym model: a short label and the phrase it expands to.

    Design Decisions:

    1. Label uniqueness: enforced by a UNIQUE constraint on ``acronym``.
       - The store maps the resulting IntegrityError to DuplicateAcronymError
       - Comparison is exact (case-sensitive), as the column collation dictates

    2. Usage counter: integer column only ever changed by
       ``UPDATE ... SET usage_count = usage_count + 1``.
       - Atomic in the database, no read-modify-write in Python

    3. Tags: JSON list column.
       - Tags are only filtered in Python, never queried in SQL
    """

    __tablename__ = "acronyms"

    id: Mapped[int] = mapped_column(primary_key=True)
    acronym: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
        comment="Short label typed by the user",
    )
    expansion: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Phrase the label expands to",
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Optional free-form description",
    )
    is_enabled: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
        comment="Disabled acronyms are never suggested",
    )
    usage_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
        index=True,
        comment="Number of successful expansions",
    )
    tags: Mapped[list[str] | None] = mapped_column(
        JSON,
        nullable=True,
        comment="Optional tag list (e.g. auto-generated)",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        comment="When acronym was created",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
        comment="When acronym was last updated",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Acronym(id={self.id}, acronym='{self.acronym}', usage_count={self.usage_count})>"
