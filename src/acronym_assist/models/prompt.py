"""Captured prompt database model."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Text, false, func
from sqlalchemy.orm import Mapped, mapped_column

from acronym_assist.database import Base


class Prompt(Base):
    """Text captured from the editor, waiting to be mined for phrases.

    The integer primary key increases with insertion order and is used as
    the creation-order tie-break (``created_at`` has only second resolution
    on SQLite).
    """

    __tablename__ = "prompts"

    id: Mapped[int] = mapped_column(primary_key=True)
    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Trimmed buffer text at capture time",
    )
    processed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
        index=True,
        comment="Set once a generation batch has handled this prompt",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        comment="When prompt was captured",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Prompt(id={self.id}, processed={self.processed})>"
