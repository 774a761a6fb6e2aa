"""Outcome of one generation run."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class GenerationReport(BaseModel):
    """Progress and outcome of ``GenerationOrchestrator.process_new_entries``.

    Design Decisions:
    - Literal status (``skipped`` when another run was already in flight)
    - errors as list of dicts (serializable, preserves context)
    - Timestamps in UTC
    """

    status: Literal["running", "completed", "skipped", "failed"] = Field(
        description="Current run status"
    )
    total_entries: int = Field(default=0, description="Unprocessed entries found", ge=0)
    processed_entries: int = Field(default=0, description="Entries marked processed", ge=0)
    abandoned_entries: int = Field(
        default=0, description="Entries given up on after repeated failures", ge=0
    )
    batches_processed: int = Field(default=0, ge=0)
    batches_failed: int = Field(default=0, ge=0)
    created_acronyms: list[str] = Field(
        default_factory=list, description="Labels written to the store"
    )
    message: str | None = Field(default=None, description="Human-readable status message")
    started_at: datetime = Field(description="Run start time (UTC)")
    completed_at: datetime | None = Field(default=None, description="Run end time (UTC)")
    errors: list[dict[str, str]] = Field(
        default_factory=list, description="Errors encountered, one per failed batch or write"
    )

    def record_error(self, item: str, error: str) -> None:
        """Record an error for a batch or a write."""
        self.errors.append({"item": item, "error": error})
