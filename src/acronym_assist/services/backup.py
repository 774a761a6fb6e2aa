"""Acronym backup and restore.

Design Decisions:

1. Provider Interface:
   - BackupProvider is an ABC (upload, download, last_backup_time) so remote
     targets can be added next to the local JSON file provider
   - JsonFileBackupProvider writes one pydantic-validated JSON document

2. Restore Semantics:
   - Replace, not merge: existing acronyms are cleared first
   - Records are re-added without id, timestamps or usage count; the store
     assigns fresh ones
   - An empty backup restores nothing and leaves the store untouched

3. Overlap:
   - A backup requested while one is running is skipped and logged

4. Automatic Backup:
   - start_auto_backup backs up once, then repeats on a tracked asyncio task
   - A failed round is logged and the schedule continues
   - stop_auto_backup cancels the task and waits for it to finish
"""

import asyncio
import contextlib
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from acronym_assist.config import settings
from acronym_assist.logging_config import get_logger
from acronym_assist.schemas import AcronymCreate, AcronymRecord
from acronym_assist.store import AcronymStore, StoreCapability, UnsupportedCapabilityError

logger = get_logger(__name__)

BACKUP_FORMAT_VERSION = 1


class BackupError(Exception):
    """Base exception for backup operations."""

    pass


class BackupNotConfiguredError(BackupError):
    """Raised when backup or restore is called before ``configure``."""

    def __init__(self) -> None:
        super().__init__("Backup provider not configured")


class BackupDocument(BaseModel):
    """On-disk backup format."""

    version: int = Field(default=BACKUP_FORMAT_VERSION)
    created_at: datetime = Field(description="Backup time (UTC)")
    acronyms: list[AcronymRecord] = Field(default_factory=list)


class BackupProvider(ABC):
    """Where backups are kept."""

    @abstractmethod
    async def upload(self, records: list[AcronymRecord]) -> datetime:
        """Store ``records`` as the current backup; returns the backup time."""
        pass

    @abstractmethod
    async def download(self) -> list[AcronymRecord]:
        """Return the records of the current backup (empty if there is none)."""
        pass

    @abstractmethod
    async def last_backup_time(self) -> datetime | None:
        """Time of the current backup, None if there is none."""
        pass


class JsonFileBackupProvider(BackupProvider):
    """Keeps the backup in a single JSON file.

    Args:
        path: Backup file; parent directories are created on upload.
            Defaults to ``settings.backup_path``.
    """

    def __init__(self, path: str | Path | None = None):
        path = settings.backup_path if path is None else path
        if not str(path).strip():
            raise ValueError("Backup path must not be empty")
        self.path = Path(path)

    def _read(self) -> BackupDocument | None:
        if not self.path.exists():
            return None
        try:
            return BackupDocument.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            raise BackupError(f"Unreadable backup file {self.path}: {e}") from e

    async def upload(self, records: list[AcronymRecord]) -> datetime:
        document = BackupDocument(created_at=datetime.now(UTC), acronyms=records)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(document.model_dump_json(indent=2), encoding="utf-8")
        except OSError as e:
            raise BackupError(f"Could not write backup file {self.path}: {e}") from e
        return document.created_at

    async def download(self) -> list[AcronymRecord]:
        document = self._read()
        return [] if document is None else document.acronyms

    async def last_backup_time(self) -> datetime | None:
        document = self._read()
        return None if document is None else document.created_at


class BackupManager:
    """Backs up and restores the acronyms of one store.

    Usage:
        manager = BackupManager(store)
        await manager.configure(JsonFileBackupProvider("backup.json"))
        count = await manager.backup()
        restored = await manager.restore()
        await manager.start_auto_backup(interval_minutes=30)
        await manager.stop_auto_backup()
    """

    def __init__(self, store: AcronymStore):
        self.store = store
        self.provider: BackupProvider | None = None
        self.last_backup_at: datetime | None = None
        self._backing_up = False
        self._auto_task: asyncio.Task[None] | None = None

    @property
    def is_configured(self) -> bool:
        return self.provider is not None

    async def configure(self, provider: BackupProvider) -> None:
        """Use ``provider`` and pick up the time of its existing backup."""
        self.provider = provider
        self.last_backup_at = await provider.last_backup_time()
        logger.info(
            "backup_configured",
            provider=type(provider).__name__,
            last_backup_at=self.last_backup_at.isoformat() if self.last_backup_at else None,
        )

    def _require_provider(self) -> BackupProvider:
        if self.provider is None:
            raise BackupNotConfiguredError()
        return self.provider

    async def backup(self) -> int | None:
        """Upload every acronym.

        Returns:
            Number of records backed up, or None if a backup was already
            running.

        Raises:
            BackupNotConfiguredError: If no provider is configured.
        """
        provider = self._require_provider()
        if self._backing_up:
            logger.info("backup_skipped", reason="already_running")
            return None

        self._backing_up = True
        try:
            records = await self.store.get_all_acronyms()
            self.last_backup_at = await provider.upload(records)
        except Exception as e:
            logger.error("backup_failed", error=str(e))
            raise
        finally:
            self._backing_up = False

        logger.info("backup_completed", acronyms=len(records))
        return len(records)

    async def restore(self) -> int:
        """Replace the store's acronyms with the backed-up ones.

        Returns:
            Number of records restored (0 if the backup was empty).

        Raises:
            BackupNotConfiguredError: If no provider is configured.
            UnsupportedCapabilityError: If the store cannot clear and write.
        """
        provider = self._require_provider()
        if not self.store.supports(StoreCapability.ADMIN | StoreCapability.WRITE):
            raise UnsupportedCapabilityError(
                f"{type(self.store).__name__} cannot restore: ADMIN and WRITE are required"
            )

        records = await provider.download()
        if not records:
            logger.info("restore_skipped", reason="empty_backup")
            return 0

        try:
            await self.store.clear_acronyms()
            for record in records:
                await self.store.add_acronym(
                    AcronymCreate(
                        acronym=record.acronym,
                        expansion=record.expansion,
                        description=record.description,
                        is_enabled=record.is_enabled,
                        tags=record.tags,
                    )
                )
        except Exception as e:
            logger.error("restore_failed", error=str(e))
            raise

        logger.info("restore_completed", acronyms=len(records))
        return len(records)

    @property
    def auto_backup_running(self) -> bool:
        return self._auto_task is not None and not self._auto_task.done()

    async def start_auto_backup(self, interval_minutes: float | None = None) -> None:
        """Back up now, then every ``interval_minutes`` until stopped.

        A running schedule is replaced. Errors from the initial backup
        propagate; errors in later rounds are logged and the schedule keeps
        going.

        Args:
            interval_minutes: Minutes between backups. Defaults to
                ``settings.auto_backup_interval_minutes``.

        Raises:
            ValueError: If the interval is not positive.
            BackupNotConfiguredError: If no provider is configured.
        """
        if interval_minutes is None:
            interval_minutes = settings.auto_backup_interval_minutes
        if interval_minutes <= 0:
            raise ValueError(f"interval_minutes must be positive, got {interval_minutes}")
        self._require_provider()

        await self.stop_auto_backup()
        await self.backup()

        self._auto_task = asyncio.get_running_loop().create_task(
            self._auto_backup_loop(interval_minutes * 60)
        )
        logger.info("auto_backup_started", interval_minutes=interval_minutes)

    async def _auto_backup_loop(self, interval_seconds: float) -> None:
        while True:
            await asyncio.sleep(interval_seconds)
            try:
                await self.backup()
            except Exception as e:
                logger.warning("auto_backup_round_failed", error=str(e))

    async def stop_auto_backup(self) -> None:
        """Cancel the schedule and wait for it to wind down (no-op if idle)."""
        task = self._auto_task
        if task is None:
            return
        self._auto_task = None
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("auto_backup_stopped")
