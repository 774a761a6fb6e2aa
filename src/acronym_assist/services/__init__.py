"""Services built on top of the acronym store."""

from .backup import (
    BackupDocument,
    BackupError,
    BackupManager,
    BackupNotConfiguredError,
    BackupProvider,
    JsonFileBackupProvider,
)

__all__ = [
    "BackupDocument",
    "BackupError",
    "BackupManager",
    "BackupNotConfiguredError",
    "BackupProvider",
    "JsonFileBackupProvider",
]
