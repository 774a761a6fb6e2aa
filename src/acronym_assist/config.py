"""Application configuration using Pydantic Settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Every field can be overridden with an ``ACRONYM_``-prefixed variable,
    e.g. ``ACRONYM_MAX_SUGGESTIONS=8``.
    """

    # Editor
    show_suggestions: bool = True
    max_suggestions: int = 5
    auto_expand: bool = True  # Tab expands the top suggestion

    # Prompt capture
    capture_debounce_ms: int = 2000
    capture_terminators: str = "\n."  # Characters that close a sentence/paragraph

    # Generation
    generation_batch_size: int = 100
    generation_max_batch_failures: int = 3  # Entry is abandoned after this many failed batches
    synthesis_max_attempts: int = 5
    similarity_threshold: float = 0.7
    feedback_learning_rate: float = 0.1
    label_min_length: int = 2
    label_max_length: int = 10

    # Phrase mining
    mining_min_occurrences: int = 2
    mining_min_words: int = 3
    mining_max_words: int = 8
    mining_min_phrase_chars: int = 10
    mining_top_phrases: int = 10

    # Storage
    database_url: str = "sqlite+aiosqlite:///./data/acronyms.db"

    # Backup
    backup_path: str = "./data/acronyms-backup.json"
    auto_backup_interval_minutes: float = 60.0

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False
    sqlalchemy_log_level: str = "WARNING"  # INFO shows all SQL

    @property
    def capture_debounce_seconds(self) -> float:
        """Debounce interval in seconds (monotonic clock units)."""
        return self.capture_debounce_ms / 1000.0

    model_config = SettingsConfigDict(
        env_prefix="ACRONYM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
