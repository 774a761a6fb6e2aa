"""structlog setup for processes hosting the editor or the generator.

Usage:
    from acronym_assist.logging_config import configure_logging, get_logger

    # Once, by whatever process hosts the editor or the generator
    configure_logging()

    # In library code
    logger = get_logger(__name__)
    logger.info("acronym_created", acronym="API", phrase="application programming interface")

Library modules only ever call ``get_logger``. Without ``configure_logging``
structlog falls back to its default console output, so importing the package
never reconfigures the host application's logging.
"""

import logging
import sys
from typing import Any

import structlog


def configure_logging(
    log_level: str = "INFO",
    json_logs: bool = False,
    sqlalchemy_log_level: str = "WARNING",
) -> None:
    """Route structlog events for the editor and generator through stdlib logging.

    Args:
        log_level: Root level (DEBUG shows suggestion lookups and skipped
                   candidate labels, INFO shows created acronyms and backups)
        json_logs: Render one JSON object per event instead of coloured
                   console lines
        sqlalchemy_log_level: Level for ``sqlalchemy.engine`` and
                   ``sqlalchemy.pool``. Kept separate so DEBUG on the package
                   does not dump every store query.

    Each event carries its level, logger name, an ISO UTC timestamp and the
    call site, followed by the keyword context the caller passed (for example
    ``acronym='QB'`` or ``entry_id=4``).
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )

    sql_level = getattr(logging, sqlalchemy_log_level.upper(), logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(sql_level)
    logging.getLogger("sqlalchemy.pool").setLevel(sql_level)

    processors: list[Any] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
    ]

    if json_logs:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        # ConsoleRenderer formats exceptions itself
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_from_settings() -> None:
    """Apply ``settings.log_level``, ``json_logs`` and ``sqlalchemy_log_level``."""
    from acronym_assist.config import settings

    configure_logging(
        log_level=settings.log_level,
        json_logs=settings.json_logs,
        sqlalchemy_log_level=settings.sqlalchemy_log_level,
    )


def get_logger(name: str) -> Any:
    """Module logger for ``name`` (pass ``__name__``).

    Events are snake_case names with keyword context, e.g.
    ``logger.warning("usage_increment_failed", acronym_id=3, error=str(e))``.
    Typed as ``Any`` because structlog's proxy type depends on configuration.
    """
    return structlog.get_logger(name)
