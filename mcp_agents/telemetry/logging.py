"""Logging setup for mcp-agents.

Every module logs through ``logging.getLogger(__name__)``, so all records
flow into the ``mcp_agents`` logger hierarchy. ``setup_logging`` attaches a
console handler and, optionally, a rotating file handler to that logger,
both using AgentLogFormatter.

Format:
    [TIMESTAMP] [LEVEL] [COMPONENT] Message

Example:
    [2026-01-11 10:15:32] [INFO] [DEFI] swap_tokens handled (tx=simulated-transaction-signature)
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional, Union

from mcp_agents.config.settings import get_settings


# =============================================================================
# Constants
# =============================================================================

ROOT_LOGGER_NAME = "mcp_agents"

# Rotate at 10 MB, keeping 5 backups
MAX_LOG_SIZE = 10 * 1024 * 1024
BACKUP_COUNT = 5


# =============================================================================
# Formatter and Adapter
# =============================================================================


class AgentLogFormatter(logging.Formatter):
    """Log formatter with a component column.

    Records without an explicit ``component`` get the last segment of their
    logger name, upper-cased (``mcp_agents.routing.classifier`` ->
    ``CLASSIFIER``).
    """

    STANDARD_FORMAT = "[%(asctime)s] [%(levelname)s] [%(component)s] %(message)s"
    DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

    def __init__(self) -> None:
        super().__init__(fmt=self.STANDARD_FORMAT, datefmt=self.DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "component"):
            record.component = record.name.split(".")[-1].upper()
        return super().format(record)


class AgentLogAdapter(logging.LoggerAdapter):
    """Logger adapter that stamps records with agent context.

    Example:
        >>> log = AgentLogAdapter(logging.getLogger(__name__), {"component": "DEFI"})
        >>> log.info("swap_tokens handled")
    """

    def process(
        self,
        msg: str,
        kwargs: dict[str, Any],
    ) -> tuple[str, dict[str, Any]]:
        extra = kwargs.get("extra", {})
        extra.update(self.extra)
        kwargs["extra"] = extra
        return msg, kwargs


# =============================================================================
# Logging Setup
# =============================================================================


def setup_logging(
    level: Optional[Union[int, str]] = None,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """Configure the ``mcp_agents`` logger.

    Calling this again replaces the handlers installed by a previous call.

    Args:
        level: Logging level; defaults to ``settings.log_level`` (DEBUG when
            ``settings.debug`` is set).
        log_file: Optional rotating log file; defaults to
            ``settings.log_file``.

    Returns:
        The configured ``mcp_agents`` logger.
    """
    settings = get_settings()
    if level is None:
        level = "DEBUG" if settings.debug else settings.log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    log_path = log_file if log_file is not None else settings.log_file

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = AgentLogFormatter()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_path is not None:
        log_path = Path(log_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=log_path,
            maxBytes=MAX_LOG_SIZE,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Prevent duplicate output through the root logger
    logger.propagate = False
    return logger


__all__ = [
    "AgentLogFormatter",
    "AgentLogAdapter",
    "setup_logging",
    "ROOT_LOGGER_NAME",
]
