"""Logging configuration module."""

from __future__ import annotations

import logging

from sellerdesk.config.settings import get_settings

# Pillow logs every PNG chunk it parses at DEBUG.
QUIET_LOGGERS = ("PIL", "httpx", "httpcore")


def configure_logging(level: str | None = None) -> None:
    """Configure root logger; ``level`` overrides ``LOG_LEVEL`` when given."""

    settings = get_settings()
    resolved = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(resolved, logging.INFO))
