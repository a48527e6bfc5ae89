"""Logging setup shared by applications embedding the repository."""


import logging
import sys

from repository_base.core.config import settings


def configure_logging(level: int | None = None) -> None:
    """Set up structured logging; DEBUG in development unless a level is given."""
    if level is None:
        level = logging.DEBUG if settings.app_env == "development" else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    # SQL echo is controlled by SQL_ECHO, not the root level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
