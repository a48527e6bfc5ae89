"""Core package — settings, exceptions, logging and pagination helpers."""
from repository_base.core.config import Settings, settings
from repository_base.core.exceptions import (
    AppException,
    ArgumentNullError,
    ArgumentOutOfRangeError,
    register_exception_handlers,
)
from repository_base.core.logging import configure_logging

__all__ = [
    "AppException",
    "ArgumentNullError",
    "ArgumentOutOfRangeError",
    "Settings",
    "configure_logging",
    "register_exception_handlers",
    "settings",
]
