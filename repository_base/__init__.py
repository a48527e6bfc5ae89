"""Generic async read repository over SQLAlchemy mapped classes."""
from repository_base.core.exceptions import (
    AppException,
    ArgumentNullError,
    ArgumentOutOfRangeError,
)
from repository_base.repositories import AbstractRepository, RepositoryBase

__all__ = [
    "AbstractRepository",
    "AppException",
    "ArgumentNullError",
    "ArgumentOutOfRangeError",
    "RepositoryBase",
]

__version__ = "1.0.0"
