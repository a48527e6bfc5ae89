"""Abstract read-repository interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import Any, Generic, TypeVar, Union

from sqlalchemy import ColumnElement, Select

ModelT = TypeVar("ModelT")
KeyT = TypeVar("KeyT")

Predicate = ColumnElement[bool]
# Either a Select -> Select callable, or one clause/option or any iterable of them
OrderBy = Union[Callable[[Select], Select], Iterable[Any]]
Include = Union[Callable[[Select], Select], Iterable[Any]]


class AbstractRepository(ABC, Generic[ModelT, KeyT]):
    """Read operations over one mapped entity class."""

    @abstractmethod
    async def find(self, key: KeyT) -> ModelT | None:
        ...

    @abstractmethod
    async def first(self, predicate: Predicate, no_tracking: bool = False) -> ModelT:
        ...

    @abstractmethod
    async def first_or_default(
        self, predicate: Predicate, no_tracking: bool = False
    ) -> ModelT | None:
        ...

    @abstractmethod
    async def single(self, predicate: Predicate, no_tracking: bool = False) -> ModelT:
        ...

    @abstractmethod
    async def single_or_default(
        self, predicate: Predicate, no_tracking: bool = False
    ) -> ModelT | None:
        ...

    @abstractmethod
    async def count(self, predicate: Predicate | None = None) -> int:
        ...

    @abstractmethod
    async def exists(self, predicate: Predicate | None = None) -> bool:
        ...

    @abstractmethod
    async def check_empty_table(self) -> bool:
        ...

    @abstractmethod
    async def get_all(
        self,
        predicate: Predicate | None = None,
        skip: int = 0,
        take: int | None = None,
        no_tracking: bool = False,
        order_by: OrderBy | None = None,
        include: Include | None = None,
    ) -> list[ModelT]:
        ...

    @abstractmethod
    async def get_all_with_selector(
        self,
        selector: Any,
        predicate: Predicate | None = None,
        skip: int = 0,
        take: int | None = None,
        no_tracking: bool = False,
        order_by: OrderBy | None = None,
        include: Include | None = None,
    ) -> list[Any]:
        ...
