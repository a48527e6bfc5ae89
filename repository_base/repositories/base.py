"""Generic async read repository with filter, include, ordering and pagination stages."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable, Iterable
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import ScalarResult, Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import QueryableAttribute
from sqlalchemy.sql.base import ExecutableOption
from sqlalchemy.sql.expression import ClauseElement

from repository_base.core.exceptions import ArgumentNullError, ArgumentOutOfRangeError
from repository_base.repositories.interface import (
    AbstractRepository,
    Include,
    KeyT,
    ModelT,
    OrderBy,
    Predicate,
)

logger = logging.getLogger(__name__)


class RepositoryBase(AbstractRepository[ModelT, KeyT]):
    """Generic read repository over one mapped class.

    Every list query is composed in a fixed order: tracking mode, filter,
    include, order by, pagination. Nothing is cached; each call builds a fresh
    ``Select`` and runs it through the session.

    Subclass and set ``model``, or pass the mapped class to the constructor::

        class UserRepository(RepositoryBase[User, int]):
            model = User
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession, model: type[ModelT] | None = None):
        if session is None:
            raise ArgumentNullError("session")
        if model is not None:
            self.model = model
        elif getattr(self, "model", None) is None:
            raise ArgumentNullError("model")
        self._session = session

    @property
    def session(self) -> AsyncSession:
        return self._session

    # ------------------------------------------------------------------
    # Single-entity reads
    # ------------------------------------------------------------------

    async def find(self, key: KeyT) -> ModelT | None:
        """Return the entity with the given primary key, or None.

        An entity already tracked by the session is returned straight from the
        identity map without querying the database. Composite keys are passed
        as a tuple or dict.
        """
        if key is None:
            raise ArgumentNullError("key")
        return await self._session.get(self.model, key)

    async def first(self, predicate: Predicate, no_tracking: bool = False) -> ModelT:
        """Return the first match; raises ``NoResultFound`` when nothing matches."""
        if predicate is None:
            raise ArgumentNullError("predicate")
        return await self._fetch("first", predicate, 1, no_tracking, ScalarResult.one)

    async def first_or_default(
        self, predicate: Predicate, no_tracking: bool = False
    ) -> ModelT | None:
        if predicate is None:
            raise ArgumentNullError("predicate")
        return await self._fetch(
            "first_or_default", predicate, 1, no_tracking, ScalarResult.first
        )

    async def single(self, predicate: Predicate, no_tracking: bool = False) -> ModelT:
        """Return the only match.

        Raises ``NoResultFound`` when nothing matches and
        ``MultipleResultsFound`` when more than one row does.
        """
        if predicate is None:
            raise ArgumentNullError("predicate")
        # Two rows are enough to tell "one" from "many"
        return await self._fetch("single", predicate, 2, no_tracking, ScalarResult.one)

    async def single_or_default(
        self, predicate: Predicate, no_tracking: bool = False
    ) -> ModelT | None:
        """Return the only match or None; raises ``MultipleResultsFound`` on duplicates."""
        if predicate is None:
            raise ArgumentNullError("predicate")
        return await self._fetch(
            "single_or_default", predicate, 2, no_tracking, ScalarResult.one_or_none
        )

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    async def count(self, predicate: Predicate | None = None) -> int:
        logger.debug("count %s filtered=%s", self.model.__name__, predicate is not None)
        stmt = self._apply_filter(select(func.count()).select_from(self.model), predicate)
        return (await self._session.execute(stmt)).scalar_one()

    async def exists(self, predicate: Predicate | None = None) -> bool:
        logger.debug("exists %s filtered=%s", self.model.__name__, predicate is not None)
        stmt = select(self._apply_filter(select(self.model), predicate).exists())
        return bool((await self._session.execute(stmt)).scalar_one())

    async def check_empty_table(self) -> bool:
        """True if the table holds no rows at all."""
        return not await self.exists()

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    async def get_all(
        self,
        predicate: Predicate | None = None,
        skip: int = 0,
        take: int | None = None,
        no_tracking: bool = False,
        order_by: OrderBy | None = None,
        include: Include | None = None,
    ) -> list[ModelT]:
        """Return the entities matching the parameters.

        Args:
            predicate: SQL boolean expression to filter on.
            skip: rows to skip; 0 emits no OFFSET at all.
            take: page size; None for no limit.
            no_tracking: load detached copies instead of session-tracked entities.
            order_by: ``Select -> Select`` callable, or order clauses.
            include: ``Select -> Select`` callable, or loader options such as
                ``selectinload(Model.children)``.
        """
        stmt = self._apply_filter(select(self.model), predicate)
        stmt = self._apply_include(stmt, include)
        stmt = self._apply_order_by(stmt, order_by)
        stmt = self._apply_pagination(stmt, skip, take)

        logger.debug(
            "get_all %s skip=%s take=%s no_tracking=%s",
            self.model.__name__, skip, take, no_tracking,
        )
        async with self._reader(no_tracking) as session:
            result = await session.execute(stmt)
            return list(result.unique().scalars().all())

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
        """Like ``get_all`` with a final projection.

        ``selector`` is either column expressions (projected in SQL; a single
        expression yields plain values, several yield rows) or a callable
        applied to each loaded entity. SQL projections load no entities, so
        ``include`` only applies to the callable form.
        """
        if selector is None:
            raise ArgumentNullError("selector")
        columns = self._projection_columns(selector)

        if columns is None:
            entities = await self.get_all(
                predicate=predicate,
                skip=skip,
                take=take,
                no_tracking=no_tracking,
                order_by=order_by,
                include=include,
            )
            return [selector(entity) for entity in entities]

        if include is not None:
            logger.debug("include ignored for column projection on %s", self.model.__name__)

        stmt = self._apply_filter(select(self.model), predicate)
        stmt = self._apply_order_by(stmt, order_by)
        stmt = self._apply_pagination(stmt, skip, take)
        stmt = stmt.with_only_columns(*columns, maintain_column_froms=True)

        logger.debug(
            "get_all_with_selector %s columns=%d skip=%s take=%s",
            self.model.__name__, len(columns), skip, take,
        )
        async with self._reader(no_tracking) as session:
            result = await session.execute(stmt)
            if len(columns) == 1:
                return list(result.scalars().all())
            return list(result.all())

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _fetch(
        self,
        operation: str,
        predicate: Predicate,
        limit: int,
        no_tracking: bool,
        pick: Callable[[ScalarResult], Any],
    ) -> Any:
        """Run a filtered, limited entity query and apply ``pick`` to its scalars.

        ``pick`` runs inside the reader session; rows become entities only as
        they are consumed.
        """
        stmt = self._apply_filter(select(self.model), predicate).limit(limit)
        logger.debug(
            "%s %s limit=%s no_tracking=%s",
            operation, self.model.__name__, limit, no_tracking,
        )
        async with self._reader(no_tracking) as session:
            result = await session.execute(stmt)
            # Joined eager loads of collections repeat the parent row
            return pick(result.unique().scalars())

    @asynccontextmanager
    async def _reader(self, no_tracking: bool) -> AsyncIterator[AsyncSession]:
        """Yield the session a query should run in.

        Tracked reads use the repository's session. Untracked reads use a
        short-lived session on the same connection and transaction; it is
        closed on exit, which leaves everything it loaded detached.
        """
        if not no_tracking:
            yield self._session
            return
        connection = await self._session.connection()
        async with AsyncSession(bind=connection, expire_on_commit=False, autoflush=False) as reader:
            yield reader

    @staticmethod
    def _apply_filter(stmt: Select, predicate: Predicate | None) -> Select:
        if predicate is not None:
            stmt = stmt.where(predicate)
        return stmt

    @staticmethod
    def _apply_include(stmt: Select, include: Include | None) -> Select:
        if include is None:
            return stmt
        if callable(include) and not _is_clause(include):
            return include(stmt)
        return stmt.options(*_as_tuple(include))

    @staticmethod
    def _apply_order_by(stmt: Select, order_by: OrderBy | None) -> Select:
        if order_by is None:
            return stmt
        if callable(order_by) and not _is_clause(order_by):
            return order_by(stmt)
        return stmt.order_by(*_as_tuple(order_by))

    @staticmethod
    def _apply_pagination(stmt: Select, skip: int, take: int | None) -> Select:
        if skip is None or skip < 0:
            raise ArgumentOutOfRangeError("skip", skip)
        if take is not None and take < 0:
            raise ArgumentOutOfRangeError("take", take)
        if skip == 0:
            return stmt.limit(take)
        return stmt.offset(skip).limit(take)

    @staticmethod
    def _projection_columns(selector: Any) -> tuple | None:
        """Columns for a SQL projection, or None when selector is a plain callable."""
        if isinstance(selector, (list, tuple)):
            if not selector:
                raise ArgumentNullError("selector")
            return tuple(selector)
        if _is_clause(selector):
            return (selector,)
        if callable(selector):
            return None
        raise TypeError(
            f"selector must be column expressions or a callable, not {type(selector).__name__}"
        )


def _is_clause(value: Any) -> bool:
    return isinstance(value, (ClauseElement, QueryableAttribute))


def _as_tuple(value: Any) -> tuple:
    if _is_clause(value) or isinstance(value, (str, ExecutableOption)):
        return (value,)
    if isinstance(value, Iterable):
        return tuple(value)
    return (value,)
