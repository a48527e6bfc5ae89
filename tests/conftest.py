import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from repository_base.db import Base, build_session_factory
from repository_base.repositories import RepositoryBase
from tests.models import Author, Book

AUTHORS = [
    (1, "Ibsen", "NO"),
    (2, "Hamsun", "NO"),
    (3, "Lagerlof", "SE"),
    (4, "Strindberg", "SE"),
    (5, "Andersen", "DK"),
]


# Fresh in-memory database per test
@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def session(engine):
    factory = build_session_factory(engine)
    async with factory() as session:
        yield session


@pytest.fixture
def statements(engine):
    """SQL statements sent to the database while the test runs."""
    captured = []

    def _capture(conn, cursor, statement, parameters, context, executemany):
        captured.append(statement)

    event.listen(engine.sync_engine, "before_cursor_execute", _capture)
    yield captured
    event.remove(engine.sync_engine, "before_cursor_execute", _capture)


@pytest.fixture
def authors_repo(session):
    return RepositoryBase[Author, int](session, Author)


@pytest.fixture
def books_repo(session):
    return RepositoryBase[Book, int](session, Book)


@pytest.fixture
async def seeded(session):
    """Five authors, two books each for the first two."""
    authors = [Author(id=i, name=name, country=c) for i, name, c in AUTHORS]
    session.add_all(authors)
    session.add_all([
        Book(id=1, title="Peer Gynt", pages=250, author_id=1),
        Book(id=2, title="A Doll's House", pages=120, author_id=1),
        Book(id=3, title="Hunger", pages=200, author_id=2),
        Book(id=4, title="Growth of the Soil", pages=450, author_id=2),
    ])
    await session.commit()
    return authors
