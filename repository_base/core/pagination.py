"""Pagination helpers that translate page/limit query params into skip/take."""


from fastapi import Query

from repository_base.core.config import settings


class PaginationParams:
    """FastAPI dependency for `?page=1&limit=20`, feeding `RepositoryBase.get_all`."""

    def __init__(
        self,
        page: int = Query(default=1, ge=1, description="Page number (1-based)"),
        limit: int = Query(
            default=settings.default_page_size,
            ge=1,
            le=settings.max_page_size,
            description="Items per page",
        ),
    ):
        self.page = page
        self.limit = limit

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def take(self) -> int:
        return self.limit
