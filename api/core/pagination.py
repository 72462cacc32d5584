"""
Page/limit pagination shared by list endpoints.
"""

from fastapi import Query

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# OFFSET is a bigint; the largest page keeps (page - 1) * MAX_LIMIT within it.
MAX_OFFSET = 2**63 - 1
MAX_PAGE = MAX_OFFSET // MAX_LIMIT + 1


def offset_for(page: int, limit: int) -> int:
    return (page - 1) * limit


class PageParams:
    """
    FastAPI dependency for `?page=&limit=` query parameters.
    """

    def __init__(
        self,
        page: int = Query(DEFAULT_PAGE, ge=1, le=MAX_PAGE),
        limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    ) -> None:
        self.page = page
        self.limit = limit

    @property
    def offset(self) -> int:
        return offset_for(self.page, self.limit)
