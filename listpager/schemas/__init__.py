"""Pydantic schemas and result types."""

from listpager.schemas.query import (
    FilterOperator,
    FilterSpec,
    OrderSpec,
    QueryResult,
    FetchResult,
)
from listpager.schemas.pagination import (
    PaginationConfig,
    ListPageResponse,
)

__all__ = [
    "FilterOperator",
    "FilterSpec",
    "OrderSpec",
    "QueryResult",
    "FetchResult",
    "PaginationConfig",
    "ListPageResponse",
]
