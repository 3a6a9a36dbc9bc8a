"""Abstract remote-query protocol consumed by the fetcher."""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from listpager.schemas.query import FilterOperator

Q = TypeVar("Q")


class QueryStore(ABC, Generic[Q]):
    """
    A row-oriented store that can answer bounded, filtered, ordered queries.

    Query objects are opaque to the caller. Each ``apply_*`` call returns the
    query to use from then on; implementations may mutate and return the
    same object or build a new one.
    """

    #: Human readable name of the queried collection, used in log messages.
    name: str = "collection"

    @abstractmethod
    def new_query(self) -> Q:
        """Start an unconstrained query over the whole collection."""

    @abstractmethod
    def apply_filter(self, query: Q, field: str, operator: FilterOperator, value: Any) -> Q:
        """Constrain ``field`` with ``operator``; raises QueryBuildError on bad input."""

    @abstractmethod
    def apply_order(self, query: Q, field: str, ascending: bool) -> Q:
        """Sort by a single column."""

    @abstractmethod
    def apply_range(self, query: Q, start_index: int, end_index: int) -> Q:
        """Select rows ``start_index`` through ``end_index`` inclusive."""

    @abstractmethod
    async def execute(self, query: Q) -> tuple[list[Any], int]:
        """Run the query; return the page rows and the exact filtered count."""
