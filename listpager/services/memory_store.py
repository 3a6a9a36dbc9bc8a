"""In-memory query store over a list of mappings."""

import logging
import operator as op
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from listpager.exceptions import QueryBuildError
from listpager.schemas.query import FilterOperator
from listpager.services.query_store import QueryStore

logger = logging.getLogger(__name__)

COMPARISONS = {
    FilterOperator.GT: op.gt,
    FilterOperator.GTE: op.ge,
    FilterOperator.LT: op.lt,
    FilterOperator.LTE: op.le,
}


@dataclass
class MemoryQuery:
    predicates: list[Callable[[Mapping], bool]] = field(default_factory=list)
    order: tuple[str, bool] | None = None
    start: int | None = None
    end: int | None = None


def like_to_regex(pattern: str, ignore_case: bool = False) -> re.Pattern:
    """Translate a SQL LIKE pattern (``%`` and ``_`` wildcards) to a regex."""
    parts = []
    for char in pattern:
        if char == "%":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    flags = re.DOTALL
    if ignore_case:
        flags |= re.IGNORECASE
    return re.compile("".join(parts), flags)


def _compare(compare: Callable[[Any, Any], bool], field: str, value: Any) -> Callable[[Mapping], bool]:
    def predicate(row: Mapping) -> bool:
        current = row.get(field)
        if current is None or value is None:
            return False
        return compare(current, value)

    return predicate


class InMemoryQueryStore(QueryStore[MemoryQuery]):
    """
    Query store answering from rows held in memory.

    Follows SQL semantics where they matter for paging: comparisons against
    null never match, and nulls sort last ascending and first descending.
    """

    def __init__(self, rows: Iterable[Mapping[str, Any]], name: str = "memory"):
        self.rows = [dict(row) for row in rows]
        self.name = name

    def _check_field(self, name: str) -> None:
        if self.rows and not any(name in row for row in self.rows):
            raise QueryBuildError(
                f"Unknown column '{name}' on '{self.name}'",
                details={"field": name, "collection": self.name},
            )

    def new_query(self) -> MemoryQuery:
        return MemoryQuery()

    def apply_filter(self, query: MemoryQuery, field: str, operator: FilterOperator, value: Any) -> MemoryQuery:
        self._check_field(field)

        if operator is FilterOperator.EQ:
            predicate = lambda row: row.get(field) == value
        elif operator is FilterOperator.NEQ:
            if value is None:
                predicate = lambda row: row.get(field) is not None
            else:
                predicate = lambda row: row.get(field) is not None and row.get(field) != value
        elif operator in COMPARISONS:
            predicate = _compare(COMPARISONS[operator], field, value)
        elif operator in (FilterOperator.MATCHES, FilterOperator.MATCHES_IGNORE_CASE):
            regex = like_to_regex(value, ignore_case=operator is FilterOperator.MATCHES_IGNORE_CASE)
            predicate = lambda row: row.get(field) is not None and regex.fullmatch(str(row.get(field))) is not None
        elif operator is FilterOperator.IN_SET:
            members = list(value)
            predicate = lambda row: row.get(field) in members
        else:
            raise QueryBuildError(f"Unsupported operator '{operator}'", details={"operator": str(operator)})

        query.predicates.append(predicate)
        return query

    def apply_order(self, query: MemoryQuery, field: str, ascending: bool) -> MemoryQuery:
        self._check_field(field)
        query.order = (field, ascending)
        return query

    def apply_range(self, query: MemoryQuery, start_index: int, end_index: int) -> MemoryQuery:
        query.start = start_index
        query.end = end_index
        return query

    async def execute(self, query: MemoryQuery) -> tuple[list[dict], int]:
        try:
            matched = [row for row in self.rows if all(predicate(row) for predicate in query.predicates)]

            if query.order:
                field, ascending = query.order
                present = [row for row in matched if row.get(field) is not None]
                missing = [row for row in matched if row.get(field) is None]
                present.sort(key=lambda row: row[field], reverse=not ascending)
                matched = present + missing if ascending else missing + present
        except TypeError as e:
            raise QueryBuildError(
                f"Cannot compare values on '{self.name}': {e}",
                details={"collection": self.name},
            ) from e

        total = len(matched)
        if query.start is not None:
            matched = matched[query.start:query.end + 1]

        logger.debug(f"{self.name}: fetched {len(matched)} of {total} rows")
        return [dict(row) for row in matched], total
