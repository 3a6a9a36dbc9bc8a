"""Bounded range queries against a query store."""

import logging
import time
from collections.abc import Sequence
from typing import Any

from listpager.exceptions import QueryBuildError, TransportError
from listpager.schemas.query import FetchResult, FilterOperator, FilterSpec, OrderSpec, QueryResult
from listpager.services.query_store import QueryStore

logger = logging.getLogger(__name__)

PATTERN_OPERATORS = {FilterOperator.MATCHES, FilterOperator.MATCHES_IGNORE_CASE}


def validate_filter(spec: FilterSpec) -> None:
    """Reject filter values the operator cannot work with."""
    if spec.operator is FilterOperator.IN_SET:
        if isinstance(spec.value, (str, bytes)) or not hasattr(spec.value, "__iter__"):
            raise QueryBuildError(
                f"Filter on '{spec.field}' needs a collection of values for in-set",
                details={"field": spec.field, "value": repr(spec.value)},
            )
    elif spec.operator in PATTERN_OPERATORS and not isinstance(spec.value, str):
        raise QueryBuildError(
            f"Filter on '{spec.field}' needs a string pattern",
            details={"field": spec.field, "value": repr(spec.value)},
        )


def validate_range(start_index: int, end_index: int) -> None:
    if start_index < 0 or end_index < start_index:
        raise QueryBuildError(
            f"Invalid row range [{start_index}, {end_index}]",
            details={"start_index": start_index, "end_index": end_index},
        )


class RemoteQueryFetcher:
    """
    Translates filters, ordering and a row range into one store query.

    ``fetch`` never raises for query problems: every failure is returned as
    a ``FetchResult`` carrying a ``QueryBuildError`` or ``TransportError``.
    """

    def __init__(self, store: QueryStore):
        self.store = store

    def build(
        self,
        filters: Sequence[FilterSpec],
        order: OrderSpec | None,
        start_index: int,
        end_index: int,
    ) -> Any:
        """Build the store query; raises QueryBuildError."""
        validate_range(start_index, end_index)

        query = self.store.new_query()
        for spec in filters:
            validate_filter(spec)
            query = self.store.apply_filter(query, spec.field, spec.operator, spec.value)
        if order is not None:
            query = self.store.apply_order(query, order.field, order.ascending)
        return self.store.apply_range(query, start_index, end_index)

    async def fetch(
        self,
        filters: Sequence[FilterSpec],
        order: OrderSpec | None,
        row_range: tuple[int, int],
    ) -> FetchResult:
        """
        Fetch one page of rows and the exact filtered count.

        Args:
            filters: Constraints, AND-combined
            order: Sort order, or None for store order
            row_range: Inclusive (start, end) row indexes

        Returns:
            FetchResult with either the QueryResult or the error
        """
        start_index, end_index = row_range
        started = time.perf_counter()

        try:
            query = self.build(filters, order, start_index, end_index)
        except QueryBuildError as e:
            logger.error(f"Invalid query for {self.store.name}: {e.message}")
            return FetchResult(error=e)
        except (TypeError, ValueError) as e:
            logger.error(f"Invalid query for {self.store.name}: {e}")
            return FetchResult(error=QueryBuildError(str(e), details={"collection": self.store.name}))

        try:
            rows, total = await self.store.execute(query)
        except QueryBuildError as e:
            logger.error(f"Invalid query for {self.store.name}: {e.message}")
            return FetchResult(error=e)
        except TransportError as e:
            logger.warning(f"Fetching {self.store.name} failed: {e.message}")
            return FetchResult(error=e)
        except Exception as e:
            logger.warning(f"Fetching {self.store.name} failed: {e}")
            return FetchResult(
                error=TransportError(
                    f"Fetching {self.store.name} failed: {e}",
                    details={"collection": self.store.name, "reason": type(e).__name__},
                )
            )

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(
            f"{self.store.name}: rows {start_index}-{end_index} -> {len(rows)} of {total} "
            f"in {elapsed_ms:.1f}ms"
        )
        return FetchResult(
            result=QueryResult(rows=list(rows), exact_total_count=total),
            elapsed_ms=elapsed_ms,
        )
