"""SQLAlchemy-backed query store for relational databases."""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from sqlalchemy import Column, Select, Table, func, select
from sqlalchemy.orm import sessionmaker

from listpager.exceptions import QueryBuildError
from listpager.schemas.query import FilterOperator
from listpager.services.query_store import QueryStore

logger = logging.getLogger(__name__)

TRUE_VALUES = {"true", "t", "1", "yes"}
FALSE_VALUES = {"false", "f", "0", "no"}


@dataclass
class SqlQuery:
    """A filtered SELECT plus the ordering and window to apply on execution."""

    statement: Select
    order_by: list = field(default_factory=list)
    offset: int | None = None
    limit: int | None = None


def coerce_value(column: Column, value: Any) -> Any:
    """
    Convert a string filter value to the column's Python type.

    Values arriving from query strings are always text; comparing them to a
    numeric or date column needs the real type.
    """
    if value is None or not isinstance(value, str):
        return value
    try:
        python_type = column.type.python_type
    except NotImplementedError:
        return value
    if python_type is str:
        return value

    try:
        if python_type is bool:
            lowered = value.strip().lower()
            if lowered in TRUE_VALUES:
                return True
            if lowered in FALSE_VALUES:
                return False
            raise ValueError(value)
        if python_type is datetime:
            return datetime.fromisoformat(value)
        if python_type is date:
            return date.fromisoformat(value)
        return python_type(value)
    except (ValueError, TypeError, ArithmeticError):
        raise QueryBuildError(
            f"Value {value!r} is not valid for column '{column.key}'",
            details={"field": column.key, "value": value},
        )


class SqlQueryStore(QueryStore[SqlQuery]):
    """
    Query store over a single table, declarative model or ``Table``.

    Blocking database work runs in a worker thread so callers on the event
    loop are never blocked. The count and the page are read in the same
    session.
    """

    def __init__(self, session_factory: sessionmaker, source: Any):
        self._session_factory = session_factory
        self._table: Table = getattr(source, "__table__", source)
        self.name = self._table.name

    def _column(self, name: str) -> Column:
        column = self._table.columns.get(name)
        if column is None:
            raise QueryBuildError(
                f"Unknown column '{name}' on '{self.name}'",
                details={"field": name, "collection": self.name},
            )
        return column

    def new_query(self) -> SqlQuery:
        return SqlQuery(statement=select(*self._table.columns))

    def apply_filter(self, query: SqlQuery, field: str, operator: FilterOperator, value: Any) -> SqlQuery:
        column = self._column(field)

        if operator is FilterOperator.IN_SET:
            clause = column.in_([coerce_value(column, item) for item in value])
        elif operator is FilterOperator.MATCHES:
            clause = column.like(value)
        elif operator is FilterOperator.MATCHES_IGNORE_CASE:
            clause = column.ilike(value)
        else:
            value = coerce_value(column, value)
            if operator is FilterOperator.EQ:
                clause = column.is_(None) if value is None else column == value
            elif operator is FilterOperator.NEQ:
                clause = column.is_not(None) if value is None else column != value
            elif operator is FilterOperator.GT:
                clause = column > value
            elif operator is FilterOperator.GTE:
                clause = column >= value
            elif operator is FilterOperator.LT:
                clause = column < value
            elif operator is FilterOperator.LTE:
                clause = column <= value
            else:
                raise QueryBuildError(f"Unsupported operator '{operator}'", details={"operator": str(operator)})

        query.statement = query.statement.where(clause)
        return query

    def apply_order(self, query: SqlQuery, field: str, ascending: bool) -> SqlQuery:
        column = self._column(field)
        query.order_by = [column.asc() if ascending else column.desc()]
        return query

    def apply_range(self, query: SqlQuery, start_index: int, end_index: int) -> SqlQuery:
        query.offset = start_index
        query.limit = end_index - start_index + 1
        return query

    async def execute(self, query: SqlQuery) -> tuple[list[dict], int]:
        return await asyncio.to_thread(self._execute_sync, query)

    def _execute_sync(self, query: SqlQuery) -> tuple[list[dict], int]:
        count_query = select(func.count()).select_from(query.statement.subquery())

        page_query = query.statement.order_by(*query.order_by)
        if query.offset is not None:
            page_query = page_query.offset(query.offset).limit(query.limit)

        with self._session_factory() as session:
            total = session.execute(count_query).scalar() or 0
            rows = [dict(row) for row in session.execute(page_query).mappings().all()]

        logger.debug(f"{self.name}: fetched {len(rows)} of {total} rows")
        return rows, total
