"""PostgREST (Supabase REST) query store."""

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

import httpx

from listpager.config import get_settings
from listpager.exceptions import QueryBuildError, TransportError
from listpager.schemas.query import FilterOperator
from listpager.services.query_store import QueryStore

logger = logging.getLogger(__name__)

COLUMN_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
RESERVED_PARAMS = {"select", "order", "limit", "offset", "on_conflict", "columns"}
CONTENT_RANGE = re.compile(r"^(?:\d+-\d+|\*)/(\d+|\*)$")

OPERATOR_TOKENS = {
    FilterOperator.EQ: "eq",
    FilterOperator.NEQ: "neq",
    FilterOperator.GT: "gt",
    FilterOperator.GTE: "gte",
    FilterOperator.LT: "lt",
    FilterOperator.LTE: "lte",
    FilterOperator.MATCHES: "like",
    FilterOperator.MATCHES_IGNORE_CASE: "ilike",
}


@dataclass
class PostgrestQuery:
    """Query-string filters plus the ordering and row range of a request."""

    params: list[tuple[str, str]] = field(default_factory=list)
    order: str | None = None
    start: int | None = None
    end: int | None = None


def format_value(value: Any) -> str:
    """Render a filter value the way PostgREST expects it in a query string."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def format_list_item(value: Any) -> str:
    """Render one member of an ``in.(...)`` list, quoting reserved characters."""
    text = format_value(value)
    if any(char in text for char in ',()"\\ '):
        escaped = text.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return text


def parse_content_range(header: str | None) -> int:
    """Extract the exact total from a ``Content-Range`` header such as ``0-24/237``."""
    match = CONTENT_RANGE.match((header or "").strip())
    if not match or match.group(1) == "*":
        raise TransportError(
            "Store did not report an exact row count",
            details={"content_range": header},
        )
    return int(match.group(1))


class PostgrestQueryStore(QueryStore[PostgrestQuery]):
    """
    Query store for one PostgREST table or view.

    Rows and the exact count come back in a single request: the page is
    selected with a ``Range`` header and ``Prefer: count=exact`` makes the
    server report the full filtered count in ``Content-Range``.
    """

    def __init__(
        self,
        table: str,
        base_url: str | None = None,
        api_key: str | None = None,
        select: str = "*",
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = get_settings()
        self.name = table
        self.base_url = (base_url if base_url is not None else settings.postgrest_url).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.postgrest_api_key
        self.select = select
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self._transport = transport

    def _check_field(self, name: str) -> str:
        if not COLUMN_NAME.match(name) or name in RESERVED_PARAMS:
            raise QueryBuildError(
                f"Invalid column name '{name}'",
                details={"field": name, "collection": self.name},
            )
        return name

    def _headers(self, query: PostgrestQuery) -> dict[str, str]:
        headers = {"Accept": "application/json", "Prefer": "count=exact"}
        if self.api_key:
            headers["apikey"] = self.api_key
            headers["Authorization"] = f"Bearer {self.api_key}"
        if query.start is not None:
            headers["Range-Unit"] = "items"
            headers["Range"] = f"{query.start}-{query.end}"
        return headers

    def new_query(self) -> PostgrestQuery:
        return PostgrestQuery()

    def apply_filter(self, query: PostgrestQuery, field: str, operator: FilterOperator, value: Any) -> PostgrestQuery:
        self._check_field(field)

        if operator is FilterOperator.IN_SET:
            token = "in.(" + ",".join(format_list_item(item) for item in value) + ")"
        elif value is None and operator is FilterOperator.EQ:
            token = "is.null"
        elif value is None and operator is FilterOperator.NEQ:
            token = "not.is.null"
        elif operator in OPERATOR_TOKENS:
            token = f"{OPERATOR_TOKENS[operator]}.{format_value(value)}"
        else:
            raise QueryBuildError(f"Unsupported operator '{operator}'", details={"operator": str(operator)})

        query.params.append((field, token))
        return query

    def apply_order(self, query: PostgrestQuery, field: str, ascending: bool) -> PostgrestQuery:
        self._check_field(field)
        query.order = f"{field}.{'asc' if ascending else 'desc'}"
        return query

    def apply_range(self, query: PostgrestQuery, start_index: int, end_index: int) -> PostgrestQuery:
        query.start = start_index
        query.end = end_index
        return query

    async def execute(self, query: PostgrestQuery) -> tuple[list[dict], int]:
        params = [("select", self.select), *query.params]
        if query.order:
            params.append(("order", query.order))

        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            response = await client.get(
                f"{self.base_url}/{self.name}",
                params=params,
                headers=self._headers(query),
            )

        # 416 means the range starts past the last row; the count is still reported
        if response.status_code == httpx.codes.REQUESTED_RANGE_NOT_SATISFIABLE:
            rows: list[dict] = []
        else:
            response.raise_for_status()
            rows = response.json()

        total = parse_content_range(response.headers.get("content-range"))
        logger.debug(f"{self.name}: fetched {len(rows)} of {total} rows")
        return rows, total
