"""Paging state, query stores, fetcher and controller."""

from listpager.services.pagination_state import PaginationState
from listpager.services.query_store import QueryStore
from listpager.services.sql_store import SqlQueryStore
from listpager.services.postgrest_store import PostgrestQueryStore
from listpager.services.memory_store import InMemoryQueryStore
from listpager.services.query_fetcher import RemoteQueryFetcher
from listpager.services.pagination_controller import FetchStatus, PaginationController

__all__ = [
    "PaginationState",
    "QueryStore",
    "SqlQueryStore",
    "PostgrestQueryStore",
    "InMemoryQueryStore",
    "RemoteQueryFetcher",
    "FetchStatus",
    "PaginationController",
]
