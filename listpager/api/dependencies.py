"""FastAPI dependencies for paged collection endpoints."""

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import sessionmaker

from listpager.database import get_session_factory
from listpager.models import Order, Product
from listpager.schemas.query import FilterOperator, FilterSpec, OrderSpec
from listpager.services.query_store import QueryStore
from listpager.services.sql_store import SqlQueryStore

# Collection name -> (model, default order)
COLLECTIONS = {
    "products": (Product, OrderSpec(field="created_at", ascending=False)),
    "orders": (Order, OrderSpec(field="created_at", ascending=False)),
}

RESERVED_PARAMS = {"page", "page_size", "order_by", "ascending"}


def get_collection_store(
    name: str,
    session_factory: sessionmaker = Depends(get_session_factory),
) -> QueryStore:
    """Resolve a registered collection name to its query store or raise 404."""
    if name not in COLLECTIONS:
        raise HTTPException(status_code=404, detail=f"Collection '{name}' not found")
    model, _ = COLLECTIONS[name]
    return SqlQueryStore(session_factory, model)


def get_default_order(name: str) -> OrderSpec:
    if name not in COLLECTIONS:
        raise HTTPException(status_code=404, detail=f"Collection '{name}' not found")
    return COLLECTIONS[name][1]


def parse_filter(field: str, raw: str) -> FilterSpec:
    """
    Parse one PostgREST-style filter parameter.

    ``status=eq.paid``, ``price=gte.10``, ``name=ilike.%phone%``,
    ``status=in.(paid,shipped)``, ``category=is.null``, ``category=not.is.null``.
    """
    if raw == "is.null":
        return FilterSpec(field=field, operator=FilterOperator.EQ, value=None)
    if raw == "not.is.null":
        return FilterSpec(field=field, operator=FilterOperator.NEQ, value=None)

    token, sep, value = raw.partition(".")
    if not sep:
        raise HTTPException(status_code=400, detail=f"Filter '{field}' must look like operator.value")
    try:
        operator = FilterOperator.parse(token)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown filter operator '{token}' on '{field}'")

    if operator is FilterOperator.IN_SET:
        if not (value.startswith("(") and value.endswith(")")):
            raise HTTPException(status_code=400, detail=f"Filter '{field}' needs a list like in.(a,b)")
        inner = value[1:-1]
        items = [item.strip() for item in inner.split(",")] if inner else []
        return FilterSpec(field=field, operator=operator, value=items)

    return FilterSpec(field=field, operator=operator, value=value)


def parse_filters(request: Request) -> list[FilterSpec]:
    """Collect every non-reserved query parameter as a filter."""
    return [
        parse_filter(field, raw)
        for field, raw in request.query_params.multi_items()
        if field not in RESERVED_PARAMS
    ]
