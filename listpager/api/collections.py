"""Paged collection endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query

from listpager.api.dependencies import get_collection_store, get_default_order, parse_filters
from listpager.config import get_settings
from listpager.schemas.pagination import ListPageResponse, PaginationConfig
from listpager.schemas.query import FilterSpec, OrderSpec
from listpager.services.pagination_controller import FetchStatus, PaginationController
from listpager.services.query_fetcher import RemoteQueryFetcher
from listpager.services.query_store import QueryStore
from listpager.utils.pagination import paginate

router = APIRouter()


@router.get("/{name}", response_model=ListPageResponse)
async def list_collection(
    page: int = Query(1, ge=1),
    page_size: int | None = Query(None, ge=1),
    order_by: str | None = Query(None),
    ascending: bool = Query(False),
    store: QueryStore = Depends(get_collection_store),
    default_order: OrderSpec = Depends(get_default_order),
    filters: list[FilterSpec] = Depends(parse_filters),
):
    """
    Return one page of a collection.

    A page past the end of the filtered set falls back to page 1, the same
    way a list view does when its result set shrinks.
    """
    settings = get_settings()
    page_size = page_size or settings.items_per_page
    if page_size not in settings.items_per_page_options:
        raise HTTPException(
            status_code=400,
            detail=f"page_size must be one of {settings.items_per_page_options}",
        )

    config = PaginationConfig(
        items_per_page=page_size,
        items_per_page_options=settings.items_per_page_options,
        initial_page=page,
    )
    order = OrderSpec(field=order_by, ascending=ascending) if order_by else default_order

    async with PaginationController(RemoteQueryFetcher(store), filters, order, config) as controller:
        await controller.wait()

    if controller.status is FetchStatus.FAILED:
        raise controller.error

    state = controller.pagination
    return ListPageResponse(
        items=controller.rows,
        page_window=controller.page_window,
        **paginate(state.total_items, state.current_page, state.items_per_page),
    )
