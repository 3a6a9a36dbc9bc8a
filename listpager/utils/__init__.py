"""Utility functions and helpers."""

from listpager.utils.pagination import (
    compute_total_pages,
    page_bounds,
    paginate,
)
from listpager.utils.page_window import ELLIPSIS, compute_page_window

__all__ = [
    "compute_total_pages",
    "page_bounds",
    "paginate",
    "ELLIPSIS",
    "compute_page_window",
]
