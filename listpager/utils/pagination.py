"""Pagination utilities."""


def compute_total_pages(total: int, page_size: int) -> int:
    """Number of pages needed for ``total`` items; 0 when there are none."""
    if total <= 0:
        return 0
    return (total + page_size - 1) // page_size


def page_bounds(page: int, page_size: int, total: int) -> tuple[int, int]:
    """
    Return the half-open ``[start, end)`` item offsets of a page.

    ``end`` never exceeds ``total``, so an empty collection yields ``(0, 0)``.
    """
    if total <= 0:
        return 0, 0
    start = (page - 1) * page_size
    return start, min(start + page_size, total)


def paginate(total: int, page: int, page_size: int) -> dict:
    """
    Calculate pagination metadata.

    Args:
        total: Total number of items
        page: Current page number (1-indexed)
        page_size: Number of items per page

    Returns:
        Dictionary with pagination metadata
    """
    total_pages = compute_total_pages(total, page_size)
    start_index, end_index = page_bounds(page, page_size, total)
    return {
        "total": total,
        "page": page,
        "page_size": page_size,
        "total_pages": total_pages,
        "start_index": start_index,
        "end_index": end_index,
        "has_next_page": page < total_pages,
        "has_previous_page": page > 1,
    }
