"""Ellipsis-compressed page number windows for pagination controls."""

from typing import Final, Union

ELLIPSIS: Final = "..."
MAX_VISIBLE_PAGES: Final = 5

PageLabel = Union[int, str]


def compute_page_window(current_page: int, total_pages: int) -> list[PageLabel]:
    """
    Build the page labels to render for a pagination control.

    Small page counts are listed verbatim. Otherwise the first and last pages
    are always shown around a three-page window centred on ``current_page``,
    with ``ELLIPSIS`` marking the gaps. The window is pushed to four pages
    when the current page is near either end, so at most five numbers and
    two ellipses are returned.

    Examples:
        >>> compute_page_window(1, 20)
        [1, 2, 3, 4, '...', 20]
        >>> compute_page_window(10, 20)
        [1, '...', 9, 10, 11, '...', 20]
    """
    if total_pages <= 0:
        return []
    if total_pages <= MAX_VISIBLE_PAGES:
        return list(range(1, total_pages + 1))

    current_page = min(max(current_page, 1), total_pages)

    start = max(2, current_page - 1)
    end = min(total_pages - 1, current_page + 1)

    if current_page <= 3:
        end = 4
    if current_page >= total_pages - 2:
        start = total_pages - 3

    pages: list[PageLabel] = [1]
    if start > 2:
        pages.append(ELLIPSIS)
    for page in range(start, end + 1):
        if 1 < page < total_pages:
            pages.append(page)
    if end < total_pages - 1:
        pages.append(ELLIPSIS)
    pages.append(total_pages)
    return pages
