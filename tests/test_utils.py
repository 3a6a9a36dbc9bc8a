"""Tests for pagination utility functions."""

import pytest

from listpager.utils.pagination import compute_total_pages, page_bounds, paginate
from listpager.utils.page_window import ELLIPSIS, compute_page_window


class TestComputeTotalPages:
    """Tests for compute_total_pages."""

    @pytest.mark.parametrize(
        "total,page_size,expected",
        [(0, 25, 0), (1, 25, 1), (25, 25, 1), (26, 25, 2), (237, 25, 10), (100, 10, 10), (7, 1, 7)],
    )
    def test_rounds_up(self, total, page_size, expected):
        """Should be the ceiling of total / page_size."""
        assert compute_total_pages(total, page_size) == expected

    def test_zero_only_when_empty(self):
        """Should return 0 pages exactly when there are no items."""
        for page_size in (1, 10, 100):
            assert compute_total_pages(0, page_size) == 0
            assert compute_total_pages(1, page_size) == 1


class TestPageBounds:
    """Tests for page_bounds."""

    def test_last_partial_page(self):
        """Should stop the last page at the total."""
        assert page_bounds(10, 25, 237) == (225, 237)

    def test_full_page(self):
        """Should span a whole page in the middle of the set."""
        assert page_bounds(2, 25, 237) == (25, 50)

    def test_empty_collection(self):
        """Should be (0, 0) when there are no items."""
        assert page_bounds(1, 25, 0) == (0, 0)

    def test_bounds_stay_inside_total(self):
        """start < end <= total for every valid page."""
        total, size = 101, 10
        for page in range(1, compute_total_pages(total, size) + 1):
            start, end = page_bounds(page, size, total)
            assert 0 <= start < end <= total


class TestPaginate:
    """Tests for paginate utility."""

    def test_calculates_total_pages(self):
        """Should calculate total pages correctly."""
        result = paginate(total=100, page=1, page_size=10)

        assert result["total"] == 100
        assert result["page"] == 1
        assert result["page_size"] == 10
        assert result["total_pages"] == 10

    def test_rounds_up_total_pages(self):
        """Should round up total pages when not evenly divisible."""
        result = paginate(total=25, page=1, page_size=10)

        assert result["total_pages"] == 3

    def test_handles_zero_total(self):
        """Should return 0 pages when total is 0."""
        result = paginate(total=0, page=1, page_size=10)

        assert result["total_pages"] == 0
        assert result["start_index"] == 0
        assert result["end_index"] == 0
        assert result["has_next_page"] is False

    def test_navigation_flags(self):
        """Should report next/previous availability."""
        result = paginate(total=30, page=2, page_size=10)

        assert result["has_next_page"] is True
        assert result["has_previous_page"] is True
        assert result["start_index"] == 10
        assert result["end_index"] == 20


class TestComputePageWindow:
    """Tests for the ellipsis-compressed page window."""

    @pytest.mark.parametrize("total_pages", [1, 2, 3, 4, 5])
    def test_small_totals_listed_verbatim(self, total_pages):
        """Should list every page when there are five or fewer."""
        for current in range(1, total_pages + 1):
            assert compute_page_window(current, total_pages) == list(range(1, total_pages + 1))

    def test_no_pages(self):
        """Should be empty when there are no pages."""
        assert compute_page_window(1, 0) == []

    def test_first_page(self):
        assert compute_page_window(1, 20) == [1, 2, 3, 4, ELLIPSIS, 20]

    def test_middle_page(self):
        assert compute_page_window(10, 20) == [1, ELLIPSIS, 9, 10, 11, ELLIPSIS, 20]

    def test_last_page(self):
        assert compute_page_window(20, 20) == [1, ELLIPSIS, 17, 18, 19, 20]

    def test_near_start(self):
        """Should widen the window to page 4 while near the start."""
        assert compute_page_window(3, 20) == [1, 2, 3, 4, ELLIPSIS, 20]
        assert compute_page_window(4, 20) == [1, ELLIPSIS, 3, 4, 5, ELLIPSIS, 20]

    def test_near_end(self):
        """Should widen the window back from the last page while near the end."""
        assert compute_page_window(18, 20) == [1, ELLIPSIS, 17, 18, 19, 20]

    def test_six_pages(self):
        """Should not duplicate pages when the window touches both ends."""
        assert compute_page_window(3, 6) == [1, 2, 3, 4, ELLIPSIS, 6]
        assert compute_page_window(4, 6) == [1, ELLIPSIS, 3, 4, 5, 6]

    def test_out_of_range_current_page_is_clamped(self):
        assert compute_page_window(99, 20) == compute_page_window(20, 20)
        assert compute_page_window(0, 20) == compute_page_window(1, 20)

    @pytest.mark.parametrize("total_pages", [6, 7, 10, 20, 1000])
    def test_window_shape(self, total_pages):
        """No adjacent ellipses, no duplicate pages, at most seven labels, always includes the current page."""
        for current in range(1, total_pages + 1):
            labels = compute_page_window(current, total_pages)
            numbers = [label for label in labels if label != ELLIPSIS]

            assert len(labels) <= 7
            assert labels[0] == 1
            assert labels[-1] == total_pages
            assert current in numbers
            assert numbers == sorted(set(numbers))
            assert all(
                not (a == ELLIPSIS and b == ELLIPSIS) for a, b in zip(labels, labels[1:])
            )
