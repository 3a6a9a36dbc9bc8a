"""Pagination and remote-query engine for paged list views."""
