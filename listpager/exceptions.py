"""
Exception classes for the list paging engine.

Every failure a fetch can produce is one of these types. The fetcher converts
them into a typed result instead of letting them escape.
"""

from typing import Any, Optional
from fastapi import status


class ListPagerError(Exception):
    """
    Base exception class for all list paging errors.

    Attributes:
        message (str): Error message
        status_code (int): HTTP status code used by the API layer
        error_code (str): Application-specific error code
        details (dict): Additional error details
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class QueryBuildError(ListPagerError):
    """
    Raised when a filter, order or range cannot be turned into a query.

    This is a configuration bug on the caller's side and is never retried.

    Examples:
        >>> raise QueryBuildError("Unknown column 'colour'", details={"field": "colour"})
    """

    def __init__(self, message: str = "Invalid query specification", details: Optional[dict] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="QUERY_BUILD_ERROR",
            details=details,
        )


class TransportError(ListPagerError):
    """
    Raised when the round trip to the store fails (network, auth, server).

    Recoverable: the caller may offer an explicit retry.
    """

    def __init__(self, message: str = "Remote query failed", details: Optional[dict] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            error_code="TRANSPORT_ERROR",
            details=details,
        )


class StaleResponseDiscarded(ListPagerError):
    """Internal signal: a response arrived for a superseded request."""

    def __init__(self, sequence: int, latest: int):
        super().__init__(
            message=f"Discarded response #{sequence}; latest request is #{latest}",
            error_code="STALE_RESPONSE",
            details={"sequence": sequence, "latest": latest},
        )
