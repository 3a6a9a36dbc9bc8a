"""Exception handlers for the FastAPI application."""

import logging
from fastapi import Request
from fastapi.responses import JSONResponse

from listpager.exceptions import ListPagerError

logger = logging.getLogger(__name__)


async def list_pager_exception_handler(request: Request, exc: ListPagerError) -> JSONResponse:
    """Render any ListPagerError as a JSON error body with its status code."""
    logger.warning(f"{exc.error_code} on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error_code": exc.error_code, "details": exc.details},
    )
