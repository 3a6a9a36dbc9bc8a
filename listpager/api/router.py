"""Main API router that combines all endpoint routers."""

from fastapi import APIRouter

from listpager.api import collections

api_router = APIRouter()

api_router.include_router(collections.router, prefix="/collections", tags=["collections"])
