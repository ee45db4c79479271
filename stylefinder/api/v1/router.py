from __future__ import annotations

from fastapi import APIRouter

from stylefinder.api.v1.endpoints import products

api_router = APIRouter(prefix="/api")
api_router.include_router(products.router, tags=["products"])
