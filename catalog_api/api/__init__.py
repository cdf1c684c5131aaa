"""API layer module.

Contains FastAPI routers and request/response schemas.
"""

from catalog_api.api.categories import router as categories_router
from catalog_api.api.collections import router as collections_router
from catalog_api.api.health import router as health_router
from catalog_api.api.products import router as products_router
from catalog_api.api.shops import router as shops_router

__all__ = [
    "categories_router",
    "collections_router",
    "health_router",
    "products_router",
    "shops_router",
]
