"""API route handlers."""

__all__ = ["usage_router", "recommendations_router", "catalog_router"]

from wattwise.api.routers.catalog import router as catalog_router
from wattwise.api.routers.recommendations import router as recommendations_router
from wattwise.api.routers.usage import router as usage_router
