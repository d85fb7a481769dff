"""
==============================================================================
Main API Router
==============================================================================

Combines all routes under the /api prefix:

    /api/Product/...
    /api/Catalog/...
    /api/health

==============================================================================
"""

from fastapi import APIRouter

from app.api.v1 import health, products, catalogs


class MainAPIRouter:
    """
    Main API router combining all routes.

    Provides a single entry point for all API endpoints.
    """

    def __init__(self):
        """Initialize the main router with all sub-routers."""
        self._router = APIRouter(prefix="/api")
        self._include_routers()

    def _include_routers(self) -> None:
        """Include all routers."""
        self._router.include_router(health.router)
        self._router.include_router(products.router)
        self._router.include_router(catalogs.router)

    @property
    def router(self):
        """Get the FastAPI router instance."""
        return self._router


api_router = MainAPIRouter().router
