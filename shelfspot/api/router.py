"""
==============================================================================
Main API Router
==============================================================================

Combines all endpoint routers under the /api prefix. Any other /api path
answers 404 "API endpoint not found: <METHOD> <path>".

==============================================================================
"""

from fastapi import APIRouter, Request

from shelfspot.api.endpoints import health, products, search
from shelfspot.core import exceptions


class MainAPIRouter:
    """
    Main API router combining all endpoint routers.

    Provides a single entry point for all API endpoints.
    """

    def __init__(self):
        """Initialize the main router with all sub-routers."""
        self._router = APIRouter(prefix="/api")
        self._include_routers()
        self._register_fallback()

    def _include_routers(self) -> None:
        """Include all endpoint routers."""
        self._router.include_router(health.router)
        self._router.include_router(products.router)
        self._router.include_router(search.router)

    def _register_fallback(self) -> None:
        """Catch-all for unknown paths and methods; must be registered last."""

        @self._router.api_route(
            "/{path:path}",
            methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
            include_in_schema=False,
        )
        async def unknown_endpoint(request: Request, path: str):
            raise exceptions.endpoint_not_found(request.method, request.url.path)

    @property
    def router(self):
        """Get the FastAPI router instance."""
        return self._router


# Create main API router instance
api_router = MainAPIRouter().router
