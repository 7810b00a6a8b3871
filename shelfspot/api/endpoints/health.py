"""
==============================================================================
Health Check Endpoints
==============================================================================

System health status endpoints for monitoring and orchestration.

==============================================================================
"""

from fastapi import APIRouter, Depends

from shelfspot.catalog.store import CatalogStore
from shelfspot.config import get_settings
from shelfspot.core.dependencies import get_catalog_store
from shelfspot.core.exceptions import AppException


router = APIRouter(prefix="/health", tags=["Health"])


class HealthController:
    """Controller for health check operations."""

    def __init__(self, store: CatalogStore):
        self._store = store
        self._settings = get_settings()

    def check_store(self) -> dict:
        """Check the catalog store answers."""
        try:
            return {"status": "healthy", "products": self._store.count()}
        except AppException:
            return {"status": "unhealthy", "products": 0}

    def get_health(self) -> dict:
        """Get full health status."""
        store_info = self.check_store()

        overall = "healthy" if store_info["status"] == "healthy" else "degraded"

        return {
            "status": overall,
            "components": {
                "api": "healthy",
                "store": store_info["status"],
                "smart_search": "enabled" if self._settings.smart_search_enabled else "disabled",
            },
            "details": {
                "backend": self._settings.catalog_backend,
                "products": store_info["products"],
            }
        }


@router.get("")
def health_check(store: CatalogStore = Depends(get_catalog_store)):
    """
    Health check endpoint.

    Returns status of the API, catalog store and smart search.
    """
    return HealthController(store).get_health()


@router.get("/ready")
async def readiness_check():
    """Readiness check for container orchestration."""
    return {"ready": True}


@router.get("/live")
async def liveness_check():
    """Liveness check for container orchestration."""
    return {"alive": True}
