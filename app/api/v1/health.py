"""
==============================================================================
Health Check Endpoints
==============================================================================

System health status endpoints for monitoring and orchestration.

==============================================================================
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text

from app.db.database import get_db
from app.db.models import Catalog, Product


router = APIRouter(prefix="/health", tags=["Health"])


class HealthController:
    """Controller for health check operations."""

    def __init__(self, db: Session):
        self._db = db

    def check_store(self) -> str:
        """Check store connectivity."""
        try:
            self._db.execute(text("SELECT 1"))
            return "healthy"
        except Exception:
            return "unhealthy"

    def count_documents(self) -> dict:
        """Count documents per collection."""
        return {
            Product.__tablename__: self._db.query(Product).count(),
            Catalog.__tablename__: self._db.query(Catalog).count(),
        }

    def get_health(self) -> dict:
        """Get full health status."""
        store_status = self.check_store()

        result = {
            "status": "healthy" if store_status == "healthy" else "degraded",
            "components": {
                "api": "healthy",
                "store": store_status,
            },
        }

        if store_status == "healthy":
            result["details"] = {"documents": self.count_documents()}

        return result


@router.get("")
def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint.

    Returns API and store status with per-collection document counts.
    """
    controller = HealthController(db)
    return controller.get_health()


@router.get("/ready")
async def readiness_check():
    """Readiness probe for container orchestration."""
    return {"ready": True}


@router.get("/live")
async def liveness_check():
    """Liveness probe for container orchestration."""
    return {"alive": True}
