"""Health & Readiness Probes - liveness and readiness endpoints.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 until all three catalogs are in memory
    - An unreachable or missing store degrades readiness, never fails it
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from splaroulette.api.dependencies import get_controller
from splaroulette.services.roulette_controller import RouletteController

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "spla-roulette",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(controller: RouletteController = Depends(get_controller)):
    """Readiness probe: catalogs loaded; store state reported alongside."""
    checks = {
        "catalogs": "loaded" if controller.catalogs.is_complete else "missing",
        "store": _store_check(controller),
    }
    if checks["catalogs"] != "loaded":
        logger.warning("Readiness probe failed: catalogs not loaded")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "catalogs_unavailable",
                "message": controller.status_message,
                "checks": checks,
            },
        )
    return {"status": "ready", "checks": checks}


def _store_check(controller: RouletteController) -> str:
    store = controller.store
    if store is None:
        return "disabled"
    probe = getattr(store, "health_check", None)
    if probe is None or probe():
        return "healthy"
    return "degraded"
