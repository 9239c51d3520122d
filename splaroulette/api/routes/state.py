"""State & Catalogs - read the full view and trigger a manual catalog refresh."""

from fastapi import APIRouter, Depends

from splaroulette.api.dependencies import get_controller
from splaroulette.schemas.state import StateView
from splaroulette.services.roulette_controller import RouletteController

router = APIRouter(prefix="/api/v1", tags=["state"])


@router.get("/state", response_model=StateView)
async def get_state(controller: RouletteController = Depends(get_controller)):
    return controller.view()


@router.post("/catalogs/refresh", response_model=StateView)
async def refresh_catalogs(controller: RouletteController = Depends(get_controller)):
    """Clear cached catalogs and selections, then fetch everything again."""
    return await controller.refresh_catalogs()
