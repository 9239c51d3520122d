"""Draw Routes - roulette for one catalog type or all three.

Invariants:
    - /draws/all is registered before /draws/{catalog_type}
    - An empty pool answers 409 EMPTY_POOL and leaves results untouched
"""

from fastapi import APIRouter, Depends

from splaroulette.api.dependencies import get_controller
from splaroulette.core.domain_types import CatalogType
from splaroulette.schemas.state import StateView
from splaroulette.services.roulette_controller import RouletteController

router = APIRouter(prefix="/api/v1/draws", tags=["draws"])


@router.post("/all", response_model=StateView)
async def draw_all(controller: RouletteController = Depends(get_controller)):
    return controller.draw_all()


@router.post("/{catalog_type}", response_model=StateView)
async def draw(
    catalog_type: CatalogType, controller: RouletteController = Depends(get_controller),
):
    return controller.draw(catalog_type)
