"""Filter Routes - pending filter edits and their apply/discard.

Invariants:
    - Item and select-all edits touch pending only
    - apply/discard act on one catalog type when ?catalog_type= is given, else on all
"""

from fastapi import APIRouter, Depends, Query

from splaroulette.api.dependencies import get_controller
from splaroulette.core.domain_types import CatalogType
from splaroulette.schemas.intents import InclusionUpdate
from splaroulette.schemas.state import StateView
from splaroulette.services.roulette_controller import RouletteController

router = APIRouter(prefix="/api/v1/filters", tags=["filters"])


@router.put("/{catalog_type}/items/{key}", response_model=StateView)
async def toggle_filter_item(
    catalog_type: CatalogType,
    key: str,
    body: InclusionUpdate,
    controller: RouletteController = Depends(get_controller),
):
    return controller.toggle_filter_item(catalog_type, key, body.included)


@router.put("/{catalog_type}/all", response_model=StateView)
async def select_all(
    catalog_type: CatalogType,
    body: InclusionUpdate,
    controller: RouletteController = Depends(get_controller),
):
    return controller.select_all(catalog_type, body.included)


@router.post("/apply", response_model=StateView)
async def apply_filters(
    catalog_type: CatalogType | None = Query(None),
    controller: RouletteController = Depends(get_controller),
):
    return controller.apply_filters(catalog_type)


@router.post("/discard", response_model=StateView)
async def discard_filters(
    catalog_type: CatalogType | None = Query(None),
    controller: RouletteController = Depends(get_controller),
):
    return controller.discard_filters(catalog_type)
