"""Preference Routes - collapse state of page sections."""

from fastapi import APIRouter, Depends

from splaroulette.api.dependencies import get_controller
from splaroulette.schemas.intents import FilterSectionUpdate, SectionStatesUpdate
from splaroulette.schemas.state import PreferencesView
from splaroulette.services.roulette_controller import RouletteController

router = APIRouter(prefix="/api/v1/preferences", tags=["preferences"])


@router.get("", response_model=PreferencesView)
async def get_preferences(controller: RouletteController = Depends(get_controller)):
    return controller.preferences()


@router.put("/sections", response_model=PreferencesView)
async def save_section_states(
    body: SectionStatesUpdate, controller: RouletteController = Depends(get_controller),
):
    return controller.save_section_states(body.sections)


@router.put("/filter-section", response_model=PreferencesView)
async def save_filter_section(
    body: FilterSectionUpdate, controller: RouletteController = Depends(get_controller),
):
    return controller.save_filter_section(body.expanded)
