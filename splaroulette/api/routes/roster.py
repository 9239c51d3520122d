"""Roster Routes - pending member edits, confirm/discard, and team reshuffle."""

from fastapi import APIRouter, Depends

from splaroulette.api.dependencies import get_controller
from splaroulette.schemas.intents import (
    MemberCountUpdate, MemberNameUpdate, TeamDivisionUpdate,
)
from splaroulette.schemas.state import StateView
from splaroulette.services.roulette_controller import RouletteController

router = APIRouter(prefix="/api/v1/roster", tags=["roster"])


@router.put("/count", response_model=StateView)
async def set_member_count(
    body: MemberCountUpdate, controller: RouletteController = Depends(get_controller),
):
    return controller.set_member_count(body.count)


@router.put("/names/{index}", response_model=StateView)
async def set_member_name(
    index: int,
    body: MemberNameUpdate,
    controller: RouletteController = Depends(get_controller),
):
    return controller.set_member_name(index, body.name)


@router.put("/team-division", response_model=StateView)
async def set_team_division(
    body: TeamDivisionUpdate, controller: RouletteController = Depends(get_controller),
):
    return controller.set_team_division(body.enabled)


@router.post("/confirm", response_model=StateView)
async def confirm_roster(controller: RouletteController = Depends(get_controller)):
    return controller.confirm_roster()


@router.post("/discard", response_model=StateView)
async def discard_roster(controller: RouletteController = Depends(get_controller)):
    return controller.discard_roster()


@router.post("/teams/shuffle", response_model=StateView)
async def shuffle_teams(controller: RouletteController = Depends(get_controller)):
    """Team division only: reshuffle without touching results."""
    return controller.shuffle_teams()
