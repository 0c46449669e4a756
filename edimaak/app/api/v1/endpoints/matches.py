"""
Match API Endpoints.

Propose a match, answer it, confirm delivery steps and list the
authenticated user's matches.
"""

from typing import List

from fastapi import APIRouter, Depends, status, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from edimaak.app.db.session import get_db
from edimaak.app.core.dependencies import get_current_user
from edimaak.app.models.enums import MatchStatus
from edimaak.app.schemas.match import (
    MatchPropose, MatchStatusUpdate, DeliveryConfirmation, MatchResponse, MatchListResponse
)
from edimaak.app.services.match_gateway import MatchGateway

router = APIRouter(prefix="/matches", tags=["Matches"])


@router.post("", response_model=MatchResponse, status_code=status.HTTP_201_CREATED)
async def propose_match(
    proposal: MatchPropose,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Propose a match between a trip and a shipment request.

    Either the traveler or the sender may propose. The pair must be
    compatible and must not already have a pending or accepted match.
    """
    return await MatchGateway.propose_match(
        db,
        trip_id=proposal.trip_id,
        shipment_request_id=proposal.shipment_request_id,
        proposed_by=current_user["user_id"]
    )


@router.get("", response_model=MatchListResponse)
async def list_matches(
    status_filter: List[MatchStatus] = Query(None, alias="status"),
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    matches = await MatchGateway.list_matches_for_user(db, current_user["user_id"], statuses=status_filter)
    return MatchListResponse(matches=matches, total=len(matches))


@router.post("/{match_id}/status", response_model=MatchResponse)
async def update_match_status(
    match_id: str = Path(..., description="Match ID"),
    update_data: MatchStatusUpdate = ...,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Accept, reject or complete a match.

    Decisions are final: a rejected or completed match cannot change again.
    """
    return await MatchGateway.update_match_status(db, match_id, update_data.status, current_user["user_id"])


@router.post("/{match_id}/confirmations", response_model=MatchResponse)
async def confirm_delivery_step(
    match_id: str = Path(..., description="Match ID"),
    confirmation: DeliveryConfirmation = ...,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Record a pickup, hand-over, delivery or receipt confirmation."""
    return await MatchGateway.confirm_delivery_step(db, match_id, confirmation.step, current_user["user_id"])
