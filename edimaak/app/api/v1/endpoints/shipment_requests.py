"""
Shipment Request API Endpoints.
"""

from datetime import date

from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.ext.asyncio import AsyncSession

from edimaak.app.db.session import get_db
from edimaak.app.core.dependencies import get_current_user
from edimaak.app.schemas.shipment_request import (
    ShipmentRequestCreate, ShipmentRequestResponse, ShipmentRequestListResponse
)
from edimaak.app.schemas.match import CompatibleTrip, CompatibleTripListResponse
from edimaak.app.services.compatibility import compatible_trips_for_sender
from edimaak.app.services.match_badges import badges_for
from edimaak.app.services.match_gateway import MatchGateway

router = APIRouter(prefix="/shipment-requests", tags=["Shipment Requests"])


@router.post("", response_model=ShipmentRequestResponse, status_code=status.HTTP_201_CREATED)
async def create_shipment_request(
    request_data: ShipmentRequestCreate,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Publish a shipment request for the authenticated sender."""
    return await MatchGateway.create_shipment_request(db, current_user["user_id"], request_data)


@router.get("/mine", response_model=ShipmentRequestListResponse)
async def list_my_shipment_requests(
    open_only: bool = Query(False),
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    requests = await MatchGateway.list_shipment_requests_for_sender(
        db, current_user["user_id"], open_only=open_only
    )
    return ShipmentRequestListResponse(shipment_requests=requests, total=len(requests))


@router.get("/open", response_model=ShipmentRequestListResponse)
async def list_open_shipment_requests(
    limit: int = Query(50, ge=1, le=200),
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Open, unexpired requests from other senders, newest first."""
    requests = await MatchGateway.list_open_shipment_requests(
        db,
        exclude_user_id=current_user["user_id"],
        not_expired_as_of=date.today(),
        limit=limit
    )
    return ShipmentRequestListResponse(shipment_requests=requests, total=len(requests))


@router.get("/compatible-trips", response_model=CompatibleTripListResponse)
async def list_compatible_trips(
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Trips that fit at least one of the sender's open requests, best first."""
    ranked = await compatible_trips_for_sender(db, current_user["user_id"])
    results = [
        CompatibleTrip(
            trip=trip,
            shipment_request_id=shipment_request.id,
            classification=classification,
            badges=badges_for(classification)
        )
        for trip, shipment_request, classification in ranked
    ]
    return CompatibleTripListResponse(results=results, total=len(results))
