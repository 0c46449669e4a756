"""
Trip API Endpoints.

Travelers publish trips, list them, close them and browse the shipment
requests each trip can carry.
"""

from fastapi import APIRouter, Depends, status, Path
from sqlalchemy.ext.asyncio import AsyncSession

from edimaak.app.db.session import get_db
from edimaak.app.core.dependencies import get_current_user
from edimaak.app.core.exceptions import UnauthorizedError
from edimaak.app.schemas.trip import TripCreate, TripResponse, TripListResponse
from edimaak.app.schemas.match import CompatibleShipment, CompatibleShipmentListResponse
from edimaak.app.services.compatibility import compatible_shipments_for_trip
from edimaak.app.services.match_badges import badges_for
from edimaak.app.services.match_gateway import MatchGateway

router = APIRouter(prefix="/trips", tags=["Trips"])


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Publish a trip for the authenticated traveler."""
    return await MatchGateway.create_trip(db, current_user["user_id"], trip_data)


@router.get("/mine", response_model=TripListResponse)
async def list_my_trips(
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    trips = await MatchGateway.list_trips_for_traveler(db, current_user["user_id"])
    return TripListResponse(trips=trips, total=len(trips))


@router.post("/{trip_id}/close", response_model=TripResponse)
async def close_trip(
    trip_id: str = Path(..., description="Trip ID"),
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Stop a trip from receiving new proposals."""
    return await MatchGateway.close_trip(db, trip_id, current_user["user_id"])


@router.get("/{trip_id}/compatible-shipments", response_model=CompatibleShipmentListResponse)
async def list_compatible_shipments(
    trip_id: str = Path(..., description="Trip ID"),
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Shipment requests this trip can carry, best first.

    Only the trip's traveler may browse them.
    """
    trip = await MatchGateway.get_trip(db, trip_id)
    if trip.traveler_id != current_user["user_id"]:
        raise UnauthorizedError("Only the traveler can browse candidates for this trip", {"trip_id": trip_id})

    ranked = await compatible_shipments_for_trip(db, trip)
    results = [
        CompatibleShipment(
            shipment_request=shipment_request,
            classification=classification,
            badges=badges_for(classification)
        )
        for shipment_request, classification in ranked
    ]
    return CompatibleShipmentListResponse(trip_id=trip_id, results=results, total=len(results))
