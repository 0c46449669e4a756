"""
Compatibility Service.

Finds the shipment requests a trip can carry, and the trips that can carry
a sender's requests, ranked exact-first then by date difference.
"""

import logging
from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from edimaak.app.core.exceptions import ParseError
from edimaak.app.domain.matching.classifier import MatchClassification, classify
from edimaak.app.domain.matching.ranking import best_match, rank_candidates, rank_key
from edimaak.app.models.shipment_request import ShipmentRequest
from edimaak.app.models.trip import Trip
from edimaak.app.services.match_gateway import MatchGateway

logger = logging.getLogger("edimaak.compatibility")


def fits_weight(trip: Trip, shipment_request: ShipmentRequest) -> bool:
    """A trip with no declared capacity (null or 0) takes anything."""
    if not trip.max_weight_kg or shipment_request.weight_kg is None:
        return True
    return shipment_request.weight_kg <= trip.max_weight_kg


def _classify_or_skip(trip, shipment_request, **classify_kwargs) -> Optional[MatchClassification]:
    try:
        return classify(trip, shipment_request, **classify_kwargs)
    except ParseError as e:
        logger.warning(
            "Skipping trip %s / request %s: %s", trip.id, shipment_request.id, e.message
        )
        return None


async def compatible_shipments_for_trip(
    db: AsyncSession,
    trip: Trip,
    as_of: Optional[date] = None,
    **classify_kwargs
) -> List[Tuple[ShipmentRequest, MatchClassification]]:
    """
    Open, unexpired requests from other senders that this trip can carry.

    Requests heavier than the trip's capacity are left out.
    """
    as_of = as_of or date.today()
    candidates = await MatchGateway.list_open_shipment_requests(
        db, exclude_user_id=trip.traveler_id, not_expired_as_of=as_of
    )

    pairs = []
    for shipment_request in candidates:
        if not fits_weight(trip, shipment_request):
            continue
        classification = _classify_or_skip(trip, shipment_request, **classify_kwargs)
        if classification is not None:
            pairs.append((shipment_request, classification))

    ranked = rank_candidates(pairs)
    logger.info("Trip %s: %d compatible of %d candidates", trip.id, len(ranked), len(candidates))
    return ranked


async def compatible_trips_for_sender(
    db: AsyncSession,
    sender_id: str,
    as_of: Optional[date] = None,
    **classify_kwargs
) -> List[Tuple[Trip, ShipmentRequest, MatchClassification]]:
    """
    Open trips by other travelers that fit at least one of the sender's
    open requests.

    Each trip appears once, with the request it fits best.
    """
    as_of = as_of or date.today()
    requests = await MatchGateway.list_shipment_requests_for_sender(
        db, sender_id, open_only=True, not_expired_as_of=as_of
    )
    if not requests:
        return []

    trips = await MatchGateway.list_open_trips(
        db, exclude_user_id=sender_id, departing_on_or_after=as_of
    )

    results = []
    for trip in trips:
        pairs = []
        for shipment_request in requests:
            if not fits_weight(trip, shipment_request):
                continue
            classification = _classify_or_skip(trip, shipment_request, **classify_kwargs)
            if classification is not None:
                pairs.append((shipment_request, classification))

        best = best_match(pairs)
        if best is not None:
            results.append((trip, best[0], best[1]))

    results.sort(key=lambda r: rank_key(r[2]))
    return results
