"""
Match Persistence Gateway.

Reads candidate trips and shipment requests, records match proposals and
moves matches through their lifecycle:

    pending -> accepted | rejected, accepted -> completed

Reads are idempotent and retried on transient database errors. Status
writes are compare-and-swap on the status read beforehand and are never
retried automatically.
"""

import logging
from datetime import date, datetime, timezone
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import select, update, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from edimaak.app.core.config import settings
from edimaak.app.core.exceptions import (
    ResourceNotFoundError,
    UnauthorizedError,
    DuplicateMatchError,
    InvalidTransitionError,
    ConcurrentModificationError,
    IncompatibleMatchError,
    InvalidListingError,
)
from edimaak.app.core.reliability import idempotent_read
from edimaak.app.domain.matching.classifier import classify
from edimaak.app.models.enums import (
    TripStatus, ShipmentStatus, MatchStatus, DeliveryStep,
    ACTIVE_MATCH_STATUSES, ALLOWED_MATCH_TRANSITIONS,
)
from edimaak.app.models.match import Match
from edimaak.app.models.shipment_request import ShipmentRequest
from edimaak.app.models.trip import Trip
from edimaak.app.schemas.shipment_request import ShipmentRequestCreate
from edimaak.app.schemas.trip import TripCreate
from edimaak.app.services.notification_service import NotificationService

logger = logging.getLogger("edimaak.gateway")


class MatchGateway:

    # Reads

    @staticmethod
    @idempotent_read
    async def list_open_shipment_requests(
        db: AsyncSession,
        exclude_user_id: Optional[str] = None,
        not_expired_as_of: Optional[date] = None,
        limit: Optional[int] = None
    ) -> List[ShipmentRequest]:
        """
        Open shipment requests, newest first.

        Requests owned by ``exclude_user_id`` are left out, as are requests
        whose ``latest_date`` is before ``not_expired_as_of``. Requests with
        no ``latest_date`` never expire.
        """
        query = select(ShipmentRequest).where(ShipmentRequest.status == ShipmentStatus.OPEN)
        if exclude_user_id:
            query = query.where(ShipmentRequest.sender_id != exclude_user_id)
        if not_expired_as_of:
            query = query.where(or_(
                ShipmentRequest.latest_date.is_(None),
                ShipmentRequest.latest_date >= not_expired_as_of
            ))
        query = query.order_by(
            ShipmentRequest.created_at.desc(), ShipmentRequest.id
        ).limit(limit or settings.candidate_query_limit)

        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    @idempotent_read
    async def list_open_trips(
        db: AsyncSession,
        exclude_user_id: Optional[str] = None,
        departing_on_or_after: Optional[date] = None,
        limit: Optional[int] = None
    ) -> List[Trip]:
        """Open trips not owned by ``exclude_user_id``, soonest departure first."""
        query = select(Trip).where(Trip.status == TripStatus.OPEN)
        if exclude_user_id:
            query = query.where(Trip.traveler_id != exclude_user_id)
        if departing_on_or_after:
            query = query.where(Trip.departure_date >= departing_on_or_after)
        query = query.order_by(Trip.departure_date, Trip.id).limit(limit or settings.candidate_query_limit)

        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    @idempotent_read
    async def list_trips_for_traveler(db: AsyncSession, traveler_id: str) -> List[Trip]:
        result = await db.execute(
            select(Trip).where(Trip.traveler_id == traveler_id).order_by(Trip.departure_date.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    @idempotent_read
    async def list_shipment_requests_for_sender(
        db: AsyncSession,
        sender_id: str,
        open_only: bool = False,
        not_expired_as_of: Optional[date] = None
    ) -> List[ShipmentRequest]:
        query = select(ShipmentRequest).where(ShipmentRequest.sender_id == sender_id)
        if open_only:
            query = query.where(ShipmentRequest.status == ShipmentStatus.OPEN)
        if not_expired_as_of:
            query = query.where(or_(
                ShipmentRequest.latest_date.is_(None),
                ShipmentRequest.latest_date >= not_expired_as_of
            ))
        result = await db.execute(query.order_by(ShipmentRequest.created_at.desc(), ShipmentRequest.id))
        return list(result.scalars().all())

    @staticmethod
    @idempotent_read
    async def list_matches_for_user(
        db: AsyncSession,
        user_id: str,
        statuses: Optional[Iterable[MatchStatus]] = None
    ) -> List[Match]:
        """Matches where the user is the traveler or the sender."""
        query = (
            select(Match)
            .join(Trip, Match.trip_id == Trip.id)
            .join(ShipmentRequest, Match.shipment_request_id == ShipmentRequest.id)
            .where(or_(Trip.traveler_id == user_id, ShipmentRequest.sender_id == user_id))
        )
        if statuses:
            query = query.where(Match.status.in_(list(statuses)))
        result = await db.execute(query.order_by(Match.created_at.desc(), Match.id))
        return list(result.scalars().all())

    @staticmethod
    @idempotent_read
    async def get_trip(db: AsyncSession, trip_id: str) -> Trip:
        trip = await db.get(Trip, trip_id)
        if not trip:
            raise ResourceNotFoundError("Trip", trip_id)
        return trip

    @staticmethod
    @idempotent_read
    async def get_shipment_request(db: AsyncSession, shipment_request_id: str) -> ShipmentRequest:
        shipment_request = await db.get(ShipmentRequest, shipment_request_id)
        if not shipment_request:
            raise ResourceNotFoundError("Shipment request", shipment_request_id)
        return shipment_request

    @staticmethod
    @idempotent_read
    async def get_match(db: AsyncSession, match_id: str) -> Match:
        match = await db.get(Match, match_id)
        if not match:
            raise ResourceNotFoundError("Match", match_id)
        return match

    # Listing writes

    @staticmethod
    async def create_trip(db: AsyncSession, traveler_id: str, data: TripCreate) -> Trip:
        trip = Trip(traveler_id=traveler_id, status=TripStatus.OPEN, **data.model_dump())
        db.add(trip)
        await db.commit()
        await db.refresh(trip)
        logger.info("Trip %s created by %s", trip.id, traveler_id)
        return trip

    @staticmethod
    async def create_shipment_request(
        db: AsyncSession, sender_id: str, data: ShipmentRequestCreate
    ) -> ShipmentRequest:
        shipment_request = ShipmentRequest(
            sender_id=sender_id, status=ShipmentStatus.OPEN, view_count=0, **data.model_dump()
        )
        db.add(shipment_request)
        await db.commit()
        await db.refresh(shipment_request)
        logger.info("Shipment request %s created by %s", shipment_request.id, sender_id)
        return shipment_request

    @staticmethod
    async def close_trip(db: AsyncSession, trip_id: str, acting_user_id: str) -> Trip:
        """Withdraw a trip from matching. Only its traveler may do this."""
        trip = await MatchGateway.get_trip(db, trip_id)
        if trip.traveler_id != acting_user_id:
            raise UnauthorizedError("Only the traveler can close this trip", {"trip_id": trip_id})
        if trip.status != TripStatus.CLOSED:
            trip.status = TripStatus.CLOSED
            await db.commit()
            await db.refresh(trip)
            logger.info("Trip %s closed", trip_id)
        return trip

    # Matches

    @staticmethod
    async def propose_match(
        db: AsyncSession,
        trip_id: str,
        shipment_request_id: str,
        proposed_by: str,
        require_compatible: bool = True,
        today: Optional[date] = None
    ) -> Match:
        """
        Record a pending match between a trip and a shipment request.

        Raises:
            ResourceNotFoundError: unknown trip or request
            UnauthorizedError: proposer is neither the traveler nor the sender
            InvalidListingError: own request, closed listing or expired request
            IncompatibleMatchError: the classifier rejects the pair
            DuplicateMatchError: a pending or accepted match exists for the pair
        """
        trip = await MatchGateway.get_trip(db, trip_id)
        shipment_request = await MatchGateway.get_shipment_request(db, shipment_request_id)
        details = {"trip_id": trip_id, "shipment_request_id": shipment_request_id}

        if proposed_by not in (trip.traveler_id, shipment_request.sender_id):
            raise UnauthorizedError("Only the traveler or the sender can propose this match", details)
        if trip.traveler_id == shipment_request.sender_id:
            raise InvalidListingError("A traveler cannot carry their own shipment request", details)
        if trip.status != TripStatus.OPEN:
            raise InvalidListingError("Trip is no longer open", details)
        if shipment_request.status != ShipmentStatus.OPEN:
            raise InvalidListingError("Shipment request is no longer open", details)
        today = today or date.today()
        if shipment_request.latest_date and shipment_request.latest_date < today:
            raise InvalidListingError("Shipment request has expired", details)

        if require_compatible and not classify(trip, shipment_request).is_compatible:
            raise IncompatibleMatchError(trip_id, shipment_request_id)

        existing = await db.execute(
            select(Match.id).where(
                Match.trip_id == trip_id,
                Match.shipment_request_id == shipment_request_id,
                Match.status.in_(ACTIVE_MATCH_STATUSES)
            )
        )
        if existing.first() is not None:
            raise DuplicateMatchError(trip_id, shipment_request_id)

        match = Match(
            trip_id=trip_id,
            shipment_request_id=shipment_request_id,
            proposed_by=proposed_by,
            status=MatchStatus.PENDING
        )
        db.add(match)
        try:
            await db.flush()  # Unique index catches a concurrent proposal
        except IntegrityError:
            await db.rollback()
            raise DuplicateMatchError(trip_id, shipment_request_id)

        await NotificationService.notify_match_proposed(db, match, trip, shipment_request)
        await db.commit()
        await db.refresh(match)

        logger.info("Match %s proposed by %s (trip %s, request %s)", match.id, proposed_by, trip_id, shipment_request_id)
        return match

    @staticmethod
    async def _compare_and_set(
        db: AsyncSession, match_id: str, expected: MatchStatus, **values
    ) -> None:
        """Write ``values`` only if the stored status is still ``expected``."""
        result = await db.execute(
            update(Match)
            .where(Match.id == match_id, Match.status == expected)
            .values(updated_at=datetime.now(timezone.utc), **values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            await db.rollback()
            logger.warning("Match %s changed concurrently (expected %s)", match_id, expected.value)
            raise ConcurrentModificationError(match_id, expected.value)

    @staticmethod
    async def _load_parties(db: AsyncSession, match: Match) -> Tuple[Trip, ShipmentRequest]:
        trip = await MatchGateway.get_trip(db, match.trip_id)
        shipment_request = await MatchGateway.get_shipment_request(db, match.shipment_request_id)
        return trip, shipment_request

    @staticmethod
    def _require_open_request(shipment_request: ShipmentRequest, match_id: str) -> None:
        if shipment_request.status != ShipmentStatus.OPEN:
            raise InvalidListingError(
                "Shipment request is no longer open",
                {"match_id": match_id, "shipment_request_id": shipment_request.id}
            )

    @staticmethod
    async def _complete_if_delivered(db: AsyncSession, match_id: str) -> bool:
        """
        Move an accepted match to completed once both delivery flags are
        stored. Evaluated on the stored row, so the last of two concurrent
        confirmations completes the match.
        """
        result = await db.execute(
            update(Match)
            .where(
                Match.id == match_id,
                Match.status == MatchStatus.ACCEPTED,
                Match.traveler_delivered.is_(True),
                Match.sender_received.is_(True)
            )
            .values(
                status=MatchStatus.COMPLETED,
                completed_at=datetime.now(timezone.utc),
                updated_at=datetime.now(timezone.utc)
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @staticmethod
    async def _finish_completion(db: AsyncSession, match: Match, trip: Trip, shipment_request: ShipmentRequest) -> None:
        """
        Close the shipment request and withdraw its other pending proposals.

        Raises:
            InvalidListingError: the request was completed through another match
        """
        result = await db.execute(
            update(ShipmentRequest)
            .where(ShipmentRequest.id == shipment_request.id, ShipmentRequest.status == ShipmentStatus.OPEN)
            .values(status=ShipmentStatus.COMPLETED)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            await db.rollback()
            raise InvalidListingError(
                "Shipment request was already completed",
                {"match_id": match.id, "shipment_request_id": shipment_request.id}
            )

        await db.execute(
            update(Match)
            .where(
                Match.shipment_request_id == shipment_request.id,
                Match.id != match.id,
                Match.status == MatchStatus.PENDING
            )
            .values(status=MatchStatus.REJECTED, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        await db.refresh(shipment_request)
        await NotificationService.notify_match_completed(db, match, trip, shipment_request)

    @staticmethod
    async def update_match_status(
        db: AsyncSession,
        match_id: str,
        new_status: MatchStatus,
        acting_user_id: str
    ) -> Match:
        """
        Accept, reject or complete a match.

        Accept/reject is reserved to the counterparty of the proposer;
        either party may complete. Accepting or completing needs the
        shipment request to still be open.

        Raises:
            UnauthorizedError: acting user is not allowed to make this change
            InvalidTransitionError: transition not in the lifecycle
            InvalidListingError: the shipment request is already completed
            ConcurrentModificationError: status changed since it was read
        """
        match = await MatchGateway.get_match(db, match_id)
        trip, shipment_request = await MatchGateway._load_parties(db, match)
        current = match.status

        try:
            new_status = MatchStatus(new_status)
        except ValueError:
            raise InvalidTransitionError(current.value, str(new_status))

        if acting_user_id not in (trip.traveler_id, shipment_request.sender_id):
            raise UnauthorizedError("You are not a party to this match", {"match_id": match_id})
        if new_status not in ALLOWED_MATCH_TRANSITIONS[current]:
            raise InvalidTransitionError(current.value, new_status.value)
        if new_status in (MatchStatus.ACCEPTED, MatchStatus.REJECTED) and acting_user_id == match.proposed_by:
            raise UnauthorizedError("Only the other party can answer this proposal", {"match_id": match_id})
        if new_status in (MatchStatus.ACCEPTED, MatchStatus.COMPLETED):
            MatchGateway._require_open_request(shipment_request, match_id)

        values = {"status": new_status}
        if new_status == MatchStatus.COMPLETED:
            values["completed_at"] = datetime.now(timezone.utc)
        await MatchGateway._compare_and_set(db, match_id, current, **values)
        await db.refresh(match)

        if new_status == MatchStatus.COMPLETED:
            await MatchGateway._finish_completion(db, match, trip, shipment_request)
        else:
            await NotificationService.notify_match_decided(db, match, shipment_request)

        await db.commit()
        await db.refresh(match)
        logger.info("Match %s: %s -> %s by %s", match_id, current.value, new_status.value, acting_user_id)
        return match

    @staticmethod
    async def confirm_delivery_step(
        db: AsyncSession,
        match_id: str,
        step: DeliveryStep,
        acting_user_id: str
    ) -> Match:
        """
        Record a pickup/hand-over/delivery/receipt confirmation.

        Traveler steps belong to the traveler, sender steps to the sender.
        Once delivery and receipt are both stored the match is completed.

        Raises:
            UnauthorizedError: the step belongs to the other party
            InvalidTransitionError: the match is not accepted
            InvalidListingError: the shipment request is already completed
            ConcurrentModificationError: status changed since it was read
        """
        step = DeliveryStep(step)
        match = await MatchGateway.get_match(db, match_id)
        trip, shipment_request = await MatchGateway._load_parties(db, match)

        owner = trip.traveler_id if step.is_traveler_step else shipment_request.sender_id
        if acting_user_id != owner:
            raise UnauthorizedError(f"Only the {'traveler' if step.is_traveler_step else 'sender'} can confirm {step.value}",
                                    {"match_id": match_id})
        if match.status != MatchStatus.ACCEPTED:
            raise InvalidTransitionError(match.status.value, step.value)
        MatchGateway._require_open_request(shipment_request, match_id)

        await MatchGateway._compare_and_set(db, match_id, MatchStatus.ACCEPTED, **{step.value: True})
        completed = await MatchGateway._complete_if_delivered(db, match_id)
        await db.refresh(match)
        if completed:
            await MatchGateway._finish_completion(db, match, trip, shipment_request)

        await db.commit()
        await db.refresh(match)
        logger.info("Match %s: %s confirmed by %s", match_id, step.value, acting_user_id)
        return match
