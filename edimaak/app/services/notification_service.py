"""
Notification Service.

Handles creation and state management of in-app notifications, including
the ones sent when a match is proposed or answered.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, func
from datetime import datetime, timezone
from typing import List, Optional

from edimaak.app.models.notification import Notification, NotificationType
from edimaak.app.models.match import Match
from edimaak.app.models.enums import MatchStatus
from edimaak.app.models.trip import Trip
from edimaak.app.models.shipment_request import ShipmentRequest


def _route(shipment_request: ShipmentRequest) -> str:
    return f"{shipment_request.from_city} → {shipment_request.to_city}"


class NotificationService:

    @staticmethod
    async def create_notification(
        db: AsyncSession,
        user_id: str,
        title: str,
        message: str,
        type: NotificationType = NotificationType.INFO,
        related_id: Optional[str] = None
    ) -> Notification:
        """Create a single notification."""
        notif = Notification(
            user_id=user_id,
            type=type,
            title=title,
            message=message,
            related_id=related_id
        )
        db.add(notif)
        await db.flush()  # Caller commits
        return notif

    @staticmethod
    async def notify_match_proposed(
        db: AsyncSession, match: Match, trip: Trip, shipment_request: ShipmentRequest
    ) -> Notification:
        """Tell the counterparty of the proposer about a new proposal."""
        recipient = shipment_request.sender_id if match.proposed_by == trip.traveler_id else trip.traveler_id
        return await NotificationService.create_notification(
            db,
            user_id=recipient,
            title="Nouvelle proposition",
            message=f"Nouvelle proposition de match pour {_route(shipment_request)} "
                    f"(départ le {trip.departure_date.isoformat()}).",
            type=NotificationType.MATCH_PROPOSED,
            related_id=match.id
        )

    @staticmethod
    async def notify_match_decided(
        db: AsyncSession, match: Match, shipment_request: ShipmentRequest
    ) -> Notification:
        """Tell the proposer that their proposal was accepted or rejected."""
        accepted = match.status == MatchStatus.ACCEPTED
        return await NotificationService.create_notification(
            db,
            user_id=match.proposed_by,
            title="Proposition acceptée" if accepted else "Proposition refusée",
            message=f"Votre proposition pour {_route(shipment_request)} a été "
                    f"{'acceptée' if accepted else 'refusée'}.",
            type=NotificationType.MATCH_ACCEPTED if accepted else NotificationType.MATCH_REJECTED,
            related_id=match.id
        )

    @staticmethod
    async def notify_match_completed(
        db: AsyncSession, match: Match, trip: Trip, shipment_request: ShipmentRequest
    ) -> List[Notification]:
        """Tell both parties the delivery is done."""
        return [
            await NotificationService.create_notification(
                db,
                user_id=user_id,
                title="Livraison terminée",
                message=f"La livraison {_route(shipment_request)} est terminée.",
                type=NotificationType.MATCH_COMPLETED,
                related_id=match.id
            )
            for user_id in (trip.traveler_id, shipment_request.sender_id)
        ]

    @staticmethod
    async def list_for_user(db: AsyncSession, user_id: str, limit: int = 50) -> List[Notification]:
        result = await db.execute(
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    @staticmethod
    async def unread_count(db: AsyncSession, user_id: str) -> int:
        result = await db.execute(
            select(func.count(Notification.id)).where(
                Notification.user_id == user_id,
                Notification.is_read == False
            )
        )
        return result.scalar()

    @staticmethod
    async def mark_read(db: AsyncSession, notification_id: str, user_id: str) -> bool:
        """Mark a notification as read."""
        stmt = update(Notification).where(
            Notification.id == notification_id,
            Notification.user_id == user_id
        ).values(
            is_read=True,
            read_at=datetime.now(timezone.utc)
        )
        result = await db.execute(stmt)
        return result.rowcount > 0

    @staticmethod
    async def mark_all_read(db: AsyncSession, user_id: str) -> int:
        """Mark all notifications for user as read."""
        stmt = update(Notification).where(
            Notification.user_id == user_id,
            Notification.is_read == False
        ).values(
            is_read=True,
            read_at=datetime.now(timezone.utc)
        )
        result = await db.execute(stmt)
        return result.rowcount
