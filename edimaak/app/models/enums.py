"""
Status enumerations for trips, shipment requests and matches.
"""

import enum


class TripStatus(str, enum.Enum):
    """Trip status enumeration."""
    OPEN = "open"  # Visible to senders, accepts proposals
    CLOSED = "closed"  # Fully matched or withdrawn by the traveler


class ShipmentStatus(str, enum.Enum):
    """Shipment request status enumeration."""
    OPEN = "open"
    COMPLETED = "completed"  # A match with it was delivered


class MatchStatus(str, enum.Enum):
    """
    Match status enumeration.

    pending -> accepted | rejected, accepted -> completed.
    rejected and completed are terminal.
    """
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    COMPLETED = "completed"


ACTIVE_MATCH_STATUSES = (MatchStatus.PENDING, MatchStatus.ACCEPTED)

ALLOWED_MATCH_TRANSITIONS = {
    MatchStatus.PENDING: {MatchStatus.ACCEPTED, MatchStatus.REJECTED},
    MatchStatus.ACCEPTED: {MatchStatus.COMPLETED},
    MatchStatus.REJECTED: set(),
    MatchStatus.COMPLETED: set(),
}


class DeliveryStep(str, enum.Enum):
    """Delivery confirmations recorded on an accepted match."""
    TRAVELER_PICKED_UP = "traveler_picked_up"
    SENDER_HANDED_OVER = "sender_handed_over"
    TRAVELER_DELIVERED = "traveler_delivered"
    SENDER_RECEIVED = "sender_received"

    @property
    def is_traveler_step(self) -> bool:
        return self.value.startswith("traveler_")
