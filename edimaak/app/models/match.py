"""
Match database model.

A proposed pairing between one trip and one shipment request.
"""

import uuid
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Enum, Text, Index, text
from sqlalchemy.sql import func
from edimaak.app.db.session import Base
from edimaak.app.models.enums import MatchStatus

ACTIVE_STATUS_CLAUSE = "status IN ('pending', 'accepted')"


class Match(Base):
    """
    Match model.
    
    Created by the party proposing it (``proposed_by``), accepted or rejected
    by the counterparty, completed once both delivery confirmations are in.
    At most one pending or accepted match may exist per pair.
    """
    __tablename__ = "matches"
    
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    
    # Pair
    trip_id = Column(String(36), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    shipment_request_id = Column(
        String(36), ForeignKey("shipment_requests.id", ondelete="CASCADE"), nullable=False, index=True
    )
    proposed_by = Column(String(64), nullable=False)
    
    # Status
    status = Column(
        Enum(MatchStatus, name="match_status", values_callable=lambda e: [m.value for m in e]),
        default=MatchStatus.PENDING, nullable=False, index=True
    )
    notes = Column(Text, nullable=True)
    
    # Delivery confirmations
    traveler_picked_up = Column(Boolean, default=False, nullable=False)
    sender_handed_over = Column(Boolean, default=False, nullable=False)
    traveler_delivered = Column(Boolean, default=False, nullable=False)
    sender_received = Column(Boolean, default=False, nullable=False)
    
    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    
    # One active match per (trip, shipment request)
    __table_args__ = (
        Index(
            "uq_matches_active_pair", "trip_id", "shipment_request_id", unique=True,
            postgresql_where=text(ACTIVE_STATUS_CLAUSE),
            sqlite_where=text(ACTIVE_STATUS_CLAUSE),
        ),
    )
    
    def __repr__(self):
        return f"<Match(id={self.id}, trip_id={self.trip_id}, request_id={self.shipment_request_id}, status='{self.status.value}')>"
