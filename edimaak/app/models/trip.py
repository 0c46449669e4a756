"""
Trip database model.

A trip is one journey a traveler intends to make, with spare luggage
capacity on a single departure date.
"""

import uuid
from sqlalchemy import Column, String, Float, Date, DateTime, Enum, Text, Index
from sqlalchemy.sql import func
from edimaak.app.db.session import Base
from edimaak.app.models.enums import TripStatus


class Trip(Base):
    """
    Trip model.
    
    ``departure_date`` is an exact calendar date, not a range. It should not
    change once a match has been accepted against the trip.
    """
    __tablename__ = "trips"
    
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    
    # Ownership - user id issued by the auth provider
    traveler_id = Column(String(64), nullable=False, index=True)
    
    # Route
    from_country = Column(String(100), nullable=True)
    from_city = Column(String(120), nullable=False)
    to_country = Column(String(100), nullable=True)
    to_city = Column(String(120), nullable=False)
    
    # Schedule
    departure_date = Column(Date, nullable=False, index=True)
    arrival_date = Column(Date, nullable=True)
    
    # Capacity (null or 0 means no declared limit)
    max_weight_kg = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)
    
    # Status
    status = Column(
        Enum(TripStatus, name="trip_status", values_callable=lambda e: [m.value for m in e]),
        default=TripStatus.OPEN, nullable=False, index=True
    )
    
    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    
    __table_args__ = (
        Index("ix_trips_status_departure", "status", "departure_date"),
    )
    
    def __repr__(self):
        return f"<Trip(id={self.id}, {self.from_city}->{self.to_city}, {self.departure_date}, status='{self.status.value}')>"
