"""
Shipment request database model.

A sender's package waiting for a traveler, with a flexible date window.
"""

import uuid
from sqlalchemy import Column, String, Float, Integer, Date, DateTime, Enum, Text, Index
from sqlalchemy.sql import func
from edimaak.app.db.session import Base
from edimaak.app.models.enums import ShipmentStatus


class ShipmentRequest(Base):
    """
    Shipment request model.
    
    ``earliest_date``/``latest_date`` form an inclusive window. Either bound
    may be null, in which case every trip date is acceptable.
    """
    __tablename__ = "shipment_requests"
    
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    sender_id = Column(String(64), nullable=False, index=True)
    
    # Route
    from_country = Column(String(100), nullable=True)
    from_city = Column(String(120), nullable=False)
    to_country = Column(String(100), nullable=True)
    to_city = Column(String(120), nullable=False)
    
    # Date window
    earliest_date = Column(Date, nullable=True)
    latest_date = Column(Date, nullable=True, index=True)
    
    # Package
    item_type = Column(String(100), nullable=False)
    item_type_other = Column(String(255), nullable=True)
    weight_kg = Column(Float, nullable=False)
    notes = Column(Text, nullable=True)
    image_url = Column(String(1024), nullable=True)
    price = Column(Float, nullable=True)
    view_count = Column(Integer, default=0, nullable=False)
    
    # Status
    status = Column(
        Enum(ShipmentStatus, name="shipment_status", values_callable=lambda e: [m.value for m in e]),
        default=ShipmentStatus.OPEN, nullable=False, index=True
    )
    
    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    
    __table_args__ = (
        Index("ix_shipment_requests_status_latest", "status", "latest_date"),
    )
    
    def __repr__(self):
        return f"<ShipmentRequest(id={self.id}, {self.from_city}->{self.to_city}, status='{self.status.value}')>"
