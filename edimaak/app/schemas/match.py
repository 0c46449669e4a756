"""
Match schemas.

Schemas for proposing matches, changing their status and listing
compatible candidates.
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from edimaak.app.models.enums import MatchStatus, DeliveryStep
from edimaak.app.domain.matching.classifier import MatchClassification
from edimaak.app.schemas.trip import TripResponse
from edimaak.app.schemas.shipment_request import ShipmentRequestResponse
from edimaak.app.schemas.classification import Badge


class MatchPropose(BaseModel):
    """Schema for proposing a match."""
    trip_id: str
    shipment_request_id: str


class MatchStatusUpdate(BaseModel):
    """Schema for accepting, rejecting or completing a match."""
    status: MatchStatus = Field(..., description="accepted, rejected or completed")


class DeliveryConfirmation(BaseModel):
    """Schema for a delivery confirmation step."""
    step: DeliveryStep


class MatchResponse(BaseModel):
    """Schema for match response."""
    id: str
    trip_id: str
    shipment_request_id: str
    proposed_by: str
    status: MatchStatus
    notes: Optional[str]
    traveler_picked_up: bool
    sender_handed_over: bool
    traveler_delivered: bool
    sender_received: bool
    created_at: datetime
    updated_at: datetime
    completed_at: Optional[datetime]
    
    class Config:
        from_attributes = True


class MatchListResponse(BaseModel):
    """Schema for match list."""
    matches: List[MatchResponse]
    total: int


class CompatibleShipment(BaseModel):
    """A shipment request surfaced to a traveler for one of their trips."""
    shipment_request: ShipmentRequestResponse
    classification: MatchClassification
    badges: List[Badge]


class CompatibleShipmentListResponse(BaseModel):
    trip_id: str
    results: List[CompatibleShipment]
    total: int


class CompatibleTrip(BaseModel):
    """A trip surfaced to a sender, with the request it fits best."""
    trip: TripResponse
    shipment_request_id: str
    classification: MatchClassification
    badges: List[Badge]


class CompatibleTripListResponse(BaseModel):
    results: List[CompatibleTrip]
    total: int
