"""
Classification schemas.

Plain route records with ISO-8601 date strings, as sent by the UI, and the
classification returned for them.
"""

from pydantic import BaseModel, Field
from typing import List, Optional

from edimaak.app.domain.matching.classifier import MatchClassification


class TripRecord(BaseModel):
    """Trip side of a classification request."""
    from_city: str
    to_city: str
    departure_date: str = Field(..., description="YYYY-MM-DD")
    from_country: Optional[str] = None
    to_country: Optional[str] = None


class ShipmentRecord(BaseModel):
    """Shipment request side of a classification request."""
    from_city: str
    to_city: str
    earliest_date: Optional[str] = Field(default=None, description="YYYY-MM-DD, null for no bound")
    latest_date: Optional[str] = Field(default=None, description="YYYY-MM-DD, null for no bound")
    from_country: Optional[str] = None
    to_country: Optional[str] = None


class ClassifyRequest(BaseModel):
    trip: TripRecord
    shipment_request: ShipmentRecord


class Badge(BaseModel):
    """One label rendered by the match badge."""
    kind: str
    tone: str
    label: str


class ClassifyResponse(BaseModel):
    classification: MatchClassification
    badges: List[Badge]
