"""
Trip schemas.

Schemas for trip creation and listing.
"""

from pydantic import BaseModel, Field, model_validator
from typing import List, Optional
from datetime import date, datetime

from edimaak.app.models.enums import TripStatus


class TripCreate(BaseModel):
    """Schema for creating a trip."""
    from_country: Optional[str] = Field(default=None, max_length=100)
    from_city: str = Field(..., min_length=1, max_length=120)
    to_country: Optional[str] = Field(default=None, max_length=100)
    to_city: str = Field(..., min_length=1, max_length=120)
    departure_date: date
    arrival_date: Optional[date] = None
    max_weight_kg: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = Field(default=None, max_length=2000)

    @model_validator(mode="after")
    def check_arrival(self):
        if self.arrival_date and self.arrival_date < self.departure_date:
            raise ValueError("arrival_date must not be before departure_date")
        return self


class TripResponse(BaseModel):
    """Schema for trip response."""
    id: str
    traveler_id: str
    from_country: Optional[str]
    from_city: str
    to_country: Optional[str]
    to_city: str
    departure_date: date
    arrival_date: Optional[date]
    max_weight_kg: Optional[float]
    notes: Optional[str]
    status: TripStatus
    created_at: datetime
    
    class Config:
        from_attributes = True


class TripListResponse(BaseModel):
    """Schema for trip list."""
    trips: List[TripResponse]
    total: int
