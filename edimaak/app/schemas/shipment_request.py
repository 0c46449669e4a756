"""
Shipment request schemas.
"""

from pydantic import BaseModel, Field, model_validator
from typing import List, Optional
from datetime import date, datetime

from edimaak.app.models.enums import ShipmentStatus


class ShipmentRequestCreate(BaseModel):
    """Schema for creating a shipment request."""
    from_country: Optional[str] = Field(default=None, max_length=100)
    from_city: str = Field(..., min_length=1, max_length=120)
    to_country: Optional[str] = Field(default=None, max_length=100)
    to_city: str = Field(..., min_length=1, max_length=120)
    earliest_date: Optional[date] = None
    latest_date: Optional[date] = None
    item_type: str = Field(..., min_length=1, max_length=100)
    item_type_other: Optional[str] = Field(default=None, max_length=255)
    weight_kg: float = Field(..., gt=0)
    notes: Optional[str] = Field(default=None, max_length=2000)
    image_url: Optional[str] = Field(default=None, max_length=1024)
    price: Optional[float] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def check_window(self):
        if self.earliest_date and self.latest_date and self.earliest_date > self.latest_date:
            raise ValueError("earliest_date must not be after latest_date")
        return self


class ShipmentRequestResponse(BaseModel):
    """Schema for shipment request response."""
    id: str
    sender_id: str
    from_country: Optional[str]
    from_city: str
    to_country: Optional[str]
    to_city: str
    earliest_date: Optional[date]
    latest_date: Optional[date]
    item_type: str
    item_type_other: Optional[str]
    weight_kg: float
    notes: Optional[str]
    image_url: Optional[str]
    price: Optional[float]
    view_count: int
    status: ShipmentStatus
    created_at: datetime
    
    class Config:
        from_attributes = True


class ShipmentRequestListResponse(BaseModel):
    """Schema for shipment request list."""
    shipment_requests: List[ShipmentRequestResponse]
    total: int
