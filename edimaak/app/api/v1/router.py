"""
API v1 Router.

Aggregates all v1 API endpoints.
"""

from fastapi import APIRouter
from edimaak.app.api.v1.endpoints import (
    matching, trips, shipment_requests, matches, notifications
)

router = APIRouter()

# Stateless classification
router.include_router(matching.router)

# Listings
router.include_router(trips.router)
router.include_router(shipment_requests.router)

# Match lifecycle
router.include_router(matches.router)
router.include_router(notifications.router)
