"""
Matching API Endpoints.

Stateless classification of a trip against a shipment request, as used by
the match badge in listing pages.
"""

from fastapi import APIRouter, Query

from edimaak.app.domain.matching.classifier import classify
from edimaak.app.schemas.classification import ClassifyRequest, ClassifyResponse
from edimaak.app.services.match_badges import badges_for

router = APIRouter(prefix="/matching", tags=["Matching"])


@router.post("/classify", response_model=ClassifyResponse)
async def classify_pair(
    payload: ClassifyRequest,
    tolerance_days: int = Query(None, ge=0, le=30, description="Override the flexible date tolerance")
):
    """
    Classify a trip/shipment request pair.

    Malformed dates are rejected with ``ERR_PARSE_001``.
    """
    classification = classify(
        payload.trip.model_dump(),
        payload.shipment_request.model_dump(),
        tolerance_days=tolerance_days,
    )
    return ClassifyResponse(classification=classification, badges=badges_for(classification))
