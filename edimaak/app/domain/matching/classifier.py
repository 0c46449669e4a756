"""
Match Classifier.

Decides how well a traveler's trip fits a sender's shipment request:
exactly, flexibly (near dates, same region, or both) or not at all.

Pure function of its two inputs, the tolerance and the region table.
"""

import enum
from typing import Any, Mapping, NamedTuple, Optional

from pydantic import BaseModel, Field

from edimaak.app.core.config import settings
from edimaak.app.domain.matching.dates import date_proximity
from edimaak.app.domain.matching.regions import DEFAULT_REGIONS, Region, RegionTable, normalize_name


class MatchType(str, enum.Enum):
    EXACT = "exact"
    FLEXIBLE_DATE = "flexible_date"
    FLEXIBLE_LOCATION = "flexible_location"
    FLEXIBLE_BOTH = "flexible_both"
    INCOMPATIBLE = "incompatible"


class MatchClassification(BaseModel):
    """
    Classifier output consumed by the badge renderer.

    Serialized with camelCase keys (``matchType``, ``dateDifference``...).
    ``date_difference`` is always set, 0 when the date is in range.
    ``region_name`` is set only for region-level (non-exact) location matches.
    """
    match_type: MatchType = Field(..., alias="matchType")
    is_exact_date: bool = Field(..., alias="isExactDate")
    is_exact_location: bool = Field(..., alias="isExactLocation")
    date_difference: int = Field(..., alias="dateDifference")
    region_name: Optional[str] = Field(default=None, alias="regionName")

    class Config:
        frozen = True
        populate_by_name = True

    @property
    def is_compatible(self) -> bool:
        return self.match_type != MatchType.INCOMPATIBLE

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class _EndMatch(NamedTuple):
    exact: bool
    region: Optional[Region]

    @property
    def matched(self) -> bool:
        return self.exact or self.region is not None


def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _match_end(
    regions: RegionTable,
    trip_city: Optional[str],
    trip_country: Optional[str],
    request_city: Optional[str],
    request_country: Optional[str],
) -> _EndMatch:
    """Compare one end (origin or destination) of the two routes."""
    if not regions.same_country(trip_country, request_country):
        return _EndMatch(False, None)

    trip_key = normalize_name(trip_city)
    if trip_key and trip_key == normalize_name(request_city):
        return _EndMatch(True, None)

    return _EndMatch(False, regions.shared_region(trip_city, request_city, trip_country, request_country))


def classify(
    trip: Any,
    shipment_request: Any,
    *,
    tolerance_days: Optional[int] = None,
    regions: Optional[RegionTable] = None,
) -> MatchClassification:
    """
    Classify a (trip, shipment request) pair.

    Both arguments may be mappings or objects exposing ``from_city``,
    ``to_city`` (and optionally ``from_country``/``to_country``); the trip
    has ``departure_date``, the request ``earliest_date``/``latest_date``.

    Decision table, first row wins:

        exact location,    date in range          -> exact
        exact location,    date off by <= tol     -> flexible_date
        regional location, date in range          -> flexible_location
        regional location, date off by <= tol     -> flexible_both
        anything else                             -> incompatible

    A regional location needs both ends to match, each either by city or
    by region. One matching end is not enough.

    Raises:
        ParseError: on malformed dates; no partial result is returned
    """
    regions = regions or DEFAULT_REGIONS
    tolerance = settings.flexible_date_tolerance_days if tolerance_days is None else tolerance_days

    proximity = date_proximity(
        _field(trip, "departure_date"),
        _field(shipment_request, "earliest_date"),
        _field(shipment_request, "latest_date"),
    )

    origin = _match_end(
        regions,
        _field(trip, "from_city"), _field(trip, "from_country"),
        _field(shipment_request, "from_city"), _field(shipment_request, "from_country"),
    )
    destination = _match_end(
        regions,
        _field(trip, "to_city"), _field(trip, "to_country"),
        _field(shipment_request, "to_city"), _field(shipment_request, "to_country"),
    )

    location_exact = origin.exact and destination.exact
    location_flexible = not location_exact and origin.matched and destination.matched
    date_close = not proximity.within_range and proximity.distance_days <= tolerance

    if location_exact and proximity.within_range:
        match_type = MatchType.EXACT
    elif location_exact and date_close:
        match_type = MatchType.FLEXIBLE_DATE
    elif location_flexible and proximity.within_range:
        match_type = MatchType.FLEXIBLE_LOCATION
    elif location_flexible and date_close:
        match_type = MatchType.FLEXIBLE_BOTH
    else:
        match_type = MatchType.INCOMPATIBLE

    region_name = None
    if location_flexible:
        # Destination region wins when both ends matched by region
        region = destination.region if destination.region is not None else origin.region
        region_name = region.name

    return MatchClassification(
        match_type=match_type,
        is_exact_date=proximity.within_range,
        is_exact_location=location_exact,
        date_difference=proximity.distance_days,
        region_name=region_name,
    )
