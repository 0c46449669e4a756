"""
Match Classifier Tests.

Covers the decision table, the documented scenarios and candidate ranking.
"""

import pytest

from edimaak.app.core.exceptions import ParseError
from edimaak.app.domain.matching.classifier import MatchClassification, MatchType, classify
from edimaak.app.domain.matching.ranking import best_match, rank_candidates
from edimaak.app.domain.matching.regions import RegionTable

# Lyon/Paris and Oran/Alger grouped together
WIDE_REGIONS = RegionTable.from_mapping({
    "FR": [("France-other", ["Paris", "Lyon"])],
    "DZ": [("Algérie-north", ["Alger", "Oran"])],
})


def trip(from_city="Paris", to_city="Alger", departure_date="2025-03-10", **extra):
    return {"from_city": from_city, "to_city": to_city, "departure_date": departure_date, **extra}


def request(from_city="Paris", to_city="Alger", earliest_date="2025-03-08", latest_date="2025-03-12", **extra):
    return {
        "from_city": from_city,
        "to_city": to_city,
        "earliest_date": earliest_date,
        "latest_date": latest_date,
        **extra,
    }


def test_exact_match_scenario():
    result = classify(trip(), request())
    assert result.match_type == MatchType.EXACT
    assert result.date_difference == 0
    assert result.is_exact_date and result.is_exact_location
    assert result.region_name is None


def test_flexible_date_scenario():
    result = classify(trip(departure_date="2025-03-15"), request(), tolerance_days=3)
    assert result.match_type == MatchType.FLEXIBLE_DATE
    assert result.date_difference == 3
    assert result.is_exact_location and not result.is_exact_date


def test_flexible_location_scenario():
    result = classify(trip(from_city="Lyon", to_city="Oran"), request(), regions=WIDE_REGIONS)
    assert result.match_type == MatchType.FLEXIBLE_LOCATION
    assert result.region_name == "Algérie-north"
    assert result.is_exact_location is False
    assert result.is_exact_date is True


def test_flexible_both():
    result = classify(
        trip(from_city="Versailles", to_city="Blida", departure_date="2025-03-06"), request()
    )
    assert result.match_type == MatchType.FLEXIBLE_BOTH
    assert result.date_difference == 2
    assert result.region_name == "Région d'Alger"


@pytest.mark.parametrize("distance", [1, 2, 3])
def test_exact_location_within_tolerance_is_flexible_date(distance):
    result = classify(trip(departure_date=f"2025-03-{12 + distance:02d}"), request())
    assert result.match_type == MatchType.FLEXIBLE_DATE
    assert result.date_difference == distance


def test_exact_location_beyond_tolerance_is_incompatible():
    result = classify(trip(departure_date="2025-03-16"), request())
    assert result.match_type == MatchType.INCOMPATIBLE
    assert result.date_difference == 4
    assert not result.is_compatible


def test_tolerance_is_configurable():
    assert classify(trip(departure_date="2025-03-16"), request(), tolerance_days=5).match_type == MatchType.FLEXIBLE_DATE
    assert classify(trip(departure_date="2025-03-13"), request(), tolerance_days=0).match_type == MatchType.INCOMPATIBLE


def test_origin_only_region_match_is_incompatible():
    """Versailles shares Paris's region, but Casablanca is nowhere near Alger."""
    result = classify(trip(from_city="Versailles", to_city="Casablanca"), request())
    assert result.match_type == MatchType.INCOMPATIBLE


def test_exact_origin_with_unrelated_destination_is_incompatible():
    result = classify(trip(to_city="Oran"), request())
    assert result.match_type == MatchType.INCOMPATIBLE


def test_exact_origin_with_regional_destination_is_flexible_location():
    result = classify(trip(to_city="Tipaza"), request())
    assert result.match_type == MatchType.FLEXIBLE_LOCATION
    assert result.region_name == "Région d'Alger"


def test_region_name_falls_back_to_origin():
    result = classify(trip(from_city="Versailles"), request())
    assert result.match_type == MatchType.FLEXIBLE_LOCATION
    assert result.region_name == "Île-de-France"


def test_unknown_cities_are_incompatible_not_errors():
    result = classify(trip(from_city="Atlantis", to_city="Lemuria"), request())
    assert result.match_type == MatchType.INCOMPATIBLE


def test_city_names_compare_without_accents_or_case():
    result = classify(trip(to_city="  ALGER "), request(to_city="alger"))
    assert result.match_type == MatchType.EXACT


def test_open_ended_window_is_always_in_range():
    result = classify(trip(departure_date="2031-07-01"), request(earliest_date=None, latest_date="2025-03-12"))
    assert result.match_type == MatchType.EXACT
    assert result.is_exact_date


def test_different_countries_never_match_by_name():
    result = classify(
        trip(from_country="France", to_country="Algérie"),
        request(from_country="FR", to_country="Maroc"),
    )
    assert result.match_type == MatchType.INCOMPATIBLE


def test_country_aliases_match_codes():
    result = classify(
        trip(from_country="France", to_country="Algérie"),
        request(from_country="FR", to_country="DZ"),
    )
    assert result.match_type == MatchType.EXACT


def test_accepts_objects_with_attributes(mocker):
    trip_obj = mocker.Mock(from_city="Paris", to_city="Alger", from_country=None, to_country=None,
                           departure_date="2025-03-10")
    request_obj = mocker.Mock(from_city="Paris", to_city="Alger", from_country=None, to_country=None,
                              earliest_date="2025-03-08", latest_date="2025-03-12")
    assert classify(trip_obj, request_obj).match_type == MatchType.EXACT


def test_malformed_date_aborts_classification():
    with pytest.raises(ParseError):
        classify(trip(departure_date="10/03/2025"), request())


def test_classification_is_idempotent():
    first = classify(trip(from_city="Lyon", to_city="Oran"), request(), regions=WIDE_REGIONS)
    second = classify(trip(from_city="Lyon", to_city="Oran"), request(), regions=WIDE_REGIONS)
    assert first == second
    assert first.to_json() == second.to_json()


def test_json_uses_camel_case_keys():
    payload = classify(trip(departure_date="2025-03-15"), request()).to_json()
    assert payload == {
        "matchType": "flexible_date",
        "isExactDate": False,
        "isExactLocation": True,
        "dateDifference": 3,
        "regionName": None,
    }


def _classification(match_type, date_difference=0):
    return MatchClassification(
        match_type=match_type,
        is_exact_date=date_difference == 0,
        is_exact_location=match_type in (MatchType.EXACT, MatchType.FLEXIBLE_DATE),
        date_difference=date_difference,
        region_name=None if match_type in (MatchType.EXACT, MatchType.FLEXIBLE_DATE) else "R",
    )


def test_rank_candidates_exact_first_then_date_difference():
    candidates = [
        ("a", _classification(MatchType.FLEXIBLE_DATE, 2)),
        ("b", _classification(MatchType.INCOMPATIBLE, 9)),
        ("c", _classification(MatchType.FLEXIBLE_LOCATION, 0)),
        ("d", _classification(MatchType.EXACT)),
        ("e", _classification(MatchType.FLEXIBLE_BOTH, 1)),
    ]
    assert [item for item, _ in rank_candidates(candidates)] == ["d", "c", "e", "a"]


def test_rank_candidates_is_stable():
    candidates = [("x", _classification(MatchType.EXACT)), ("y", _classification(MatchType.EXACT))]
    assert [item for item, _ in rank_candidates(candidates)] == ["x", "y"]


def test_best_match_prefers_exact():
    candidates = [
        ("near", _classification(MatchType.FLEXIBLE_DATE, 1)),
        ("exact", _classification(MatchType.EXACT)),
    ]
    assert best_match(candidates)[0] == "exact"


def test_best_match_falls_back_to_first_compatible():
    candidates = [
        ("none", _classification(MatchType.INCOMPATIBLE, 8)),
        ("first", _classification(MatchType.FLEXIBLE_BOTH, 2)),
        ("second", _classification(MatchType.FLEXIBLE_DATE, 1)),
    ]
    assert best_match(candidates)[0] == "first"
    assert best_match([("none", _classification(MatchType.INCOMPATIBLE, 8))]) is None
