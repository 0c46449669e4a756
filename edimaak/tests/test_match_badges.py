"""
Match Badge Tests.
"""

import pytest

from edimaak.app.domain.matching.classifier import MatchClassification, MatchType
from edimaak.app.services.match_badges import badges_for


def make(match_type, date_difference=0, region_name=None, exact_location=False):
    return MatchClassification(
        match_type=match_type,
        is_exact_date=date_difference == 0,
        is_exact_location=exact_location,
        date_difference=date_difference,
        region_name=region_name,
    )


def test_exact_badge():
    badges = badges_for(make(MatchType.EXACT, exact_location=True))
    assert badges == [{"kind": "exact", "tone": "success", "label": "Dates compatibles"}]


def test_flexible_date_badge_shows_day_count():
    badges = badges_for(make(MatchType.FLEXIBLE_DATE, 2, exact_location=True))
    assert [b["label"] for b in badges] == ["Dates proches (2j)"]
    assert badges[0]["tone"] == "warning"


def test_flexible_location_badges_name_the_region():
    badges = badges_for(make(MatchType.FLEXIBLE_LOCATION, region_name="Kabylie"))
    assert [b["label"] for b in badges] == ["Destination proche", "Même région : Kabylie"]


def test_flexible_both_badges():
    badges = badges_for(make(MatchType.FLEXIBLE_BOTH, 3, region_name="Kabylie"))
    assert [b["kind"] for b in badges] == ["flexible_date", "flexible_location", "region"]
    assert badges[0]["label"] == "Dates proches (3j)"


def test_incompatible_has_no_badge():
    assert badges_for(make(MatchType.INCOMPATIBLE, 12)) == []


@pytest.mark.parametrize("match_type", [MatchType.FLEXIBLE_LOCATION, MatchType.FLEXIBLE_BOTH])
def test_region_level_match_requires_region_name(match_type):
    with pytest.raises(ValueError):
        badges_for(make(match_type, 1))
