"""
Match badge labels.

Turns a classification into the labels the UI badge shows next to a
candidate. Exactly one visual state per match type.
"""

from typing import Dict, List

from edimaak.app.domain.matching.classifier import MatchClassification, MatchType

EXACT_DATE_LABEL = "Dates compatibles"
CLOSE_DATE_LABEL = "Dates proches ({days}j)"
CLOSE_LOCATION_LABEL = "Destination proche"
SAME_REGION_LABEL = "Même région : {region}"


def _close_dates(classification: MatchClassification) -> Dict[str, str]:
    return {
        "kind": "flexible_date",
        "tone": "warning",
        "label": CLOSE_DATE_LABEL.format(days=classification.date_difference),
    }


def _close_location() -> Dict[str, str]:
    return {"kind": "flexible_location", "tone": "info", "label": CLOSE_LOCATION_LABEL}


def badges_for(classification: MatchClassification) -> List[Dict[str, str]]:
    """
    Badge list for a classification; empty for incompatible pairs.

    Raises:
        ValueError: if a region-level match carries no region name
    """
    match_type = classification.match_type
    if match_type == MatchType.INCOMPATIBLE:
        return []

    if match_type in (MatchType.FLEXIBLE_LOCATION, MatchType.FLEXIBLE_BOTH) and not classification.region_name:
        raise ValueError(f"{match_type.value} classification is missing region_name")

    if match_type == MatchType.EXACT:
        badges = [{"kind": "exact", "tone": "success", "label": EXACT_DATE_LABEL}]
    elif match_type == MatchType.FLEXIBLE_DATE:
        badges = [_close_dates(classification)]
    elif match_type == MatchType.FLEXIBLE_LOCATION:
        badges = [_close_location()]
    else:
        badges = [_close_dates(classification), _close_location()]

    if not classification.is_exact_location and classification.region_name:
        badges.append({
            "kind": "region",
            "tone": "info",
            "label": SAME_REGION_LABEL.format(region=classification.region_name),
        })
    return badges
