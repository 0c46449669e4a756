"""
Candidate ranking.

Exact matches come first, then smaller date differences. Ties keep the
order the candidates were given in.
"""

from typing import Iterable, List, Optional, Tuple, TypeVar

from edimaak.app.domain.matching.classifier import MatchClassification, MatchType

T = TypeVar("T")


def rank_key(classification: MatchClassification) -> Tuple[int, int]:
    return (0 if classification.match_type == MatchType.EXACT else 1, classification.date_difference)


def rank_candidates(candidates: Iterable[Tuple[T, MatchClassification]]) -> List[Tuple[T, MatchClassification]]:
    """Sort ``(item, classification)`` pairs, dropping incompatible ones."""
    compatible = [c for c in candidates if c[1].is_compatible]
    return sorted(compatible, key=lambda c: rank_key(c[1]))


def best_match(candidates: Iterable[Tuple[T, MatchClassification]]) -> Optional[Tuple[T, MatchClassification]]:
    """First exact candidate, else the first compatible one, else None."""
    best = None
    for candidate in candidates:
        classification = candidate[1]
        if not classification.is_compatible:
            continue
        if classification.match_type == MatchType.EXACT:
            return candidate
        if best is None:
            best = candidate
    return best
