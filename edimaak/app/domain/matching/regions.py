"""
Region Classifier.

Maps a city to the named region it belongs to. Two cities in the same
region are close enough to be swapped for flexible-location matching.
Lookups never raise for unknown cities or countries; they resolve to None.
"""

import re
import unicodedata
from typing import Dict, Iterable, Mapping, Optional, Tuple

from pydantic import BaseModel

from edimaak.app.domain.matching.region_data import REGIONS_BY_COUNTRY, COUNTRY_ALIASES


def normalize_name(value: Optional[str]) -> str:
    """Lower-case, accent-free, single-spaced form used as lookup key."""
    if not value:
        return ""
    decomposed = unicodedata.normalize("NFD", value)
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return " ".join(stripped.casefold().split())


def _slug(value: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", normalize_name(value)).strip("-")


class Region(BaseModel):
    """A named group of cities within one country."""
    id: str
    name: str
    country_code: str
    cities: Tuple[str, ...]

    class Config:
        frozen = True


class RegionTable:
    """
    Lookup table from city names to regions.

    A city is indexed per country. When looked up without a country, a city
    listed in more than one country resolves to None. Within one country the
    first region declaring the city wins.
    """

    def __init__(self, regions: Iterable[Region], country_aliases: Optional[Mapping[str, str]] = None):
        self.regions: Tuple[Region, ...] = tuple(regions)
        self._by_id: Dict[str, Region] = {}
        self._scoped: Dict[Tuple[str, str], Region] = {}
        by_city: Dict[str, Dict[str, Region]] = {}

        for region in self.regions:
            self._by_id[region.id] = region
            for city in region.cities:
                key = normalize_name(city)
                self._scoped.setdefault((region.country_code, key), region)
                by_city.setdefault(key, {}).setdefault(region.country_code, region)

        self._unscoped: Dict[str, Region] = {
            city: next(iter(per_country.values()))
            for city, per_country in by_city.items()
            if len(per_country) == 1
        }
        self._country_codes = {region.country_code for region in self.regions}
        self._aliases = {normalize_name(k): v.upper() for k, v in (country_aliases or {}).items()}

    @classmethod
    def from_mapping(cls, mapping: Mapping, country_aliases: Optional[Mapping[str, str]] = None) -> "RegionTable":
        """
        Build a table from ``{country_code: [(name, cities), ...]}``.

        ``{country_code: {name: cities}}`` is accepted as well.
        """
        regions = []
        for code, entries in mapping.items():
            code = code.upper()
            pairs = entries.items() if isinstance(entries, Mapping) else entries
            for name, cities in pairs:
                regions.append(Region(
                    id=f"{code.lower()}-{_slug(name)}",
                    name=name,
                    country_code=code,
                    cities=tuple(cities),
                ))
        return cls(regions, country_aliases)

    def get(self, region_id: str) -> Optional[Region]:
        return self._by_id.get(region_id)

    def country_code(self, country: Optional[str]) -> Optional[str]:
        """Resolve a country name or ISO code, e.g. "Algérie" -> "DZ"."""
        if not country:
            return None
        if country.strip().upper() in self._country_codes:
            return country.strip().upper()
        return self._aliases.get(normalize_name(country))

    def same_country(self, country_a: Optional[str], country_b: Optional[str]) -> bool:
        """False only when both countries are given and clearly differ."""
        if not country_a or not country_b:
            return True
        code_a, code_b = self.country_code(country_a), self.country_code(country_b)
        if code_a and code_b:
            return code_a == code_b
        return normalize_name(country_a) == normalize_name(country_b)

    def region_of(self, city: Optional[str], country: Optional[str] = None) -> Optional[Region]:
        key = normalize_name(city)
        if not key:
            return None
        if country:
            code = self.country_code(country)
            if code is None:
                return None
            return self._scoped.get((code, key))
        return self._unscoped.get(key)

    def shared_region(
        self,
        city_a: Optional[str],
        city_b: Optional[str],
        country_a: Optional[str] = None,
        country_b: Optional[str] = None,
    ) -> Optional[Region]:
        """Region both cities belong to, or None. A None lookup never matches."""
        region_a = self.region_of(city_a, country_a)
        region_b = self.region_of(city_b, country_b)
        if region_a is None or region_b is None:
            return None
        return region_a if region_a.id == region_b.id else None

    def same_region(
        self,
        city_a: Optional[str],
        city_b: Optional[str],
        country_a: Optional[str] = None,
        country_b: Optional[str] = None,
    ) -> bool:
        return self.shared_region(city_a, city_b, country_a, country_b) is not None


DEFAULT_REGIONS = RegionTable.from_mapping(REGIONS_BY_COUNTRY, COUNTRY_ALIASES)


def region_of(city: Optional[str], country: Optional[str] = None, table: Optional[RegionTable] = None) -> Optional[str]:
    """Region id for ``city`` in the built-in (or given) table, else None."""
    region = (table or DEFAULT_REGIONS).region_of(city, country)
    return region.id if region else None
