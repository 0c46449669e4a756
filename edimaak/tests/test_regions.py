"""
Region Lookup Tests.
"""

from edimaak.app.domain.matching.regions import DEFAULT_REGIONS, RegionTable, normalize_name, region_of


def test_normalize_name_strips_accents_case_and_spacing():
    assert normalize_name("  Saint-Étienne ") == "saint-etienne"
    assert normalize_name("BOUMERDÈS") == "boumerdes"
    assert normalize_name("Aïn   Témouchent") == "ain temouchent"
    assert normalize_name(None) == ""


def test_known_cities_share_a_region():
    """Paris and Versailles are both in Île-de-France."""
    region = DEFAULT_REGIONS.shared_region("Paris", "Versailles")
    assert region is not None
    assert region.name == "Île-de-France"
    assert region.country_code == "FR"


def test_lookup_ignores_accents_and_case():
    assert region_of("medea") == region_of("Médéa") == "dz-region-d-alger"


def test_unknown_city_resolves_to_none():
    assert region_of("Atlantis") is None
    assert DEFAULT_REGIONS.shared_region("Atlantis", "Paris") is None
    assert DEFAULT_REGIONS.shared_region("Atlantis", "Atlantis") is None


def test_empty_city_resolves_to_none():
    assert region_of("") is None
    assert region_of(None) is None


def test_cities_in_different_regions_do_not_match():
    assert DEFAULT_REGIONS.shared_region("Paris", "Lyon") is None
    assert DEFAULT_REGIONS.shared_region("Alger", "Oran") is None


def test_country_scoped_lookup():
    assert region_of("Alger", "DZ") == "dz-region-d-alger"
    assert region_of("Alger", "Algérie") == "dz-region-d-alger"
    assert region_of("Alger", "FR") is None
    assert region_of("Alger", "Narnia") is None


def test_country_aliases_resolve_to_codes():
    assert DEFAULT_REGIONS.country_code("Algérie") == "DZ"
    assert DEFAULT_REGIONS.country_code("algeria") == "DZ"
    assert DEFAULT_REGIONS.country_code("fr") == "FR"
    assert DEFAULT_REGIONS.country_code(None) is None


def test_same_country_only_fails_on_clear_difference():
    assert DEFAULT_REGIONS.same_country("France", "FR")
    assert DEFAULT_REGIONS.same_country(None, "FR")
    assert not DEFAULT_REGIONS.same_country("France", "Algérie")


def test_custom_table_from_mapping():
    table = RegionTable.from_mapping({
        "fr": {"France-other": ["Paris", "Lyon"]},
        "dz": [("Algérie-north", ["Alger", "Oran"])],
    })
    assert table.shared_region("Lyon", "Paris").name == "France-other"
    assert table.shared_region("Oran", "Alger").id == "dz-algerie-north"
    assert table.get("fr-france-other").cities == ("Paris", "Lyon")


def test_city_in_two_countries_needs_a_country():
    table = RegionTable.from_mapping({
        "FR": [("Nord", ["Valence"])],
        "ES": [("Levante", ["Valence"])],
    })
    assert table.region_of("Valence") is None
    assert table.region_of("Valence", "FR").name == "Nord"
    assert table.region_of("Valence", "ES").name == "Levante"


def test_first_declared_region_wins_within_a_country():
    table = RegionTable.from_mapping({"FR": [("A", ["Paris"]), ("B", ["Paris"])]})
    assert table.region_of("Paris").name == "A"


def test_same_region_is_false_for_unknown_cities():
    assert DEFAULT_REGIONS.same_region("Oran", "Mostaganem")
    assert not DEFAULT_REGIONS.same_region("Oran", "Atlantis")
    assert not DEFAULT_REGIONS.same_region("Oran", "Mostaganem", "DZ", "FR")
