"""
Unit tests for src/modules/properties/catalog.py
"""

import pytest

from src.modules.properties.catalog import (
    count_by,
    filter_properties,
    get_filter_options,
    get_stats,
)


@pytest.fixture
def catalog(make_property):
    """Small mixed catalog."""
    return [
        make_property(
            "A100_601",
            title="A100 - ARARAT Gardens",
            type="Apartment",
            status="Available",
            location="Limassol",
            bedrooms=2,
            clean_price=285000,
            features="Sea view, Pool",
        ),
        make_property(
            "A100_602",
            title="A100 - ARARAT Gardens",
            type="Apartment",
            status="Reserved",
            location="Limassol",
            bedrooms=3,
            clean_price=350000,
        ),
        make_property(
            "K48_1",
            title="K48 Sea View",
            type="Villa",
            status="Available",
            location="Paphos",
            bedrooms=4,
            clean_price=1200000,
        ),
        make_property("PLOT", title="Untitled plot", type="Land", location="Larnaca"),
    ]


class TestFilterProperties:
    """Tests for filter_properties function."""

    def test_no_criteria(self, catalog):
        assert filter_properties(catalog) == catalog

    def test_location_substring(self, catalog):
        result = filter_properties(catalog, location="limas")
        assert [p.id for p in result] == ["A100_601", "A100_602"]

    def test_type_exact(self, catalog):
        assert [p.id for p in filter_properties(catalog, type="villa")] == ["K48_1"]

    def test_status(self, catalog):
        result = filter_properties(catalog, status="Available")
        assert [p.id for p in result] == ["A100_601", "K48_1"]

    def test_price_range_inclusive(self, catalog):
        result = filter_properties(catalog, min_price=285000, max_price=350000)
        assert [p.id for p in result] == ["A100_601", "A100_602"]

    def test_min_bedrooms(self, catalog):
        result = filter_properties(catalog, min_bedrooms=3)
        assert [p.id for p in result] == ["A100_602", "K48_1"]

    def test_search(self, catalog):
        result = filter_properties(catalog, search="sea")
        assert [p.id for p in result] == ["A100_601", "K48_1"]

    def test_combined(self, catalog):
        result = filter_properties(catalog, location="Limassol", status="available")
        assert [p.id for p in result] == ["A100_601"]


class TestFilterOptions:
    """Tests for get_filter_options function."""

    def test_options(self, catalog):
        options = get_filter_options(catalog)

        assert options["locations"] == ["Larnaca", "Limassol", "Paphos"]
        assert options["types"] == ["Apartment", "Land", "Villa"]
        assert options["statuses"] == ["Available", "Reserved"]
        assert options["bedrooms"] == [0, 2, 3, 4]


class TestStats:
    """Tests for get_stats and count_by functions."""

    def test_count_by(self, catalog):
        assert count_by(catalog, "status") == {"Available": 2, "Reserved": 1, "Unknown": 1}

    def test_stats(self, catalog):
        stats = get_stats(catalog)

        assert stats["total"] == 4
        assert stats["min_price"] == 285000
        assert stats["max_price"] == 1200000
        assert stats["total_value"] == 1835000
        assert stats["avg_price"] == round(1835000 / 3)
        assert stats["by_type"] == {"Apartment": 2, "Villa": 1, "Land": 1}

    def test_empty(self):
        stats = get_stats([])

        assert stats["total"] == 0
        assert stats["avg_price"] == 0
        assert stats["by_location"] == {}
