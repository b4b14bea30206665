"""
Shared pytest fixtures for all tests.
"""

import pytest

from src.modules.properties.models import Property


# ============================================================
# Sample Data Fixtures
# ============================================================


@pytest.fixture
def sample_raw_row() -> dict:
    """Sample raw row as produced by the table parser."""
    return {
        "ProjectTitle": "A100 - ARARAT Gardens",
        "ApartmentNo": "601",
        "ApartmentType": "Apartment",
        "PropertyStatus": "Available",
        "Location": "Limassol",
        "District": "Germasogeia",
        "Bedrooms": "2",
        "Bathrooms": "2",
        "TotalArea": "120",
        "InsideArea": "95",
        "CoveredVeranda": "15",
        "UncoveredVeranda": "10",
        "Price": "€285,000",
        "PhotoURLs": "https://x/a.jpg, https://x/b.jpg",
        "URL": "https://listings.example.com/a100",
        "Features": "Sea view, Pool",
        "Latitude": "34.6786",
        "Longitude": "33.0413",
    }


@pytest.fixture
def make_property():
    """Factory for Property records with sensible defaults."""

    def _make(property_id: str, **fields) -> Property:
        fields.setdefault("title", f"Listing {property_id}")
        return Property(id=property_id, **fields)

    return _make


@pytest.fixture
def sample_dataset(make_property) -> list[Property]:
    """Dataset with ids a, b, c, d (in that order)."""
    return [make_property(pid) for pid in ("a", "b", "c", "d")]
