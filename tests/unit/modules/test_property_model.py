"""
Unit tests for src/modules/properties/models.py
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from src.modules.properties.models import PLACEHOLDER_PHOTO, Property


class TestPropertyValidation:
    """Tests for Property field validation."""

    def test_defaults(self):
        prop = Property(id="A100_601")

        assert prop.currency == "EUR"
        assert prop.photos == [PLACEHOLDER_PHOTO]
        assert prop.clean_price == 0
        assert prop.latitude is None
        assert prop.broker_phone is None
        assert prop.synced_at.tzinfo is not None

    def test_id_required(self):
        with pytest.raises(ValidationError):
            Property(id="")

    @pytest.mark.parametrize("value", [-5, "abc", float("nan"), float("inf"), None, True])
    def test_invalid_numbers_become_zero(self, value):
        prop = Property(id="x", bedrooms=value, clean_price=value, area=value)

        assert prop.bedrooms == 0
        assert prop.clean_price == 0
        assert prop.area == 0

    def test_numeric_strings_accepted(self):
        assert Property(id="x", bedrooms="3").bedrooms == 3

    @pytest.mark.parametrize("value", ["", "north", float("nan"), None, False])
    def test_invalid_coordinates_become_none(self, value):
        assert Property(id="x", latitude=value).latitude is None

    def test_negative_coordinates_kept(self):
        assert Property(id="x", longitude=-33.5).longitude == -33.5

    def test_photos_capped(self):
        photos = [f"https://x/{i}.jpg" for i in range(15)]
        prop = Property(id="x", photos=photos)

        assert len(prop.photos) == 10
        assert prop.photos[0] == "https://x/0.jpg"

    def test_empty_photos_use_placeholder(self):
        assert Property(id="x", photos=[]).photos == [PLACEHOLDER_PHOTO]
        assert Property(id="x", photos=["", ""]).photos == [PLACEHOLDER_PHOTO]

    def test_empty_currency(self):
        assert Property(id="x", currency="").currency == "EUR"

    def test_camel_case_aliases(self):
        prop = Property.model_validate(
            {"id": "x", "cleanPrice": 100, "insideArea": 50, "brokerPhone": "+357"}
        )

        assert prop.clean_price == 100
        assert prop.inside_area == 50
        assert prop.broker_phone == "+357"

    def test_frozen(self):
        prop = Property(id="x")
        with pytest.raises(ValidationError):
            prop.title = "changed"


class TestPropertyMethods:
    """Tests for Property helpers."""

    def test_with_broker_phone_copies(self):
        prop = Property(id="x", title="Villa")
        copy = prop.with_broker_phone("+357 99 000000")

        assert copy.broker_phone == "+357 99 000000"
        assert copy.title == "Villa"
        assert prop.broker_phone is None

    def test_to_display_dict(self):
        synced_at = datetime(2024, 5, 1, tzinfo=timezone.utc)
        prop = Property(id="x", clean_price=285000, apartment_no="601", synced_at=synced_at)

        data = prop.to_display_dict()

        assert data["cleanPrice"] == 285000
        assert data["apartmentNo"] == "601"
        assert data["syncedAt"].startswith("2024-05-01T00:00:00")
        assert "clean_price" not in data

    def test_str(self):
        prop = Property(id="A100_601", title="A100 - Villa", price="€285,000", bedrooms=2)
        text = str(prop)

        assert "[A100_601] A100 - Villa" in text
        assert "€285,000 | 2 bd" in text

    def test_str_untitled(self):
        assert "Untitled Property" in str(Property(id="x"))
