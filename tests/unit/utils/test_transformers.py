"""
Unit tests for src/utils/transformers.py
"""

from datetime import datetime, timezone

import pytest

from src.modules.properties.models import PLACEHOLDER_PHOTO
from src.utils.transformers import (
    transform_price,
    transform_price_sqm,
    transform_row_to_property,
    transform_text_to_properties,
)

pytest_plugins = ["tests.fixtures.exports"]

SYNCED_AT = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class TestTransformPrice:
    """Tests for transform_price function."""

    def test_keeps_export_string(self):
        assert transform_price("€ 285.000", 285000, "EUR") == "€ 285.000"

    def test_formats_when_missing(self):
        assert transform_price("", 285000, "EUR") == "€285,000"

    def test_other_currency(self):
        assert transform_price("", 1500, "USD") == "$1,500"


class TestTransformPriceSqm:
    """Tests for transform_price_sqm function."""

    def test_source_value_wins(self):
        assert transform_price_sqm(1500, 285000, 100) == 1500

    def test_derived_from_area(self):
        assert transform_price_sqm(0, 285000, 120) == 2375

    def test_no_area(self):
        assert transform_price_sqm(0, 285000, 0) == 0


class TestTransformRowToProperty:
    """Tests for transform_row_to_property function."""

    def test_full_row(self, sample_raw_row):
        prop = transform_row_to_property(sample_raw_row, 1, synced_at=SYNCED_AT)

        assert prop.id == "A100_601"
        assert prop.title == "A100 - ARARAT Gardens"
        assert prop.apartment_no == "601"
        assert prop.type == "Apartment"
        assert prop.status == "Available"
        assert prop.location == "Limassol"
        assert prop.district == "Germasogeia"
        assert prop.bedrooms == 2
        assert prop.bathrooms == 2
        assert prop.area == 120
        assert prop.inside_area == 95
        assert prop.covered_veranda == 15
        assert prop.uncovered_veranda == 10
        assert prop.price == "€285,000"
        assert prop.clean_price == 285000
        assert prop.price_sqm == 2375
        assert prop.currency == "EUR"
        assert prop.photos == ["https://x/a.jpg", "https://x/b.jpg"]
        assert prop.url == "https://listings.example.com/a100"
        assert prop.features == "Sea view, Pool"
        assert prop.latitude == pytest.approx(34.6786)
        assert prop.longitude == pytest.approx(33.0413)
        assert prop.synced_at == SYNCED_AT

    def test_alternate_headers(self):
        row = {
            "Name": "B7 Tower",
            "Unit": "3",
            "Type": "Penthouse",
            "City": "Nicosia",
            "Beds": "4",
            "Area": "210",
            "CleanPrice": "990000",
            "Currency": "GBP",
            "Images": "https://x/p.jpg",
            "lat": "35.1",
            "lng": "33.3",
        }
        prop = transform_row_to_property(row, 2)

        assert prop.id == "B7_3"
        assert prop.type == "Penthouse"
        assert prop.location == "Nicosia"
        assert prop.bedrooms == 4
        assert prop.area == 210
        assert prop.clean_price == 990000
        assert prop.price == "£990,000"
        assert prop.currency == "GBP"
        assert prop.photos == ["https://x/p.jpg"]
        assert prop.latitude == 35.1

    def test_rejects_row_without_title_and_price(self):
        assert transform_row_to_property({"ProjectTitle": "", "Price": ""}, 3) is None
        assert transform_row_to_property({"ProjectTitle": "  ", "Price": "0"}, 3) is None

    def test_keeps_row_with_price_only(self):
        prop = transform_row_to_property({"Price": "120000"}, 7)
        assert prop is not None
        assert prop.title == ""
        assert prop.id.startswith("prop_")

    def test_garbage_numbers_become_zero(self):
        row = {"ProjectTitle": "A100 - Villa", "Bedrooms": "n/a", "TotalArea": "-50"}
        prop = transform_row_to_property(row, 1)

        assert prop.bedrooms == 0
        assert prop.area == 0
        assert prop.clean_price == 0

    def test_missing_coordinates_are_none(self, sample_raw_row):
        sample_raw_row["Latitude"] = ""
        sample_raw_row["Longitude"] = "somewhere"
        prop = transform_row_to_property(sample_raw_row, 1)

        assert prop.latitude is None
        assert prop.longitude is None

    def test_placeholder_when_no_photos(self, sample_raw_row):
        sample_raw_row["PhotoURLs"] = "/content/drive/MyDrive/a.jpg"
        prop = transform_row_to_property(
            sample_raw_row, 1, placeholder_url="https://cdn.example.com/none.jpg"
        )
        assert prop.photos == ["https://cdn.example.com/none.jpg"]

    def test_photo_options(self, sample_raw_row):
        sample_raw_row["PhotoURLs"] = "https://drive.google.com/file/d/XYZ123/view"
        prop = transform_row_to_property(
            sample_raw_row,
            1,
            thumbnail_width=400,
            photo_proxy_url="https://img.example.com/drive",
        )
        assert prop.photos == ["https://img.example.com/drive?id=XYZ123"]

        prop = transform_row_to_property(sample_raw_row, 1, thumbnail_width=400)
        assert prop.photos == ["https://drive.google.com/thumbnail?id=XYZ123&sz=w400"]

    def test_max_photos(self, sample_raw_row):
        sample_raw_row["PhotoURLs"] = ";".join(f"https://x/{i}.jpg" for i in range(6))
        prop = transform_row_to_property(sample_raw_row, 1, max_photos=3)
        assert prop.photos == ["https://x/0.jpg", "https://x/1.jpg", "https://x/2.jpg"]


class TestTransformTextToProperties:
    """Tests for transform_text_to_properties function."""

    def test_end_to_end_row(self, minimal_export):
        properties = transform_text_to_properties(minimal_export)

        assert len(properties) == 1
        prop = properties[0]
        assert prop.title == "A100 - Villa"
        assert prop.clean_price == 285000
        assert prop.photos == ["https://x/a.jpg", "https://x/b.jpg"]
        assert prop.id == "A100_601"

    def test_full_export(self, full_export):
        properties = transform_text_to_properties(full_export, synced_at=SYNCED_AT)

        assert len(properties) == 4
        first, second, k48, plot = properties

        assert first.id == "A100_601"
        assert first.photos == ["https://drive.google.com/thumbnail?id=XYZ123&sz=w800"]
        assert second.id == "A100_602"
        assert second.status == "Reserved"

        assert k48.id.startswith("prop_")
        assert k48.clean_price == 1200000
        assert k48.photos == [PLACEHOLDER_PHOTO]

        assert plot.title == "Untitled plot"
        assert plot.clean_price == 0
        assert plot.price == "on request"

    def test_ids_are_unique(self, full_export):
        ids = [prop.id for prop in transform_text_to_properties(full_export)]
        assert len(ids) == len(set(ids))

    def test_idempotent(self, full_export):
        first = transform_text_to_properties(full_export, synced_at=SYNCED_AT)
        second = transform_text_to_properties(full_export, synced_at=SYNCED_AT)
        assert first == second

    def test_ids_stable_across_runs(self, full_export):
        first = [p.id for p in transform_text_to_properties(full_export)]
        second = [p.id for p in transform_text_to_properties(full_export)]
        assert first == second

    def test_repeated_rows_collapse(self):
        text = (
            "ProjectTitle,ApartmentNo,Price\n"
            "A100 - Villa,601,100000\n"
            "A100 - Villa,601,100000\n"
        )
        properties = transform_text_to_properties(text)

        assert [prop.id for prop in properties] == ["A100_601"]

    def test_shared_id_gets_occurrence_suffix(self):
        text = (
            "ProjectTitle,ApartmentNo,Price\n"
            "A100 - Villa,601,100000\n"
            "A100 - Villa,601,200000\n"
        )
        properties = transform_text_to_properties(text)

        assert [prop.id for prop in properties] == ["A100_601", "A100_601-2"]
        assert [prop.clean_price for prop in properties] == [100000, 200000]

    def test_untitled_units_kept_apart(self):
        text = (
            "ProjectTitle,ApartmentNo,Price,URL\n"
            ",5,100000,https://x/1\n"
            ",5,250000,https://x/2\n"
        )
        properties = transform_text_to_properties(text)

        assert len(properties) == 2
        assert properties[0].id != properties[1].id
        assert all(prop.id.endswith("_5") for prop in properties)

    def test_id_unaffected_by_rows_above(self):
        header = "ProjectTitle,Price,URL\n"
        listing = "Sea View Villa,100000,https://x/1\n"
        other = "Other Flat,5000,https://x/9\n"

        alone = transform_text_to_properties(header + listing)
        shifted = transform_text_to_properties(header + other + "\n\n" + listing)

        assert alone[0].id == shifted[-1].id
        assert alone[0].id.startswith("prop_")

    def test_id_unaffected_by_unrelated_removal(self, full_export):
        lines = full_export.split("\n")
        without_first = "\n".join(lines[:1] + lines[2:])

        before = {p.title: p.id for p in transform_text_to_properties(full_export)}
        after = {p.title: p.id for p in transform_text_to_properties(without_first)}

        assert after["K48 Sea View"] == before["K48 Sea View"]
        assert after["Untitled plot"] == before["Untitled plot"]

    def test_identical_content_without_unit_numbered(self):
        text = (
            "ProjectTitle,Price,Status\n"
            "Sea View Villa,100000,Available\n"
            "Sea View Villa,100000,Reserved\n"
        )
        first, second = transform_text_to_properties(text)

        assert second.id == f"{first.id}-2"

    def test_negative_numbers_clamped(self):
        text = (
            "ProjectTitle,Price,Bedrooms,TotalArea,Pricepersqm\n"
            "A100 - Villa,-5,-2,-120,-300\n"
        )
        (prop,) = transform_text_to_properties(text)

        assert prop.clean_price == 0
        assert prop.bedrooms == 0
        assert prop.area == 0
        assert prop.price_sqm == 0

    def test_photo_column_bounded_through_tokenizer(self):
        urls = ", ".join(f"https://x/{i}.jpg" for i in range(15))
        text = f"ProjectTitle,ApartmentNo,Price,PhotoURLs\nA100 - Villa,601,285000,{urls}\n"

        (prop,) = transform_text_to_properties(text)

        assert prop.photos == [f"https://x/{i}.jpg" for i in range(10)]

    def test_no_valid_rows(self, export_without_valid_rows):
        assert transform_text_to_properties(export_without_valid_rows) == []

    def test_empty_text(self):
        assert transform_text_to_properties("") == []

    def test_shared_timestamp(self, full_export):
        properties = transform_text_to_properties(full_export)
        assert len({prop.synced_at for prop in properties}) == 1

    def test_crlf_line_endings(self, minimal_export):
        properties = transform_text_to_properties(minimal_export.replace("\n", "\r\n"))
        assert [prop.id for prop in properties] == ["A100_601"]
