"""
ETL Transform module for listing exports.

Transform raw rows from the table parser into normalized Property records.
This module centralizes all row-to-model transformation logic.
"""

from datetime import datetime, timezone

from loguru import logger

from src.modules.properties.models import PLACEHOLDER_PHOTO, Property
from src.utils.formatters import format_price
from src.utils.parsers.codes import build_property_id, with_occurrence
from src.utils.parsers.fields import (
    resolve_number,
    resolve_optional_number,
    resolve_string,
)
from src.utils.parsers.photos import DEFAULT_THUMBNAIL_WIDTH, MAX_PHOTOS, normalize_photos
from src.utils.parsers.table import RawRow, iter_rows

transform_log = logger.bind(module="Transform")

# ============================================
# Column Aliases (tried in order)
# ============================================

FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "title": ("ProjectTitle", "Title", "Name", "Property"),
    "apartment_no": ("ApartmentNo", "Unit", "UnitNo", "Apartment"),
    "external_id": ("ID", "ExternalID", "id"),
    "type": ("ApartmentType", "Type", "PropertyType", "type"),
    "status": ("PropertyStatus", "Status", "status"),
    "location": ("Location", "City", "Address", "location"),
    "district": ("District", "district"),
    "bedrooms": ("Bedrooms", "bedrooms", "Beds"),
    "bathrooms": ("Bathrooms", "bathrooms", "Baths"),
    "area": ("TotalArea", "Area", "area", "Size"),
    "inside_area": ("InsideArea", "insideArea"),
    "covered_veranda": ("CoveredVeranda", "coveredVeranda"),
    "uncovered_veranda": ("UncoveredVeranda", "Uncovered Veranda", "uncoveredVeranda"),
    "basement": ("Basement", "basement"),
    "plot": ("Plot", "plot"),
    "clean_price": ("CleanPrice", "Price", "price"),
    "price": ("Price", "price"),
    "price_sqm": ("Pricepersqm", "PricePerSqm"),
    "currency": ("CurrencyType", "Currency"),
    "photos": ("PhotoURLs", "PhotoPaths", "Photos", "Images"),
    "url": ("URL", "url", "Link"),
    "features": ("Features", "Amenities", "features"),
    "description": ("Description", "description"),
    "additional_info": ("AdditionalInformation", "AdditionalInfo", "Notes"),
    "latitude": ("Latitude", "lat", "Lat"),
    "longitude": ("Longitude", "lng", "Lon", "long"),
}

STRING_FIELDS = (
    "external_id",
    "type",
    "status",
    "location",
    "district",
    "url",
    "features",
    "description",
    "additional_info",
)

NUMBER_FIELDS = (
    "bedrooms",
    "bathrooms",
    "area",
    "inside_area",
    "covered_veranda",
    "uncovered_veranda",
    "basement",
    "plot",
)

# Values that identify a listing (not price or status, which change between exports)
IDENTITY_FIELDS = ("external_id", "url", "location", "district", "type")


# ============================================
# Individual Transform Functions
# ============================================


def transform_price(raw_price: str, clean_price: float, currency: str) -> str:
    """
    Build the display price.

    Args:
        raw_price: Price string as found in the export (may be empty)
        clean_price: Numeric price
        currency: ISO currency code

    Returns:
        The export's own string when present, else a formatted price

    Examples:
        >>> transform_price("€285,000", 285000, "EUR")
        '€285,000'
        >>> transform_price("", 285000, "EUR")
        '€285,000'
    """
    return raw_price or format_price(clean_price, currency)


def transform_price_sqm(source_value: float, clean_price: float, area: float) -> float:
    """
    Resolve price per square meter.

    Examples:
        >>> transform_price_sqm(1500, 285000, 100)
        1500
        >>> transform_price_sqm(0, 285000, 120)
        2375
        >>> transform_price_sqm(0, 285000, 0)
        0
    """
    if source_value:
        return source_value
    if area > 0:
        return round(clean_price / area)
    return 0


def transform_row_to_property(
    row: RawRow,
    row_index: int,
    thumbnail_width: int = DEFAULT_THUMBNAIL_WIDTH,
    photo_proxy_url: str | None = None,
    placeholder_url: str = PLACEHOLDER_PHOTO,
    max_photos: int = MAX_PHOTOS,
    synced_at: datetime | None = None,
) -> Property | None:
    """
    Transform one raw row into a Property.

    Args:
        row: Raw row (header -> value)
        row_index: Line index of the row in the export (for log messages)
        thumbnail_width: Target width for drive thumbnails
        photo_proxy_url: Optional image proxy endpoint for drive files
        placeholder_url: Photo used when no photo resolves
        max_photos: Maximum number of photos kept
        synced_at: Normalization timestamp (defaults to now)

    Returns:
        Property, or None when the row is not a real listing
        (no title and no price)
    """
    title = resolve_string(row, *FIELD_ALIASES["title"])
    clean_price = resolve_number(row, *FIELD_ALIASES["clean_price"])

    # Skip invalid entries
    if not title and clean_price == 0:
        transform_log.debug(f"Row {row_index}: no title and no price, skipped")
        return None

    apartment_no = resolve_string(row, *FIELD_ALIASES["apartment_no"])
    currency = resolve_string(row, *FIELD_ALIASES["currency"]) or "EUR"
    area = resolve_number(row, *FIELD_ALIASES["area"])

    photos = normalize_photos(
        resolve_string(row, *FIELD_ALIASES["photos"]),
        width=thumbnail_width,
        proxy_url=photo_proxy_url,
        limit=max_photos,
    )

    data = {name: resolve_string(row, *FIELD_ALIASES[name]) for name in STRING_FIELDS}
    data.update({name: resolve_number(row, *FIELD_ALIASES[name]) for name in NUMBER_FIELDS})

    return Property(
        id=build_property_id(
            title,
            apartment_no,
            identity=(title, *(data[name] for name in IDENTITY_FIELDS)),
        ),
        apartment_no=apartment_no,
        title=title,
        latitude=resolve_optional_number(row, *FIELD_ALIASES["latitude"]),
        longitude=resolve_optional_number(row, *FIELD_ALIASES["longitude"]),
        price=transform_price(
            resolve_string(row, *FIELD_ALIASES["price"]), clean_price, currency
        ),
        clean_price=clean_price,
        price_sqm=transform_price_sqm(
            resolve_number(row, *FIELD_ALIASES["price_sqm"]), clean_price, area
        ),
        currency=currency,
        photos=photos or [placeholder_url],
        synced_at=synced_at or datetime.now(timezone.utc),
        **data,
    )


def transform_text_to_properties(
    text: str,
    **options,
) -> list[Property]:
    """
    Parse a whole export into Properties.

    Rejected rows are skipped. A row that fails unexpectedly is logged and
    skipped so one bad line never aborts the import. Rows repeated verbatim
    are collapsed into the first one. Distinct rows that share an ID get an
    occurrence suffix ("A100_601-2") so every listing keeps a unique ID.

    Args:
        text: Whole export as text
        **options: Passed through to transform_row_to_property

    Returns:
        List of Property in export order
    """
    options.setdefault("synced_at", datetime.now(timezone.utc))

    properties: list[Property] = []
    used_ids: set[str] = set()
    occurrences: dict[str, int] = {}
    seen_rows: set[tuple[tuple[str, str], ...]] = set()
    rejected = 0

    for row_index, row in iter_rows(text):
        try:
            prop = transform_row_to_property(row, row_index, **options)
        except Exception as e:
            transform_log.warning(f"Row {row_index}: failed to transform ({e}), skipped")
            continue

        if prop is None:
            rejected += 1
            continue

        row_key = tuple(row.items())
        if row_key in seen_rows:
            transform_log.warning(f"Row {row_index}: repeats an earlier row ({prop.id}), skipped")
            continue
        seen_rows.add(row_key)

        base_id = prop.id
        prop_id = base_id
        while prop_id in used_ids:
            occurrences[base_id] = occurrences.get(base_id, 1) + 1
            prop_id = with_occurrence(base_id, occurrences[base_id])

        if prop_id != base_id:
            transform_log.warning(f"Row {row_index}: id {base_id} already taken, using {prop_id}")
            prop = prop.model_copy(update={"id": prop_id})

        used_ids.add(prop_id)
        properties.append(prop)

    transform_log.debug(f"Transformed {len(properties)} properties ({rejected} rows rejected)")
    return properties
