"""
Property catalog helpers.

Filtering, filter option lists and summary statistics over a loaded dataset.
"""

from collections import Counter
from collections.abc import Sequence
from typing import Any

from src.modules.properties.models import Property


def filter_properties(
    properties: Sequence[Property],
    location: str | None = None,
    type: str | None = None,
    status: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
    min_bedrooms: float | None = None,
    search: str | None = None,
) -> list[Property]:
    """
    Filter properties by catalog criteria.

    Matching logic:
    - location: case-insensitive substring
    - type, status: case-insensitive exact match
    - min_price / max_price: inclusive bounds on clean_price
    - min_bedrooms: at least this many bedrooms
    - search: case-insensitive substring of title, location or features

    Args:
        properties: Properties to filter
        location, type, status, min_price, max_price, min_bedrooms, search:
            Criteria, None (or empty) = no limit

    Returns:
        Matching properties, in input order
    """
    result = list(properties)

    if location:
        needle = location.lower()
        result = [p for p in result if needle in p.location.lower()]

    if type:
        wanted = type.lower()
        result = [p for p in result if p.type and p.type.lower() == wanted]

    if status:
        wanted = status.lower()
        result = [p for p in result if p.status and p.status.lower() == wanted]

    if min_price is not None:
        result = [p for p in result if p.clean_price >= min_price]

    if max_price is not None:
        result = [p for p in result if p.clean_price <= max_price]

    if min_bedrooms is not None:
        result = [p for p in result if p.bedrooms >= min_bedrooms]

    if search:
        needle = search.lower()
        result = [
            p
            for p in result
            if needle in p.title.lower()
            or needle in p.location.lower()
            or needle in p.features.lower()
        ]

    return result


def get_filter_options(properties: Sequence[Property]) -> dict[str, list[Any]]:
    """
    Collect the distinct values available for each filter.

    Returns:
        Dict with sorted "locations", "types", "statuses", "bedrooms"
    """
    return {
        "locations": sorted({p.location for p in properties if p.location}),
        "types": sorted({p.type for p in properties if p.type}),
        "statuses": sorted({p.status for p in properties if p.status}),
        "bedrooms": sorted({p.bedrooms for p in properties}),
    }


def count_by(properties: Sequence[Property], field: str) -> dict[str, int]:
    """Count properties by a string field ("Unknown" for empty values)."""
    return dict(Counter(getattr(p, field) or "Unknown" for p in properties))


def get_stats(properties: Sequence[Property]) -> dict[str, Any]:
    """
    Summary statistics over a dataset.

    Prices of 0 (price on request) are left out of the price figures.
    """
    prices = [p.clean_price for p in properties if p.clean_price > 0]

    return {
        "total": len(properties),
        "avg_price": round(sum(prices) / len(prices)) if prices else 0,
        "min_price": min(prices) if prices else 0,
        "max_price": max(prices) if prices else 0,
        "total_value": sum(prices),
        "by_type": count_by(properties, "type"),
        "by_location": count_by(properties, "location"),
        "by_status": count_by(properties, "status"),
    }
