"""
Properties Module.

Normalized listing model and catalog helpers.
"""

from src.modules.properties.catalog import (
    count_by,
    filter_properties,
    get_filter_options,
    get_stats,
)
from src.modules.properties.models import PLACEHOLDER_PHOTO, Property

__all__ = [
    "Property",
    "PLACEHOLDER_PHOTO",
    "filter_properties",
    "get_filter_options",
    "get_stats",
    "count_by",
]
