"""Modules package - Domain models and repositories."""

from src.modules.properties import Property
from src.modules.selections import (
    InMemoryReviewedIds,
    ReviewedIdsProvider,
    Selection,
)

__all__ = [
    # Properties
    "Property",
    # Selections
    "Selection",
    "ReviewedIdsProvider",
    "InMemoryReviewedIds",
]
