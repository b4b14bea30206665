"""
Selections Module.

Broker selection records and the reviewed-ids interface.
The presenter lives in src.modules.selections.presenter (it depends on jobs).
"""

from src.modules.selections.models import Selection
from src.modules.selections.repository import (
    InMemoryReviewedIds,
    ReviewedIdsProvider,
)

__all__ = [
    "Selection",
    "ReviewedIdsProvider",
    "InMemoryReviewedIds",
]
