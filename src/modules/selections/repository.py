"""
Selection review repository interface.

The persistence layer that stores client reactions lives outside this
package; it plugs in by implementing ReviewedIdsProvider.
"""

from abc import ABC, abstractmethod


class ReviewedIdsProvider(ABC):
    """Source of property IDs a client has already reacted to."""

    @abstractmethod
    async def get_reviewed_ids(self, selection_id: str) -> set[str]:
        """
        Get reviewed property IDs for a selection.

        Args:
            selection_id: Selection primary key

        Returns:
            Set of property IDs with an existing reaction
        """
        pass


class InMemoryReviewedIds(ReviewedIdsProvider):
    """Reviewed IDs kept in a dict, for hosts without a backend and for tests."""

    def __init__(self, reviewed: dict[str, set[str]] | None = None):
        self._reviewed = {key: set(value) for key, value in (reviewed or {}).items()}

    async def get_reviewed_ids(self, selection_id: str) -> set[str]:
        return set(self._reviewed.get(selection_id, set()))

    def add(self, selection_id: str, property_id: str) -> None:
        """Record a reaction."""
        self._reviewed.setdefault(selection_id, set()).add(property_id)
