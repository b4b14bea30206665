"""
Selection presenter.

Builds the ordered list of properties a client swipes through for one
selection: load the dataset, resolve the selection's ids, attach broker
contact data, and drop what the client has already reviewed.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from loguru import logger

from config.settings import get_settings
from src.jobs.data_sync import DataSync, SyncResult
from src.matching.pre_filter import attach_broker_phone, exclude_reviewed
from src.matching.resolver import resolve_selection
from src.matching.types import ResolutionDiagnostics, ResolutionResult, ResolutionStatus
from src.modules.properties.models import Property
from src.modules.selections.models import Selection
from src.modules.selections.repository import ReviewedIdsProvider

presenter_log = logger.bind(module="Presenter")


@dataclass
class PresentedSelection:
    """
    Selection ready for presentation.

    Attributes:
        selection: The selection record
        resolution: Raw resolution outcome (status, unresolved, diagnostics)
        properties: Properties left to show, in the broker's order
        reviewed_count: Properties removed because they were already reviewed
        sync: Outcome of loading the dataset
    """

    selection: Selection
    resolution: ResolutionResult
    properties: list[Property] = field(default_factory=list)
    reviewed_count: int = 0
    sync: Optional[SyncResult] = None

    @property
    def status(self) -> ResolutionStatus:
        """Resolution status."""
        return self.resolution.status

    @property
    def all_reviewed(self) -> bool:
        """Whether the client has already reviewed everything."""
        return self.resolution.success and not self.properties and self.reviewed_count > 0


class SelectionPresenter:
    """Resolves selections against a DataSync cache."""

    def __init__(
        self,
        data_sync: DataSync,
        reviewed_provider: ReviewedIdsProvider | None = None,
        sample_size: int | None = None,
    ):
        """
        Initialize the presenter.

        Args:
            data_sync: Ingestion cache holding the dataset
            reviewed_provider: Optional source of already reviewed IDs
            sample_size: Unresolved ids echoed back in diagnostics
                (defaults to SELECTION_SAMPLE_SIZE)
        """
        self._data_sync = data_sync
        self._reviewed_provider = reviewed_provider
        self._sample_size = (
            sample_size if sample_size is not None else get_settings().selection.sample_size
        )
        self._tracks_reviews = reviewed_provider is not None

    async def _get_reviewed_ids(self, selection: Selection) -> set[str]:
        """Fetch reviewed IDs; provider failures count as "nothing reviewed"."""
        if not self._tracks_reviews or selection.id is None:
            return set()
        try:
            return set(await self._reviewed_provider.get_reviewed_ids(selection.id))
        except Exception as e:
            presenter_log.warning(f"Failed to load reviewed ids for {selection.id}: {e}")
            return set()

    async def present(
        self,
        selection: Selection | dict[str, Any],
        now: datetime | None = None,
    ) -> PresentedSelection:
        """
        Build the presentation list for a selection.

        Args:
            selection: Selection record (model or raw dict)
            now: Reference time for the expiry check

        Returns:
            PresentedSelection
        """
        if not isinstance(selection, Selection):
            selection = Selection.model_validate(selection)

        if selection.is_expired(now):
            presenter_log.info(f"Selection {selection.id} expired")
            return PresentedSelection(
                selection=selection,
                resolution=ResolutionResult(
                    status=ResolutionStatus.EXPIRED,
                    diagnostics=ResolutionDiagnostics(reason="expired"),
                ),
            )

        sync = await self._data_sync.auto_sync()
        if not sync.success:
            presenter_log.warning(f"Dataset unavailable: {sync.error}")

        resolution = resolve_selection(
            selection.property_ids,
            self._data_sync.get_all(),
            sample_size=self._sample_size,
        )
        if not resolution.success:
            presenter_log.info(
                f"Selection {selection.id}: {resolution.diagnostics.summary()}"
            )
            return PresentedSelection(selection=selection, resolution=resolution, sync=sync)

        properties = attach_broker_phone(resolution.properties, selection.broker_phone)
        reviewed_ids = await self._get_reviewed_ids(selection)
        properties, reviewed_count = exclude_reviewed(properties, reviewed_ids)

        presenter_log.info(
            f"Selection {selection.id}: {len(properties)} to show "
            f"({reviewed_count} already reviewed, {len(resolution.unresolved)} unresolved)"
        )
        return PresentedSelection(
            selection=selection,
            resolution=resolution,
            properties=properties,
            reviewed_count=reviewed_count,
            sync=sync,
        )
