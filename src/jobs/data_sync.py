"""
Data Sync Module.

Loads the listing export into memory and keeps it there.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from loguru import logger

from config.settings import get_settings
from src.modules.properties.models import Property
from src.sources.dataset_fetcher import DatasetFetcher, get_dataset_fetcher
from src.sources.errors import EmptyDatasetError, IngestionError
from src.utils.transformers import transform_text_to_properties

sync_log = logger.bind(module="DataSync")


class SyncPhase(Enum):
    """Ingestion cache phases."""

    EMPTY = "empty"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass
class SyncResult:
    """
    Outcome of an ingestion pass.

    Attributes:
        success: Whether the cache holds a dataset after the call
        count: Number of properties in the cache
        error: Error message if the pass failed
        cached: True when no pass ran because data was already loaded
        source: Location the dataset was read from
    """

    success: bool = True
    count: int = 0
    error: Optional[str] = None
    cached: bool = False
    source: Optional[str] = None

    @classmethod
    def ok(cls, count: int, source: Optional[str] = None, cached: bool = False) -> "SyncResult":
        """Create a successful result."""
        return cls(success=True, count=count, source=source, cached=cached)

    @classmethod
    def fail(cls, error: str) -> "SyncResult":
        """Create a failed result."""
        return cls(success=False, error=error)


class DataSync:
    """
    In-memory ingestion cache for the listing export.

    Phases:
    - EMPTY -> LOADING -> LOADED on success
    - EMPTY -> LOADING -> FAILED on failure (retry with sync/auto_sync)
    - A failed pass after a successful one keeps the previous dataset and
      returns to LOADED

    Each successful pass replaces the whole collection in one assignment.
    Concurrent sync() calls join the pass already in flight.
    """

    def __init__(
        self,
        fetcher: DatasetFetcher | None = None,
        sync_timeout: float | None = None,
        transform_options: dict[str, Any] | None = None,
    ):
        """
        Initialize DataSync.

        Args:
            fetcher: Dataset fetcher (created from settings if not provided)
            sync_timeout: Overall timeout for fetching, None for no limit
            transform_options: Overrides for transform_row_to_property
                (defaults come from photo settings)
        """
        self._fetcher = fetcher
        self._sync_timeout = sync_timeout
        self._transform_options = transform_options

        self._properties: list[Property] | None = None
        self._index: dict[str, Property] = {}
        self._phase = SyncPhase.EMPTY
        self._last_sync: datetime | None = None
        self._last_source: str | None = None
        self._last_error: str | None = None
        self._inflight: asyncio.Task | None = None

    # ========== State ==========

    @property
    def phase(self) -> SyncPhase:
        """Current phase."""
        return self._phase

    @property
    def is_loaded(self) -> bool:
        """Whether a dataset is in memory."""
        return bool(self._properties)

    @property
    def count(self) -> int:
        """Number of properties in memory."""
        return len(self._properties) if self._properties else 0

    @property
    def last_sync(self) -> datetime | None:
        """Time of the last successful pass (UTC)."""
        return self._last_sync

    @property
    def last_error(self) -> str | None:
        """Error of the last failed pass."""
        return self._last_error

    @property
    def is_syncing(self) -> bool:
        """Whether a pass is in flight."""
        return self._inflight is not None and not self._inflight.done()

    # ========== Reads ==========

    def get_all(self) -> list[Property]:
        """Get all properties (empty list if never loaded)."""
        return list(self._properties) if self._properties else []

    def get_by_id(self, property_id: str) -> Property | None:
        """Get a property by its ID."""
        return self._index.get(property_id)

    # ========== Ingestion ==========

    def _get_fetcher(self) -> DatasetFetcher:
        if self._fetcher is None:
            self._fetcher = get_dataset_fetcher()
        return self._fetcher

    def _get_transform_options(self) -> dict[str, Any]:
        if self._transform_options is None:
            photos = get_settings().photos
            self._transform_options = {
                "thumbnail_width": photos.thumbnail_width,
                "photo_proxy_url": photos.proxy_url or None,
                "placeholder_url": photos.placeholder_url,
                "max_photos": photos.max_photos,
            }
        return self._transform_options

    def _parse(self, text: str, source: str) -> list[Property]:
        """
        Parse export text into properties.

        Raises:
            EmptyDatasetError: No row produced a valid property
        """
        properties = transform_text_to_properties(text, **self._get_transform_options())
        if not properties:
            raise EmptyDatasetError(source)
        return properties

    def _replace(self, properties: list[Property], source: str) -> None:
        """Swap in a new dataset."""
        self._index = {prop.id: prop for prop in properties}
        self._properties = properties
        self._last_sync = datetime.now(timezone.utc)
        self._last_source = source
        self._last_error = None
        self._phase = SyncPhase.LOADED

    def _settle_failure(self, error: str) -> None:
        """Record a failed pass, keeping any previous dataset."""
        self._last_error = error
        self._phase = SyncPhase.LOADED if self.is_loaded else SyncPhase.FAILED

    def load_text(self, text: str, source: str = "<text>") -> SyncResult:
        """
        Ingest export text that was fetched elsewhere.

        Args:
            text: Whole export as text
            source: Label recorded as the dataset source

        Returns:
            SyncResult
        """
        try:
            properties = self._parse(text, source)
        except IngestionError as e:
            sync_log.error(f"Load failed: {e}")
            self._settle_failure(str(e))
            return SyncResult.fail(str(e))

        self._replace(properties, source)
        sync_log.info(f"Loaded {len(properties)} properties from {source}")
        return SyncResult.ok(len(properties), source=source)

    async def _run_sync(self) -> SyncResult:
        """Run one fetch-parse-replace pass."""
        self._phase = SyncPhase.LOADING
        sync_log.info("Loading properties...")

        try:
            fetch = self._get_fetcher().fetch()
            if self._sync_timeout is not None:
                dataset = await asyncio.wait_for(fetch, timeout=self._sync_timeout)
            else:
                dataset = await fetch
            properties = self._parse(dataset.text, dataset.source)
        except asyncio.TimeoutError:
            error = f"Dataset fetch timed out after {self._sync_timeout}s"
            sync_log.error(error)
            self._settle_failure(error)
            return SyncResult.fail(error)
        except asyncio.CancelledError:
            sync_log.warning("Sync cancelled")
            self._settle_failure("Sync cancelled")
            raise
        except IngestionError as e:
            sync_log.error(f"Sync failed: {e}")
            self._settle_failure(str(e))
            return SyncResult.fail(str(e))
        except Exception as e:
            error = f"Unexpected sync error: {e}"
            sync_log.error(error)
            self._settle_failure(error)
            return SyncResult.fail(error)

        self._replace(properties, dataset.source)
        sync_log.info(f"Loaded {len(properties)} properties from {dataset.source}")
        return SyncResult.ok(len(properties), source=dataset.source)

    async def sync(self) -> SyncResult:
        """
        Fetch, parse and replace the dataset.

        Joins the pass already in flight instead of starting a second one.
        Never raises for ingestion failures; they come back as SyncResult.

        Returns:
            SyncResult
        """
        if self._inflight is None or self._inflight.done():
            self._inflight = asyncio.create_task(self._run_sync())
        else:
            sync_log.debug("Joining sync already in flight")

        task = self._inflight
        try:
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            if task.cancelled():
                return SyncResult.fail("Sync cancelled")
            raise

    async def auto_sync(self) -> SyncResult:
        """
        Sync only if no dataset is loaded yet.

        Returns:
            SyncResult (cached=True when nothing had to be loaded)
        """
        if self._phase == SyncPhase.LOADED and self.is_loaded:
            return SyncResult.ok(self.count, source=self._last_source, cached=True)
        return await self.sync()

    def cancel(self) -> bool:
        """
        Cancel the pass in flight, if any.

        Returns:
            True if a pass was cancelled
        """
        if self.is_syncing:
            return self._inflight.cancel()
        return False

    async def close(self) -> None:
        """Close owned resources."""
        if self._fetcher:
            await self._fetcher.close()


# Shared instance for hosts that want one
_data_sync: DataSync | None = None


def get_data_sync() -> DataSync:
    """
    Get or create the shared DataSync instance.

    Returns:
        DataSync instance
    """
    global _data_sync
    if _data_sync is None:
        _data_sync = DataSync()
    return _data_sync
