"""
Dataset fetcher with candidate fallback.

Reads the listing export from the first candidate location that resolves.
Candidates are either http(s) URLs (fetched with requests) or local paths.
"""

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import requests
from loguru import logger

from config.settings import get_settings
from src.sources.errors import SourceUnavailableError

fetcher_log = logger.bind(module="DatasetFetcher")

TEXT_ENCODING = "utf-8-sig"  # Spreadsheet exports often start with a BOM


@dataclass(frozen=True)
class FetchedDataset:
    """Raw export text and the location it was read from."""

    text: str
    source: str


class DatasetFetcher:
    """
    Dataset fetcher with automatic fallback.

    Tries each candidate in order and returns the first one that resolves.
    Blocking I/O runs in the event loop's executor so fetching is the only
    suspension point of an ingestion pass.
    """

    DEFAULT_HEADERS = {
        "Accept": "text/csv,text/plain;q=0.9,*/*;q=0.8",
    }

    def __init__(
        self,
        candidates: list[str],
        timeout: float = 15.0,
        base_dir: str | Path | None = None,
    ):
        """
        Initialize the dataset fetcher.

        Args:
            candidates: Locations to try, in order (URLs or file paths)
            timeout: HTTP request timeout in seconds
            base_dir: Directory relative file paths are resolved against
        """
        self._candidates = list(candidates)
        self._timeout = timeout
        self._base_dir = Path(base_dir) if base_dir else None
        self._session: Optional[requests.Session] = None

    @property
    def candidates(self) -> list[str]:
        """Configured candidate locations."""
        return list(self._candidates)

    async def start(self) -> None:
        """Initialize HTTP session."""
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update(self.DEFAULT_HEADERS)
            fetcher_log.debug("DatasetFetcher started")

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session:
            self._session.close()
            self._session = None
            fetcher_log.debug("DatasetFetcher closed")

    @staticmethod
    def is_remote(location: str) -> bool:
        """Check whether a candidate is an http(s) URL."""
        return location.lower().startswith(("http://", "https://"))

    def _resolve_path(self, location: str) -> Path:
        """Resolve a local candidate against base_dir."""
        path = Path(location)
        if self._base_dir and not path.is_absolute():
            path = self._base_dir / path
        return path

    def _read_remote(self, location: str) -> str:
        """Fetch a remote candidate (blocking)."""
        resp = self._session.get(location, timeout=self._timeout)
        resp.raise_for_status()
        return resp.content.decode(TEXT_ENCODING, errors="replace")

    def _read_local(self, location: str) -> str:
        """Read a local candidate (blocking)."""
        return self._resolve_path(location).read_text(encoding=TEXT_ENCODING, errors="replace")

    async def fetch_text(self, location: str) -> str:
        """
        Read a single candidate.

        Args:
            location: URL or file path

        Returns:
            Export text

        Raises:
            requests.RequestException: HTTP failure
            OSError: File missing or unreadable
            ValueError: Location is not a valid path
        """
        loop = asyncio.get_running_loop()

        if self.is_remote(location):
            if self._session is None:
                await self.start()
            return await loop.run_in_executor(None, self._read_remote, location)

        return await loop.run_in_executor(None, self._read_local, location)

    async def fetch(self) -> FetchedDataset:
        """
        Fetch the export from the first candidate that resolves.

        Returns:
            FetchedDataset with text and source location

        Raises:
            SourceUnavailableError: No candidate could be read
        """
        attempted: list[str] = []

        for location in self._candidates:
            attempted.append(location)
            try:
                text = await self.fetch_text(location)
            except (requests.RequestException, OSError, ValueError) as e:
                fetcher_log.warning(f"Candidate {location} unavailable: {e}")
                continue

            fetcher_log.info(f"Found dataset at: {location}")
            return FetchedDataset(text=text, source=location)

        fetcher_log.error(f"No dataset candidate resolved ({len(attempted)} tried)")
        raise SourceUnavailableError(attempted)


def get_dataset_fetcher(
    candidates: list[str] | None = None,
    timeout: float | None = None,
    base_dir: str | Path | None = None,
) -> DatasetFetcher:
    """
    Create a dataset fetcher, filling gaps from settings.

    Args:
        candidates: Locations to try (defaults to DATASET_SOURCES)
        timeout: HTTP timeout (defaults to DATASET_TIMEOUT)
        base_dir: Base for relative paths (defaults to DATASET_BASE_DIR)

    Returns:
        DatasetFetcher instance
    """
    settings = get_settings().dataset
    return DatasetFetcher(
        candidates=candidates if candidates is not None else settings.sources,
        timeout=timeout if timeout is not None else settings.timeout,
        base_dir=base_dir if base_dir is not None else (settings.base_dir or None),
    )
