"""
Ingestion errors.

Raised inside the ingestion pipeline and turned into SyncResult values at
the DataSync boundary, so they never reach the host application.
"""


class IngestionError(Exception):
    """Base class for dataset ingestion failures (all retryable)."""


class SourceUnavailableError(IngestionError):
    """No candidate dataset location could be read."""

    def __init__(self, attempted: list[str]):
        self.attempted = attempted
        locations = ", ".join(attempted) if attempted else "none configured"
        super().__init__(f"Dataset not found (tried: {locations})")


class EmptyDatasetError(IngestionError):
    """The dataset was read but produced no valid properties."""

    def __init__(self, source: str):
        self.source = source
        super().__init__(f"No valid properties found in {source}")
