"""Dataset sources module."""

from src.sources.dataset_fetcher import (
    DatasetFetcher,
    FetchedDataset,
    get_dataset_fetcher,
)
from src.sources.errors import (
    EmptyDatasetError,
    IngestionError,
    SourceUnavailableError,
)

__all__ = [
    "DatasetFetcher",
    "FetchedDataset",
    "get_dataset_fetcher",
    "IngestionError",
    "SourceUnavailableError",
    "EmptyDatasetError",
]
