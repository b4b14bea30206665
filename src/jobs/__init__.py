"""Jobs module for dataset ingestion."""

from src.jobs.data_sync import DataSync, SyncPhase, SyncResult, get_data_sync

__all__ = ["DataSync", "SyncPhase", "SyncResult", "get_data_sync"]
