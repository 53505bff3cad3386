"""Application services for the start pipeline."""

from .fetch_service import FetchResult, FetchService  # noqa: F401
from .install_service import InstallReport, InstallService, collect_values  # noqa: F401
from .start_service import DeleteOutcome, NewResult, StartService  # noqa: F401
from .tree_sync import FileFailure, SyncReport, sync_tree  # noqa: F401

__all__ = [
    "DeleteOutcome",
    "FetchResult",
    "FetchService",
    "FileFailure",
    "InstallReport",
    "InstallService",
    "NewResult",
    "StartService",
    "SyncReport",
    "collect_values",
    "sync_tree",
]
