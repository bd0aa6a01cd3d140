# Core business logic modules
# - categories: extension -> category classification
# - scanner: extension survey and candidate file walk
# - transfer: single file move/copy with collision handling
# - organizer: batch orchestration and folder validation
# - cleanup: empty folder removal
# - worker: background worker threads (PySide6)

from foldersort_app.core.categories import (
    CATEGORY_EXTENSIONS,
    Category,
    category_for,
    get_file_extension,
)
from foldersort_app.core.cleanup import CleanupResult, remove_empty_directories
from foldersort_app.core.organizer import FileOrganizer, OrganizationStats, validate_folders
from foldersort_app.core.scanner import (
    ScanDepth,
    ScanEntry,
    ScanFilter,
    iter_candidates,
    survey_extensions,
)
from foldersort_app.core.transfer import (
    ConflictDecision,
    ConflictResolver,
    FixedDecisionResolver,
    SessionState,
    TransferAction,
    TransferOutcome,
    next_available_name,
    transfer_file,
)

__all__ = [
    # Classification
    "Category",
    "CATEGORY_EXTENSIONS",
    "category_for",
    "get_file_extension",
    # Scanning
    "ScanDepth",
    "ScanEntry",
    "ScanFilter",
    "iter_candidates",
    "survey_extensions",
    # Transfer
    "ConflictDecision",
    "ConflictResolver",
    "FixedDecisionResolver",
    "SessionState",
    "TransferAction",
    "TransferOutcome",
    "next_available_name",
    "transfer_file",
    # Orchestration
    "FileOrganizer",
    "OrganizationStats",
    "validate_folders",
    # Cleanup
    "CleanupResult",
    "remove_empty_directories",
]
