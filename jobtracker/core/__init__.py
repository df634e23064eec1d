"""
Core models package
"""

from jobtracker.core.application import ApplicationStatus, JobApplication, StatusKind
from jobtracker.core.exceptions import FetchError, InvalidStatusError, SaveError, StoreError
from jobtracker.core.filters import ApplicationFilter, SortOrder

__all__ = [
    "ApplicationStatus",
    "JobApplication",
    "StatusKind",
    "ApplicationFilter",
    "SortOrder",
    "StoreError",
    "FetchError",
    "SaveError",
    "InvalidStatusError",
]
