"""Briefing file storage."""

from .briefing_store import (
    BriefingNotFoundError,
    BriefingStore,
    BriefingStoreError,
    validate_briefing_path,
)

__all__ = [
    "BriefingStore",
    "BriefingStoreError",
    "BriefingNotFoundError",
    "validate_briefing_path",
]
