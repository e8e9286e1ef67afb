# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .media_map_service import (
    FixSummary,
    GenerateSummary,
    MediaMapService,
    SyncSummary,
)

__all__ = [
    "FixSummary",
    "GenerateSummary",
    "MediaMapService",
    "SyncSummary",
]
