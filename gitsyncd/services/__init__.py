"""
Service layer for gitsyncd.

Contains the logic that orchestrates the domain objects and the git runner:
- SyncService: validity check, bootstrap clone and the fetch/compare/checkout cycle
"""

from .sync_service import SyncService

__all__ = [
    'SyncService',
]
