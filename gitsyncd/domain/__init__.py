"""
Domain layer for gitsyncd.

Contains pure domain objects with no I/O or side effects:
- RepositoryIdentity: path, remote and branch of the synced working copy
- SyncResult: outcome of one successful sync cycle
"""

from .repository import RepositoryIdentity, METADATA_DIR
from .sync_result import SyncResult

__all__ = [
    'RepositoryIdentity',
    'METADATA_DIR',
    'SyncResult',
]
