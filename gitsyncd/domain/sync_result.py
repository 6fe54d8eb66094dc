"""Outcome of a single sync cycle."""

from dataclasses import dataclass
from typing import Dict, Any


@dataclass(frozen=True)
class SyncResult:
    """Revisions seen during a successful sync and whether a checkout ran."""
    local: str
    remote: str
    changed: bool = False

    @property
    def revision(self) -> str:
        """Revision the working copy is at once the cycle finished."""
        return self.remote if self.changed else self.local

    def to_dict(self) -> Dict[str, Any]:
        return {
            'local': self.local,
            'remote': self.remote,
            'changed': self.changed,
            'revision': self.revision,
        }
