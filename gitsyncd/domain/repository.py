"""
Repository identity for gitsyncd.

RepositoryIdentity names the working copy being kept in sync: where it lives,
which remote it follows and which branch on that remote. It is immutable and
carries no cached state; whether the path holds a repository is asked of the
filesystem every time.
"""

from dataclasses import dataclass
from typing import Dict, Any
from pathlib import Path

METADATA_DIR = ".git"


@dataclass(frozen=True)
class RepositoryIdentity:
    """A working copy tracking one branch of one remote."""
    path: str
    remote: str = "origin"
    branch: str = "master"

    def __post_init__(self):
        for name in ('path', 'remote', 'branch'):
            if not getattr(self, name):
                raise ValueError(f"repository {name} must not be empty")

    @property
    def remote_ref(self) -> str:
        """Remote-tracking ref, e.g. ``origin/master``."""
        return f"{self.remote}/{self.branch}"

    @property
    def metadata_dir(self) -> Path:
        return Path(self.path) / METADATA_DIR

    def to_dict(self) -> Dict[str, Any]:
        return {
            'path': self.path,
            'remote': self.remote,
            'branch': self.branch,
        }
