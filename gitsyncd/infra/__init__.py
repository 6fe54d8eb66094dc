"""
Infrastructure layer for gitsyncd.

Contains the abstraction over the external git executable:
- GitRunner: git command execution scoped to one working copy
- GitCommandError: structured failure of a git invocation

Both can be replaced by test doubles.
"""

from .git_client import GitRunner, GitCommandError

__all__ = [
    'GitRunner',
    'GitCommandError',
]
