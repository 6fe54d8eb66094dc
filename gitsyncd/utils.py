"""
Filesystem helpers for gitsyncd.

Only "does not exist" is treated as a negative answer; any other error from
the filesystem (permissions, I/O) propagates to the caller.
"""

import os
import stat
import logging

logger = logging.getLogger(__name__)


def path_exists(path, directory=False):
    """
    Check whether a path exists.

    Args:
        path (str or Path): Path to check.
        directory (bool): If True, the path must also be a directory.

    Returns:
        bool: True if the path exists (and is a directory when requested).

    Raises:
        OSError: If the path cannot be inspected for a reason other than absence.
    """
    try:
        st = os.stat(path)
    except FileNotFoundError:
        return False
    if directory:
        return stat.S_ISDIR(st.st_mode)
    return True


def dir_exists(path):
    """Return True if ``path`` is an existing directory."""
    return path_exists(path, directory=True)


def file_exists(path):
    """Return True if anything exists at ``path``."""
    return path_exists(path, directory=False)


def ensure_directory(path, mode=0o700):
    """
    Create ``path`` and any missing parents.

    Returns:
        bool: True if the directory was created, False if it already existed.
    """
    if dir_exists(path):
        return False
    os.makedirs(path, mode=mode, exist_ok=True)
    logger.debug(f"created directory {path}")
    return True
