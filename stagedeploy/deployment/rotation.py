#!/usr/bin/env python3
"""
Backup rotation: keep only the most recent N backups matching a pattern.
"""

import glob
import os

from .utils import log_info, log_success


def _mtime(path):
    try:
        return os.path.getmtime(path)
    except OSError:
        return 0


def list_backups(pattern):
    """Files matching the glob pattern, newest first by modification time."""
    files = [f for f in glob.glob(pattern) if os.path.isfile(f)]
    return sorted(files, key=_mtime, reverse=True)


def rotate_backups(pattern, keep):
    """
    Delete every backup matching pattern except the newest `keep`.

    Removal errors are ignored; rotation is housekeeping and re-running it
    on an already rotated set changes nothing.

    Returns:
        List of paths that were removed
    """
    stale = list_backups(pattern)[max(keep, 0):]
    if not stale:
        return []

    log_info("Cleaning up old backups...")
    removed = []
    for path in stale:
        try:
            os.remove(path)
            removed.append(path)
        except OSError:
            continue
    log_success(f"Old backups removed ({len(removed)}).")
    return removed
