#!/usr/bin/env python3
"""
Base interfaces for the external tools a deployment drives.
"""

# unzip convention: 0 clean, 1 warnings only, anything higher is fatal
WARNING_EXIT_MAX = 1


class Archiver:
    """Creates backup zips. Both methods return True on success."""

    def archive_directory(self, source_dir, archive_path):
        """
        Compress the full contents of source_dir into archive_path.

        Entries are stored relative to source_dir, dotfiles included.
        """
        raise NotImplementedError("Subclasses must implement archive_directory()")

    def archive_file(self, source_file, archive_path):
        """Compress a single file into archive_path without its directory prefix."""
        raise NotImplementedError("Subclasses must implement archive_file()")


class Extractor:
    """Decompresses a zip and reports an unzip-style graded exit status."""

    def extract(self, archive_path, output_dir):
        raise NotImplementedError("Subclasses must implement extract()")


class OwnershipSetter:
    """Applies a user:group spec to a path, recursing into directories."""

    def set_owner(self, owner, path):
        raise NotImplementedError("Subclasses must implement set_owner()")


def is_fatal_exit(exit_code):
    return exit_code > WARNING_EXIT_MAX


def split_owner(owner):
    """'user:group' -> ('user', 'group'); a bare 'user' gives group None."""
    user, _, group = owner.partition(':')
    return user, group or None
