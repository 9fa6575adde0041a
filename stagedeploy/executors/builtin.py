#!/usr/bin/env python3
"""
Pure-Python executors (zipfile, shutil.chown) for hosts without Info-ZIP.

Extraction outcomes are mapped onto unzip's exit codes so callers apply one
warning/fatal threshold regardless of the backend.
"""

import os
import shutil
import zipfile
from pathlib import Path

from .base import Archiver, Extractor, OwnershipSetter, split_owner

EXIT_OK = 0
EXIT_BAD_ARCHIVE = 3
EXIT_NOT_FOUND = 9
EXIT_WRITE_ERROR = 50


def _discard(path):
    """Drop a partially written archive so it never joins a backup set."""
    try:
        os.remove(path)
    except OSError:
        pass


class ZipfileArchiver(Archiver):

    def archive_directory(self, source_dir, archive_path):
        source_dir = Path(source_dir)
        try:
            with zipfile.ZipFile(archive_path, 'w', zipfile.ZIP_DEFLATED) as zipf:
                for path in sorted(source_dir.rglob('*')):
                    zipf.write(path, arcname=str(path.relative_to(source_dir)))
        except (OSError, zipfile.BadZipFile) as e:
            print(f"ERROR: Archive creation failed: {e}")
            _discard(archive_path)
            return False
        return True

    def archive_file(self, source_file, archive_path):
        try:
            with zipfile.ZipFile(archive_path, 'w', zipfile.ZIP_DEFLATED) as zipf:
                zipf.write(source_file, arcname=Path(source_file).name)
        except OSError as e:
            print(f"ERROR: Archive creation failed: {e}")
            _discard(archive_path)
            return False
        return True


class ZipfileExtractor(Extractor):

    def extract(self, archive_path, output_dir):
        if not os.path.isfile(archive_path):
            return EXIT_NOT_FOUND
        try:
            with zipfile.ZipFile(archive_path, 'r') as zipf:
                if zipf.testzip() is not None:
                    return EXIT_BAD_ARCHIVE
                zipf.extractall(output_dir)
        except zipfile.BadZipFile as e:
            print(f"ERROR: Not a valid zip archive: {e}")
            return EXIT_BAD_ARCHIVE
        except (RuntimeError, NotImplementedError, zipfile.LargeZipFile) as e:
            # encrypted entries, unsupported compression methods
            print(f"ERROR: Cannot extract archive: {e}")
            return EXIT_BAD_ARCHIVE
        except OSError as e:
            print(f"ERROR: Extraction failed: {e}")
            return EXIT_WRITE_ERROR
        return EXIT_OK


class ShutilOwnershipSetter(OwnershipSetter):

    def set_owner(self, owner, path):
        user, group = split_owner(owner)
        try:
            shutil.chown(path, user=user, group=group)
            if os.path.isdir(path):
                for dirpath, dirnames, filenames in os.walk(path):
                    for name in dirnames + filenames:
                        shutil.chown(os.path.join(dirpath, name), user=user, group=group)
        except (LookupError, OSError) as e:
            print(f"ERROR: chown {owner} {path} failed: {e}")
            return False
        return True
