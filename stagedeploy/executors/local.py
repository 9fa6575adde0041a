#!/usr/bin/env python3
"""
Command-line executors: zip, unzip and chown run through subprocess.
"""

import os
import subprocess

from .base import Archiver, Extractor, OwnershipSetter

REQUIRED_COMMANDS = ('zip', 'unzip')


def _run(cmd, cwd=None):
    try:
        result = subprocess.run(cmd, cwd=cwd, capture_output=True, text=True)
    except OSError as e:
        print(f"ERROR: Could not run {cmd[0]}: {e}")
        return None
    if result.returncode != 0 and result.stderr:
        print(result.stderr.strip())
    return result.returncode


class ZipCommandArchiver(Archiver):
    """Backups via Info-ZIP `zip`."""

    def archive_directory(self, source_dir, archive_path):
        # zip appends to an existing archive, start clean
        if os.path.exists(archive_path):
            os.remove(archive_path)
        cmd = ['zip', '-qr', os.path.abspath(archive_path), '.']
        return _run(cmd, cwd=source_dir) == 0

    def archive_file(self, source_file, archive_path):
        if os.path.exists(archive_path):
            os.remove(archive_path)
        cmd = ['zip', '-qj', str(archive_path), str(source_file)]
        return _run(cmd) == 0


class UnzipCommandExtractor(Extractor):
    """Extraction via Info-ZIP `unzip`; its exit codes are passed through."""

    def extract(self, archive_path, output_dir):
        cmd = ['unzip', '-q', '-o', str(archive_path), '-d', str(output_dir)]
        code = _run(cmd)
        # could not even start unzip; report like a missing file
        return 9 if code is None else code


class ChownCommandOwnershipSetter(OwnershipSetter):
    """Ownership via `chown`, recursive for directories."""

    def set_owner(self, owner, path):
        cmd = ['chown']
        if os.path.isdir(path):
            cmd.append('-R')
        cmd.extend([owner, str(path)])
        return _run(cmd) == 0
