"""
Shared fixtures: settings rooted in tmp_path and recording fake executors.
"""

import os
import time
import zipfile
from pathlib import Path

import pytest

from stagedeploy.config import Settings, DeploymentTarget, BUNDLE, ARCHIVE
from stagedeploy.executors import Tools, ZipfileArchiver, ZipfileExtractor


class RecordingArchiver:
    """Real zipfile archiving unless told to fail; records every call."""

    def __init__(self, succeed=True):
        self.succeed = succeed
        self.calls = []
        self._real = ZipfileArchiver()

    def archive_directory(self, source_dir, archive_path):
        self.calls.append(('directory', Path(source_dir), Path(archive_path)))
        if not self.succeed:
            return False
        return self._real.archive_directory(source_dir, archive_path)

    def archive_file(self, source_file, archive_path):
        self.calls.append(('file', Path(source_file), Path(archive_path)))
        if not self.succeed:
            return False
        return self._real.archive_file(source_file, archive_path)


class RecordingExtractor:
    """Extracts for real, then reports `exit_code`; a fatal code skips extraction."""

    def __init__(self, exit_code=0):
        self.exit_code = exit_code
        self.calls = []
        self._real = ZipfileExtractor()

    def extract(self, archive_path, output_dir):
        self.calls.append((Path(archive_path), Path(output_dir)))
        if self.exit_code > 1:
            return self.exit_code
        code = self._real.extract(archive_path, output_dir)
        return code or self.exit_code


class RecordingOwnershipSetter:

    def __init__(self, succeed=True):
        self.succeed = succeed
        self.calls = []

    def set_owner(self, owner, path):
        self.calls.append((owner, Path(path)))
        return self.succeed


def scripted_prompt(*answers):
    """Prompt that returns the given answers in order, then raises EOFError."""
    remaining = list(answers)
    asked = []

    def prompt(message):
        asked.append(message)
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    prompt.asked = asked
    return prompt


def make_zip(path, entries):
    """Write a zip at path from {arcname: text}."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, 'w') as zipf:
        for name, content in entries.items():
            zipf.writestr(name, content)
    return path


def snapshot_tree(root):
    """{relative path: bytes} for every file under root."""
    root = Path(root)
    return {
        str(p.relative_to(root)): p.read_bytes()
        for p in sorted(root.rglob('*')) if p.is_file()
    }


def age_file(path, seconds_ago):
    stamp = time.time() - seconds_ago
    os.utime(path, (stamp, stamp))


@pytest.fixture
def staging(tmp_path):
    path = tmp_path / "staging"
    path.mkdir()
    return path


@pytest.fixture
def bundle_target(tmp_path):
    (tmp_path / "dest").mkdir()
    return DeploymentTarget(
        name="Project One",
        destination=tmp_path / "dest" / "app",
        owner="www-data:www-data",
        mode=BUNDLE,
    )


@pytest.fixture
def archive_target(tmp_path):
    webapps = tmp_path / "webapps"
    webapps.mkdir()
    return DeploymentTarget(
        name="A .war file",
        destination=webapps,
        owner="tomcat:tomcat",
        mode=ARCHIVE,
    )


@pytest.fixture
def make_settings(staging, bundle_target, archive_target):
    def factory(max_backups=3, targets=None):
        return Settings(
            staging_dir=staging,
            extract_dir=staging,
            build_dir_name="build",
            max_backups=max_backups,
            tool_mode="python",
            targets=tuple(targets) if targets else (bundle_target, archive_target),
        )
    return factory


@pytest.fixture
def settings(make_settings):
    return make_settings()


@pytest.fixture
def make_tools():
    def factory(archive_ok=True, extract_code=0, owner_ok=True):
        return Tools(
            RecordingArchiver(archive_ok),
            RecordingExtractor(extract_code),
            RecordingOwnershipSetter(owner_ok),
        )
    return factory


@pytest.fixture
def tools(make_tools):
    return make_tools()
