#!/usr/bin/env python3
"""
Bundle deployment: replace a web root with the build directory of a staged zip.

Sequence: ask for the zip name, validate, back up and rotate, clear the
destination, extract, move the build output in, set ownership, clean up.
"""

import glob
import os
import shutil
from pathlib import Path

from .results import DeployResult, DeploymentError, ErrorKind, State
from .rotation import rotate_backups
from .utils import log_info, log_success, log_warn, log_error, timestamp
from ..executors import is_fatal_exit

RESTORE_HINT = "Destination was already cleared; restore it manually from the latest backup."


def bundle_backup_pattern(destination):
    return glob.escape(str(destination)) + "_*.zip"


def bundle_backup_path(destination, stamp):
    return Path(f"{destination}_{stamp}.zip")


def read_source_name(prompt, message):
    try:
        name = prompt(message)
    except EOFError:
        name = ''
    name = (name or '').strip()
    if not name:
        raise DeploymentError(ErrorKind.EMPTY_INPUT, "File name cannot be empty. Aborting.")
    if name in ('.', '..') or Path(name).name != name or '\\' in name:
        raise DeploymentError(ErrorKind.SOURCE_NOT_FOUND,
                              f"File name must not contain path components: {name}")
    return name


def _validate(source, destination):
    if not source.is_file():
        raise DeploymentError(ErrorKind.SOURCE_NOT_FOUND, f"Source file not found: {source}")
    if destination.is_dir():
        if not os.access(destination, os.W_OK):
            raise DeploymentError(ErrorKind.PERMISSION_DENIED,
                                  f"Permission denied to write to destination: {destination}")
    elif not os.access(destination.parent, os.W_OK):
        raise DeploymentError(ErrorKind.PERMISSION_DENIED,
                              f"Permission denied to create directory: {destination}")
    try:
        destination.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DeploymentError(ErrorKind.PERMISSION_DENIED,
                              f"Could not create destination {destination}: {e}")


def _backup(destination, settings, archiver):
    """Snapshot a non-empty destination, then rotate. Returns the backup path or None."""
    backup_file = None
    if any(destination.iterdir()):
        backup_file = bundle_backup_path(destination, timestamp())
        log_info(f"Backing up existing content of {destination} to {backup_file}")
        if not archiver.archive_directory(destination, backup_file):
            raise DeploymentError(ErrorKind.BACKUP_FAILED, "Backup failed. Aborting deployment.")
        log_success("Backup created successfully.")
    else:
        log_info("Destination directory is empty. No backup needed.")

    rotate_backups(bundle_backup_pattern(destination), settings.max_backups)
    return backup_file


def _remove_entry(path):
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def clear_directory(directory):
    """Delete every entry of directory, keeping the directory itself."""
    for entry in Path(directory).iterdir():
        _remove_entry(entry)


def _replace(source, destination, settings, extractor):
    log_info(f"Cleaning destination directory: {destination}")
    try:
        clear_directory(destination)
    except OSError as e:
        raise DeploymentError(ErrorKind.MOVE_FAILED,
                              f"Failed to clear destination {destination}: {e}", RESTORE_HINT)

    extract_path = settings.extract_path
    log_info(f"Extracting {source}...")
    shutil.rmtree(extract_path, ignore_errors=True)
    try:
        settings.extract_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DeploymentError(ErrorKind.EXTRACTION_FAILED,
                              f"Cannot create extraction directory {settings.extract_dir}: {e}",
                              RESTORE_HINT)
    exit_code = extractor.extract(source, settings.extract_dir)
    if is_fatal_exit(exit_code) or not extract_path.is_dir():
        raise DeploymentError(
            ErrorKind.EXTRACTION_FAILED,
            f"Failed to extract or extracted directory '{settings.build_dir_name}' "
            f"not found in zip (exit code {exit_code}).",
            RESTORE_HINT
        )
    if exit_code:
        log_warn(f"Extraction finished with warnings (exit code {exit_code}).")

    log_info("Moving new files to destination...")
    try:
        for entry in sorted(extract_path.iterdir()):
            shutil.move(str(entry), str(destination / entry.name))
    except (OSError, shutil.Error) as e:
        raise DeploymentError(ErrorKind.MOVE_FAILED,
                              f"Failed to move files to destination. Check permissions. ({e})",
                              RESTORE_HINT)


def _set_ownership(target, owner_setter, result):
    log_info(f"Setting ownership for {target.name} to {target.owner}...")
    if not owner_setter.set_owner(target.owner, target.destination):
        message = f"Failed to set ownership. Does user '{target.owner_user}' exist?"
        log_warn(message)
        result.warn(ErrorKind.OWNERSHIP_WARNING, message)


def deploy_bundle(target, settings, tools, prompt=input):
    """
    Deploy a zipped build directory from staging to target.destination.

    Args:
        target: DeploymentTarget in bundle mode
        settings: Settings
        tools: executors.Tools
        prompt: callable(message) -> str supplying operator input

    Returns:
        DeployResult
    """
    result = DeployResult(target=target.name)
    destination = Path(target.destination)
    log_info(f"Starting deployment for {target.name}...")

    try:
        zip_name = read_source_name(prompt, f"Enter the name of the zip file for '{target.name}': ")
        source = settings.staging_dir / zip_name
        result.source = str(source)

        result.advance(State.VALIDATING)
        _validate(source, destination)

        result.advance(State.BACKING_UP)
        backup_file = _backup(destination, settings, tools.archiver)
        result.backup = str(backup_file) if backup_file else None

        result.advance(State.REPLACING)
        _replace(source, destination, settings, tools.extractor)

        result.advance(State.SETTING_OWNERSHIP)
        _set_ownership(target, tools.owner, result)
    except DeploymentError as e:
        result.fail(e)
        log_error(e.message)
        if e.hint and result.failed_state is State.REPLACING:
            log_warn(e.hint)
        return result

    log_info("Cleaning up temporary files...")
    shutil.rmtree(settings.extract_path, ignore_errors=True)

    result.advance(State.DONE)
    log_success(f"{target.name} deployed successfully!")
    return result
