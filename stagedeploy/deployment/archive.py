#!/usr/bin/env python3
"""
Single-file deployment (e.g. a .war dropped into a servlet container's webapps).
"""

import glob
import os
import shutil
from pathlib import Path

from .bundle import read_source_name
from .results import DeployResult, DeploymentError, ErrorKind, State
from .rotation import rotate_backups
from .utils import log_info, log_success, log_warn, log_error, timestamp


def archive_backup_pattern(dest_file):
    return glob.escape(str(dest_file)) + ".*.zip"


def archive_backup_path(dest_file, stamp):
    return Path(f"{dest_file}.{stamp}.zip")


def _validate(source, dest_dir):
    if not source.is_file():
        raise DeploymentError(ErrorKind.SOURCE_NOT_FOUND, f"Source file not found: {source}")
    if not (dest_dir.is_dir() and os.access(dest_dir, os.W_OK)):
        raise DeploymentError(
            ErrorKind.PERMISSION_DENIED,
            f"Write permission denied for destination directory: {dest_dir}",
            "You may need to run this tool with 'sudo' or adjust directory permissions."
        )


def _backup(dest_file, settings, archiver):
    if not dest_file.exists():
        return None

    backup_file = archive_backup_path(dest_file, timestamp())
    log_info(f"Backing up existing {dest_file.name} to {backup_file}")
    if not archiver.archive_file(dest_file, backup_file):
        raise DeploymentError(ErrorKind.BACKUP_FAILED, "Backup failed. Aborting deployment.")
    log_success("Backup created successfully.")

    rotate_backups(archive_backup_pattern(dest_file), settings.max_backups)
    return backup_file


def _copy(source, dest_file):
    log_info(f"Copying {source.name} to {dest_file.parent}...")
    try:
        shutil.copyfile(source, dest_file)
    except OSError as e:
        raise DeploymentError(ErrorKind.COPY_FAILED,
                              f"Failed to copy {source.name}. Check permissions. ({e})",
                              "Restore the previous file from its backup if it was damaged.")


def deploy_archive(target, settings, tools, prompt=input):
    """
    Copy a staged archive file into target.destination, keeping its name.

    Returns:
        DeployResult
    """
    result = DeployResult(target=target.name)
    dest_dir = Path(target.destination)
    log_info(f"Starting {target.name} deployment...")

    try:
        file_name = read_source_name(prompt, "Enter the name of the archive file (e.g. myapp.war): ")
        source = settings.staging_dir / file_name
        dest_file = dest_dir / Path(file_name).name
        result.source = str(source)

        result.advance(State.VALIDATING)
        _validate(source, dest_dir)

        result.advance(State.BACKING_UP)
        backup_file = _backup(dest_file, settings, tools.archiver)
        result.backup = str(backup_file) if backup_file else None

        result.advance(State.COPYING)
        _copy(source, dest_file)

        result.advance(State.SETTING_OWNERSHIP)
        log_info(f"Setting ownership of {dest_file.name} to {target.owner}...")
        if not tools.owner.set_owner(target.owner, dest_file):
            message = f"Failed to set ownership. Does user '{target.owner_user}' exist?"
            log_warn(message)
            result.warn(ErrorKind.OWNERSHIP_WARNING, message)
    except DeploymentError as e:
        result.fail(e)
        log_error(e.message)
        if e.hint:
            log_warn(e.hint)
        return result

    result.advance(State.DONE)
    log_success(f"{dest_file.name} deployed successfully! The server runtime will unpack it shortly.")
    return result
