#!/usr/bin/env python3
"""
Executor factory and package exports.
"""

import shutil
from collections import namedtuple

from .base import (
    Archiver, Extractor, OwnershipSetter,
    WARNING_EXIT_MAX, is_fatal_exit, split_owner
)
from .builtin import ZipfileArchiver, ZipfileExtractor, ShutilOwnershipSetter
from .local import (
    ZipCommandArchiver, UnzipCommandExtractor, ChownCommandOwnershipSetter,
    REQUIRED_COMMANDS
)

Tools = namedtuple('Tools', ['archiver', 'extractor', 'owner'])


def get_tools(settings):
    """
    Factory function to create the executors for the configured tool mode.

    Args:
        settings: Settings instance

    Returns:
        Tools(archiver, extractor, owner)
    """
    if settings.tool_mode == 'python':
        return Tools(ZipfileArchiver(), ZipfileExtractor(), ShutilOwnershipSetter())
    return Tools(ZipCommandArchiver(), UnzipCommandExtractor(), ChownCommandOwnershipSetter())


def missing_commands(settings, which=shutil.which):
    """Required external commands that are not on PATH (none in python mode)."""
    if settings.tool_mode == 'python':
        return []
    return [cmd for cmd in REQUIRED_COMMANDS if which(cmd) is None]


__all__ = [
    'Archiver', 'Extractor', 'OwnershipSetter', 'Tools',
    'WARNING_EXIT_MAX', 'is_fatal_exit', 'split_owner',
    'ZipCommandArchiver', 'UnzipCommandExtractor', 'ChownCommandOwnershipSetter',
    'ZipfileArchiver', 'ZipfileExtractor', 'ShutilOwnershipSetter',
    'get_tools', 'missing_commands'
]
