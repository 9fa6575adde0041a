#!/usr/bin/env python3
"""
Immutable deployment settings, built once at startup from the YAML config.
"""

from dataclasses import dataclass
from pathlib import Path

import yaml

from ..deployment.utils import load_config
from .validation import validate_config

BUNDLE = 'bundle'
ARCHIVE = 'archive'

DEFAULT_BUILD_DIR_NAME = 'build'
DEFAULT_MAX_BACKUPS = 3
DEFAULT_TOOL_MODE = 'command'


class ConfigError(Exception):
    """Configuration could not be loaded or is invalid."""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


@dataclass(frozen=True)
class DeploymentTarget:
    name: str
    destination: Path
    owner: str
    mode: str

    @property
    def owner_user(self):
        return self.owner.split(':', 1)[0]


@dataclass(frozen=True)
class Settings:
    staging_dir: Path
    extract_dir: Path
    build_dir_name: str
    max_backups: int
    tool_mode: str
    targets: tuple

    @property
    def extract_path(self):
        """Fixed temporary location of an extracted bundle's build directory."""
        return self.extract_dir / self.build_dir_name


def settings_from_config(config):
    """Validate a config dict and convert it to Settings."""
    is_valid, errors = validate_config(config)
    if not is_valid:
        raise ConfigError(errors)

    deployment = config['deployment']
    staging_dir = Path(deployment['staging_dir'])
    targets = tuple(
        DeploymentTarget(
            name=t['name'],
            destination=Path(t['destination']),
            owner=t['owner'],
            mode=t['mode'],
        )
        for t in config['targets']
    )
    return Settings(
        staging_dir=staging_dir,
        extract_dir=Path(deployment.get('extract_dir', staging_dir)),
        build_dir_name=deployment.get('build_dir_name', DEFAULT_BUILD_DIR_NAME),
        max_backups=deployment.get('max_backups', DEFAULT_MAX_BACKUPS),
        tool_mode=deployment.get('tool_mode', DEFAULT_TOOL_MODE),
        targets=targets,
    )


def load_settings(config_path=None):
    """Load, merge and validate the YAML config file."""
    try:
        config = load_config(config_path)
    except FileNotFoundError as e:
        raise ConfigError([f"Configuration file not found: {e.filename}"])
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError([f"Error loading configuration: {e}"])
    return settings_from_config(config)
