"""
Configuration package: immutable settings and schema validation.
"""

from .settings import (
    Settings, DeploymentTarget, ConfigError,
    load_settings, settings_from_config, BUNDLE, ARCHIVE
)
from .validation import validate_config

__all__ = [
    'Settings', 'DeploymentTarget', 'ConfigError',
    'load_settings', 'settings_from_config', 'validate_config',
    'BUNDLE', 'ARCHIVE'
]
