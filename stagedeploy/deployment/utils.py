#!/usr/bin/env python3
"""
Deployment utilities - shared helper functions.
"""

import os
import sys
from datetime import datetime
from pathlib import Path

import yaml

COLOR_RESET = '\033[0m'
COLOR_RED = '\033[0;31m'
COLOR_GREEN = '\033[0;32m'
COLOR_BLUE = '\033[0;34m'
COLOR_YELLOW = '\033[1;33m'

TIMESTAMP_FORMAT = '%Y%m%d_%H%M%S'


def load_yaml(file_path):
    with open(file_path, 'r') as f:
        return yaml.safe_load(f)


def deep_merge(base, override):
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def default_config_path():
    """Config path from DEPLOYMENT_CONFIG, else config/deployment-config.yaml at the repo root."""
    env_path = os.environ.get('DEPLOYMENT_CONFIG', '').strip()
    if env_path:
        return Path(env_path)
    root = Path(__file__).parent.parent.parent
    return root / "config" / "deployment-config.yaml"


def load_config(config_path=None):
    """
    Load configuration with optional local overrides.
    - Default: deployment-config.yaml (production mode)
    - DEPLOYMENT_ENV=local: merges deployment-config.local.yaml overrides
    """
    base_path = Path(config_path) if config_path else default_config_path()
    base_config = load_yaml(base_path) or {}

    env = os.environ.get('DEPLOYMENT_ENV', '').strip()
    if env == 'local':
        override_path = base_path.with_name(base_path.stem + ".local" + base_path.suffix)
        if override_path.exists():
            override_config = load_yaml(override_path) or {}
            return deep_merge(base_config, override_config)

    return base_config


def timestamp(now=None):
    """Second-granularity stamp used in backup file names."""
    return (now or datetime.now()).strftime(TIMESTAMP_FORMAT)


def _emit(color, label, message):
    if sys.stdout.isatty():
        print(f"{color}[{label}] {message}{COLOR_RESET}")
    else:
        print(f"[{label}] {message}")


def log_info(message):
    _emit(COLOR_BLUE, "INFO", message)


def log_success(message):
    _emit(COLOR_GREEN, "OK", message)


def log_warn(message):
    _emit(COLOR_YELLOW, "WARNING", message)


def log_error(message):
    _emit(COLOR_RED, "ERROR", message)


def print_banner(title, width=41):
    print("=" * width)
    print(title.center(width))
    print("=" * width)
