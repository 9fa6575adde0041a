#!/usr/bin/env python3
"""
Deployment config validation against the JSON schema.
"""

import json
from pathlib import Path

import jsonschema


def schema_path():
    root = Path(__file__).parent.parent.parent
    return root / 'schemas' / 'deployment-config-schema.json'


def load_schema(path=None):
    with open(path or schema_path(), 'r') as f:
        return json.load(f)


def validate_config(config, schema=None):
    """
    Validate a loaded config dict.
    Returns (is_valid, errors_list)
    """
    if not config:
        return False, ["Configuration is empty"]

    try:
        schema = schema or load_schema()
    except (OSError, ValueError) as e:
        return False, [f"Error loading schema file: {e}"]

    validator = jsonschema.Draft7Validator(schema)
    errors = []
    for error in sorted(validator.iter_errors(config), key=lambda e: list(e.path)):
        error_path = ' -> '.join(str(p) for p in error.path) if error.path else 'root'
        errors.append(f"Schema validation failed at '{error_path}': {error.message}")

    if not errors:
        names = [t['name'] for t in config['targets']]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        for name in duplicates:
            errors.append(f"Duplicate target name: {name}")

    return len(errors) == 0, errors
