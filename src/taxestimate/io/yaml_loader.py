"""YAML data file loader for rate tables and return inputs."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


def load_yaml(path: Path) -> Any:
    """Load and parse a YAML file.

    JSON is a subset of YAML, so ``.json`` input files load the same way.

    Args:
        path: Absolute or relative path to the YAML file.

    Returns:
        Parsed YAML content (typically a dict or list).

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    with open(path) as f:
        return yaml.safe_load(f)


def package_path(relative_path: str) -> Path:
    """Resolve a path relative to the taxestimate package root."""
    return Path(__file__).resolve().parent.parent / relative_path
