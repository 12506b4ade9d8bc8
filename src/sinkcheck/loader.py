"""
Connector configuration file loading.

Reads flat key-value connector configurations from Java-style
``.properties``, JSON, or YAML files.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Union

import javaproperties

from .models import ConfigurationSnapshot

__all__ = ["load_properties", "load_snapshot", "parse_properties"]

PROPERTIES_SUFFIXES = {".properties", ".conf", ".cfg"}
YAML_SUFFIXES = {".yaml", ".yml"}


def parse_properties(text: str) -> Dict[str, str]:
    """
    Parse Java-style properties text.

    Follows ``java.util.Properties`` syntax: ``=``, ``:`` or whitespace
    separators, ``#`` and ``!`` comment lines, backslash escapes (including
    ``\\uXXXX``) and trailing-backslash line continuation.
    """
    return javaproperties.loads(text)


def load_properties(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a flat configuration mapping from disk.

    Args:
        path: File with suffix .properties/.conf/.cfg, .json, .yaml or .yml

    Returns:
        Raw key-value mapping

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the suffix is unsupported, the file is not valid UTF-8,
            or the document is not a flat mapping
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    suffix = path.suffix.lower()
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ValueError(f"Configuration file {path} is not valid UTF-8: {e}") from e

    if suffix in PROPERTIES_SUFFIXES:
        try:
            return parse_properties(text)
        except javaproperties.InvalidUEscapeError as e:
            raise ValueError(f"Invalid properties in {path}: {e}") from e

    if suffix == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    elif suffix in YAML_SUFFIXES:
        import yaml

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
    else:
        raise ValueError(f"Unsupported configuration file type: {suffix or '(none)'}")

    # Connect REST payloads nest the properties under "config"
    if isinstance(data, dict) and isinstance(data.get("config"), dict):
        data = data["config"]

    if not isinstance(data, dict):
        raise ValueError(f"Configuration in {path} must be a mapping of keys to values")

    nested = [key for key, value in data.items() if isinstance(value, (dict, list))]
    if nested:
        raise ValueError(f"Configuration in {path} must be flat; nested values for: {', '.join(map(str, nested))}")

    return data


def load_snapshot(path: Union[str, Path]) -> ConfigurationSnapshot:
    """Load a file and build a validated snapshot from it."""
    return ConfigurationSnapshot.from_properties(load_properties(path))
