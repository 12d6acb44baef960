"""Runner config file I/O, dispatched on the file extension."""

import json
import os
from typing import Any

import yaml

YAML_SUFFIXES = (".yaml", ".yml")
JSON_SUFFIXES = (".json",)


def config_format(filepath: str) -> str | None:
    """Return "yaml", "json", or None for an unsupported extension."""
    lowered = filepath.lower()
    if lowered.endswith(YAML_SUFFIXES):
        return "yaml"
    if lowered.endswith(JSON_SUFFIXES):
        return "json"
    return None


def ensure_parent_dir(filepath: str) -> None:
    """Create parent directory of filepath if needed."""
    os.makedirs(os.path.dirname(filepath) or ".", exist_ok=True)


def read_config_file(filepath: str) -> dict[str, Any]:
    """Parse a YAML or JSON config file.

    Returns:
        Parsed content; empty dict for an empty file

    Raises:
        ValueError: If the extension is not .yaml/.yml/.json
    """
    fmt = config_format(filepath)
    if fmt is None:
        raise ValueError(f"Unsupported config file type: {filepath}")
    with open(filepath, encoding="utf-8") as f:
        data = yaml.safe_load(f) if fmt == "yaml" else json.load(f)
    return data if data is not None else {}


def write_config_file(filepath: str, data: dict[str, Any]) -> None:
    """Write data as YAML or JSON depending on filepath's extension."""
    fmt = config_format(filepath)
    if fmt is None:
        raise ValueError(f"Unsupported config file type: {filepath}")
    ensure_parent_dir(filepath)
    with open(filepath, "w", encoding="utf-8") as f:
        if fmt == "yaml":
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        else:
            json.dump(data, f, indent=2)
