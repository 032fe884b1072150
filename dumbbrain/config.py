"""DumbBrain Configuration — project-level .dumbbrainrc.json support.

Loads configuration from the nearest .dumbbrainrc.json (or
dumbbrain.config.json), searching upwards from the working directory.
Controls how the command-line tools present their results.

Example .dumbbrainrc.json:
    {
      "prompt": "db> ",
      "show_tree": true,
      "format": "pretty",
      "log_level": "DEBUG"
    }
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class DumbBrainConfig:
    """Project-level DumbBrain configuration."""
    prompt: str = "> "
    # Print the parse tree / token list before each result
    show_tree: bool = False
    show_tokens: bool = False
    # Output: "pretty" or "json"
    format: str = "pretty"
    log_level: str = "WARNING"


# ---------------------------------------------------------------------------
# Config file names (in priority order)
# ---------------------------------------------------------------------------

_CONFIG_FILES = [
    ".dumbbrainrc.json",
    "dumbbrain.config.json",
]


def find_config(start_dir: str = ".") -> Optional[str]:
    """Find the nearest config file by walking up from start_dir."""
    current = os.path.abspath(start_dir)
    while True:
        for name in _CONFIG_FILES:
            path = os.path.join(current, name)
            if os.path.isfile(path):
                return path
        parent = os.path.dirname(current)
        if parent == current:
            break
        current = parent
    return None


def load_config(path: Optional[str] = None, start_dir: str = ".") -> DumbBrainConfig:
    """Load configuration from a file.

    If no path is given, searches for a config file starting from start_dir.
    If no config file is found, or it cannot be read, returns defaults.
    """
    if path is None:
        path = find_config(start_dir)

    if path is None:
        return DumbBrainConfig()

    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError):
        return DumbBrainConfig()

    if not isinstance(data, dict):
        return DumbBrainConfig()
    return _dict_to_config(data)


def _dict_to_config(data: Dict[str, Any]) -> DumbBrainConfig:
    """Convert a parsed dict to DumbBrainConfig."""
    config = DumbBrainConfig()

    if "prompt" in data:
        config.prompt = str(data["prompt"])
    if "show_tree" in data:
        config.show_tree = bool(data["show_tree"])
    if "show_tokens" in data:
        config.show_tokens = bool(data["show_tokens"])
    if "format" in data:
        config.format = str(data["format"])
    if "log_level" in data:
        level = str(data["log_level"]).upper()
        if isinstance(logging.getLevelName(level), int):
            config.log_level = level

    return config
