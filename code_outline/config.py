"""
Configuration constants and loading utilities for code_outline.
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any

import yaml

from code_outline.errors import ConfigError

logger = logging.getLogger(__name__)


DEFAULT_EXCLUDE = [
    "node_modules",
    "__pycache__",
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "venv",
    "dist",
    "build",
    "target",
    ".next",
    "coverage",
    ".pytest_cache",
    ".mypy_cache",
    ".gradle",
    ".dart_tool",
    "zig-cache",
    "zig-out",
    "*.pyc",
    "*.pyo",
    "*.min.js",
    ".DS_Store",
    "*.log",
    "*.egg-info",
]

# Files larger than this are most likely generated or minified.
DEFAULT_MAX_FILE_SIZE = 2 * 1024 * 1024


DEFAULT_CONFIG: dict[str, Any] = {
    # Exclusion patterns (applied in addition to CLI --exclude)
    "exclude": [],

    # Extra language profiles; see get_config_template() for the format
    "languages": [],

    "scan": {
        "max_file_size": DEFAULT_MAX_FILE_SIZE,
        "workers": 1,
    },
}


def _parse_document(text: str, config_path: Path) -> Any:
    if config_path.suffix.lower() == ".json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e


def load_config(config_path: Path) -> dict[str, Any]:
    """
    Load configuration from a YAML or JSON file, merged with defaults.

    Files ending in `.json` are read as JSON, anything else as YAML.

    Args:
        config_path: Path to the configuration file.

    Returns:
        Configuration dictionary with user values merged over defaults.

    Raises:
        ConfigError: If the file is missing, unreadable, malformed or does
            not hold a mapping.
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e

    user_config = _parse_document(text, config_path) or {}
    if not isinstance(user_config, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping at the top level")

    # Deep merge with defaults
    config = copy.deepcopy(DEFAULT_CONFIG)
    for key, value in user_config.items():
        if isinstance(value, dict) and key in config and isinstance(config[key], dict):
            config[key] = {**config[key], **value}
        else:
            config[key] = value

    # A section holding only comments loads as None.
    for key in ("exclude", "languages"):
        if config[key] is None:
            config[key] = []
    if not isinstance(config["exclude"], list):
        raise ConfigError("'exclude' must be a list of patterns")

    logger.debug("Loaded config from %s", config_path)
    return config


def get_config_template() -> str:
    """Generate a commented YAML config template."""
    return '''# =============================================================================
# Code Outline Configuration
# =============================================================================
# Usage:
#   code-outline --input src --config code-outline.yaml -o outline.txt
#
# The outline is heuristic: declarations are recognised line by line with
# keyword tests and regular expressions, never with a real parser. It MAY:
#
#   MISS: declarations split across lines, generated or macro-heavy code
#
#   FALSE POSITIVE: statements that look like declarations, for example a
#                   multi-line call whose first line ends with "("
# =============================================================================

# =============================================================================
# EXCLUSIONS
# =============================================================================
# Applied in addition to the built-in list and CLI --exclude.
# Patterns starting with '*' match file suffixes, others match directory or
# file names anywhere in the path.
# =============================================================================
exclude:
  # - vendor
  # - third_party
  # - "*.generated.ts"

# =============================================================================
# SCAN SETTINGS
# =============================================================================
scan:
  # Files larger than this many bytes are skipped and counted as failed
  max_file_size: 2097152
  # Parse files on a thread pool when greater than 1
  workers: 1

# =============================================================================
# EXTRA LANGUAGES
# =============================================================================
# Each entry defines a language profile. An entry whose extension is already
# claimed by a built-in language replaces it for that extension.
#
# Patterns are regular expressions matched against the trimmed source line.
# The declared name is the "name" group, or group 1 if there is no named
# group. A "parent" group, when present, is reported as the supertype.
# Use single quotes so backslashes need no escaping.
#
#   module, type, method, function, constant: declaration patterns
#   doc_marker:     comment marker of documentation lines (default "//")
#   doc_placement:  "before" (comments above) or "after" (docstrings below)
# =============================================================================
languages:
  # - name: toy
  #   extensions: [".toy"]
  #   module: '^module\\s+(\\w+)'
  #   type: '^class\\s+(?P<name>\\w+)(?:\\s*<\\s*(?P<parent>\\w+))?'
  #   function: '^fn\\s+(\\w+)'
  #   doc_marker: "--"
  #   doc_placement: before
'''
