"""
Utility functions for code_outline.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Iterator

logger = logging.getLogger(__name__)


def should_exclude(path: Path, exclude_patterns: list[str]) -> bool:
    """
    Check if path should be excluded based on patterns.

    Args:
        path: Path to check.
        exclude_patterns: List of patterns. Patterns starting with '*'
            match suffixes, others match directory or file names.

    Returns:
        True if the path should be excluded.
    """
    path_str = str(path)
    parts = path.parts
    for pattern in exclude_patterns:
        if pattern.startswith("*"):
            # Suffix match (e.g., "*.pyc")
            if path_str.endswith(pattern[1:]):
                return True
        elif pattern in parts:
            # Name match
            return True
    return False


def is_hidden(name: str) -> bool:
    """Dot-files and dot-directories are never scanned."""
    return name.startswith(".") and name not in (".", "..")


def walk_files(root: Path, exclude: list[str]) -> Iterator[Path]:
    """
    Walk a directory and yield candidate files in sorted order.

    Hidden and excluded directories are pruned in place so they are never
    descended into. Directories that can't be listed are logged and skipped.

    Args:
        root: Directory to walk.
        exclude: Exclusion patterns, see should_exclude().

    Yields:
        File paths under root.
    """

    def on_error(error: OSError) -> None:
        logger.warning("Cannot read directory %s: %s", error.filename, error.strerror)

    for dirpath, dirs, files in os.walk(root, onerror=on_error):
        # Match patterns against the path below root only.
        current = Path(dirpath).relative_to(root)
        # Filter out excluded directories
        dirs[:] = sorted(
            d for d in dirs
            if not is_hidden(d) and not should_exclude(current / d, exclude)
        )

        for filename in sorted(files):
            if is_hidden(filename):
                continue
            if not should_exclude(current / filename, exclude):
                yield root / current / filename
