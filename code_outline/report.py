"""
Report rendering for code_outline.

The text report has one section per file: the path, then one line per
element, with a blank line between sections. The JSON report carries the
same data plus the run statistics.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

from code_outline import __version__

if TYPE_CHECKING:
    from typing import Iterable

    from code_outline.models import CodeElement, ParseResult, ScanStats

logger = logging.getLogger(__name__)

SEPARATOR = " – "


def format_element(element: CodeElement) -> str:
    """
    Format one element as `[visibility] kind name()[ – inherited parent][ – doc]`.

    Only functions and methods get the `()` suffix.
    """
    name = f"{element.name}()" if element.kind.is_callable else element.name
    line = f"[{element.visibility.value}] {element.kind.value} {name}"
    if element.parent:
        line += f"{SEPARATOR}inherited {element.parent}"
    if element.documentation:
        line += f"{SEPARATOR}{element.documentation}"
    return line


def render_text(results: Iterable[ParseResult]) -> str:
    """Render results as the plain-text outline."""
    sections = []
    for result in results:
        lines = [result.file_path]
        lines.extend(format_element(element) for element in result.elements)
        sections.append("\n".join(lines))
    return "\n\n".join(sections) + ("\n" if sections else "")


def render_json(
    results: Iterable[ParseResult],
    stats: ScanStats | None = None,
    root: Path | None = None,
) -> str:
    """
    Render results as a JSON document.

    Args:
        results: Parse results to include.
        stats: Counters of the run, included under "summary".
        root: Scanned directory, recorded in "meta".

    Returns:
        Indented JSON text.
    """
    meta: dict[str, str] = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "tool_version": __version__,
    }
    if root is not None:
        meta["root"] = str(root)

    document = {
        "meta": meta,
        "summary": stats.to_dict() if stats is not None else {},
        "files": [result.to_dict() for result in results],
    }
    return json.dumps(document, indent=2, ensure_ascii=False)


def write_report(text: str, output: Path | str | None = None) -> None:
    """
    Write a rendered report to a file, or to stdout when output is None.

    Raises:
        OSError: If the output file can't be written.
    """
    if output is None:
        sys.stdout.write(text)
        return
    with open(output, "w", encoding="utf-8") as f:
        f.write(text)
    logger.info("Output written to: %s", output)
