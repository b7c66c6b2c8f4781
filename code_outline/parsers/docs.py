"""
Doc-comment extraction.

Collects the comment block adjacent to a declaration and flattens it into a
single line. Comments usually precede the declaration (`//`, `#`, `/** */`);
docstring languages put them right after it, which is handled by
extract_trailing_documentation.
"""

from __future__ import annotations

from typing import Sequence

DEFAULT_DOC_MARKERS: tuple[str, ...] = ("///", "//", "/*", "*/", "*", "#", '"""', "'''", "---")


def _ordered(markers: Sequence[str]) -> tuple[str, ...]:
    # Longest first so "///" wins over "//" and "/*" over "/".
    return tuple(sorted(set(markers), key=len, reverse=True))


def strip_markers(text: str, markers: Sequence[str] = DEFAULT_DOC_MARKERS) -> str:
    """
    Remove comment markers from both ends of a comment line.

    Args:
        text: Comment line, already trimmed or not.
        markers: Marker strings to remove.

    Returns:
        The comment text without markers and surrounding whitespace.
    """
    ordered = _ordered(markers)
    text = text.strip()

    changed = True
    while changed and text:
        changed = False
        for marker in ordered:
            if text.startswith(marker):
                text = text[len(marker):].lstrip()
                changed = True
                break

    changed = True
    while changed and text:
        changed = False
        for marker in ordered:
            if text.endswith(marker):
                text = text[: -len(marker)].rstrip()
                changed = True
                break

    return text


def is_comment(line: str, markers: Sequence[str] = DEFAULT_DOC_MARKERS) -> bool:
    """Check whether a trimmed line starts with one of the markers."""
    return bool(markers) and line.startswith(tuple(markers))


def extract_documentation(
    lines: Sequence[str],
    declaration_index: int,
    max_lines: int,
    markers: Sequence[str] = DEFAULT_DOC_MARKERS,
) -> str:
    """
    Collect the comment block preceding a declaration.

    Scans backward from the line above the declaration. Blank lines are
    skipped and do not count against max_lines; the first line that is
    neither blank nor a comment ends the scan. Comment lines that carry
    only markers (`/**`, ` */`) do count, so a two-line Javadoc block read
    with a depth of 2 keeps just its last text line.

    Args:
        lines: All lines of the file.
        declaration_index: 0-based index of the declaration line.
        max_lines: Maximum number of comment lines to collect.
        markers: Comment markers recognised and stripped.

    Returns:
        Comment text joined with single spaces, top to bottom, or "".
    """
    if declaration_index <= 0 or max_lines <= 0:
        return ""

    collected: list[str] = []
    seen = 0
    index = min(declaration_index, len(lines)) - 1

    while index >= 0 and seen < max_lines:
        stripped = lines[index].strip()
        index -= 1
        if not stripped:
            continue
        if not is_comment(stripped, markers):
            break
        seen += 1
        text = strip_markers(stripped, markers)
        if text:
            collected.insert(0, text)

    return " ".join(collected)


def extract_trailing_documentation(
    lines: Sequence[str],
    declaration_index: int,
    max_lines: int,
    markers: Sequence[str] = ('"""', "'''"),
) -> str:
    """
    Collect a docstring placed after a declaration.

    The first non-blank line below the declaration must open with one of the
    markers. A marker that closes on the same line ends the docstring there;
    otherwise lines are collected until one contains the closing marker or
    max_lines lines have been read. Markers that cannot close a block (a
    line-comment marker such as "#") collect the contiguous commented lines.

    Args:
        lines: All lines of the file.
        declaration_index: 0-based index of the declaration line.
        max_lines: Maximum number of lines to collect.
        markers: Opening markers to look for.

    Returns:
        Docstring text joined with single spaces, or "".
    """
    if max_lines <= 0:
        return ""

    index = declaration_index + 1
    while index < len(lines) and not lines[index].strip():
        index += 1
    if index >= len(lines):
        return ""

    first = lines[index].strip()
    opener = next((m for m in _ordered(markers) if first.startswith(m)), None)
    if opener is None:
        return ""

    collected: list[str] = []
    block = opener in ('"""', "'''")

    if block:
        if first.count(opener) >= 2 or (first.endswith(opener) and len(first) > len(opener)):
            return strip_markers(first, markers)
        for offset in range(max_lines):
            if index + offset >= len(lines):
                break
            stripped = lines[index + offset].strip()
            text = strip_markers(stripped, markers)
            if text:
                collected.append(text)
            if offset > 0 and opener in stripped:
                break
    else:
        for offset in range(max_lines):
            if index + offset >= len(lines):
                break
            stripped = lines[index + offset].strip()
            if not stripped.startswith(opener):
                break
            text = strip_markers(stripped, markers)
            if text:
                collected.append(text)

    return " ".join(collected)
