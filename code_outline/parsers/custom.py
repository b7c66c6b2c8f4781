"""
Language profiles defined in a configuration file.

A config entry looks like:

    languages:
      - name: toy
        extensions: [".toy"]
        module: '^module\\s+(\\w+)'
        type: '^class\\s+(?P<name>\\w+)(?:\\s*<\\s*(?P<parent>\\w+))?'
        function: '^fn\\s+(\\w+)'
        method: '^method\\s+(\\w+)'
        doc_marker: '--'
        doc_placement: before

Patterns are matched against the trimmed line. The declared name is the
`name` group, or group 1 when the pattern has no named group. The resulting
profile goes through the same engine as the built-in ones.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping

from code_outline.errors import ConfigError
from code_outline.models import ElementKind
from code_outline.parsers.base import normalize_extension
from code_outline.parsers.profile import (
    COMMON_CONTROL_KEYWORDS,
    DOC_AFTER,
    DOC_BEFORE,
    METHOD_BY_INDENT,
    METHOD_BY_RECEIVER,
    METHOD_NEVER,
    DeclarationRule,
    LanguageProfile,
    rule,
)

logger = logging.getLogger(__name__)

# Config key -> element kind, in rule priority order. An explicit method
# pattern is tried before the function pattern so it can claim its lines.
RULE_KEYS: tuple[tuple[str, ElementKind], ...] = (
    ("module", ElementKind.MODULE),
    ("type", ElementKind.TYPE),
    ("method", ElementKind.METHOD),
    ("function", ElementKind.FUNCTION),
    ("constant", ElementKind.CONSTANT),
)

DEFAULT_DOC_MARKER = "//"


def name_group_pattern(pattern: str) -> str:
    """
    Return a pattern whose first capturing group is named `name`.

    Patterns that already define `name` are returned unchanged.

    Raises:
        ConfigError: If the pattern does not compile or has no capturing group.
    """
    try:
        compiled = re.compile(pattern)
    except re.error as e:
        raise ConfigError(f"Invalid pattern {pattern!r}: {e}") from e

    if "name" in compiled.groupindex:
        return pattern
    if compiled.groups == 0:
        raise ConfigError(f"Pattern {pattern!r} has no capturing group for the name")

    in_class = False
    i = 0
    while i < len(pattern):
        char = pattern[i]
        if char == "\\":
            i += 2
            continue
        if in_class:
            if char == "]":
                in_class = False
        elif char == "[":
            in_class = True
            # A leading `]` (or `^]`) is a literal inside the class.
            if pattern[i + 1:i + 2] == "^":
                i += 1
            if pattern[i + 1:i + 2] == "]":
                i += 1
        elif char == "(" and pattern[i + 1:i + 2] != "?":
            return pattern[:i] + "(?P<name>" + pattern[i + 1:]
        i += 1

    # Only named groups other than `name`; use the first one.
    first = min(compiled.groupindex.items(), key=lambda item: item[1])[0]
    return pattern.replace(f"(?P<{first}>", "(?P<name>", 1)


def _string_list(entry: Mapping[str, Any], key: str, name: str) -> tuple[str, ...]:
    value = entry.get(key, ())
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"Language '{name}': '{key}' must be a string or a list of strings")
    return tuple(value)


def profile_from_config(entry: Mapping[str, Any]) -> LanguageProfile:
    """
    Build a LanguageProfile from one `languages:` config entry.

    Args:
        entry: Mapping with `name`, `extensions` and any of the pattern keys
            `module`, `type`, `method`, `function`, `constant`, plus optional
            `doc_marker`, `doc_placement`, `comment_markers`,
            `control_keywords` and `method_detection`.

    Returns:
        Profile equivalent to a built-in one with the same rules.

    Raises:
        ConfigError: If the entry is incomplete or a pattern is invalid.
    """
    if not isinstance(entry, Mapping):
        raise ConfigError(f"Language entry must be a mapping, got {type(entry).__name__}")

    name = entry.get("name")
    if not name or not isinstance(name, str):
        raise ConfigError("Language entry is missing a 'name'")

    extensions = tuple(normalize_extension(e) for e in _string_list(entry, "extensions", name))
    if not extensions:
        raise ConfigError(f"Language '{name}' declares no extensions")

    rules: list[DeclarationRule] = []
    for key, kind in RULE_KEYS:
        pattern = entry.get(key)
        if not pattern:
            continue
        if not isinstance(pattern, str):
            raise ConfigError(f"Language '{name}': '{key}' must be a regular expression string")
        try:
            rules.append(rule(kind, name_group_pattern(pattern)))
        except (re.error, ValueError) as e:
            raise ConfigError(f"Language '{name}': invalid '{key}' pattern: {e}") from e

    if not rules:
        raise ConfigError(f"Language '{name}' defines no declaration patterns")

    doc_marker = entry.get("doc_marker", DEFAULT_DOC_MARKER)
    if not isinstance(doc_marker, str) or not doc_marker:
        raise ConfigError(f"Language '{name}': 'doc_marker' must be a non-empty string")

    placement = entry.get("doc_placement", DOC_BEFORE)
    if placement not in (DOC_BEFORE, DOC_AFTER):
        raise ConfigError(f"Language '{name}': 'doc_placement' must be 'before' or 'after'")

    method_detection = entry.get("method_detection", METHOD_BY_INDENT)
    if method_detection not in (METHOD_BY_INDENT, METHOD_BY_RECEIVER, METHOD_NEVER):
        raise ConfigError(
            f"Language '{name}': 'method_detection' must be one of indent, receiver, none"
        )

    comment_markers = _string_list(entry, "comment_markers", name) or (doc_marker,)
    control_keywords = _string_list(entry, "control_keywords", name)

    profile = LanguageProfile(
        name=name,
        extensions=extensions,
        rules=tuple(rules),
        comment_markers=comment_markers,
        doc_markers=tuple(dict.fromkeys((doc_marker,) + comment_markers)),
        control_keywords=frozenset(control_keywords) if control_keywords else COMMON_CONTROL_KEYWORDS,
        method_detection=method_detection,
        doc_placement=placement,
    )
    logger.debug("Loaded language '%s' from config (%d rules)", name, len(rules))
    return profile


def profiles_from_config(config: Mapping[str, Any]) -> list[LanguageProfile]:
    """
    Build every profile listed under the config's `languages` key.

    Raises:
        ConfigError: If `languages` is not a list or an entry is invalid.
    """
    entries = config.get("languages") or []
    if not isinstance(entries, list):
        raise ConfigError("'languages' must be a list of language entries")
    return [profile_from_config(entry) for entry in entries]
