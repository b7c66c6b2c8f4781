"""
Language profiles: the data that drives the heuristic engine.

A profile lists the extensions it claims, how comments and attributes look,
which words are control flow, and an ordered table of declaration rules.
Profiles carry no per-file state and are never mutated after construction,
so one instance can be shared by every scan and every worker thread.

Example:
    PROFILE = LanguageProfile(
        name="toy",
        extensions=(".toy",),
        rules=(
            rule(ElementKind.TYPE, r"\\bclass\\s+(?P<name>\\w+)", keywords=("class",)),
            rule(ElementKind.FUNCTION, r"\\bfn\\s+(?P<name>\\w+)", keywords=("fn",)),
        ),
    )
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Optional

from code_outline.models import ElementKind, Visibility
from code_outline.parsers.docs import DEFAULT_DOC_MARKERS

MAX_LOOKAHEAD = 10

TYPE_DOC_DEPTH = 5
CALLABLE_DOC_DEPTH = 2

# Words that start statements in nearly every brace language. A line opening
# with one of these is never a declaration unless it also carries one of the
# profile's declaration markers.
COMMON_CONTROL_KEYWORDS = frozenset({
    "if", "else", "elif", "for", "foreach", "while", "do", "switch", "case",
    "default", "catch", "try", "finally", "return", "throw", "break",
    "continue", "goto", "new", "delete", "sizeof", "typeof", "await", "yield",
    "with", "using", "assert",
})

# Statement keywords that can never name a declaration. A rule without a
# keyword group (C-style `type name(...)`) that captures one of these has
# matched a statement. Other control words (`new`, `delete`, `default`) are
# ordinary method names in several languages.
STATEMENT_KEYWORDS = frozenset({
    "if", "else", "elif", "elsif", "for", "foreach", "while", "until", "do",
    "switch", "case", "catch", "try", "finally", "return", "throw",
})

METHOD_BY_INDENT = "indent"
METHOD_BY_RECEIVER = "receiver"
METHOD_NEVER = "none"

DOC_BEFORE = "before"
DOC_AFTER = "after"

VisibilityRule = Callable[[str], Visibility]


@dataclass(frozen=True)
class DeclarationRule:
    """
    One way a line can declare something.

    Attributes:
        kind: Kind of element produced.
        pattern: Compiled capture pattern. Must define a `name` group and may
            define `keyword`, `parent` and `receiver` groups.
        keywords: Words that must occur on the line for the rule to apply.
            An empty tuple means the rule is always tried.
        gate: Compiled predicate built from `keywords` or an explicit regex.
            When a gated rule applies but its pattern captures nothing, the
            line is dropped instead of falling through to later rules.
        confirm: Pattern that must be found after the match, on the same line
            or on the next code line within `lookahead` lines.
        lookahead: Window for `confirm`, capped at MAX_LOOKAHEAD.
        top_level: Only match lines without leading indentation.
    """

    kind: ElementKind
    pattern: re.Pattern[str]
    keywords: tuple[str, ...] = ()
    confirm: Optional[re.Pattern[str]] = None
    lookahead: int = 0
    top_level: bool = False
    gate: Optional[re.Pattern[str]] = field(default=None, compare=False, repr=False)

    @property
    def gated(self) -> bool:
        return self.gate is not None

    def applies_to(self, line: str) -> bool:
        """Cheap predicate, tested before the capture pattern."""
        if self.gate is None:
            return True
        return self.gate.search(line) is not None


def word_pattern(words: tuple[str, ...] | frozenset[str], flags: int = 0) -> Optional[re.Pattern[str]]:
    """Build a pattern matching any of the words as a whole word."""
    if not words:
        return None
    alternatives = "|".join(re.escape(w) for w in sorted(words, key=len, reverse=True))
    return re.compile(r"(?<![\w$])(?:" + alternatives + r")(?![\w$])", flags)


def rule(
    kind: ElementKind,
    pattern: str,
    keywords: tuple[str, ...] = (),
    when: str | None = None,
    confirm: str | None = None,
    lookahead: int = 0,
    top_level: bool = False,
    flags: int = 0,
) -> DeclarationRule:
    """
    Compile a declaration rule.

    Args:
        kind: Kind of element produced by the rule.
        pattern: Regex source with a `name` group.
        keywords: Whole words that gate the rule.
        when: Regex gate used instead of `keywords` when a bare word is too
            ambiguous (contextual keywords such as `record` or `type`). Anchor
            it at the declaration position so that the word appearing elsewhere
            on the line (`Foo::class`, `interface{}` parameters) does not claim
            the line.
        confirm: Optional regex source confirming a block-style declaration.
        lookahead: Lines searched for `confirm` after the declaration line.
        top_level: Ignore indented lines.
        flags: Regex flags (re.IGNORECASE for case-insensitive languages).

    Raises:
        re.error: If a pattern does not compile.
        ValueError: If the pattern has no `name` group.
    """
    compiled = re.compile(pattern, flags)
    if "name" not in compiled.groupindex:
        raise ValueError(f"declaration pattern has no 'name' group: {pattern!r}")
    return DeclarationRule(
        kind=kind,
        pattern=compiled,
        keywords=tuple(keywords),
        confirm=re.compile(confirm, flags) if confirm else None,
        lookahead=min(max(lookahead, 0), MAX_LOOKAHEAD),
        top_level=top_level,
        gate=re.compile(when, flags) if when else word_pattern(tuple(keywords), flags),
    )


def capitalized_is_public(name: str) -> Visibility:
    """Go-style visibility: exported names start with an upper-case letter."""
    return Visibility.PUBLIC if name[:1].isupper() else Visibility.PRIVATE


def underscore_is_private(name: str) -> Visibility:
    """Python/Dart-style visibility: a leading underscore marks a private name."""
    if name.startswith("__") and name.endswith("__"):
        return Visibility.PUBLIC
    return Visibility.PRIVATE if name.startswith("_") else Visibility.PUBLIC


@dataclass(frozen=True)
class LanguageProfile:
    """
    Immutable rule set for one language.

    Rules are tried in order and the first one that applies classifies the
    line, so module rules come first, then types, then callables.
    """

    name: str
    extensions: tuple[str, ...]
    rules: tuple[DeclarationRule, ...]
    comment_markers: tuple[str, ...] = ("//", "/*", "*")
    doc_markers: tuple[str, ...] = DEFAULT_DOC_MARKERS
    control_keywords: frozenset[str] = COMMON_CONTROL_KEYWORDS
    declaration_markers: tuple[str, ...] = ()
    attribute_pattern: Optional[re.Pattern[str]] = None
    visibility_keywords: tuple[tuple[str, Visibility], ...] = ()
    visibility_rule: Optional[VisibilityRule] = None
    default_visibility: Visibility = Visibility.UNSPECIFIED
    method_detection: str = METHOD_BY_INDENT
    doc_placement: str = DOC_BEFORE
    type_doc_depth: int = TYPE_DOC_DEPTH
    callable_doc_depth: int = CALLABLE_DOC_DEPTH
    flags: int = 0
    marker_pattern: Optional[re.Pattern[str]] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.marker_pattern is None and self.declaration_markers:
            object.__setattr__(
                self, "marker_pattern", word_pattern(self.declaration_markers, self.flags)
            )

    def doc_depth_for(self, kind: ElementKind) -> int:
        """Number of comment lines collected for a declaration of this kind."""
        if kind in (ElementKind.MODULE, ElementKind.TYPE):
            return self.type_doc_depth
        return self.callable_doc_depth

    def is_control_keyword(self, word: str) -> bool:
        if self.flags & re.IGNORECASE:
            word = word.lower()
        return word in self.control_keywords

    def is_statement_keyword(self, word: str) -> bool:
        """Control keyword of this profile that can only start a statement."""
        if self.flags & re.IGNORECASE:
            word = word.lower()
        return word in STATEMENT_KEYWORDS and word in self.control_keywords

    def has_declaration_marker(self, line: str) -> bool:
        return self.marker_pattern is not None and self.marker_pattern.search(line) is not None
