"""
Heuristic line-scanning engine shared by every language profile.

The engine never tokenizes. Each line is trimmed, stripped of attribute
prefixes, checked against the control-flow guard and then matched against
the profile's rules in order. The first rule that applies classifies the
line. Only small, bounded windows around the line are ever read: a few
lines above for doc comments and up to MAX_LOOKAHEAD lines below for
block-style declarations.

Method detection by indentation is a best-effort guess. A top-level
function indented for formatting reads as a method, and a method written
at column zero reads as a function. Receiver clauses (`func (s *T)`,
`function T:m`, `TFoo.Bar`) take precedence whenever the syntax has them.
"""

from __future__ import annotations

import logging
import re
from typing import Sequence

from code_outline.models import CodeElement, ElementKind, ParseResult, Visibility
from code_outline.parsers.base import BaseParser
from code_outline.parsers.docs import (
    extract_documentation,
    extract_trailing_documentation,
    is_comment,
)
from code_outline.parsers.profile import (
    DOC_AFTER,
    METHOD_BY_INDENT,
    DeclarationRule,
    LanguageProfile,
)

logger = logging.getLogger(__name__)

# First identifier of a line, ignoring closing braces and brackets that may
# precede it (`} else if (...)`).
FIRST_WORD = re.compile(r"^[\s{}()\[\];,]*([A-Za-z_]\w*)")


class HeuristicParser(BaseParser):
    """
    Parser driven entirely by a LanguageProfile.

    Built-in languages and config-defined ones go through the same code;
    only the profile differs.
    """

    def __init__(self, profile: LanguageProfile) -> None:
        self.profile = profile
        self.language = profile.name
        self.extensions = profile.extensions
        self._visibility_patterns: tuple[tuple[re.Pattern[str], Visibility], ...] = tuple(
            (
                re.compile(r"(?<![\w$])" + re.escape(word) + r"(?![\w$])", profile.flags),
                visibility,
            )
            for word, visibility in profile.visibility_keywords
        )

    def __repr__(self) -> str:
        return f"HeuristicParser({self.profile.name!r})"

    def parse(self, content: str, path: str = "") -> ParseResult:
        """
        Scan source text line by line.

        Args:
            content: Full text of the file.
            path: Path reported in the result.

        Returns:
            ParseResult whose elements are in declaration order.
        """
        lines = content.splitlines()
        result = ParseResult(file_path=path, language=self.profile.name)

        for index in range(len(lines)):
            element = self.parse_line(lines, index)
            if element is not None:
                result.elements.append(element)

        logger.debug("%s: %d elements (%s)", path or "<text>", len(result.elements), self.language)
        return result

    def parse_line(self, lines: Sequence[str], index: int) -> CodeElement | None:
        """
        Classify one line and build its element.

        Returns:
            The element declared on the line, or None if the line declares
            nothing or the matching rule could not capture a name.
        """
        profile = self.profile
        stripped = lines[index].strip()
        if not stripped or is_comment(stripped, profile.comment_markers):
            return None

        cleaned = self.strip_attributes(stripped)
        if not cleaned or self.is_control_flow(cleaned):
            return None

        indented = lines[index][:1].isspace()
        for rule in profile.rules:
            if rule.top_level and indented:
                continue
            if not rule.applies_to(cleaned):
                continue
            match = rule.pattern.search(cleaned)
            if match is None:
                if rule.gated:
                    # The keyword claimed the line but no name followed it.
                    return None
                continue
            return self._build_element(rule, match, lines, index, cleaned)

        return None

    def strip_attributes(self, line: str) -> str:
        """Remove leading attributes/annotations such as `@[Flags]` or `#[inline]`."""
        pattern = self.profile.attribute_pattern
        if pattern is None:
            return line
        while line:
            match = pattern.match(line)
            if match is None or match.end() == 0:
                break
            line = line[match.end():].lstrip()
        return line

    def is_control_flow(self, line: str) -> bool:
        """
        Check whether a line opens with a control-flow keyword.

        Such lines are rejected unless they also contain one of the
        profile's unambiguous declaration markers (e.g. `function`).
        """
        match = FIRST_WORD.match(line)
        if match is None or not self.profile.is_control_keyword(match.group(1)):
            return False
        return not self.profile.has_declaration_marker(line)

    def _build_element(
        self,
        rule: DeclarationRule,
        match: re.Match[str],
        lines: Sequence[str],
        index: int,
        cleaned: str,
    ) -> CodeElement | None:
        profile = self.profile
        name = (match.group("name") or "").strip()
        keyword = _group(match, "keyword")
        if not name or (not keyword and profile.is_statement_keyword(name)):
            return None

        parent = _group(match, "parent")
        receiver = _group(match, "receiver")

        if rule.confirm is not None:
            confirmation = self._confirm(rule.confirm, rule.lookahead, lines, index, cleaned[match.end():])
            if confirmation is None:
                return None
            keyword = _group(confirmation, "keyword") or keyword
            parent = _group(confirmation, "parent") or parent

        kind = rule.kind
        if kind is ElementKind.FUNCTION:
            kind = self._callable_kind(lines[index], receiver)

        if "keyword" in match.re.groupindex and match.group("keyword") is not None:
            prefix = cleaned[: match.start("keyword")]
        else:
            prefix = cleaned[: match.start("name")]

        return CodeElement(
            kind=kind,
            name=name,
            visibility=self._visibility(name, prefix),
            parent=parent,
            documentation=self._documentation(lines, index, kind),
            source_line=index + 1,
            keyword=keyword.lower() if profile.flags & re.IGNORECASE else keyword,
        )

    def _confirm(
        self,
        confirm: re.Pattern[str],
        lookahead: int,
        lines: Sequence[str],
        index: int,
        tail: str,
    ) -> re.Match[str] | None:
        """
        Find the confirming pattern of a block-style declaration.

        The rest of the declaration line is tried first. If it is empty the
        next code line within the rule's window is tried; comments and blank
        lines are skipped, anything beyond the window is not found.
        """
        if tail.strip():
            return confirm.search(tail)

        last = min(len(lines), index + 1 + lookahead)
        for following in lines[index + 1:last]:
            stripped = following.strip()
            if not stripped or is_comment(stripped, self.profile.comment_markers):
                continue
            return confirm.search(stripped)
        return None

    def _callable_kind(self, raw_line: str, receiver: str) -> ElementKind:
        if receiver:
            return ElementKind.METHOD
        if self.profile.method_detection == METHOD_BY_INDENT and raw_line[:1].isspace():
            return ElementKind.METHOD
        return ElementKind.FUNCTION

    def _visibility(self, name: str, prefix: str) -> Visibility:
        for pattern, visibility in self._visibility_patterns:
            if pattern.search(prefix):
                return visibility
        if self.profile.visibility_rule is not None:
            visibility = self.profile.visibility_rule(name)
            if visibility is not Visibility.UNSPECIFIED:
                return visibility
        return self.profile.default_visibility

    def _doc_anchor(self, lines: Sequence[str], index: int) -> int:
        """Step above attribute-only lines so the comment above them is found."""
        if self.profile.attribute_pattern is None:
            return index
        while index > 0:
            above = lines[index - 1].strip()
            if not above or is_comment(above, self.profile.comment_markers) or self.strip_attributes(above):
                break
            index -= 1
        return index

    def _documentation(self, lines: Sequence[str], index: int, kind: ElementKind) -> str:
        profile = self.profile
        depth = profile.doc_depth_for(kind)
        if profile.doc_placement == DOC_AFTER:
            doc = extract_trailing_documentation(lines, index, depth, profile.doc_markers)
            if doc:
                return doc
            # Fall back to line comments above the declaration.
            return extract_documentation(lines, self._doc_anchor(lines, index), depth, profile.comment_markers)
        return extract_documentation(lines, self._doc_anchor(lines, index), depth, profile.doc_markers)


def _group(match: re.Match[str], group: str) -> str:
    if group not in match.re.groupindex:
        return ""
    return (match.group(group) or "").strip()
