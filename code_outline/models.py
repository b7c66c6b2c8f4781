"""
Data models for extracted declarations.

A CodeElement is one declaration found in a file, a ParseResult groups the
elements of one file in declaration order, and ScanStats counts what the
scanner did during a run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ElementKind(str, Enum):
    """Kind of declaration. TYPE covers class, struct, interface, trait, enum and object."""

    MODULE = "module"
    TYPE = "type"
    FUNCTION = "function"
    METHOD = "method"
    CONSTANT = "constant"
    MATCH = "match"

    @property
    def is_callable(self) -> bool:
        return self in (ElementKind.FUNCTION, ElementKind.METHOD)


class Visibility(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    PROTECTED = "protected"
    INTERNAL = "internal"
    UNSPECIFIED = "unspecified"


@dataclass(frozen=True)
class CodeElement:
    """
    One declaration found by a language profile.

    Attributes:
        kind: What was declared.
        name: Declared identifier. Never empty for emitted elements.
        visibility: Explicit or structural visibility.
        parent: Supertype or interface named in the declaration, or "".
        documentation: Adjacent comment block joined into one line, or "".
        source_line: 1-based line holding the declaration keyword.
        keyword: Declaration keyword that matched (class, struct, fn...), or "".
    """

    kind: ElementKind
    name: str
    visibility: Visibility = Visibility.UNSPECIFIED
    parent: str = ""
    documentation: str = ""
    source_line: int = 0
    keyword: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "name": self.name,
            "visibility": self.visibility.value,
            "parent": self.parent,
            "documentation": self.documentation,
            "line": self.source_line,
            "keyword": self.keyword,
        }


@dataclass
class ParseResult:
    """Elements extracted from a single file, in declaration order."""

    file_path: str
    language: str = ""
    elements: list[CodeElement] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.file_path,
            "language": self.language,
            "elements": [element.to_dict() for element in self.elements],
        }


@dataclass
class ScanStats:
    """Counters for one scanner run."""

    processed: int = 0
    succeeded: int = 0
    failed: int = 0
    skipped: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)

    def record_failure(self, path: str, message: str) -> None:
        self.failed += 1
        self.errors.append((path, message))

    def to_dict(self) -> dict[str, Any]:
        return {
            "processed": self.processed,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "skipped": self.skipped,
            "errors": [{"path": path, "error": message} for path, message in self.errors],
        }
