"""
Base parser class and registry for language parsers.

Parsers are looked up by file extension. The registry is an ordinary object
built once at startup and handed to the scanner, so tests and embedders can
hold several independent registries.

Example:
    registry = ParserRegistry()
    registry.register(RUST_PROFILE)
    parser = registry.dispatch(".rs")
    result = parser.parse(source, "src/lib.rs")
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

from code_outline.errors import ProfileNotFoundError

if TYPE_CHECKING:
    from code_outline.models import ParseResult
    from code_outline.parsers.profile import LanguageProfile

logger = logging.getLogger(__name__)


def normalize_extension(ext: str) -> str:
    """Lower-case an extension and make sure it has a leading dot."""
    ext = ext.strip().lower()
    if ext and not ext.startswith("."):
        ext = "." + ext
    return ext


class BaseParser(ABC):
    """
    Abstract base class for language parsers.

    Subclasses implement `parse`, a pure function of the file content.
    Reading the file is left to `scan` so that I/O errors stay with the
    caller.
    """

    language: str = ""
    extensions: tuple[str, ...] = ()

    @abstractmethod
    def parse(self, content: str, path: str = "") -> ParseResult:
        """
        Extract declarations from source text.

        Args:
            content: Full text of the file.
            path: Path reported in the result.

        Returns:
            ParseResult with the elements in declaration order.
        """
        ...

    def scan(self, filepath: Path, encoding: str = "utf-8") -> ParseResult:
        """
        Read a file and parse it.

        Raises:
            OSError: If the file can't be read.
            UnicodeDecodeError: If the file is not valid text in `encoding`.
        """
        with open(filepath, "r", encoding=encoding) as f:
            content = f.read()
        return self.parse(content, str(filepath))


class ParserRegistry:
    """
    Maps file extensions to parsers.

    When two profiles claim the same extension the later registration wins.
    This is deliberate: it lets a config-defined language override a
    built-in one without any special casing.
    """

    def __init__(self, profiles: Iterable[LanguageProfile] = ()) -> None:
        self._extension_map: dict[str, BaseParser] = {}
        self._languages: dict[str, BaseParser] = {}
        for profile in profiles:
            self.register(profile)

    @classmethod
    def with_builtins(cls, extra_profiles: Iterable[LanguageProfile] = ()) -> "ParserRegistry":
        """
        Build a registry holding every built-in profile, then the extras.

        Args:
            extra_profiles: Additional profiles (e.g. from a config file),
                registered last so they take precedence.
        """
        from code_outline.parsers.languages import BUILTIN_PROFILES

        registry = cls(BUILTIN_PROFILES)
        for profile in extra_profiles:
            registry.register(profile)
        return registry

    def register(self, profile: LanguageProfile) -> BaseParser:
        """
        Register a language profile.

        Args:
            profile: Profile to register.

        Returns:
            The parser created for the profile.
        """
        from code_outline.parsers.engine import HeuristicParser

        parser = HeuristicParser(profile)
        self.register_parser(parser)
        return parser

    def register_parser(self, parser: BaseParser) -> None:
        """Register an already constructed parser under its extensions."""
        self._languages[parser.language] = parser

        for ext in parser.extensions:
            ext_lower = normalize_extension(ext)
            previous = self._extension_map.get(ext_lower)
            if previous is not None and previous.language != parser.language:
                logger.debug(
                    "Extension %s moves from %s to %s", ext_lower, previous.language, parser.language
                )
            self._extension_map[ext_lower] = parser

        logger.debug("Registered parser for %s: %s", parser.language, list(parser.extensions))

    def dispatch(self, extension: str) -> BaseParser:
        """
        Resolve the parser for an extension.

        Raises:
            ProfileNotFoundError: If no profile claims the extension.
        """
        parser = self.get(extension)
        if parser is None:
            raise ProfileNotFoundError(f"No language profile for extension '{extension}'")
        return parser

    def get(self, extension: str) -> BaseParser | None:
        """Like `dispatch`, but returns None for unknown extensions."""
        return self._extension_map.get(normalize_extension(extension))

    def get_parser(self, filepath: Path) -> BaseParser | None:
        """Get the parser for a file based on its suffix."""
        if not filepath.suffix:
            return None
        return self.get(filepath.suffix)

    def for_language(self, language: str) -> BaseParser:
        """
        Get a parser by language name (case-insensitive).

        Raises:
            ProfileNotFoundError: If the language is not registered.
        """
        parser = self._languages.get(language) or self._languages.get(language.lower())
        if parser is None:
            for name, candidate in self._languages.items():
                if name.lower() == language.lower():
                    return candidate
            raise ProfileNotFoundError(f"Unknown language '{language}'")
        return parser

    def list_languages(self) -> list[str]:
        """Get list of registered languages."""
        return list(self._languages.keys())

    def list_extensions(self) -> dict[str, str]:
        """Get mapping of extensions to languages."""
        return {ext: parser.language for ext, parser in self._extension_map.items()}
