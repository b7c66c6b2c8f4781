"""
Code Outline - heuristic structural index of source trees.

Walks a directory, picks a language profile per file extension and extracts
modules, types, functions, methods and their doc comments with a single
line-oriented scanning engine. No parser or AST is involved.
"""

__version__ = "1.0.0"

from code_outline.config import DEFAULT_CONFIG, DEFAULT_EXCLUDE
from code_outline.errors import ConfigError, OutlineError, ProfileNotFoundError, RootPathError
from code_outline.models import CodeElement, ElementKind, ParseResult, ScanStats, Visibility
from code_outline.parsers import HeuristicParser, LanguageProfile, ParserRegistry
from code_outline.scanner import OutlineScanner

__all__ = [
    "CodeElement",
    "ConfigError",
    "DEFAULT_CONFIG",
    "DEFAULT_EXCLUDE",
    "ElementKind",
    "HeuristicParser",
    "LanguageProfile",
    "OutlineError",
    "OutlineScanner",
    "ParseResult",
    "ParserRegistry",
    "ProfileNotFoundError",
    "RootPathError",
    "ScanStats",
    "Visibility",
    "__version__",
]
