"""
Language parsers for code_outline.

Every language is a LanguageProfile run by the shared HeuristicParser.
Additional languages can be registered from config or by building a
profile in code.
"""

from code_outline.parsers.base import BaseParser, ParserRegistry
from code_outline.parsers.custom import profile_from_config, profiles_from_config
from code_outline.parsers.engine import HeuristicParser
from code_outline.parsers.languages import BUILTIN_PROFILES
from code_outline.parsers.profile import DeclarationRule, LanguageProfile, rule

__all__ = [
    "BUILTIN_PROFILES",
    "BaseParser",
    "DeclarationRule",
    "HeuristicParser",
    "LanguageProfile",
    "ParserRegistry",
    "profile_from_config",
    "profiles_from_config",
    "rule",
]
