"""
Exceptions raised by code_outline.

Per-file problems never surface as exceptions; they are counted by the
scanner. Only errors that stop a run before any file is processed are
raised to the caller.
"""

from __future__ import annotations


class OutlineError(Exception):
    """Base class for code_outline errors."""


class ProfileNotFoundError(OutlineError, LookupError):
    """No language profile is registered for an extension or language name."""


class RootPathError(OutlineError):
    """The scan root does not exist or is not a directory."""


class ConfigError(OutlineError):
    """A configuration file or a config-defined language is invalid."""
