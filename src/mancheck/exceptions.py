"""
Custom exception hierarchy for mancheck.

Only setup problems are exceptions. Inconsistencies found in the manual
pages themselves are collected as findings and never raised.

All exceptions include:
- Context information (directory, program name, config file, etc.)
- Suggestions for how to fix the issue

Example::

    from mancheck.exceptions import DocsDirectoryError

    raise DocsDirectoryError(
        "Manual page directory not found",
        context={"directory": "docs/source/markdown", "cwd": "/tmp"},
        suggestions=["Run mancheck from the project root"],
    )
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class MancheckError(Exception):
    """
    Base exception for all mancheck errors.

    Provides consistent formatting with context and suggestions.

    Attributes:
        context: Dictionary of contextual information (directory, file, etc.)
        suggestions: List of actionable suggestions for fixing the error
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context and suggestions."""
        parts = [self.message]

        if self.context:
            parts.append("\n\nContext:")
            for key, value in self.context.items():
                parts.append(f"\n  {key}: {value}")

        if self.suggestions:
            parts.append("\n\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"\n  - {suggestion}")

        return "".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class DocsDirectoryError(MancheckError):
    """
    The manual page directory could not be located.

    mancheck resolves the documents directory relative to the working
    directory, so this almost always means it was started from the wrong
    place.
    """

    pass


class ProgramNameError(MancheckError):
    """
    The top-level program name could not be determined.

    Raised when no program name is configured and the documents directory
    does not contain exactly one page without a hyphen in its name.

    Example::

        raise ProgramNameError(
            "Cannot infer the top-level program",
            context={"candidates": ["foo", "bar"]},
            suggestions=["Pass --program explicitly"],
        )
    """

    pass


class ConfigError(MancheckError):
    """Configuration file is unreadable or invalid."""

    pass


__all__ = [
    "MancheckError",
    "DocsDirectoryError",
    "ProgramNameError",
    "ConfigError",
]
