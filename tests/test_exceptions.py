"""Tests for mancheck.exceptions module."""

import pytest

from mancheck.exceptions import (
    ConfigError,
    DocsDirectoryError,
    MancheckError,
    ProgramNameError,
)


class TestMancheckError:
    """Tests for the base exception formatting."""

    def test_message_only(self):
        error = MancheckError("Something failed")
        assert str(error) == "Something failed"
        assert error.context == {}
        assert error.suggestions == []

    def test_context_and_suggestions(self):
        error = MancheckError(
            "Manual page directory not found",
            context={"directory": "docs/source/markdown"},
            suggestions=["Run mancheck from the project root"],
        )
        text = str(error)
        assert "Context:" in text
        assert "directory: docs/source/markdown" in text
        assert "Suggestions:" in text
        assert "- Run mancheck from the project root" in text

    @pytest.mark.parametrize("cls", [DocsDirectoryError, ProgramNameError, ConfigError])
    def test_subclasses(self, cls):
        """Every setup error is caught by the base class."""
        with pytest.raises(MancheckError):
            raise cls("failed")
