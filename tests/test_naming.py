"""Tests for mancheck.naming module."""

import pytest

from mancheck.naming import (
    NESTED_DESCRIPTION_COLUMN,
    TOP_LEVEL_DESCRIPTION_COLUMN,
    CommandNaming,
)


@pytest.fixture
def naming() -> CommandNaming:
    return CommandNaming(program="foo")


class TestCommandWords:
    """Tests for splitting stems into command words."""

    def test_top_level(self, naming):
        assert naming.words("foo") == ["foo"]

    def test_plain_subcommands(self, naming):
        assert naming.words("foo-pod-create") == ["foo", "pod", "create"]

    def test_hyphenated_subcommand_is_one_word(self, naming):
        """auto-update is a single command word."""
        assert naming.words("foo-auto-update") == ["foo", "auto-update"]

    def test_hyphenated_subcommand_with_child(self, naming):
        assert naming.words("foo-auto-update-all") == ["foo", "auto-update", "all"]

    def test_foreign_stem(self, naming):
        """Stems of other programs are split on every hyphen."""
        assert naming.words("bar-baz") == ["bar", "baz"]


class TestExpectedCommand:
    """Tests for the synopsis command name derived from the file name."""

    def test_hyphens_become_spaces(self, naming):
        assert naming.expected_command("foo-bar") == "foo bar"

    def test_hyphen_exception(self, naming):
        assert naming.expected_command("foo-auto-update") == "foo auto-update"

    def test_custom_exception_table(self):
        naming = CommandNaming(program="foo", hyphenated_subcommands=("image-trust",))
        assert naming.expected_command("foo-image-trust") == "foo image-trust"
        assert naming.expected_command("foo-auto-update") == "foo auto update"


class TestPageKinds:
    """Tests for top-level, exempt and subcommand classification."""

    def test_top_level_is_not_subcommand(self, naming):
        assert naming.is_top_level("foo")
        assert not naming.is_subcommand("foo")

    def test_remote_family_is_exempt(self, naming):
        assert naming.is_exempt("foo-remote")
        assert not naming.is_subcommand("foo-remote")

    def test_ordinary_subcommand(self, naming):
        assert not naming.is_exempt("foo-bar")
        assert naming.is_subcommand("foo-bar")

    def test_program_pages(self, naming):
        assert naming.is_program_page("foo")
        assert naming.is_program_page("foo-remote")
        assert not naming.is_program_page("foosh")

    def test_remote_as_deeper_word_is_not_exempt(self, naming):
        """Only the first subcommand word selects a family."""
        assert not naming.is_exempt("foo-system-remote")


class TestParentLookup:
    """Tests for parent file names and description columns."""

    def test_one_level_parent(self, naming):
        assert naming.parent_filename("foo-bar") == "foo.1.md"
        assert naming.description_column("foo-bar") == TOP_LEVEL_DESCRIPTION_COLUMN

    def test_nested_parent(self, naming):
        assert naming.parent_filename("foo-pod-create") == "foo-pod.1.md"
        assert naming.description_column("foo-pod-create") == NESTED_DESCRIPTION_COLUMN

    def test_hyphenated_family_maps_to_top_level(self, naming):
        """foo-auto-update is listed in the top-level table."""
        assert naming.parent_filename("foo-auto-update") == "foo.1.md"
        assert naming.depth("foo-auto-update") == 1
        assert naming.description_column("foo-auto-update") == TOP_LEVEL_DESCRIPTION_COLUMN

    def test_top_level_filename(self, naming):
        assert naming.top_level_filename == "foo.1.md"
