"""Tests for mancheck.usage module."""

import logging
from pathlib import Path

from mancheck.document import Synopsis
from mancheck.usage import (
    UsageChecker,
    UsageOutcome,
    compare_usage,
    extract_usage,
    find_binary,
    normalize_placeholders,
    run_help,
    strip_command,
)


class TestExtractUsage:
    """Tests for finding the usage line in help output."""

    def test_next_line(self):
        output = "Run a thing\n\nUsage:\n  foo bar [flags] ARG\n\nFlags:\n  -a\n"
        assert extract_usage(output) == "foo bar [flags] ARG"

    def test_same_line(self):
        assert extract_usage("Usage: foo bar [flags]\n") == "foo bar [flags]"

    def test_skips_blank_lines(self):
        assert extract_usage("Usage:\n\n   foo\n") == "foo"

    def test_no_marker(self):
        assert extract_usage("nothing useful\n") == ""

    def test_marker_at_end(self):
        assert extract_usage("Usage:\n") == ""


class TestNormalization:
    """Tests for the text normalization helpers."""

    def test_strip_command_prefix(self):
        assert strip_command("foo bar [flags] ARG", "foo bar") == "[flags] ARG"

    def test_strip_command_only(self):
        assert strip_command("foo bar", "foo bar") == ""

    def test_strip_command_different_spelling(self):
        """An unexpected command spelling drops as many tokens as the command has."""
        assert strip_command("foo-remote [flags] CMD", "foo remote") == "CMD"

    def test_placeholders_uppercased(self):
        assert normalize_placeholders("*arg*... [*name*]") == "ARG... [NAME]"

    def test_literals_untouched(self):
        """Bold literals and mixed tokens are not placeholders."""
        assert normalize_placeholders("**all** *Arg* *a1*") == "**all** *Arg* *a1*"


class TestCompareUsage:
    """Tests for comparing synopsis arguments with help usage."""

    def test_matched(self):
        comparison = compare_usage(
            "foo bar", "[*options*] *arg*...", "foo bar [flags] ARG...", "foo-bar.1.md"
        )
        assert comparison.outcome == UsageOutcome.MATCHED
        assert comparison.findings == []
        assert comparison.manpage_usage == "ARG..."

    def test_both_without_marker(self):
        comparison = compare_usage("foo pod", "*subcommand*", "foo pod SUBCOMMAND", "foo-pod.1.md")
        assert comparison.matched

    def test_marker_only_in_manpage_is_error(self):
        comparison = compare_usage("foo bar", "[*options*] *arg*", "foo bar ARG", "foo-bar.1.md")
        kinds = [(f.kind, f.severity) for f in comparison.findings]
        assert kinds == [("options-marker", "error")]
        assert comparison.matched

    def test_marker_only_in_help_is_error(self):
        comparison = compare_usage("foo bar", "*arg*", "foo bar [flags] ARG", "foo-bar.1.md")
        assert [f.kind for f in comparison.findings] == ["options-marker"]
        assert "[flags]" in comparison.findings[0].message

    def test_argument_difference_is_advisory(self):
        """Ellipsis differences are reported as warnings only."""
        comparison = compare_usage(
            "foo bar", "[*options*] *arg*", "foo bar [flags] ARG [ARG...]", "foo-bar.1.md"
        )
        assert comparison.outcome == UsageOutcome.MISMATCHED
        assert len(comparison.findings) == 1
        finding = comparison.findings[0]
        assert finding.kind == "usage"
        assert finding.is_warning
        assert finding.actual == "ARG"
        assert finding.expected == "ARG [ARG...]"

    def test_custom_options_marker(self):
        comparison = compare_usage(
            "foo bar",
            "[*options*] *arg*",
            "foo bar [options] ARG",
            "foo-bar.1.md",
            options_marker="[options]",
        )
        assert comparison.matched
        assert comparison.findings == []


class TestRunHelp:
    """Tests for running the companion binary."""

    def test_find_binary(self, help_binary: Path, tmp_path: Path):
        assert find_binary(help_binary) == help_binary
        assert find_binary(tmp_path / "bin" / "nothing") is None

    def test_subcommand_help(self, help_binary: Path):
        result = run_help(help_binary, "foo pod create")
        assert result.success
        assert result.usage == "foo pod create [flags] NAME"

    def test_top_level_help(self, help_binary: Path):
        result = run_help(help_binary, "foo")
        assert result.usage == "foo [flags] COMMAND"

    def test_not_executable(self, tmp_path: Path):
        binary = tmp_path / "foo"
        binary.write_text("not a program")
        binary.chmod(0o644)
        result = run_help(binary, "foo bar")
        assert not result.success
        assert "Cannot run" in result.stderr


class TestUsageChecker:
    """Tests for UsageChecker."""

    def test_missing_binary_skips(self, tmp_path: Path):
        checker = UsageChecker(tmp_path / "bin" / "foo")
        assert not checker.available
        comparison = checker.compare(Synopsis.parse("**foo bar** *arg*"), "foo-bar.1.md")
        assert comparison.outcome == UsageOutcome.SKIPPED
        assert comparison.findings == []

    def test_no_binary_configured(self):
        checker = UsageChecker(None)
        assert not checker.available

    def test_synopsis_without_command_skips(self, help_binary: Path):
        checker = UsageChecker(help_binary)
        comparison = checker.compare(Synopsis.parse("foo bar"), "foo-bar.1.md")
        assert comparison.outcome == UsageOutcome.SKIPPED

    def test_compare_with_binary(self, help_binary: Path):
        checker = UsageChecker(help_binary)
        comparison = checker.compare(
            Synopsis.parse("**foo bar** [*options*] *arg*..."), "foo-bar.1.md"
        )
        assert comparison.outcome == UsageOutcome.MATCHED

    def test_compare_uses_given_command(self, help_binary: Path):
        """The binary is queried for the given command, not the synopsis's."""
        checker = UsageChecker(help_binary)
        comparison = checker.compare(
            Synopsis.parse("**foo baz** [*options*] *arg*..."), "foo-bar.1.md", "foo bar"
        )
        assert comparison.command == "foo bar"
        assert comparison.outcome == UsageOutcome.MATCHED

    def test_launch_failure_skips_with_warning(self, tmp_path: Path, caplog):
        binary = tmp_path / "foo"
        binary.write_text("not a program")
        binary.chmod(0o644)
        checker = UsageChecker(binary)

        with caplog.at_level(logging.WARNING, logger="mancheck.usage"):
            comparison = checker.compare(Synopsis.parse("**foo bar**"), "foo-bar.1.md")

        assert comparison.outcome == UsageOutcome.SKIPPED
        assert "foo-bar.1.md" in caplog.text
