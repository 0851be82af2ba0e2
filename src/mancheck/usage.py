"""Comparison of manual page synopses with the binary's live usage text.

Runs ``<binary> <subcommand...> --help`` and compares the line after
``Usage:`` with the SYNOPSIS of the matching manual page. The comparison is
best-effort:

- a missing binary skips it
- an asymmetric optional-flags marker (``[*options*]`` in the page,
  ``[flags]`` in the help output) is an error
- any other difference is advisory and never fails a run

Bracket and ellipsis conventions for repeated arguments differ between the
two sources and are compared as-is.
"""

from __future__ import annotations

import logging
import re
import subprocess
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from mancheck.document import Synopsis
from mancheck.findings import Finding

logger = logging.getLogger(__name__)

MANPAGE_OPTIONS_MARKER = "[*options*]"
HELP_OPTIONS_MARKER = "[flags]"

USAGE_MARKER = "Usage:"

# *placeholder* in single emphasis, not part of a **literal**
PLACEHOLDER_PATTERN = re.compile(r"(?<![*\w])\*([a-z]+)\*(?![*\w])")


class UsageOutcome(Enum):
    """Outcome of one usage comparison."""

    SKIPPED = "skipped"
    MATCHED = "matched"
    MISMATCHED = "mismatched"


@dataclass
class HelpResult:
    """Result from running the binary with its help flag."""

    success: bool
    usage: str = ""
    stdout: str = ""
    stderr: str = ""
    return_code: int = 0


@dataclass
class UsageComparison:
    """Result of comparing one synopsis with the live usage text.

    Attributes:
        outcome: skipped, matched or mismatched
        command: Command name the binary was queried for
        document: Manual page file name
        manpage_usage: Normalized synopsis arguments
        help_usage: Normalized help usage arguments
        findings: Findings produced by the comparison
    """

    outcome: UsageOutcome
    command: str
    document: str
    manpage_usage: str = ""
    help_usage: str = ""
    findings: list[Finding] = field(default_factory=list)

    @property
    def matched(self) -> bool:
        return self.outcome == UsageOutcome.MATCHED


def find_binary(path: Path) -> Optional[Path]:
    """Return the companion binary if it has been built, None otherwise."""
    path = Path(path)
    if path.is_file():
        return path
    return None


def extract_usage(output: str) -> str:
    """Extract the usage line from help output.

    Takes the text after ``Usage:`` on the same line, or the next non-blank
    line if the marker stands alone.
    """
    lines = output.splitlines()
    for index, line in enumerate(lines):
        stripped = line.strip()
        if not stripped.startswith(USAGE_MARKER):
            continue
        inline = stripped[len(USAGE_MARKER) :].strip()
        if inline:
            return inline
        for following in lines[index + 1 :]:
            if following.strip():
                return following.strip()
        return ""
    return ""


def run_help(binary: Path, command: str, help_flag: str = "--help") -> HelpResult:
    """Run the binary's help for a command and capture the usage line.

    Args:
        binary: Path to the companion binary
        command: Full command name, e.g. "foo pod create"
        help_flag: Flag that prints usage text

    Returns:
        HelpResult with the extracted usage line
    """
    cmd = [str(binary), *command.split()[1:], help_flag]
    logger.debug("Running %s", " ".join(cmd))

    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except OSError as e:
        return HelpResult(success=False, stderr=f"Cannot run {binary}: {e}")
    except subprocess.SubprocessError as e:
        return HelpResult(success=False, stderr=f"Failed to run {binary}: {e}")

    usage = extract_usage(result.stdout) or extract_usage(result.stderr)
    return HelpResult(
        success=True,
        usage=usage,
        stdout=result.stdout,
        stderr=result.stderr,
        return_code=result.returncode,
    )


def strip_command(usage: str, command: str) -> str:
    """Remove the leading command name from a usage line."""
    usage = " ".join(usage.split())
    if usage == command:
        return ""
    if usage.startswith(f"{command} "):
        return usage[len(command) + 1 :]
    tokens = usage.split()
    return " ".join(tokens[len(command.split()) :])


def normalize_placeholders(text: str) -> str:
    """Rewrite ``*name*`` placeholders as ``NAME``, the help output's spelling."""
    return PLACEHOLDER_PATTERN.sub(lambda m: m.group(1).upper(), text)


def _without(text: str, marker: str) -> str:
    return " ".join(text.replace(marker, " ").split())


def compare_usage(
    command: str,
    manpage_arguments: str,
    help_usage: str,
    document: str,
    options_marker: str = HELP_OPTIONS_MARKER,
) -> UsageComparison:
    """Compare synopsis arguments with a help usage line.

    Args:
        command: Command name shared by both sides
        manpage_arguments: Synopsis text after the literal command name
        help_usage: Usage line from the help output, command name included
        document: Manual page file name, for findings
        options_marker: The help output's optional-flags marker

    Returns:
        UsageComparison, matched or mismatched
    """
    help_arguments = strip_command(help_usage, command)
    findings: list[Finding] = []

    in_manpage = MANPAGE_OPTIONS_MARKER in manpage_arguments
    in_help = options_marker in help_arguments
    if in_manpage != in_help:
        findings.append(
            Finding(
                kind="options-marker",
                severity="error",
                document=document,
                actual=MANPAGE_OPTIONS_MARKER if in_manpage else "(none)",
                expected=MANPAGE_OPTIONS_MARKER if in_help else "(none)",
                message=(
                    f"'{command} {options_marker}' in help output but no "
                    f"{MANPAGE_OPTIONS_MARKER} in synopsis"
                    if in_help
                    else f"{MANPAGE_OPTIONS_MARKER} in synopsis but no "
                    f"{options_marker} in '{command}' help output"
                ),
            )
        )

    manpage_usage = normalize_placeholders(_without(manpage_arguments, MANPAGE_OPTIONS_MARKER))
    help_normalized = _without(help_arguments, options_marker)

    if manpage_usage == help_normalized:
        outcome = UsageOutcome.MATCHED
    else:
        outcome = UsageOutcome.MISMATCHED
        findings.append(
            Finding(
                kind="usage",
                severity="warning",
                document=document,
                actual=manpage_usage,
                expected=help_normalized,
                message=f"Synopsis differs from '{command} --help' usage",
            )
        )

    return UsageComparison(
        outcome=outcome,
        command=command,
        document=document,
        manpage_usage=manpage_usage,
        help_usage=help_normalized,
        findings=findings,
    )


class UsageChecker:
    """Compares synopses against a companion binary, if one is present.

    Example:
        >>> checker = UsageChecker(Path("bin/foo"))
        >>> comparison = checker.compare(page.synopsis, page.filename)
        >>> comparison.outcome
        <UsageOutcome.SKIPPED: 'skipped'>
    """

    def __init__(
        self,
        binary: Optional[Path],
        help_flag: str = "--help",
        options_marker: str = HELP_OPTIONS_MARKER,
    ) -> None:
        self.binary = Path(binary) if binary is not None else None
        self.help_flag = help_flag
        self.options_marker = options_marker

    @property
    def available(self) -> bool:
        return self.binary is not None and find_binary(self.binary) is not None

    def compare(
        self, synopsis: Synopsis, document: str, command: str | None = None
    ) -> UsageComparison:
        """Compare one synopsis with the binary's help output.

        Args:
            synopsis: Parsed SYNOPSIS line of the page
            document: Manual page file name, for findings
            command: Command the page documents; defaults to the synopsis's
                own command name
        """
        command = command or synopsis.command_name
        if not self.available or not synopsis.command_name:
            return UsageComparison(UsageOutcome.SKIPPED, command, document)

        result = run_help(self.binary, command, self.help_flag)
        if not result.success:
            logger.warning("Skipping usage check for %s: %s", document, result.stderr)
            return UsageComparison(UsageOutcome.SKIPPED, command, document)

        return compare_usage(
            command,
            synopsis.arguments,
            result.usage,
            document,
            self.options_marker,
        )

    def __repr__(self) -> str:
        return f"UsageChecker(binary={str(self.binary)!r}, help_flag={self.help_flag!r})"
