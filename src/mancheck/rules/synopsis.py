"""Synopsis rule: command name, capitalization and live usage.

A synopsis looks like ``**foo bar** [*options*] *arg*...``. The literal
command name must match the file name, the line must be lower-case
(placeholders are ``*emphasized*``, upper-case is the help output's
convention), and, if the binary has been built, its usage is compared with
``foo bar --help``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..findings import CheckResults, Finding
from ..usage import UsageChecker, UsageComparison, UsageOutcome
from .base import ManPageRule

if TYPE_CHECKING:
    from mancheck.document import ManPageSet, Synopsis
    from mancheck.naming import CommandNaming


class SynopsisRule(ManPageRule):
    """Check each page's SYNOPSIS line.

    Attributes:
        usage_checker: Compares synopses with the binary; None disables it
        comparisons: Usage comparisons made by the last check
    """

    rule_id = "synopsis"
    name = "Synopsis"
    description = "SYNOPSIS command name, capitalization and usage"

    def __init__(self, usage_checker: UsageChecker | None = None) -> None:
        self.usage_checker = usage_checker
        self.comparisons: list[UsageComparison] = []

    def check(self, pages: ManPageSet, naming: CommandNaming) -> CheckResults:
        results = CheckResults(documents_checked=len(pages))
        self.comparisons = []

        for page in pages:
            synopsis = page.synopsis
            line = synopsis.line if synopsis else ""
            command = synopsis.command_name if synopsis else ""

            if not naming.is_exempt(page.stem):
                expected = naming.expected_command(page.stem)
                if command != expected:
                    results.add(
                        Finding(
                            kind="synopsis-name",
                            severity="error",
                            document=page.filename,
                            actual=command,
                            expected=expected,
                            message=f"{page.filename}: synopsis names '{command}'",
                        )
                    )

            if synopsis and synopsis.has_uppercase:
                results.add(
                    Finding(
                        kind="capitalization",
                        severity="error",
                        document=page.filename,
                        actual=line,
                        expected=line.lower(),
                        message=(
                            f"{page.filename}: synopsis has upper-case letters; "
                            "use *lower-case* placeholders"
                        ),
                    )
                )

            if synopsis and self.usage_checker is not None:
                comparison = self._compare_usage(synopsis, page.stem, page.filename, naming)
                self.comparisons.append(comparison)
                results.count_outcome(comparison.outcome.value)
                for finding in comparison.findings:
                    results.add(finding)

        return results

    def _compare_usage(
        self, synopsis: Synopsis, stem: str, document: str, naming: CommandNaming
    ) -> UsageComparison:
        # Exempt families and companion pages document other programs
        if naming.is_exempt(stem) or not naming.is_program_page(stem):
            return UsageComparison(UsageOutcome.SKIPPED, synopsis.command_name, document)
        return self.usage_checker.compare(synopsis, document, naming.expected_command(stem))
