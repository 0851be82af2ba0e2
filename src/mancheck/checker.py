"""Manual page consistency checker.

This module provides the ManPageChecker class that runs every rule over a
directory of manual pages and collects the findings.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from .document import ManPageSet, load_manpages
from .findings import CheckResults
from .naming import CommandNaming
from .rules import DescriptionRule, NameRule, SynopsisRule
from .usage import UsageChecker

if TYPE_CHECKING:
    from .config import Config

logger = logging.getLogger(__name__)


class ManPageChecker:
    """Consistency checker for a directory of markdown manual pages.

    Example:
        >>> from mancheck.config import Config
        >>> from mancheck.checker import ManPageChecker
        >>>
        >>> checker = ManPageChecker.from_config(Config.load())
        >>> results = checker.check_all()
        >>>
        >>> if not results.passed:
        ...     for finding in results.errors:
        ...         print(f"{finding.document}: {finding.message}")

    Attributes:
        pages: The manual pages being checked
        naming: Command naming rules for the program
        usage_checker: Live usage comparison, None to disable it
    """

    def __init__(
        self,
        pages: ManPageSet,
        naming: CommandNaming,
        usage_checker: UsageChecker | None = None,
    ) -> None:
        self.pages = pages
        self.naming = naming
        self.usage_checker = usage_checker

    @classmethod
    def from_config(cls, config: Config, root: Path | None = None) -> ManPageChecker:
        """Build a checker from configuration.

        Paths in the configuration are relative to root (default: the
        current directory).

        Raises:
            DocsDirectoryError: If the documents directory is missing
            ProgramNameError: If no program is configured and none can be inferred
        """
        root = Path.cwd() if root is None else Path(root)
        pages = load_manpages(root / config.docs.directory, config.docs.suffix)
        program = config.docs.program or pages.infer_program()

        naming = CommandNaming(
            program=program,
            suffix=config.docs.suffix,
            hyphenated_subcommands=tuple(config.exceptions.hyphenated_subcommands),
            exempt_families=tuple(config.exceptions.exempt_families),
        )

        usage_checker = None
        if config.binary.enabled:
            usage_checker = UsageChecker(
                root / config.binary.resolve_path(program),
                help_flag=config.binary.help_flag,
                options_marker=config.binary.options_marker,
            )
            if not usage_checker.available:
                logger.info("%s not found, skipping usage comparison", usage_checker.binary)

        return cls(pages, naming, usage_checker)

    def check_all(self) -> CheckResults:
        """Run all checks, in order: names, descriptions, synopses.

        Returns:
            CheckResults containing all findings
        """
        results = CheckResults(documents_checked=len(self.pages))

        results.merge(self.check_names())
        results.merge(self.check_descriptions())
        results.merge(self.check_synopses())

        return results

    def check_names(self) -> CheckResults:
        """Check that every page's NAME matches its file name."""
        return NameRule().check(self.pages, self.naming)

    def check_descriptions(self) -> CheckResults:
        """Check subcommand descriptions against their parent's table."""
        return DescriptionRule().check(self.pages, self.naming)

    def check_synopses(self) -> CheckResults:
        """Check synopsis command names, capitalization and live usage."""
        return SynopsisRule(self.usage_checker).check(self.pages, self.naming)

    def __repr__(self) -> str:
        return (
            f"ManPageChecker(program={self.naming.program!r}, "
            f"pages={len(self.pages)}, usage_checker={self.usage_checker!r})"
        )
