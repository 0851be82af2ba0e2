"""
mancheck: consistency checks for markdown manual pages.

Validates a directory of ``<command-words>.1.md`` manual pages against each
other and against the program's own help output, without rendering them.

Modules:
    document: Markdown manual page parsing (sections, tables, NAME, SYNOPSIS)
    naming: File name to command word rules and named exceptions
    rules: Individual checks (name, description, synopsis)
    usage: Comparison with the binary's live --help usage
    checker: Runs all rules and collects findings
    config: TOML configuration loading

Quick Start::

    from mancheck import Config, ManPageChecker

    checker = ManPageChecker.from_config(Config.load())
    results = checker.check_all()
    for finding in results:
        print(finding.document, finding.message)
"""

__version__ = "0.1.0"

from mancheck.checker import ManPageChecker
from mancheck.config import Config
from mancheck.document import ManPage, ManPageSet, NameEntry, SummaryRow, Synopsis, load_manpages
from mancheck.exceptions import ConfigError, DocsDirectoryError, MancheckError, ProgramNameError
from mancheck.findings import CheckResults, Finding
from mancheck.naming import CommandNaming
from mancheck.usage import UsageChecker, UsageComparison, UsageOutcome, compare_usage

__all__ = [
    "__version__",
    "ManPageChecker",
    "Config",
    "ManPage",
    "ManPageSet",
    "NameEntry",
    "SummaryRow",
    "Synopsis",
    "load_manpages",
    "MancheckError",
    "DocsDirectoryError",
    "ProgramNameError",
    "ConfigError",
    "CheckResults",
    "Finding",
    "CommandNaming",
    "UsageChecker",
    "UsageComparison",
    "UsageOutcome",
    "compare_usage",
]
