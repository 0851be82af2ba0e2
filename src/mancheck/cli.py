"""
Manual page consistency check.

Checks a directory of markdown manual pages against each other and against
the program's own help output:
- NAME matches the file name
- Subcommand descriptions match the parent page's table
- SYNOPSIS names the right command, is lower-case, and matches --help usage

Usage:
    mancheck                          # Check docs/source/markdown
    mancheck -v                       # Also report advisory usage mismatches
    mancheck --format json            # JSON output for CI
    mancheck --docs-dir docs/man --program foo

Run from the project root: the documents directory and the binary
(bin/<program>) are resolved relative to the working directory.

Exit Codes:
    0 - No inconsistencies found
    1 - Inconsistencies found or setup failure
"""

import argparse
import json
import logging
import sys

from mancheck.checker import ManPageChecker
from mancheck.config import Config, generate_template
from mancheck.exceptions import MancheckError
from mancheck.findings import CheckResults, Finding

logger = logging.getLogger(__name__)

KIND_LABELS = {
    "naming": "NAME MISMATCH",
    "description": "DESCRIPTION MISMATCH",
    "synopsis-name": "SYNOPSIS COMMAND MISMATCH",
    "capitalization": "SYNOPSIS CAPITALIZATION",
    "options-marker": "OPTIONS MARKER MISMATCH",
    "usage": "USAGE MISMATCH",
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point for mancheck."""
    parser = argparse.ArgumentParser(
        prog="mancheck",
        description="Check markdown manual pages for internal consistency",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=None,
        help="Also report differences from the binary's --help usage",
    )
    parser.add_argument(
        "--format",
        choices=["table", "json"],
        help="Output format (default: table)",
    )
    parser.add_argument(
        "--docs-dir",
        help="Manual page directory (default: docs/source/markdown)",
    )
    parser.add_argument(
        "--program",
        help="Top-level program name (default: inferred from the pages)",
    )
    parser.add_argument(
        "--binary",
        help="Companion binary to query for usage (default: bin/<program>)",
    )
    parser.add_argument(
        "--no-binary",
        action="store_true",
        help="Do not compare synopses with the binary's usage",
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Print a commented .mancheck.toml template and exit",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    if args.print_config:
        print(generate_template(), end="")
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = Config.load()
    except MancheckError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    apply_overrides(config, args)

    try:
        checker = ManPageChecker.from_config(config)
    except MancheckError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.debug("Running %r", checker)
    results = checker.check_all()
    verbose = bool(config.defaults.verbose)

    if config.defaults.format == "json":
        output_json(results, verbose)
    else:
        output_table(results, verbose)

    return results.exit_code


def apply_overrides(config: Config, args: argparse.Namespace) -> None:
    """Apply command line arguments on top of file configuration."""
    if args.verbose is not None:
        config.defaults.verbose = args.verbose
    if args.format:
        config.defaults.format = args.format
    if args.docs_dir:
        config.docs.directory = args.docs_dir
    if args.program:
        config.docs.program = args.program
    if args.binary:
        config.binary.path = args.binary
    if args.no_binary:
        config.binary.enabled = False


def visible_findings(results: CheckResults, verbose: bool) -> list[Finding]:
    """Findings to report; advisory warnings only in verbose mode."""
    if verbose:
        return list(results.findings)
    return results.errors


def output_table(results: CheckResults, verbose: bool = False) -> None:
    """Output findings as one block each, followed by a summary."""
    findings = visible_findings(results, verbose)

    for finding in findings:
        _print_finding(finding)

    print(f"\n{'=' * 60}")
    print(f"Pages checked: {results.documents_checked}")
    print(f"Errors:        {results.error_count}")
    if verbose:
        print(f"Warnings:      {results.warning_count}")
    if results.usage_outcomes:
        outcomes = ", ".join(f"{k} {v}" for k, v in sorted(results.usage_outcomes.items()))
        print(f"Usage checks:  {outcomes}")

    if results.passed:
        print("PASSED - Manual pages are consistent")
    else:
        print("FAILED - Fix the errors above")


def _print_finding(finding: Finding, indent: str = "  ") -> None:
    """Print a single finding."""
    symbol = "✗" if finding.is_error else "⚠"
    label = KIND_LABELS.get(finding.kind, finding.kind.upper())

    print(f"\n{symbol} {label}: {finding.document}")
    print(f"{indent}{finding.message}")
    print(f"{indent}actual:   {finding.actual!r}")
    print(f"{indent}expected: {finding.expected!r}")


def output_json(results: CheckResults, verbose: bool = False) -> None:
    """Output findings as JSON."""
    print(json.dumps(results.to_dict(include_warnings=verbose), indent=2))


if __name__ == "__main__":
    sys.exit(main())
