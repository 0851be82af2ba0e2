"""Finding models for manual page checks.

This module defines the data structures used to represent inconsistencies
found in manual pages and the aggregated results of a check run.
"""

from __future__ import annotations

from dataclasses import dataclass, field

FINDING_KINDS = (
    "naming",
    "description",
    "synopsis-name",
    "capitalization",
    "options-marker",
    "usage",
)


@dataclass(frozen=True)
class Finding:
    """A single inconsistency found in a manual page.

    This class is hashable (frozen) to support deduplication of findings.

    Attributes:
        kind: Which check produced it, one of FINDING_KINDS
        severity: Either "error" or "warning"; warnings never fail a run
        document: File name of the offending manual page
        actual: The value found in the page
        expected: The value the page should have
        message: Human-readable description of the finding
    """

    kind: str
    severity: str
    document: str
    actual: str
    expected: str
    message: str

    def __post_init__(self) -> None:
        """Validate kind and severity values."""
        if self.kind not in FINDING_KINDS:
            raise ValueError(f"kind must be one of {FINDING_KINDS}, got {self.kind!r}")
        if self.severity not in ("error", "warning"):
            raise ValueError(f"severity must be 'error' or 'warning', got {self.severity!r}")

    @property
    def is_error(self) -> bool:
        """Check if this is an error (not a warning)."""
        return self.severity == "error"

    @property
    def is_warning(self) -> bool:
        """Check if this is a warning (not an error)."""
        return self.severity == "warning"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "kind": self.kind,
            "severity": self.severity,
            "document": self.document,
            "actual": self.actual,
            "expected": self.expected,
            "message": self.message,
        }


@dataclass
class CheckResults:
    """Aggregates all findings from a check run, in the order they were found.

    Attributes:
        findings: List of all findings
        documents_checked: Number of manual pages examined
        usage_outcomes: Count of usage comparisons per outcome
    """

    findings: list[Finding] = field(default_factory=list)
    documents_checked: int = 0
    usage_outcomes: dict[str, int] = field(default_factory=dict)

    @property
    def error_count(self) -> int:
        """Count of findings with severity='error'."""
        return sum(1 for f in self.findings if f.is_error)

    @property
    def warning_count(self) -> int:
        """Count of findings with severity='warning'."""
        return sum(1 for f in self.findings if f.is_warning)

    @property
    def passed(self) -> bool:
        """True if no errors (warnings are allowed)."""
        return self.error_count == 0

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1

    @property
    def errors(self) -> list[Finding]:
        """List of only error findings."""
        return [f for f in self.findings if f.is_error]

    @property
    def warnings(self) -> list[Finding]:
        """List of only warning findings."""
        return [f for f in self.findings if f.is_warning]

    def __iter__(self):
        """Iterate over all findings."""
        return iter(self.findings)

    def __len__(self) -> int:
        """Total number of findings."""
        return len(self.findings)

    def __bool__(self) -> bool:
        """True if there are any findings."""
        return len(self.findings) > 0

    def add(self, finding: Finding) -> None:
        """Add a finding to the results."""
        self.findings.append(finding)

    def count_outcome(self, outcome: str) -> None:
        """Record one usage comparison outcome."""
        self.usage_outcomes[outcome] = self.usage_outcomes.get(outcome, 0) + 1

    def merge(self, other: CheckResults) -> None:
        """Merge findings from another CheckResults into this one."""
        self.findings.extend(other.findings)
        self.documents_checked = max(self.documents_checked, other.documents_checked)
        for outcome, count in other.usage_outcomes.items():
            self.usage_outcomes[outcome] = self.usage_outcomes.get(outcome, 0) + count

    def filter_by_kind(self, kind: str) -> list[Finding]:
        """Get findings of a specific kind."""
        return [f for f in self.findings if f.kind == kind]

    def filter_by_document(self, document: str) -> list[Finding]:
        """Get findings for a specific manual page."""
        return [f for f in self.findings if f.document == document]

    def to_dict(self, include_warnings: bool = True) -> dict:
        """Convert to dictionary for serialization."""
        findings = self.findings if include_warnings else self.errors
        return {
            "passed": self.passed,
            "documents_checked": self.documents_checked,
            "error_count": self.error_count,
            "warning_count": self.warning_count,
            "usage_outcomes": dict(self.usage_outcomes),
            "findings": [f.to_dict() for f in findings],
        }
