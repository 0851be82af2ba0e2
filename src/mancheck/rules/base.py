"""Base class for manual page rules.

This module defines the abstract base class that all rule implementations
must inherit from. It provides a consistent interface for rule checking.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ..findings import CheckResults

if TYPE_CHECKING:
    from mancheck.document import ManPageSet
    from mancheck.naming import CommandNaming


class ManPageRule(ABC):
    """Abstract base class for manual page rule implementations.

    Subclasses must implement the `check` method to perform
    the actual rule validation.

    Attributes:
        rule_id: Unique identifier for this rule category
        name: Human-readable name for the rule
        description: Detailed description of what the rule checks
    """

    rule_id: str = ""
    name: str = ""
    description: str = ""

    @abstractmethod
    def check(
        self,
        pages: ManPageSet,
        naming: CommandNaming,
    ) -> CheckResults:
        """Check the manual pages against this rule.

        Args:
            pages: All manual pages of the documents directory
            naming: Command naming rules for the program

        Returns:
            CheckResults containing any findings
        """
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(rule_id={self.rule_id!r})"
