"""Declared name rule: the NAME section must name the page's own command."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..findings import CheckResults, Finding
from .base import ManPageRule

if TYPE_CHECKING:
    from mancheck.document import ManPageSet
    from mancheck.naming import CommandNaming

logger = logging.getLogger(__name__)


class NameRule(ManPageRule):
    """Compare each page's declared NAME with its file name.

    ``foo-bar.1.md`` must start its NAME line with ``foo-bar`` (backslash
    escapes such as ``foo\\-bar`` are ignored).
    """

    rule_id = "naming"
    name = "Declared name"
    description = "NAME section token matches the file name"

    def check(self, pages: ManPageSet, naming: CommandNaming) -> CheckResults:
        results = CheckResults(documents_checked=len(pages))

        for page in pages:
            declared = page.name_entry.declared_name
            logger.debug("%s declares %r", page.filename, declared)
            if declared == page.stem:
                continue

            results.add(
                Finding(
                    kind="naming",
                    severity="error",
                    document=page.filename,
                    actual=declared,
                    expected=page.stem,
                    message=f"{page.filename} declares name '{declared}'",
                )
            )

        return results
