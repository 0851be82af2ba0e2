"""Description rule: subcommand pages agree with their parent's table."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..findings import CheckResults, Finding
from .base import ManPageRule

if TYPE_CHECKING:
    from mancheck.document import ManPage, ManPageSet
    from mancheck.naming import CommandNaming

logger = logging.getLogger(__name__)


def table_description(parent: ManPage | None, filename: str, column: int) -> str:
    """Description of a page in its parent's summary table.

    Args:
        parent: The parent page, or None if it does not exist
        filename: File name of the described page
        column: Cell index holding the description

    Returns:
        Trimmed cell text with one trailing period removed, or an empty
        string if the parent or its row is missing
    """
    if parent is None:
        return ""
    row = parent.find_row(filename)
    if row is None:
        return ""

    text = row.cell(column).strip()
    if text.endswith("."):
        text = text[:-1]
    return text


class DescriptionRule(ManPageRule):
    """Compare subcommand descriptions with the parent page's table rows.

    Applies to pages with a hyphen in their name, except the exempt
    families. One-level subcommands are looked up in the two-column
    top-level table, deeper ones in three-column nested tables.
    """

    rule_id = "description"
    name = "Subcommand description"
    description = "NAME description matches the parent table entry"

    def check(self, pages: ManPageSet, naming: CommandNaming) -> CheckResults:
        results = CheckResults(documents_checked=len(pages))

        for page in pages:
            if not naming.is_subcommand(page.stem):
                continue

            own = page.name_entry.description
            parent_name = naming.parent_filename(page.stem)
            column = naming.description_column(page.stem)
            parent = pages.get(parent_name)
            logger.debug("%s: parent %s, column %d", page.filename, parent_name, column)

            listed = table_description(parent, page.filename, column)
            if own == listed:
                continue

            if parent is None:
                message = f"{page.filename}: parent page {parent_name} not found"
            else:
                message = f"{page.filename}: description differs from {parent_name}"
            results.add(
                Finding(
                    kind="description",
                    severity="error",
                    document=page.filename,
                    actual=own,
                    expected=listed,
                    message=message,
                )
            )

        return results
