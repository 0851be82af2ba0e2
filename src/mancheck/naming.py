"""Command naming rules for manual page file names.

A page file name is the command words joined with hyphens plus the manual
page suffix: ``foo-pod-create.1.md`` documents ``foo pod create``. Two kinds
of named exceptions are kept as lookup tables rather than inline checks:

- hyphenated subcommands (``auto-update``) are one command word, so
  ``foo-auto-update.1.md`` documents ``foo auto-update`` and its parent is
  the top-level page
- exempt families (``remote``) name variants of the program, not
  subcommands, and are skipped by the description and synopsis-name checks
"""

from __future__ import annotations

from dataclasses import dataclass

from mancheck.document import DEFAULT_SUFFIX

# Description column (0-based cell index) in the parent table.
# The top-level table is "name | description"; nested tables are
# "name | page | description".
TOP_LEVEL_DESCRIPTION_COLUMN = 1
NESTED_DESCRIPTION_COLUMN = 2


@dataclass(frozen=True)
class CommandNaming:
    """Maps manual page stems to command words for one program.

    Attributes:
        program: Top-level program name, e.g. "foo"
        suffix: Manual page suffix, e.g. ".1.md"
        hyphenated_subcommands: Subcommand names containing a hyphen
        exempt_families: Subcommand words of pages that are not subcommands
    """

    program: str
    suffix: str = DEFAULT_SUFFIX
    hyphenated_subcommands: tuple[str, ...] = ("auto-update",)
    exempt_families: tuple[str, ...] = ("remote",)

    @property
    def top_level_filename(self) -> str:
        return f"{self.program}{self.suffix}"

    def words(self, stem: str) -> list[str]:
        """Split a page stem into command words.

        Example:
            >>> CommandNaming("foo").words("foo-auto-update")
            ['foo', 'auto-update']
        """
        prefix = f"{self.program}-"
        if stem == self.program:
            return [stem]
        if not stem.startswith(prefix):
            return stem.split("-")

        words = [self.program]
        rest = stem[len(prefix) :]
        # Longest names first so "auto-update-all" beats "auto-update"
        hyphenated = sorted(self.hyphenated_subcommands, key=len, reverse=True)
        while rest:
            for name in hyphenated:
                if rest == name or rest.startswith(f"{name}-"):
                    words.append(name)
                    rest = rest[len(name) + 1 :]
                    break
            else:
                word, _, rest = rest.partition("-")
                words.append(word)
        return words

    def expected_command(self, stem: str) -> str:
        """Command name a page's synopsis should show, e.g. "foo auto-update"."""
        return " ".join(self.words(stem))

    def is_top_level(self, stem: str) -> bool:
        return stem == self.program

    def is_program_page(self, stem: str) -> bool:
        """True for the top-level page and pages named after its subcommands."""
        return stem == self.program or stem.startswith(f"{self.program}-")

    def is_exempt(self, stem: str) -> bool:
        """True for pages of an exempt family such as "foo-remote"."""
        words = self.words(stem)
        return len(words) > 1 and words[0] == self.program and words[1] in self.exempt_families

    def is_subcommand(self, stem: str) -> bool:
        """True for pages whose description must appear in a parent table."""
        return "-" in stem and not self.is_top_level(stem) and not self.is_exempt(stem)

    def depth(self, stem: str) -> int:
        """Number of subcommand levels below the program (0 for the top level)."""
        return len(self.words(stem)) - 1

    def parent_filename(self, stem: str) -> str:
        """File name of the page whose table lists this page."""
        words = self.words(stem)
        return "-".join(words[:-1]) + self.suffix

    def description_column(self, stem: str) -> int:
        """Cell index of the description in the parent's table row."""
        if self.depth(stem) <= 1:
            return TOP_LEVEL_DESCRIPTION_COLUMN
        return NESTED_DESCRIPTION_COLUMN
