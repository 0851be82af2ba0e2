"""Markdown manual page parsing.

Turns each manual page into structured data once, so the checks never
re-scan raw text:

- sections: heading name -> body lines (``#`` and ``##`` headings are
  equivalent section markers)
- table rows: every markdown table row as an ordered tuple of cells
- NAME entry: declared name and one-line description
- SYNOPSIS: literal command name and the argument text after it

Example:
    >>> from mancheck.document import load_manpages
    >>> pages = load_manpages(Path("docs/source/markdown"))
    >>> page = pages.get("foo-bar.1.md")
    >>> page.name_entry.declared_name
    'foo-bar'
    >>> page.synopsis.command_name
    'foo bar'
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from mancheck.exceptions import DocsDirectoryError, ProgramNameError

logger = logging.getLogger(__name__)

DEFAULT_SUFFIX = ".1.md"

# "# NAME" or "## NAME"; deeper headings stay inside the enclosing section
HEADING_PATTERN = re.compile(r"^#{1,2}\s+(.+?)\s*#*\s*$")

# Table cells are split on pipes that are not escaped
CELL_SEPARATOR = re.compile(r"(?<!\\)\|")
ALIGNMENT_CELL = re.compile(r"^:?-+:?$")

# "<program> <subcommand> - text" or "<program\-subcommand> - text"
DESCRIPTION_PREFIX = re.compile(r"^\S+(?:\s+\S+)*?\s+-\s+")

# Leading run of **literal** tokens in a synopsis line
LITERAL_COMMAND = re.compile(r"^((?:\*\*[^*]+\*\*\s*)+)(.*)$")

# Opening or closing line of a fenced code block
CODE_FENCE = re.compile(r"^\s*(```|~~~)")


@dataclass(frozen=True)
class NameEntry:
    """Declared name and description from a page's NAME section.

    Attributes:
        line: The raw NAME line
        declared_name: First token of the line with escapes removed
        description: The line with its leading "<command> - " prefix stripped
    """

    line: str
    declared_name: str
    description: str

    @classmethod
    def parse(cls, line: str) -> NameEntry:
        """Parse a NAME line such as ``foo\\-bar - does a thing``."""
        line = line.strip()
        tokens = line.split()
        declared = tokens[0].replace("\\", "") if tokens else ""
        description = DESCRIPTION_PREFIX.sub("", line, count=1).strip()
        return cls(line=line, declared_name=declared, description=description)


@dataclass(frozen=True)
class Synopsis:
    """A parsed SYNOPSIS line.

    Attributes:
        line: The raw synopsis line
        command_name: The leading ``**literal**`` tokens, markers stripped
        arguments: Everything after the literal command name
    """

    line: str
    command_name: str
    arguments: str

    @classmethod
    def parse(cls, line: str) -> Synopsis:
        """Parse a synopsis line such as ``**foo bar** [*options*] *arg*``."""
        line = line.strip()
        match = LITERAL_COMMAND.match(line)
        if not match:
            return cls(line=line, command_name="", arguments=line)

        literal = match.group(1).replace("**", " ").replace("\\", "")
        return cls(
            line=line,
            command_name=" ".join(literal.split()),
            arguments=match.group(2).strip(),
        )

    @property
    def has_uppercase(self) -> bool:
        """True if any character of the line is upper-case."""
        return any(ch.isupper() for ch in self.line)


@dataclass(frozen=True)
class SummaryRow:
    """One row of a markdown table.

    Attributes:
        cells: Cell texts in column order, whitespace-trimmed
        line_number: 1-indexed line of the row in its document
    """

    cells: tuple[str, ...]
    line_number: int = 0

    @classmethod
    def parse(cls, line: str, line_number: int = 0) -> SummaryRow | None:
        """Parse a table line, returning None for non-rows and alignment rows."""
        text = line.strip()
        if not text.startswith("|"):
            return None

        text = text[1:]
        if text.endswith("|") and not text.endswith("\\|"):
            text = text[:-1]

        cells = tuple(cell.strip() for cell in CELL_SEPARATOR.split(text))
        if all(not cell or ALIGNMENT_CELL.match(cell) for cell in cells):
            return None
        return cls(cells=cells, line_number=line_number)

    def cell(self, index: int) -> str:
        """Cell text at index, or an empty string if the row is shorter."""
        if 0 <= index < len(self.cells):
            return self.cells[index]
        return ""

    def references(self, filename: str, column: int | None = None) -> bool:
        """Check whether a cell links to or names the given file.

        Args:
            filename: Manual page file name, e.g. "foo-bar.1.md"
            column: Only look at this cell; all cells if None
        """
        pattern = re.compile(r"(?<![\w.-])" + re.escape(filename) + r"(?![\w.-])")
        cells = self.cells if column is None else (self.cell(column),)
        return any(pattern.search(cell) for cell in cells)


@dataclass
class ManPage:
    """A markdown manual page split into sections and table rows.

    Attributes:
        path: Location of the page on disk
        suffix: Manual page suffix stripped to get the stem
        lines: Raw document lines
        sections: Section name (upper-case) -> body lines, first occurrence only
        table_rows: All table rows in document order
    """

    path: Path
    suffix: str = DEFAULT_SUFFIX
    lines: list[str] = field(default_factory=list)
    sections: dict[str, list[str]] = field(default_factory=dict)
    table_rows: list[SummaryRow] = field(default_factory=list)

    @classmethod
    def load(cls, path: Path, suffix: str = DEFAULT_SUFFIX) -> ManPage:
        """Read and parse a manual page file."""
        return cls.parse(path.read_text(encoding="utf-8"), path, suffix)

    @classmethod
    def parse(cls, text: str, path: Path, suffix: str = DEFAULT_SUFFIX) -> ManPage:
        """Parse manual page text."""
        lines = text.splitlines()
        sections: dict[str, list[str]] = {}
        rows: list[SummaryRow] = []
        current: list[str] | None = None
        fence: str | None = None

        for number, line in enumerate(lines, start=1):
            # Fenced code is section text only, never headings or table rows
            marker = CODE_FENCE.match(line)
            if marker and fence in (None, marker.group(1)):
                fence = None if fence else marker.group(1)
            if marker or fence:
                if current is not None:
                    current.append(line)
                continue

            heading = HEADING_PATTERN.match(line)
            if heading:
                name = heading.group(1).strip().upper()
                if name in sections:
                    current = None
                else:
                    current = sections.setdefault(name, [])
                continue

            if current is not None:
                current.append(line)

            row = SummaryRow.parse(line, number)
            if row is not None:
                rows.append(row)

        return cls(path=Path(path), suffix=suffix, lines=lines, sections=sections, table_rows=rows)

    @property
    def filename(self) -> str:
        return self.path.name

    @property
    def stem(self) -> str:
        """File name without the manual page suffix, e.g. "foo-bar"."""
        name = self.filename
        if self.suffix and name.endswith(self.suffix):
            return name[: -len(self.suffix)]
        return self.path.stem

    def section(self, name: str) -> list[str]:
        """Body lines of a section, empty if the page has no such section."""
        return self.sections.get(name.upper(), [])

    def first_line(self, name: str) -> str:
        """First non-blank line of a section, or an empty string."""
        for line in self.section(name):
            if line.strip():
                return line.strip()
        return ""

    @property
    def name_entry(self) -> NameEntry:
        return NameEntry.parse(self.first_line("NAME"))

    @property
    def synopsis(self) -> Synopsis | None:
        """Parsed first SYNOPSIS line, None if the section is missing or empty."""
        line = self.first_line("SYNOPSIS")
        if not line:
            return None
        return Synopsis.parse(line)

    def find_row(self, filename: str) -> SummaryRow | None:
        """Find the table row describing the given page.

        Rows whose first cell references the page win; otherwise the first
        row referencing it in any cell is returned.
        """
        for row in self.table_rows:
            if row.references(filename, column=0):
                return row
        for row in self.table_rows:
            if row.references(filename):
                return row
        return None

    def __repr__(self) -> str:
        return f"ManPage({self.filename!r}, sections={list(self.sections)})"


@dataclass
class ManPageSet:
    """All manual pages of one documents directory, sorted by file name."""

    directory: Path
    suffix: str = DEFAULT_SUFFIX
    pages: list[ManPage] = field(default_factory=list)

    def get(self, filename: str) -> ManPage | None:
        """Look up a page by file name."""
        for page in self.pages:
            if page.filename == filename:
                return page
        return None

    def infer_program(self) -> str:
        """Name of the top-level program.

        The top-level page is the page whose stem has no hyphen. When there
        are several, the one whose name prefixes the subcommand pages wins
        (``foo`` over a standalone ``foosh``).

        Raises:
            ProgramNameError: If there is no such page, or more than one
        """
        candidates = [page.stem for page in self.pages if "-" not in page.stem]
        if len(candidates) == 1:
            return candidates[0]

        with_subcommands = [
            stem
            for stem in candidates
            if any(page.stem.startswith(f"{stem}-") for page in self.pages)
        ]
        if len(with_subcommands) == 1:
            logger.debug("Program %s inferred from %s", with_subcommands[0], candidates)
            return with_subcommands[0]

        reason = "no page without a hyphen" if not candidates else "several top-level pages"
        raise ProgramNameError(
            f"Cannot infer the top-level program: {reason}",
            context={"directory": str(self.directory), "candidates": candidates},
            suggestions=["Pass --program or set [docs] program in .mancheck.toml"],
        )

    def __iter__(self) -> Iterator[ManPage]:
        return iter(self.pages)

    def __len__(self) -> int:
        return len(self.pages)


def load_manpages(directory: Path, suffix: str = DEFAULT_SUFFIX) -> ManPageSet:
    """Load every ``*<suffix>`` page in a directory.

    Args:
        directory: Manual page directory
        suffix: Manual page file suffix

    Returns:
        ManPageSet with pages sorted by file name

    Raises:
        DocsDirectoryError: If the directory does not exist
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise DocsDirectoryError(
            "Manual page directory not found",
            context={"directory": str(directory), "cwd": str(Path.cwd())},
            suggestions=[
                "Run mancheck from the project root",
                "Pass --docs-dir or set [docs] directory in .mancheck.toml",
            ],
        )

    paths = sorted(directory.glob(f"*{suffix}"), key=lambda p: p.name)
    logger.debug("Loading %d manual pages from %s", len(paths), directory)

    return ManPageSet(
        directory=directory,
        suffix=suffix,
        pages=[ManPage.load(path, suffix) for path in paths],
    )
