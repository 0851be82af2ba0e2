"""Pytest fixtures for mancheck tests."""

import pytest
from pathlib import Path

# A consistent manual page tree for the program "foo"
TOP_LEVEL_PAGE = """% foo 1

## NAME
foo - Simple management tool

## SYNOPSIS
**foo** [*options*] *command*

## COMMANDS

| Command                                      | Description            |
| -------------------------------------------- | ---------------------- |
| [foo-auto-update(1)](foo-auto-update.1.md)   | Auto update things.    |
| [foo-bar(1)](foo-bar.1.md)                   | Does a thing.          |
| [foo-pod(1)](foo-pod.1.md)                   | Manage pods.           |
"""

BAR_PAGE = """% foo-bar 1

## NAME
foo\\-bar - Does a thing

## SYNOPSIS
**foo bar** [*options*] *arg*...

## DESCRIPTION
Does a thing to every *arg*.
"""

AUTO_UPDATE_PAGE = """% foo-auto-update 1

## NAME
foo\\-auto\\-update - Auto update things

## SYNOPSIS
**foo auto-update** [*options*]
"""

POD_PAGE = """% foo-pod 1

# NAME
foo\\-pod - Manage pods

# SYNOPSIS
**foo pod** *subcommand*

# SUBCOMMANDS

| Command | Man Page                                   | Description        |
| ------- | ------------------------------------------ | ------------------ |
| create  | [foo-pod-create(1)](foo-pod-create.1.md)   | Create a new pod.  |
"""

POD_CREATE_PAGE = """% foo-pod-create 1

## NAME
foo\\-pod\\-create - Create a new pod

## SYNOPSIS
**foo pod create** [*options*] *name*
"""

REMOTE_PAGE = """% foo-remote 1

## NAME
foo\\-remote - A remote client for foo

## SYNOPSIS
**foo-remote** [*options*] *command*
"""

PAGES = {
    "foo.1.md": TOP_LEVEL_PAGE,
    "foo-bar.1.md": BAR_PAGE,
    "foo-auto-update.1.md": AUTO_UPDATE_PAGE,
    "foo-pod.1.md": POD_PAGE,
    "foo-pod-create.1.md": POD_CREATE_PAGE,
    "foo-remote.1.md": REMOTE_PAGE,
}

# Stand-in for bin/foo: prints cobra-style usage for each subcommand
HELP_SCRIPT = """#!/bin/sh
case "$1" in
  bar) printf 'Usage:\\n  foo bar [flags] ARG...\\n' ;;
  auto-update) printf 'Usage:\\n  foo auto-update [flags]\\n' ;;
  pod)
    if [ "$2" = "create" ]; then
      printf 'Usage:\\n  foo pod create [flags] NAME\\n'
    else
      printf 'Usage:\\n  foo pod SUBCOMMAND\\n'
    fi
    ;;
  *) printf 'Usage:\\n  foo [flags] COMMAND\\n' ;;
esac
"""


@pytest.fixture(autouse=True)
def isolated_user_config(tmp_path_factory, monkeypatch):
    """Keep the developer's own ~/.config/mancheck out of the tests."""
    missing = tmp_path_factory.mktemp("home") / "config.toml"
    monkeypatch.setattr("mancheck.config.USER_CONFIG_PATH", missing)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A project root with a consistent docs/source/markdown tree."""
    (tmp_path / ".git").mkdir()
    docs = tmp_path / "docs" / "source" / "markdown"
    docs.mkdir(parents=True)
    for name, text in PAGES.items():
        (docs / name).write_text(text)
    return tmp_path


@pytest.fixture
def docs_dir(project: Path) -> Path:
    """The manual page directory of the project fixture."""
    return project / "docs" / "source" / "markdown"


@pytest.fixture
def help_binary(project: Path) -> Path:
    """An executable bin/foo in the project fixture."""
    binary = project / "bin" / "foo"
    binary.parent.mkdir()
    binary.write_text(HELP_SCRIPT)
    binary.chmod(0o755)
    return binary


@pytest.fixture
def make_pages(tmp_path: Path):
    """Factory writing the standard tree with some pages replaced, then loading it.

    Keyword names use underscores for hyphens: foo_bar replaces foo-bar.1.md.
    """
    from mancheck.document import load_manpages

    def _make(**overrides: str):
        docs = tmp_path / "man"
        docs.mkdir(exist_ok=True)
        pages = dict(PAGES)
        for stem, text in overrides.items():
            pages[stem.replace("_", "-") + ".1.md"] = text
        for name, text in pages.items():
            (docs / name).write_text(text)
        return load_manpages(docs)

    return _make


@pytest.fixture
def page_texts() -> dict[str, str]:
    """Texts of the standard tree, by file name."""
    return dict(PAGES)
