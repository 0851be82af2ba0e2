"""
Configuration file support for mancheck.

Provides hierarchical configuration loading from:
1. Project config: .mancheck.toml or mancheck.toml in project root
2. User config: ~/.config/mancheck/config.toml

CLI arguments override config file values, and project config overrides user config.
"""

import sys
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from mancheck.exceptions import ConfigError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

# Config file names to search for in project directories
CONFIG_FILENAMES = [".mancheck.toml", "mancheck.toml"]

# User-level config path
USER_CONFIG_PATH = Path.home() / ".config" / "mancheck" / "config.toml"

# All known config keys for validation
KNOWN_KEYS = {
    "defaults": {"format", "verbose"},
    "docs": {"directory", "suffix", "program"},
    "binary": {"path", "help_flag", "options_marker", "enabled"},
    "exceptions": {"hyphenated_subcommands", "exempt_families"},
}

# Keys whose value must be a list of strings
LIST_KEYS = {"exceptions.hyphenated_subcommands", "exceptions.exempt_families"}


@dataclass
class DefaultsConfig:
    """Default options for the command line."""

    format: str = "table"
    verbose: bool = False


@dataclass
class DocsConfig:
    """Where the manual pages live and how they are named."""

    directory: str = "docs/source/markdown"
    suffix: str = ".1.md"
    program: str | None = None


@dataclass
class BinaryConfig:
    """Companion binary used for the usage comparison."""

    path: str | None = None
    help_flag: str = "--help"
    options_marker: str = "[flags]"
    enabled: bool = True

    def resolve_path(self, program: str) -> Path:
        """Path of the binary, defaulting to bin/<program>."""
        if self.path:
            return Path(self.path)
        return Path("bin") / program


@dataclass
class ExceptionsConfig:
    """Named exceptions to the page naming rules.

    Attributes:
        hyphenated_subcommands: Subcommands whose own name contains a hyphen.
            They count as a single command word, so their synopsis keeps the
            hyphen and their parent is resolved one level up.
        exempt_families: Subcommand words naming pages that are variants of
            the program rather than real subcommands.
    """

    hyphenated_subcommands: list[str] = field(default_factory=lambda: ["auto-update"])
    exempt_families: list[str] = field(default_factory=lambda: ["remote"])


@dataclass
class Config:
    """Merged configuration from all sources."""

    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    docs: DocsConfig = field(default_factory=DocsConfig)
    binary: BinaryConfig = field(default_factory=BinaryConfig)
    exceptions: ExceptionsConfig = field(default_factory=ExceptionsConfig)

    # Track which file each setting came from
    _sources: dict = field(default_factory=dict, repr=False)

    @classmethod
    def load(cls, start_dir: Path | None = None) -> "Config":
        """
        Load configuration with precedence: project > user > defaults.

        Args:
            start_dir: Directory to start searching from (default: current directory)

        Returns:
            Merged configuration object
        """
        if start_dir is None:
            start_dir = Path.cwd()

        config = cls()
        sources: dict[str, str] = {}

        # Load user config first (lower precedence)
        if USER_CONFIG_PATH.exists():
            user_data = _load_toml_file(USER_CONFIG_PATH)
            if user_data:
                _merge_config(config, user_data, str(USER_CONFIG_PATH), sources)

        # Load project config (higher precedence)
        project_config = _find_project_config(start_dir)
        if project_config:
            project_data = _load_toml_file(project_config)
            if project_data:
                _merge_config(config, project_data, str(project_config), sources)

        config._sources = sources
        return config

    def get_source(self, key: str) -> str:
        """Get the source file for a config key."""
        return self._sources.get(key, "default")


def _find_project_config(start_dir: Path) -> Path | None:
    """
    Find project config by walking up the directory tree.

    Stops at .git directory or filesystem root.

    Args:
        start_dir: Directory to start searching from

    Returns:
        Path to config file if found, None otherwise
    """
    current = start_dir.resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        # Stop at .git directory (project root)
        if (current / ".git").exists():
            break

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    """
    Load a TOML file.

    Args:
        path: Path to TOML file

    Returns:
        Parsed TOML data

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(
            "Invalid TOML in config file",
            context={"file": str(path), "error": str(e)},
        ) from e
    except OSError as e:
        raise ConfigError(
            "Cannot read config file",
            context={"file": str(path), "error": str(e)},
        ) from e


def _merge_config(
    config: Config, data: dict[str, Any], source: str, sources: dict[str, str]
) -> None:
    """
    Merge loaded config data into Config object.

    Args:
        config: Config object to update
        data: Raw config data from TOML
        source: Source file path (for tracking)
        sources: Dict to update with source info
    """
    for key in data:
        if key not in KNOWN_KEYS:
            warnings.warn(f"Unknown config key '{key}' in {source}", stacklevel=3)

    for section, known in KNOWN_KEYS.items():
        if section not in data:
            continue
        section_data = data[section]
        if not isinstance(section_data, dict):
            raise ConfigError(
                f"Config section [{section}] must be a table",
                context={"file": source},
            )
        _warn_unknown_keys(section_data, known, section, source)

        target = getattr(config, section)
        for key in sorted(known):
            if key in section_data:
                value = section_data[key]
                if f"{section}.{key}" in LIST_KEYS and not _is_string_list(value):
                    raise ConfigError(
                        f"Config key {section}.{key} must be a list of strings",
                        context={"file": source, "value": repr(value)},
                        suggestions=[f'Write {key} = ["...", "..."]'],
                    )
                setattr(target, key, value)
                sources[f"{section}.{key}"] = source


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def _warn_unknown_keys(data: dict[str, Any], known: set[str], section: str, source: str) -> None:
    """Warn about unknown keys in a config section."""
    for key in data:
        if key not in known:
            warnings.warn(f"Unknown config key '{section}.{key}' in {source}", stacklevel=4)


def generate_template() -> str:
    """
    Generate a template config file with all options documented.

    Returns:
        Template TOML string
    """
    return """# mancheck configuration file
# Place as .mancheck.toml in project root or ~/.config/mancheck/config.toml for user defaults

[defaults]
# Output format: table, json
# format = "table"

# Report advisory usage mismatches by default
# verbose = false

[docs]
# Manual page directory, relative to the project root
# directory = "docs/source/markdown"

# Suffix shared by every manual page file
# suffix = ".1.md"

# Top-level program; inferred from the only page without a hyphen if unset
# program = "foo"

[binary]
# Companion binary queried for --help output (default: bin/<program>)
# path = "bin/foo"

# Flag that prints the usage text
# help_flag = "--help"

# How the help output spells the optional-flags marker
# options_marker = "[flags]"

# Set to false to never run the binary
# enabled = true

[exceptions]
# Subcommands whose name contains a hyphen
# hyphenated_subcommands = ["auto-update"]

# Pages that describe program variants rather than subcommands
# exempt_families = ["remote"]
"""
