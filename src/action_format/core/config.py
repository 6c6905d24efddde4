#!/usr/bin/env python3
"""
ACTION-FORMAT CONFIGURATION
---------------------------
Immutable formatter settings and the TOML loader that produces them.

Lookup order in a project directory:
  1. .action-format.toml
  2. action-format.toml
  3. [tool.action-format] in pyproject.toml

Author: Action-Format Team
Date: 2026-10-18
"""

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from action_format.core.errors import ConfigError

logger = logging.getLogger("action_format.config")

CONFIG_FILENAMES = (".action-format.toml", "action-format.toml")
PYPROJECT_TABLE = "action-format"
DEFAULT_EXTENSIONS = (".yml", ".yaml")


@dataclass(frozen=True)
class FormatterConfig:
    """Knobs consumed by the formatting pipeline."""
    indent_size: int = 2
    separate_steps: bool = True
    separate_jobs: bool = True

    def __post_init__(self):
        if isinstance(self.indent_size, bool) or not isinstance(self.indent_size, int) \
                or self.indent_size < 1:
            raise ConfigError(f"indent-size must be a positive integer, got {self.indent_size!r}")


@dataclass(frozen=True)
class Settings:
    """Everything a run needs: formatter knobs plus file selection."""
    formatter: FormatterConfig = field(default_factory=FormatterConfig)
    ignore: Tuple[str, ...] = ()
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    source: Optional[Path] = None


def _normalize_keys(table: Dict[str, Any]) -> Dict[str, Any]:
    return {str(k).replace("_", "-"): v for k, v in table.items()}


def _expect(value: Any, kind: type, key: str, source: Path) -> Any:
    if kind is int and isinstance(value, bool):
        raise ConfigError(f"{source}: '{key}' must be an integer")
    if not isinstance(value, kind):
        raise ConfigError(f"{source}: '{key}' must be of type {kind.__name__}")
    return value


def _string_list(value: Any, key: str, source: Path) -> Tuple[str, ...]:
    _expect(value, list, key, source)
    if not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{source}: '{key}' must be a list of strings")
    return tuple(value)


def settings_from_table(table: Dict[str, Any], source: Path) -> Settings:
    """Builds Settings from an already-parsed TOML table."""
    table = _normalize_keys(table)
    known = {"indent-size", "separate-steps", "separate-jobs", "ignore", "extensions"}
    unknown = sorted(set(table) - known)
    if unknown:
        raise ConfigError(f"{source}: unknown option(s): {', '.join(unknown)}")

    defaults = FormatterConfig()
    formatter = FormatterConfig(
        indent_size=_expect(table.get("indent-size", defaults.indent_size), int, "indent-size", source),
        separate_steps=_expect(table.get("separate-steps", defaults.separate_steps), bool, "separate-steps", source),
        separate_jobs=_expect(table.get("separate-jobs", defaults.separate_jobs), bool, "separate-jobs", source),
    )

    extensions = DEFAULT_EXTENSIONS
    if "extensions" in table:
        extensions = tuple(
            ext if ext.startswith(".") else f".{ext}"
            for ext in _string_list(table["extensions"], "extensions", source)
        )

    return Settings(
        formatter=formatter,
        ignore=_string_list(table.get("ignore", []), "ignore", source),
        extensions=extensions,
        source=source,
    )


def _read_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"Unable to read {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e


def load_settings(path: Optional[Path] = None, search_dir: Optional[Path] = None) -> Settings:
    """
    Loads settings from an explicit file, or discovers one in search_dir.

    An explicit pyproject.toml is read from its [tool.action-format] table.
    Falls back to defaults when nothing is found.
    """
    if path is not None:
        path = Path(path)
        data = _read_toml(path)
        if path.name == "pyproject.toml":
            data = data.get("tool", {}).get(PYPROJECT_TABLE, {})
        logger.debug(f"Loaded configuration from {path}")
        return settings_from_table(data, path)

    base = Path(search_dir) if search_dir is not None else Path.cwd()
    for name in CONFIG_FILENAMES:
        candidate = base / name
        if candidate.is_file():
            logger.debug(f"Loaded configuration from {candidate}")
            return settings_from_table(_read_toml(candidate), candidate)

    pyproject = base / "pyproject.toml"
    if pyproject.is_file():
        table = _read_toml(pyproject).get("tool", {}).get(PYPROJECT_TABLE)
        if table is not None:
            logger.debug(f"Loaded configuration from {pyproject} [tool.{PYPROJECT_TABLE}]")
            return settings_from_table(table, pyproject)

    logger.debug("No configuration file found; using defaults")
    return Settings()
