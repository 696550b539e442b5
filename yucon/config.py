"""
User settings: loaded from a YAML file, overridable from the environment and CLI.

Lookup order for the settings file:
  1. an explicit path (``--config``)
  2. ``$YUCON_CONFIG``
  3. ``~/.config/yucon/config.yaml``

Only an explicitly named file must exist; otherwise a missing file means
defaults. Recognised keys::

    output_format: descriptive   # simple | descriptive | verbose (or s/d/v)
    precision: 6                 # significant digits; unset means shortest round-trip form
    units_file: ~/units.cfg      # units data file to load instead of the bundled one
    log_level: WARNING

Unknown keys are ignored.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

import yaml

from yucon.convert.formatter import MAX_PRECISION, OutputFormat
from yucon.units.catalog import DATA_FILE

CONFIG_ENV = "YUCON_CONFIG"
UNITS_ENV = "YUCON_UNITS"
DEFAULT_CONFIG_FILE = Path("~/.config/yucon/config.yaml")
SYSTEM_UNITS_FILE = Path("/etc/yucon/units.dat")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SettingsError(Exception):
    """Raised when a settings file is missing, malformed, or holds invalid values."""


@dataclass(frozen=True)
class Settings:
    output_format: OutputFormat = OutputFormat.SIMPLE
    precision: int | None = None
    units_file: Path | None = None
    log_level: str = "WARNING"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], source: str = "<settings>") -> Settings:
        """Build Settings from a parsed mapping, validating every recognised key."""
        kwargs: dict[str, Any] = {}

        if "output_format" in data:
            try:
                kwargs["output_format"] = OutputFormat.from_name(str(data["output_format"]))
            except ValueError as exc:
                raise SettingsError(f"{source}: {exc}") from None

        if data.get("precision") is not None:
            precision = data["precision"]
            if not isinstance(precision, int) or isinstance(precision, bool) or not 1 <= precision <= MAX_PRECISION:
                raise SettingsError(f"{source}: precision must be an integer from 1 to {MAX_PRECISION}, got {precision!r}")
            kwargs["precision"] = precision

        if data.get("units_file"):
            kwargs["units_file"] = Path(str(data["units_file"])).expanduser()

        if "log_level" in data:
            level = str(data["log_level"]).upper()
            if level not in _LOG_LEVELS:
                raise SettingsError(f"{source}: unknown log_level {data['log_level']!r}")
            kwargs["log_level"] = level

        return cls(**kwargs)


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise SettingsError(f"settings file not found: {path}") from None
    except UnicodeDecodeError:
        raise SettingsError(f"settings file is not valid UTF-8: {path}") from None
    except yaml.YAMLError as exc:
        raise SettingsError(f"failed to parse settings file {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SettingsError(f"settings file {path} must contain a mapping at top level")
    return cast(dict[str, Any], data)


def load_settings(path: Path | None = None, env: Mapping[str, str] | None = None) -> Settings:
    """Load settings from ``path``, ``$YUCON_CONFIG`` or the per-user default file."""
    env = os.environ if env is None else env

    if path is None and env.get(CONFIG_ENV):
        path = Path(env[CONFIG_ENV])

    if path is None:
        default = DEFAULT_CONFIG_FILE.expanduser()
        if not default.is_file():
            return Settings()
        path = default

    path = path.expanduser()
    return Settings.from_mapping(_load_yaml(path), source=str(path))


def resolve_units_file(
    cli_path: Path | None,
    settings: Settings,
    env: Mapping[str, str] | None = None,
) -> Path:
    """
    Pick the units data file to load.

    Precedence: ``--units`` > ``$YUCON_UNITS`` > settings ``units_file`` >
    ``/etc/yucon/units.dat`` when present > the bundled data file.
    """
    env = os.environ if env is None else env
    if cli_path is not None:
        return cli_path.expanduser()
    if env.get(UNITS_ENV):
        return Path(env[UNITS_ENV]).expanduser()
    if settings.units_file is not None:
        return settings.units_file
    if SYSTEM_UNITS_FILE.is_file():
        return SYSTEM_UNITS_FILE
    return DATA_FILE
