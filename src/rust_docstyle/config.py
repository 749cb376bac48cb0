"""Settings file loader (``rust-docstyle.yml``)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Any

import yaml

from rust_docstyle.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "rust-docstyle.yml"
OUTPUT_FORMATS: frozenset[str] = frozenset({"text", "json"})


@dataclass(frozen=True)
class Settings:
    """Run settings; command-line flags override values loaded from file."""

    warnings: bool = False
    format: str = "text"
    no_fail: bool = False
    strict_summary_period: bool = False
    exclude: tuple[str, ...] = ()


def _expect_bool(data: dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        msg = f"'{key}' must be a boolean, got {type(value).__name__}"
        raise ConfigError(msg)
    return value


def parse_settings(data: object) -> Settings:
    """Validate a decoded YAML document and build :class:`Settings`."""
    if data is None:
        return Settings()
    if not isinstance(data, dict):
        msg = "Configuration must be a mapping"
        raise ConfigError(msg)

    known = {f.name for f in fields(Settings)}
    for key in sorted(set(data) - known):
        logger.warning("Unknown configuration key ignored: %s", key)

    defaults = Settings()
    fmt = data.get("format", defaults.format)
    if fmt not in OUTPUT_FORMATS:
        msg = f"'format' must be one of {sorted(OUTPUT_FORMATS)}, got {fmt!r}"
        raise ConfigError(msg)

    exclude = data.get("exclude", [])
    if not isinstance(exclude, list) or not all(isinstance(item, str) for item in exclude):
        msg = "'exclude' must be a list of glob strings"
        raise ConfigError(msg)

    return Settings(
        warnings=_expect_bool(data, "warnings", defaults.warnings),
        format=fmt,
        no_fail=_expect_bool(data, "no_fail", defaults.no_fail),
        strict_summary_period=_expect_bool(
            data, "strict_summary_period", defaults.strict_summary_period
        ),
        exclude=tuple(exclude),
    )


def load_settings(path: Path | None, *, search_dir: Path) -> Settings:
    """Load settings from *path*, or from ``rust-docstyle.yml`` in *search_dir*.

    A missing default file yields default settings; an explicitly given
    *path* must exist.

    Raises
    ------
    ConfigError
        When the file cannot be read, is not valid YAML, or has invalid values.
    """
    explicit = path is not None
    config_path = path if path is not None else search_dir / CONFIG_FILENAME
    if not config_path.is_file():
        if explicit:
            msg = f"Configuration file not found: {config_path}"
            raise ConfigError(msg)
        return Settings()

    logger.debug("Loading configuration from %s", config_path)
    try:
        with config_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Invalid configuration in {config_path}: {exc}"
        raise ConfigError(msg) from exc

    return parse_settings(data)
