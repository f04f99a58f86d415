"""Configuration management for the Printwise CLI.

Stores default preference values in ``~/.printwise/config.yaml`` so a
user who always prints outdoor parts does not have to pass
``--outdoor`` every time.

Precedence (highest first):
    1. CLI flags (``--strength``, ``--outdoor``, etc.)
    2. Environment variables (``PRINTWISE_STRENGTH``, etc.)
    3. Config file (``~/.printwise/config.yaml``)
    4. Built-in defaults
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from printwise import parse_bool_env, parse_bool_text, parse_int_env

logger = logging.getLogger(__name__)

SLIDER_MIN = 1
SLIDER_MAX = 10

SLIDER_KEYS: tuple[str, ...] = ("strength", "flexibility", "detail")
FLAG_KEYS: tuple[str, ...] = ("outdoor", "food_safe")

DEFAULTS: dict[str, Any] = {
    "strength": 5,
    "flexibility": 5,
    "detail": 5,
    "outdoor": False,
    "food_safe": False,
}

_ENV_PREFIX = "PRINTWISE_"


def get_config_path() -> Path:
    """Return the default config file path (``~/.printwise/config.yaml``)."""
    return Path.home() / ".printwise" / "config.yaml"


def clamp_slider(value: int) -> int:
    """Clamp a slider value into the 1-10 range."""
    return max(SLIDER_MIN, min(SLIDER_MAX, value))


def _load_config_file(config_path: Path) -> dict[str, Any]:
    """Read and parse a YAML config file, returning an empty dict on any failure."""
    if not config_path.is_file():
        return {}
    try:
        with config_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (yaml.YAMLError, OSError) as exc:
        logger.warning("Ignoring unreadable config file %s: %s", config_path, exc)
        return {}
    if isinstance(data, dict):
        return data
    if data is not None:
        logger.warning("Ignoring config file %s: expected a mapping", config_path)
    return {}


def _coerce_slider(key: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning(
            "Invalid value for %s=%r in config file, using default %d",
            key,
            value,
            DEFAULTS[key],
        )
        return int(DEFAULTS[key])


def _coerce_flag(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    parsed = parse_bool_text(value) if isinstance(value, str) else None
    if parsed is None:
        logger.warning(
            "Invalid value for %s=%r in config file, using default %s",
            key,
            value,
            DEFAULTS[key],
        )
        return bool(DEFAULTS[key])
    return parsed


def load_config(
    config_path: str | None = None,
    **overrides: Any,
) -> dict[str, Any]:
    """Resolve preference defaults across flags, env vars and the config file.

    :param config_path: YAML file to read instead of the default location.
    :param overrides: Explicit values (e.g. from CLI flags).  ``None``
        values are ignored so unset flags fall through to lower tiers.
    :returns: A dict with the keys of :data:`DEFAULTS`, sliders clamped
        to 1-10.
    """
    config: dict[str, Any] = dict(DEFAULTS)

    path = Path(config_path) if config_path else get_config_path()
    file_values = _load_config_file(path)
    for key in SLIDER_KEYS:
        if file_values.get(key) is not None:
            config[key] = _coerce_slider(key, file_values[key])
    for key in FLAG_KEYS:
        if file_values.get(key) is not None:
            config[key] = _coerce_flag(key, file_values[key])

    for key in SLIDER_KEYS:
        config[key] = parse_int_env(_ENV_PREFIX + key.upper(), config[key])
    for key in FLAG_KEYS:
        config[key] = parse_bool_env(_ENV_PREFIX + key.upper(), config[key])

    for key, value in overrides.items():
        if key not in DEFAULTS:
            raise TypeError(f"Unknown config key '{key}'.")
        if value is not None:
            config[key] = value

    for key in SLIDER_KEYS:
        config[key] = clamp_slider(int(config[key]))

    return config


def init_config(config_path: str | None = None, *, force: bool = False) -> Path:
    """Write a config file holding the built-in defaults.

    :raises FileExistsError: If the file exists and *force* is false.
    :returns: Path of the written file.
    """
    path = Path(config_path) if config_path else get_config_path()
    if path.exists() and not force:
        raise FileExistsError(f"Config file already exists: {path}")
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w", encoding="utf-8") as fh:
        yaml.safe_dump(dict(DEFAULTS), fh, default_flow_style=False, sort_keys=False)

    logger.info("Wrote default config to %s", path)
    return path
