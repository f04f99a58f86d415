"""Printwise - filament recommendations and print settings for 3D printing."""

from __future__ import annotations

import logging
import os
import re
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

_logger = logging.getLogger(__name__)

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _resolve_version() -> str:
    """Resolve the installed package version with a source-tree fallback."""
    # Source tree first so a git checkout reports its own version.
    try:
        pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
        if pyproject.is_file():
            content = pyproject.read_text(encoding="utf-8")
            match = re.search(r'(?m)^\s*version\s*=\s*"([^"]+)"\s*$', content)
            if match:
                return match.group(1)
    except OSError as exc:
        _logger.debug("Local pyproject version fallback failed: %s", exc)

    try:
        return version("printwise")
    except PackageNotFoundError:
        return "unknown"


__version__ = _resolve_version()


def parse_int_env(name: str, default: int) -> int:
    """Parse an integer from an environment variable with safe fallback.

    Logs a warning and returns *default* if the value is not a valid integer.
    """
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        _logger.warning(
            "Invalid integer for %s=%r, using default %d",
            name,
            raw,
            default,
        )
        return default


def parse_bool_text(raw: str) -> bool | None:
    """Parse ``1/0``, ``true/false``, ``yes/no``, ``on/off``; ``None`` if unrecognised."""
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return None


def parse_bool_env(name: str, default: bool) -> bool:
    """Parse a boolean flag (``1/0``, ``true/false``, ``yes/no``, ``on/off``)."""
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    parsed = parse_bool_text(raw)
    if parsed is not None:
        return parsed
    _logger.warning(
        "Invalid boolean for %s=%r, using default %s",
        name,
        raw,
        default,
    )
    return default
