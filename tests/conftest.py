"""Shared fixtures for the Printwise test suite."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

_PRINTWISE_ENV_VARS = (
    "PRINTWISE_STRENGTH",
    "PRINTWISE_FLEXIBILITY",
    "PRINTWISE_DETAIL",
    "PRINTWISE_OUTDOOR",
    "PRINTWISE_FOOD_SAFE",
    "PRINTWISE_CONFIG",
    "PRINTWISE_LOG_DIR",
    "PRINTWISE_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def env_clean(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests isolated from any PRINTWISE_* variables in the shell."""
    for name in _PRINTWISE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def missing_config(tmp_path: Path) -> str:
    """Path to a config file that does not exist."""
    return str(tmp_path / "nonexistent.yaml")


@pytest.fixture()
def sample_config_file(tmp_path: Path) -> Path:
    """A config file that changes every default."""
    p = tmp_path / "config.yaml"
    with p.open("w") as fh:
        yaml.safe_dump(
            {
                "strength": 8,
                "flexibility": 2,
                "detail": 9,
                "outdoor": True,
                "food_safe": True,
            },
            fh,
        )
    return p

