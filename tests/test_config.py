"""Tests for printwise.cli.config - preference defaults and precedence."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
import yaml

from printwise.cli.config import (
    DEFAULTS,
    clamp_slider,
    get_config_path,
    init_config,
    load_config,
)


class TestGetConfigPath:
    def test_under_home(self) -> None:
        path = get_config_path()
        assert path.name == "config.yaml"
        assert path.parent.name == ".printwise"


class TestClampSlider:
    @pytest.mark.parametrize("raw, expected", [(-3, 1), (0, 1), (1, 1), (7, 7), (10, 10), (42, 10)])
    def test_clamps(self, raw: int, expected: int) -> None:
        assert clamp_slider(raw) == expected


# ===================================================================
# load_config - file tier
# ===================================================================


class TestLoadConfigFile:
    def test_defaults_when_no_file_exists(self, missing_config: str) -> None:
        assert load_config(config_path=missing_config) == DEFAULTS

    def test_values_from_file(self, sample_config_file: Path) -> None:
        config = load_config(config_path=str(sample_config_file))
        assert config == {
            "strength": 8,
            "flexibility": 2,
            "detail": 9,
            "outdoor": True,
            "food_safe": True,
        }

    def test_partial_file_merges_with_defaults(self, tmp_path: Path) -> None:
        p = tmp_path / "partial.yaml"
        p.write_text("detail: 9\n")
        config = load_config(config_path=str(p))
        assert config["detail"] == 9
        assert config["strength"] == DEFAULTS["strength"]
        assert config["outdoor"] is False

    def test_invalid_yaml_returns_defaults(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        p = tmp_path / "bad.yaml"
        p.write_text("{{{{invalid yaml")
        with caplog.at_level(logging.WARNING):
            config = load_config(config_path=str(p))
        assert config == DEFAULTS
        assert "unreadable config" in caplog.text

    def test_non_mapping_returns_defaults(self, tmp_path: Path) -> None:
        p = tmp_path / "list.yaml"
        p.write_text("- item1\n- item2\n")
        assert load_config(config_path=str(p)) == DEFAULTS

    def test_non_integer_slider_uses_default(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        p = tmp_path / "junk.yaml"
        p.write_text("strength: lots\n")
        with caplog.at_level(logging.WARNING):
            config = load_config(config_path=str(p))
        assert config["strength"] == DEFAULTS["strength"]
        assert "strength" in caplog.text

    def test_quoted_false_strings_are_false(self, tmp_path: Path) -> None:
        p = tmp_path / "quoted.yaml"
        p.write_text('outdoor: "false"\nfood_safe: "no"\n')
        config = load_config(config_path=str(p))
        assert config["outdoor"] is False
        assert config["food_safe"] is False

    def test_quoted_true_strings_are_true(self, tmp_path: Path) -> None:
        p = tmp_path / "quoted.yaml"
        p.write_text('outdoor: "On"\nfood_safe: "1"\n')
        config = load_config(config_path=str(p))
        assert config["outdoor"] is True
        assert config["food_safe"] is True

    @pytest.mark.parametrize("raw", ['"sometimes"', "2", "[true]"])
    def test_unrecognised_flag_uses_default(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture, raw: str
    ) -> None:
        p = tmp_path / "junk.yaml"
        p.write_text(f"outdoor: {raw}\n")
        with caplog.at_level(logging.WARNING):
            config = load_config(config_path=str(p))
        assert config["outdoor"] is False
        assert "outdoor" in caplog.text

    def test_quoted_false_does_not_pick_petg(self, tmp_path: Path) -> None:
        from printwise.recommender import PreferenceInput, recommend

        p = tmp_path / "quoted.yaml"
        p.write_text('outdoor: "false"\nfood_safe: "no"\n')
        config = load_config(config_path=str(p))
        rec = recommend(PreferenceInput(**config))
        assert rec.chosen_material.id == "PLA"

    def test_out_of_range_file_values_are_clamped(self, tmp_path: Path) -> None:
        p = tmp_path / "wide.yaml"
        p.write_text("strength: 15\nflexibility: 0\n")
        config = load_config(config_path=str(p))
        assert config["strength"] == 10
        assert config["flexibility"] == 1


# ===================================================================
# load_config - env var tier
# ===================================================================


class TestLoadConfigEnvVars:
    def test_env_slider_overrides_file(
        self, sample_config_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PRINTWISE_STRENGTH", "3")
        config = load_config(config_path=str(sample_config_file))
        assert config["strength"] == 3
        assert config["detail"] == 9

    def test_env_flag_overrides_file(
        self, sample_config_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PRINTWISE_OUTDOOR", "no")
        config = load_config(config_path=str(sample_config_file))
        assert config["outdoor"] is False
        assert config["food_safe"] is True

    def test_env_true_values(
        self, missing_config: str, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PRINTWISE_FOOD_SAFE", "1")
        assert load_config(config_path=missing_config)["food_safe"] is True

    def test_invalid_env_int_falls_back(
        self, sample_config_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PRINTWISE_DETAIL", "high")
        assert load_config(config_path=str(sample_config_file))["detail"] == 9

    def test_invalid_env_bool_falls_back(
        self, missing_config: str, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PRINTWISE_OUTDOOR", "sometimes")
        assert load_config(config_path=missing_config)["outdoor"] is False

    def test_empty_env_var_does_not_override(
        self, sample_config_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PRINTWISE_FLEXIBILITY", "")
        assert load_config(config_path=str(sample_config_file))["flexibility"] == 2

    def test_env_values_are_clamped(
        self, missing_config: str, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PRINTWISE_DETAIL", "99")
        assert load_config(config_path=missing_config)["detail"] == 10


# ===================================================================
# load_config - explicit overrides (highest priority)
# ===================================================================


class TestLoadConfigOverrides:
    def test_override_beats_env_and_file(
        self, sample_config_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PRINTWISE_STRENGTH", "3")
        config = load_config(config_path=str(sample_config_file), strength=6)
        assert config["strength"] == 6

    def test_false_override_beats_true_file_value(self, sample_config_file: Path) -> None:
        config = load_config(config_path=str(sample_config_file), outdoor=False)
        assert config["outdoor"] is False

    def test_none_override_is_ignored(self, sample_config_file: Path) -> None:
        config = load_config(config_path=str(sample_config_file), strength=None, outdoor=None)
        assert config["strength"] == 8
        assert config["outdoor"] is True

    def test_unknown_override_raises(self, missing_config: str) -> None:
        with pytest.raises(TypeError, match="colour"):
            load_config(config_path=missing_config, colour="red")


# ===================================================================
# init_config
# ===================================================================


class TestInitConfig:
    def test_writes_defaults(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "config.yaml"
        path = init_config(str(target))
        assert path == target
        assert yaml.safe_load(target.read_text()) == DEFAULTS

    def test_refuses_to_overwrite(self, sample_config_file: Path) -> None:
        with pytest.raises(FileExistsError):
            init_config(str(sample_config_file))

    def test_force_overwrites(self, sample_config_file: Path) -> None:
        init_config(str(sample_config_file), force=True)
        assert load_config(config_path=str(sample_config_file)) == DEFAULTS

    def test_default_location(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        path = init_config()
        assert path == tmp_path / ".printwise" / "config.yaml"
        assert path.is_file()
