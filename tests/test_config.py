"""Tests for config.py: YAML config loading."""

from __future__ import annotations

import pytest

from todoist_monthly_report.config import DEFAULTS, load_config
from todoist_monthly_report.errors import ConfigError


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(str(tmp_path / "nope.yaml")) == DEFAULTS

    def test_partial_file_fills_defaults(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text("report:\n  tz: Europe/Berlin\n  match_year: false\n", encoding="utf-8")
        cfg = load_config(str(path))
        assert cfg["tz"] == "Europe/Berlin"
        assert cfg["match_year"] is False
        assert cfg["limit"] == 100
        assert cfg["timeout"] == 30.0

    def test_empty_file(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(str(path)) == DEFAULTS

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text("report: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_bad_limit(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text("report:\n  limit: 0\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_non_numeric_timeout(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text("report:\n  timeout: soon\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_unknown_format(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text("report:\n  format: csv\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(str(path))

    @pytest.mark.parametrize("value", ['"false"', "no_thanks", "1"])
    def test_match_year_must_be_bool(self, tmp_path, value):
        path = tmp_path / "cfg.yaml"
        path.write_text(f"report:\n  match_year: {value}\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(str(path))

    @pytest.mark.parametrize("value", ["0", "-1.5"])
    def test_timeout_must_be_positive(self, tmp_path, value):
        path = tmp_path / "cfg.yaml"
        path.write_text(f"report:\n  timeout: {value}\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(str(path))
