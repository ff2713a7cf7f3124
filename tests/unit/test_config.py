"""Unit tests for settings and config loading."""

import json
from pathlib import Path

import pytest

from lang_audit.config import DEFAULT_USAGE_PATTERN, Settings, load_config
from lang_audit.errors import ConfigurationError


class TestSettings:
    """Test defaults and validation."""

    def test_defaults(self, tmp_path):
        settings = Settings(base_path=tmp_path)

        assert settings.default_locale == "en"
        assert settings.baseline_locale == "en"
        assert settings.excluded_groups == ["auth", "pagination", "passwords", "validation"]
        assert settings.usage_patterns == [DEFAULT_USAGE_PATTERN]
        assert settings.output_format == "text"
        assert settings.max_workers >= 1
        assert settings.lang_dir == tmp_path / "lang"
        assert settings.scan_dirs == [tmp_path / "app", tmp_path / "resources" / "views"]

    def test_pattern_needs_one_group(self, tmp_path):
        with pytest.raises(ValueError, match="capture group"):
            Settings(base_path=tmp_path, usage_patterns=[r"__\('[^']+'\)"])

    def test_pattern_must_compile(self, tmp_path):
        with pytest.raises(ValueError, match="invalid pattern"):
            Settings(base_path=tmp_path, usage_patterns=["(unclosed"])

    def test_workers_must_be_positive(self, tmp_path):
        with pytest.raises(ValueError):
            Settings(base_path=tmp_path, max_workers=0)

    def test_environment_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LANG_AUDIT_DEFAULT_LOCALE", "de")

        assert Settings(base_path=tmp_path).default_locale == "de"


class TestLoadConfig:
    """Test load_config."""

    def test_yaml_file(self, tmp_path):
        config_file = tmp_path / "lang-audit.yaml"
        config_file.write_text(
            "lang_path: resources/lang\n"
            "scan_paths: [src]\n"
            "excluded_groups: []\n",
            encoding="utf-8",
        )

        settings = load_config(config_file, base_path=tmp_path)

        assert settings.lang_dir == tmp_path / "resources" / "lang"
        assert settings.scan_paths == [Path("src")]
        assert settings.excluded_groups == []

    def test_json_file(self, tmp_path):
        config_file = tmp_path / "lang-audit.json"
        config_file.write_text(json.dumps({"max_workers": 3}), encoding="utf-8")

        assert load_config(config_file, base_path=tmp_path).max_workers == 3

    def test_overrides_beat_file_and_none_is_ignored(self, tmp_path):
        config_file = tmp_path / "lang-audit.yaml"
        config_file.write_text("output_format: json\nmax_workers: 2\n", encoding="utf-8")

        settings = load_config(config_file, base_path=tmp_path, output_format="plain", max_workers=None)

        assert settings.output_format == "plain"
        assert settings.max_workers == 2

    def test_environment_beats_file(self, tmp_path, monkeypatch):
        config_file = tmp_path / "lang-audit.yaml"
        config_file.write_text("default_locale: fr\n", encoding="utf-8")
        monkeypatch.setenv("LANG_AUDIT_DEFAULT_LOCALE", "de")

        assert load_config(config_file, base_path=tmp_path).default_locale == "de"

    def test_relative_base_path_is_resolved(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        settings = load_config(base_path=Path("."))

        assert settings.base_path == tmp_path.resolve()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Cannot read config file"):
            load_config(tmp_path / "nope.yaml")

    def test_file_must_be_mapping(self, tmp_path):
        config_file = tmp_path / "lang-audit.yaml"
        config_file.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(config_file)

    def test_invalid_value(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(base_path=tmp_path, usage_patterns=["no groups"])

        assert exc_info.value.context["config_key"] == "usage_patterns"

    def test_unknown_key(self, tmp_path):
        config_file = tmp_path / "lang-audit.yaml"
        config_file.write_text("colour: blue\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="colour"):
            load_config(config_file, base_path=tmp_path)

    def test_unparseable_environment_value(self, tmp_path, monkeypatch):
        # List fields read from the environment must be JSON
        monkeypatch.setenv("LANG_AUDIT_SCAN_PATHS", "app")

        with pytest.raises(ConfigurationError, match="scan_paths") as exc_info:
            load_config(base_path=tmp_path)

        assert exc_info.value.previous_error is not None

    @pytest.mark.parametrize("locale", ["", "..", "../app", "fr\\..\\app"])
    def test_locale_must_be_a_plain_name(self, tmp_path, locale):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(base_path=tmp_path, default_locale=locale)

        assert exc_info.value.context["config_key"] == "default_locale"
