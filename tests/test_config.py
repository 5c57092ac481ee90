"""Tests for cwnote.lib.config module."""

from pathlib import Path

import pytest

from cwnote.lib.config import (
    DEFAULT_LABEL,
    DEFAULT_MAX_LIST_PAGES,
    load_settings,
    settings_from_env,
)


class TestSettingsFromEnv:
    """Test settings_from_env function."""

    def test_defaults(self):
        settings = settings_from_env({})
        assert settings.region is None
        assert settings.label == DEFAULT_LABEL == "version"
        assert settings.export_dir == Path(".")
        assert settings.export_enabled is True
        assert settings.max_list_pages == DEFAULT_MAX_LIST_PAGES
        assert settings.log_level == "INFO"

    def test_all_values(self):
        settings = settings_from_env({
            "CWNOTE_REGION": "eu-central-1",
            "CWNOTE_LABEL": "deploy",
            "CWNOTE_EXPORT_DIR": "/var/lib/cwnote",
            "CWNOTE_EXPORT": "false",
            "CWNOTE_MAX_LIST_PAGES": "50",
            "CWNOTE_LOG_LEVEL": "debug",
        })
        assert settings.region == "eu-central-1"
        assert settings.label == "deploy"
        assert settings.export_dir == Path("/var/lib/cwnote")
        assert settings.export_enabled is False
        assert settings.max_list_pages == 50
        assert settings.log_level == "DEBUG"

    def test_empty_region_means_default_chain(self):
        assert settings_from_env({"CWNOTE_REGION": ""}).region is None

    def test_invalid_max_pages_defaults_with_warning(self, caplog):
        settings = settings_from_env({"CWNOTE_MAX_LIST_PAGES": "lots"})
        assert settings.max_list_pages == DEFAULT_MAX_LIST_PAGES
        assert "Invalid CWNOTE_MAX_LIST_PAGES 'lots'" in caplog.text

    def test_zero_max_pages_defaults_with_warning(self, caplog):
        settings = settings_from_env({"CWNOTE_MAX_LIST_PAGES": "0"})
        assert settings.max_list_pages == DEFAULT_MAX_LIST_PAGES
        assert "must be at least 1" in caplog.text

    def test_unknown_log_level_defaults_with_warning(self, caplog):
        settings = settings_from_env({"CWNOTE_LOG_LEVEL": "chatty"})
        assert settings.log_level == "INFO"
        assert "Unknown CWNOTE_LOG_LEVEL 'CHATTY'" in caplog.text


class TestLoadSettings:
    """Test load_settings lookup."""

    def test_explicit_file(self, tmp_path):
        path = tmp_path / "custom.env"
        path.write_text("CWNOTE_LABEL=incident\n")
        assert load_settings(path).label == "incident"

    def test_explicit_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "missing.env")

    def test_implicit_file_in_search_dir(self, tmp_path):
        (tmp_path / "cwnote.env").write_text("CWNOTE_REGION=us-west-2\n")
        assert load_settings(search_dir=tmp_path).region == "us-west-2"

    def test_no_file_gives_defaults(self, tmp_path):
        settings = load_settings(search_dir=tmp_path)
        assert settings.label == "version"
        assert settings.export_enabled is True

    def test_invalid_file_raises(self, tmp_path):
        (tmp_path / "cwnote.env").write_text("CWNOTE_LABEL=$(whoami)\n")
        with pytest.raises(ValueError):
            load_settings(search_dir=tmp_path)
