"""Tests for cwnote.lib.export module."""

import logging
from datetime import datetime, timezone

from cwnote.lib.export import (
    ExportResult,
    export_filename,
    sanitize_dashboard_name,
    write_export,
)

WHEN = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


class TestSanitizeDashboardName:
    """Test sanitize_dashboard_name function."""

    def test_keeps_safe_names(self):
        assert sanitize_dashboard_name("svc-prod") == "svc-prod"

    def test_lowercases(self):
        assert sanitize_dashboard_name("Svc-PROD") == "svc-prod"

    def test_replaces_unsafe_characters(self):
        assert sanitize_dashboard_name("My Dash_Prod.v2") == "my-dash-prod-v2"

    def test_replaces_path_separators(self):
        assert sanitize_dashboard_name("../etc/passwd") == "---etc-passwd"

    def test_replaces_non_ascii(self):
        assert sanitize_dashboard_name("Überblick") == "-berblick"


class TestExportFilename:
    """Test export_filename function."""

    def test_timestamp_prefix(self):
        assert export_filename("Svc Prod", WHEN) == "20250102T030405Z-svc-prod.json"

    def test_sorts_by_time(self):
        later = datetime(2025, 1, 2, 3, 4, 6, tzinfo=timezone.utc)
        assert export_filename("z", WHEN) < export_filename("a", later)


class TestWriteExport:
    """Test write_export function."""

    def test_writes_exact_body(self, tmp_path):
        body = '{"widgets":[]}'
        result = write_export(tmp_path, "svc-prod", body, WHEN)
        assert result.success is True
        assert result.path == tmp_path / "20250102T030405Z-svc-prod.json"
        assert result.path.read_text(encoding="utf-8") == body

    def test_creates_export_dir(self, tmp_path):
        result = write_export(tmp_path / "exports" / "cw", "d", "{}", WHEN)
        assert result.success is True
        assert result.path.exists()

    def test_failure_is_reported_not_raised(self, tmp_path, caplog):
        caplog.set_level(logging.WARNING)
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")

        result = write_export(blocker, "svc-prod", "{}", WHEN)

        assert result.success is False
        assert result.error
        assert "Failed to export dashboard svc-prod" in caplog.text


    def test_unencodable_body_is_reported_not_raised(self, tmp_path, caplog):
        caplog.set_level(logging.WARNING)

        result = write_export(tmp_path, "svc-prod", '{"title":"x\ud800"}', WHEN)

        assert result.success is False
        assert "surrogates not allowed" in result.error
        assert "Failed to export dashboard svc-prod" in caplog.text


class TestExportResult:
    """Test ExportResult.success."""

    def test_success_requires_path(self):
        assert ExportResult(path=None).success is False

    def test_error_means_failure(self, tmp_path):
        assert ExportResult(path=tmp_path / "x.json", error="disk full").success is False
