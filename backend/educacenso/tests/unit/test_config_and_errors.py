# backend/educacenso/tests/unit/test_config_and_errors.py

import pytest

from educacenso.config import (
    DevelopmentSettings,
    ProductionSettings,
    Settings,
    TestingSettings as _TestingSettings,
    get_settings,
    validate_settings,
)
from educacenso.core.exceptions import (
    AppError,
    CensusExportError,
    InvalidSnapshotError,
    UnsupportedFormatError,
)
from educacenso.logging_config import build_logging_config


class TestSettings:
    @pytest.mark.parametrize(
        "environment, expected",
        [
            ("testing", _TestingSettings),
            ("production", ProductionSettings),
            ("development", DevelopmentSettings),
        ],
    )
    def test_environment_selects_settings(self, monkeypatch, environment, expected):
        monkeypatch.setenv("ENVIRONMENT", environment)
        assert type(get_settings()) is expected

    def test_settings_are_cached(self):
        assert get_settings() is get_settings()

    def test_census_defaults(self):
        settings = get_settings()
        assert (settings.AGE_CUTOFF_MONTH, settings.AGE_CUTOFF_DAY) == (3, 31)
        assert settings.ACTIVE_ENROLLMENT_STATUS == "Cursando"
        assert settings.DEFAULT_CLASSROOM_CAPACITY == 30

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_CLASSROOM_CAPACITY", "40")
        assert get_settings().DEFAULT_CLASSROOM_CAPACITY == 40

    def test_invalid_cutoff_month(self):
        with pytest.raises(ValueError):
            Settings(AGE_CUTOFF_MONTH=13)

    def test_validate_settings(self):
        assert validate_settings(get_settings()) == []
        issues = validate_settings(
            _TestingSettings(DEFAULT_CLASSROOM_CAPACITY=2, AGE_GRADE_HIGH_DISTORTION_THRESHOLD=-1)
        )
        assert "DEFAULT_CLASSROOM_CAPACITY must be positive" not in issues
        assert "AGE_GRADE_HIGH_DISTORTION_THRESHOLD must not be negative" in issues
        assert (
            "CLASSROOM_NEARLY_FULL_THRESHOLD should be smaller than DEFAULT_CLASSROOM_CAPACITY"
            in issues
        )

    def test_debug_in_production_is_reported(self):
        issues = validate_settings(ProductionSettings(DEBUG=True))
        assert issues == ["DEBUG must be disabled in production"]

    def test_unknown_log_level_is_reported(self):
        issues = validate_settings(_TestingSettings(LOG_LEVEL="verbose"))
        assert issues == ["LOG_LEVEL 'verbose' is not a logging level"]


class TestErrors:
    def test_to_dict(self):
        error = AppError("Falhou").with_context(school_id="s1", year_id=None)
        payload = error.to_dict()["error"]
        assert payload["code"] == "app_error"
        assert payload["status_code"] == 500
        assert payload["context"] == {"school_id": "s1"}

    def test_census_export_error_carries_findings(self):
        error = CensusExportError(errors=["Escola não encontrada"], warnings=["Sem diretor"])
        payload = error.to_dict()["error"]
        assert error.status_code == 422
        assert payload["errors"] == ["Escola não encontrada"]
        assert payload["warnings"] == ["Sem diretor"]
        assert payload["context"]["error_count"] == 1

    def test_unsupported_format(self):
        error = UnsupportedFormatError("xls", supported=["csv", "pdf"])
        assert str(error).startswith("UnsupportedFormatError(unsupported_format)")
        assert error.context == {"format": "xls", "supported": ["csv", "pdf"]}

    def test_invalid_snapshot_wraps_cause(self):
        cause = ValueError("bad json")
        error = InvalidSnapshotError.from_exception(cause)
        assert error.cause is cause
        assert error.message == "bad json"
        assert error.to_dict()["error"]["validation_errors"] == []


class TestLoggingConfig:
    def test_app_logger_follows_settings(self):
        config = build_logging_config(_TestingSettings(LOG_LEVEL="warning"))
        assert config["loggers"]["educacenso"] == {
            "handlers": ["default"],
            "level": "WARNING",
            "propagate": False,
        }
        assert "file" not in config["handlers"]

    def test_log_file_adds_rotating_handler(self, tmp_path):
        log_file = str(tmp_path / "export.log")
        config = build_logging_config(_TestingSettings(LOG_FILE=log_file))
        assert config["handlers"]["file"]["filename"] == log_file
        assert config["loggers"]["educacenso"]["handlers"] == ["default", "file"]
