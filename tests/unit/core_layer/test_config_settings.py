"""
Unit Tests for Configuration Settings

Tests the settings loading, validation, and default values.
"""

import pytest
from pydantic import ValidationError

from redis_cacher.core.config.constants import ReadErrorPolicy
from redis_cacher.core.config.settings import (
    CacherSettings,
    LoggingSettings,
    Settings,
    get_settings,
    reload_settings,
)

ENV_VARS = [
    "REDIS_URL",
    "REDIS_SOCKET",
    "REDIS_HOST",
    "REDIS_PORT",
    "CACHER_PREFIX",
    "CACHER_EXPIRES",
    "CACHER_READ_ERROR_POLICY",
    "LOG_LEVEL",
    "LOG_FORMAT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.mark.unit
class TestSettingsDefaults:
    """Test default values."""

    def test_cacher_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.cacher.CACHER_PREFIX == "cacher:"
        assert settings.cacher.CACHER_EXPIRES == 300
        assert settings.cacher.CACHER_READ_ERROR_POLICY is ReadErrorPolicy.FAIL_OPEN

    def test_redis_defaults(self):
        redis = Settings(_env_file=None).redis

        assert redis.REDIS_URL is None
        assert redis.REDIS_SOCKET is None
        assert redis.REDIS_HOST == "localhost"
        assert redis.REDIS_PORT == 6379
        assert redis.REDIS_DB == 0

    def test_logging_defaults(self):
        logging_settings = Settings(_env_file=None).logging

        assert logging_settings.LOG_LEVEL == "INFO"
        assert logging_settings.LOG_FORMAT == "json"


@pytest.mark.unit
class TestSettingsFromEnvironment:
    """Test environment variable loading."""

    def test_cacher_values_from_env(self, monkeypatch):
        monkeypatch.setenv("CACHER_PREFIX", "app:")
        monkeypatch.setenv("CACHER_EXPIRES", "60")
        monkeypatch.setenv("CACHER_READ_ERROR_POLICY", "fail_closed")

        cacher = Settings(_env_file=None).cacher

        assert cacher.CACHER_PREFIX == "app:"
        assert cacher.CACHER_EXPIRES == 60
        assert cacher.CACHER_READ_ERROR_POLICY is ReadErrorPolicy.FAIL_CLOSED

    def test_redis_values_from_env(self, monkeypatch):
        monkeypatch.setenv("REDIS_URL", "redis://cache:6380/2")
        monkeypatch.setenv("REDIS_PORT", "6380")

        redis = Settings(_env_file=None).redis

        assert redis.REDIS_URL == "redis://cache:6380/2"
        assert redis.REDIS_PORT == 6380

    def test_log_level_is_upper_cased(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")

        assert Settings(_env_file=None).LOG_LEVEL == "DEBUG"


@pytest.mark.unit
class TestSettingsValidation:
    """Test validation failures."""

    @pytest.mark.parametrize("expires", [0, -10])
    def test_non_positive_expires_rejected(self, expires):
        with pytest.raises(ValidationError):
            CacherSettings(CACHER_EXPIRES=expires)

    def test_unknown_policy_rejected(self):
        with pytest.raises(ValidationError):
            CacherSettings(CACHER_READ_ERROR_POLICY="retry")

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            LoggingSettings(LOG_LEVEL="VERBOSE")

    def test_unknown_log_format_rejected(self):
        with pytest.raises(ValidationError):
            LoggingSettings(LOG_FORMAT="xml")


@pytest.mark.unit
class TestSettingsSingleton:
    """Test get_settings() / reload_settings()."""

    def test_get_settings_returns_same_instance(self):
        assert get_settings() is get_settings()

    def test_reload_settings_picks_up_environment(self, monkeypatch):
        monkeypatch.setenv("CACHER_PREFIX", "reloaded:")

        try:
            settings = reload_settings()

            assert settings.CACHER_PREFIX == "reloaded:"
            assert get_settings() is settings
        finally:
            monkeypatch.delenv("CACHER_PREFIX")
            reload_settings()
