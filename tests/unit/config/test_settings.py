"""
Unit tests for environment-based settings.
"""

import pytest
from pydantic import ValidationError

from cdc_schema_hub.config import Settings, get_settings


@pytest.mark.unit
class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in (
            "CDC_SCHEMA_REGISTRY_URL",
            "CDC_SCHEMA_REGISTRY_TIMEOUT",
            "CDC_SCHEMA_REGISTRY_MAX_CACHED_SCHEMAS",
            "CDC_TOPIC_PREFIX",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = Settings()
        assert settings.schema_registry_url == "http://localhost:8081"
        assert settings.schema_registry_timeout == 10.0
        assert settings.schema_registry_max_cached_schemas == 1000
        assert settings.topic_prefix == ""

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CDC_SCHEMA_REGISTRY_URL", "http://registry.internal:8081/")
        monkeypatch.setenv("CDC_TOPIC_PREFIX", "cdc")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        settings = Settings()
        assert settings.schema_registry_url == "http://registry.internal:8081"
        assert settings.topic_prefix == "cdc"
        assert settings.LOG_LEVEL == "DEBUG"

    def test_non_positive_timeout_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CDC_SCHEMA_REGISTRY_TIMEOUT", "0")
        with pytest.raises(ValidationError):
            Settings()

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()
