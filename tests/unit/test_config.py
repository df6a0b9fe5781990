"""Unit tests for settings, secrets and error types."""

import pytest
from unittest.mock import MagicMock, patch

from config.errors import (
    ConfigurationError,
    EmptyResponseError,
    ErrorCode,
    RehabEstimatorError,
)
from config.secrets import clear_secret_cache, get_gemini_api_key, get_secret
from config.settings import Settings


@pytest.fixture(autouse=True)
def reset_secret_cache():
    clear_secret_cache()
    yield
    clear_secret_cache()


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch):
        for name in ("GEMINI_MODEL", "ESTIMATE_TEMPERATURE", "ANALYSIS_TEMPERATURE", "ENABLE_SEARCH_GROUNDING"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(api_key="k")

        assert settings.gemini_model == "gemini-2.5-flash"
        assert settings.estimate_temperature == 0.0
        assert settings.analysis_temperature == 0.1
        assert settings.enable_search_grounding is True

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("GEMINI_MODEL", "gemini-2.5-pro")
        monkeypatch.setenv("ANALYSIS_TEMPERATURE", "0.3")
        monkeypatch.setenv("ENABLE_SEARCH_GROUNDING", "false")

        settings = Settings(api_key="k")

        assert settings.gemini_model == "gemini-2.5-pro"
        assert settings.analysis_temperature == 0.3
        assert settings.enable_search_grounding is False

    def test_injected_key_skips_secret_lookup(self):
        with patch("config.secrets.get_gemini_api_key") as mock_lookup:
            settings = Settings(api_key="injected")
            settings.validate()

        assert settings.gemini_api_key == "injected"
        mock_lookup.assert_not_called()

    def test_key_from_environment(self, monkeypatch):
        monkeypatch.delenv("USE_SECRET_MANAGER", raising=False)
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")

        assert Settings().gemini_api_key == "env-key"

    def test_validate_missing_key(self, monkeypatch):
        monkeypatch.delenv("USE_SECRET_MANAGER", raising=False)
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)

        with pytest.raises(ConfigurationError) as exc_info:
            Settings().validate()

        assert exc_info.value.code == ErrorCode.CONFIGURATION_ERROR
        assert exc_info.value.setting == "GEMINI_API_KEY"


class TestSecrets:
    """Tests for secret lookup."""

    def test_environment_lookup(self, monkeypatch):
        monkeypatch.delenv("USE_SECRET_MANAGER", raising=False)
        monkeypatch.setenv("SOME_SECRET", "value")

        assert get_secret("SOME_SECRET") == "value"

    def test_empty_environment_value_is_none(self, monkeypatch):
        monkeypatch.delenv("USE_SECRET_MANAGER", raising=False)
        monkeypatch.setenv("SOME_SECRET", "")

        assert get_secret("SOME_SECRET") is None

    def test_secret_manager_lookup(self, monkeypatch):
        monkeypatch.setenv("USE_SECRET_MANAGER", "true")
        monkeypatch.setenv("GOOGLE_CLOUD_PROJECT", "rehab-dev")

        client = MagicMock()
        client.access_secret_version.return_value.payload.data = b"sm-key"
        with patch("google.cloud.secretmanager.SecretManagerServiceClient", return_value=client):
            assert get_gemini_api_key() == "sm-key"

        client.access_secret_version.assert_called_once_with(
            request={"name": "projects/rehab-dev/secrets/GEMINI_API_KEY/versions/latest"}
        )

    def test_secret_manager_without_project(self, monkeypatch):
        monkeypatch.setenv("USE_SECRET_MANAGER", "true")
        monkeypatch.delenv("GOOGLE_CLOUD_PROJECT", raising=False)
        monkeypatch.delenv("GCLOUD_PROJECT", raising=False)

        with patch("google.cloud.secretmanager.SecretManagerServiceClient"):
            assert get_secret("GEMINI_API_KEY") is None


class TestErrors:
    """Tests for error types."""

    def test_to_dict_hides_details_by_default(self):
        error = RehabEstimatorError(code="X", message="Something failed", details={"raw": "secret"})

        assert error.to_dict() == {"code": "X", "message": "Something failed"}
        assert error.to_dict(include_details=True)["details"] == {"raw": "secret"}

    def test_empty_response_message(self):
        error = EmptyResponseError("investment analysis")

        assert error.message.startswith("The AI model returned an empty response for the investment analysis.")
        assert error.details["operation"] == "investment analysis"
        assert repr(error) == f"EmptyResponseError(code='EMPTY_RESPONSE', message={error.message!r})"
