"""Tests for settings and credentials resolution."""

import json
from unittest.mock import patch

import pytest

from tts_convert.config import (
    AppSettings,
    ConversionSettings,
    GoogleCloudSettings,
    ServerSettings,
    SynthesisSettings,
)
from tts_convert.config.credentials import load_credentials, resolve_project_id


class TestSettingsDefaults:
    """Tests for default configuration values."""

    def test_conversion_limits(self, monkeypatch: pytest.MonkeyPatch):
        """Test default text and upload limits."""
        monkeypatch.delenv("CONVERSION_MAX_TEXT_LENGTH", raising=False)
        monkeypatch.delenv("CONVERSION_MAX_UPLOAD_SIZE_MB", raising=False)

        settings = ConversionSettings()

        assert settings.max_text_length == 5000
        assert settings.max_upload_size_bytes == 10 * 1024 * 1024
        assert settings.allowed_upload_types == ["application/pdf", "text/plain"]
        assert settings.rollback_on_failure is False

    def test_synthesis_defaults(self):
        """Test fixed synthesis parameters."""
        settings = SynthesisSettings(
            default_voice="en-US-Wavenet-D",
            effects_profile_id="small-bluetooth-speaker-class-device",
        )

        assert settings.pitch == 0.0
        assert settings.speaking_rate == 1.0

    def test_server_port_from_environment(self, monkeypatch: pytest.MonkeyPatch):
        """Test SERVER_PORT overrides the listening port."""
        monkeypatch.setenv("SERVER_PORT", "8080")

        assert ServerSettings().port == 8080


class TestEnvironmentAliases:
    """Tests for unprefixed environment variable names."""

    def test_use_mock_alias(self, monkeypatch: pytest.MonkeyPatch):
        """Test USE_MOCK switches the backend."""
        monkeypatch.setenv("USE_MOCK", "false")

        assert GoogleCloudSettings().use_mock is False

    def test_service_account_alias(self, monkeypatch: pytest.MonkeyPatch):
        """Test GOOGLE_SERVICE_ACCOUNT populates inline credentials."""
        monkeypatch.setenv("GOOGLE_SERVICE_ACCOUNT", '{"type": "service_account"}')

        assert GoogleCloudSettings().credentials_json == '{"type": "service_account"}'

    def test_app_name_alias(self, monkeypatch: pytest.MonkeyPatch):
        """Test APP_NAME sets the service name."""
        monkeypatch.setenv("APP_NAME", "Speech Service")

        assert AppSettings().name == "Speech Service"


class TestCredentials:
    """Tests for credentials loading."""

    def test_no_credentials_falls_back_to_adc(self):
        """Test None is returned when no key is configured."""
        settings = GoogleCloudSettings(
            GOOGLE_SERVICE_ACCOUNT=None, credentials_file=None, project_id=None
        )

        assert load_credentials(settings) is None
        assert resolve_project_id(settings, None) is None

    def test_inline_json_wins_over_file(self):
        """Test the inline key is used before the key file."""
        info = {"type": "service_account", "project_id": "inline-project"}
        settings = GoogleCloudSettings(
            GOOGLE_SERVICE_ACCOUNT=json.dumps(info), credentials_file="/keys/sa.json"
        )

        with patch(
            "tts_convert.config.credentials.service_account.Credentials"
        ) as credentials_cls:
            load_credentials(settings)

        credentials_cls.from_service_account_info.assert_called_once_with(info)
        credentials_cls.from_service_account_file.assert_not_called()

    def test_project_id_from_credentials(self):
        """Test the key's project is used when none is configured."""
        settings = GoogleCloudSettings(project_id=None)

        class FakeCredentials:
            project_id = "key-project"

        assert resolve_project_id(settings, FakeCredentials()) == "key-project"

    def test_explicit_project_id_wins(self):
        """Test an explicit project id overrides the key's project."""
        settings = GoogleCloudSettings(project_id="explicit")

        class FakeCredentials:
            project_id = "key-project"

        assert resolve_project_id(settings, FakeCredentials()) == "explicit"
