"""
Unit Tests for configuration loading
====================================
Environment parsing, defaults and validation of settings objects.
"""

import pytest

from send_sms.config import (
    FREEMOBILE_API_URL,
    FreeMobileSettings,
    MessageSettings,
    TwilioSettings,
    get_settings,
)
from send_sms.exceptions import ConfigurationError, InvalidBudgetError, ValidationError
from send_sms.validators import MAX_INPUT_LENGTH


class TestGetSettings:
    """Tests for get_settings()."""

    def test_defaults(self):
        app_settings, message_settings = get_settings()

        assert app_settings.debug is False
        assert app_settings.carrier == "freemobile"
        assert message_settings == MessageSettings()
        assert message_settings.max_length == 999
        assert message_settings.prefix_reserve == 8
        assert message_settings.chunk_delay_seconds == 0.5

    def test_debug_flag_presence_is_enough(self, monkeypatch):
        monkeypatch.setenv("DEBUG", "")

        app_settings, _ = get_settings()

        assert app_settings.debug is True

    @pytest.mark.parametrize(("value", "expected"), [("yes", True), ("1", True), ("off", False)])
    def test_app_debug(self, monkeypatch, value, expected):
        monkeypatch.setenv("APP_DEBUG", value)

        app_settings, _ = get_settings()

        assert app_settings.debug is expected

    def test_carrier_is_normalized(self, monkeypatch):
        monkeypatch.setenv("SMS_CARRIER", " Twilio ")

        app_settings, _ = get_settings()

        assert app_settings.carrier == "twilio"

    def test_unknown_carrier(self, monkeypatch):
        monkeypatch.setenv("SMS_CARRIER", "pigeon")

        with pytest.raises(ConfigurationError, match="Unsupported SMS_CARRIER"):
            get_settings()

    def test_message_limits_from_env(self, monkeypatch):
        monkeypatch.setenv("SMS_MAX_LENGTH", "160")
        monkeypatch.setenv("SMS_MIN_BOUNDARY_RATIO", "0.25")
        monkeypatch.setenv("SMS_CHUNK_DELAY_SECONDS", "0")

        _, message_settings = get_settings()

        assert message_settings.max_length == 160
        assert message_settings.min_boundary_ratio == 0.25
        assert message_settings.chunk_delay_seconds == 0.0

    def test_non_numeric_value(self, monkeypatch):
        monkeypatch.setenv("SMS_MAX_LENGTH", "lots")

        with pytest.raises(ConfigurationError, match="SMS_MAX_LENGTH must be an integer"):
            get_settings()

    def test_inconsistent_budget(self, monkeypatch):
        monkeypatch.setenv("SMS_PREFIX_RESERVE", "999")

        with pytest.raises(InvalidBudgetError):
            get_settings()

    def test_negative_delay(self, monkeypatch):
        monkeypatch.setenv("SMS_CHUNK_DELAY_SECONDS", "-1")

        with pytest.raises(ConfigurationError):
            get_settings()


class TestMessageSettings:
    """Tests for MessageSettings.validate()."""

    @pytest.mark.parametrize(
        "overrides",
        [
            {"prefix_reserve": 0},
            {"max_length": 8},
            {"min_word_length": -1},
            {"min_boundary_ratio": 0.0},
            {"min_boundary_ratio": 2.0},
        ],
    )
    def test_invalid_budget(self, overrides):
        with pytest.raises(InvalidBudgetError):
            MessageSettings(**overrides).validate()

    def test_defaults_are_valid(self):
        MessageSettings().validate()

    def test_input_limit_shared_with_validators(self):
        assert MessageSettings().max_input_length == MAX_INPUT_LENGTH
        assert MessageSettings.from_env().max_input_length == MAX_INPUT_LENGTH


class TestFreeMobileSettings:
    """Tests for FreeMobileSettings."""

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("FREEMOBILE_USER", " 12345678 ")
        monkeypatch.setenv("FREEMOBILE_PASS", "key")
        monkeypatch.setenv("FREEMOBILE_TIMEOUT", "10")

        settings = FreeMobileSettings.from_env()

        assert settings.user == "12345678"
        assert settings.password == "key"
        assert settings.api_url == FREEMOBILE_API_URL
        assert settings.timeout_seconds == 10.0

    def test_explicit_values_win(self, monkeypatch):
        monkeypatch.setenv("FREEMOBILE_USER", "12345678")
        monkeypatch.setenv("FREEMOBILE_PASS", "env-key")

        settings = FreeMobileSettings.from_env(user="87654321", password="cli-key")

        assert settings.user == "87654321"
        assert settings.password == "cli-key"

    def test_missing_credentials_are_empty(self):
        settings = FreeMobileSettings.from_env()

        assert settings.user == ""
        with pytest.raises(ConfigurationError, match="FREEMOBILE_USER"):
            settings.validate()

    def test_missing_password(self):
        with pytest.raises(ConfigurationError, match="FREEMOBILE_PASS"):
            FreeMobileSettings(user="12345678", password="").validate()

    def test_bad_user_id(self):
        with pytest.raises(ValidationError):
            FreeMobileSettings(user="1234567", password="key").validate()

    def test_non_positive_timeout(self):
        with pytest.raises(ConfigurationError):
            FreeMobileSettings(user="12345678", password="key", timeout_seconds=0).validate()

    def test_masked_user(self):
        assert FreeMobileSettings(user="12345678", password="key").get_masked_user() == "1234****"


class TestTwilioSettings:
    """Tests for TwilioSettings."""

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("TWILIO_ACCOUNT_SID", "AC123")
        monkeypatch.setenv("TWILIO_AUTH_TOKEN", "token")
        monkeypatch.setenv("TWILIO_DEFAULT_FROM", "+15005550006")
        monkeypatch.setenv("TWILIO_DEFAULT_TO", "+33612345678")

        settings = TwilioSettings.from_env()

        assert settings.account_sid == "AC123"
        assert settings.messaging_service_sid is None
        assert settings.default_to == "+33612345678"
        settings.validate()

    def test_relaxed_validation(self):
        settings = TwilioSettings(account_sid="test-sid", auth_token="t", default_from="+15005550006")

        settings.validate(strict=False)
        with pytest.raises(ConfigurationError):
            settings.validate()

    def test_sender_identity_required(self):
        settings = TwilioSettings(account_sid="AC123", auth_token="t", default_from="")

        with pytest.raises(ConfigurationError, match="TWILIO_MESSAGING_SERVICE_SID"):
            settings.validate()
