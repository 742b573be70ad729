"""
Unit Tests for the command-line interface
=========================================
End-to-end runs of ``manage.main`` with an in-memory carrier.
"""

import logging
from unittest.mock import patch

import pytest

import manage
from send_sms import AppSettings, FreeMobileSettings, TwilioSettings, create_sender
from send_sms.exceptions import ConfigurationError, InvalidCredentialsError
from send_sms.freemobile_client import FreeMobileService


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def cli_sender(monkeypatch, make_sender):
    """Route every CLI send to a RecordingSender and record the factory calls."""
    sender = make_sender()
    calls = []

    def fake_create_sender(app_settings, **kwargs):
        calls.append((app_settings, kwargs))
        return sender

    monkeypatch.setattr(manage, "create_sender", fake_create_sender)
    monkeypatch.setattr(manage, "has_stdin_input", lambda: True)
    monkeypatch.setenv("SMS_CHUNK_DELAY_SECONDS", "0")
    sender.calls = calls
    return sender


class TestSend:
    """Tests for the 'send' command."""

    def test_send_short_message(self, cli_sender, capsys):
        exit_code = manage.main(["send", "-m", "Backup done ✅", "-u", "12345678", "-p", "key"])

        assert exit_code == 0
        assert cli_sender.bodies == ["Backup done ✅"]
        assert "✅ SMS sent" in capsys.readouterr().out

        app_settings, kwargs = cli_sender.calls[0]
        assert app_settings.carrier == "freemobile"
        assert kwargs["freemobile"].user == "12345678"
        assert kwargs["freemobile"].password == "key"

    def test_send_sanitizes_and_splits(self, cli_sender, monkeypatch):
        monkeypatch.setenv("SMS_MAX_LENGTH", "12")
        monkeypatch.setenv("SMS_PREFIX_RESERVE", "6")

        exit_code = manage.main(["send", "-m", "aaaa bbbb cc \U0001f600"])

        assert exit_code == 0
        assert cli_sender.bodies == ["[1/3] aaaa", "[2/3] bbbb", "[3/3] cc []"]

    def test_send_from_file(self, cli_sender, tmp_path):
        path = tmp_path / "report.txt"
        path.write_text("nightly report\n", encoding="utf-8")

        assert manage.main(["send", "-f", str(path)]) == 0
        assert cli_sender.bodies == ["nightly report"]

    def test_verbose_output_masks_user(self, cli_sender, capsys):
        manage.main(["send", "-v", "-m", "hi", "-u", "12345678", "-p", "key"])

        out = capsys.readouterr().out
        assert "User ID: 1234****" in out
        assert "12345678" not in out
        assert "Length: 2 characters" in out
        assert "✅ SMS sent successfully!" in out

    def test_debug_shows_original(self, cli_sender, monkeypatch, capsys):
        monkeypatch.setenv("DEBUG", "1")

        manage.main(["send", "-m", "deploy \U0001f680"])

        out = capsys.readouterr().out
        assert "DEBUG - Original message: deploy \U0001f680" in out
        assert cli_sender.bodies == ["deploy []"]

    def test_twilio_carrier_uses_recipient(self, cli_sender):
        manage.main(["send", "--carrier", "twilio", "--to", "+33612345678", "-m", "hi"])

        app_settings, kwargs = cli_sender.calls[0]
        assert app_settings.carrier == "twilio"
        assert kwargs["twilio"].default_to == "+33612345678"

    def test_carrier_error_exit_code(self, cli_sender, capsys):
        cli_sender.fail_on = 1
        cli_sender.error = InvalidCredentialsError(carrier_status=400)

        exit_code = manage.main(["send", "-m", "hi"])

        err = capsys.readouterr().err
        assert exit_code == 4
        assert "❌ Error: Invalid credentials provided" in err
        assert "0/1 part(s) sent" in err

    def test_empty_message(self, cli_sender, capsys):
        exit_code = manage.main(["send", "-m", "   "])

        assert exit_code == 4
        assert "Message from argument is empty" in capsys.readouterr().err
        assert cli_sender.bodies == []

    def test_message_too_long(self, cli_sender, monkeypatch, capsys):
        monkeypatch.setenv("SMS_MAX_INPUT_LENGTH", "10")

        exit_code = manage.main(["send", "-m", "a" * 11])

        assert exit_code == 4
        assert "Message too long (maximum 10 characters)" in capsys.readouterr().err

    def test_bad_configuration(self, cli_sender, monkeypatch, capsys):
        monkeypatch.setenv("SMS_CARRIER", "pigeon")

        assert manage.main(["send", "-m", "hi"]) == 5
        assert "Unsupported SMS_CARRIER" in capsys.readouterr().err

    def test_interrupted(self, cli_sender, monkeypatch):
        def interrupt(*args, **kwargs):
            raise KeyboardInterrupt

        monkeypatch.setattr(manage, "resolve_message", interrupt)

        assert manage.main(["send"]) == 130


class TestPreview:
    """Tests for the 'preview' command."""

    def test_preview_never_sends(self, cli_sender, capsys):
        exit_code = manage.main(["preview", "-m", "hello \U0001f600"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "1 unsupported symbol(s) replaced with []" in out
        assert "📦 1 part(s):" in out
        assert "hello []" in out
        assert cli_sender.bodies == []
        assert cli_sender.calls == []

    def test_preview_lists_numbered_parts(self, monkeypatch, capsys):
        monkeypatch.setenv("SMS_MAX_LENGTH", "12")
        monkeypatch.setenv("SMS_PREFIX_RESERVE", "6")

        manage.main(["preview", "-m", "aaaa bbbb cccc"])

        lines = capsys.readouterr().out.splitlines()
        assert lines[-4:] == ["📦 3 part(s):", "[1/3] aaaa", "[2/3] bbbb", "[3/3] cccc"]


class TestParser:
    """Tests for argument parsing."""

    def test_no_command(self, capsys):
        assert manage.main([]) == 1
        assert "usage: send-sms" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            manage.main(["--version"])

        assert exc_info.value.code == 0
        assert "send-sms 0.1.0" in capsys.readouterr().out

    def test_message_and_file_are_exclusive(self, capsys):
        with pytest.raises(SystemExit):
            manage.main(["send", "-m", "hi", "-f", "x.txt"])

    def test_unknown_carrier_choice(self, capsys):
        with pytest.raises(SystemExit):
            manage.main(["send", "--carrier", "pigeon", "-m", "hi"])


class TestCreateSender:
    """Tests for the carrier factory."""

    def test_freemobile(self):
        settings = FreeMobileSettings(user="12345678", password="key")

        sender = create_sender(AppSettings(debug=False), freemobile=settings)

        assert isinstance(sender, FreeMobileService)
        assert sender.settings is settings
        sender.close()

    def test_twilio(self):
        settings = TwilioSettings(account_sid="AC123", auth_token="t", default_from="+15005550006")

        with patch("send_sms.twilio_client.Client"):
            sender = create_sender(AppSettings(debug=False, carrier="twilio"), twilio=settings)

        assert sender.settings is settings

    def test_freemobile_without_credentials(self):
        with pytest.raises(ConfigurationError):
            create_sender(AppSettings(debug=False))

    def test_unknown_carrier(self):
        with pytest.raises(ConfigurationError, match="Unsupported carrier"):
            create_sender(AppSettings(debug=False, carrier="pigeon"))
