"""Shared fixtures for the send-sms test suite."""

from __future__ import annotations

from typing import List

import pytest

from send_sms.exceptions import SmsError

_ENV_VARS = (
    "DEBUG",
    "APP_DEBUG",
    "SMS_CARRIER",
    "SMS_MAX_LENGTH",
    "SMS_PREFIX_RESERVE",
    "SMS_MIN_WORD_LENGTH",
    "SMS_MIN_BOUNDARY_RATIO",
    "SMS_CHUNK_DELAY_SECONDS",
    "SMS_MAX_INPUT_LENGTH",
    "SMS_PREVIEW_LENGTH",
    "FREEMOBILE_USER",
    "FREEMOBILE_PASS",
    "FREEMOBILE_API_URL",
    "FREEMOBILE_TIMEOUT",
    "TWILIO_ACCOUNT_SID",
    "TWILIO_AUTH_TOKEN",
    "TWILIO_DEFAULT_FROM",
    "TWILIO_MESSAGING_SERVICE_SID",
    "TWILIO_DEFAULT_TO",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate every test from the developer's environment and .env file."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class RecordingSender:
    """In-memory MessageSender; optionally fails on a given call number."""

    def __init__(self, fail_on: int | None = None, error: SmsError | None = None) -> None:
        self.bodies: List[str] = []
        self.fail_on = fail_on
        self.error = error or SmsError("boom", status_code=502)

    def send_message(self, body: str) -> str:
        if self.fail_on is not None and len(self.bodies) + 1 == self.fail_on:
            self.fail_on = None
            raise self.error
        self.bodies.append(body)
        return f"ok-{len(self.bodies)}"


@pytest.fixture
def sender() -> RecordingSender:
    return RecordingSender()


@pytest.fixture
def make_sender():
    """Factory for senders that fail on demand."""
    return RecordingSender
