"""
send-sms - prepare and deliver SMS through carrier gateways.

This package sanitizes emoji the carrier cannot render, splits long texts
into numbered carrier-sized chunks and delivers them one by one through
FreeMobile (default) or Twilio.
"""

from __future__ import annotations

from typing import Optional

from .config import (
    AppSettings,
    FreeMobileSettings,
    MessageSettings,
    TwilioSettings,
    __version__,
    get_settings,
)
from .exceptions import (
    CarrierAPIError,
    ConfigurationError,
    EmptyMessageError,
    InvalidBudgetError,
    SmsError,
    ValidationError,
)
from .message_utils import Chunk, ChunkPlan, split_message, split_sms_chunks
from .multi_sms import (
    DeliveryReport,
    MessageSender,
    PreparedMessage,
    deliver_plan,
    prepare_message,
    send_text,
)
from .sanitizer import PLACEHOLDER, GraphemeClass, SanitizedMessage, classify, sanitize


def create_sender(
    app_settings: AppSettings,
    *,
    freemobile: Optional[FreeMobileSettings] = None,
    twilio: Optional[TwilioSettings] = None,
) -> MessageSender:
    """
    Create the delivery client for the configured carrier.

    Args:
        app_settings: Selects the carrier (``freemobile`` or ``twilio``)
        freemobile: FreeMobile credentials (loaded from env when omitted)
        twilio: Twilio credentials (loaded from env when omitted)

    Returns:
        A ready client exposing ``send_message(body)``

    Raises:
        ConfigurationError: If the carrier is unknown or its credentials are invalid
    """
    if app_settings.carrier == "freemobile":
        from .freemobile_client import FreeMobileService

        return FreeMobileService(freemobile or FreeMobileSettings.from_env())

    if app_settings.carrier == "twilio":
        # twilio SDK import is slow; only pay for it when selected
        from .twilio_client import TwilioService

        return TwilioService(twilio or TwilioSettings.from_env())

    raise ConfigurationError(f"Unsupported carrier: {app_settings.carrier}")


__all__ = [
    "AppSettings",
    "CarrierAPIError",
    "Chunk",
    "ChunkPlan",
    "ConfigurationError",
    "DeliveryReport",
    "EmptyMessageError",
    "FreeMobileSettings",
    "GraphemeClass",
    "InvalidBudgetError",
    "MessageSender",
    "MessageSettings",
    "PLACEHOLDER",
    "PreparedMessage",
    "SanitizedMessage",
    "SmsError",
    "TwilioSettings",
    "ValidationError",
    "__version__",
    "classify",
    "create_sender",
    "deliver_plan",
    "get_settings",
    "prepare_message",
    "sanitize",
    "send_text",
    "split_message",
    "split_sms_chunks",
]
