"""
Twilio delivery backend.

Sends each prepared chunk as one Twilio SMS. Selected with
``--carrier twilio`` or ``SMS_CARRIER=twilio``; FreeMobile stays the default.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Dict, Optional

from twilio.base.exceptions import TwilioRestException
from twilio.rest import Client

from .config import TwilioSettings
from .exceptions import CarrierAPIError, ConfigurationError
from .validators import validate_e164_phone


logger = logging.getLogger(__name__)


@dataclass
class TwilioService:
    """
    Chunk sender backed by the Twilio Messages API.

    The sender identity is the messaging service when one is configured,
    the default phone number otherwise.

    Attributes:
        settings: Twilio configuration (credentials, default sender/recipient)
        client: Twilio REST client, created from the settings
    """

    settings: TwilioSettings
    client: Client = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Check the credentials, then build the REST client."""
        self.settings.validate(strict=True)
        try:
            self.client = Client(self.settings.account_sid, self.settings.auth_token)
        except Exception as exc:
            raise ConfigurationError(
                f"Failed to initialize Twilio client: {exc}"
            ) from exc

    def send_message(self, body: str, to: Optional[str] = None):
        """
        Send one SMS via Twilio.

        Args:
            body: Message content, already sanitized and within the carrier limit
            to: Recipient in E.164 format; defaults to ``settings.default_to``

        Returns:
            Twilio message instance

        Raises:
            ConfigurationError: If no recipient or sender identity is configured
            ValidationError: If the recipient is not an E.164 number
            CarrierAPIError: If Twilio API call fails
        """
        recipient = to or self.settings.default_to
        if not recipient:
            raise ConfigurationError(
                "No recipient. Pass --to or set TWILIO_DEFAULT_TO."
            )
        recipient = validate_e164_phone(recipient, field_name="to")

        params: Dict[str, Any] = {
            "to": recipient,
            "body": body,
        }

        if self.settings.messaging_service_sid:
            params["messaging_service_sid"] = self.settings.messaging_service_sid
        else:
            params["from_"] = self.settings.default_from

        try:
            message = self.client.messages.create(**params)
        except TwilioRestException as exc:
            logger.error("Twilio rejected chunk for %s: %s", recipient, _format_twilio_error(exc))
            raise CarrierAPIError(
                f"Failed to send message: {_format_twilio_error(exc)}",
                carrier_code=exc.code,
                carrier_status=exc.status,
            ) from exc

        logger.info(
            "Sent message to %s with SID=%s (status=%s)",
            recipient,
            message.sid,
            message.status,
        )
        return message


def _format_twilio_error(exc: TwilioRestException) -> str:
    status = getattr(exc, "status", None)
    code = getattr(exc, "code", None)
    msg = getattr(exc, "msg", None) or str(exc)

    parts = []
    if status:
        parts.append(f"HTTP {status}")
    if code:
        parts.append(f"code {code}")
    if msg:
        parts.append(msg)

    return " | ".join(parts) if parts else "Twilio error"
