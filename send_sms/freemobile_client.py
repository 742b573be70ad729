"""
FreeMobile SMS API client.

Provides a clean interface for delivering one message body through the
FreeMobile "Notifications par SMS" HTTP API, with transport retries,
status-code mapping and credential masking in logs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import FreeMobileSettings
from .exceptions import (
    CarrierAPIError,
    ConfigurationError,
    ValidationError,
    carrier_error_from_status,
)


logger = logging.getLogger(__name__)


@dataclass
class FreeMobileService:
    """
    FreeMobile API service wrapper for sending messages.

    Each call to ``send_message`` is one carrier message; splitting and
    pacing are handled by ``multi_sms``.

    Attributes:
        settings: FreeMobile configuration (credentials, endpoint, timeout)
        session: HTTP session with retry/backoff on transient failures
    """

    settings: FreeMobileSettings
    session: requests.Session = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate credentials and prepare the HTTP session."""
        try:
            self.settings.validate()
        except ValidationError as exc:
            raise ConfigurationError(exc.message, details=dict(exc.details)) from exc

        self.session = requests.Session()
        self.session.headers["User-Agent"] = self.settings.user_agent
        # Retry only failures where the gateway cannot have queued the SMS
        retry = Retry(
            total=2,
            connect=2,
            read=0,
            backoff_factor=0.5,
            status_forcelist=(502, 503, 504),
            allowed_methods=frozenset(["GET"]),
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    def send_message(self, body: str) -> requests.Response:
        """
        Send a single SMS body to the account owner's phone.

        Args:
            body: Message content, already sanitized and within the carrier limit

        Returns:
            The successful HTTP response

        Raises:
            InvalidCredentialsError: HTTP 400
            RateLimitError: HTTP 402
            AccessDeniedError: HTTP 403
            CarrierServerError: HTTP 500
            CarrierAPIError: Other non-2xx statuses and network failures
        """
        params = {
            "user": self.settings.user,
            "pass": self.settings.password,
            "msg": body,
        }
        masked_user = self.settings.get_masked_user()

        try:
            response = self.session.get(
                self.settings.api_url,
                params=params,
                timeout=self.settings.timeout_seconds,
            )
        except requests.RequestException as exc:
            logger.error("FreeMobile request failed for user %s: %s", masked_user, exc.__class__.__name__)
            raise CarrierAPIError(f"HTTP request failed: {exc.__class__.__name__}") from exc

        if not 200 <= response.status_code < 300:
            logger.warning(
                "FreeMobile rejected message for user %s (status=%s)",
                masked_user,
                response.status_code,
            )
            raise carrier_error_from_status(response.status_code)

        logger.info(
            "Sent message to FreeMobile user %s (%d characters, status=%s)",
            masked_user,
            len(body),
            response.status_code,
        )
        return response

    def close(self) -> None:
        self.session.close()
