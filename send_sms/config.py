"""
Application configuration management.

This module handles loading and validation of settings from environment
variables (and an optional ``.env`` file). It provides typed configuration
objects for the carriers (FreeMobile, Twilio), the message pipeline limits
and general application behaviour.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Optional
from dotenv import load_dotenv

from .exceptions import ConfigurationError, InvalidBudgetError
from .validators import MAX_INPUT_LENGTH, mask_user_id, validate_user_id

load_dotenv()

__version__ = "0.1.0"

FREEMOBILE_API_URL = "https://smsapi.free-mobile.fr/sendmsg"
USER_AGENT = f"send-sms/{__version__}"

SUPPORTED_CARRIERS = ("freemobile", "twilio")


@dataclass
class FreeMobileSettings:
    """
    FreeMobile SMS API credentials and transport options.

    Attributes:
        user: FreeMobile user ID, 8 digits (from FREEMOBILE_USER)
        password: FreeMobile API key (from FREEMOBILE_PASS)
        api_url: Endpoint receiving ``GET ?user=&pass=&msg=`` requests
        timeout_seconds: HTTP request timeout
        user_agent: User-Agent header sent with each request
    """

    user: str
    password: str
    api_url: str = FREEMOBILE_API_URL
    timeout_seconds: float = 30.0
    user_agent: str = USER_AGENT

    @classmethod
    def from_env(
        cls,
        *,
        user: Optional[str] = None,
        password: Optional[str] = None,
    ) -> FreeMobileSettings:
        """
        Load FreeMobile settings, letting explicit values win over the environment.

        Environment variables:
            FREEMOBILE_USER: user ID
            FREEMOBILE_PASS: API key
            FREEMOBILE_API_URL: endpoint override (tests, proxies)
            FREEMOBILE_TIMEOUT: request timeout in seconds (default: 30)
        """
        return cls(
            user=(user if user is not None else os.getenv("FREEMOBILE_USER", "")).strip(),
            password=(
                password if password is not None else os.getenv("FREEMOBILE_PASS", "")
            ).strip(),
            api_url=os.getenv("FREEMOBILE_API_URL", FREEMOBILE_API_URL).strip(),
            timeout_seconds=_env_float("FREEMOBILE_TIMEOUT", 30.0),
        )

    def validate(self) -> None:
        """Validate credentials and raise when critical data is missing."""
        if not self.user:
            raise ConfigurationError(
                "FreeMobile user ID not found. Set FREEMOBILE_USER environment "
                "variable or use -u option"
            )
        validate_user_id(self.user)

        if not self.password:
            raise ConfigurationError(
                "FreeMobile API key not found. Set FREEMOBILE_PASS environment "
                "variable or use -p option"
            )

        if self.timeout_seconds <= 0:
            raise ConfigurationError("FREEMOBILE_TIMEOUT must be positive")

    def get_masked_user(self) -> str:
        """
        Return the user ID safe for logging/display.

        Examples:
            >>> FreeMobileSettings(user="12345678", password="x").get_masked_user()
            '1234****'
        """
        return mask_user_id(self.user)


@dataclass
class TwilioSettings:
    """
    Credentials and identities for the optional Twilio backend.

    Attributes:
        account_sid: Twilio Account SID (from TWILIO_ACCOUNT_SID)
        auth_token: Twilio Auth Token (from TWILIO_AUTH_TOKEN)
        default_from: Default sender phone number (from TWILIO_DEFAULT_FROM)
        messaging_service_sid: Optional Messaging Service SID for sender pool
        default_to: Recipient used when none is given (from TWILIO_DEFAULT_TO)
    """

    account_sid: str
    auth_token: str
    default_from: str
    messaging_service_sid: Optional[str] = None
    default_to: Optional[str] = None

    @classmethod
    def from_env(cls) -> TwilioSettings:
        return cls(
            account_sid=os.getenv("TWILIO_ACCOUNT_SID", "").strip(),
            auth_token=os.getenv("TWILIO_AUTH_TOKEN", "").strip(),
            default_from=os.getenv("TWILIO_DEFAULT_FROM", "").strip(),
            messaging_service_sid=os.getenv("TWILIO_MESSAGING_SERVICE_SID") or None,
            default_to=os.getenv("TWILIO_DEFAULT_TO") or None,
        )

    def validate(self, *, strict: bool = True) -> None:
        """Raise ConfigurationError unless the backend can authenticate and pick a sender.

        Args:
            strict: Also require an ``AC``-prefixed account SID. Disable for
                placeholder credentials in local runs.
        """
        if not self.account_sid:
            raise ConfigurationError("TWILIO_ACCOUNT_SID is required")

        if strict and not self.account_sid.startswith("AC"):
            raise ConfigurationError("Invalid TWILIO_ACCOUNT_SID format")

        if not self.auth_token:
            raise ConfigurationError("TWILIO_AUTH_TOKEN is required")

        if not self.default_from and not self.messaging_service_sid:
            raise ConfigurationError(
                "Either TWILIO_DEFAULT_FROM or TWILIO_MESSAGING_SERVICE_SID must be set"
            )


@dataclass
class MessageSettings:
    """
    Limits and policy for sanitizing, splitting and pacing messages.

    Attributes:
        max_length: Hard carrier limit per message body, in grapheme clusters
        prefix_reserve: Clusters reserved for the ``[i/n] `` numbering prefix
        min_word_length: Shortest word a chunk should preferably end on
        min_boundary_ratio: Fraction of the content budget a whitespace cut
            must reach before it is preferred over a hard cut
        chunk_delay_seconds: Pause between two consecutive chunk sends
        max_input_length: Largest message accepted from the user
        preview_length: Clusters shown in verbose previews
    """

    max_length: int = 999
    prefix_reserve: int = 8
    min_word_length: int = 3
    min_boundary_ratio: float = 1 / 3
    chunk_delay_seconds: float = 0.5
    max_input_length: int = MAX_INPUT_LENGTH
    preview_length: int = 100

    @classmethod
    def from_env(cls) -> MessageSettings:
        """
        Load message settings from environment variables with sensible defaults.

        Environment variables:
            SMS_MAX_LENGTH, SMS_PREFIX_RESERVE, SMS_MIN_WORD_LENGTH,
            SMS_MIN_BOUNDARY_RATIO, SMS_CHUNK_DELAY_SECONDS,
            SMS_MAX_INPUT_LENGTH, SMS_PREVIEW_LENGTH
        """
        defaults = cls()
        return cls(
            max_length=_env_int("SMS_MAX_LENGTH", defaults.max_length),
            prefix_reserve=_env_int("SMS_PREFIX_RESERVE", defaults.prefix_reserve),
            min_word_length=_env_int("SMS_MIN_WORD_LENGTH", defaults.min_word_length),
            min_boundary_ratio=_env_float("SMS_MIN_BOUNDARY_RATIO", defaults.min_boundary_ratio),
            chunk_delay_seconds=_env_float(
                "SMS_CHUNK_DELAY_SECONDS", defaults.chunk_delay_seconds
            ),
            max_input_length=_env_int("SMS_MAX_INPUT_LENGTH", defaults.max_input_length),
            preview_length=_env_int("SMS_PREVIEW_LENGTH", defaults.preview_length),
        )

    def validate(self) -> None:
        """Raise InvalidBudgetError when the limits cannot produce a valid plan."""
        if self.prefix_reserve <= 0 or self.max_length <= self.prefix_reserve:
            raise InvalidBudgetError(
                f"max_length ({self.max_length}) must exceed prefix_reserve "
                f"({self.prefix_reserve}) and prefix_reserve must be positive"
            )
        if self.min_word_length < 0:
            raise InvalidBudgetError("min_word_length cannot be negative")
        if not 0 < self.min_boundary_ratio <= 1:
            raise InvalidBudgetError("min_boundary_ratio must be in (0, 1]")
        if self.chunk_delay_seconds < 0:
            raise ConfigurationError("SMS_CHUNK_DELAY_SECONDS cannot be negative")
        if self.max_input_length <= 0 or self.preview_length <= 0:
            raise ConfigurationError("SMS_MAX_INPUT_LENGTH and SMS_PREVIEW_LENGTH must be positive")


@dataclass
class AppSettings:
    """
    Process-wide options that are not tied to a carrier.

    Attributes:
        debug: Verbose diagnostics (DEBUG or APP_DEBUG set)
        carrier: Delivery backend, one of SUPPORTED_CARRIERS
    """

    debug: bool
    carrier: str = "freemobile"


def _env_bool(name: str, default: bool = False) -> bool:
    """
    Parse boolean from environment variable.

    Accepts: '1', 'true', 't', 'yes', 'y' (case-insensitive) as True

    Args:
        name: Environment variable name
        default: Default value if variable is not set

    Returns:
        Parsed boolean value
    """
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "t", "yes", "y"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name, "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from exc


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name, "").strip()
    if not value:
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from exc


def get_settings() -> tuple[AppSettings, MessageSettings]:
    """
    Load and validate application and message settings from environment.

    Carrier credentials are loaded separately (``FreeMobileSettings.from_env``,
    ``TwilioSettings.from_env``) because the CLI may override or prompt for them.

    Returns:
        Tuple of (AppSettings, MessageSettings)

    Raises:
        ConfigurationError: If a value cannot be parsed or the carrier is unknown
        InvalidBudgetError: If the chunking limits are inconsistent
    """
    debug_flag = os.getenv("DEBUG") is not None or _env_bool("APP_DEBUG", False)
    carrier = os.getenv("SMS_CARRIER", "freemobile").strip().lower() or "freemobile"
    if carrier not in SUPPORTED_CARRIERS:
        raise ConfigurationError(
            f"Unsupported SMS_CARRIER {carrier!r}. "
            f"Expected one of: {', '.join(SUPPORTED_CARRIERS)}"
        )

    app_settings = AppSettings(debug=debug_flag, carrier=carrier)

    message_settings = MessageSettings.from_env()
    message_settings.validate()

    return app_settings, message_settings
