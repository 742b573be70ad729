"""
Input validation utilities for the send-sms tool.

This module provides centralized validation functions for carrier
credentials, phone numbers and message bodies.

Every validator returns the cleaned value or raises ``ValidationError``.
Lengths are counted in grapheme clusters, like the carrier does.
"""

from __future__ import annotations

import re

from .exceptions import EmptyMessageError, ValidationError
from .graphemes import grapheme_len

# =============================================================================
# Constants
# =============================================================================

# E.164 phone number format: +[country code][number] (7-15 digits after +)
E164_PATTERN = re.compile(r"^\+[1-9]\d{6,14}$")

# FreeMobile user IDs are exactly 8 ASCII digits
USER_ID_PATTERN = re.compile(r"^[0-9]{8}$")

# Default for MessageSettings.max_input_length (SMS_MAX_INPUT_LENGTH)
MAX_INPUT_LENGTH = 5000


# =============================================================================
# Validators
# =============================================================================


def validate_user_id(user_id: str, field_name: str = "user") -> str:
    """
    Validate a FreeMobile user ID.

    Args:
        user_id: Identifier to validate
        field_name: Field name for error messages

    Returns:
        The user ID, stripped

    Raises:
        ValidationError: If the ID is not exactly 8 digits

    Examples:
        >>> validate_user_id("12345678")
        '12345678'
    """
    if not user_id or not isinstance(user_id, str):
        raise ValidationError("User ID cannot be empty", field=field_name)

    user_id = user_id.strip()

    if not USER_ID_PATTERN.match(user_id):
        raise ValidationError("User ID must be exactly 8 digits", field=field_name)

    return user_id


def validate_e164_phone(phone: str, field_name: str = "phone") -> str:
    """
    Validate and return E.164 formatted phone number.

    Args:
        phone: Phone number to validate
        field_name: Field name for error messages

    Returns:
        Validated phone number in E.164 format

    Raises:
        ValidationError: If phone number format is invalid

    Examples:
        >>> validate_e164_phone("+48123456789")
        '+48123456789'
    """
    if not phone or not isinstance(phone, str):
        raise ValidationError(
            f"{field_name} is required and must be a string",
            field=field_name,
        )

    phone = phone.strip()

    if not E164_PATTERN.match(phone):
        raise ValidationError(
            f"{field_name} must be in E.164 format (+[country][number], 7-15 digits)",
            field=field_name,
        )

    return phone


def validate_message_body(
    body: str,
    *,
    max_length: int = MAX_INPUT_LENGTH,
    field_name: str = "message",
) -> str:
    """
    Validate a message before it enters the sanitize/split pipeline.

    Long messages are fine (they get split), but anything above
    ``max_length`` characters is rejected as a likely mistake.

    Args:
        body: Message content to validate
        max_length: Maximum allowed length in grapheme clusters
        field_name: Field name for error messages

    Returns:
        Stripped message body

    Raises:
        EmptyMessageError: If the message is empty or whitespace-only
        ValidationError: If the message is too long
    """
    if not isinstance(body, str):
        raise ValidationError(
            f"{field_name} must be a string",
            field=field_name,
        )

    body = body.strip()

    if not body:
        raise EmptyMessageError(field=field_name)

    if grapheme_len(body) > max_length:
        raise ValidationError(
            f"Message too long (maximum {max_length} characters)",
            field=field_name,
        )

    return body


def mask_user_id(user_id: str) -> str:
    """
    Hide all but the first four characters of a user ID.

    Examples:
        >>> mask_user_id("12345678")
        '1234****'
        >>> mask_user_id("123")
        '****'
    """
    if len(user_id) >= 4:
        return f"{user_id[:4]}****"
    return "****"
