"""
Message and credential acquisition for the CLI.

Sources are tried in priority order: direct argument, file, piped stdin,
interactive prompt. Every reader returns stripped text and rejects blank
input with ``EmptyMessageError``.
"""

from __future__ import annotations

import getpass
import logging
import sys
from pathlib import Path
from typing import Callable, Optional, TextIO, Union

from .exceptions import EmptyMessageError, InputError
from .graphemes import grapheme_len, truncate_graphemes
from .validators import validate_user_id

logger = logging.getLogger(__name__)

Prompt = Callable[[str], str]


def _non_empty(text: str, source: str) -> str:
    cleaned = (text or "").strip()
    if not cleaned:
        raise EmptyMessageError(f"Message from {source} is empty")
    return cleaned


def read_message_from_file(path: Union[str, Path]) -> str:
    """Read a UTF-8 message file."""
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InputError(f"Cannot read message file {path}: {exc}", source="file") from exc
    return _non_empty(content, "file")


def read_message_from_stdin(stream: Optional[TextIO] = None) -> str:
    stream = stream or sys.stdin
    try:
        content = stream.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise InputError(f"Cannot read message from stdin: {exc}", source="stdin") from exc
    return _non_empty(content, "stdin")


def read_message_interactive(prompt: Prompt = input) -> str:
    """Ask the user to type the message; Enter sends it."""
    try:
        content = prompt("Enter your message (press Enter to send, Ctrl+C to cancel): ")
    except EOFError as exc:
        raise InputError("Interactive input failed: no input available", source="prompt") from exc
    return _non_empty(content, "prompt")


def has_stdin_input(stream: Optional[TextIO] = None) -> bool:
    """True when stdin is piped or redirected rather than a terminal."""
    stream = stream or sys.stdin
    try:
        return not stream.isatty()
    except (AttributeError, ValueError):
        return False


def resolve_message(
    message: Optional[str] = None,
    file_path: Optional[Union[str, Path]] = None,
    *,
    stdin: Optional[TextIO] = None,
    prompt: Prompt = input,
) -> str:
    """
    Pick the message source.

    Priority:
    1. Direct message argument
    2. File
    3. Piped stdin
    4. Interactive prompt
    """
    if message is not None:
        return _non_empty(message, "argument")

    if file_path is not None:
        logger.info("Reading message from file: %s", file_path)
        return read_message_from_file(file_path)

    if has_stdin_input(stdin):
        logger.info("Detected stdin input")
        return read_message_from_stdin(stdin)

    logger.info("No input detected, using interactive mode")
    return read_message_interactive(prompt)


def prompt_for_user_id(prompt: Prompt = input) -> str:
    try:
        user_id = prompt("FreeMobile User ID (8 digits): ")
    except EOFError as exc:
        raise InputError("Failed to read user ID", source="prompt") from exc
    return validate_user_id(user_id)


def prompt_for_api_key(prompt: Prompt = getpass.getpass) -> str:
    try:
        api_key = prompt("FreeMobile API Key: ")
    except EOFError as exc:
        raise InputError("Failed to read API key", source="prompt") from exc
    api_key = (api_key or "").strip()
    if not api_key:
        raise InputError("API key cannot be empty", source="prompt")
    return api_key


def preview_message(text: str, preview_length: int = 100) -> str:
    """
    Build the human-readable preview shown in verbose mode.

    Examples:
        >>> print(preview_message("Hello", 100))
        Length: 5 characters
        Content: Hello
    """
    length = grapheme_len(text)
    lines = [f"Length: {length} characters"]

    if length > preview_length:
        lines.append(
            f"Content (first {preview_length} characters): "
            f"{truncate_graphemes(text, preview_length)}"
        )
        lines.append("... (truncated for preview)")
    else:
        lines.append(f"Content: {text}")

    return "\n".join(lines)
