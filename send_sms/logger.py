"""
Logging configuration for the send-sms tool.

Provides consistent formatting for every module logger. Log records go to
stderr so that the CLI's own output on stdout stays clean for piping.

FreeMobile takes its credentials in the query string, so HTTP debug lines
from ``urllib3`` (and tracebacks quoting the URL) carry them. Every line is
passed through ``redact_credentials`` before it is written.
"""

import logging
import re
import sys
from typing import Optional, TextIO

_PASS_PARAM = re.compile(r"(\bpass=)[^&\s\"']+")
_USER_PARAM = re.compile(r"(\buser=)(\d{4})\d*")


def redact_credentials(text: str) -> str:
    """
    Hide the API key and most of the user ID in a logged URL.

    Examples:
        >>> redact_credentials("GET /sendmsg?user=12345678&pass=abc&msg=hi")
        'GET /sendmsg?user=1234****&pass=***&msg=hi'
    """
    text = _PASS_PARAM.sub(r"\1***", text)
    return _USER_PARAM.sub(r"\1\2****", text)


class RedactingFormatter(logging.Formatter):
    """Formatter whose output, traceback included, never shows credentials."""

    def format(self, record: logging.LogRecord) -> str:
        return redact_credentials(super().format(record))


def configure_logging(
    *,
    debug: bool = False,
    verbose: bool = False,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Route every module logger to one stderr handler.

    Sets up:
    - One timestamped format for all loggers, with credentials redacted
    - DEBUG level in debug mode, INFO when verbose, WARNING otherwise
    - Quieter third-party HTTP/Twilio loggers outside debug mode

    Args:
        debug: Enable debug diagnostics
        verbose: Report progress (chunks sent, carrier used)
        stream: Destination stream (defaults to stderr)

    Returns:
        The configured root logger
    """
    formatter = RedactingFormatter(
        "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root_logger = logging.getLogger()

    if debug:
        root_logger.setLevel(logging.DEBUG)
    elif verbose:
        root_logger.setLevel(logging.INFO)
    else:
        root_logger.setLevel(logging.WARNING)

    # One handler per process, however often this is called
    if not any(getattr(h, "_send_sms_handler", False) for h in root_logger.handlers):
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(formatter)
        handler._send_sms_handler = True  # type: ignore[attr-defined]
        root_logger.addHandler(handler)

    # Suppress verbose third-party loggers unless debugging
    if debug:
        logging.getLogger("urllib3").setLevel(logging.NOTSET)
        logging.getLogger("twilio").setLevel(logging.NOTSET)
    else:
        logging.getLogger("urllib3").setLevel(logging.WARNING)
        logging.getLogger("twilio").setLevel(logging.WARNING)

    return root_logger
