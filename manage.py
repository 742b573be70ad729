"""
Command-line interface for send-sms.

Provides CLI commands for:
- Sending a message (sanitized, split and paced automatically)
- Previewing exactly what would be sent, without any network call
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from send_sms import create_sender, __version__
from send_sms.config import (
    SUPPORTED_CARRIERS,
    AppSettings,
    FreeMobileSettings,
    MessageSettings,
    TwilioSettings,
    get_settings,
)
from send_sms.exceptions import SmsError
from send_sms.graphemes import truncate_graphemes
from send_sms.input_handler import (
    has_stdin_input,
    preview_message,
    prompt_for_api_key,
    prompt_for_user_id,
    resolve_message,
)
from send_sms.logger import configure_logging
from send_sms.multi_sms import MessageSender, PreparedMessage, deliver_plan, prepare_message
from send_sms.validators import validate_message_body

logger = logging.getLogger("send_sms.cli")

DEBUG_ORIGINAL_PREVIEW = 50


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="send-sms",
        description="Send SMS messages via FreeMobile (or Twilio)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Send a short message
  send-sms send -m "Backup finished ✅"

  # Send a long report from a file (split into [1/n] parts)
  send-sms send -f report.txt -v

  # Pipe command output
  df -h | send-sms send

  # See what would be sent
  send-sms preview -m "Deploy done 🚀"
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # send command
    send_parser = subparsers.add_parser("send", help="Send a message")
    _add_message_arguments(send_parser)
    send_parser.add_argument(
        "-u",
        "--user",
        help="FreeMobile user ID, 8 digits (default: $FREEMOBILE_USER)",
    )
    send_parser.add_argument(
        "-p",
        "--pass",
        dest="password",
        help="FreeMobile API key (default: $FREEMOBILE_PASS)",
    )
    send_parser.add_argument(
        "--carrier",
        choices=SUPPORTED_CARRIERS,
        help="Delivery backend (default: $SMS_CARRIER or freemobile)",
    )
    send_parser.add_argument(
        "--to",
        help="Recipient in E.164 format, Twilio only (default: $TWILIO_DEFAULT_TO)",
    )

    # preview command
    preview_parser = subparsers.add_parser(
        "preview",
        help="Show the sanitized, numbered parts without sending",
    )
    _add_message_arguments(preview_parser)

    return parser


def _add_message_arguments(subparser: argparse.ArgumentParser) -> None:
    source = subparser.add_mutually_exclusive_group()
    source.add_argument("-m", "--message", help="Message to send")
    source.add_argument("-f", "--file", help="Read message from file")
    subparser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    subparser.add_argument(
        "--debug",
        action="store_true",
        help="Show debug diagnostics (same as setting $DEBUG)",
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        app_settings, message_settings = get_settings()
        app_settings.debug = app_settings.debug or args.debug
        configure_logging(debug=app_settings.debug, verbose=args.verbose)

        if args.command == "send":
            return handle_send(args, app_settings, message_settings)

        if args.command == "preview":
            return handle_preview(args, app_settings, message_settings)

    except KeyboardInterrupt:
        print("\n\n🛑 Interrupted by user", file=sys.stderr)
        return 130

    except SmsError as exc:
        print(f"❌ Error: {exc.message}", file=sys.stderr)
        if exc.details:
            print(f"Details: {exc.details}", file=sys.stderr)
        return exc.status_code // 100  # Convert HTTP-like status to exit code

    except Exception as exc:
        logger.debug("Unexpected failure", exc_info=True)
        print(f"❌ Unexpected error: {exc}", file=sys.stderr)
        return 1

    return 0


def _prepare(
    args: argparse.Namespace,
    app_settings: AppSettings,
    settings: MessageSettings,
) -> PreparedMessage:
    message = resolve_message(args.message, args.file)
    message = validate_message_body(message, max_length=settings.max_input_length)
    prepared = prepare_message(message, settings)

    if app_settings.debug and prepared.modified:
        original = truncate_graphemes(message, DEBUG_ORIGINAL_PREVIEW)
        print(f"🐛 DEBUG - Original message: {original}...")
        print("🐛 DEBUG - Sanitized message (what will be sent):")

    if args.verbose:
        print("📄 Message preview:")
        print(preview_message(prepared.sanitized.text, settings.preview_length))
        print()

    return prepared


def _build_sender(args: argparse.Namespace, app_settings: AppSettings) -> MessageSender:
    carrier = args.carrier or app_settings.carrier
    app_settings.carrier = carrier

    if carrier == "twilio":
        twilio_settings = TwilioSettings.from_env()
        if args.to:
            twilio_settings.default_to = args.to
        return create_sender(app_settings, twilio=twilio_settings)

    freemobile_settings = FreeMobileSettings.from_env(user=args.user, password=args.password)
    # Prompt only when a human is at the keyboard and nothing is piped in
    interactive = not has_stdin_input()
    if not freemobile_settings.user and interactive:
        freemobile_settings.user = prompt_for_user_id()
    if not freemobile_settings.password and interactive:
        freemobile_settings.password = prompt_for_api_key()

    if args.verbose:
        print(f"🚀 Starting send-sms v{__version__}")
        print(f"📱 User ID: {freemobile_settings.get_masked_user()}")

    return create_sender(app_settings, freemobile=freemobile_settings)


def handle_send(
    args: argparse.Namespace,
    app_settings: AppSettings,
    settings: MessageSettings,
) -> int:
    """Handle 'send' command."""
    sender = _build_sender(args, app_settings)
    prepared = _prepare(args, app_settings, settings)

    if args.verbose:
        print(f"📤 Sending SMS ({len(prepared.plan)} part(s))...")

    report = deliver_plan(
        sender,
        prepared.plan,
        delay_seconds=settings.chunk_delay_seconds,
    )

    if report.error is not None:
        summary = report.summary()
        if summary:
            print(f"⚠️ {report.sent}/{len(prepared.plan)} part(s) sent. {summary}", file=sys.stderr)
        raise report.error

    if args.verbose:
        print("✅ SMS sent successfully!")
    else:
        print("✅ SMS sent")
    return 0


def handle_preview(
    args: argparse.Namespace,
    app_settings: AppSettings,
    settings: MessageSettings,
) -> int:
    """Handle 'preview' command."""
    prepared = _prepare(args, app_settings, settings)

    if prepared.modified:
        print(f"🔎 {prepared.sanitized.replaced} unsupported symbol(s) replaced with []")
    print(f"📦 {len(prepared.plan)} part(s):")
    for chunk in prepared.plan:
        print(chunk.body)
    return 0


if __name__ == "__main__":
    sys.exit(main())
