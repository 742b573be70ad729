from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Protocol

from .config import MessageSettings
from .exceptions import EmptyMessageError, SmsError
from .message_utils import ChunkPlan, split_message
from .sanitizer import SanitizedMessage, sanitize

logger = logging.getLogger(__name__)


class MessageSender(Protocol):
    """Anything able to deliver one SMS body (FreeMobile, Twilio, test doubles)."""

    def send_message(self, body: str) -> Any:
        ...


@dataclass(frozen=True)
class PreparedMessage:
    """A message after sanitizing and splitting, ready for delivery."""

    original: str
    sanitized: SanitizedMessage
    plan: ChunkPlan

    @property
    def modified(self) -> bool:
        return self.sanitized.modified


@dataclass
class ChunkResult:
    index: int
    status: str  # "sent", "failed" or "skipped"
    error: Optional[str] = None
    response: Any = None


@dataclass
class DeliveryReport:
    """Per-chunk outcome of ``deliver_plan``."""

    results: List[ChunkResult] = field(default_factory=list)
    error: Optional[SmsError] = None

    @property
    def sent(self) -> int:
        return sum(1 for r in self.results if r.status == "sent")

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.status == "failed")

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.results if r.status == "skipped")

    @property
    def success(self) -> bool:
        return bool(self.results) and self.sent == len(self.results)

    @property
    def status(self) -> str:
        return _resolve_final_status(len(self.results), self.sent, self.failed + self.skipped)

    def summary(self) -> Optional[str]:
        return _build_error_message(self.failed, self.skipped)


def prepare_message(text: str, settings: MessageSettings) -> PreparedMessage:
    """Sanitize and split ``text`` using the limits in ``settings``."""

    cleaned = (text or "").strip()
    if not cleaned:
        raise EmptyMessageError()

    sanitized = sanitize(cleaned)
    if sanitized.modified:
        logger.info("Message sanitized: %d unsupported symbol(s) replaced", sanitized.replaced)

    plan = split_message(
        sanitized.text,
        settings.max_length,
        settings.prefix_reserve,
        min_word_length=settings.min_word_length,
        min_boundary_ratio=settings.min_boundary_ratio,
    )
    return PreparedMessage(original=text, sanitized=sanitized, plan=plan)


def deliver_plan(
    sender: MessageSender,
    plan: ChunkPlan,
    *,
    delay_seconds: float = 0.0,
    sleep: Callable[[float], None] = time.sleep,
) -> DeliveryReport:
    """Send every chunk of ``plan`` in order, one carrier call per chunk.

    Waits ``delay_seconds`` between two sends to respect the carrier rate
    policy. Stops at the first carrier error; the remaining chunks are
    reported as skipped so that a caller can retry them individually.
    """

    report = DeliveryReport()
    total = len(plan)

    for position, chunk in enumerate(plan):
        if report.error is not None:
            report.results.append(ChunkResult(index=chunk.index, status="skipped"))
            continue

        try:
            response = sender.send_message(chunk.body)
        except SmsError as exc:
            logger.error(
                "Chunk %d/%d failed (status=%s): %s",
                chunk.index,
                total,
                exc.status_code,
                exc.message,
            )
            report.error = exc
            report.results.append(
                ChunkResult(index=chunk.index, status="failed", error=exc.message)
            )
            continue

        report.results.append(ChunkResult(index=chunk.index, status="sent", response=response))
        logger.info("Sent chunk %d/%d", chunk.index, total)

        if delay_seconds > 0 and position < total - 1:
            sleep(delay_seconds)

    return report


def send_text(
    sender: MessageSender,
    text: str,
    settings: MessageSettings,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> DeliveryReport:
    """Prepare ``text`` and deliver it with the configured inter-chunk delay."""

    prepared = prepare_message(text, settings)
    return deliver_plan(
        sender,
        prepared.plan,
        delay_seconds=settings.chunk_delay_seconds,
        sleep=sleep,
    )


def _resolve_final_status(total: int, success: int, failed: int) -> str:
    if total == 0 or success == total:
        return "completed"
    if success == 0 and failed:
        return "failed"
    return "completed_with_errors"


def _build_error_message(failed: int, skipped: int) -> str | None:
    fragments: List[str] = []

    if failed:
        fragments.append(f"{failed} chunk(s) could not be sent.")
    if skipped:
        fragments.append(f"{skipped} chunk(s) skipped after the failure.")

    return " ".join(fragments) if fragments else None
