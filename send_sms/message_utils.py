"""Shared helpers for splitting SMS payloads and enforcing size constraints.

A message longer than the carrier limit is cut into numbered chunks
(``[1/3] ``, ``[2/3] ``...). Cuts happen on whitespace whenever a whitespace
cluster lies far enough into the chunk, and fall back to a hard cut at the
content budget for runs without whitespace (long URLs, repeated characters).
Lengths are measured in grapheme clusters, so a visually single character is
never split.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Iterator, List, Optional, Sequence, Tuple

from .config import MessageSettings
from .exceptions import EmptyMessageError, InvalidBudgetError
from .graphemes import grapheme_len, is_whitespace_cluster, split_graphemes

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = MessageSettings()


def format_prefix(index: int, total: int) -> str:
    """Numbering prefix sent in front of each part of a multi-part message."""
    return f"[{index}/{total}] "


@dataclass(frozen=True)
class Chunk:
    """
    One carrier message of a split body.

    Attributes:
        index: 1-based position in the plan
        total: Number of chunks in the plan
        content: Slice of the sanitized message carried by this chunk
        separator: Whitespace run consumed right after ``content`` by a
            word-boundary cut, empty for hard cuts and usually for the final
            chunk
    """

    index: int
    total: int
    content: str
    separator: str = ""

    @property
    def prefix(self) -> str:
        if self.total > 1:
            return format_prefix(self.index, self.total)
        return ""

    @property
    def body(self) -> str:
        """Text handed to the carrier."""
        return self.prefix + self.content

    @property
    def length(self) -> int:
        return len(self.prefix) + grapheme_len(self.content)


@dataclass(frozen=True)
class ChunkPlan:
    """
    Ordered, immutable sequence of chunks for one message.

    ``leading`` holds whitespace dropped from the front of a split message,
    so that no part starts blank.
    """

    chunks: Tuple[Chunk, ...]
    leading: str = ""

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self.chunks)

    def __len__(self) -> int:
        return len(self.chunks)

    def __getitem__(self, position: int) -> Chunk:
        return self.chunks[position]

    def bodies(self) -> List[str]:
        return [chunk.body for chunk in self.chunks]

    def reassemble(self) -> str:
        """Rebuild the original sanitized text from contents and separators."""
        parts = (chunk.content + chunk.separator for chunk in self.chunks)
        return self.leading + "".join(parts)


def _check_budget(
    max_length: int,
    prefix_reserve: int,
    min_word_length: int,
    min_boundary_ratio: float,
) -> None:
    if prefix_reserve <= 0 or max_length <= prefix_reserve:
        raise InvalidBudgetError(
            f"max_length ({max_length}) must exceed prefix_reserve ({prefix_reserve}) "
            "and prefix_reserve must be positive"
        )
    if min_word_length < 0:
        raise InvalidBudgetError("min_word_length cannot be negative")
    if not 0 < min_boundary_ratio <= 1:
        raise InvalidBudgetError("min_boundary_ratio must be in (0, 1]")


def _skip_whitespace(clusters: Sequence[str], position: int) -> int:
    while position < len(clusters) and is_whitespace_cluster(clusters[position]):
        position += 1
    return position


def _word_before(clusters: Sequence[str], start: int, position: int) -> int:
    """Length of the run of non-whitespace clusters ending just before ``position``."""
    length = 0
    cursor = position - 1
    while cursor >= start and not is_whitespace_cluster(clusters[cursor]):
        length += 1
        cursor -= 1
    return length


def _find_cut(
    clusters: Sequence[str],
    start: int,
    budget: int,
    floor: int,
    min_word_length: int,
) -> Optional[int]:
    """
    Pick the whitespace cluster to cut at for the chunk starting at ``start``.

    Scans backward from the candidate boundary ``start + budget`` down to
    ``start + floor``. The rightmost whitespace whose preceding word has at
    least ``min_word_length`` clusters wins; otherwise the rightmost
    whitespace at all. Returns None when the window holds no whitespace.
    """
    fallback: Optional[int] = None
    highest = min(start + budget, len(clusters) - 1)

    for position in range(highest, start + floor - 1, -1):
        if not is_whitespace_cluster(clusters[position]):
            continue
        if _word_before(clusters, start, position) >= min_word_length:
            return position
        if fallback is None:
            fallback = position

    return fallback


def split_message(
    sanitized: str,
    max_length: int,
    prefix_reserve: int,
    *,
    min_word_length: int = DEFAULT_SETTINGS.min_word_length,
    min_boundary_ratio: float = DEFAULT_SETTINGS.min_boundary_ratio,
) -> ChunkPlan:
    """
    Split a sanitized message into numbered, carrier-sized chunks.

    Args:
        sanitized: Output of ``sanitize``; must contain non-whitespace text
        max_length: Hard limit per carrier message, prefix included
        prefix_reserve: Clusters kept free for the ``[i/n] `` prefix
        min_word_length: Preferred minimum length of the word ending a chunk
        min_boundary_ratio: Fraction of the content budget a whitespace cut
            must reach to be used instead of a hard cut

    Returns:
        ChunkPlan with a single unprefixed chunk when the text fits, numbered
        chunks otherwise

    Raises:
        InvalidBudgetError: If the limits are inconsistent, or a prefix
            outgrows ``prefix_reserve``
        EmptyMessageError: If the message is empty after trimming

    Examples:
        >>> split_message("Hello world", 999, 8).bodies()
        ['Hello world']
        >>> split_message("aaaa bbbb cccc", 12, 6).bodies()
        ['[1/3] aaaa', '[2/3] bbbb', '[3/3] cccc']
    """
    _check_budget(max_length, prefix_reserve, min_word_length, min_boundary_ratio)

    if not sanitized or not sanitized.strip():
        raise EmptyMessageError()

    clusters = split_graphemes(sanitized)
    if len(clusters) <= max_length:
        return ChunkPlan((Chunk(index=1, total=1, content=sanitized),))

    budget = max_length - prefix_reserve
    floor = max(1, math.ceil(min_boundary_ratio * budget))

    pieces: List[Tuple[str, str]] = []
    cursor = _skip_whitespace(clusters, 0)
    leading = "".join(clusters[:cursor])
    while len(clusters) - cursor > budget:
        cut = _find_cut(clusters, cursor, budget, floor, min_word_length)
        if cut is None:
            pieces.append(("".join(clusters[cursor:cursor + budget]), ""))
            cursor += budget
        else:
            # Whole whitespace run goes to the separator
            while cut > cursor and is_whitespace_cluster(clusters[cut - 1]):
                cut -= 1
            end = _skip_whitespace(clusters, cut)
            pieces.append(("".join(clusters[cursor:cut]), "".join(clusters[cut:end])))
            cursor = end

    if cursor < len(clusters):
        pieces.append(("".join(clusters[cursor:]), ""))

    total = len(pieces)
    chunks = tuple(
        Chunk(index=position, total=total, content=content, separator=separator)
        for position, (content, separator) in enumerate(pieces, start=1)
    )

    for chunk in chunks:
        if chunk.length > max_length:
            raise InvalidBudgetError(
                f"Chunk {chunk.index}/{total} is {chunk.length} characters long, "
                f"above the {max_length} limit; prefix_reserve={prefix_reserve} "
                f"is too small for {total} chunks"
            )

    logger.debug(
        "Split message of %d characters into %d chunks (budget=%d)",
        len(clusters),
        total,
        budget,
    )
    return ChunkPlan(chunks, leading=leading)


def split_sms_chunks(text: str, settings: Optional[MessageSettings] = None) -> List[str]:
    """Split text into SMS bodies ready to send, using ``settings`` limits."""
    settings = settings or DEFAULT_SETTINGS
    plan = split_message(
        (text or "").strip(),
        settings.max_length,
        settings.prefix_reserve,
        min_word_length=settings.min_word_length,
        min_boundary_ratio=settings.min_boundary_ratio,
    )
    return plan.bodies()
