"""
Emoji sanitization for carrier-safe SMS bodies.

Every grapheme cluster of a message is classified on its own:

- plain text (letters with or without accents, digits, punctuation, whitespace)
  is kept verbatim,
- whitelisted emoji (see ``emoji_whitelist``) are kept verbatim,
- any other pictographic cluster (smileys, flags, ZWJ sequences...) becomes
  the ``[]`` placeholder, one placeholder per cluster. Non-symbol code points
  sharing the cluster ahead of the symbol are kept.

Sanitizing is a pure rewrite: it never fails and is idempotent.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import List

import regex

from .emoji_whitelist import COMBINING_KEYCAP, is_supported_emoji
from .graphemes import split_graphemes

logger = logging.getLogger(__name__)

PLACEHOLDER = "[]"

# Flag halves, matched even when unpaired
_REGIONAL_INDICATOR_RANGE = "\U0001F1E6-\U0001F1FF"

_SYMBOL_RE = regex.compile(
    r"[\p{Extended_Pictographic}\p{Emoji_Presentation}"
    + _REGIONAL_INDICATOR_RANGE
    + COMBINING_KEYCAP
    + "]"
)


class GraphemeClass(str, Enum):
    """Classification of a single grapheme cluster."""

    PLAIN = "plain"
    SUPPORTED_SYMBOL = "supported_symbol"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class SanitizedMessage:
    """Result of ``sanitize``.

    Attributes:
        text: Message with unsupported clusters replaced by ``PLACEHOLDER``
        modified: True when at least one cluster was replaced
        replaced: Number of replaced clusters
    """

    text: str
    modified: bool = False
    replaced: int = 0

    def __str__(self) -> str:
        return self.text


def classify(cluster: str) -> GraphemeClass:
    """
    Classify one grapheme cluster, independently of its neighbours.

    Examples:
        >>> classify("é")
        <GraphemeClass.PLAIN: 'plain'>
        >>> classify("\\u2705")
        <GraphemeClass.SUPPORTED_SYMBOL: 'supported_symbol'>
        >>> classify("\\U0001f613")
        <GraphemeClass.UNSUPPORTED: 'unsupported'>
    """
    if not _SYMBOL_RE.search(cluster):
        return GraphemeClass.PLAIN
    if is_supported_emoji(cluster):
        return GraphemeClass.SUPPORTED_SYMBOL
    return GraphemeClass.UNSUPPORTED


def sanitize(text: str) -> SanitizedMessage:
    """
    Replace unsupported emoji with ``PLACEHOLDER`` and keep everything else.

    Args:
        text: Any Unicode text, possibly empty

    Returns:
        SanitizedMessage carrying the rewritten text and a modification flag
    """
    parts: List[str] = []
    replaced = 0

    for cluster in split_graphemes(text or ""):
        if classify(cluster) is GraphemeClass.UNSUPPORTED:
            # Prepend marks ahead of the symbol stay as text
            parts.append(cluster[:_SYMBOL_RE.search(cluster).start()] + PLACEHOLDER)
            replaced += 1
        else:
            parts.append(cluster)

    if replaced:
        logger.debug("Replaced %d unsupported symbol(s) with %s", replaced, PLACEHOLDER)

    return SanitizedMessage(text="".join(parts), modified=replaced > 0, replaced=replaced)
