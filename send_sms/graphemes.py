"""Grapheme cluster helpers shared by the sanitizer, the chunker and the CLI.

All length accounting in this project is done in extended grapheme clusters
(user-perceived characters), never in code points or encoded bytes, so that
flags, ZWJ sequences, keycaps and letters with combining marks are never cut.
"""

from __future__ import annotations

from typing import List

import regex

_GRAPHEME_RE = regex.compile(r"\X")


def split_graphemes(text: str) -> List[str]:
    """Return the extended grapheme clusters of ``text`` in order."""
    if not text:
        return []
    return _GRAPHEME_RE.findall(text)


def grapheme_len(text: str) -> int:
    """Count user-perceived characters."""
    return len(split_graphemes(text))


def is_whitespace_cluster(cluster: str) -> bool:
    """True when every code point of the cluster is whitespace (``"\\r\\n"`` included)."""
    return bool(cluster) and cluster.isspace()


def truncate_graphemes(text: str, limit: int) -> str:
    """Keep at most ``limit`` clusters of ``text``."""
    if limit <= 0:
        return ""
    return "".join(split_graphemes(text)[:limit])
