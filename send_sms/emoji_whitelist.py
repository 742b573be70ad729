"""
Emoji known to render correctly through the FreeMobile SMS gateway.

The gateway transmits the Basic Multilingual Plane symbol emoji (weather,
zodiac, dingbats, arrows, media controls...) but mangles supplementary-plane
pictographs such as smileys, flags or ZWJ sequences. Entries are stored
without the U+FE0F emoji variation selector; ``is_supported_emoji`` strips it
from the cluster before looking it up.
"""

from __future__ import annotations

from itertools import chain
from typing import FrozenSet, Iterable

VARIATION_SELECTOR_16 = "\ufe0f"
COMBINING_KEYCAP = "\u20e3"

# Latin-1, general punctuation and letterlike symbols
_LETTERLIKE = (0x00A9, 0x00AE, 0x203C, 0x2049, 0x2122, 0x2139)

_ARROWS = chain(
    range(0x2194, 0x219A),  # ↔ ↕ ↖ ↗ ↘ ↙
    (0x21A9, 0x21AA, 0x2934, 0x2935, 0x27A1, 0x2B05, 0x2B06, 0x2B07),
)

# Miscellaneous Technical: watch, hourglass, keyboard, media controls
_TECHNICAL = chain(
    (0x231A, 0x231B, 0x2328, 0x23CF),
    range(0x23E9, 0x23F4),
    (0x23F8, 0x23F9, 0x23FA),
)

_GEOMETRIC = (
    0x24C2,
    0x25AA, 0x25AB, 0x25B6, 0x25C0,
    0x25FB, 0x25FC, 0x25FD, 0x25FE,
    0x2B1B, 0x2B1C, 0x2B50, 0x2B55,
)

_MISC_SYMBOLS = chain(
    range(0x2600, 0x2605),  # sun, cloud, umbrella, snowman, comet
    (0x260E, 0x2611, 0x2614, 0x2615, 0x2618, 0x261D),
    (0x2620, 0x2622, 0x2623, 0x2626, 0x262A, 0x262E, 0x262F),
    (0x2638, 0x2639, 0x263A, 0x2640, 0x2642),
    range(0x2648, 0x2654),  # zodiac
    (0x265F, 0x2660, 0x2663, 0x2665, 0x2666, 0x2668),
    (0x267B, 0x267E, 0x267F),
    range(0x2692, 0x2698),
    (0x2699, 0x269B, 0x269C, 0x26A0, 0x26A1, 0x26A7, 0x26AA, 0x26AB),
    (0x26B0, 0x26B1, 0x26BD, 0x26BE, 0x26C4, 0x26C5, 0x26C8),
    (0x26CE, 0x26CF, 0x26D1, 0x26D3, 0x26D4, 0x26E9, 0x26EA),
    range(0x26F0, 0x26F6),
    range(0x26F7, 0x26FB),
    (0x26FD,),
)

_DINGBATS = (
    0x2702, 0x2705, 0x2708, 0x2709, 0x270A, 0x270B, 0x270C, 0x270D,
    0x270F, 0x2712, 0x2714, 0x2716, 0x271D, 0x2721, 0x2728, 0x2733,
    0x2734, 0x2744, 0x2747, 0x274C, 0x274E, 0x2753, 0x2754, 0x2755,
    0x2757, 0x2763, 0x2764, 0x2795, 0x2796, 0x2797, 0x27B0, 0x27BF,
)

_CJK = (0x3030, 0x303D, 0x3297, 0x3299)

_KEYCAP_BASES = "#*0123456789"


def _build(codepoints: Iterable[int], keycap_bases: str) -> FrozenSet[str]:
    singles = {chr(cp) for cp in codepoints}
    keycaps = {base + COMBINING_KEYCAP for base in keycap_bases}
    return frozenset(singles | keycaps)


SUPPORTED_EMOJIS: FrozenSet[str] = _build(
    chain(_LETTERLIKE, _ARROWS, _TECHNICAL, _GEOMETRIC, _MISC_SYMBOLS, _DINGBATS, _CJK),
    _KEYCAP_BASES,
)


def is_supported_emoji(cluster: str) -> bool:
    """
    Check a grapheme cluster against the whitelist.

    Examples:
        >>> is_supported_emoji("\\u26a1")           # ⚡
        True
        >>> is_supported_emoji("\\u2714\\ufe0f")     # ✔️
        True
        >>> is_supported_emoji("1\\ufe0f\\u20e3")    # 1️⃣
        True
        >>> is_supported_emoji("\\U0001f600")       # 😀
        False
    """
    if cluster in SUPPORTED_EMOJIS:
        return True
    return cluster.replace(VARIATION_SELECTOR_16, "") in SUPPORTED_EMOJIS
