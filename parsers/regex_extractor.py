"""Regex-driven price extraction for per-monitor and default patterns.

A room hint narrows the search to the page region around the hint, which keeps
unrelated numbers elsewhere on the page out of the match.
"""

import re
from typing import Any, Mapping, Optional, Union

from models.errors import ConfigurationError
from models.price import PriceResult
from parsers.price_parser import clean_amount

HINT_LOOKBEHIND = 500
HINT_WINDOW = 2000

TOTAL_HINT = "Gesamtpreis"
FALLBACK_HINT = "tcpPrice__value"

DEFAULT_TOTAL_REGEX = re.compile(r"Gesamtpreis[^0-9]*([0-9,.]+)", re.IGNORECASE)
FALLBACK_TOTAL_REGEXES = (
    re.compile(r"tcpPrice__value[^0-9]*([0-9](?:[0-9.,\s]|&nbsp;)*[0-9])", re.IGNORECASE),
    # nested markup with digits in attributes between class and amount
    re.compile(r"tcpPrice__value.*?([0-9]{1,3}(?:\.[0-9]{3})*,[0-9]{2})", re.IGNORECASE | re.DOTALL),
)

# "/pattern/flags" as stored in monitor configs
_DELIMITED = re.compile(r"^/(?P<body>.*)/(?P<flags>[imsxu]*)$", re.DOTALL)
_FLAG_MAP = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "u": 0,
}

PatternLike = Union[str, re.Pattern]


def compile_price_regex(pattern: Optional[PatternLike]) -> re.Pattern:
    """Compile a configured price regex, failing fast on bad input.

    Accepts compiled patterns, plain pattern strings and delimited strings
    such as '/€\\s*([0-9,.]+)/i'.
    """
    if isinstance(pattern, re.Pattern):
        return pattern

    if not pattern:
        raise ConfigurationError("Missing price_regex for room entry.")

    body, flags = pattern, 0
    delimited = _DELIMITED.match(pattern)
    if delimited:
        body = delimited.group("body")
        for flag in delimited.group("flags"):
            flags |= _FLAG_MAP[flag]

    try:
        return re.compile(body, flags)
    except re.error as e:
        raise ConfigurationError(f"Invalid price_regex {pattern!r}: {e}") from e


def narrow_to_hint(html: str, room_hint: Optional[str]) -> str:
    """Cut html down to the window around the first (case-insensitive) hint."""
    if not room_hint:
        return html

    pos = html.lower().find(room_hint.lower())
    if pos == -1:
        return html

    start = max(0, pos - HINT_LOOKBEHIND)
    return html[start : start + HINT_WINDOW]


def extract_price(html: str, room: Mapping[str, Any]) -> Optional[PriceResult]:
    """Extract one price using room['price_regex'] near room['room_hint'].

    Returns None when nothing matches. A missing regex is a
    ConfigurationError, not a miss.
    """
    regex = compile_price_regex(room.get("price_regex"))
    subject = narrow_to_hint(html or "", room.get("room_hint"))

    match = regex.search(subject)
    if not match:
        return None

    raw = match.group(0)
    if regex.groups and match.group(1) is not None:
        raw = match.group(1)

    value = clean_amount(raw)
    if value is None:
        return None

    return PriceResult(raw=raw, value=value)


def extract_total_price(
    html: str, regex: Optional[PatternLike] = None
) -> Optional[PriceResult]:
    """Extract the 'Gesamtpreis' total, with tcpPrice fallbacks.

    An explicit regex result is returned as is, even when it is None.
    """
    price = extract_price(
        html,
        {"room_hint": TOTAL_HINT, "price_regex": regex if regex is not None else DEFAULT_TOTAL_REGEX},
    )
    if price is not None or regex is not None:
        return price

    for fallback in FALLBACK_TOTAL_REGEXES:
        price = extract_price(html, {"room_hint": FALLBACK_HINT, "price_regex": fallback})
        if price is not None:
            return price

    return None
