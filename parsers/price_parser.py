"""Price amount and currency normalization.

Handles formats like: 1.234,56 / 1234.56 / 189,00 / 1 234,56 (with NBSP).
Amounts come back as floats and currencies as ISO codes, or None if unparseable.
"""

import math
import re
from decimal import Decimal
from typing import Any, Optional

from config.currencies import CURRENCY_MAP


def normalize_amount(raw: str) -> Optional[float]:
    """Parse a numeral run such as '1.234,56' into a float.

    When both separators are present the dot is the thousands separator and the
    comma the decimal one; a lone comma is a decimal separator.
    """
    if not raw:
        return None

    clean = raw.replace("\u00a0", "")
    clean = re.sub(r"\s+", "", clean)

    if "," in clean and "." in clean:
        clean = clean.replace(".", "").replace(",", ".")
    elif "," in clean:
        clean = clean.replace(",", ".")

    return _to_float(clean)


def clean_amount(raw: str) -> Optional[float]:
    """Cleanup used by the regex extractor: keep digits and separators, drop dots.

    '1.234,56' -> 1234.56, '189,00' -> 189.0
    """
    if not raw:
        return None

    normalized = re.sub(r"[^0-9,.]", "", raw)
    if not normalized:
        return None

    normalized = normalized.replace(".", "").replace(" ", "")
    normalized = normalized.replace(",", ".")
    return _to_float(normalized)


def normalize_api_value(value: Any) -> Optional[float]:
    """Tolerant normalizer for numeric fields of structured API payloads.

    Numbers pass through. Strings get the comma/dot treatment of
    normalize_amount, and with several dots only the last group is decimals
    ('1.234.56' -> 1234.56).
    """
    if value is None or value == "":
        return None

    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        return finite_float(value)

    if not isinstance(value, str):
        return None

    normalized = re.sub(r"[^0-9,.]", "", value)
    if not normalized:
        return None

    has_comma = "," in normalized
    has_dot = "." in normalized

    if has_comma and has_dot:
        normalized = normalized.replace(".", "").replace(",", ".")
    elif has_comma:
        normalized = normalized.replace(",", ".")
    elif normalized.count(".") > 1:
        *head, decimal = normalized.split(".")
        normalized = "".join(head) + "." + decimal

    return _to_float(normalized)


def normalize_currency(raw: Optional[str]) -> Optional[str]:
    """Strict lookup: symbol or known code -> ISO code, anything else -> None."""
    if not raw:
        return None
    return CURRENCY_MAP.get(raw.strip().upper())


def normalize_currency_lenient(raw: Any) -> Optional[str]:
    """Lookup that passes unknown codes through (uppercased, trimmed).

    Structured APIs send ISO codes directly, so a code outside the table is
    still kept. Empty values become None.
    """
    if raw is None:
        return None

    code = str(raw).strip().upper()
    if not code:
        return None
    return CURRENCY_MAP.get(code, code)


def detect_currency(text: str) -> Optional[str]:
    """Find the first currency symbol or code mentioned anywhere in text."""
    if not text:
        return None

    upper = text.upper()
    for token, code in CURRENCY_MAP.items():
        if token in upper:
            return code
    return None


def _to_float(text: str) -> Optional[float]:
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def finite_float(value: Any) -> Optional[float]:
    """float(value) for JSON numbers, None for booleans, overflow and inf/nan."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        converted = float(value)
    except OverflowError:
        return None
    if not math.isfinite(converted):
        return None
    return converted


def format_amount(value: float) -> str:
    """Render value so that clean_amount() reads it back unchanged.

    840.0 -> '840', 999.5 -> '999,5'
    """
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f").replace(".", ",")


def stable_raw(text: str, value: float) -> str:
    """text when clean_amount() reads it back as value, else format_amount(value)."""
    if text and clean_amount(text) == value:
        return text
    return format_amount(value)
