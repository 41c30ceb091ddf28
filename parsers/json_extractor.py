"""Price candidates from decoded JSON documents (API and captured XHR bodies)."""

import re
from typing import Any, Optional

from models.price import JsonCandidate
from parsers.price_parser import finite_float
from parsers.text_scanner import parse_price_from_text

PRICE_KEY_PATTERN = re.compile(r"price|amount|total|rate", re.IGNORECASE)
TOTAL_KEY_PATTERN = re.compile(r"total", re.IGNORECASE)


def extract_candidates_from_json(
    value: Any, path: Optional[list[str]] = None
) -> list[JsonCandidate]:
    """Walk value depth-first and return every numeric or price-like leaf.

    Finite, non-negative numbers take their currency from the enclosing
    object's 'currency' or 'curr' field; strings containing a digit go
    through the text scanner. Every nested structure is visited whether or
    not its parent produced a candidate.
    """
    path = path or []
    results: list[JsonCandidate] = []

    if isinstance(value, list):
        for index, item in enumerate(value):
            results.extend(extract_candidates_from_json(item, [*path, str(index)]))
        return results

    if not isinstance(value, dict):
        return results

    enclosing_currency = value.get("currency") or value.get("curr") or None
    if not isinstance(enclosing_currency, str):
        enclosing_currency = None

    for key, entry in value.items():
        key = str(key)
        next_path = [*path, key]

        if isinstance(entry, (int, float)) and not isinstance(entry, bool):
            amount = finite_float(entry)
            if amount is not None and amount >= 0:
                results.append(
                    JsonCandidate(
                        path=".".join(next_path),
                        value=amount,
                        currency=enclosing_currency,
                        key=key,
                    )
                )
        elif isinstance(entry, str) and re.search(r"\d", entry):
            parsed = parse_price_from_text(entry)
            if parsed is not None:
                results.append(
                    JsonCandidate(
                        path=".".join(next_path),
                        value=parsed.value,
                        currency=parsed.currency,
                        key=key,
                    )
                )

        results.extend(extract_candidates_from_json(entry, next_path))

    return results


def pick_preferred_json_price(candidates: list[JsonCandidate]) -> Optional[JsonCandidate]:
    """First candidate keyed like a total, else the first candidate found."""
    if not candidates:
        return None
    for candidate in candidates:
        if TOTAL_KEY_PATTERN.search(candidate.key or ""):
            return candidate
    return candidates[0]


def contains_price_keys(payload: Any) -> bool:
    """True if any key anywhere in payload looks price-related."""
    if isinstance(payload, list):
        return any(contains_price_keys(item) for item in payload)
    if not isinstance(payload, dict):
        return False
    for key, value in payload.items():
        if PRICE_KEY_PATTERN.search(str(key)):
            return True
        if contains_price_keys(value):
            return True
    return False
