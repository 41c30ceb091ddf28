"""Entry point tying the extraction paths together.

Raw input takes exactly one path: an explicit regex, a JSON document, the
host strategy for a URL, or the default 'Gesamtpreis' pattern.
"""

import json
from typing import Any, Iterable, Optional

from models.price import CapturedResponse, JsonCandidate, PriceResult
from parsers.json_extractor import (
    contains_price_keys,
    extract_candidates_from_json,
    pick_preferred_json_price,
)
from parsers.markup_extractor import extract_price_for_url
from parsers.price_parser import format_amount, normalize_currency_lenient
from parsers.regex_extractor import PatternLike, extract_total_price


def extract_price_result(
    body: str,
    url: Optional[str] = None,
    price_regex: Optional[PatternLike] = None,
) -> Optional[PriceResult]:
    """Extract the monitored price from a fetched body, or None."""
    if price_regex is not None:
        return extract_total_price(body, price_regex)

    payload = decode_json(body)
    if payload is not None:
        return extract_price_from_json(payload)

    if url:
        return extract_price_for_url(url, body)

    return extract_total_price(body)


def decode_json(body: Any) -> Optional[Any]:
    """Decode body when it is a JSON object or array, else None."""
    if not isinstance(body, str):
        return None
    stripped = body.lstrip()
    if not stripped.startswith(("{", "[")):
        return None
    try:
        payload = json.loads(stripped)
    except ValueError:
        return None
    if not isinstance(payload, (dict, list)):
        return None
    return payload


def candidate_to_result(candidate: JsonCandidate) -> PriceResult:
    return PriceResult(
        raw=format_amount(candidate.value),
        value=candidate.value,
        currency=normalize_currency_lenient(candidate.currency),
    )


def extract_price_from_json(payload: Any) -> Optional[PriceResult]:
    """Preferred price of a decoded JSON document, or None."""
    preferred = pick_preferred_json_price(extract_candidates_from_json(payload))
    if preferred is None:
        return None
    return candidate_to_result(preferred)


def extract_price_from_responses(
    responses: Iterable[CapturedResponse],
) -> Optional[PriceResult]:
    """Preferred price across captured XHR responses, in capture order.

    String bodies are decoded first; bodies that do not decode or carry no
    price-like keys are skipped.
    """
    candidates: list[JsonCandidate] = []
    for response in responses:
        payload = response.body
        if isinstance(payload, str):
            payload = decode_json(payload)
        if payload is None or not contains_price_keys(payload):
            continue
        candidates.extend(extract_candidates_from_json(payload))

    preferred = pick_preferred_json_price(candidates)
    if preferred is None:
        return None
    return candidate_to_result(preferred)
