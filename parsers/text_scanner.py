"""Finds every currency/amount pair in a block of text.

Matches both '€ 1.234,56' and '129,00 €' styles, then picks the primary
price: total over per night over per person over unclassified.
"""

import re
from typing import Iterator, Optional

from models.enums import PriceKind
from models.price import ClassifiedPrice
from parsers.context_classifier import classify_context
from parsers.price_parser import normalize_amount, normalize_currency

_CURRENCY = r"€|\$|£|CHF|EUR|USD|GBP"
_AMOUNT = r"\d(?:[\d.,\u00a0 ]*\d)?"
_BREAKS = (" ", "\u00a0")

PRICE_PATTERN = re.compile(
    rf"(?P<lead_currency>{_CURRENCY})\s?(?P<lead_amount>{_AMOUNT})"
    rf"|(?P<trail_amount>{_AMOUNT})\s?(?P<trail_currency>{_CURRENCY})",
    re.IGNORECASE,
)

KIND_PRIORITY = (
    PriceKind.TOTAL,
    PriceKind.PER_NIGHT,
    PriceKind.PER_PERSON,
    PriceKind.UNCLASSIFIED,
)


def scan_prices(text: str) -> list[ClassifiedPrice]:
    """Return every price occurrence in text whose amount normalizes.

    When a numeral run does not normalize (e.g. a date directly in front of
    the amount), the whitespace-separated part next to the currency is tried
    before the occurrence is dropped.
    """
    if not text:
        return []

    matches = []
    pos = 0
    while True:
        match = PRICE_PATTERN.search(text, pos)
        if match is None:
            break

        price = _price_from_match(text, match)
        if price is None:
            pos = match.end()
            continue

        matches.append(price)
        pos = price.offset + price.length

    return matches


def _amount_spans(match: re.Match) -> Iterator[tuple[int, int, int, int]]:
    """(start, end, amount_start, amount_end) text spans, longest first.

    Shorter spans cut the numeral run at whitespace, keeping the side that
    touches the currency.
    """
    if match.group("lead_amount") is not None:
        amount_start, amount_end = match.span("lead_amount")
        amount = match.group("lead_amount")
        yield match.start(), amount_end, amount_start, amount_end
        for i in range(len(amount) - 1, 0, -1):
            if amount[i] in _BREAKS and amount[i - 1].isdigit():
                yield match.start(), amount_start + i, amount_start, amount_start + i
    else:
        amount_start, amount_end = match.span("trail_amount")
        amount = match.group("trail_amount")
        yield match.start(), match.end(), amount_start, amount_end
        for i in range(len(amount) - 1):
            if amount[i] in _BREAKS and amount[i + 1].isdigit():
                yield amount_start + i + 1, match.end(), amount_start + i + 1, amount_end


def _price_from_match(text: str, match: re.Match) -> Optional[ClassifiedPrice]:
    symbol = match.group("lead_currency") or match.group("trail_currency")

    for start, end, amount_start, amount_end in _amount_spans(match):
        amount = text[amount_start:amount_end]
        value = normalize_amount(amount)
        if value is None:
            continue

        kind, qualifier = classify_context(text, start, end - start)
        return ClassifiedPrice(
            raw=text[start:end],
            value=value,
            currency=normalize_currency(symbol),
            currency_symbol=symbol,
            amount=amount,
            offset=start,
            length=end - start,
            kind=kind,
            qualifier=qualifier,
        )

    return None


def select_primary(matches: list[ClassifiedPrice]) -> Optional[ClassifiedPrice]:
    """Pick the first match of the highest-priority kind present."""
    for kind in KIND_PRIORITY:
        for match in matches:
            if match.kind == kind:
                return match
    return None


def parse_price_from_text(text: str) -> Optional[ClassifiedPrice]:
    """Find the primary price in a longer text block."""
    return select_primary(scan_prices(text))
