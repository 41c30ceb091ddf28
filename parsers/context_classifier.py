"""Labels a price occurrence as total / per night / per person from nearby text."""

from models.enums import PriceKind, PriceQualifier

CONTEXT_RADIUS = 20

PER_NIGHT_PHRASES = ("pro nacht", "per night")
TOTAL_PHRASES = ("gesamt", "total")
PER_PERSON_PHRASES = ("pro person", "p.p", "per person")


def context_window(text: str, offset: int, length: int, radius: int = CONTEXT_RADIUS) -> str:
    """Return the lower-cased text surrounding a match."""
    start = max(0, offset - radius)
    end = min(len(text), offset + length + radius)
    return text[start:end].lower()


def classify_context(
    text: str, offset: int, length: int
) -> tuple[PriceKind, PriceQualifier]:
    """Classify the match at (offset, length) within text.

    Checked in order per night, total, per person; a window mentioning
    both a nightly rate and a total is a nightly rate.
    """
    window = context_window(text, offset, length)

    if any(p in window for p in PER_NIGHT_PHRASES):
        kind = PriceKind.PER_NIGHT
    elif any(p in window for p in TOTAL_PHRASES):
        kind = PriceKind.TOTAL
    elif any(p in window for p in PER_PERSON_PHRASES):
        kind = PriceKind.PER_PERSON
    else:
        kind = PriceKind.UNCLASSIFIED

    qualifier = PriceQualifier.FROM if "ab " in window else PriceQualifier.NONE
    return kind, qualifier
