"""Host-strategy price extraction from page markup.

Selectors come in two flavours. CSS-like selectors are a deliberately small
subset (#id, .class, tag, tag.class, tag#id, [attr=val], tag[attr=val]) that is
translated into BeautifulSoup queries; anything outside it is treated as a
plain tag name and so matches nothing rather than something unexpected.
Structural selectors are XPath expressions evaluated with lxml.
"""

import re
from typing import Iterable, Optional, Sequence

from bs4 import BeautifulSoup
from lxml import etree
from lxml import html as lhtml

from models.price import HostStrategy, PriceResult
from parsers.host_strategy import resolve_strategy
from parsers.price_parser import detect_currency, normalize_currency_lenient, stable_raw
from parsers.regex_extractor import TOTAL_HINT, extract_price
from parsers.text_scanner import parse_price_from_text

_SELECTOR_RE = re.compile(
    r"^(?P<tag>[a-zA-Z][\w-]*)?"
    r"(?:(?P<prefix>[#.])(?P<ident>[\w-]+))?"
    r"(?:\[(?P<attr>[\w-]+)=(?P<quote>[\"']?)(?P<value>[^\"'\]]*)(?P=quote)\])?$"
)


class ParsedMarkup:
    """Both views of one document: a soup for CSS-like queries, an lxml tree for XPath."""

    def __init__(self, html: str):
        self.soup: Optional[BeautifulSoup] = None
        self.tree = None
        if not html or not html.strip():
            return

        self.soup = BeautifulSoup(html, "lxml")
        try:
            self.tree = lhtml.fromstring(html)
        except ValueError:
            # str input carrying an XML encoding declaration
            self.tree = _parse_bytes(html)
        except (etree.ParserError, etree.XMLSyntaxError):
            self.tree = None

    @property
    def empty(self) -> bool:
        return self.soup is None and self.tree is None


def _parse_bytes(html: str):
    try:
        return lhtml.fromstring(html.encode("utf-8"))
    except (etree.ParserError, etree.XMLSyntaxError, ValueError):
        return None


def css_to_query(selector: str) -> Optional[dict]:
    """Translate a CSS-like selector into BeautifulSoup.find_all arguments.

    '#id' -> exact id, '.cls' -> element has class, '[a=b]' -> attribute
    equality, combined with an optional leading tag name. Returns None for
    an empty selector.
    """
    selector = (selector or "").strip()
    if not selector:
        return None

    match = _SELECTOR_RE.match(selector)
    if not match or not any(match.group(g) for g in ("tag", "ident", "attr")):
        return {"name": selector, "attrs": {}}

    attrs: dict[str, str] = {}
    if match.group("prefix") == "#":
        attrs["id"] = match.group("ident")
    elif match.group("prefix") == ".":
        attrs["class"] = match.group("ident")
    if match.group("attr"):
        attrs[match.group("attr")] = match.group("value")

    return {"name": match.group("tag") or True, "attrs": attrs}


def _clean_text(text: str) -> str:
    return " ".join(text.split())


def select_css_texts(markup: ParsedMarkup, selector: str) -> list[str]:
    if markup.soup is None:
        return []
    query = css_to_query(selector)
    if query is None:
        return []
    elements = markup.soup.find_all(query["name"], attrs=query["attrs"])
    return [_clean_text(el.get_text(" ", strip=True)) for el in elements]


def select_structural_texts(markup: ParsedMarkup, expression: str) -> list[str]:
    if markup.tree is None:
        return []
    texts = []
    for node in markup.tree.xpath(expression):
        if isinstance(node, etree._Element):
            texts.append(_clean_text(node.text_content()))
        elif isinstance(node, str):
            texts.append(_clean_text(node))
    return texts


def collect_candidates(markup: ParsedMarkup, strategy: HostStrategy) -> list[str]:
    """Non-empty candidate texts in selector-declaration order, deduplicated."""
    texts: list[str] = []
    for selector in strategy.markup_selectors.css:
        texts.extend(select_css_texts(markup, selector))
    for expression in strategy.markup_selectors.structural:
        texts.extend(select_structural_texts(markup, expression))
    return _dedupe(texts)


def _dedupe(texts: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    unique = []
    for text in texts:
        if not text or text in seen:
            continue
        seen.add(text)
        unique.append(text)
    return unique


def price_from_candidates(candidates: Iterable[str]) -> Optional[PriceResult]:
    """Scan candidate texts in order and return the first one holding a price."""
    for text in candidates:
        match = parse_price_from_text(text)
        if match is None:
            continue
        return PriceResult(
            raw=stable_raw(match.amount, match.value),
            value=match.value,
            currency=normalize_currency_lenient(match.currency_symbol),
        )
    return None


def price_from_fallback_regexes(html: str, strategy: HostStrategy) -> Optional[PriceResult]:
    for regex in strategy.fallback_regexes:
        price = extract_price(html, {"price_regex": regex, "room_hint": TOTAL_HINT})
        if price is None:
            continue
        return PriceResult(raw=price.raw, value=price.value, currency=detect_currency(price.raw))
    return None


def extract_price_for_url(
    url: str, html: str, strategies: Optional[Sequence[HostStrategy]] = None
) -> Optional[PriceResult]:
    """Extract the booking price from html using the strategy for url's host."""
    strategy = resolve_strategy(url, strategies)

    markup = ParsedMarkup(html)
    if not markup.empty:
        price = price_from_candidates(collect_candidates(markup, strategy))
        if price is not None:
            return price

    return price_from_fallback_regexes(html or "", strategy)
