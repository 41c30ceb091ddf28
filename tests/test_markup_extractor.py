"""Tests for selector translation and host-strategy markup extraction."""

import pytest

from models.price import HostStrategy, MarkupSelectors
from parsers.markup_extractor import (
    ParsedMarkup,
    collect_candidates,
    css_to_query,
    extract_price_for_url,
    select_css_texts,
    select_structural_texts,
)

SNIPPET = (
    '<div id="main">'
    '<span class="price total" data-testid="total-price">50 €</span>'
    '<p class="price">Hinweis</p>'
    "</div>"
)

DEFAULT = HostStrategy(name="default", host_patterns=["default"])


class TestCssToQuery:
    def test_id(self):
        assert css_to_query("#total") == {"name": True, "attrs": {"id": "total"}}

    def test_class(self):
        assert css_to_query(".price") == {"name": True, "attrs": {"class": "price"}}

    def test_tag_and_class(self):
        assert css_to_query("span.price") == {"name": "span", "attrs": {"class": "price"}}

    def test_tag_and_id(self):
        assert css_to_query("div#main") == {"name": "div", "attrs": {"id": "main"}}

    def test_attribute(self):
        assert css_to_query("[data-testid=total-price]") == {
            "name": True,
            "attrs": {"data-testid": "total-price"},
        }

    def test_tag_and_quoted_attribute(self):
        assert css_to_query("span[data-testid='total-price']") == {
            "name": "span",
            "attrs": {"data-testid": "total-price"},
        }

    def test_unsupported_falls_back_to_tag_name(self):
        assert css_to_query("div > span") == {"name": "div > span", "attrs": {}}
        assert css_to_query("li:nth-child(2)") == {"name": "li:nth-child(2)", "attrs": {}}

    def test_empty(self):
        assert css_to_query("  ") is None


class TestSelectTexts:
    def setup_method(self):
        self.markup = ParsedMarkup(SNIPPET)

    def test_id(self):
        assert select_css_texts(self.markup, "#main") == ["50 € Hinweis"]

    def test_class_contains(self):
        assert select_css_texts(self.markup, ".price") == ["50 €", "Hinweis"]
        assert select_css_texts(self.markup, ".total") == ["50 €"]

    def test_tag_class(self):
        assert select_css_texts(self.markup, "span.price") == ["50 €"]
        assert select_css_texts(self.markup, "p.total") == []

    def test_attribute(self):
        assert select_css_texts(self.markup, "[data-testid=total-price]") == ["50 €"]
        assert select_css_texts(self.markup, "span[data-testid='total-price']") == ["50 €"]

    def test_unsupported_selector_matches_nothing(self):
        assert select_css_texts(self.markup, "div > span") == []

    def test_structural(self):
        assert select_structural_texts(self.markup, "//span/text()") == ["50 €"]
        assert select_structural_texts(self.markup, "//*[contains(text(), 'Hinweis')]") == ["Hinweis"]

    def test_structural_non_node_result_ignored(self):
        assert select_structural_texts(self.markup, "count(//span)") == []

    def test_candidates_deduplicated_in_order(self):
        strategy = HostStrategy(
            name="s",
            host_patterns=["x.org"],
            markup_selectors=MarkupSelectors(css=[".price", ".total"], structural=["//span"]),
        )
        assert collect_candidates(self.markup, strategy) == ["50 €", "Hinweis"]


class TestEmptyMarkup:
    def test_empty_document(self):
        markup = ParsedMarkup("")
        assert markup.empty
        assert select_css_texts(markup, ".price") == []
        assert select_structural_texts(markup, "//span") == []


class TestExtractPriceForUrl:
    def test_robinson_tcp_price(self):
        html = (
            '<html><body><div class="tcpPrice">'
            '<span class="tcpPrice__label">Gesamtpreis</span> '
            '<span class="tcpPrice__value">1.234,56 €</span>'
            "</div></body></html>"
        )
        price = extract_price_for_url("https://www.robinson.com/de/buchen", html)
        assert price.raw == "1.234,56"
        assert price.value == pytest.approx(1234.56)
        assert price.currency == "EUR"

    def test_default_strategy_prefers_total_selector(self):
        html = (
            '<div class="offer"><span class="price">120 € pro Nacht</span>'
            '<div class="total-price">Gesamt 840 €</div></div>'
        )
        price = extract_price_for_url("https://hotel.example.org/room", html)
        assert price.value == 840.0
        assert price.currency == "EUR"

    def test_total_picked_over_nightly_rate_in_one_candidate(self):
        html = (
            '<div class="price">120 € pro Nacht, 7 Nächte für 2 Erwachsene, '
            "Gesamtpreis 840 €</div>"
        )
        price = extract_price_for_url("https://hotel.example.org/room", html)
        assert price.value == 840.0

    def test_structural_selector(self):
        html = "<table><tr><td>Total</td><td>€ 1.299,00</td></tr></table>"
        price = extract_price_for_url("https://secure.booking.com/book", html)
        assert price.value == pytest.approx(1299.0)
        assert price.currency == "EUR"

    def test_fallback_regex_without_currency(self):
        price = extract_price_for_url("https://hotel.example.org", "<p>Gesamtpreis: 1.234,56</p>")
        assert price.raw == "1.234,56"
        assert price.value == pytest.approx(1234.56)
        assert price.currency is None

    def test_malformed_url_uses_default_strategy(self):
        price = extract_price_for_url("http://[::1/x", "<p>Gesamtpreis: 1.234,56</p>")
        assert price.value == pytest.approx(1234.56)

    def test_fallback_regex_detects_currency(self):
        custom = HostStrategy(
            name="custom",
            host_patterns=["custom.example"],
            fallback_regexes=[r"Preis:\s*([0-9.,]+\s*CHF)"],
        )
        price = extract_price_for_url(
            "https://www.custom.example/a", "<p>Preis: 1.234,50 CHF</p>", [custom, DEFAULT]
        )
        assert price.value == pytest.approx(1234.5)
        assert price.currency == "CHF"

    def test_unsupported_selector_yields_no_match(self):
        custom = HostStrategy(
            name="custom",
            host_patterns=["custom.example"],
            markup_selectors=MarkupSelectors(css=["div > span.price"]),
        )
        html = '<div><span class="price">99 €</span></div>'
        assert extract_price_for_url("https://custom.example", html, [custom, DEFAULT]) is None

    def test_no_price(self):
        assert extract_price_for_url("https://hotel.example.org", "<p>Ausgebucht</p>") is None

    def test_unparseable_input(self):
        assert extract_price_for_url("https://hotel.example.org", "") is None
        assert extract_price_for_url("https://hotel.example.org", "<<<>>>") is None
