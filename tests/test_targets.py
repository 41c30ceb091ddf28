"""Tests for monitor target loading and per-target checks."""

import json
import re

import pytest

from main import NOT_FOUND, check_body
from models.errors import ConfigurationError
from models.target import CheckResult, MonitorTarget, RoomTarget, load_targets

ROOM_PAGE = (
    "<h3>Standard Double</h3><span>€149,00</span>"
    + "." * 800
    + "<h3>Deluxe Queen</h3><span>€ 189,00</span>"
)


class TestLoadTargets:
    def test_loads_and_compiles(self, tmp_path):
        path = tmp_path / "targets.json"
        path.write_text(
            json.dumps(
                [
                    {
                        "id": "hotel",
                        "url": "https://hotel.example.org/?d={date}",
                        "rooms": [
                            {"name": "Deluxe Queen", "room_hint": "Deluxe Queen", "price_regex": "/€\\s*([0-9,.]+)/"}
                        ],
                    },
                    {"id": "robinson", "url": "https://www.robinson.com", "price_regex": "/gesamt (\\d+)/i"},
                ]
            ),
            encoding="utf-8",
        )
        targets = load_targets(path)
        assert [t.id for t in targets] == ["hotel", "robinson"]
        assert targets[0].rooms[0].price_regex.pattern == "€\\s*([0-9,.]+)"
        assert targets[1].price_regex.flags & re.IGNORECASE
        assert targets[0].price_regex is None
        assert targets[0].active

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Missing config file"):
            load_targets(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "targets.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            load_targets(path)

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "targets.json"
        path.write_text('{"id": "x"}', encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_targets(path)

    def test_room_without_regex(self, tmp_path):
        path = tmp_path / "targets.json"
        path.write_text(json.dumps([{"url": "https://x.org", "rooms": [{"name": "A"}]}]), encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_targets(path)

    def test_invalid_regex(self):
        with pytest.raises(ConfigurationError):
            RoomTarget(name="A", price_regex="/([0-9/")


class TestCheckResult:
    def test_below_threshold(self):
        assert CheckResult(target_id="t", url="u", value=180.0, threshold=200).below_threshold
        assert not CheckResult(target_id="t", url="u", value=250.0, threshold=200).below_threshold
        assert not CheckResult(target_id="t", url="u", threshold=200).below_threshold


class TestCheckBody:
    def test_rooms(self):
        target = MonitorTarget(
            id="hotel",
            url="https://hotel.example.org",
            rooms=[
                {"name": "Deluxe Queen", "room_hint": "Deluxe Queen", "price_regex": r"€\s*([0-9,.]+)", "threshold": 200},
                {"name": "Suite", "room_hint": "Suite", "price_regex": r"Suite[^€]*€\s*([0-9,.]+)"},
            ],
        )
        results = check_body(target, target.url, ROOM_PAGE)
        assert results[0].room_name == "Deluxe Queen"
        assert results[0].value == pytest.approx(189.0)
        assert results[0].below_threshold
        assert results[1].value is None
        assert results[1].error == NOT_FOUND

    def test_total_price(self):
        target = MonitorTarget(id="t", url="https://hotel.example.org")
        results = check_body(target, target.url, "<p>Gesamtpreis: 1.234,56 €</p>")
        assert len(results) == 1
        assert results[0].value == pytest.approx(1234.56)
        assert results[0].error is None

    def test_total_price_missing(self):
        target = MonitorTarget(id="t", url="https://hotel.example.org")
        results = check_body(target, target.url, "<p>Ausgebucht</p>")
        assert results[0].value is None
        assert results[0].error == NOT_FOUND
