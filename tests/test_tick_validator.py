"""Tests for tick message parsing and validation."""

import json

from zscore_monitor.validation.tick_validator import parse_tick, validate_tick


class TestValidateTick:
    def test_valid_tick(self):
        raw = {
            "symbol": "ETH_TL",
            "timestamp": "2024-01-01T00:00:00Z",
            "bids": [{"price": 100.0, "quantity": 1.5}],
            "asks": [["101.0", "2.5"]],
        }
        tick = validate_tick(raw, "ws-0")
        assert tick is not None
        assert tick.symbol == "ETH_TL"
        assert tick.bids[0].quantity == 1.5
        assert tick.asks[0].price == 101.0

    def test_source_forced_to_streamer_name(self):
        tick = validate_tick({"source": "spoofed", "bids": [], "asks": []}, "ws-1")
        assert tick is not None
        assert tick.source == "ws-1"

    def test_negative_quantity_returns_none(self):
        raw = {"bids": [{"price": 100.0, "quantity": -1}], "asks": []}
        assert validate_tick(raw, "ws-0") is None

    def test_nan_price_returns_none(self):
        raw = {"bids": [{"price": float("nan"), "quantity": 1.0}], "asks": []}
        assert validate_tick(raw, "ws-0") is None

    def test_invalid_level_shape_returns_none(self):
        raw = {"bids": ["not-a-level"], "asks": []}
        assert validate_tick(raw, "ws-0") is None


class TestParseTick:
    def test_parses_json_text(self):
        text = json.dumps({"bids": [[100, 1]], "asks": [[101, 2]]})
        tick = parse_tick(text, "ws-0")
        assert tick is not None
        assert len(tick.bids) == 1
        assert len(tick.asks) == 1

    def test_invalid_json_returns_none(self):
        assert parse_tick("not valid json {", "ws-0") is None

    def test_non_object_returns_none(self):
        assert parse_tick("[1, 2, 3]", "ws-0") is None

    def test_infinite_quantity_returns_none(self):
        text = '{"bids": [[100, Infinity], [99, 1]], "asks": [[101, 1], [102, 2]]}'
        assert parse_tick(text, "ws-0") is None

    def test_nan_token_returns_none(self):
        assert parse_tick('{"bids": [], "asks": [[NaN, 1]]}', "ws-0") is None
