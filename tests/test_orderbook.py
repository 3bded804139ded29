"""Tests for raw tick models and conversion into an OrderBook."""

import pytest
from pydantic import ValidationError

from conftest import make_tick
from zscore_monitor.models.orderbook import Level, convert
from zscore_monitor.models.tick import RawLevel, RawTick


class TestRawLevel:
    def test_from_dict(self):
        lvl = RawLevel.model_validate({"price": 100.5, "quantity": 2})
        assert lvl.price == 100.5
        assert lvl.quantity == 2.0

    def test_from_pair_of_strings(self):
        lvl = RawLevel.model_validate(["100.5", "0.25"])
        assert lvl.price == 100.5
        assert lvl.quantity == 0.25

    def test_rejects_non_positive_price(self):
        with pytest.raises(ValidationError):
            RawLevel.model_validate([0, 1])

    def test_rejects_negative_quantity(self):
        with pytest.raises(ValidationError):
            RawLevel.model_validate([100, -1])

    def test_zero_quantity_allowed(self):
        assert RawLevel.model_validate([100, 0]).quantity == 0.0

    def test_rejects_wrong_pair_length(self):
        with pytest.raises(ValidationError):
            RawLevel.model_validate([100, 1, 2])


class TestLevel:
    def test_zscore_defaults_to_zero(self):
        assert Level(price=1.0, quantity=1.0).zscore == 0.0

    def test_rejects_infinite_quantity(self):
        with pytest.raises(ValidationError):
            Level(price=1.0, quantity=float("inf"))

    def test_rejects_nan_price(self):
        with pytest.raises(ValidationError):
            Level(price=float("nan"), quantity=1.0)


class TestConvert:
    def test_sorted_bids_descending_asks_ascending(self):
        tick = make_tick(
            bids=[(98.0, 1.0), (100.0, 2.0), (99.0, 3.0)],
            asks=[(103.0, 1.0), (101.0, 2.0), (102.0, 3.0)],
        )
        book = convert(tick, sort_levels=True)

        assert [lvl.price for lvl in book.bids] == [100.0, 99.0, 98.0]
        assert [lvl.price for lvl in book.asks] == [101.0, 102.0, 103.0]
        # quantities travel with their price
        assert [lvl.quantity for lvl in book.bids] == [2.0, 3.0, 1.0]

    def test_unsorted_keeps_source_order(self):
        tick = make_tick(
            bids=[(98.0, 1.0), (100.0, 2.0)],
            asks=[(103.0, 1.0), (101.0, 2.0)],
        )
        book = convert(tick, sort_levels=False)

        assert [lvl.price for lvl in book.bids] == [98.0, 100.0]
        assert [lvl.price for lvl in book.asks] == [103.0, 101.0]

    def test_sorts_by_default(self):
        book = convert(make_tick(bids=[(1.0, 1.0), (2.0, 1.0)], asks=[]))
        assert book.bids[0].price == 2.0

    def test_empty_sides(self):
        book = convert(RawTick())
        assert book.bids == []
        assert book.asks == []

    def test_zscores_start_unset(self):
        book = convert(make_tick(bids=[(100.0, 1.0)], asks=[(101.0, 2.0)]))
        assert book.bids[0].zscore == 0.0
        assert book.asks[0].zscore == 0.0

    def test_carries_symbol_and_source(self):
        book = convert(make_tick(bids=[], asks=[], source="ws-3"))
        assert book.symbol == "ETH_TL"
        assert book.source == "ws-3"

    def test_each_conversion_is_independent(self):
        tick = make_tick(bids=[(100.0, 1.0)], asks=[(101.0, 2.0)])
        first = convert(tick)
        first.bids[0].zscore = 9.0
        second = convert(tick)
        assert second.bids[0].zscore == 0.0
