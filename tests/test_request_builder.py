import math

import pytest

from equity_client.services.request_builder import (
    DEFAULT_TOP_N,
    FormState,
    build_request,
    normalize_market,
    parse_number,
    parse_top_n,
    parse_wishlist,
)


class TestWishlist:
    def test_order_preserved_and_blanks_dropped(self):
        assert parse_wishlist("AAPL, MSFT,\nNVDA, ") == ["AAPL", "MSFT", "NVDA"]

    def test_duplicates_kept(self):
        assert parse_wishlist("AAPL,AAPL\nMSFT") == ["AAPL", "AAPL", "MSFT"]

    def test_empty_input(self):
        assert parse_wishlist("") == []
        assert parse_wishlist(" ,\n, ") == []

    def test_case_left_alone(self):
        assert parse_wishlist("reliance.ns") == ["reliance.ns"]


class TestMarket:
    @pytest.mark.parametrize("raw", ["  us ", "US", "Us"])
    def test_trim_and_upper(self, raw):
        assert normalize_market(raw) == "US"

    def test_idempotent(self):
        assert normalize_market(normalize_market(" in ")) == "IN"


class TestTopN:
    def test_numeric_string(self):
        assert parse_top_n("37") == 37

    @pytest.mark.parametrize("raw", ["", "abc", "0", 0, "-5", float("nan")])
    def test_unusable_falls_back(self, raw):
        assert parse_top_n(raw) == DEFAULT_TOP_N

    def test_fraction_truncated(self):
        assert parse_top_n("12.9") == 12

    def test_no_upper_bound(self):
        assert parse_top_n(5000) == 5000


class TestRates:
    def test_numbers_pass_through(self):
        assert parse_number(0.045) == 0.045
        assert parse_number(" 0.1 ") == 0.1

    def test_blank_is_zero(self):
        assert parse_number("") == 0.0

    def test_garbage_is_nan(self):
        assert math.isnan(parse_number("ten percent"))


def test_build_request_from_defaults():
    req = build_request(FormState())
    assert req.market == "US"
    assert req.top_n == 20
    assert req.wishlist == ["AAPL", "MSFT", "NVDA"]
    assert req.discount_rate == 0.10
    assert req.growth_rate == 0.05
    assert req.risk_free_rate == 0.045


def test_nan_rate_is_sent_as_null():
    req = build_request(FormState(market="in", top_n="x", discount_rate="?"))
    payload = req.to_payload()
    assert payload["market"] == "IN"
    assert payload["top_n"] == 10
    assert payload["discount_rate"] is None
    assert set(payload) == {"market", "top_n", "wishlist", "discount_rate", "growth_rate", "risk_free_rate"}


@pytest.mark.parametrize("raw", ["1e999", "-1e999", float("inf")])
def test_infinite_rate_is_sent_as_null(raw):
    req = build_request(FormState(discount_rate=raw, growth_rate=raw))
    payload = req.to_payload()
    assert payload["discount_rate"] is None
    assert payload["growth_rate"] is None
    assert payload["risk_free_rate"] == 0.045
