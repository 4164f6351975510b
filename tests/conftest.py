"""
Pytest configuration and fixtures
"""

import json

import pytest
import requests


def make_response(status: int, body, content_type: str = "application/json") -> requests.Response:
    """Real requests.Response with a canned body."""
    r = requests.Response()
    r.status_code = status
    if not isinstance(body, (str, bytes)):
        body = json.dumps(body)
    r._content = body.encode("utf-8") if isinstance(body, str) else body
    r.encoding = "utf-8"
    r.headers["Content-Type"] = content_type
    return r


class FakeHttp:
    """Stands in for requests.Session; records every POST."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def analysis_payload():
    """Service response for a US run"""
    return {
        "metadata": {
            "market": "US",
            "timestamp": "2026-10-19T08:15:30Z",
            "fallbacks": {"prices": {"primary": "polygon", "used": "yahoo"}},
        },
        "alerts": ["NVDA hit a new 52-week low", "AAPL earnings tomorrow"],
        "stocks": [
            {
                "ticker": "AAPL",
                "price": 187.5,
                "composite_score": 0.81234,
                "margin_of_safety": 0.2567,
                "epv_to_price": 1.3,
                "new_52w_low": False,
                "buy_signal": True,
                "news_catalyst": True,
            },
            {
                "ticker": "NVDA",
                "price": 412,
                "margin_of_safety": -0.1,
                "new_52w_low": True,
                "buy_signal": False,
                "news_catalyst": False,
            },
        ],
        "disclaimer": "Not investment advice.",
    }
