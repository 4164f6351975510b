import math
import re
from dataclasses import dataclass
from typing import List, Union

from ..schemas.analysis import AnalysisRequest

DEFAULT_TOP_N = 10

MARKETS = {"US": "US", "IN": "IN (NSE)"}

RawNumber = Union[str, int, float]

_WISHLIST_SPLIT = re.compile(r"[,\n]")


@dataclass
class FormState:
    """Raw form input, exactly as typed. Nothing here is validated."""

    market: str = "US"
    top_n: RawNumber = 20
    wishlist: str = "AAPL, MSFT, NVDA"
    discount_rate: RawNumber = 0.10
    growth_rate: RawNumber = 0.05
    risk_free_rate: RawNumber = 0.045


def parse_number(raw: RawNumber) -> float:
    """Lenient numeric parse: blank -> 0.0, garbage -> NaN."""
    if isinstance(raw, bool):
        return float(raw)
    if isinstance(raw, (int, float)):
        return float(raw)
    text = (raw or "").strip()
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return math.nan


def parse_top_n(raw: RawNumber) -> int:
    value = parse_number(raw)
    if not math.isfinite(value) or int(value) <= 0:
        return DEFAULT_TOP_N
    return int(value)


def parse_wishlist(raw: str) -> List[str]:
    tokens = (t.strip() for t in _WISHLIST_SPLIT.split(raw or ""))
    return [t for t in tokens if t]


def normalize_market(raw: str) -> str:
    return (raw or "").strip().upper()


def build_request(form: FormState) -> AnalysisRequest:
    return AnalysisRequest(
        market=normalize_market(form.market),
        top_n=parse_top_n(form.top_n),
        wishlist=parse_wishlist(form.wishlist),
        discount_rate=parse_number(form.discount_rate),
        growth_rate=parse_number(form.growth_rate),
        risk_free_rate=parse_number(form.risk_free_rate),
    )
