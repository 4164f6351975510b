import math
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, field_serializer


class AnalysisRequest(BaseModel):
    market: str
    top_n: int
    wishlist: List[str] = []
    discount_rate: float
    growth_rate: float
    risk_free_rate: float

    @field_serializer("discount_rate", "growth_rate", "risk_free_rate")
    def _non_finite_as_null(self, value: float) -> Optional[float]:
        # NaN and +/-inf are not valid JSON
        if not math.isfinite(value):
            return None
        return value

    def to_payload(self) -> dict:
        return self.model_dump(mode="json")


# Response values are kept exactly as sent; the renderer decides what is a number.

class ResultMetadata(BaseModel):
    model_config = ConfigDict(extra="allow")

    market: Optional[Any] = None
    timestamp: Optional[Any] = None
    fallbacks: Optional[Any] = None  # nested structure, shown as-is


class StockRow(BaseModel):
    model_config = ConfigDict(extra="allow")

    ticker: Optional[Any] = None
    price: Optional[Any] = None
    composite_score: Optional[Any] = None
    margin_of_safety: Optional[Any] = None
    epv_to_price: Optional[Any] = None
    new_52w_low: Optional[Any] = None
    buy_signal: Optional[Any] = None
    news_catalyst: Optional[Any] = None


class AnalysisResult(BaseModel):
    model_config = ConfigDict(extra="allow")

    metadata: Optional[ResultMetadata] = None
    alerts: Optional[List[Any]] = None
    stocks: Optional[List[StockRow]] = None
    disclaimer: Optional[Any] = None

    def to_payload(self) -> dict:
        """Dump only what the service actually sent (unknown fields included)."""
        return self.model_dump(mode="json", exclude_unset=True)
