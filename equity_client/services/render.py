"""Pure mapping from a ResultState to what the report area shows.

Nothing here talks to Streamlit or the terminal; the front ends draw a
``ReportView`` however they like. Every field of the result may be
missing, and a missing number is shown as ``PLACEHOLDER``.
"""

import json
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import pandas as pd

from ..schemas.analysis import AnalysisResult, StockRow
from .state import Errored, Loading, Ready, ResultState

PLACEHOLDER = "-"
EMPTY_PROMPT = "Run an analysis to see results here."

COLUMNS = ["Ticker", "Price", "Score", "MOS", "EPV/Price", "52w Low", "Signals"]


def _is_number(x) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def format_text(x) -> str:
    return "" if x is None else str(x)


def format_number(x) -> str:
    """Raw value as sent, or the placeholder. ``123.0`` shows as ``123``."""
    if x is None:
        return PLACEHOLDER
    if isinstance(x, float) and x.is_integer():
        return str(int(x))
    return str(x)


def format_fixed(x, digits: int) -> str:
    # only real numbers get fixed decimals; "12.3" or true is not a score
    if not _is_number(x):
        return PLACEHOLDER
    return f"{x:.{digits}f}"


def format_flag(x) -> str:
    return "Yes" if x else "No"


def signals(row: StockRow) -> Tuple[str, ...]:
    badges = []
    if row.buy_signal:
        badges.append("Buy")
    if row.news_catalyst:
        badges.append("News")
    return tuple(badges)


@dataclass
class StockRowView:
    ticker: str
    price: str
    score: str
    mos: str
    epv_to_price: str
    low_52w: str
    signals: Tuple[str, ...] = ()

    def cells(self) -> List[str]:
        return [
            self.ticker,
            self.price,
            self.score,
            self.mos,
            self.epv_to_price,
            self.low_52w,
            " ".join(self.signals),
        ]


@dataclass
class MetadataView:
    market: str
    timestamp: str
    fallbacks: Optional[str] = None  # pretty-printed JSON


@dataclass
class ReportView:
    kind: str  # "prompt" | "loading" | "error" | "report"
    message: Optional[str] = None
    metadata: Optional[MetadataView] = None
    alerts: List[str] = field(default_factory=list)
    rows: List[StockRowView] = field(default_factory=list)
    disclaimer: Optional[str] = None

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame([r.cells() for r in self.rows], columns=COLUMNS)


def render_row(row: StockRow) -> StockRowView:
    return StockRowView(
        ticker=format_text(row.ticker),
        price=format_number(row.price),
        score=format_fixed(row.composite_score, 3),
        mos=format_fixed(row.margin_of_safety, 2),
        epv_to_price=format_fixed(row.epv_to_price, 2),
        low_52w=format_flag(row.new_52w_low),
        signals=signals(row),
    )


def render_result(result: AnalysisResult) -> ReportView:
    view = ReportView(kind="report")
    meta = result.metadata
    if meta is not None:
        view.metadata = MetadataView(
            market=format_text(meta.market),
            timestamp=format_text(meta.timestamp),
            fallbacks=json.dumps(meta.fallbacks, indent=2, ensure_ascii=False) if meta.fallbacks is not None else None,
        )
    view.alerts = [format_text(a) for a in (result.alerts or [])]
    view.rows = [render_row(s) for s in (result.stocks or [])]
    view.disclaimer = format_text(result.disclaimer) or None
    return view


def render(state: ResultState) -> ReportView:
    if isinstance(state, Loading):
        return ReportView(kind="loading")
    if isinstance(state, Errored):
        return ReportView(kind="error", message=state.message)
    if isinstance(state, Ready):
        return render_result(state.result)
    return ReportView(kind="prompt", message=EMPTY_PROMPT)


def to_markdown(view: ReportView) -> str:
    """Plain-text rendition for terminals."""
    if view.kind != "report":
        return view.message or "Analyzing…"

    parts: List[str] = []
    if view.metadata:
        parts.append(f"**Market:** {view.metadata.market}  \n**Timestamp:** {view.metadata.timestamp}")
        if view.metadata.fallbacks:
            parts.append("Data fallbacks:\n\n```json\n" + view.metadata.fallbacks + "\n```")
    if view.alerts:
        parts.append("### Alerts\n" + "\n".join(f"- {a}" for a in view.alerts))
    if view.rows:
        # cells are already formatted; keep tabulate from re-reading them as floats
        parts.append(view.to_frame().to_markdown(index=False, disable_numparse=True))
    if view.disclaimer:
        parts.append(f"_{view.disclaimer}_")
    return "\n\n".join(parts)
