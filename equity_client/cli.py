from __future__ import annotations

import argparse
import sys

from .config import configure_logging, export_dir
from .services.client import AnalysisClient
from .services.export import DirectoryExportPort, ExportService
from .services.render import render, to_markdown
from .services.request_builder import FormState
from .services.session import AnalysisSession
from .services.state import Errored


def build_parser() -> argparse.ArgumentParser:
    defaults = FormState()
    parser = argparse.ArgumentParser(description="Run a daily equity analysis against the analysis service")
    parser.add_argument("--market", default=defaults.market, help="Market code, e.g. US or IN")
    parser.add_argument("--top-n", default=str(defaults.top_n), help="Number of most-traded names to screen")
    parser.add_argument("--wishlist", default=defaults.wishlist, help="Tickers, comma or newline separated")
    parser.add_argument("--discount-rate", default=str(defaults.discount_rate))
    parser.add_argument("--growth-rate", default=str(defaults.growth_rate))
    parser.add_argument("--risk-free-rate", default=str(defaults.risk_free_rate))
    parser.add_argument("--backend-url", default=None, help="Analysis service base URL (default: $BACKEND_URL)")
    parser.add_argument("--export", action="store_true", help="Also write the JSON report")
    parser.add_argument("--out-dir", default=None, help="Export directory (default: $EXPORT_DIR or ./reports)")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()

    form = FormState(
        market=args.market,
        top_n=args.top_n,
        wishlist=args.wishlist,
        discount_rate=args.discount_rate,
        growth_rate=args.growth_rate,
        risk_free_rate=args.risk_free_rate,
    )
    session = AnalysisSession(AnalysisClient(base_url=args.backend_url))
    state = session.submit(form)

    if isinstance(state, Errored):
        print(state.message, file=sys.stderr)
        return 1

    print(to_markdown(render(state)))

    if args.export:
        out_dir = args.out_dir or export_dir()
        filename = ExportService(DirectoryExportPort(out_dir)).export(state)
        print(f"Saved {out_dir}/{filename}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
