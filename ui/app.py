# ui/app.py
import io

import streamlit as st

from equity_client.config import configure_logging
from equity_client.services.client import AnalysisClient
from equity_client.services.export import ExportService
from equity_client.services.render import render
from equity_client.services.request_builder import MARKETS, FormState
from equity_client.services.session import AnalysisSession
from equity_client.services.state import can_submit

configure_logging()

st.set_page_config(page_title="Daily Equity Analyzer", layout="wide")

# one session per browser tab
if "analysis" not in st.session_state:
    st.session_state.analysis = AnalysisSession(AnalysisClient())
    st.session_state.run_requested = False

session: AnalysisSession = st.session_state.analysis
client = session.client

# --- Header ---
head_left, head_right = st.columns([4, 1])
with head_left:
    st.title("📊 Daily Equity Analyzer")
with head_right:
    st.markdown(f"[Check backend]({client.health_url})")


class StreamlitDownloadPort:
    """Download button as the export target; the buffer lives for one render."""

    def __init__(self, slot):
        self.slot = slot

    def create_downloadable(self, data: bytes, filename: str):
        return filename, io.BytesIO(data)

    def trigger(self, handle):
        filename, buf = handle
        self.slot.download_button(
            "Download JSON",
            data=buf.getvalue(),
            file_name=filename,
            mime="application/json",
        )

    def release(self, handle):
        handle[1].close()


def _request_run():
    st.session_state.run_requested = True


def _form_state() -> FormState:
    s = st.session_state
    return FormState(
        market=s.market,
        top_n=s.top_n,
        wishlist=s.wishlist,
        discount_rate=s.discount_rate,
        growth_rate=s.growth_rate,
        risk_free_rate=s.risk_free_rate,
    )


def draw_report(slot, state):
    view = render(state)
    with slot.container():
        if view.kind == "prompt":
            st.caption(view.message)
            return
        if view.kind == "loading":
            for width in ("▇" * 12, "▇" * 24, "▇" * 18):
                st.markdown(f"<span style='color:#e2e8f0'>{width}</span>", unsafe_allow_html=True)
            return
        if view.kind == "error":
            st.error(view.message)
            return

        if view.metadata:
            st.markdown(f"**Market:** {view.metadata.market}  \n**Timestamp:** {view.metadata.timestamp}")
            if view.metadata.fallbacks:
                with st.expander("Data fallbacks"):
                    st.code(view.metadata.fallbacks, language="json")

        if view.alerts:
            st.markdown("#### Alerts")
            st.warning("\n".join(f"- {a}" for a in view.alerts))

        if view.rows:
            st.dataframe(view.to_frame(), hide_index=True, use_container_width=True)

        if view.disclaimer:
            st.divider()
            st.caption(view.disclaimer)


defaults = FormState()
busy = st.session_state.run_requested or not can_submit(session.state)

col_form, col_results = st.columns([1, 2])

# --- Form ---
with col_form:
    st.subheader("⚙️ Run analysis")
    with st.form("run_analysis"):
        st.selectbox(
            "Market",
            options=list(MARKETS),
            format_func=MARKETS.get,
            index=list(MARKETS).index(defaults.market),
            key="market",
        )
        st.number_input("Top N most-traded", min_value=1, max_value=200, value=defaults.top_n, step=1, key="top_n")
        st.text_area(
            "Wishlist tickers (comma or newline separated)",
            value=defaults.wishlist,
            height=90,
            key="wishlist",
            help="Examples: AAPL, MSFT, BRK-B • For India, use .NS suffix (e.g., RELIANCE.NS)",
        )
        r1, r2, r3 = st.columns(3)
        r1.number_input("Discount rate", value=defaults.discount_rate, step=0.005, format="%.3f", key="discount_rate")
        r2.number_input("Growth rate", value=defaults.growth_rate, step=0.005, format="%.3f", key="growth_rate")
        r3.number_input("Risk-free rate", value=defaults.risk_free_rate, step=0.005, format="%.3f", key="risk_free_rate")

        st.form_submit_button(
            "Analyzing…" if busy else "Run Analysis",
            disabled=busy,
            on_click=_request_run,
            use_container_width=True,
        )
    st.caption(f"Backend: `{client.base_url}`")

# --- Results ---
with col_results:
    title_col, export_col = st.columns([3, 1])
    title_col.subheader("📈 Results")
    export_slot = export_col.empty()
    report_slot = st.empty()

if st.session_state.run_requested:
    unsubscribe = session.subscribe(lambda state: draw_report(report_slot, state))
    try:
        with st.spinner("Calling API …"):
            session.submit(_form_state())
    finally:
        unsubscribe()
        st.session_state.run_requested = False
    # redraw with the submit button enabled again
    st.rerun()

draw_report(report_slot, session.state)

if ExportService(StreamlitDownloadPort(export_slot)).export(session.state) is None:
    export_slot.download_button("Download JSON", data=b"", file_name="equity-analysis.json", disabled=True)
