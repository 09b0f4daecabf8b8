import streamlit as st
import locale
import logging
import math
import sys

from config import configure_logging, get_settings
from download_data import Data, DatasetUnavailableError
from filters import ALL, FilterSpec, distinct_values, option_list
from insights import format_metric, format_number
from pipeline import recompute
from plot_setup import build_scatter_figure, table_frame
from records import to_csv_text

logger = logging.getLogger(__name__)


####### CACHED FUNCTIONS ######
@st.cache_data(show_spinner=False)
def load_data(path, delimiter):
    records = Data(path, delimiter=delimiter).read()
    sectors = option_list(distinct_values(records, "sector"))
    regions = option_list(distinct_values(records, "region"))
    return records, sectors, regions


def inject_global_styles():
    st.markdown(
        """
        <style>
            :root {
                --brand-primary: #533fd7;
                --text-strong: #1f2333;
                --text-muted: #4f5567;
                --card-bg: #ffffff;
                --card-border: rgba(105, 78, 214, 0.12);
                --shadow-1: 0 6px 20px rgba(15, 31, 64, 0.06);
            }
            .block-container { padding-top: 1.25rem; }

            .app-hero h1 {
                font-family: "Inter", "Segoe UI", system-ui, -apple-system, sans-serif;
                font-size: 2.0rem; font-weight: 700; color: var(--text-strong); margin: 0;
            }
            .app-hero p { font-size: 1rem; color: var(--text-muted); margin: 0; }

            .metric-card {
                background: var(--card-bg); padding: 1rem 1.15rem; border-radius: 14px;
                border: 1px solid var(--card-border); box-shadow: var(--shadow-1);
            }
            .metric-card h4 {
                font-size: 0.82rem; font-weight: 600; letter-spacing: .04em; text-transform: uppercase;
                color: #5a5f73; margin-bottom: .3rem;
            }
            .metric-card .metric-value { font-size: 1.7rem; font-weight: 700; color: var(--text-strong); }

            .stButton > button {
                background: var(--brand-primary); color: #fff; font-weight: 600;
                border-radius: 10px; border: none; padding: .5rem .9rem; box-shadow: var(--shadow-1);
            }
        </style>
        """,
        unsafe_allow_html=True,
    )


def inject_dark_theme():
    st.markdown(
        """
        <style>
            :root {
                --brand-primary: #a89cff;
                --text-strong: #e9eaf5;
                --text-muted: #b5b9d3;
                --card-bg: #151a2c;
                --card-border: rgba(168, 156, 255, 0.15);
            }
            .stButton > button { box-shadow: none; }
        </style>
        """,
        unsafe_allow_html=True,
    )


def render_metrics(summary):
    cards = [
        ("Companies in view", format_metric(summary["company_count"], precision=0)),
        ("Average ESG score", format_metric(summary["avg_esg"], precision=1)),
        ("Total controversies", format_metric(summary["total_controversies"], precision=0)),
        ("ESG / controversy r", format_number(summary["correlation"])),
    ]
    for col, (title, value) in zip(st.columns(len(cards)), cards):
        with col:
            st.markdown(
                f"""
                <div class="metric-card">
                    <h4>{title}</h4>
                    <div class="metric-value">{value}</div>
                </div>
                """,
                unsafe_allow_html=True,
            )


def control_defaults(defaults):
    max_cont = defaults.max_controversies
    return {
        "sector": defaults.sector,
        "region": defaults.region,
        "min_esg": defaults.min_esg,
        # None leaves the upper bound open
        "max_controversies": None if math.isinf(max_cont) else float(max_cont),
    }


def reset_controls(defaults):
    for key, value in control_defaults(defaults).items():
        st.session_state[key] = value


def current_spec():
    min_esg = st.session_state.get("min_esg")
    max_cont = st.session_state.get("max_controversies")
    return FilterSpec(
        sector=st.session_state.get("sector", ALL),
        region=st.session_state.get("region", ALL),
        min_esg=0.0 if min_esg is None else float(min_esg),
        max_controversies=math.inf if max_cont is None else float(max_cont),
    )


def main(data_path):
    settings = get_settings()

    ###### SET UP PAGE ######
    st.set_page_config(page_title="ESG Explorer", layout="wide",
                       initial_sidebar_state="expanded")
    with st.sidebar:
        st.markdown("**Appearance**")
        dark_mode = st.toggle("Dark mode", value=False, help="Switch between light and dark themes")
    inject_global_styles()
    if dark_mode:
        inject_dark_theme()

    st.markdown(
        """
        <div class="app-hero">
            <h1>ESG vs Controversies Explorer</h1>
            <p>Filter the universe by sector, region, ESG floor and controversy ceiling.</p>
        </div>
        """,
        unsafe_allow_html=True,
    )

    ###### LOAD DATA ######
    with st.spinner(text="Fetching Data..."):
        try:
            records, sectors, regions = load_data(data_path, settings.delimiter)
        except DatasetUnavailableError as exc:
            logger.error("%s", exc)
            st.error(str(exc))
            st.stop()

    defaults = FilterSpec.defaults(records)
    for key, value in control_defaults(defaults).items():
        st.session_state.setdefault(key, value)

    ###### SIDEBAR FILTERS ######
    with st.sidebar:
        st.markdown("### Filters")
        st.selectbox("Sector", sectors, key="sector",
                     format_func=lambda v: "All sectors" if v == ALL else v)
        st.selectbox("Region", regions, key="region",
                     format_func=lambda v: "All regions" if v == ALL else v)
        st.number_input("Minimum ESG score", step=1.0, key="min_esg",
                        help="Companies without an ESG score never pass this floor.")
        st.number_input("Maximum controversies", min_value=0.0, step=1.0,
                        key="max_controversies",
                        help="Leave empty for no upper bound.")
        st.button("Reset filters", on_click=reset_controls, args=(defaults,))

    ###### RECOMPUTE ######
    snapshot = recompute(records, current_spec(), digits=settings.correlation_digits)

    render_metrics(snapshot.summary)

    chart_col, insight_col = st.columns((3, 2))
    with chart_col:
        st.markdown("### ESG score vs controversies")
        st.plotly_chart(build_scatter_figure(snapshot.filtered, dark=dark_mode),
                        use_container_width=True,
                        config={"responsive": True, "displayModeBar": False})
    with insight_col:
        st.markdown("### Insights")
        for sentence in snapshot.insights:
            st.markdown(f"- {sentence}")

    st.markdown("### Companies")
    frame = table_frame(snapshot.filtered)
    if frame.empty:
        st.info("No companies match the selected filters.")
    st.dataframe(frame, use_container_width=True, hide_index=True)
    st.download_button(
        "Download filtered sample (CSV)",
        data=to_csv_text(snapshot.filtered, delimiter=settings.delimiter),
        file_name="companies_filtered.csv",
        mime="text/csv",
        disabled=snapshot.is_empty,
    )


if __name__ == "__main__":
    settings = get_settings()
    configure_logging(settings)
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        logger.warning("No collation locale available, sorting options by code point")

    args = sys.argv
    data_path = args[1] if len(args) > 1 else settings.data_path
    main(data_path)
