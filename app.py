import datetime as dt
import logging

import streamlit as st

from mileage_heatmap.charts import CHART_CFG, COL
from mileage_heatmap.config import configure_logging, load_settings
from mileage_heatmap.errors import ClientFetchError
from mileage_heatmap.report import build_report
from mileage_heatmap.sheet_data import load_api_records

st.set_page_config(page_title="Mileage Heatmap", layout="wide")

logger = logging.getLogger("mileage_dashboard")


def theme() -> None:
    st.markdown(
        f"""
        <style>
        @import url('https://fonts.googleapis.com/css2?family=Outfit:wght@400;600;700;800&display=swap');
        .stApp {{
            font-family: "Outfit", sans-serif; color:{COL["text"]};
            background: radial-gradient(900px 420px at 92% -6%, rgba(49,163,84,.14), transparent 58%),
                        linear-gradient(145deg,#060915,#0b1327);
        }}
        .stMarkdown p, .stMarkdown li, label {{color:{COL['text']} !important;}}
        .block-container {{padding-top:.55rem; padding-bottom:.75rem; max-width:1100px;}}
        [data-testid="stHeader"] {{background:rgba(0,0,0,0);}}
        div[data-testid="stVerticalBlockBorderWrapper"] {{background:linear-gradient(180deg,rgba(15,21,40,.88),rgba(9,13,28,.92)); border:1px solid rgba(125,150,180,.26) !important; border-radius:14px; padding:.5rem .62rem;}}
        .kpi {{border:1px solid rgba(125,150,180,.26); border-radius:14px; padding:.56rem .66rem; height:112px; display:flex; flex-direction:column; justify-content:space-between;}}
        .k1 {{background:linear-gradient(145deg,rgba(32,71,52,.56),rgba(12,27,24,.72));}}
        .k2 {{background:linear-gradient(145deg,rgba(88,62,20,.58),rgba(30,20,12,.74));}}
        .k3p {{background:linear-gradient(145deg,rgba(25,72,55,.58),rgba(12,25,20,.72));}}
        .k3n {{background:linear-gradient(145deg,rgba(84,35,43,.58),rgba(31,13,18,.72));}}
        .kh {{font-size:.9rem; font-weight:700; margin:0;}}
        .kv {{font-size:2rem; font-weight:800; margin:.16rem 0 .04rem 0; line-height:1;}}
        .ks {{font-size:.8rem; color:{COL["muted"]}; margin:0;}}
        .sec-k {{color:#7cf6bb; letter-spacing:.12em; text-transform:uppercase; font-size:.68rem; font-weight:700; margin:0 0 .12rem 0;}}
        .sec-t {{font-size:1.18rem; font-weight:700; margin:0;}}
        .sec-s {{font-size:.79rem; color:{COL["muted"]}; margin:.1rem 0 0 0;}}
        .pt {{font-size:.92rem; font-weight:700; margin:0;}}
        .pn {{font-size:.79rem; color:{COL["muted"]}; margin:.05rem 0 0 0;}}
        </style>
        """,
        unsafe_allow_html=True,
    )


def section(k: str, t: str, s: str) -> None:
    st.markdown(f"<p class='sec-k'>{k}</p><p class='sec-t'>{t}</p><p class='sec-s'>{s}</p>", unsafe_allow_html=True)


def ptitle(t: str, n: str = "") -> None:
    nhtml = f"<p class='pn'>{n}</p>" if n else ""
    st.markdown(f"<p class='pt'>{t}</p>{nhtml}", unsafe_allow_html=True)


settings = load_settings()
configure_logging(settings)
theme()

now = dt.datetime.now()
section("Running", f"Mileage {now.year}", f"Yearly goal: {settings.yearly_goal:,.0f} miles")

try:
    records = load_api_records(settings.api_url, settings.fetch_timeout)
except ClientFetchError:
    # Nothing user-facing: the charts simply stay unrendered.
    logger.exception("Error fetching %s", settings.api_url)
    st.stop()

logger.info("Received data: %s", [r.model_dump(mode="json") for r in records[:3]])
report = build_report(records, now, settings.yearly_goal)
prog = report.progress
delta = prog.total_value - prog.target_value

k = st.columns(3, gap="small")
with k[0]:
    st.markdown(
        f"<div class='kpi k1'><p class='kh'>Total Mileage</p><p class='kv'>{prog.total_value:,.2f}</p><p class='ks'>{len(records)} logged days</p></div>",
        unsafe_allow_html=True,
    )
with k[1]:
    st.markdown(
        f"<div class='kpi k2'><p class='kh'>Goal Pace</p><p class='kv'>{prog.target_value:,.2f}</p><p class='ks'>Day {prog.elapsed_days} of 365</p></div>",
        unsafe_allow_html=True,
    )
with k[2]:
    st.markdown(
        f"<div class='kpi {'k3p' if delta >= 0 else 'k3n'}'><p class='kh'>{'Ahead' if delta >= 0 else 'Behind'}</p><p class='kv'>{abs(delta):,.2f}</p><p class='ks'>miles vs pace</p></div>",
        unsafe_allow_html=True,
    )

with st.container(border=True):
    ptitle("Calendar Heatmap", "Cell colour ranks the day among this year's runs; the legend axis is in miles")
    st.plotly_chart(report.heatmap_figure(), use_container_width=True, config=CHART_CFG)

with st.container(border=True):
    st.plotly_chart(report.progress_figure(), use_container_width=True, config=CHART_CFG)
