import json
import logging
import os
import zipfile

import pandas as pd
import streamlit as st
from openai import OpenAIError

from ask_context import build_ask_context
from config import get_settings
from kpi import build_dashboard_data
from kpi_definitions import get_kpi_definitions
from llm_client import stream_answer
from sample_data import default_dashboard_data
from workbook import load_sources

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
UPLOAD_TYPES = ["xlsx", "xls", "csv"]
ANSWER_FAILED = "An error occurred while processing the request."

logger = logging.getLogger(__name__)



def decode_uploads(files: dict) -> dict | None:
    try:
        return load_sources(files)
    except (ValueError, OSError, ImportError, zipfile.BadZipFile) as e:
        logger.warning("Upload decoding failed: %s", e)
        st.error("Unable to parse the uploaded files. Please verify the Excel format.")
        return None


def write_answer(chunks) -> tuple[str | None, str | None]:
    """Stream the answer onto the page; a failure part-way reports an error."""
    try:
        return st.write_stream(chunks), None
    except OpenAIError as e:
        logger.warning("Answer stream failed: %s", e)
        st.error(ANSWER_FAILED)
        return None, ANSWER_FAILED


def configure_logging() -> None:
    settings = get_settings(BASE_DIR)
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def init_session_state():
    defaults = {
        "dashboard": default_dashboard_data(),
        "qa_entries": [],
    }
    for k, v in defaults.items():
        if k not in st.session_state:
            st.session_state[k] = v


def _table(rows: list[dict]) -> None:
    if rows:
        st.dataframe(pd.DataFrame(rows), width="stretch")
    else:
        st.caption("No rows.")


def render_dashboard(dashboard) -> None:
    data = dashboard.to_dict()
    kpis = data["kpis"]
    cols = st.columns(4)
    cols[0].metric("Total revenue", f"{kpis['totalRevenue']:,.0f}")
    cols[1].metric("Total costs", f"{kpis['totalCosts']:,.0f}")
    cols[2].metric("Profit", f"{kpis['profit']:,.0f}")
    cols[3].metric("Profit margin", f"{kpis['profitMargin']:.1f}%")
    cols = st.columns(4)
    cols[0].metric("Fleet size", kpis["totalFleetSize"])
    cols[1].metric("Km traveled", f"{kpis['totalKmTraveled']:,.0f}")
    cols[2].metric("Fuel consumed (L)", f"{kpis['totalFuelConsumed']:,.0f}")
    cols[3].metric("Km per liter", f"{kpis['avgFuelEfficiency']:.2f}")

    tab_month, tab_type, tab_trucks, tab_maint = st.tabs(
        ["Revenue vs costs", "By truck type", "Top trucks", "Maintenance by year"]
    )
    with tab_month:
        _table(data["revenueVsCosts"])
        _table(data["fuelTrend"])
    with tab_type:
        _table(data["costByTruckType"])
        _table(data["fuelEfficiency"])
    with tab_trucks:
        _table(data["topTrucks"])
    with tab_maint:
        columns = ["year", "total"] + data["maintenanceTruckTypes"]
        rows = [{c: row.get(c, 0) for c in columns} for row in data["maintenanceByYear"]]
        _table(rows)

    st.download_button(
        "Download dashboard JSON",
        data=json.dumps(data, indent=2),
        file_name="fleet_dashboard.json",
        mime="application/json",
    )


def main():
    st.set_page_config(page_title="Fleet Analytics", layout="wide", initial_sidebar_state="expanded")
    configure_logging()
    init_session_state()

    with st.sidebar:
        st.markdown("### Upload")
        files = {
            "freight": st.file_uploader("Freight", type=UPLOAD_TYPES, key="freight_file"),
            "cost": st.file_uploader("Cost", type=UPLOAD_TYPES, key="cost_file"),
            "vehicles": st.file_uploader("Vehicles (optional)", type=UPLOAD_TYPES, key="vehicles_file"),
            "drivers": st.file_uploader("Drivers (optional)", type=UPLOAD_TYPES, key="drivers_file"),
        }
        if st.button("Generate dashboard", type="primary"):
            if not files["cost"] or not files["freight"]:
                st.error("Please upload the freight and cost files before generating the dashboard.")
            else:
                sources = decode_uploads(files)
                if sources is not None:
                    st.session_state.dashboard = build_dashboard_data(
                        sources["cost"], sources["vehicles"], sources["freight"]
                    )
                    st.session_state.qa_entries = []
                    st.success("Dashboard updated from your Excel files.")

        with st.expander("KPI definitions", expanded=False):
            for name, defn in get_kpi_definitions().items():
                st.markdown(f"**{name}**")
                st.caption(defn.get("formula", ""))

    st.title("Fleet Analytics")
    render_dashboard(st.session_state.dashboard)

    st.divider()
    st.subheader("Ask the data")
    question = st.text_input("Question", placeholder="Which driver earned the most revenue in 2018?")
    if st.button("Ask"):
        if not files["cost"]:
            st.error("Please upload the cost file before asking questions.")
        else:
            sources = decode_uploads(files)
            if sources is not None:
                context = build_ask_context(
                    sources["cost"], sources["vehicles"], sources["freight"], sources["drivers"]
                )
                chunks, err = stream_answer(question, context, env_dir=BASE_DIR)
                if err:
                    st.warning(err)
                else:
                    st.markdown(f"**{question.strip()}**")
                    answer, err = write_answer(chunks)
                    st.session_state.qa_entries.insert(
                        0, {"question": question.strip(), "answer": err or answer, "error": err is not None}
                    )

    for entry in st.session_state.qa_entries:
        with st.expander(entry["question"], expanded=False):
            if entry.get("error"):
                st.error(entry["answer"])
            else:
                st.markdown(entry["answer"])


if __name__ == "__main__":
    main()
