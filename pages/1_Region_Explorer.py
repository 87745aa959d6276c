"""
Region Explorer

Headcount per region and location, supervisor count, and the searchable
staff list for the current selection.
"""

from __future__ import annotations

from pathlib import Path
import sys

import streamlit as st

st.set_page_config(
    page_title="Region Explorer",
    page_icon="🗺️",
    layout="wide",
)

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config import config
from src.data.loader import load_roster, load_region_summary
from src.data.semantic import DISPLAY_COLUMNS, location_labels
from src.metrics.regions import compute_region_view, explore_region, region_names
from src.metrics.roles import supervisor_mask
from src.ui.charts import location_bar
from src.ui.formatting import fmt_count
from src.ui.layout import (
    render_header, render_region_nav, render_location_nav,
    render_kpi_strip, section_header, empty_state,
)
from src.ui.state import init_state, ensure_region_selected, get_selection, set_state, reset_state

init_state()


def main():
    render_header("🗺️ Region Explorer", "Interactive region & location hub")

    with st.spinner("Loading roster..."):
        try:
            roster = load_roster()
            summary = load_region_summary()
        except Exception as e:
            st.error(f"Error loading data: {e}")
            return

    regions = region_names(summary)
    if not regions:
        st.warning("No regions available")
        return

    if st.sidebar.button("Reset view"):
        reset_state()
        st.session_state.pop("search_input", None)

    ensure_region_selected(regions)
    expected = dict(zip(summary["name"], summary["total_count"]))
    render_region_nav(regions, expected)

    selection = get_selection()
    view = compute_region_view(roster, selection["region"])
    render_location_nav(view)

    render_kpi_strip({
        "Total staff": fmt_count(view.total),
        "Active locations": fmt_count(len(view.locations)),
        "Supervisors": fmt_count(view.supervisor_count),
    })

    st.divider()

    if view.is_empty:
        empty_state(f"No roster records for region {selection['region']}")
        return

    title = (f"Location staff list: {selection['location']}" if selection["location"]
             else f"Region staff list: {selection['region']}")
    section_header(title)

    query = st.text_input(
        "Search by name, employee number or civil ID",
        value=selection["query"],
        key="search_input",
    )
    set_state("search_term", query)

    records = explore_region(roster, selection["region"], selection["location"], query)
    st.caption(f"Records shown: {fmt_count(len(records))}")

    if len(records) == 0:
        empty_state("No records match the current search or filter.")
    else:
        table = records[[c for c in DISPLAY_COLUMNS if c in records.columns]].copy()
        table["location"] = location_labels(records)
        table["supervisor"] = supervisor_mask(records)
        st.dataframe(table, use_container_width=True, hide_index=True)

    with st.expander("Headcount by location", expanded=False):
        st.plotly_chart(location_bar(view.locations), use_container_width=True)
        st.caption(f"Empty locations are grouped as '{config.unspecified_location}'.")


if __name__ == "__main__":
    main()
