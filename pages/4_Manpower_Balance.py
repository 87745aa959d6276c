"""
Manpower Balance

Staff-per-supervisor coverage for every known region at once.
"""

from __future__ import annotations

from pathlib import Path
import sys

import streamlit as st

st.set_page_config(
    page_title="Manpower Balance",
    page_icon="⚖️",
    layout="wide",
)

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config import config
from src.data.loader import load_roster, load_region_summary
from src.metrics.coverage import compute_fleet_coverage
from src.ui.charts import coverage_bar
from src.ui.formatting import fmt_count, format_coverage_df
from src.ui.layout import render_kpi_strip
from src.ui.state import init_state

init_state()


def main():
    st.title("⚖️ Manpower Balance")
    st.caption(f"Regions above 1 : {config.coverage_threshold} staff per supervisor are flagged over capacity.")

    with st.spinner("Loading roster..."):
        try:
            roster = load_roster()
            summary = load_region_summary()
        except Exception as e:
            st.error(f"Error loading data: {e}")
            return

    coverage = compute_fleet_coverage(roster, summary)
    if len(coverage) == 0:
        st.warning("No regions available")
        return

    render_kpi_strip({
        "Regions": fmt_count(len(coverage)),
        "Over capacity": fmt_count(int(coverage["over_capacity"].sum())),
        "Supervisors": fmt_count(int(coverage["supervisor_count"].sum())),
        "Staff": fmt_count(int(coverage["staff_total"].sum())),
    })

    st.plotly_chart(coverage_bar(coverage, threshold=config.coverage_threshold), use_container_width=True)

    st.dataframe(
        format_coverage_df(coverage).rename(columns={
            "region_name": "Region",
            "staff_total": "Staff",
            "supervisor_count": "Supervisors",
            "ratio": "Coverage",
            "expected_total": "Expected",
            "total_delta": "Delta",
            "status": "Status",
        }),
        use_container_width=True,
        hide_index=True,
    )

    if (coverage["total_delta"] != 0).any():
        st.info("Staff counts are recomputed from the roster; 'Expected' is the count supplied with the region list.")


if __name__ == "__main__":
    main()
