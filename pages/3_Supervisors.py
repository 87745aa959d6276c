"""
Supervisor Directory

Every roster record whose position reads as supervisory.
"""

from __future__ import annotations

from pathlib import Path
import sys

import streamlit as st

st.set_page_config(
    page_title="Supervisor Directory",
    page_icon="🧑‍💼",
    layout="wide",
)

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.data.loader import load_roster
from src.data.semantic import display_names
from src.metrics.roles import list_supervisors
from src.metrics.search import search_records
from src.ui.formatting import fmt_count
from src.ui.state import init_state

init_state()


def main():
    st.title("🧑‍💼 Supervisor Directory")
    st.caption("Classification is a keyword heuristic on the position title, not an HR grade.")

    with st.spinner("Loading roster..."):
        try:
            roster = load_roster()
        except Exception as e:
            st.error(f"Error loading data: {e}")
            return

    supervisors = list_supervisors(roster)

    query = st.text_input("Search by name, employee number or civil ID", key="supervisor_search")
    supervisors = search_records(supervisors, query)
    supervisors = supervisors.assign(display_name=display_names(supervisors))

    st.caption(f"Supervisors shown: {fmt_count(len(supervisors))}")

    columns = ["employee_number", "display_name", "name_latin", "position", "source_region", "location_label"]
    st.dataframe(
        supervisors[[c for c in columns if c in supervisors.columns]].rename(columns={
            "employee_number": "EMP#",
            "display_name": "Name",
            "name_latin": "Name (Latin)",
            "position": "Position",
            "source_region": "Region",
            "location_label": "Location",
        }),
        use_container_width=True,
        hide_index=True,
    )


if __name__ == "__main__":
    main()
