"""
Data Quality & QA Page

Malformed records and region summary reconciliation.
"""
import streamlit as st
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.ui.state import init_state
from src.ui.layout import section_header
from src.ui.formatting import fmt_count, status_dot
from src.data.loader import load_roster, load_region_summary
from src.data.schema import validate_schema, display_validation_result, get_column_info
from src.data.quality import find_record_issues, reconcile_region_summary


st.set_page_config(page_title="Data Quality & QA", page_icon="✅", layout="wide")

init_state()


def main():
    st.title("✅ Data Quality & QA")

    with st.spinner("Loading roster..."):
        try:
            roster = load_roster()
            summary = load_region_summary()
        except Exception as e:
            st.error(f"Error loading data: {e}")
            return

    section_header("Schema")
    display_validation_result(validate_schema(roster, "roster", strict=False), "roster")
    display_validation_result(validate_schema(summary, "region_summary", strict=False), "region_summary")
    with st.expander("Column info"):
        st.dataframe(get_column_info(roster), use_container_width=True, hide_index=True)

    st.divider()

    section_header("Malformed records", "Counted in totals and left out of supervisor counts.")
    issues = find_record_issues(roster)
    if len(issues) == 0:
        st.success("No malformed records.")
    else:
        counts = issues["issue"].value_counts()
        cols = st.columns(len(counts))
        for i, (issue, count) in enumerate(counts.items()):
            with cols[i]:
                st.metric(issue.replace("_", " ").title(), fmt_count(count))
        st.dataframe(issues, use_container_width=True, hide_index=True)

    st.divider()

    section_header("Region summary reconciliation", "Supplied region counts vs counts recomputed from the roster.")
    recon = reconcile_region_summary(roster, summary)
    for record in recon.to_dict("records"):
        st.markdown(
            f"{status_dot(record['status'])} **{record['region_name']}**: "
            f"expected {fmt_count(record['expected_total'])}, "
            f"found {fmt_count(record['actual_total'])} ({record['status']})",
            unsafe_allow_html=True,
        )


if __name__ == "__main__":
    main()
