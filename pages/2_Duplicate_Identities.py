"""
Duplicate Identities

Civil IDs that appear under more than one region.
"""

from __future__ import annotations

from pathlib import Path
import sys

import streamlit as st

st.set_page_config(
    page_title="Duplicate Identities",
    page_icon="🚨",
    layout="wide",
)

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.data.identity import UnresolvableIdentityError
from src.data.loader import load_roster
from src.metrics.duplicates import find_duplicate_identities, duplicates_to_frame
from src.ui.formatting import fmt_count
from src.ui.layout import section_header
from src.ui.state import init_state, get_state, set_state

init_state()


def main():
    st.title("🚨 Identity Conflicts")
    st.caption("Duplicate civil ID monitoring across regions")

    with st.spinner("Loading roster..."):
        try:
            roster = load_roster()
        except Exception as e:
            st.error(f"Error loading data: {e}")
            return

    skip_invalid = st.sidebar.checkbox(
        "Skip unreadable civil IDs",
        value=get_state("skip_invalid_ids"),
        help="Leave out records whose civil ID cannot be compared safely instead of stopping.",
    )
    set_state("skip_invalid_ids", skip_invalid)

    try:
        duplicates = find_duplicate_identities(roster, on_invalid="skip" if skip_invalid else "raise")
    except UnresolvableIdentityError as e:
        st.error(f"Civil ID data-quality error: {e}")
        st.info("Fix the source sheet, or enable 'Skip unreadable civil IDs' and review the Data Quality page.")
        return

    if not duplicates:
        st.success("No duplicate civil IDs across regions. ID integrity check passed.")
        return

    section_header(
        f"{fmt_count(len(duplicates))} conflicting identities",
        "Each ID below appears under every listed region, in first-seen order.",
    )

    for dup in duplicates:
        with st.container(border=True):
            col1, col2 = st.columns([1, 2])
            with col1:
                st.markdown(f"**ID# {dup.identity_key}**")
                st.caption(dup.display_name)
            with col2:
                st.markdown(" ".join(f"`{region}`" for region in dup.regions))

    frame = duplicates_to_frame(duplicates)
    st.download_button(
        "Download conflicts (CSV)",
        frame.to_csv(index=False).encode("utf-8-sig"),
        file_name="duplicate_identities.csv",
        mime="text/csv",
    )


if __name__ == "__main__":
    main()
