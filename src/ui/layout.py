"""
Layout components: header, navigation sidebars, KPI strip.
"""
import streamlit as st
from typing import List, Optional

from src.metrics.regions import RegionView
from src.ui.state import get_state, select_region, select_location
from src.ui.formatting import fmt_count


# =============================================================================
# HEADER
# =============================================================================

def render_header(title: str, caption: Optional[str] = None):
    """Render page header with current region selection."""
    col1, col2 = st.columns([3, 1])

    with col1:
        st.title(title)
        if caption:
            st.caption(caption)

    with col2:
        region = get_state("selected_region")
        location = get_state("selected_location")
        if region:
            st.caption(f"Region: {region}" + (f" | Location: {location}" if location else ""))


# =============================================================================
# REGION / LOCATION NAVIGATION
# =============================================================================

def render_region_nav(regions: List[str], expected_counts: dict):
    """Sidebar region list in summary order."""
    st.sidebar.markdown("### Regions")
    current = get_state("selected_region")

    for region in regions:
        label = f"{region} ({fmt_count(expected_counts.get(region))})"
        if st.sidebar.button(label, key=f"region_{region}",
                             type="primary" if region == current else "secondary",
                             use_container_width=True):
            select_region(region)
            st.rerun()


def render_location_nav(view: RegionView, all_label: str = "All locations"):
    """Sidebar location list for the selected region."""
    st.sidebar.markdown("### Locations")
    current = get_state("selected_location")

    if st.sidebar.button(f"{all_label} ({fmt_count(view.total)})", key="location_all",
                         type="primary" if current is None else "secondary",
                         use_container_width=True):
        select_location(None)
        st.rerun()

    for name, count in view.location_counts.items():
        if st.sidebar.button(f"{name} ({fmt_count(count)})", key=f"location_{name}",
                             type="primary" if name == current else "secondary",
                             use_container_width=True):
            select_location(name)
            st.rerun()


# =============================================================================
# KPI CARDS
# =============================================================================

def render_kpi_strip(metrics: dict):
    """
    Render horizontal strip of KPI cards.

    metrics: dict of label -> already formatted value
    """
    cols = st.columns(len(metrics))
    for i, (label, value) in enumerate(metrics.items()):
        with cols[i]:
            st.metric(label=label, value=value)


def section_header(title: str, description: Optional[str] = None):
    """Render section header with optional description."""
    st.subheader(title)
    if description:
        st.caption(description)


def empty_state(message: str, icon: str = "📭"):
    """Render empty state message."""
    col1, col2, col3 = st.columns([1, 2, 1])

    with col2:
        st.markdown(f"### {icon}")
        st.markdown(f"**{message}**")
