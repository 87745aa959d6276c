"""
Session state management for Streamlit app.

Pages own the selection; the engine only ever receives it as arguments.
"""
import streamlit as st
from typing import Optional, Dict, Any, List


# =============================================================================
# DEFAULT VALUES
# =============================================================================

DEFAULTS = {
    # Explorer navigation
    "selected_region": None,
    "selected_location": None,  # None = all locations
    "search_term": "",
    "skip_invalid_ids": False,
}


# =============================================================================
# STATE HELPERS
# =============================================================================

def init_state():
    """Initialize all session state keys with defaults."""
    for key, default in DEFAULTS.items():
        if key not in st.session_state:
            st.session_state[key] = default


def get_state(key: str) -> Any:
    """Get state value with default fallback."""
    init_state()
    return st.session_state.get(key, DEFAULTS.get(key))


def set_state(key: str, value: Any):
    """Set state value."""
    st.session_state[key] = value


def reset_state():
    """Reset all state to defaults."""
    for key, default in DEFAULTS.items():
        st.session_state[key] = default


# =============================================================================
# REGION / LOCATION SELECTION
# =============================================================================

def select_region(region: Optional[str]):
    """Select a region; the location selection does not carry over."""
    set_state("selected_region", region)
    set_state("selected_location", None)


def select_location(location: Optional[str]):
    """Select a location within the current region (None = all)."""
    set_state("selected_location", location)


def ensure_region_selected(regions: List[str]) -> Optional[str]:
    """Default to the first known region when nothing valid is selected."""
    current = get_state("selected_region")
    if current not in regions:
        select_region(regions[0] if regions else None)
    return get_state("selected_region")


def get_selection() -> Dict[str, Any]:
    """Current explorer selection."""
    return {
        "region": get_state("selected_region"),
        "location": get_state("selected_location"),
        "query": get_state("search_term"),
    }
