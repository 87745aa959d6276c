"""
Semantic layer: canonical roster hierarchy and shared labelling helpers.

CRITICAL: location and display-name fallbacks must come from these helpers
so that grouping, filtering and display agree on the sentinel values.
"""
import pandas as pd
from typing import Optional

from src.config import config
from src.data.identity import is_missing


# =============================================================================
# CANONICAL HIERARCHY
# =============================================================================
# Fleet → source_region → location → employee

DISPLAY_COLUMNS = [
    "civil_id",
    "name_local",
    "name_latin",
    "employee_number",
    "location",
    "position",
    "company",
]


# =============================================================================
# LOCATION SENTINEL
# =============================================================================

def resolve_location(value, sentinel: Optional[str] = None) -> str:
    """Location name, or the unspecified-location sentinel when empty."""
    if sentinel is None:
        sentinel = config.unspecified_location
    if is_missing(value):
        return sentinel
    return value if isinstance(value, str) else str(value)


def location_labels(df: pd.DataFrame, sentinel: Optional[str] = None) -> pd.Series:
    """
    Per-row location label with empty locations mapped to the sentinel.
    Usage: df.groupby(location_labels(df), sort=False)
    """
    if sentinel is None:
        sentinel = config.unspecified_location
    if "location" not in df.columns:
        return pd.Series(sentinel, index=df.index, dtype=object)
    return df["location"].map(lambda v: resolve_location(v, sentinel)).astype(object)


# =============================================================================
# DISPLAY NAMES
# =============================================================================

def display_name(record, fallback: Optional[str] = None) -> str:
    """Local name, else Latin name, else the configured fallback."""
    if fallback is None:
        fallback = config.unknown_name
    for col in ("name_local", "name_latin"):
        value = record.get(col) if hasattr(record, "get") else None
        if not is_missing(value):
            return str(value)
    return fallback


def display_names(df: pd.DataFrame, fallback: Optional[str] = None) -> pd.Series:
    """Vectorised display_name over a roster frame."""
    if len(df) == 0:
        return pd.Series([], index=df.index, dtype=object)
    return df.apply(lambda row: display_name(row, fallback), axis=1).astype(object)
