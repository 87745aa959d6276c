"""
Consistent number and display formatting.
"""
import pandas as pd
from typing import Union

from src.config import FORMAT_COUNT, FORMAT_RATIO


# =============================================================================
# NUMBER FORMATTERS
# =============================================================================

def fmt_count(value: Union[float, int, None]) -> str:
    """Format count: 1,234"""
    if value is None or pd.isna(value):
        return "—"
    return FORMAT_COUNT.format(int(value))


def fmt_ratio(value: Union[float, int, None]) -> str:
    """Format coverage ratio: 1 : 20"""
    if value is None or pd.isna(value):
        return "—"
    return FORMAT_RATIO.format(int(value))


def fmt_delta(value: Union[float, int, None]) -> str:
    """Format count delta with +/- sign."""
    if value is None or pd.isna(value):
        return "—"
    sign = "+" if value > 0 else ""
    return f"{sign}{int(value):,}"


# =============================================================================
# STATUS LABELS
# =============================================================================

def capacity_label(over_capacity: bool) -> str:
    return "Over Capacity" if over_capacity else "Balanced Staff"


def status_dot(status: str) -> str:
    """
    Return colored status dot HTML.

    Args:
        status: 'good', 'warning', 'bad', or custom status
    """
    colors = {
        "good": "#28a745",
        "match": "#28a745",
        "warning": "#ffc107",
        "mismatch": "#ffc107",
        "bad": "#dc3545",
        "missing_in_roster": "#dc3545",
        "unlisted": "#dc3545",
        "neutral": "#6c757d",
    }

    color = colors.get(status.lower(), colors["neutral"])
    return f'<span style="color: {color}; font-size: 1.2em;">●</span>'


# =============================================================================
# DATAFRAME FORMATTERS
# =============================================================================

def format_coverage_df(df: pd.DataFrame) -> pd.DataFrame:
    """Display copy of the fleet coverage table."""
    out = df.copy()
    if "ratio" in out.columns:
        out["ratio"] = out["ratio"].map(fmt_ratio)
    if "over_capacity" in out.columns:
        out["status"] = out["over_capacity"].map(capacity_label)
        out = out.drop(columns=["over_capacity"])
    if "total_delta" in out.columns:
        out["total_delta"] = out["total_delta"].map(fmt_delta)
    for col in ["staff_total", "supervisor_count", "expected_total"]:
        if col in out.columns:
            out[col] = out[col].map(fmt_count)
    return out
