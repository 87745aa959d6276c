"""
Role classification metrics pack.

Single source of truth for: supervisor detection, supervisor directory.

Classification is a heuristic substring match on the free-text position,
not an HR grade. Any configured marker anywhere in the title counts, so
recall is favoured over precision.
"""
import pandas as pd
from typing import Dict, Iterable, List, Optional, Union

from src.config import config, SUPERVISOR_MARKERS
from src.data.identity import normalize_role
from src.data.semantic import location_labels

Markers = Union[Dict[str, Iterable[str]], Iterable[str]]


def active_markers(markers: Optional[Markers] = None) -> List[str]:
    """
    Resolve the marker list used for classification.

    Args:
        markers: None for the configured locales, a {locale: [markers]}
            mapping, or a flat iterable of markers
    """
    if markers is None:
        markers = {loc: SUPERVISOR_MARKERS.get(loc, []) for loc in config.marker_locales}
    if isinstance(markers, dict):
        flat = [m for values in markers.values() for m in values]
    else:
        flat = list(markers)
    return list(dict.fromkeys(normalize_role(m) for m in flat if normalize_role(m)))


def _matches(text: str, marks: List[str]) -> bool:
    return bool(text) and any(m in text for m in marks)


def is_supervisor(position, markers: Optional[Markers] = None) -> bool:
    """True if the position text contains any supervisory marker."""
    return _matches(normalize_role(position), active_markers(markers))


def supervisor_mask(df: pd.DataFrame, markers: Optional[Markers] = None) -> pd.Series:
    """
    Boolean mask of supervisory rows.
    Usage: supervisors = df[supervisor_mask(df)]
    """
    if "position" not in df.columns:
        return pd.Series(False, index=df.index, dtype=bool)

    marks = active_markers(markers)
    return df["position"].map(lambda p: _matches(normalize_role(p), marks)).astype(bool)


def list_supervisors(roster: pd.DataFrame, markers: Optional[Markers] = None) -> pd.DataFrame:
    """
    Roster-wide supervisor directory in roster order.

    Adds a location_label column with empty locations shown as the
    unspecified sentinel.
    """
    supervisors = roster[supervisor_mask(roster, markers)].copy()
    supervisors["location_label"] = location_labels(supervisors)
    return supervisors


def supervisor_counts_by_region(roster: pd.DataFrame,
                                markers: Optional[Markers] = None,
                                exclude: Optional[pd.Series] = None) -> pd.Series:
    """
    Supervisor count per source_region, in first-seen region order.

    Args:
        exclude: optional boolean mask of rows to leave out (e.g. malformed)
    """
    if "source_region" not in roster.columns:
        return pd.Series(dtype=int)

    mask = supervisor_mask(roster, markers)
    if exclude is not None:
        mask = mask & ~exclude.reindex(roster.index).fillna(False).astype(bool)

    return mask.groupby(roster["source_region"], sort=False).sum().astype(int)
