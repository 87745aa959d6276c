"""
Region and location aggregation.

Single source of truth for: region filtering, per-location headcounts,
region totals and supervisor counts used by the explorer and balance views.
"""
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

import pandas as pd

from src.data.quality import malformed_mask
from src.data.semantic import location_labels
from src.metrics.roles import Markers, supervisor_mask
from src.metrics.search import search_records

logger = logging.getLogger(__name__)


LOCATION_COLUMNS = ["name", "count"]


@dataclass
class RegionView:
    """Aggregates for one selected region."""
    region: str
    employees: pd.DataFrame
    locations: pd.DataFrame
    total: int = 0
    supervisor_count: int = 0

    @property
    def location_counts(self) -> Dict[str, int]:
        """Location name -> count, in first-seen order."""
        return dict(zip(self.locations["name"], self.locations["count"]))

    @property
    def is_empty(self) -> bool:
        return self.total == 0


def region_names(region_summary: pd.DataFrame) -> List[str]:
    """Navigation order of regions, taken from the supplied summary."""
    if "name" not in region_summary.columns:
        return []
    return [name for name in region_summary["name"].tolist() if name is not None]


def filter_region(roster: pd.DataFrame, region: Optional[str]) -> pd.DataFrame:
    """Records whose source_region exactly equals region."""
    if region is None or "source_region" not in roster.columns:
        return roster.iloc[0:0].copy()
    return roster[roster["source_region"] == region].copy()


def filter_location(records: pd.DataFrame,
                    location: Optional[str],
                    sentinel: Optional[str] = None) -> pd.DataFrame:
    """
    Narrow already region-filtered records to one location.

    None means all locations. Records with an empty location match the
    unspecified sentinel, never a literal empty string.
    """
    if location is None:
        return records
    return records[location_labels(records, sentinel) == location].copy()


def compute_location_counts(records: pd.DataFrame, sentinel: Optional[str] = None) -> pd.DataFrame:
    """
    Count records per location label.

    Returns DataFrame with name, count in order of first appearance.
    """
    if len(records) == 0:
        return pd.DataFrame(columns=LOCATION_COLUMNS).astype({"count": int})

    labels = location_labels(records, sentinel)
    counts = labels.groupby(labels, sort=False).size()

    return pd.DataFrame({
        "name": list(counts.index),
        "count": [int(c) for c in counts.values],
    }, columns=LOCATION_COLUMNS)


def count_supervisors(records: pd.DataFrame, markers: Optional[Markers] = None) -> int:
    """Supervisors among records, leaving out malformed rows."""
    if len(records) == 0:
        return 0
    mask = supervisor_mask(records, markers) & ~malformed_mask(records)
    return int(mask.sum())


def compute_region_view(roster: pd.DataFrame,
                        region: Optional[str],
                        markers: Optional[Markers] = None,
                        sentinel: Optional[str] = None) -> RegionView:
    """
    Aggregate one region.

    An unknown region yields an empty view rather than an error.
    """
    employees = filter_region(roster, region)
    locations = compute_location_counts(employees, sentinel)
    view = RegionView(
        region=region,
        employees=employees,
        locations=locations,
        total=len(employees),
        supervisor_count=count_supervisors(employees, markers),
    )

    logger.debug(
        "Region %r: %d records, %d locations, %d supervisors",
        region, view.total, len(locations), view.supervisor_count,
    )
    return view


def explore_region(roster: pd.DataFrame,
                   region: Optional[str],
                   location: Optional[str] = None,
                   query: str = "",
                   sentinel: Optional[str] = None) -> pd.DataFrame:
    """
    Records shown in the explorer table.

    Region filter, then location filter, then search; the search never
    widens the region/location selection.
    """
    records = filter_region(roster, region)
    records = filter_location(records, location, sentinel)
    return search_records(records, query)
