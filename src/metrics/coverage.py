"""
Supervision coverage metrics pack.

Single source of truth for: staff-per-supervisor ratio, capacity flag,
fleet-wide balance table.
"""
import logging
import math
from dataclasses import dataclass
from typing import Optional

import pandas as pd

from src.config import config
from src.data.identity import is_missing
from src.data.quality import malformed_mask, region_totals
from src.metrics.roles import Markers, supervisor_counts_by_region

logger = logging.getLogger(__name__)


COVERAGE_COLUMNS = [
    "region_name",
    "staff_total",
    "supervisor_count",
    "ratio",
    "over_capacity",
    "expected_total",
    "total_delta",
]


@dataclass
class CoverageRecord:
    """Coverage for one region."""
    region_name: Optional[str]
    staff_total: int
    supervisor_count: int
    ratio: int
    over_capacity: bool


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def compute_coverage_ratio(total: int,
                           supervisor_count: int,
                           threshold: Optional[int] = None,
                           region_name: Optional[str] = None) -> CoverageRecord:
    """
    Staff per supervisor.

    ratio = round(total / supervisor_count) when there are supervisors,
    otherwise the whole headcount (no supervision at all). over_capacity is
    ratio > threshold.
    """
    if threshold is None:
        threshold = config.coverage_threshold

    total = int(total)
    supervisor_count = int(supervisor_count)
    if total < 0 or supervisor_count < 0:
        raise ValueError(f"counts must be non-negative: total={total}, supervisors={supervisor_count}")

    if supervisor_count > 0:
        ratio = round_half_up(total / supervisor_count)
    else:
        ratio = total

    return CoverageRecord(
        region_name=region_name,
        staff_total=total,
        supervisor_count=supervisor_count,
        ratio=ratio,
        over_capacity=ratio > threshold,
    )


def compute_fleet_coverage(roster: pd.DataFrame,
                           region_summary: pd.DataFrame,
                           markers: Optional[Markers] = None,
                           threshold: Optional[int] = None) -> pd.DataFrame:
    """
    Coverage for every region in the summary, in summary order.

    staff_total is recomputed from the roster; the summary count is carried
    as expected_total for display reconciliation only.
    """
    totals = region_totals(roster)
    supervisors = supervisor_counts_by_region(roster, markers, exclude=malformed_mask(roster))

    rows = []
    for record in region_summary.to_dict("records"):
        name = record["name"]
        coverage = compute_coverage_ratio(
            totals.get(name, 0),
            supervisors.get(name, 0),
            threshold=threshold,
            region_name=name,
        )
        expected = record.get("total_count")
        expected = 0 if is_missing(expected) else int(expected)
        rows.append({
            "region_name": coverage.region_name,
            "staff_total": coverage.staff_total,
            "supervisor_count": coverage.supervisor_count,
            "ratio": coverage.ratio,
            "over_capacity": coverage.over_capacity,
            "expected_total": expected,
            "total_delta": coverage.staff_total - expected,
        })

    result = pd.DataFrame(rows, columns=COVERAGE_COLUMNS)
    logger.debug("Fleet coverage: %d regions, %d over capacity",
                 len(result), int(result["over_capacity"].sum()) if len(result) else 0)
    return result
