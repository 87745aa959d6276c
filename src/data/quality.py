"""
Record-level data quality checks and region summary reconciliation.

Malformed records stay in the roster (they count towards raw totals) but
are reported here so an operator can fix the source sheet.
"""
import logging

import pandas as pd
from typing import List

from src.data.identity import (
    MissingIdentityError,
    UnresolvableIdentityError,
    identity_text,
    is_missing,
    normalize_identity,
)

logger = logging.getLogger(__name__)


ISSUE_MISSING_IDENTITY = "missing_identity"
ISSUE_UNRESOLVABLE_IDENTITY = "unresolvable_identity"
ISSUE_MISSING_NAME = "missing_name"

ISSUE_COLUMNS = ["row", "civil_id", "source_region", "issue", "detail"]
RECONCILIATION_COLUMNS = ["region_name", "expected_total", "actual_total", "delta", "status"]


def _record_issues(record: dict) -> List[tuple]:
    issues = []

    try:
        normalize_identity(record.get("civil_id"))
    except MissingIdentityError as e:
        issues.append((ISSUE_MISSING_IDENTITY, str(e)))
    except UnresolvableIdentityError as e:
        issues.append((ISSUE_UNRESOLVABLE_IDENTITY, str(e)))

    if is_missing(record.get("name_local")) and is_missing(record.get("name_latin")):
        issues.append((ISSUE_MISSING_NAME, "both name fields are empty"))

    return issues


def find_record_issues(roster: pd.DataFrame) -> pd.DataFrame:
    """
    One row per malformed-record problem.

    Returns DataFrame with:
    - row: roster index label
    - civil_id: identity as displayed
    - source_region
    - issue: missing_identity | unresolvable_identity | missing_name
    - detail: human-readable reason
    """
    rows = []
    for idx, record in zip(roster.index, roster.to_dict("records")):
        for issue, detail in _record_issues(record):
            rows.append({
                "row": idx,
                "civil_id": identity_text(record.get("civil_id")),
                "source_region": record.get("source_region"),
                "issue": issue,
                "detail": detail,
            })

    if rows:
        logger.info("Found %d record issues in %d rows", len(rows), len(roster))
    return pd.DataFrame(rows, columns=ISSUE_COLUMNS)


def malformed_mask(roster: pd.DataFrame) -> pd.Series:
    """
    Returns boolean mask where True = record has at least one issue.
    Usage: clean = roster[~malformed_mask(roster)]
    """
    flags = [bool(_record_issues(record)) for record in roster.to_dict("records")]
    return pd.Series(flags, index=roster.index, dtype=bool)


# =============================================================================
# REGION SUMMARY
# =============================================================================

def region_totals(roster: pd.DataFrame) -> pd.Series:
    """Record count per source_region in first-seen order."""
    if "source_region" not in roster.columns:
        return pd.Series(dtype=int)
    return roster.groupby("source_region", sort=False).size().astype(int)


def build_region_summary(roster: pd.DataFrame) -> pd.DataFrame:
    """Derive a {name, total_count} summary from the roster itself."""
    totals = region_totals(roster)
    return pd.DataFrame({
        "name": list(totals.index),
        "total_count": list(totals.values),
    }, columns=["name", "total_count"])


def reconcile_region_summary(roster: pd.DataFrame, region_summary: pd.DataFrame) -> pd.DataFrame:
    """
    Compare supplied region counts with the counts recomputed from the roster.

    Status per region:
    - match: counts agree
    - mismatch: counts differ
    - missing_in_roster: listed in the summary, no roster records
    - unlisted: present in the roster, absent from the summary
    """
    actual = region_totals(roster)
    rows = []
    listed = set()

    for record in region_summary.to_dict("records"):
        name = record["name"]
        listed.add(name)
        expected = record.get("total_count")
        expected = 0 if is_missing(expected) else int(expected)
        actual_total = int(actual.get(name, 0))

        if actual_total == 0:
            status = "missing_in_roster"
        elif actual_total == expected:
            status = "match"
        else:
            status = "mismatch"

        rows.append({
            "region_name": name,
            "expected_total": expected,
            "actual_total": actual_total,
            "delta": actual_total - expected,
            "status": status,
        })

    for name, actual_total in actual.items():
        if name in listed:
            continue
        rows.append({
            "region_name": name,
            "expected_total": 0,
            "actual_total": int(actual_total),
            "delta": int(actual_total),
            "status": "unlisted",
        })

    result = pd.DataFrame(rows, columns=RECONCILIATION_COLUMNS)
    mismatches = result[result["status"] != "match"]
    if len(mismatches) > 0:
        logger.warning("Region summary disagrees with roster for %d regions", len(mismatches))
    return result
