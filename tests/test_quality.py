"""
Tests for record issues and region summary reconciliation.
"""
import pytest
import pandas as pd
import numpy as np
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.data.quality import (
    ISSUE_MISSING_IDENTITY,
    ISSUE_MISSING_NAME,
    ISSUE_UNRESOLVABLE_IDENTITY,
    build_region_summary,
    find_record_issues,
    malformed_mask,
    reconcile_region_summary,
)


def _roster() -> pd.DataFrame:
    return pd.DataFrame({
        "civil_id": pd.Series(["1", None, 2.5, "4", "5"], dtype=object),
        "name_local": ["a", "b", "c", None, ""],
        "name_latin": ["a", "b", "c", "", "e"],
        "position": ["Guard"] * 5,
        "source_region": ["North", "North", "South", "South", "East"],
    })


class TestFindRecordIssues:
    """Tests for malformed record reporting."""

    def test_issue_kinds(self):
        issues = find_record_issues(_roster())

        assert issues["issue"].tolist() == [
            ISSUE_MISSING_IDENTITY,
            ISSUE_UNRESOLVABLE_IDENTITY,
            ISSUE_MISSING_NAME,
        ]
        assert issues["row"].tolist() == [1, 2, 3]

    def test_one_name_is_enough(self):
        """Only missing *both* names is a problem."""
        issues = find_record_issues(_roster())

        assert 4 not in issues["row"].tolist()

    def test_civil_id_display(self):
        issues = find_record_issues(_roster())

        assert issues.iloc[1]["civil_id"] == "2.5"

    def test_clean_roster(self):
        roster = _roster().iloc[[0]]

        issues = find_record_issues(roster)

        assert len(issues) == 0
        assert "issue" in issues.columns

    def test_does_not_raise_on_odd_values(self):
        roster = pd.DataFrame({"civil_id": pd.Series([[1, 2], True], dtype=object)})

        issues = find_record_issues(roster)

        assert (issues["issue"] == ISSUE_UNRESOLVABLE_IDENTITY).sum() == 2


class TestMalformedMask:
    def test_mask(self):
        mask = malformed_mask(_roster())

        assert mask.tolist() == [False, True, True, True, False]

    def test_keeps_index(self):
        roster = _roster().iloc[2:]

        mask = malformed_mask(roster)

        assert list(mask.index) == [2, 3, 4]


class TestBuildRegionSummary:
    def test_first_seen_order(self):
        summary = build_region_summary(_roster())

        assert summary["name"].tolist() == ["North", "South", "East"]
        assert summary["total_count"].tolist() == [2, 2, 1]

    def test_empty(self):
        summary = build_region_summary(pd.DataFrame({"source_region": []}))

        assert len(summary) == 0
        assert list(summary.columns) == ["name", "total_count"]


class TestReconcileRegionSummary:
    """Tests for supplied vs recomputed region counts."""

    def test_statuses(self):
        summary = pd.DataFrame({
            "name": ["North", "South", "West"],
            "total_count": [2, 5, 3],
        })

        result = reconcile_region_summary(_roster(), summary)
        status = dict(zip(result["region_name"], result["status"]))

        assert status == {
            "North": "match",
            "South": "mismatch",
            "West": "missing_in_roster",
            "East": "unlisted",
        }

    def test_summary_order_then_unlisted(self):
        summary = pd.DataFrame({"name": ["South", "North"], "total_count": [2, 2]})

        result = reconcile_region_summary(_roster(), summary)

        assert result["region_name"].tolist() == ["South", "North", "East"]

    def test_delta(self):
        summary = pd.DataFrame({"name": ["South"], "total_count": [5]})

        result = reconcile_region_summary(_roster(), summary)

        assert result.iloc[0]["delta"] == -3

    def test_missing_expected_count(self):
        summary = pd.DataFrame({"name": ["North"], "total_count": [np.nan]})

        result = reconcile_region_summary(_roster(), summary)

        assert result.iloc[0]["expected_total"] == 0
        assert result.iloc[0]["status"] == "mismatch"
