"""
Tests for supervisor classification.
"""
import pytest
import pandas as pd
import numpy as np
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config import SUPERVISOR_MARKERS
from src.metrics.roles import (
    active_markers,
    is_supervisor,
    supervisor_mask,
    list_supervisors,
    supervisor_counts_by_region,
)


class TestIsSupervisor:
    """Tests for scalar classification."""

    def test_case_insensitive(self):
        """Marker matching ignores case."""
        assert is_supervisor("SUPERVISOR", SUPERVISOR_MARKERS) is True
        assert is_supervisor("Supervisor", SUPERVISOR_MARKERS) is True
        assert is_supervisor("team lead", SUPERVISOR_MARKERS) is True

    def test_manager(self):
        assert is_supervisor("Site Manager", SUPERVISOR_MARKERS) is True

    def test_localised_markers(self):
        """Arabic titles are recognised."""
        assert is_supervisor("مشرف أمن", SUPERVISOR_MARKERS) is True
        assert is_supervisor("رئيس وردية", SUPERVISOR_MARKERS) is True

    def test_non_supervisory(self):
        assert is_supervisor("Security Guard", SUPERVISOR_MARKERS) is False
        assert is_supervisor("حارس", SUPERVISOR_MARKERS) is False

    def test_empty_and_missing(self):
        """Empty or missing position text is never supervisory."""
        assert is_supervisor("", SUPERVISOR_MARKERS) is False
        assert is_supervisor(None, SUPERVISOR_MARKERS) is False
        assert is_supervisor(np.nan, SUPERVISOR_MARKERS) is False

    def test_permissive_substring(self):
        """Substring matching accepts known false positives."""
        assert is_supervisor("team lead-in cable", SUPERVISOR_MARKERS) is True

    def test_custom_flat_markers(self):
        """A flat marker list replaces the configured set."""
        assert is_supervisor("Foreman", ["foreman"]) is True
        assert is_supervisor("Supervisor", ["foreman"]) is False

    def test_default_markers(self):
        """Configured locales apply when no markers are given."""
        assert is_supervisor("Shift Supervisor") is True


class TestActiveMarkers:
    """Tests for marker resolution."""

    def test_dedupes_and_casefolds(self):
        result = active_markers(["Lead", "lead", " LEAD "])

        assert result == ["lead"]

    def test_drops_blank_markers(self):
        result = active_markers({"en": ["", "lead"]})

        assert result == ["lead"]

    def test_no_markers_classifies_nothing(self):
        assert is_supervisor("Supervisor", []) is False


class TestSupervisorMask:
    """Tests for vectorised classification."""

    def test_matches_scalar(self):
        df = pd.DataFrame({
            "position": ["Guard", "Shift Supervisor", None, "مشرف", "Driver"],
        })

        mask = supervisor_mask(df, SUPERVISOR_MARKERS)

        assert mask.tolist() == [False, True, False, True, False]

    def test_missing_column(self):
        """No position column means no supervisors."""
        df = pd.DataFrame({"civil_id": ["1", "2"]})

        mask = supervisor_mask(df)

        assert mask.sum() == 0
        assert len(mask) == 2

    def test_empty_frame(self):
        df = pd.DataFrame({"position": []})

        mask = supervisor_mask(df)

        assert len(mask) == 0


class TestListSupervisors:
    """Tests for the supervisor directory."""

    def test_keeps_roster_order(self):
        roster = pd.DataFrame({
            "civil_id": ["1", "2", "3"],
            "position": ["Lead", "Guard", "Supervisor"],
            "location": ["Gate", None, ""],
            "source_region": ["North", "North", "South"],
        })

        result = list_supervisors(roster, SUPERVISOR_MARKERS)

        assert result["civil_id"].tolist() == ["1", "3"]

    def test_location_label_uses_sentinel(self):
        from src.config import config

        roster = pd.DataFrame({
            "position": ["Supervisor"],
            "location": [None],
            "source_region": ["North"],
        })

        result = list_supervisors(roster, SUPERVISOR_MARKERS)

        assert result["location_label"].iloc[0] == config.unspecified_location

    def test_roster_not_mutated(self):
        roster = pd.DataFrame({"position": ["Supervisor"], "location": ["Gate"]})

        list_supervisors(roster, SUPERVISOR_MARKERS)

        assert "location_label" not in roster.columns


class TestSupervisorCountsByRegion:
    """Tests for per-region supervisor counts."""

    def test_counts_in_first_seen_order(self):
        roster = pd.DataFrame({
            "position": ["Guard", "Lead", "Supervisor", "Manager", "Guard"],
            "source_region": ["South", "North", "South", "South", "North"],
        })

        counts = supervisor_counts_by_region(roster, SUPERVISOR_MARKERS)

        assert list(counts.index) == ["South", "North"]
        assert counts["South"] == 2
        assert counts["North"] == 1

    def test_exclusion_mask(self):
        roster = pd.DataFrame({
            "position": ["Lead", "Lead"],
            "source_region": ["North", "North"],
        })
        exclude = pd.Series([True, False])

        counts = supervisor_counts_by_region(roster, SUPERVISOR_MARKERS, exclude=exclude)

        assert counts["North"] == 1
