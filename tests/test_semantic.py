"""
Tests for location sentinel and display-name fallbacks.
"""
import pytest
import pandas as pd
import numpy as np
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.data.semantic import resolve_location, location_labels, display_name, display_names


SENTINEL = "غير محدد"


class TestResolveLocation:
    """Tests for the unspecified-location sentinel."""

    @pytest.mark.parametrize("value", [None, np.nan, "", "   "])
    def test_missing_maps_to_sentinel(self, value):
        assert resolve_location(value, SENTINEL) == SENTINEL

    def test_named_location(self):
        assert resolve_location("Gate 1", SENTINEL) == "Gate 1"

    def test_numeric_location(self):
        assert resolve_location(7, SENTINEL) == "7"

    def test_custom_sentinel(self):
        assert resolve_location(None, "Unassigned") == "Unassigned"


class TestLocationLabels:
    def test_labels(self):
        df = pd.DataFrame({"location": ["Port", None, ""]})

        labels = location_labels(df, SENTINEL)

        assert labels.tolist() == ["Port", SENTINEL, SENTINEL]

    def test_no_location_column(self):
        df = pd.DataFrame({"civil_id": ["1", "2"]}, index=[5, 6])

        labels = location_labels(df, SENTINEL)

        assert labels.tolist() == [SENTINEL, SENTINEL]
        assert list(labels.index) == [5, 6]


class TestDisplayName:
    """Local name first, then Latin, then the fallback."""

    def test_local_preferred(self):
        record = {"name_local": "سالم", "name_latin": "Salem"}

        assert display_name(record, "?") == "سالم"

    def test_latin_when_local_blank(self):
        record = {"name_local": " ", "name_latin": "Salem"}

        assert display_name(record, "?") == "Salem"

    def test_fallback(self):
        record = {"name_local": None, "name_latin": np.nan}

        assert display_name(record, "?") == "?"

    def test_series_record(self):
        row = pd.Series({"name_local": None, "name_latin": "Noor"})

        assert display_name(row, "?") == "Noor"

    def test_frame(self):
        df = pd.DataFrame({
            "name_local": ["سالم", None],
            "name_latin": ["Salem", "Noor"],
        })

        assert display_names(df, "?").tolist() == ["سالم", "Noor"]

    def test_empty_frame(self):
        df = pd.DataFrame({"name_local": [], "name_latin": []})

        assert len(display_names(df)) == 0
