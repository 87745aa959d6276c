"""
Tests for identity and role normalisation.
"""
import pytest
import pandas as pd
import numpy as np
import sys
from decimal import Decimal
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.data.identity import (
    normalize_identity,
    normalize_identity_series,
    identity_text,
    normalize_role,
    is_missing,
    MissingIdentityError,
    UnresolvableIdentityError,
    IdentityError,
)


class TestNormalizeIdentity:
    """Tests for civil ID canonicalisation."""

    def test_int_and_string_compare_equal(self):
        """Numeric 12345 and string '12345' share a key."""
        assert normalize_identity(12345) == normalize_identity("12345") == "12345"

    def test_integral_float(self):
        """Floats from csv columns with blanks collapse to the int form."""
        assert normalize_identity(12345.0) == "12345"

    def test_numpy_scalars(self):
        """numpy ints and floats are handled like builtins."""
        assert normalize_identity(np.int64(290010112345)) == "290010112345"
        assert normalize_identity(np.float64(42.0)) == "42"

    def test_decimal(self):
        """Integral decimals are accepted."""
        assert normalize_identity(Decimal("100")) == "100"

    def test_strings_unchanged(self):
        """Leading zeros and letters are significant."""
        assert normalize_identity("00123") == "00123"
        assert normalize_identity("A-77") == "A-77"
        assert normalize_identity("00123") != normalize_identity(123)

    def test_missing_values(self):
        """None, NaN and blank strings are missing."""
        for value in [None, np.nan, "", "   ", pd.NA]:
            with pytest.raises(MissingIdentityError):
                normalize_identity(value)

    def test_fractional_float_rejected(self):
        """A fractional float cannot be a civil ID."""
        with pytest.raises(UnresolvableIdentityError):
            normalize_identity(123.5)

    def test_non_finite_rejected(self):
        with pytest.raises(UnresolvableIdentityError):
            normalize_identity(float("inf"))

    def test_imprecise_float_rejected(self):
        """Floats beyond exact integer range could merge distinct IDs."""
        with pytest.raises(UnresolvableIdentityError):
            normalize_identity(float(2 ** 60))

    def test_bool_rejected(self):
        with pytest.raises(UnresolvableIdentityError):
            normalize_identity(True)

    def test_container_rejected(self):
        with pytest.raises(UnresolvableIdentityError):
            normalize_identity([100])

    def test_errors_are_value_errors(self):
        """Both failures share a ValueError base."""
        assert issubclass(MissingIdentityError, IdentityError)
        assert issubclass(UnresolvableIdentityError, ValueError)


class TestIdentityText:
    """Tests for the lenient display form."""

    def test_normalised_when_possible(self):
        assert identity_text(100.0) == "100"

    def test_missing_is_empty(self):
        assert identity_text(None) == ""

    def test_unresolvable_stringified(self):
        assert identity_text(1.5) == "1.5"


class TestNormalizeIdentitySeries:
    """Tests for column normalisation."""

    def test_missing_become_none(self):
        series = pd.Series([100, None, "200"], dtype=object)

        result = normalize_identity_series(series)

        assert result.tolist() == ["100", None, "200"]

    def test_raise_mode(self):
        series = pd.Series([100, 1.5], dtype=object)

        with pytest.raises(UnresolvableIdentityError):
            normalize_identity_series(series)

    def test_coerce_mode(self):
        series = pd.Series([100, 1.5], dtype=object)

        result = normalize_identity_series(series, errors="coerce")

        assert result.tolist() == ["100", None]

    def test_bad_errors_argument(self):
        with pytest.raises(ValueError):
            normalize_identity_series(pd.Series([1]), errors="ignore")


class TestNormalizeRole:
    """Tests for role text canonicalisation."""

    def test_case_and_whitespace(self):
        assert normalize_role("  Shift   SUPERVISOR ") == "shift supervisor"

    def test_missing(self):
        assert normalize_role(None) == ""
        assert normalize_role(np.nan) == ""
        assert normalize_role("") == ""

    def test_localised_text_kept(self):
        assert normalize_role("مشرف أمن") == "مشرف أمن"


class TestIsMissing:
    """Tests for missing-value detection."""

    def test_values(self):
        assert is_missing(None) is True
        assert is_missing(np.nan) is True
        assert is_missing(" ") is True
        assert is_missing(0) is False
        assert is_missing("0") is False
        assert is_missing([]) is False
