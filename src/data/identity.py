"""
Identity and role normalisation.

Civil IDs arrive as ints, floats (csv columns with blanks), numpy scalars or
strings depending on how the source sheet was typed. Every comparison of
identities goes through normalize_identity so that 12345, 12345.0 and
"12345" land on the same key, and anything that cannot be represented
exactly is rejected instead of being merged with another person.
"""
from __future__ import annotations

import math
import numbers
from decimal import Decimal
from typing import Optional

import numpy as np
import pandas as pd


# Floats above this lose integer precision, so two different IDs could collide.
MAX_EXACT_FLOAT_ID = 2 ** 53


class IdentityError(ValueError):
    """Base class for identity normalisation failures."""
    pass


class MissingIdentityError(IdentityError):
    """Raised when a record carries no identity value at all."""
    pass


class UnresolvableIdentityError(IdentityError):
    """Raised when an identity value has a shape we cannot compare safely."""
    pass


def is_missing(value) -> bool:
    """True for None, NaN/NA and blank strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if pd.api.types.is_scalar(value):
        try:
            return bool(pd.isna(value))
        except (TypeError, ValueError):
            return False
    return False


def normalize_identity(value) -> str:
    """
    Return the canonical string key for a civil ID.

    Numbers become their decimal string form; strings are returned as-is
    (leading zeros and letters are significant).

    Raises:
        MissingIdentityError: value is None, NaN or blank
        UnresolvableIdentityError: bool, fractional/non-finite float,
            float too large to be exact, or any non-scalar value
    """
    if is_missing(value):
        raise MissingIdentityError("identity value is missing")

    if isinstance(value, (bool, np.bool_)):
        raise UnresolvableIdentityError(f"boolean is not an identity: {value!r}")

    if isinstance(value, str):
        return value

    if isinstance(value, numbers.Integral):
        return str(int(value))

    if isinstance(value, (numbers.Real, Decimal)):
        if isinstance(value, Decimal):
            if not value.is_finite() or value != value.to_integral_value():
                raise UnresolvableIdentityError(f"non-integral identity: {value!r}")
            return str(int(value))
        as_float = float(value)
        if not math.isfinite(as_float) or not as_float.is_integer():
            raise UnresolvableIdentityError(f"non-integral identity: {value!r}")
        if abs(as_float) > MAX_EXACT_FLOAT_ID:
            raise UnresolvableIdentityError(f"identity exceeds exact float range: {value!r}")
        return str(int(as_float))

    raise UnresolvableIdentityError(
        f"unrecognised identity type {type(value).__name__}: {value!r}"
    )


def identity_text(value) -> str:
    """Lenient string form for display and search. Never raises."""
    try:
        return normalize_identity(value)
    except MissingIdentityError:
        return ""
    except UnresolvableIdentityError:
        return str(value)


def normalize_identity_series(series: pd.Series, errors: str = "raise") -> pd.Series:
    """
    Normalise a column of identities.

    Args:
        series: raw identity values
        errors: 'raise' to propagate UnresolvableIdentityError, 'coerce' to
            map unresolvable values to None. Missing values are always None.
    """
    if errors not in ("raise", "coerce"):
        raise ValueError(f"errors must be 'raise' or 'coerce', got {errors!r}")

    def _key(value) -> Optional[str]:
        try:
            return normalize_identity(value)
        except MissingIdentityError:
            return None
        except UnresolvableIdentityError:
            if errors == "raise":
                raise
            return None

    return series.map(_key).astype(object)


def normalize_role(position) -> str:
    """Casefolded, whitespace-collapsed role text ('' when missing)."""
    if is_missing(position):
        return ""
    return " ".join(str(position).split()).casefold()
