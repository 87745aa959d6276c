"""
Schema validation and column alias mapping.
"""
import pandas as pd
import streamlit as st
from typing import List, Tuple, Dict, Optional

from src.config import REQUIRED_COLUMNS, OPTIONAL_COLUMNS, COLUMN_ALIASES
from src.data.identity import is_missing


class SchemaValidationError(Exception):
    """Raised when required columns are missing."""
    pass


# Free-text columns kept as strings; identities are left untouched so the
# identity normaliser sees the original representation.
TEXT_COLUMNS = ["name_local", "name_latin", "position", "company", "location", "source_region"]


def _as_text(value) -> Optional[str]:
    if isinstance(value, str):
        return value
    if is_missing(value):
        return None
    return str(value)


def apply_column_aliases(df: pd.DataFrame, aliases: Optional[Dict[str, str]] = None) -> pd.DataFrame:
    """Rename workbook headers (e.g. 'ID#', 'NAME (AR)') to canonical columns."""
    if aliases is None:
        aliases = COLUMN_ALIASES

    stripped = {col: str(col).strip() for col in df.columns}
    rename = {}
    for col, clean in stripped.items():
        if clean in aliases and aliases[clean] not in df.columns:
            rename[col] = aliases[clean]
    return df.rename(columns=rename)


def validate_required_columns(df: pd.DataFrame, table_name: str) -> Tuple[bool, List[str]]:
    """
    Validate that required columns exist in dataframe.
    Returns (is_valid, missing_columns).
    """
    if table_name not in REQUIRED_COLUMNS:
        return True, []

    required = REQUIRED_COLUMNS[table_name]
    missing = [col for col in required if col not in df.columns]

    return len(missing) == 0, missing


def check_optional_columns(df: pd.DataFrame, table_name: str) -> List[str]:
    """
    Check which optional columns are missing.
    Returns list of missing optional columns.
    """
    if table_name not in OPTIONAL_COLUMNS:
        return []

    optional = OPTIONAL_COLUMNS[table_name]
    missing = [col for col in optional if col not in df.columns]

    return missing


def validate_schema(df: pd.DataFrame, table_name: str, strict: bool = True) -> Dict:
    """
    Full schema validation.

    Args:
        df: DataFrame to validate
        table_name: Name of table for column requirements lookup
        strict: If True, raise error on missing required columns

    Returns:
        Dict with validation results
    """
    is_valid, missing_required = validate_required_columns(df, table_name)
    missing_optional = check_optional_columns(df, table_name)

    result = {
        "is_valid": is_valid,
        "missing_required": missing_required,
        "missing_optional": missing_optional,
        "total_columns": len(df.columns),
        "total_rows": len(df),
    }

    if strict and not is_valid:
        raise SchemaValidationError(
            f"Missing required columns in {table_name}: {missing_required}"
        )

    return result


def display_validation_result(result: Dict, table_name: str):
    """Display validation result in Streamlit."""
    if result["is_valid"]:
        st.success(f"{table_name}: Schema valid ({result['total_rows']:,} rows, {result['total_columns']} columns)")
    else:
        st.error(f"{table_name}: Missing required columns: {result['missing_required']}")

    if result["missing_optional"]:
        st.warning(f"{table_name}: Missing optional columns (will degrade gracefully): {result['missing_optional']}")


def ensure_column_types(df: pd.DataFrame) -> pd.DataFrame:
    """Ensure consistent column types."""
    df = df.copy()

    for col in TEXT_COLUMNS:
        if col in df.columns:
            df[col] = df[col].astype(object).map(_as_text)

    if "total_count" in df.columns:
        df["total_count"] = pd.to_numeric(df["total_count"], errors="coerce").fillna(0).astype(int)

    return df


def prepare_roster(df: pd.DataFrame) -> pd.DataFrame:
    """
    Alias, pad and type a raw roster frame.

    Missing optional columns are added empty so downstream code can rely on
    them; missing required columns are left for validate_schema to report.
    """
    df = apply_column_aliases(df)
    for col in OPTIONAL_COLUMNS["roster"]:
        if col not in df.columns:
            df[col] = None
    return ensure_column_types(df).reset_index(drop=True)


def get_column_info(df: pd.DataFrame) -> pd.DataFrame:
    """Get summary info about all columns."""
    info = []
    for col in df.columns:
        info.append({
            "column": col,
            "dtype": str(df[col].dtype),
            "non_null": df[col].notna().sum(),
            "null_pct": f"{df[col].isna().mean()*100:.1f}%",
            "unique": df[col].nunique(),
        })
    return pd.DataFrame(info)
