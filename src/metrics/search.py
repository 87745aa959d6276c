"""
Free-text search over roster records.
"""
import pandas as pd

from src.data.identity import identity_text, is_missing


SEARCH_COLUMNS = ["name_local", "name_latin", "employee_number", "civil_id"]


def _search_text(value) -> str:
    if is_missing(value):
        return ""
    if isinstance(value, str):
        return value.casefold()
    return identity_text(value).casefold()


def search_records(records: pd.DataFrame, query: str) -> pd.DataFrame:
    """
    Rows where query is a case-insensitive substring of either name, the
    employee number or the civil ID.

    A blank query returns records unchanged.
    """
    if query is None or not str(query).strip():
        return records

    needle = str(query).casefold()
    mask = pd.Series(False, index=records.index, dtype=bool)
    for col in SEARCH_COLUMNS:
        if col in records.columns:
            mask |= records[col].map(lambda v: needle in _search_text(v)).astype(bool)

    return records[mask]
