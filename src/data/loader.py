"""
Data loading utilities with Streamlit caching.
"""
import logging

import pandas as pd
import streamlit as st
from pathlib import Path
from typing import Optional, Dict, Any

from src.config import config, TABLE_FILES, IDENTITY_DTYPES
from src.data.schema import prepare_roster, ensure_column_types
from src.data.quality import build_region_summary

logger = logging.getLogger(__name__)


def _load_file(filepath: Path) -> Optional[pd.DataFrame]:
    """Load a single file (parquet or csv)."""
    parquet_path = filepath.with_suffix(".parquet")
    csv_path = filepath.with_suffix(".csv")

    if parquet_path.exists():
        return pd.read_parquet(parquet_path)
    elif csv_path.exists():
        # Keep identities as written; numeric coercion is the normaliser's job
        return pd.read_csv(csv_path, dtype=IDENTITY_DTYPES)
    return None


@st.cache_resource(ttl=config.cache_ttl_seconds)
def load_roster() -> pd.DataFrame:
    """
    Load the consolidated roster table.

    Cached as a shared resource so every rerun gets the same object; the
    duplicate memo keys on that identity. Callers must not mutate it.
    """
    filepath = config.processed_dir / TABLE_FILES["roster"]
    df = _load_file(filepath)
    if df is None:
        st.error(f"Could not find roster in {config.processed_dir}")
        st.stop()

    df = prepare_roster(df)
    logger.info("Loaded roster", extra={"rows": len(df)})
    return df


@st.cache_data(ttl=config.cache_ttl_seconds)
def load_region_summary() -> pd.DataFrame:
    """
    Load the region summary produced by the ingestion step.

    Falls back to counts derived from the roster when no summary file exists.
    """
    filepath = config.processed_dir / TABLE_FILES["region_summary"]
    df = _load_file(filepath)
    if df is None:
        logger.info("No region summary file, deriving from roster")
        return build_region_summary(load_roster())

    return ensure_column_types(df)


def get_data_status() -> Dict[str, Any]:
    """Get status of all data files."""
    status = {
        "processed": {},
    }

    for key, filename in TABLE_FILES.items():
        parquet_path = config.processed_dir / f"{filename}.parquet"
        csv_path = config.processed_dir / f"{filename}.csv"
        status["processed"][key] = {
            "parquet_exists": parquet_path.exists(),
            "csv_exists": csv_path.exists(),
        }

    return status
