"""
Manpower Roster Operating System

Main entry point for Streamlit app.
"""
import streamlit as st
from pathlib import Path
from datetime import datetime, timezone

# Page config must be first Streamlit command
st.set_page_config(
    page_title="Manpower Roster OS",
    page_icon="🛡️",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Add src to path
import sys
sys.path.insert(0, str(Path(__file__).parent))

from src.ui.state import init_state
from src.data.loader import load_roster, load_region_summary, get_data_status
from src.data.schema import validate_schema
from src.data.quality import find_record_issues
from src.metrics.duplicates import find_duplicate_identities
from src.metrics.regions import count_supervisors
from src.config import config, TABLE_FILES
from src.logging_config import setup_logging

setup_logging(config.log_level, json_output=config.json_logs)


def main():
    """Main app entry point."""

    # Initialize session state
    init_state()

    # Header
    st.title("Manpower Roster Operating System")
    st.caption("Fleet → Region → Location → Employee")

    # Check data availability
    status = get_data_status()

    roster_available = (
        status["processed"]["roster"]["parquet_exists"] or
        status["processed"]["roster"]["csv_exists"]
    )

    if not roster_available:
        st.error("No data found!")
        st.markdown(f"""
        ### Setup Required

        Please place your data files in: `{config.processed_dir}`

        Required files:
        - `roster.parquet` (or .csv)

        Optional files:
        - `region_summary.parquet` (or .csv); derived from the roster when absent

        **To generate these files from a workbook (one sheet per region):**
        `python scripts/build_roster.py path/to/roster.xlsx`
        """)

        st.info("Once data is in place, refresh this page.")
        return

    with st.expander("Data fingerprint", expanded=False):
        rows = []
        for filename in TABLE_FILES.values():
            for ext in ("parquet", "csv"):
                path = config.processed_dir / f"{filename}.{ext}"
                if path.exists():
                    mtime = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
                    rows.append({
                        "file": path.name,
                        "size_mb": round(path.stat().st_size / (1024 * 1024), 2),
                        "modified_utc": mtime.strftime("%Y-%m-%d %H:%M"),
                    })
        if rows:
            st.dataframe(rows, use_container_width=True)
        else:
            st.info(f"No files found in {config.processed_dir}.")

    # Load and validate data
    with st.spinner("Loading data..."):
        try:
            df = load_roster()
            summary = load_region_summary()
            result = validate_schema(df, "roster", strict=False)
        except Exception as e:
            st.error(f"Error loading data: {e}")
            return

    # Show validation status
    if not result["is_valid"]:
        st.warning(f"Missing required columns: {result['missing_required']}")
        st.info("Some features may be limited.")

    # Navigation
    st.markdown("---")

    col1, col2 = st.columns([1, 4])

    with col1:
        st.markdown("### Quick Links")
        st.page_link("pages/1_Region_Explorer.py", label="Region Explorer", icon="🗺️")
        st.page_link("pages/2_Duplicate_Identities.py", label="Duplicate Identities", icon="🚨")
        st.page_link("pages/3_Supervisors.py", label="Supervisor Directory", icon="🧑‍💼")
        st.page_link("pages/4_Manpower_Balance.py", label="Manpower Balance", icon="⚖️")
        st.page_link("pages/5_Data_Quality.py", label="Data Quality & QA", icon="✅")

    with col2:
        st.markdown("### Roster Overview")

        c1, c2, c3, c4 = st.columns(4)

        with c1:
            st.metric("Total Records", f"{len(df):,}")

        with c2:
            st.metric("Regions", f"{len(summary):,}")

        with c3:
            st.metric("Supervisors", f"{count_supervisors(df):,}")

        with c4:
            conflicts = len(find_duplicate_identities(df, on_invalid="skip"))
            st.metric("ID Conflicts", f"{conflicts:,}")

        issues = find_record_issues(df)
        if len(issues) > 0:
            st.warning(f"{len(issues):,} record issues found. See Data Quality & QA.")

    # Data status
    st.markdown("---")
    with st.expander("Data Status"):
        st.markdown("**Processed Tables**")
        for key, info in status["processed"].items():
            icon = "✅" if info["parquet_exists"] or info["csv_exists"] else "❌"
            format_used = "parquet" if info["parquet_exists"] else "csv" if info["csv_exists"] else "missing"
            st.markdown(f"{icon} `{key}` ({format_used})")


if __name__ == "__main__":
    main()
