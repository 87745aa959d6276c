#!/usr/bin/env python
"""
Consolidate a roster workbook (one sheet per region) into the processed tables.

Writes:
    <data-dir>/processed/roster.csv
    <data-dir>/processed/region_summary.csv

Usage:
    python scripts/build_roster.py roster.xlsx
    python scripts/build_roster.py roster.xlsx --data-dir /path/to/data --strict
"""
import argparse
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pandas as pd
from src.config import config, TABLE_FILES
from src.data.schema import apply_column_aliases, validate_schema
from src.data.quality import find_record_issues, ISSUE_UNRESOLVABLE_IDENTITY
from src.logging_config import setup_logging


def read_workbook(path: Path, skip_sheets=()) -> tuple:
    """
    Read every sheet into one roster frame tagged with source_region.

    Returns (roster, region_summary); the summary lists every sheet in
    workbook order with its non-blank row count, including empty sheets.
    """
    sheets = pd.read_excel(path, sheet_name=None, dtype=object)

    frames = []
    summary = []
    for sheet_name, df in sheets.items():
        region = str(sheet_name).strip()
        if region in skip_sheets:
            continue

        df = apply_column_aliases(df.dropna(how="all"))
        df["source_region"] = region
        frames.append(df)
        summary.append({"name": region, "total_count": len(df)})

    roster = pd.concat(frames, ignore_index=True) if frames else pd.DataFrame()
    return roster, pd.DataFrame(summary, columns=["name", "total_count"])


def main():
    parser = argparse.ArgumentParser(description="Consolidate roster workbook")
    parser.add_argument("workbook", type=str, help="Path to .xlsx workbook")
    parser.add_argument(
        "--data-dir",
        type=str,
        default=None,
        help="Override data directory"
    )
    parser.add_argument(
        "--skip-sheet",
        action="append",
        default=[],
        help="Sheet name to ignore (repeatable)"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when any civil ID cannot be normalised"
    )

    args = parser.parse_args()
    setup_logging(config.log_level, json_output=config.json_logs)

    data_dir = Path(args.data_dir) if args.data_dir else config.data_dir
    processed_dir = data_dir / "processed"

    workbook = Path(args.workbook)
    if not workbook.exists():
        print(f"ERROR: Workbook not found: {workbook}")
        sys.exit(1)

    print(f"Reading {workbook}...")
    roster, summary = read_workbook(workbook, skip_sheets=set(args.skip_sheet))
    print(f"  Sheets: {len(summary)}")
    print(f"  Rows: {len(roster):,}")
    print()

    schema = validate_schema(roster, "roster", strict=False)
    if not schema["is_valid"]:
        print(f"✗ Missing required columns: {schema['missing_required']}")
        sys.exit(1)
    if schema["missing_optional"]:
        print(f"⚠ Missing optional: {schema['missing_optional']}")

    issues = find_record_issues(roster)
    if len(issues) > 0:
        print(f"⚠ {len(issues):,} record issues:")
        for issue, count in issues["issue"].value_counts().items():
            print(f"    {issue}: {count:,}")
        if args.strict and (issues["issue"] == ISSUE_UNRESOLVABLE_IDENTITY).any():
            print("✗ Unresolvable civil IDs found (--strict)")
            sys.exit(1)

    processed_dir.mkdir(parents=True, exist_ok=True)
    roster_path = processed_dir / f"{TABLE_FILES['roster']}.csv"
    summary_path = processed_dir / f"{TABLE_FILES['region_summary']}.csv"
    roster.to_csv(roster_path, index=False, encoding="utf-8")
    summary.to_csv(summary_path, index=False, encoding="utf-8")

    print()
    print(f"✓ Wrote {roster_path}")
    print(f"✓ Wrote {summary_path}")


if __name__ == "__main__":
    main()
