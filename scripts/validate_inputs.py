#!/usr/bin/env python
"""
Validate input data files against schema requirements.

Usage:
    python scripts/validate_inputs.py
    python scripts/validate_inputs.py --data-dir /path/to/data
"""
import argparse
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pandas as pd
from src.config import config, TABLE_FILES, IDENTITY_DTYPES
from src.data.schema import validate_schema, prepare_roster
from src.data.quality import find_record_issues, reconcile_region_summary


def load_table(filepath: Path) -> tuple:
    """Return (df, format) or (None, None) when the file is absent."""
    parquet_path = filepath.with_suffix(".parquet")
    csv_path = filepath.with_suffix(".csv")

    if parquet_path.exists():
        return pd.read_parquet(parquet_path), "parquet"
    if csv_path.exists():
        return pd.read_csv(csv_path, dtype=IDENTITY_DTYPES), "csv"
    return None, None


def validate_file(filepath: Path, table_name: str) -> dict:
    """Validate a single file."""
    result = {
        "exists": False,
        "format": None,
        "rows": 0,
        "columns": 0,
        "valid": False,
        "missing_required": [],
        "missing_optional": [],
        "errors": [],
        "df": None,
    }

    try:
        df, fmt = load_table(filepath)
    except Exception as e:
        result["errors"].append(f"Failed to load: {e}")
        return result

    if df is None:
        result["errors"].append(f"File not found: {filepath}.(parquet|csv)")
        return result

    if table_name == "roster":
        df = prepare_roster(df)

    result["exists"] = True
    result["format"] = fmt
    result["rows"] = len(df)
    result["columns"] = len(df.columns)
    result["df"] = df

    schema_result = validate_schema(df, table_name, strict=False)
    result["valid"] = schema_result["is_valid"]
    result["missing_required"] = schema_result["missing_required"]
    result["missing_optional"] = schema_result["missing_optional"]

    return result


def main():
    parser = argparse.ArgumentParser(description="Validate input data files")
    parser.add_argument(
        "--data-dir",
        type=str,
        default=None,
        help="Override data directory"
    )

    args = parser.parse_args()

    # Set data dir
    if args.data_dir:
        data_dir = Path(args.data_dir)
    else:
        data_dir = config.data_dir

    processed_dir = data_dir / "processed"

    print("=" * 60)
    print("Data Input Validation")
    print("=" * 60)
    print(f"Source directory: {processed_dir}")
    print()

    all_valid = True
    results = {}

    # Validate each table
    for table_key, filename in TABLE_FILES.items():
        filepath = processed_dir / filename

        print(f"Validating: {table_key}")
        print("-" * 40)

        result = validate_file(filepath, table_key)
        results[table_key] = result

        if result["exists"]:
            print(f"  ✓ Found: {filename}.{result['format']}")
            print(f"    Rows: {result['rows']:,}")
            print(f"    Columns: {result['columns']}")

            if result["valid"]:
                print(f"  ✓ Schema valid")
            else:
                print(f"  ✗ Schema invalid")
                print(f"    Missing required: {result['missing_required']}")
                all_valid = False

            if result["missing_optional"]:
                print(f"  ⚠ Missing optional: {result['missing_optional']}")
        else:
            if table_key == "roster":
                all_valid = False
                print(f"    (REQUIRED)")
            else:
                print(f"    (optional)")

        for err in result["errors"]:
            print(f"  ✗ Error: {err}")
        if result["errors"] and table_key == "roster":
            all_valid = False

        print()

    roster = results["roster"]
    if roster["valid"]:
        issues = find_record_issues(roster["df"])
        print(f"Record issues: {len(issues):,}")
        for issue, count in issues["issue"].value_counts().items():
            print(f"  ⚠ {issue}: {count:,}")
        print()

        summary = results["region_summary"]
        if summary["valid"]:
            recon = reconcile_region_summary(roster["df"], summary["df"])
            for record in recon[recon["status"] != "match"].to_dict("records"):
                print(f"  ⚠ {record['region_name']}: expected {record['expected_total']:,}, "
                      f"found {record['actual_total']:,} ({record['status']})")
            print()

    print("=" * 60)
    if all_valid:
        print("✓ All validations passed")
        sys.exit(0)
    else:
        print("✗ Validation failed - see errors above")
        sys.exit(1)


if __name__ == "__main__":
    main()
