#!/usr/bin/env python3
"""
Find the pair of employees who worked together the longest.

Reads a CSV of EmpID, ProjectID, DateFrom, DateTo rows, prints the top pair,
every overlapping pair ranked by total days, and any rows that were skipped.

Usage:
    uv run python src/scripts/find_pairs.py <input_file.csv>

Example:
    uv run python src/scripts/find_pairs.py data/assignments.csv --reference-date 2023-12-31
"""

import argparse
import sys
from datetime import date, datetime
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from api.models.responses import PairsResponse
from models.assignments import EngineResult
from services.pairs import compute_pairs_from_path, flatten_pairs


def parse_reference_date(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', expected YYYY-MM-DD")


def format_employee(employee_id: int | None) -> str:
    return "NaN" if employee_id is None else str(employee_id)


def print_result(result: EngineResult, per_project: bool = False):
    """Print pairs and errors as plain text tables."""
    top = result.top
    if top is None:
        print("No overlapping pairs found")
    else:
        print(
            f"Top pair: {format_employee(top.emp_a)} & {format_employee(top.emp_b)} "
            f"- {top.total_days} days across {len(top.projects)} project(s)"
        )

    if per_project:
        rows = flatten_pairs(result)
        if rows:
            print(f"\n{'Employee #1':>12} {'Employee #2':>12} {'Project ID':>12} {'Days':>6}")
            for row in rows:
                print(
                    f"{format_employee(row['empA']):>12} {format_employee(row['empB']):>12} "
                    f"{row['project']:>12} {row['days']:>6}"
                )
    elif result.pairs:
        print(f"\n{len(result.pairs)} pair(s):")
        for pair in result.pairs:
            breakdown = ", ".join(f"{p.project}: {p.days}" for p in pair.projects)
            print(
                f"  {format_employee(pair.emp_a)} & {format_employee(pair.emp_b)}"
                f" - {pair.total_days} days ({breakdown})"
            )

    if result.errors:
        print(f"\n{len(result.errors)} row(s) skipped:")
        for error in result.errors:
            print(f"  - [{error.kind.value}] {error.message}")


def main():
    parser = argparse.ArgumentParser(
        description="Find the pair of employees who worked together the longest"
    )
    parser.add_argument(
        "input_file",
        type=Path,
        help="Path to the CSV file (EmpID, ProjectID, DateFrom, DateTo)",
    )
    parser.add_argument(
        "--reference-date",
        type=parse_reference_date,
        default=None,
        help="Date used for NULL end dates (YYYY-MM-DD). Defaults to today.",
    )
    parser.add_argument(
        "--per-project",
        action="store_true",
        help="Print one row per pair and project instead of per pair",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full result as JSON",
    )

    args = parser.parse_args()

    try:
        result = compute_pairs_from_path(args.input_file, args.reference_date)
    except OSError as e:
        print(f"\nError: {e}")
        sys.exit(1)

    if args.json:
        print(PairsResponse.from_result(result).model_dump_json(indent=2))
    else:
        print_result(result, per_project=args.per_project)


if __name__ == "__main__":
    main()
