#!/usr/bin/env python3
"""
Command-line export of stored school closure records.
Writes the filtered records to <output>/<dataset-name>-<date>.<csv|json>.
"""

import argparse
import sys
from pathlib import Path

# Add the repository root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from school_closures.core.config import ALL
from school_closures.core.registry import ClosureRegistry
from school_closures.core.schema import FilterSpec
from util.logging import logger


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Export school closure records to CSV or JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s csv                          # Export every record as CSV
  %(prog)s json --district Pune         # Export Pune records as JSON
  %(prog)s csv --search shirur -o out/  # Export matches into out/

Environment variables:
- CLOSURES_DB_PATH=./data/closures.db (SQLite file holding the records)
- CLOSURES_DATASET_NAME=maharashtra-school-closures (filename prefix)
- CLOSURES_CSV_ESCAPE_QUOTES=false (double embedded quotes in CSV)
        """
    )

    parser.add_argument(
        "format",
        choices=["csv", "json"],
        help="Export format"
    )

    parser.add_argument(
        "--search", "-s",
        default="",
        help="Case-insensitive match on school name, district or village"
    )

    parser.add_argument(
        "--year", "-y",
        default=ALL,
        help="Year of closure to keep (default: all)"
    )

    parser.add_argument(
        "--district", "-d",
        default=ALL,
        help="District to keep (default: all)"
    )

    parser.add_argument(
        "--output", "-o",
        default=".",
        help="Directory to write the export into"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print storage warnings before exporting"
    )

    args = parser.parse_args(argv)

    registry = ClosureRegistry.from_config()
    warnings = registry.start()
    if args.verbose:
        for warning in warnings:
            print(f"Warning: {warning}")

    spec = FilterSpec(searchTerm=args.search, yearFilter=args.year, districtFilter=args.district)
    outcome = registry.export(args.format, spec)

    if not outcome.ok:
        print(f"{outcome.notice.title}: {outcome.notice.description}", file=sys.stderr)
        return 1

    output_dir = Path(args.output)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        target = output_dir / outcome.filename
        target.write_text(outcome.content, encoding="utf-8")
    except OSError as e:
        logger.error(f"Failed to write export file: {e}")
        print(f"Export failed: {e}", file=sys.stderr)
        return 1

    print(f"{outcome.notice.description}: {target}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
