"""
Parse a Monthly Abstract of Charges file and print the rows.

Usage:
    python scripts/parse_report.py REPORT.txt [--exclude-summaries] [--csv OUT.csv] [--save]
"""
import argparse
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from charges_return.common.exceptions import ReportDateMissingError
from charges_return.common.logging_config import setup_logging
from charges_return.common.settings import get_settings
from charges_return.exporters.csv_exporter import export_csv, rows_to_dataframe
from charges_return.parsing.config.registry import LayoutRegistry
from charges_return.parsing.pipeline import ChargesReportParser
from charges_return.storage.report_store import get_report_store


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Parse an ACM001 Monthly Abstract of Charges")
    ap.add_argument("report", help="Report file (.txt or .pdf)")
    ap.add_argument("--exclude-summaries", action="store_true",
                    help="Drop TOTAL CHARGES / BALANCE AS PER / MISCELLANEOUS heads")
    ap.add_argument("--csv", metavar="OUT", help="Write the rows to this CSV file")
    ap.add_argument("--save", action="store_true", help="Store the report under its AS AT date")
    args = ap.parse_args(argv)

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)

    parser = ChargesReportParser(registry=LayoutRegistry(settings.layouts_dir))
    include_summaries = not args.exclude_summaries
    text = parser.read_text(args.report)
    result = parser.parse(text, include_summaries)

    print(f"Report date: {result.report_date.label}")
    if result.is_empty:
        print("Nothing parsed: no charge rows found.")
        return 1

    print(rows_to_dataframe(result).to_string(index=False))
    print(f"\n{len(result.rows)} rows")

    if args.csv:
        with open(args.csv, "w", encoding="utf-8", newline="") as f:
            f.write(export_csv(result))
        print(f"CSV written to {args.csv}")

    if args.save:
        try:
            stored = get_report_store().save(result, include_summaries, layout=parser.layout_for(text))
        except ReportDateMissingError as e:
            print(f"Not saved: {e}", file=sys.stderr)
            return 2
        print(f"Saved as {stored.report_id}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
