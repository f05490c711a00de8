#!/usr/bin/env python
"""
Compute totals for every document in a line export.

Usage:
    python scripts/compute_documents.py data/sample_documents.csv
    python scripts/compute_documents.py lines.xlsx -o data/outputs/totals.csv --raw
"""
import argparse
import sys
from pathlib import Path

from order_totals.config.logging_config import configure_logging
from order_totals.config.settings import get_settings
from order_totals.engine import ComputeOptions
from order_totals.services.document_service import summarize_documents, write_summary


def main(argv=None):
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Compute document totals from a line export.")
    parser.add_argument("input", nargs="?", type=Path, default=settings.sample_documents,
                        help="CSV or XLSX export with a document_id column")
    parser.add_argument("-o", "--output", type=Path, default=None,
                        help="Write the summary CSV here instead of printing it")
    parser.add_argument("--raw", action="store_true",
                        help="Suppress line-level discount, tax and surcharges")
    parser.add_argument("--log-level", default=settings.log_level)
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    options = ComputeOptions(include_line_level_calculations=not args.raw)

    try:
        summary = summarize_documents(args.input, options)
    except (FileNotFoundError, ValueError) as e:
        print(f"ERROR: {e}")
        return 1

    if args.output:
        write_summary(summary, args.output)
        print(f"Wrote {len(summary)} documents to {args.output}")
    else:
        print(summary.to_string(index=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
