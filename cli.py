"""Command-line entrypoint for generating fault analytics outputs."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

import pandas as pd

from windfarm_faults import DashboardState, load_datasets
from windfarm_faults import config
from windfarm_faults.analytics import date_range_from_pickers
from windfarm_faults.logging import set_global_log_level
from windfarm_faults.reporting import build_pdf_report, export_excel_report


def _timestamp(value: str) -> pd.Timestamp:
    try:
        return pd.Timestamp(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid date/time {value!r}") from exc


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Summarise wind-farm faults for one site.")
    parser.add_argument(
        "--devices",
        type=str,
        default=None,
        help="Device collection URL or JSON path (defaults to WINDFARM_DEVICES_SOURCE or the bundled sample).",
    )
    parser.add_argument(
        "--faults",
        type=str,
        default=None,
        help="Fault collection URL or JSON path (defaults to WINDFARM_FAULTS_SOURCE or the bundled sample).",
    )
    parser.add_argument("--site", choices=config.SITES, default=config.DEFAULT_SITE, help="Site to report on.")
    parser.add_argument("--device", type=str, default=None, help="Restrict to one device name.")
    parser.add_argument("--start", type=_timestamp, default=None, help="Start of the date range (inclusive).")
    parser.add_argument("--end", type=_timestamp, default=None, help="End of the date range (inclusive).")
    parser.add_argument("--code", type=str, default=None, help="Exact fault code to match.")
    parser.add_argument("--excel", type=Path, default=None, help="Write an Excel workbook to this path.")
    parser.add_argument("--pdf", type=Path, default=None, help="Write a PDF summary to this path.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        set_global_log_level(logging.DEBUG)

    loaded = load_datasets(args.devices, args.faults)
    if len(loaded.errors) == 2:
        print("[ERROR] Neither devices nor faults could be loaded.", file=sys.stderr)
        return 1
    for dataset, message in loaded.errors.items():
        print(f"[WARN] {dataset}: {message}", file=sys.stderr)

    state = DashboardState().with_data(loaded).with_criteria(
        {
            "site": args.site,
            "device_name": args.device,
            "date_range": date_range_from_pickers(args.start, args.end),
            "code": args.code,
        }
    )
    view = state.derive()

    print(f"Site: {view.criteria.site}")
    print(f"Total faults: {view.summary.total_faults}")
    print(f"Total duration: {view.summary.total_duration}")

    if not view.top_frequency.empty:
        print("\nTop codes by frequency:")
        for code, count in view.top_frequency[["code", "count"]].itertuples(index=False, name=None):
            print(f"  {code}: {count}")

    if not view.top_duration.empty:
        print("\nTop faults by duration:")
        for _, row in view.top_duration.iterrows():
            print(f"  {row['code']} ({row['device_name']}): {row['duration_seconds']:.0f}s")

    if args.excel is not None:
        export_excel_report(view, path=args.excel)
        print(f"\nExcel workbook: {args.excel}")
    if args.pdf is not None:
        args.pdf.write_bytes(build_pdf_report(view))
        print(f"PDF summary: {args.pdf}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
