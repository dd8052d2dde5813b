#!/usr/bin/env python3
"""
Create the availability report from MS365 calendars.

Fetches events from the configured calendars, computes free time inside the
daily working window for the coming days, and writes a bulleted document.
Meant to run once a day (e.g. from cron).

Usage:
    uv run python src/scripts/create_availability_report.py
    uv run python src/scripts/create_availability_report.py --date 2025-11-03 --days 7 --format excel
"""

import argparse
import asyncio
import sys
import traceback
from datetime import date, datetime
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import (
    OUTPUT_DIR,
    ConfigurationError,
    ReportConfig,
    check_graph_credentials,
    load_report_config,
)
from core.validation import normalize_events
from services.availability import build_report, report_range
from services.calendar import fetch_events
from services.reports import write_excel_report, write_markdown_report

OUTPUT_EXTENSIONS = {"markdown": ".md", "excel": ".xlsx"}


# =============================================================================
# DATE UTILITIES
# =============================================================================


def get_anchor_date(date_str: str | None, config: ReportConfig) -> date:
    """
    First reported date.

    Args:
        date_str: Optional date string (YYYY-MM-DD). Uses today in the configured zone if None.
    """
    if date_str:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    return datetime.now(config.zone).date()


def default_output_path(report_format: str) -> Path:
    return OUTPUT_DIR / "availability" / f"availability{OUTPUT_EXTENSIONS[report_format]}"


# =============================================================================
# MAIN
# =============================================================================


async def main(
    date_str: str | None = None,
    days: int | None = None,
    skip_weekends: bool | None = None,
    report_format: str = "markdown",
    output_path: Path | None = None,
) -> Path:
    """Main entry point."""
    # 1. Load and validate configuration (fatal before any work)
    config = load_report_config(days_ahead=days, skip_weekends=skip_weekends)
    check_graph_credentials()
    anchor = get_anchor_date(date_str, config)
    range_start, range_end = report_range(anchor, config)
    print(f"Generating availability for {anchor} ({config.window_length_days} days)")

    try:
        # 2. Fetch events from all calendars
        print(f"\nFetching events from {len(config.calendar_ids)} calendar(s)...")
        raw_events, diagnostics = await fetch_events(
            list(config.calendar_ids), range_start, range_end, config.time_zone
        )
        print(f"  Found {len(raw_events)} events")

        # 3. Validate events
        events, event_diagnostics = normalize_events(raw_events, config.zone, range_start, range_end)
        diagnostics.extend(event_diagnostics)
        for detail_type, message in diagnostics:
            print(f"  Warning ({detail_type}): {message}")

        # 4. Compute free slots
        report = build_report(events, config, anchor)
        slot_count = sum(len(day.free_slots) for day in report)
        print(f"\n{len(report)} day(s), {slot_count} free slot(s)")

        # 5. Write the document
        output_path = output_path or default_output_path(report_format)
        generated_at = datetime.now(config.zone)
        if report_format == "excel":
            write_excel_report(report, output_path, config.zone, generated_at)
        else:
            write_markdown_report(report, output_path, config.zone, generated_at)
        print(f"Saved availability report to: {output_path}")

        print("\nDone!")
        return output_path

    except Exception as e:
        print(f"\nError: {e}")
        traceback.print_exc()
        raise


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate availability report")
    parser.add_argument(
        "--date",
        help="First reported date (YYYY-MM-DD). Defaults to today.",
    )
    parser.add_argument("--days", type=int, help="Number of days to report.")
    parser.add_argument(
        "--skip-weekends",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Leave Saturdays and Sundays out of the report.",
    )
    parser.add_argument("--format", choices=sorted(OUTPUT_EXTENSIONS), default="markdown")
    parser.add_argument("--output", type=Path, help="Output file path.")
    args = parser.parse_args()

    try:
        asyncio.run(main(args.date, args.days, args.skip_weekends, args.format, args.output))
    except ConfigurationError as e:
        print(f"Configuration error:\n{e}")
        sys.exit(2)
