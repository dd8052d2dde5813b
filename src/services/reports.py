"""
Availability report rendering for Markdown and Excel formats.
"""

from datetime import date, datetime
from pathlib import Path
from zoneinfo import ZoneInfo

from openpyxl import Workbook
from openpyxl.styles import Font

from core.config import NO_AVAILABILITY_TEXT, REPORT_TITLE
from models.availability import DayAvailability, Interval


class RenderingError(RuntimeError):
    """The report document could not be written."""


def format_day_heading(d: date) -> str:
    """Format date as 'Weekday, Month D, YYYY' (platform-safe, no zero-padding)."""
    return f"{d.strftime('%A, %B')} {d.day}, {d.year}"


def format_time(dt: datetime, zone: ZoneInfo) -> str:
    """Format time as 'H:MM AM' on a 12-hour clock (e.g., '9:00 AM')."""
    local = dt.astimezone(zone)
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{hour}:{local.minute:02d} {meridiem}"


def format_slot(slot: Interval, zone: ZoneInfo) -> str:
    """Format free slot as '9:00 AM – 10:30 AM'."""
    return f"{format_time(slot.start, zone)} – {format_time(slot.end, zone)}"


def format_updated(generated_at: datetime, zone: ZoneInfo) -> str:
    local = generated_at.astimezone(zone)
    return f"{local.month}/{local.day}/{local.year} {format_time(local, zone)}"


def day_bullets(day: DayAvailability, zone: ZoneInfo) -> list[str]:
    """Bullet texts for one day; a single marker bullet when fully booked."""
    if day.is_fully_booked:
        return [NO_AVAILABILITY_TEXT]
    return [format_slot(slot, zone) for slot in day.free_slots]


# =============================================================================
# MARKDOWN
# =============================================================================


def render_markdown(report: list[DayAvailability], zone: ZoneInfo, generated_at: datetime) -> str:
    """Render the report as a Markdown document."""
    lines = [f"# {REPORT_TITLE}", "", f"*Last updated: {format_updated(generated_at, zone)}*", ""]

    for day in report:
        lines.append(f"## {format_day_heading(day.window.date)}")
        lines.append("")
        lines.extend(f"- {text}" for text in day_bullets(day, zone))
        lines.append("")

    return "\n".join(lines)


def write_markdown_report(
    report: list[DayAvailability], output_path: Path, zone: ZoneInfo, generated_at: datetime
) -> Path:
    """Write the Markdown report, replacing any previous version."""
    content = render_markdown(report, zone, generated_at)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise RenderingError(f"Could not write report to {output_path}: {e}") from e
    return output_path


# =============================================================================
# EXCEL
# =============================================================================


def write_excel_sheet(ws, report: list[DayAvailability], zone: ZoneInfo, generated_at: datetime):
    """
    Write the report to a worksheet.

    Column A only: title, last-updated line, then a bold heading row per day
    followed by one bullet row per free slot.
    """
    ws.title = REPORT_TITLE
    ws.cell(row=1, column=1, value=REPORT_TITLE).font = Font(bold=True, size=16)
    ws.cell(row=2, column=1, value=f"Last updated: {format_updated(generated_at, zone)}").font = Font(
        italic=True
    )

    row = 4
    for day in report:
        ws.cell(row=row, column=1, value=format_day_heading(day.window.date)).font = Font(
            bold=True, size=13
        )
        row += 1
        for text in day_bullets(day, zone):
            ws.cell(row=row, column=1, value=f"• {text}")
            row += 1
        row += 1

    ws.column_dimensions["A"].width = 40


def write_excel_report(
    report: list[DayAvailability], output_path: Path, zone: ZoneInfo, generated_at: datetime
) -> Path:
    """Write the report as an Excel workbook, replacing any previous version."""
    wb = Workbook()
    write_excel_sheet(wb.active, report, zone, generated_at)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(str(output_path))
    except OSError as e:
        raise RenderingError(f"Could not write report to {output_path}: {e}") from e
    return output_path
