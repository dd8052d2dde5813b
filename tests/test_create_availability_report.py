"""
Tests for the availability report script.
"""

import asyncio

import pytest
from openpyxl import load_workbook

from core.config import ConfigurationError
from scripts import create_availability_report as script


@pytest.fixture
def fake_fetch(monkeypatch, sample_raw_event):
    calls = []

    async def fake_fetch_events(calendar_ids, start, end, time_zone):
        calls.append((calendar_ids, start, end, time_zone))
        return [sample_raw_event], [("calendar_not_found", "teresa@example.com/Missing: not found")]

    monkeypatch.setattr("core.config.CALENDAR_IDS", ["teresa@example.com", "teresa@example.com/Missing"])
    monkeypatch.setattr("core.config.SKIP_WEEKENDS", False)
    monkeypatch.setattr(script, "fetch_events", fake_fetch_events)
    return calls


def test_writes_markdown_report(fake_fetch, tmp_path, capsys):
    output_path = tmp_path / "availability.md"

    result = asyncio.run(script.main("2025-11-03", 2, output_path=output_path))

    assert result == output_path
    content = output_path.read_text(encoding="utf-8")
    assert "## Monday, November 3, 2025" in content
    assert "- 8:00 AM – 10:00 AM" in content
    assert "## Tuesday, November 4, 2025" in content

    calendar_ids, start, end, time_zone = fake_fetch[0]
    assert calendar_ids == ["teresa@example.com", "teresa@example.com/Missing"]
    assert (end - start).days == 2
    assert time_zone == "America/New_York"
    assert "calendar_not_found" in capsys.readouterr().out


def test_writes_excel_report(fake_fetch, tmp_path):
    output_path = tmp_path / "availability.xlsx"

    asyncio.run(script.main("2025-11-03", 1, report_format="excel", output_path=output_path))

    values = [row[0] for row in load_workbook(output_path).active.iter_rows(values_only=True)]
    assert "• 11:00 AM – 6:00 PM" in values


def test_default_output_path():
    assert script.default_output_path("markdown").name == "availability.md"
    assert script.default_output_path("excel").name == "availability.xlsx"


def test_configuration_error_before_fetch(fake_fetch, monkeypatch, tmp_path):
    monkeypatch.setattr("core.config.CALENDAR_IDS", [])

    with pytest.raises(ConfigurationError):
        asyncio.run(script.main("2025-11-03", output_path=tmp_path / "availability.md"))

    assert fake_fetch == []


def test_missing_credentials_stop_before_fetch(fake_fetch, monkeypatch, tmp_path):
    monkeypatch.setattr("core.config.GRAPH_APP_ID", "")

    with pytest.raises(ConfigurationError, match="MICROSOFT_GRAPH_APP_ID"):
        asyncio.run(script.main("2025-11-03", output_path=tmp_path / "availability.md"))

    assert fake_fetch == []
