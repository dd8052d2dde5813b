"""
Calendar resolution and event fetching from MS Graph.
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from kiota_abstractions.base_request_configuration import RequestConfiguration
from msgraph.generated.models.o_data_errors.o_data_error import ODataError
from msgraph.generated.users.item.calendars.item.calendar_view.calendar_view_request_builder import (
    CalendarViewRequestBuilder,
)

from core.graph_client import get_graph_client
from models.events import CalendarInfo, RawEvent

EVENT_FIELDS = ["subject", "start", "end", "isAllDay", "isCancelled", "showAs"]
PAGE_SIZE = 100


class CalendarNotFoundError(LookupError):
    """A calendar identifier does not resolve to a calendar."""


def split_identifier(identifier: str) -> tuple[str, str | None]:
    """Split 'user@domain/Calendar Name' into (user, calendar name or None)."""
    user, _, calendar_name = identifier.partition("/")
    return user.strip(), calendar_name.strip() or None


async def resolve_calendar(identifier: str) -> CalendarInfo:
    """
    Resolve a calendar identifier to user and calendar IDs.

    'user@domain' resolves to the user's default calendar,
    'user@domain/Calendar Name' to the named calendar (case-insensitive).

    Raises:
        CalendarNotFoundError: if the user has no calendar with that name
        ODataError: if Graph rejects the lookup (e.g. unknown user)
    """
    graph = get_graph_client()
    user_ref, calendar_name = split_identifier(identifier)

    user = await graph.users.by_user_id(user_ref).get()
    if user is None:
        raise CalendarNotFoundError(f"User not found: {user_ref}")

    if calendar_name is None:
        calendar = await graph.users.by_user_id(user.id).calendar.get()
    else:
        calendars_response = await graph.users.by_user_id(user.id).calendars.get()
        calendars = calendars_response.value if calendars_response.value else []
        calendar = next(
            (c for c in calendars if c.name and c.name.lower() == calendar_name.lower()),
            None,
        )

    if calendar is None:
        raise CalendarNotFoundError(f"Calendar not found: {identifier}")

    return {
        "identifier": identifier,
        "user_id": user.id,
        "user_email": user.user_principal_name or user_ref,
        "calendar_id": calendar.id,
        "calendar_name": calendar.name or identifier,
    }


async def list_user_calendars(user_ref: str) -> list[str]:
    """Calendar identifiers available for a user, default calendar first."""
    graph = get_graph_client()
    user = await graph.users.by_user_id(user_ref).get()
    if user is None:
        raise CalendarNotFoundError(f"User not found: {user_ref}")

    calendars_response = await graph.users.by_user_id(user.id).calendars.get()
    calendars = calendars_response.value if calendars_response.value else []

    email = user.user_principal_name or user_ref
    identifiers = [email]
    for calendar in calendars:
        if calendar.name and not calendar.is_default_calendar:
            identifiers.append(f"{email}/{calendar.name}")
    return identifiers


def parse_graph_datetime(value: str | None, time_zone: str | None, zone: ZoneInfo) -> datetime | None:
    """
    Parse a Graph dateTimeTimeZone value.

    Graph returns seven fractional digits ('2025-11-03T09:00:00.0000000');
    they are trimmed to microseconds. Time zone names Python does not know
    (Windows names) fall back to the configured zone, which is what the
    request asked Graph to use.
    """
    if not value:
        return None

    is_utc = value.endswith("Z")
    text = value.rstrip("Z")
    if "." in text:
        head, fraction = text.split(".", 1)
        text = f"{head}.{fraction[:6]}"
    dt = datetime.fromisoformat(text)

    source_zone = zone
    if is_utc:
        source_zone = timezone.utc
    elif time_zone:
        try:
            source_zone = ZoneInfo(time_zone)
        except (ZoneInfoNotFoundError, ValueError):
            pass

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=source_zone)
    return dt.astimezone(zone)


def is_blocking(event) -> bool:
    """Cancelled events and events shown as free don't block time."""
    if event.is_cancelled:
        return False
    show_as = getattr(event.show_as, "value", event.show_as)
    return show_as != "free"


def parse_event(event, calendar_name: str, zone: ZoneInfo) -> RawEvent:
    """Parse MS Graph event into our format. Unreadable times become None."""
    start = None
    end = None
    try:
        if event.start:
            start = parse_graph_datetime(event.start.date_time, event.start.time_zone, zone)
        if event.end:
            end = parse_graph_datetime(event.end.date_time, event.end.time_zone, zone)
    except ValueError:
        pass

    return {
        "subject": event.subject or "",
        "calendar": calendar_name,
        "start": start,
        "end": end,
        "all_day": bool(event.is_all_day),
    }


async def fetch_calendar_events(
    calendar: CalendarInfo, start: datetime, end: datetime, time_zone: str
) -> list[RawEvent]:
    """
    Fetch event instances overlapping [start, end) from a calendar.

    Uses calendarView so recurring events arrive as concrete instances.
    Handles pagination.
    """
    graph = get_graph_client()
    zone = ZoneInfo(time_zone)

    query_params = CalendarViewRequestBuilder.CalendarViewRequestBuilderGetQueryParameters(
        start_date_time=start.isoformat(),
        end_date_time=end.isoformat(),
        select=EVENT_FIELDS,
        orderby=["start/dateTime"],
        top=PAGE_SIZE,
    )
    config = RequestConfiguration(query_parameters=query_params)
    config.headers.add("Prefer", f'outlook.timezone="{time_zone}"')

    view = graph.users.by_user_id(calendar["user_id"]).calendars.by_calendar_id(
        calendar["calendar_id"]
    ).calendar_view

    events = []
    response = await view.get(request_configuration=config)
    while response is not None:
        for event in response.value or []:
            if is_blocking(event):
                events.append(parse_event(event, calendar["calendar_name"], zone))

        if not response.odata_next_link:
            break
        response = await view.with_url(response.odata_next_link).get(
            request_configuration=RequestConfiguration(headers=config.headers)
        )

    return events


async def fetch_events(
    calendar_ids: list[str], start: datetime, end: datetime, time_zone: str
) -> tuple[list[RawEvent], list[tuple[str, str]]]:
    """
    Fetch events from every configured calendar into one flat list.

    Calendars that cannot be resolved are skipped and reported as a
    'calendar_not_found' diagnostic.

    Returns:
        Tuple of (raw_events, diagnostics)
    """
    all_events = []
    diagnostics = []

    for identifier in calendar_ids:
        try:
            calendar = await resolve_calendar(identifier)
        except (CalendarNotFoundError, ODataError) as e:
            message = getattr(getattr(e, "error", None), "message", None) or str(e)
            diagnostics.append(("calendar_not_found", f"{identifier}: {message}"))
            continue

        all_events.extend(await fetch_calendar_events(calendar, start, end, time_zone))

    return all_events, diagnostics
