# ABOUTME: Timestamp helpers shared by every record store.
# ABOUTME: Records store UTC ISO-8601 strings with millisecond precision and a Z suffix.

from collections.abc import Callable
from datetime import date, datetime, timezone

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def iso_timestamp(moment: datetime) -> str:
    """Format an aware datetime as e.g. 2024-08-01T09:30:00.000Z."""
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """Parse a stored timestamp or bare YYYY-MM-DD date into an aware UTC datetime.

    Raises:
        ValueError: If value is not an ISO-8601 date or datetime.
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_day(value: str) -> date:
    """Parse the calendar day out of a due date or timestamp string."""
    return date.fromisoformat(value.strip()[:10])
