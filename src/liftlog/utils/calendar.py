"""Calendar-day policy and date bucketing helpers.

Every statistic that groups sets by day goes through ``calendar_day`` so that
streaks, weekly frequency, trend weeks and the heatmap agree on where one day
ends and the next begins. Timestamps are stored in UTC; the calendar day is
taken in a single configured zone (device local when none is set).
"""

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def resolve_timezone(name: str | tzinfo | None = None) -> tzinfo:
    """Resolve a zone name to a tzinfo; None means the device's local zone."""
    if isinstance(name, tzinfo):
        return name
    if not name:
        return datetime.now().astimezone().tzinfo
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {name}") from e


def parse_timestamp(value: str | date | datetime, tz: tzinfo) -> datetime:
    """Parse a stored or user-supplied value into an aware datetime.

    Naive values are wall-clock time in ``tz``. A bare date means midnight
    of that day in ``tz``.
    """
    if isinstance(value, str):
        value = value.strip()
        if len(value) == 10:
            value = date.fromisoformat(value)
        else:
            value = datetime.fromisoformat(value)

    if not isinstance(value, datetime):
        return datetime.combine(value, time.min, tzinfo=tz)
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value


def calendar_day(value: str | date | datetime, tz: tzinfo) -> date:
    """Map a timestamp to its calendar day in ``tz``."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    return parse_timestamp(value, tz).astimezone(tz).date()


def to_storage(value: datetime, tz: tzinfo) -> str:
    """Serialize a timestamp for the store (UTC, fixed width)."""
    return (
        parse_timestamp(value, tz)
        .astimezone(timezone.utc)
        .isoformat(timespec="microseconds")
    )


def day_bounds(day: date, tz: tzinfo) -> tuple[str, str]:
    """Storage-format [start, end) bounds of a calendar day in ``tz``."""
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return to_storage(start, tz), to_storage(end, tz)


def week_start(day: date) -> date:
    """Monday of the calendar week containing ``day``."""
    return day - timedelta(days=day.weekday())


def day_window(end: date, days: int) -> list[date]:
    """The ``days`` calendar days ending at ``end``, oldest first."""
    return [end - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


def day_name(day: date) -> str:
    return DAY_NAMES[day.weekday()]


def week_label(day: date) -> str:
    """Short chart label for a week, e.g. ``Jan 5``."""
    return f"{MONTH_NAMES[day.month - 1]} {day.day}"
