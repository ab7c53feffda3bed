"""Datetime helpers shared by the services."""

from datetime import date, datetime, timezone

from pydantic import TypeAdapter

_datetime_adapter = TypeAdapter(datetime)


def to_naive_utc(dt: datetime | None) -> datetime | None:
    """Normalize to a naive UTC datetime, the form timestamps are stored in."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def parse_datetime(value: str | datetime | date | None) -> datetime | None:
    """Parse an ISO-8601 date or datetime; blank input yields None.

    Raises ``ValueError`` when the value cannot be read as a date.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_naive_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    value = value.strip()
    if not value:
        return None
    try:
        return to_naive_utc(_datetime_adapter.validate_python(value))
    except Exception as e:
        raise ValueError(f"Invalid date: {value!r}") from e


def format_short_date(dt: datetime) -> str:
    """Render like ``Jan 5``."""
    return f"{dt.strftime('%b')} {dt.day}"
