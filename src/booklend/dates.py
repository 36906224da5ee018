# ABOUTME: Civil-calendar date helpers for loan bookkeeping.
# ABOUTME: All loan dates are plain dates in one fixed time zone, stored as YYYY-MM-DD text.

from datetime import date, datetime, timedelta, timezone, tzinfo

DATE_FORMAT = "%Y-%m-%d"


def civil_today(tz: tzinfo, now: datetime | None = None) -> date:
    """Return today's date in the given zone.

    Args:
        tz: The fixed local zone loans are booked in.
        now: An aware instant to convert; defaults to the current time.
            Naive datetimes are taken to be UTC.
    """
    instant = now or datetime.now(timezone.utc)
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(tz).date()


def add_days(day: date, days: int) -> date:
    """Calendar arithmetic, independent of month and year boundaries."""
    return day + timedelta(days=days)


def format_date(day: date) -> str:
    return day.strftime(DATE_FORMAT)


def parse_date(text: str) -> date:
    """Parse a stored YYYY-MM-DD string.

    Raises:
        ValueError: If the text is not a valid date.
    """
    return datetime.strptime(text.strip(), DATE_FORMAT).date()


def utc_timestamp(now: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp used for registration times."""
    instant = now or datetime.now(timezone.utc)
    return instant.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"
