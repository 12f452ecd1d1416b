"""UTC-everywhere time handling. Invoice dates are UTC calendar dates."""

from datetime import date, datetime, timezone


def now_utc() -> datetime:
    """
    Current time in UTC.

    Use this instead of datetime.now() everywhere.
    """
    return datetime.now(timezone.utc)


def today_iso() -> str:
    """Today's UTC calendar date as YYYY-MM-DD."""
    return now_utc().date().isoformat()


def two_digit_year() -> str:
    """Last two digits of the current UTC year (e.g. '25')."""
    return f"{now_utc().year % 100:02d}"


def parse_date(value: str) -> date:
    """
    Parse a YYYY-MM-DD calendar date.

    Raises ValueError if the string is not an ISO calendar date.
    """
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid date '{value}': expected YYYY-MM-DD")
