"""Utility modules for cross-cutting concerns."""

from utils.timezone import now_utc, today_iso, two_digit_year, parse_date
from utils.currency import format_indian_number, format_inr
