"""Date manipulation utilities"""

import re
from datetime import date, datetime, timedelta
from typing import Optional

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_UK_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")


def days_between(a: date, b: date) -> int:
    """Absolute difference in whole calendar days"""
    return abs((a - b).days)


def signed_days_until(today: date, target: date) -> int:
    """Days from today until target; negative once target has passed"""
    return (target - today).days


def add_days(from_date: date, days: int) -> date:
    """Return a new date offset by a number of calendar days"""
    return from_date + timedelta(days=days)


def add_years(from_date: date, years: int) -> date:
    """Add calendar years; 29 February rolls back to 28 February"""
    try:
        return from_date.replace(year=from_date.year + years)
    except ValueError:
        return from_date.replace(year=from_date.year + years, day=28)


def parse_date(value: object) -> Optional[date]:
    """
    Parse a calendar date from upstream data.

    Accepts date/datetime objects, ISO "YYYY-MM-DD" and UK "DD/MM/YYYY".
    Anything else (empty, malformed, impossible day) is not computable and
    yields None instead of raising.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    # Tolerate ISO timestamps by keeping the date part
    candidate = text.split("T", 1)[0]
    if _ISO_DATE.match(candidate):
        try:
            return date.fromisoformat(candidate)
        except ValueError:
            return None

    match = _UK_DATE.match(text)
    if match:
        day, month, year = (int(part) for part in match.groups())
        try:
            return date(year, month, day)
        except ValueError:
            return None

    return None
