"""Strict parsing of user-supplied dates and times.

Dates are YYYY-MM-DD, times are HH:MM (24h). Anything else raises
ValidationError before storage is touched.
"""

import re
from datetime import date, datetime, time, timedelta

from roombooking.domain.errors import ValidationError

_DATE_PATTERN = re.compile(r"^([0-9]{4})-([0-9]{2})-([0-9]{2})$")
_TIME_PATTERN = re.compile(r"^([0-9]{2}):([0-9]{2})$")

MIN_YEAR = 1
MAX_YEAR = 9999

# Availability queries always check a slot of this length.
AVAILABILITY_SLOT = timedelta(hours=1)


def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD calendar date.

    Raises:
        ValidationError: On malformed input, impossible dates or a year
            outside [MIN_YEAR, MAX_YEAR].
    """
    match = _DATE_PATTERN.match(value.strip()) if value else None
    if match is None:
        raise ValidationError(f"Invalid date '{value}', expected YYYY-MM-DD")

    year = int(match.group(1))
    if not (MIN_YEAR <= year <= MAX_YEAR):
        raise ValidationError(f"Year {year} is outside [{MIN_YEAR}, {MAX_YEAR}]")

    try:
        return date(year, int(match.group(2)), int(match.group(3)))
    except ValueError as exc:
        raise ValidationError(f"Invalid date '{value}': {exc}") from exc


def parse_time(value: str, field: str = "time") -> time:
    """Parse an HH:MM time of day.

    Raises:
        ValidationError: On malformed input or out-of-range hour/minute.
    """
    match = _TIME_PATTERN.match(value.strip()) if value else None
    if match is None:
        raise ValidationError(f"Invalid {field} '{value}', expected HH:MM")

    try:
        return time(int(match.group(1)), int(match.group(2)))
    except ValueError as exc:
        raise ValidationError(f"Invalid {field} '{value}': {exc}") from exc


def parse_interval(start_value: str, end_value: str) -> tuple[time, time]:
    """Parse start/end times and require start < end."""
    start = parse_time(start_value, "start time")
    end = parse_time(end_value, "end time")
    if start >= end:
        raise ValidationError(
            f"Start time {start_value} must be before end time {end_value}"
        )
    return start, end


def availability_window(on_date: date, start: time) -> tuple[time, time]:
    """Return the slot checked by availability queries.

    The slot is AVAILABILITY_SLOT long and clamped to the end of the day
    instead of wrapping past midnight.
    """
    slot_start = datetime.combine(on_date, start)
    slot_end = slot_start + AVAILABILITY_SLOT
    if slot_end.date() != on_date:
        return start, time.max
    return start, slot_end.time()
