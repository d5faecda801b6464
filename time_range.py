# time_range.py
# Parses 12-hour "<start> - <end>" time ranges and tests interval overlap.

import re
from datetime import datetime
from typing import Iterable, Tuple

from exceptions import InvalidTimeFormat

__all__ = ["parse_time", "parse_time_range", "intervals_conflict", "has_time_conflict"]

_CLOCK = re.compile(r"^(\d{1,2}):(\d{2})(am|pm)$", re.IGNORECASE | re.ASCII)
_SEPARATOR = " - "


def parse_time(text: str) -> datetime:
    # Convert a clock time such as "2:00pm" into an instant on the reference day 1900-01-01.
    if not isinstance(text, str):
        raise InvalidTimeFormat(text)

    match = _CLOCK.match(text.strip())
    if not match:
        raise InvalidTimeFormat(text)

    hour, minute, modifier = match.groups()
    try:
        # %I only accepts 1..12 and %M only 0..59, so out-of-range values land here.
        return datetime.strptime(f"{int(hour)}:{minute}{modifier.upper()}", "%I:%M%p")
    except ValueError:
        raise InvalidTimeFormat(text) from None


def parse_time_range(text: str) -> Tuple[datetime, datetime]:
    # Split "9:00am - 10:30am" into its start and end instants.
    if not isinstance(text, str):
        raise InvalidTimeFormat(text)

    parts = text.split(_SEPARATOR)
    if len(parts) != 2:
        raise InvalidTimeFormat(text)

    try:
        return parse_time(parts[0]), parse_time(parts[1])
    except InvalidTimeFormat:
        # Report the whole range, not just the half that failed.
        raise InvalidTimeFormat(text) from None


def intervals_conflict(s1: datetime, e1: datetime, s2: datetime, e2: datetime) -> bool:
    # Half-open overlap: a class ending exactly when another starts is fine.
    return s1 < e2 and e1 > s2


def has_time_conflict(occupied: Iterable, start: datetime, end: datetime) -> bool:
    # True when [start, end) overlaps any interval already committed on that day.
    return any(intervals_conflict(start, end, slot.start, slot.end) for slot in occupied)
