"""
Text conversions for dates and durations, used by the date serializers.

Dates are datetime.datetime objects. With no format they are written with isoformat() and read with
dateutil's ISO parser; otherwise the format is a strftime/strptime format string.

Durations are datetime.timedelta objects. A duration is formatted by adding it to the epoch and
formatting the resulting time, so "%H:%M:%S" turns 90 seconds into "00:01:30". That means durations
of a day or more wrap around. Negative durations can't be represented.
"""
import datetime
from typing import Optional

from dateutil import parser

EPOCH = datetime.datetime(1970, 1, 1)
_EPOCH_DATE_FORMAT = "%Y-%m-%d"


def format_date(d: datetime.datetime, fmt: Optional[str] = None) -> str:
    if fmt is None:
        return d.isoformat()
    return d.strftime(fmt)


def parse_date(s: str, fmt: Optional[str] = None) -> datetime.datetime:
    """Parse a date, raising ValueError if it doesn't match the format (or isn't ISO-8601 if
    there is no format)."""
    if fmt is None:
        return parser.isoparse(s)
    return datetime.datetime.strptime(s, fmt)


def format_duration(td: datetime.timedelta, fmt: str) -> str:
    if td < datetime.timedelta(0):
        raise ValueError(f"Cannot format negative duration {td}")
    return (EPOCH + td).strftime(fmt)


def parse_duration(s: str, fmt: str) -> datetime.timedelta:
    """Parse a duration by reading it as a time on the epoch date. Raises ValueError on failure."""
    d = datetime.datetime.strptime(f"{EPOCH.strftime(_EPOCH_DATE_FORMAT)} {s}", f"{_EPOCH_DATE_FORMAT} {fmt}")
    return d - EPOCH
