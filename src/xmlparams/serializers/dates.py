"""Serializers for dates (datetime.datetime) and durations (datetime.timedelta). The formats default
to those in the [Dates] section of the configuration; see xmlparams.utils.dates for how they
are used."""
import datetime
from typing import Optional

from xmlparams import config
from xmlparams.exceptions import ParseError
from xmlparams.serializers.array import ArraySerializer
from xmlparams.serializers.simple import SimpleSerializer
from xmlparams.utils import dates


class DateSerializer(SimpleSerializer):
    fmt: Optional[str]  # None for ISO-8601

    def __init__(self, fmt: Optional[str] = None):
        super().__init__(datetime.datetime, "date")
        self.fmt = fmt if fmt is not None else config.getDateFormat()

    def serialize(self, value) -> str:
        if value is None:
            return "null"
        return dates.format_date(value, self.fmt)

    def deserialize(self, s: str) -> datetime.datetime:
        try:
            return dates.parse_date(s, self.fmt)
        except ValueError as e:
            raise ParseError(s, "a date", f"expected format {self.fmt or 'ISO-8601'}") from e


class DurationSerializer(SimpleSerializer):
    fmt: str

    def __init__(self, fmt: Optional[str] = None):
        super().__init__(datetime.timedelta, "duration")
        self.fmt = fmt or config.getDurationFormat()

    def serialize(self, value) -> str:
        if value is None:
            return "null"
        return dates.format_duration(value, self.fmt)

    def deserialize(self, s: str) -> datetime.timedelta:
        try:
            return dates.parse_duration(s, self.fmt)
        except ValueError as e:
            raise ParseError(s, "a duration", f"expected format {self.fmt}") from e


class DateArraySerializer(ArraySerializer):
    """Lists of dates, either from a format or from an existing DateSerializer"""
    def __init__(self, fmt_or_component=None):
        if isinstance(fmt_or_component, DateSerializer):
            super().__init__(fmt_or_component)
        else:
            super().__init__(DateSerializer(fmt_or_component))


class DurationArraySerializer(ArraySerializer):
    """Lists of durations, either from a format or from an existing DurationSerializer"""
    def __init__(self, fmt_or_component=None):
        if isinstance(fmt_or_component, DurationSerializer):
            super().__init__(fmt_or_component)
        else:
            super().__init__(DurationSerializer(fmt_or_component))
