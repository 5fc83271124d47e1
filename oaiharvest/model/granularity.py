from __future__ import annotations

import enum
from datetime import date, datetime, timezone
from typing import Union


class DateGranularity(str, enum.Enum):
    """Date resolution a repository advertises in its Identify response."""

    DATE = "YYYY-MM-DD"
    DATE_TIME = "YYYY-MM-DDThh:mm:ssZ"

    @classmethod
    def from_string(cls, value: str) -> "DateGranularity":
        text = (value or "").strip()
        for member in cls:
            if member.value == text:
                return member
        raise ValueError(f"Unknown date granularity: {value!r}")

    @property
    def strftime_format(self) -> str:
        if self is DateGranularity.DATE_TIME:
            return "%Y-%m-%dT%H:%M:%SZ"
        return "%Y-%m-%d"

    def format_date(self, value: Union[date, datetime]) -> str:
        """Render ``value`` as a from/until argument at this resolution."""
        if isinstance(value, datetime):
            if value.tzinfo is not None:
                value = value.astimezone(timezone.utc)
            return value.strftime(self.strftime_format)
        if self is DateGranularity.DATE_TIME:
            return datetime(value.year, value.month, value.day).strftime(self.strftime_format)
        return value.strftime(self.strftime_format)

    def parse_datestamp(self, text: str) -> datetime:
        """Read a datestamp as an aware UTC datetime.

        Day-only stamps are accepted from DateTime servers too; several
        repositories mix both in one response.
        """
        formats = [self.strftime_format]
        formats += [m.strftime_format for m in DateGranularity if m is not self]
        for fmt in formats:
            try:
                parsed = datetime.strptime(text.strip(), fmt)
            except ValueError:
                continue
            return parsed.replace(tzinfo=timezone.utc)
        raise ValueError(f"Unparseable datestamp: {text!r}")

    def __str__(self) -> str:
        return self.value


class AutoDetect:
    """Marker telling the client to ask the server for its granularity."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "AUTO_DETECT"


AUTO_DETECT = AutoDetect()

GranularitySetting = Union[DateGranularity, AutoDetect]
