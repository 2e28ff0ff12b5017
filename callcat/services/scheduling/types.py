"""Value types passed between the scheduling converter and its callers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional


@dataclass(frozen=True)
class WallClock:
    """A date and clock time as a user reads it in *zone*.

    Not a point in time on its own; ``zone`` disambiguates it.
    """

    date: date
    time: time
    zone: str

    @property
    def date_value(self) -> str:
        """Date picker value (YYYY-MM-DD)."""
        return self.date.isoformat()

    @property
    def time_value(self) -> str:
        """Time picker value (HH:MM)."""
        return f"{self.time.hour:02d}:{self.time.minute:02d}"

    def as_tuple(self) -> tuple[str, str]:
        return self.date_value, self.time_value


@dataclass(frozen=True)
class MinimumSchedulable:
    """Earliest selectable picker values.

    ``min_time`` is only set when ``min_date`` is today in the zone; on any
    later date every time is selectable.
    """

    min_date: str
    min_time: Optional[str] = None


@dataclass(frozen=True)
class TimezoneOption:
    """One entry of the timezone selector."""

    zone: str
    label: str
    offset_minutes: int  # local minus UTC
