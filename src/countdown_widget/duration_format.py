"""Human-readable breakdown of countdown durations."""

from __future__ import annotations

from dataclasses import dataclass

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE
MS_PER_DAY = 24 * MS_PER_HOUR
# Fixed, calendar-naive unit lengths.
MS_PER_MONTH = 28 * MS_PER_DAY
MS_PER_YEAR = 365 * MS_PER_DAY

_SEGMENT_SEPARATOR = ", "


@dataclass(frozen=True, slots=True)
class DurationBreakdown:
    """Duration split into descending whole units."""

    years: int = 0
    months: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    def segments(self) -> list[tuple[int, str, bool]]:
        """Return ``(value, unit_name, show_zero)`` rows in display order."""
        return [
            (self.years, "year", False),
            (self.months, "month", False),
            (self.days, "day", False),
            (self.hours, "hour", False),
            (self.minutes, "minute", False),
            (self.seconds, "second", True),
        ]


def _validate_duration_ms(duration_ms: int) -> int:
    value = int(duration_ms)
    if value < 0:
        raise ValueError("duration_ms must be >= 0")
    return value


def break_down_duration(duration_ms: int) -> DurationBreakdown:
    """
    Split ``duration_ms`` into years, months, days, hours, minutes and seconds.

    Each unit consumes its share before the next smaller unit is computed.
    Sub-second remainders are dropped.
    """
    remaining = _validate_duration_ms(duration_ms)

    years, remaining = divmod(remaining, MS_PER_YEAR)
    months, remaining = divmod(remaining, MS_PER_MONTH)
    days, remaining = divmod(remaining, MS_PER_DAY)
    hours, remaining = divmod(remaining, MS_PER_HOUR)
    minutes, remaining = divmod(remaining, MS_PER_MINUTE)
    seconds = remaining // MS_PER_SECOND

    return DurationBreakdown(
        years=years,
        months=months,
        days=days,
        hours=hours,
        minutes=minutes,
        seconds=seconds,
    )


def _format_segment(value: int, unit_name: str) -> str:
    suffix = "" if value == 1 else "s"
    return f"{value} {unit_name}{suffix}"


def format_duration(duration_ms: int) -> str:
    """Return display text such as ``"1 year, 3 months, 10 days, 0 seconds"``."""
    breakdown = break_down_duration(duration_ms)
    parts = [
        _format_segment(value, unit_name)
        for value, unit_name, show_zero in breakdown.segments()
        if value > 0 or show_zero
    ]
    return _SEGMENT_SEPARATOR.join(parts)


__all__ = [
    "DurationBreakdown",
    "MS_PER_DAY",
    "MS_PER_HOUR",
    "MS_PER_MINUTE",
    "MS_PER_MONTH",
    "MS_PER_SECOND",
    "MS_PER_YEAR",
    "break_down_duration",
    "format_duration",
]
