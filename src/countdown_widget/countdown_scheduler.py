"""Second-aligned countdown scheduler, independent of any GUI framework."""

from __future__ import annotations

import logging
import math
import re
import time
from collections.abc import Callable
from datetime import date, datetime, time as dt_time, timedelta, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Protocol

from .duration_format import MS_PER_SECOND, format_duration

logger = logging.getLogger(__name__)

UNSET_TARGET = 0
ELAPSED_TEXT = "Already elapsed!"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)
_INTEGER_PATTERN = re.compile(r"-?[0-9]+")


class InvalidTargetError(ValueError):
    """Raised when a target value cannot be read as a timestamp."""


class RenderSink(Protocol):
    def set_text(self, text: str) -> None: ...


class TickHandle(Protocol):
    def cancel(self) -> None: ...


ScheduleOnce = Callable[[int, Callable[[], None]], TickHandle]


def current_time_ms() -> int:
    """Wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


def _datetime_to_epoch_ms(value: datetime) -> int:
    # Naive values are read as local time.
    aware = value if value.tzinfo is not None else value.astimezone()
    return (aware - _EPOCH) // _ONE_MS


def _parse_target_text(text: str) -> int:
    if _INTEGER_PATTERN.fullmatch(text):
        try:
            return int(text)
        except ValueError as exc:
            raise InvalidTargetError(f"cannot read {text!r} as a date/time") from exc

    # Date-only ISO text is midnight UTC; date-time text without an offset is local.
    try:
        day = date.fromisoformat(text)
    except ValueError:
        pass
    else:
        return _datetime_to_epoch_ms(datetime.combine(day, dt_time(), timezone.utc))

    iso_text = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        return _datetime_to_epoch_ms(datetime.fromisoformat(iso_text))
    except ValueError:
        pass

    try:
        return _datetime_to_epoch_ms(parsedate_to_datetime(text))
    except (TypeError, ValueError, IndexError):
        pass

    raise InvalidTargetError(f"cannot read {text!r} as a date/time")


def parse_target(value: Any) -> int:
    """
    Normalize a target value to epoch milliseconds.

    ``None`` and blank strings mean "unset" (``UNSET_TARGET``). Numbers are
    used as milliseconds directly, ``datetime`` values are converted, and
    strings may hold digits, ISO-8601 or RFC 2822 date/time text. Date-only
    ISO text is read as midnight UTC; date-time text and naive ``datetime``
    values without an offset are read as local time.
    """
    if value is None:
        return UNSET_TARGET
    if isinstance(value, bool):
        raise InvalidTargetError("target must not be a bool")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidTargetError(f"target must be finite, got {value!r}")
        return int(value)
    if isinstance(value, datetime):
        return _datetime_to_epoch_ms(value)
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return UNSET_TARGET
        return _parse_target_text(stripped)
    raise InvalidTargetError(
        f"unsupported target type {type(value).__name__!r}"
    )


def next_tick_delay_ms(now_ms: int) -> int:
    """Milliseconds from ``now_ms`` to the next whole-second boundary."""
    return MS_PER_SECOND - (now_ms % MS_PER_SECOND)


class CountdownScheduler:
    """
    Renders the time left until a target timestamp once per second.

    The host supplies a one-shot timer primitive (``schedule_once``) and a
    render sink. At most one tick is pending at any time: every schedule is
    preceded by a cancel of the previous handle.
    """

    def __init__(
        self,
        *,
        schedule_once: ScheduleOnce,
        time_provider: Callable[[], int] = current_time_ms,
    ) -> None:
        self._schedule_once = schedule_once
        self._time_provider = time_provider
        self._target_timestamp = UNSET_TARGET
        self._render_sink: RenderSink | None = None
        self._tick_handle: TickHandle | None = None
        self._generation = 0
        self._last_rendered_text: str | None = None

    @property
    def target_timestamp(self) -> int:
        return self._target_timestamp

    @property
    def is_active(self) -> bool:
        return self._render_sink is not None

    @property
    def has_pending_tick(self) -> bool:
        return self._tick_handle is not None

    @property
    def last_rendered_text(self) -> str | None:
        return self._last_rendered_text

    def activate(self, render_sink: RenderSink) -> None:
        """Bind the render sink and start ticking toward the current target."""
        self._render_sink = render_sink
        logger.debug("countdown activated with target %s", self._target_timestamp)
        self.set_target(self._target_timestamp)

    def set_target(self, value: Any) -> None:
        """Replace the target and render immediately."""
        target = parse_target(value)
        self._cancel_pending_tick()
        self._target_timestamp = target
        logger.debug("countdown target set to %s", target)
        self.tick()

    def tick(self) -> None:
        """Render the remaining time and schedule the next second-aligned tick."""
        now = int(self._time_provider())
        if self._render_sink is None:
            return

        remaining_ms = self._target_timestamp - now
        if remaining_ms <= 0:
            text = ELAPSED_TEXT
        else:
            text = format_duration(remaining_ms)

        self._last_rendered_text = text
        self._render_sink.set_text(text)

        self._cancel_pending_tick()
        generation = self._generation
        self._tick_handle = self._schedule_once(
            next_tick_delay_ms(now),
            lambda: self._on_tick_due(generation),
        )

    def deactivate(self) -> None:
        """Cancel the pending tick and release the target and render sink."""
        self._cancel_pending_tick()
        self._target_timestamp = UNSET_TARGET
        self._render_sink = None
        logger.debug("countdown deactivated")

    def _on_tick_due(self, generation: int) -> None:
        if generation != self._generation:
            logger.debug("ignoring stale tick from generation %s", generation)
            return
        self._tick_handle = None
        self.tick()

    def _cancel_pending_tick(self) -> None:
        self._generation += 1
        handle = self._tick_handle
        self._tick_handle = None
        if handle is not None:
            handle.cancel()


__all__ = [
    "CountdownScheduler",
    "ELAPSED_TEXT",
    "InvalidTargetError",
    "RenderSink",
    "ScheduleOnce",
    "TickHandle",
    "UNSET_TARGET",
    "current_time_ms",
    "next_tick_delay_ms",
    "parse_target",
]
