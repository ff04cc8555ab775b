"""Countdown widget package exports."""

from __future__ import annotations

from importlib import import_module
from typing import Any

_LAZY_EXPORTS: dict[str, tuple[str, str]] = {
    "AUTO_EXIT_MS_ENV_VAR": ("config", "AUTO_EXIT_MS_ENV_VAR"),
    "LaunchOptions": ("config", "LaunchOptions"),
    "configure_logging": ("config", "configure_logging"),
    "parse_launch_options": ("config", "parse_launch_options"),
    "CountdownScheduler": ("countdown_scheduler", "CountdownScheduler"),
    "ELAPSED_TEXT": ("countdown_scheduler", "ELAPSED_TEXT"),
    "InvalidTargetError": ("countdown_scheduler", "InvalidTargetError"),
    "RenderSink": ("countdown_scheduler", "RenderSink"),
    "TickHandle": ("countdown_scheduler", "TickHandle"),
    "UNSET_TARGET": ("countdown_scheduler", "UNSET_TARGET"),
    "next_tick_delay_ms": ("countdown_scheduler", "next_tick_delay_ms"),
    "parse_target": ("countdown_scheduler", "parse_target"),
    "CountdownWidget": ("countdown_widget", "CountdownWidget"),
    "QtTickTimer": ("countdown_widget", "QtTickTimer"),
    "TARGET_TIMESTAMP_PROPERTY": ("countdown_widget", "TARGET_TIMESTAMP_PROPERTY"),
    "DurationBreakdown": ("duration_format", "DurationBreakdown"),
    "break_down_duration": ("duration_format", "break_down_duration"),
    "format_duration": ("duration_format", "format_duration"),
}

__all__ = [
    *_LAZY_EXPORTS,
    "run",
]


def __getattr__(name: str) -> Any:
    try:
        module_name, attr_name = _LAZY_EXPORTS[name]
    except KeyError as exc:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}") from exc

    module = import_module(f".{module_name}", __name__)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    return sorted([*globals(), *__all__])


def run() -> None:
    """Launch the countdown window."""
    from .main import run as _run

    _run()
