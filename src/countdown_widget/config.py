"""Launch options read from the command line and environment."""

from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

DEFAULT_TITLE = "Countdown"
DEFAULT_LOG_LEVEL = "WARNING"
TARGET_ENV_VAR = "COUNTDOWN_TARGET"
LOG_LEVEL_ENV_VAR = "COUNTDOWN_LOG_LEVEL"
AUTO_EXIT_MS_ENV_VAR = "COUNTDOWN_AUTO_EXIT_MS"

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True, slots=True)
class LaunchOptions:
    """Resolved options for one application run."""

    target: str | None = None
    title: str = DEFAULT_TITLE
    auto_exit_ms: int | None = None
    log_level: str = DEFAULT_LOG_LEVEL


def _as_positive_int(raw_value: str | None) -> int | None:
    if raw_value is None:
        return None
    try:
        value = int(raw_value)
    except ValueError:
        return None
    if value <= 0:
        return None
    return value


def _as_optional_str(raw_value: str | None) -> str | None:
    if raw_value is None:
        return None
    stripped = raw_value.strip()
    return stripped or None


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="countdown-widget",
        description="Show the time remaining until a target date/time.",
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=None,
        help=(
            "Target as epoch milliseconds, ISO-8601 or RFC 2822 text. "
            f"Defaults to ${TARGET_ENV_VAR}."
        ),
    )
    parser.add_argument(
        "--title",
        default=DEFAULT_TITLE,
        help="Window title.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help=f"Logging level name. Defaults to ${LOG_LEVEL_ENV_VAR} or WARNING.",
    )
    return parser


def parse_launch_options(
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> LaunchOptions:
    """Resolve launch options; explicit arguments win over the environment."""
    env = os.environ if environ is None else environ
    args = build_argument_parser().parse_args(argv)

    target = _as_optional_str(args.target)
    if target is None:
        target = _as_optional_str(env.get(TARGET_ENV_VAR))

    log_level = _as_optional_str(args.log_level) or _as_optional_str(
        env.get(LOG_LEVEL_ENV_VAR)
    )

    return LaunchOptions(
        target=target,
        title=args.title,
        auto_exit_ms=_as_positive_int(env.get(AUTO_EXIT_MS_ENV_VAR)),
        log_level=(log_level or DEFAULT_LOG_LEVEL).upper(),
    )


def resolve_log_level(level_name: str) -> int:
    level = logging.getLevelName(str(level_name).strip().upper())
    if isinstance(level, int):
        return level
    return logging.WARNING


def configure_logging(level_name: str = DEFAULT_LOG_LEVEL) -> None:
    """Install the root handler used by the desktop entrypoint."""
    logging.basicConfig(level=resolve_log_level(level_name), format=_LOG_FORMAT)


__all__ = [
    "AUTO_EXIT_MS_ENV_VAR",
    "DEFAULT_TITLE",
    "LOG_LEVEL_ENV_VAR",
    "LaunchOptions",
    "TARGET_ENV_VAR",
    "build_argument_parser",
    "configure_logging",
    "parse_launch_options",
    "resolve_log_level",
]
