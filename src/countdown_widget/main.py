"""Application entrypoint for the countdown desktop window."""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

from PySide6 import QtCore, QtWidgets

from .config import LaunchOptions, configure_logging, parse_launch_options
from .countdown_scheduler import InvalidTargetError
from .countdown_widget import CountdownWidget

logger = logging.getLogger(__name__)


def build_window(options: LaunchOptions | None = None) -> CountdownWidget:
    """Create the top-level countdown window."""
    resolved = options or LaunchOptions()
    window = CountdownWidget()
    window.setWindowTitle(resolved.title)
    window.set_target(resolved.target)
    return window


def _request_auto_exit(
    app: QtWidgets.QApplication,
    window: CountdownWidget,
) -> None:
    """Close the window and quit, for automation and smoke tests."""
    window.close()
    QtCore.QTimer.singleShot(0, app.quit)


def run(argv: Sequence[str] | None = None) -> None:
    """Launch the countdown window."""
    options = parse_launch_options(argv)
    configure_logging(options.log_level)

    app = QtWidgets.QApplication.instance()
    owns_app = app is None
    if app is None:
        app = QtWidgets.QApplication(sys.argv[:1])

    try:
        window = build_window(options)
    except InvalidTargetError as exc:
        raise SystemExit(f"countdown-widget: {exc}") from exc

    logger.info("counting down to %s", window.target_timestamp)
    window.show()

    if owns_app:
        if options.auto_exit_ms is not None:
            QtCore.QTimer.singleShot(
                options.auto_exit_ms,
                lambda: _request_auto_exit(app, window),
            )
        app.exec()


if __name__ == "__main__":
    run()
