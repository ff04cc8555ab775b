"""Qt host widget that displays a CountdownScheduler."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from PySide6 import QtCore, QtGui, QtWidgets

from .countdown_scheduler import CountdownScheduler, InvalidTargetError, current_time_ms

logger = logging.getLogger(__name__)

TARGET_TIMESTAMP_PROPERTY = "target-timestamp"
OBSERVED_PROPERTIES = (TARGET_TIMESTAMP_PROPERTY,)


class _QtTickHandle:
    """Cancels one scheduled shot of a ``QtTickTimer``."""

    def __init__(self, owner: QtTickTimer, generation: int) -> None:
        self._owner = owner
        self._generation = generation

    def cancel(self) -> None:
        self._owner._cancel(self._generation)


class QtTickTimer(QtCore.QObject):
    """
    One-shot scheduling primitive backed by a single precise ``QTimer``.

    Scheduling again re-arms the same timer, so at most one shot is pending.
    A handle only cancels the shot it was issued for.
    """

    def __init__(self, parent: QtCore.QObject | None = None) -> None:
        super().__init__(parent)
        self._callback: Callable[[], None] | None = None
        self._generation = 0

        self._timer = QtCore.QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setTimerType(QtCore.Qt.TimerType.PreciseTimer)
        self._timer.timeout.connect(self._fire)

    @property
    def is_pending(self) -> bool:
        return self._timer.isActive()

    @property
    def remaining_ms(self) -> int:
        return self._timer.remainingTime()

    def schedule_once(
        self, delay_ms: int, callback: Callable[[], None]
    ) -> _QtTickHandle:
        self._generation += 1
        self._callback = callback
        self._timer.start(max(0, int(delay_ms)))
        return _QtTickHandle(self, self._generation)

    def _cancel(self, generation: int) -> None:
        if generation != self._generation:
            return
        self._timer.stop()
        self._callback = None

    @QtCore.Slot()
    def _fire(self) -> None:
        callback = self._callback
        self._callback = None
        if callback is not None:
            callback()


class _LabelRenderSink:
    def __init__(self, widget: CountdownWidget) -> None:
        self._widget = widget

    def set_text(self, text: str) -> None:
        self._widget._render_text(text)


class CountdownWidget(QtWidgets.QWidget):
    """
    Widget showing the time left until a target timestamp.

    The countdown runs while the widget is shown and stops when it is hidden
    or closed. The target can be set with ``set_target`` or through the
    ``"target-timestamp"`` dynamic property.
    """

    text_changed = QtCore.Signal(str)
    error_occurred = QtCore.Signal(str)

    def __init__(
        self,
        *,
        target: Any = None,
        time_provider: Callable[[], int] = current_time_ms,
        parent: QtWidgets.QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._tick_timer = QtTickTimer(self)
        self._scheduler = CountdownScheduler(
            schedule_once=self._tick_timer.schedule_once,
            time_provider=time_provider,
        )
        self._pending_target: Any = target
        self._observed_values: dict[str, Any] = {}

        self._init_layout()

    @property
    def scheduler(self) -> CountdownScheduler:
        return self._scheduler

    @property
    def tick_timer(self) -> QtTickTimer:
        return self._tick_timer

    @property
    def is_active(self) -> bool:
        return self._scheduler.is_active

    @property
    def display_text(self) -> str:
        return self._text_label.text()

    @property
    def target_timestamp(self) -> int:
        return self._scheduler.target_timestamp

    def set_target(self, value: Any) -> None:
        """Set the countdown target; raises ``InvalidTargetError`` on bad input."""
        self._scheduler.set_target(value)
        if not self._scheduler.is_active:
            self._pending_target = self._scheduler.target_timestamp

    def showEvent(self, event: QtGui.QShowEvent) -> None:
        super().showEvent(event)
        if self._scheduler.is_active:
            return
        try:
            self._scheduler.set_target(self._pending_target)
        except InvalidTargetError as exc:
            self._report_invalid_target(exc)
        self._scheduler.activate(_LabelRenderSink(self))

    def hideEvent(self, event: QtGui.QHideEvent) -> None:
        self._detach()
        super().hideEvent(event)

    def closeEvent(self, event: QtGui.QCloseEvent) -> None:
        self._detach()
        super().closeEvent(event)

    def event(self, event: QtCore.QEvent) -> bool:
        if event.type() == QtCore.QEvent.Type.DynamicPropertyChange:
            self._sync_observed_properties()
        return super().event(event)

    def _sync_observed_properties(self) -> None:
        for name in OBSERVED_PROPERTIES:
            value = self.property(name)
            if name in self._observed_values and self._observed_values[name] == value:
                continue
            if name not in self._observed_values and value is None:
                continue
            self._observed_values[name] = value
            self._property_changed(name, value)

    def _property_changed(self, name: str, value: Any) -> None:
        if name != TARGET_TIMESTAMP_PROPERTY:
            return
        try:
            self.set_target(value)
        except InvalidTargetError as exc:
            self._report_invalid_target(exc)

    def _report_invalid_target(self, exc: InvalidTargetError) -> None:
        message = str(exc).strip()
        logger.warning("rejected countdown target: %s", message)
        if message:
            self.error_occurred.emit(message)

    def _detach(self) -> None:
        if not self._scheduler.is_active:
            return
        self._pending_target = self._scheduler.target_timestamp
        self._scheduler.deactivate()

    def _render_text(self, text: str) -> None:
        if self._text_label.text() == text:
            return
        self._text_label.setText(text)
        self.text_changed.emit(text)

    def _init_layout(self) -> None:
        self.setStyleSheet("""
            QLabel#countdown_text_label {
                font-size: 18px;
                font-weight: 600;
                padding: 4px 8px;
            }
            """)

        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(6, 6, 6, 6)

        self._text_label = QtWidgets.QLabel(self)
        self._text_label.setObjectName("countdown_text_label")
        self._text_label.setAlignment(QtCore.Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._text_label)


__all__ = [
    "CountdownWidget",
    "OBSERVED_PROPERTIES",
    "QtTickTimer",
    "TARGET_TIMESTAMP_PROPERTY",
]
