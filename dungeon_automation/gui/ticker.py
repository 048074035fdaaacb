import logging
from collections.abc import Callable

from PyQt6.QtCore import QObject, QTimer

LOGGER = logging.getLogger(__name__)


class QtTicker(QObject):
    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._callback: Callable[[], None] | None = None
        self._timer = QTimer(self)
        self._timer.setSingleShot(False)
        self._timer.timeout.connect(self._on_timeout)

    @property
    def is_active(self) -> bool:
        return self._timer.isActive()

    def _on_timeout(self) -> None:
        if self._callback is not None:
            self._callback()

    def start(self, interval_ms: int, callback: Callable[[], None]) -> None:
        if self._timer.isActive():
            LOGGER.debug("Ticker already running, ignoring start request")
            return
        self._callback = callback
        self._timer.start(interval_ms)

    def stop(self) -> None:
        self._timer.stop()
        self._callback = None
