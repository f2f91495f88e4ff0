"""
Qt window for the BigPixel editor.

The window is a thin shell around :class:`~bigpixel.editor.EditorState`: a
frame timer delivers ticks, mouse presses become paint events, and each frame
draws the state's render snapshot.  Qt widget coordinates (origin top-left,
y down) are converted to the editor's centred, y-up window coordinates here.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from PySide6.QtCore import QElapsedTimer, QPointF, QRectF, Qt, QTimer
from PySide6.QtGui import QCloseEvent, QColor, QMouseEvent, QPainter, QPaintEvent, QPen
from PySide6.QtWidgets import QApplication, QMainWindow, QWidget

from .color import GRID_COLOR, WHITE, Color
from .config import WINDOW_POSITION, WINDOW_TITLE, EditorConfig
from .coordinates import Point
from .editor import EditorState, PaintEvent, TickEvent, handle_event

logger = logging.getLogger(__name__)


def to_qcolor(color: Color) -> QColor:
    return QColor.fromRgbF(*color)


class CanvasWidget(QWidget):
    """Draws the canvas and forwards input and frame ticks to the editor."""

    def __init__(self, state: EditorState, config: EditorConfig, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.state = state
        width, height = state.window_size(config.window_padding)
        self.setFixedSize(width, height)

        self._grid_pen = QPen(to_qcolor(GRID_COLOR))
        self._grid_pen.setWidth(1)
        self._background = to_qcolor(WHITE)

        self._clock = QElapsedTimer()
        self._clock.start()
        self._frame_timer = QTimer(self)
        self._frame_timer.setInterval(max(1, round(1000 / config.fps)))
        self._frame_timer.timeout.connect(self._advance_frame)
        self._frame_timer.start()

    def to_window_point(self, position: QPointF) -> Point:
        return (position.x() - self.width() / 2, self.height() / 2 - position.y())

    def _advance_frame(self) -> None:
        elapsed = self._clock.restart() / 1000.0
        handle_event(self.state, TickEvent(elapsed))
        self.update()

    def mousePressEvent(self, event: QMouseEvent) -> None:  # noqa: N802
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        use_white = bool(event.modifiers() & Qt.KeyboardModifier.ShiftModifier)
        point = self.to_window_point(event.position())
        if handle_event(self.state, PaintEvent(point, use_white)):
            self.update()

    def paintEvent(self, event: QPaintEvent) -> None:  # noqa: N802
        painter = QPainter(self)
        try:
            painter.fillRect(self.rect(), self._background)
            centre_x, centre_y = self.width() / 2, self.height() / 2
            for (x, y), (block_w, block_h), color in self.state.snapshot().blocks():
                rect = QRectF(
                    centre_x + x - block_w / 2,
                    centre_y - y - block_h / 2,
                    block_w,
                    block_h,
                )
                painter.fillRect(rect, to_qcolor(color))
                painter.setPen(self._grid_pen)
                painter.drawRect(rect)
        finally:
            painter.end()


class MainWindow(QMainWindow):
    def __init__(self, state: EditorState, config: EditorConfig) -> None:
        super().__init__()
        self.state = state
        self.setWindowTitle(f"{WINDOW_TITLE} - {state.path.name}")
        self.canvas_widget = CanvasWidget(state, config, self)
        self.setCentralWidget(self.canvas_widget)
        self.move(*WINDOW_POSITION)

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802
        if self.state.save_pending():
            logger.info("Saved %s on exit", self.state.path)
        elif self.state.dirty:
            logger.warning("Unsaved changes to %s were lost", self.state.path)
        super().closeEvent(event)


def run_editor(state: EditorState, config: EditorConfig) -> int:
    """Open the editor window and run the Qt event loop until it closes."""
    app = QApplication.instance() or QApplication(sys.argv[:1])
    window = MainWindow(state, config)
    window.show()
    return app.exec()
