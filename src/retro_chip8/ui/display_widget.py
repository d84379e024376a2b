# src/retro_chip8/ui/display_widget.py
"""
64x32のフレームバッファを描画するQtウィジェットと、
それを表示面（DisplaySurface）/トーン信号として使うためのアダプタ。
"""
from PySide6.QtWidgets import QWidget, QApplication
from PySide6.QtGui import QPainter, QColor, QKeyEvent, QPaintEvent
from PySide6.QtCore import Qt, QSize

from retro_chip8.common.types import Framebuffer
from retro_chip8.input.keypad import QueueKeySource
from retro_chip8.arch.chip8.state import DISPLAY_WIDTH, DISPLAY_HEIGHT
from retro_chip8.ui.surface import DisplaySurface, ToneSignal

# @intent:responsibility フレームバッファをスケーリングして描画し、キー入力をキー入力源へ渡します。
class Chip8DisplayWidget(QWidget):
    def __init__(self, key_source: QueueKeySource, scale: int = 10,
                 foreground: str = "#887ECB", background: str = "#50459B", parent=None):
        super().__init__(parent)
        self._key_source = key_source
        self._scale = max(1, scale)
        self._foreground = QColor(foreground)
        self._background = QColor(background)
        self._frame = bytes(DISPLAY_WIDTH * DISPLAY_HEIGHT)
        self.setFocusPolicy(Qt.StrongFocus)
        self.setMinimumSize(DISPLAY_WIDTH * self._scale, DISPLAY_HEIGHT * self._scale)

    def sizeHint(self) -> QSize:
        return QSize(DISPLAY_WIDTH * self._scale, DISPLAY_HEIGHT * self._scale)

    # @intent:responsibility フレームバッファのコピーを保持し、再描画を要求します。
    def set_frame(self, framebuffer: Framebuffer) -> None:
        self._frame = bytes(framebuffer)
        self.update()

    def frame(self) -> bytes:
        return self._frame

    def paintEvent(self, event: QPaintEvent):
        painter = QPainter(self)
        painter.fillRect(self.rect(), self._background)
        cell_w = self.width() / DISPLAY_WIDTH
        cell_h = self.height() / DISPLAY_HEIGHT
        for y in range(DISPLAY_HEIGHT):
            row = y * DISPLAY_WIDTH
            for x in range(DISPLAY_WIDTH):
                if self._frame[row + x]:
                    painter.fillRect(int(x * cell_w), int(y * cell_h), int(cell_w + 1), int(cell_h + 1), self._foreground)
        painter.end()

    def keyPressEvent(self, event: QKeyEvent):
        text = event.text()
        if text and not event.isAutoRepeat():
            self._key_source.push(text)
        super().keyPressEvent(event)


# @intent:responsibility Chip8DisplayWidgetを表示面として使うためのアダプタ。
class QtDisplaySurface(DisplaySurface):
    def __init__(self, widget: Chip8DisplayWidget):
        self._widget = widget

    def render(self, framebuffer: Framebuffer) -> None:
        self._widget.set_frame(framebuffer)


class QtTone(ToneSignal):
    def beep(self) -> None:
        QApplication.beep()
