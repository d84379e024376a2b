"""
表示面とトーン信号のインターフェース、およびGUIに依存しない実装。
"""
import sys
from abc import ABC, abstractmethod
from typing import Optional, TextIO

from retro_chip8.common.types import Framebuffer
from retro_chip8.arch.chip8.state import DISPLAY_WIDTH, DISPLAY_HEIGHT

# @intent:constant 点灯ピクセルの描画文字列。横方向を2文字にして縦横比を整えます。
PIXEL_ON = "@@"
PIXEL_OFF = "  "

# @intent:responsibility 60Hzティックごとにフレームバッファを受け取って描画する表示面。
class DisplaySurface(ABC):
    # @intent:pre-condition framebufferは読み取り専用として扱い、変更してはいけません。
    @abstractmethod
    def render(self, framebuffer: Framebuffer) -> None:
        pass

# @intent:responsibility サウンドタイマーが非ゼロのティックごとに呼ばれるトーン信号。
class ToneSignal(ABC):
    @abstractmethod
    def beep(self) -> None:
        pass


class NullDisplay(DisplaySurface):
    def render(self, framebuffer: Framebuffer) -> None:
        pass


class NullTone(ToneSignal):
    def beep(self) -> None:
        pass


# @intent:responsibility 端末のベル文字でトーンを表現します。
class BellTone(ToneSignal):
    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream if stream is not None else sys.stdout

    def beep(self) -> None:
        self._stream.write("\a")
        self._stream.flush()


# @intent:utility_function フレームバッファを複数行の文字列に変換します。
def framebuffer_to_text(framebuffer: Framebuffer, on: str = PIXEL_ON, off: str = PIXEL_OFF) -> str:
    lines = []
    for y in range(DISPLAY_HEIGHT):
        row = framebuffer[y * DISPLAY_WIDTH:(y + 1) * DISPLAY_WIDTH]
        lines.append("".join(on if pixel else off for pixel in row))
    return "\n".join(lines)


# @intent:responsibility 最後に描画されたフレームを文字列として保持する表示面（ヘッドレス実行とテスト用）。
class TextDisplay(DisplaySurface):
    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream
        self.frames_rendered = 0
        self.last_frame = ""

    def render(self, framebuffer: Framebuffer) -> None:
        self.last_frame = framebuffer_to_text(framebuffer)
        self.frames_rendered += 1
        if self._stream is not None:
            # カーソルを先頭に戻して上書きする
            self._stream.write("\x1b[H" + self.last_frame + "\n")
            self._stream.flush()
