# src/retro_chip8/input/terminal.py
"""
端末（標準入力）からのノンブロッキングなキー入力源。

ヘッドレス実行時にキーパッドへ入力を供給します。端末はcbreakモードに切り替え、
1文字ずつエコーなしで読み取ります。
"""
import select
import sys
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, TextIO

from .keypad import KeySource

# @intent:responsibility 読み取り可能な文字があるときだけ1文字を読み取る、ブロックしないキー入力源。
class TerminalKeySource(KeySource):
    """
    ready は「今読めば即座に1文字返るか」を判定する関数です。
    省略時はPOSIXではselect、Windowsではmsvcrt.kbhitを使います。
    入力がEOFに達した後は常にNoneを返します。
    """
    def __init__(self, stream: Optional[TextIO] = None, ready: Optional[Callable[[], bool]] = None):
        self._stream = stream if stream is not None else sys.stdin
        self._read: Callable[[], str] = lambda: self._stream.read(1)
        self._ready = ready if ready is not None else self._default_ready()
        self._eof = False

    @property
    def at_eof(self) -> bool:
        return self._eof

    def _default_ready(self) -> Callable[[], bool]:
        if sys.platform == "win32":
            import msvcrt
            self._read = msvcrt.getwch
            return msvcrt.kbhit
        return lambda: bool(select.select([self._stream], [], [], 0)[0])

    def poll(self) -> Optional[str]:
        if self._eof or not self._ready():
            return None
        symbol = self._read()
        if symbol == "":
            self._eof = True
            return None
        return symbol


# @intent:responsibility 端末であればcbreakモード（行バッファなし・エコーなし）に切り替え、終了時に元の設定へ戻します。
@contextmanager
def cbreak_mode(stream: Optional[TextIO] = None) -> Iterator[None]:
    stream = stream if stream is not None else sys.stdin
    if sys.platform == "win32" or stream is None or not stream.isatty():
        yield
        return

    import termios
    import tty
    fd = stream.fileno()
    old_settings = termios.tcgetattr(fd)
    try:
        tty.setcbreak(fd)
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)
