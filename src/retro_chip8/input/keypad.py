# src/retro_chip8/input/keypad.py
"""
キーパッド入力アダプタ。

ホスト側のノンブロッキングなキー入力源を、CHIP-8の16キー（0x0-0xF）に変換します。
キーの「離した」イベントは得られないため、最後に押されたキーを一定回数の
空ポーリングの間だけ保持することで「押され続けている」状態を近似します。
"""
from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, Iterable, Optional

from retro_chip8.common.types import KeyCode, KeyMap, NO_KEY

# @intent:constant ホストのキー配置（QWERTYの左側4x4）からCHIP-8キーへの標準マッピング。
#   1 2 3 4      1 2 3 C
#   q w e r  ->  4 5 6 D
#   a s d f      7 8 9 E
#   z x c v      A 0 B F
DEFAULT_KEY_MAP: KeyMap = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "q": 0x4, "w": 0x5, "e": 0x6, "r": 0xD,
    "a": 0x7, "s": 0x8, "d": 0x9, "f": 0xE,
    "z": 0xA, "x": 0x0, "c": 0xB, "v": 0xF,
}

# @intent:constant 最後に押されたキーを保持する時間（秒）の目安。
DEFAULT_HOLD_SECONDS = 1.0

# @intent:utility_function 命令実行レートから、hold_seconds 秒に相当する空ポーリング回数を求めます。
def decay_polls_for(instruction_hz: float, hold_seconds: float = DEFAULT_HOLD_SECONDS) -> int:
    return max(1, round(instruction_hz * hold_seconds))

# @intent:constant 既定の命令実行レート（1024Hz）で約1秒に相当する空ポーリング回数。
DEFAULT_DECAY_POLLS = decay_polls_for(1024.0)


# @intent:responsibility ホストのキー入力源のインターフェースを定義します。
class KeySource(ABC):
    # @intent:post-condition 新たに押されたキーのシンボル、なければNoneを返します。決してブロックしません。
    @abstractmethod
    def poll(self) -> Optional[str]:
        pass


# @intent:responsibility キーシンボルをFIFOで保持する入力源。テストとQtフロントエンドで使用します。
class QueueKeySource(KeySource):
    def __init__(self, symbols: Iterable[str] = ()):
        self._queue: Deque[str] = deque(symbols)

    def push(self, symbol: str) -> None:
        self._queue.append(symbol)

    def poll(self) -> Optional[str]:
        if self._queue:
            return self._queue.popleft()
        return None

    def __len__(self) -> int:
        return len(self._queue)


# @intent:responsibility 減衰付き読み取りと即時読み取りの2つのモードでキー状態を提供します。
class Keypad:
    """
    CHIP-8のキーパッド。

    read_decaying はSKP/SKNP用で、最後に押されたキーを decay_polls 回の空ポーリングの間保持します。
    read_immediate はLD Vx, K用で、そのポーリングで押されたキーのみを返します。
    """
    def __init__(self, source: KeySource, key_map: Optional[KeyMap] = None, decay_polls: int = DEFAULT_DECAY_POLLS):
        if decay_polls <= 0:
            raise ValueError("decay_polls must be a positive integer.")
        self._source = source
        self._key_map: KeyMap = dict(DEFAULT_KEY_MAP if key_map is None else key_map)
        self._decay_polls = decay_polls
        self._stored: KeyCode = NO_KEY
        self._empty_polls = 0

    @property
    def current_key(self) -> KeyCode:
        return self._stored

    @property
    def decay_polls(self) -> int:
        return self._decay_polls

    @property
    def source(self) -> KeySource:
        return self._source

    # @intent:responsibility ホストのキーシンボルをキーパッド値に変換します。未定義はNO_KEY。
    def map_symbol(self, symbol: Optional[str]) -> KeyCode:
        if symbol is None:
            return NO_KEY
        return self._key_map.get(symbol, self._key_map.get(symbol.lower(), NO_KEY))

    def read_decaying(self) -> KeyCode:
        symbol = self._source.poll()
        if symbol is None:
            self._empty_polls += 1
            if self._empty_polls >= self._decay_polls:
                self._empty_polls = 0
                self._stored = NO_KEY
            return self._stored

        self._empty_polls = 0
        self._stored = self.map_symbol(symbol)
        return self._stored

    def read_immediate(self) -> KeyCode:
        return self.map_symbol(self._source.poll())
