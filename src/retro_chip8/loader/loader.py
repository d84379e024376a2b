# retro_chip8/loader/loader.py
"""
プログラムローダーモジュール。
CHIP-8のバイナリイメージを 0x200 から始まるメモリにそのままコピーします。
"""
from pathlib import Path
from typing import Union

from retro_chip8.transport.bus import Bus, MEMORY_SIZE
from retro_chip8.common.errors import ProgramTooLargeError
from retro_chip8.arch.chip8.state import PROGRAM_START

# @intent:constant ロード可能な最大サイズ（0x200-0xFFF）。
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START

class ProgramLoader:
    """
    CHIP-8プログラムイメージをバスにロードするローダー。
    ロード先の開始アドレスからメモリ末尾まで、かつ max_size バイトまでを受け付けます。
    """
    def __init__(self, start_address: int = PROGRAM_START, max_size: int = MAX_PROGRAM_SIZE):
        self._start_address = start_address
        self._capacity = min(max_size, MEMORY_SIZE - start_address)

    @property
    def capacity(self) -> int:
        return self._capacity

    # @intent:pre-condition len(data) <= capacity でなければProgramTooLargeErrorを送出し、メモリは変更しません。
    def load_bytes(self, data: bytes, bus: Bus) -> int:
        if len(data) > self._capacity:
            raise ProgramTooLargeError(len(data), self._capacity)
        bus.load_block(self._start_address, bytes(data))
        return len(data)

    def load_binary(self, file_path: Union[str, Path], bus: Bus) -> int:
        """
        ファイルからバイナリイメージを読み込み、ロードしたバイト数を返します。
        """
        with open(file_path, 'rb') as f:
            data = f.read()
        return self.load_bytes(data, bus)
