# src/retro_chip8/arch/chip8/state.py
"""
CHIP-8 CPU固有の状態定義。
"""
from dataclasses import dataclass, field
from typing import List

from retro_chip8.core.state import CpuState

# @intent:constant 表示領域の大きさ（ピクセル）。
DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32

REGISTER_COUNT = 16
STACK_SIZE = 16

# @intent:constant プログラムのロード開始アドレス。0x000-0x1FFはインタプリタ予約領域。
PROGRAM_START = 0x200

# @intent:constant キャリー/ボロー/衝突フラグとして上書きされるレジスタVFの番号。
FLAG_REGISTER = 0xF


def _blank_framebuffer() -> bytearray:
    return bytearray(DISPLAY_WIDTH * DISPLAY_HEIGHT)


# @intent:responsibility CHIP-8の全てのレジスタ、スタック、タイマー、フレームバッファを保持します。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8 CPUの状態を保持するデータクラス。
    メモリ本体はBusに接続されたRAMが保持し、ここには含みません。

    sp は0が空を表し、CALLでインクリメントしてから stack[sp] に格納します。
    したがって stack[0] は使用されません。
    """
    pc: int = PROGRAM_START
    i: int = 0x000     # Index Register
    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    stack: List[int] = field(default_factory=lambda: [0] * STACK_SIZE)
    delay_timer: int = 0
    sound_timer: int = 0
    framebuffer: bytearray = field(default_factory=_blank_framebuffer)

    @property
    def vf(self) -> int:
        return self.v[FLAG_REGISTER]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[FLAG_REGISTER] = value & 0xFF

    # @intent:responsibility フレームバッファ上の1ピクセルを返します。
    def pixel(self, x: int, y: int) -> int:
        return self.framebuffer[y * DISPLAY_WIDTH + x]

    def clear_framebuffer(self) -> None:
        self.framebuffer[:] = _blank_framebuffer()
