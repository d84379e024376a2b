# src/retro_chip8/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。
"""
import random
from typing import Dict, List, Optional, Tuple

from retro_chip8.common.types import RegisterLayoutInfo, RegisterInfo
from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.input.keypad import Keypad, QueueKeySource
from retro_chip8.arch.chip8.state import Chip8CpuState, REGISTER_COUNT
from retro_chip8.arch.chip8.font import FONT_SET, FONT_START
from retro_chip8.arch.chip8.instructions import decode_opcode, execute_instruction, Peripherals
from retro_chip8.arch.chip8 import disassembler

# @intent:responsibility CHIP-8 CPUの具体的なエミュレーションロジック（フェッチ、デコード、実行）とタイマー減算を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8 CPUをエミュレートするクラス。
    マシン状態（レジスタ・タイマー・フレームバッファ）とBus上のメモリを単独で所有します。
    """
    def __init__(self, bus: Bus, keypad: Optional[Keypad] = None, rng: Optional[random.Random] = None):
        self._machine = Peripherals(
            bus=bus,
            keypad=keypad if keypad is not None else Keypad(QueueKeySource()),
            rng=rng if rng is not None else random.Random(),
        )
        super().__init__(bus)
        self.load_font()

    @property
    def keypad(self) -> Keypad:
        return self._machine.keypad

    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState()

    # @intent:responsibility 予約領域にフォントテーブルを書き込みます。
    def load_font(self) -> None:
        self._bus.load_block(FONT_START, bytes(FONT_SET))

    # @intent:responsibility ビッグエンディアンの16ビット命令語をPCからフェッチします。
    def _fetch(self) -> int:
        pc = self._state.pc
        return (self._bus.read(pc) << 8) | self._bus.read(pc + 1)

    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode, self._state.pc)

    def _execute(self, operation: Operation) -> None:
        execute_instruction(operation, self._state, self._machine)

    # @intent:responsibility 60Hzティックごとに遅延・サウンドタイマーを1減算します。
    # @intent:post-condition ティック開始時点でサウンドタイマーが非ゼロであったかを返します（音を鳴らすべきか）。
    def tick_timers(self) -> bool:
        state = self._state
        tone = state.sound_timer != 0
        if state.sound_timer:
            state.sound_timer -= 1
        if state.delay_timer:
            state.delay_timer -= 1
        return tone

    def get_framebuffer(self) -> bytes:
        return bytes(self._state.framebuffer)

    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        registers = {f"V{index:X}": s.v[index] for index in range(REGISTER_COUNT)}
        registers.update({"I": s.i, "PC": s.pc, "SP": s.sp, "DT": s.delay_timer, "ST": s.sound_timer})
        return registers

    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{index:X}", 8) for index in range(REGISTER_COUNT)]),
            RegisterLayoutInfo("Index/Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [
                RegisterInfo("DT", 8), RegisterInfo("ST", 8)
            ]),
        ]

    # @intent:responsibility 呼び出しスタックの有効なリターンアドレスを、深い方から順に返します。
    def get_call_stack(self) -> List[int]:
        s = self._state
        return [s.stack[depth] for depth in range(s.sp, 0, -1)]

    def disassemble(self, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
        return disassembler.disassemble(self._bus, start_addr, length)
