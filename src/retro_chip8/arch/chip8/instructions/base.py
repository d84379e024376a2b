# src/retro_chip8/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通定義とユーティリティ。
"""
import random
from dataclasses import dataclass, field
from enum import Enum

from retro_chip8.transport.bus import Bus, MEMORY_SIZE
from retro_chip8.common.errors import MemoryAccessError
from retro_chip8.input.keypad import Keypad
from retro_chip8.arch.chip8.state import Chip8CpuState

# @intent:data_structure デコード結果の命令種別。CHIP-8の全命令を網羅する閉じた集合です。
class Opcode(Enum):
    CLS = "00E0"
    RET = "00EE"
    JP = "1nnn"
    CALL = "2nnn"
    SE_IMM = "3xkk"
    SNE_IMM = "4xkk"
    SE_REG = "5xy0"
    LD_IMM = "6xkk"
    ADD_IMM = "7xkk"
    LD_REG = "8xy0"
    OR = "8xy1"
    AND = "8xy2"
    XOR = "8xy3"
    ADD_REG = "8xy4"
    SUB = "8xy5"
    SHR = "8xy6"
    SUBN = "8xy7"
    SHL = "8xyE"
    SNE_REG = "9xy0"
    LD_I = "Annn"
    JP_V0 = "Bnnn"
    RND = "Cxkk"
    DRW = "Dxyn"
    SKP = "Ex9E"
    SKNP = "ExA1"
    LD_V_DT = "Fx07"
    LD_V_K = "Fx0A"
    LD_DT_V = "Fx15"
    LD_ST_V = "Fx18"
    ADD_I = "Fx1E"
    LD_F = "Fx29"
    LD_B = "Fx33"
    LD_MEM_V = "Fx55"
    LD_V_MEM = "Fx65"

# @intent:responsibility 命令の実行時にCPU状態以外で必要となる周辺機器（メモリ、キーパッド、乱数源）をまとめます。
@dataclass
class Peripherals:
    bus: Bus
    keypad: Keypad
    rng: random.Random = field(default_factory=random.Random)

# @intent:utility_function PCを次の命令まで進めます（スキップ命令用）。
def skip_next(state: Chip8CpuState) -> None:
    state.pc = (state.pc + 2) & 0xFFFF

# @intent:utility_function I から count バイトがアドレス空間に収まることを、メモリに触れる前に確認します。
def require_range(start: int, count: int) -> None:
    last = start + count - 1
    if count > 0 and not 0 <= last < MEMORY_SIZE:
        raise MemoryAccessError(last, MEMORY_SIZE)
