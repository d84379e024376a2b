# src/retro_chip8/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from typing import Optional

from retro_chip8.core.snapshot import Operation
from retro_chip8.common.errors import UnknownOpcodeError
from retro_chip8.arch.chip8.state import Chip8CpuState
from .base import Opcode, Peripherals
from .maps import GROUP_MAP, SUB_MAPS, EXECUTE_MAP, FORMAT_MAP

# @intent:responsibility 16ビットの命令語から命令種別を判定します。該当なしはNone。
def classify(word: int) -> Optional[Opcode]:
    group = (word >> 12) & 0xF
    kind = GROUP_MAP.get(group)
    if kind is not None:
        return kind
    sub = SUB_MAPS.get(group)
    if sub is None:
        return None
    discriminator, table = sub
    return table.get(discriminator(word))

# @intent:responsibility 命令語をデコードし、フィールドを取り出したOperationを返します。
# @intent:post-condition 未定義の命令語ではUnknownOpcodeErrorを送出します。
def decode_opcode(word: int, pc: int) -> Operation:
    """
    CHIP-8の命令語（ビッグエンディアン16ビット）をデコードし、Operationオブジェクトを返します。
    """
    kind = classify(word)
    if kind is None:
        raise UnknownOpcodeError(word, pc)

    fields = {
        "x": (word >> 8) & 0xF,
        "y": (word >> 4) & 0xF,
        "n": word & 0xF,
        "kk": word & 0xFF,
        "nnn": word & 0xFFF,
    }
    mnemonic, format_operands = FORMAT_MAP[kind]
    return Operation(
        opcode_hex=f"{word:04X}",
        mnemonic=mnemonic,
        operands=format_operands(fields),
        kind=kind,
        word=word,
        **fields,
    )

# @intent:responsibility デコードされたCHIP-8命令を実行します。
def execute_instruction(operation: Operation, state: Chip8CpuState, machine: Peripherals) -> None:
    """
    デコードされたCHIP-8命令を実行し、CPUの状態を変更します。
    """
    executor = EXECUTE_MAP.get(operation.kind)
    if executor is None:
        raise UnknownOpcodeError(operation.word, (state.pc - operation.length) & 0xFFFF)
    executor(state, machine, operation)
