# src/retro_chip8/arch/chip8/disassembler.py
"""
CHIP-8 Disassembler

メモリ上のバイナリデータを解析し、CHIP-8のニーモニックに変換します。
Instruction Layerのデコードロジックを再利用し、バスアクセスログを汚さないようにpeekで読み込みます。
"""
from typing import List, Tuple

from retro_chip8.transport.bus import Bus, MEMORY_SIZE
from retro_chip8.common.errors import UnknownOpcodeError
from retro_chip8.arch.chip8.instructions import decode_opcode

# @intent:responsibility 1命令語を表示用文字列に変換します。未定義の命令語はデータ（DW）として表示します。
def format_word(word: int, address: int) -> str:
    try:
        return decode_opcode(word, address).text()
    except UnknownOpcodeError:
        return f"DW {word:#06x}"

# @intent:responsibility 指定されたメモリ範囲を逆アセンブルし、表示用データを生成します。
def disassemble(bus: Bus, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
    """
    指定された範囲（バイト数）のメモリを2バイト単位で逆アセンブルします。

    Returns:
        List of (address, hex_bytes, mnemonic) tuples.
    """
    result = []
    current_addr = start_addr
    end_addr = min(start_addr + length, MEMORY_SIZE - 1)

    while current_addr < end_addr:
        word = (bus.peek(current_addr) << 8) | bus.peek(current_addr + 1)
        result.append((current_addr, f"{word:04X}", format_word(word, current_addr)))
        current_addr += 2

    return result
