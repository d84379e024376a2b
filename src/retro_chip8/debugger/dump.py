"""
メモリとフレームバッファのテキストダンプ。
"""
from typing import Dict, List, Tuple

from retro_chip8.common.types import Framebuffer
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import DISPLAY_WIDTH, DISPLAY_HEIGHT

BYTES_PER_LINE = 16

# @intent:responsibility [start, end] のメモリを16バイト単位の表形式にします（ログなし読み込み）。
def format_memory(bus: Bus, start: int, end: int) -> str:
    header = "      | " + " ".join(f"{i:02X}" for i in range(BYTES_PER_LINE))
    lines = [header, "------|" + "-" * (BYTES_PER_LINE * 3)]

    line_start = start - (start % BYTES_PER_LINE)
    while line_start <= end:
        cells = []
        for offset in range(BYTES_PER_LINE):
            address = line_start + offset
            if start <= address <= end:
                cells.append(f"{bus.peek(address):02X}")
            else:
                cells.append("  ")
        lines.append(f"0x{line_start:03X} | " + " ".join(cells).rstrip())
        line_start += BYTES_PER_LINE
    return "\n".join(lines)

# @intent:responsibility フレームバッファを1ピクセル2桁の0/1で表します。
def format_framebuffer(framebuffer: Framebuffer) -> str:
    lines = []
    for y in range(DISPLAY_HEIGHT):
        row = framebuffer[y * DISPLAY_WIDTH:(y + 1) * DISPLAY_WIDTH]
        lines.append("".join(f"{pixel:01X}{pixel:01X}" for pixel in row))
    return "\n".join(lines)

# @intent:responsibility レジスタマップを2行で表します。1行目はV0-VF、2行目はその他のレジスタ。
def format_registers(registers: Dict[str, int]) -> str:
    general = " ".join(f"{name}={value:02X}" for name, value in registers.items() if name.startswith("V"))
    others = []
    for name, width in (("PC", 3), ("I", 3), ("SP", 1), ("DT", 2), ("ST", 2)):
        if name in registers:
            others.append(f"{name}={registers[name]:0{width}X}")
    return general + "\n" + " ".join(others)

# @intent:responsibility 逆アセンブル結果を1行1命令で表し、pcの行に矢印を付けます。
def format_disassembly(lines: List[Tuple[int, str, str]], pc: int) -> str:
    rows = []
    for address, hex_word, mnemonic in lines:
        marker = "->" if address == pc else "  "
        rows.append(f"{marker} 0x{address:03X}: {hex_word}  {mnemonic}")
    return "\n".join(rows)
