"""
組み込みの16進数字フォント。

各グリフは5バイト（4x5ピクセル、上位4ビットを使用）で、
数字 d のグリフはアドレス 5 * d から始まります。
"""
from typing import List

# @intent:constant フォントテーブルの配置先アドレス（予約領域の先頭）。
FONT_START = 0x000
GLYPH_SIZE = 5

FONT_SET: List[int] = [
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
]


# @intent:utility_function 数字（下位4ビットのみ使用）をグリフの先頭アドレスに変換します。
def font_address(digit: int) -> int:
    return FONT_START + GLYPH_SIZE * (digit & 0xF)
