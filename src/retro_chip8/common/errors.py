"""
エミュレータ全体で使用する例外の定義。

CHIP-8コアには回復可能なエラーは存在しません。
ここで定義される例外はすべて致命的であり、再試行されることはありません。
"""


# @intent:responsibility 全てのCHIP-8関連エラーの基底クラス。
class Chip8Error(Exception):
    pass


# @intent:responsibility 定義されていない命令語をデコードしたことを示します。
class UnknownOpcodeError(Chip8Error):
    def __init__(self, word: int, address: int):
        self.word = word
        self.address = address
        super().__init__(f"Unknown opcode {word:#06x} at address {address:#05x}")


# @intent:responsibility サブルーチン呼び出しのネストがスタック容量を超えたことを示します。
class StackOverflowError(Chip8Error):
    def __init__(self, address: int, depth: int):
        self.address = address
        self.depth = depth
        super().__init__(f"Call stack overflow at {address:#05x} (depth {depth})")


# @intent:responsibility 空のスタックからRETを実行したことを示します。
class StackUnderflowError(Chip8Error):
    def __init__(self, address: int):
        self.address = address
        super().__init__(f"Return with empty call stack at {address:#05x}")


# @intent:responsibility 4096バイトのアドレス空間外へのアクセスを示します。
# @intent:rationale Busの既存の呼び出し側がIndexErrorを捕捉しているため、IndexErrorも継承します。
class MemoryAccessError(Chip8Error, IndexError):
    def __init__(self, address: int, size: int):
        self.address = address
        self.size = size
        super().__init__(f"Address {address:#06x} out of bounds for memory of size {size}.")


# @intent:responsibility プログラムイメージがメモリに収まらないことを示します。
class ProgramTooLargeError(Chip8Error, ValueError):
    def __init__(self, length: int, capacity: int):
        self.length = length
        self.capacity = capacity
        super().__init__(f"Program of {length} bytes does not fit in {capacity} bytes of program memory.")
