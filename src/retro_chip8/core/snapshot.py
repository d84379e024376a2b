# retro_chip8/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1命令実行後のCPUとバスの状態を記録するデータ構造を定義します。
UIへの情報提供と、デバッグ時の状態記録に用いる責務を負います。
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from retro_chip8.core.state import CpuState
from retro_chip8.transport.bus import BusAccessType, BusAccess


# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    デコードされた命令の詳細（HEX、ニーモニック、オペランド、デコード済みフィールド）を記録するデータクラス。
    kindはアーキテクチャ固有の命令種別（閉じた列挙型）です。
    """
    opcode_hex: str # 例: "A2F0"
    mnemonic: str # 例: "LD"
    operands: List[str] = field(default_factory=list) # 例: ["I", "0x2F0"]
    kind: Optional[Enum] = None
    word: int = 0
    x: int = 0
    y: int = 0
    n: int = 0
    kk: int = 0
    nnn: int = 0
    cycle_count: int = 1
    length: int = 2 # 命令のバイト長

    def text(self) -> str:
        if self.operands:
            return f"{self.mnemonic} {', '.join(self.operands)}"
        return self.mnemonic

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True)
class Metadata:
    """
    実行に関するメタデータ（累計命令数、トレース文字列など）を記録するデータクラス。
    """
    cycle_count: int
    symbol_info: Optional[str] = None # 例: "0x200: LD V0, 0x0A"

# @intent:responsibility ある一時点におけるCPUとバスの状態を記録します。
@dataclass(frozen=True)
class Snapshot:
    """
    1命令実行直後のCPUとバスの状態を記録したデータ構造。
    stateはCPUが保持する状態オブジェクトへの参照であり、コピーではありません。
    履歴として保持する場合はDebuggerがコピーを取ります。
    """
    state: CpuState
    operation: Operation
    metadata: Metadata
    bus_activity: List[BusAccess] = field(default_factory=list)

    def writes(self) -> List[BusAccess]:
        return [a for a in self.bus_activity if a.access_type == BusAccessType.WRITE]
