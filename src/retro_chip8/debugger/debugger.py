# retro_chip8/debugger/debugger.py
"""
デバッガモジュール。

CPUの実行を1命令単位で制御し、ユーザーが指定した条件（ブレークポイント）で
実行を中断させる責務を負います。run() はタイミングコントローラを介さず
最大速度で命令を実行します（タイマーは減算されません）。
タイミングコントローラに渡した場合は、実時間で実行しつつ
step_instruction と check_breakpoints が1命令ごとに呼ばれます。
"""
import copy
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Dict, List, Optional

from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.core.snapshot import Snapshot
from retro_chip8.core.state import CpuState
from retro_chip8.transport.bus import BusAccessType

# @intent:constant 保持する実行履歴の上限。
DEFAULT_HISTORY_LIMIT = 1024

# @intent:responsibility ブレークポイントの条件タイプを定義します。
class BreakpointConditionType(Enum):
    PC_MATCH = "PC_MATCH"               # プログラムカウンタが特定のアドレスに一致
    MEMORY_READ = "MEMORY_READ"         # 特定のアドレスが読み込まれた
    MEMORY_WRITE = "MEMORY_WRITE"       # 特定のアドレスに書き込まれた
    REGISTER_VALUE = "REGISTER_VALUE"   # 特定のレジスタが特定の値になった
    REGISTER_CHANGE = "REGISTER_CHANGE" # 特定のレジスタの値が変化した

# @intent:responsibility ブレークポイントをトリガーする条件を定義します。
@dataclass(frozen=True)
class BreakpointCondition:
    """
    ブレークポイントがヒットするための条件を定義するデータクラス。
    register_name は Chip8Cpu.get_register_map() のキー（"V0"-"VF", "I", "PC", "SP", "DT", "ST"）です。
    """
    condition_type: BreakpointConditionType
    value: Optional[int] = None           # PC_MATCH, REGISTER_VALUEで使用
    address: Optional[int] = None         # MEMORY_READ, MEMORY_WRITEで使用
    register_name: Optional[str] = None   # REGISTER_VALUE, REGISTER_CHANGEで使用
    enabled: bool = True

# @intent:responsibility 実行停止の理由を表します。
class StopReason(Enum):
    BREAKPOINT = "BREAKPOINT"
    STEP_LIMIT = "STEP_LIMIT"
    STOPPED = "STOPPED"

# @intent:responsibility CPUの実行制御とブレークポイント管理を行います。
class Debugger:
    """
    CPUの実行を制御し、ブレークポイントと実行履歴の管理を行うクラス。
    """
    def __init__(self, cpu: AbstractCpu, history_limit: int = DEFAULT_HISTORY_LIMIT):
        self._cpu = cpu
        self._breakpoints: List[BreakpointCondition] = []
        self._running: bool = False
        self._previous_registers: Dict[str, int] = cpu.get_register_map()
        self._last_snapshot: Optional[Snapshot] = None
        # @intent:responsibility 実行履歴（状態はコピー）を保持し、ステップバックをサポートします。
        self._history: Deque[Snapshot] = deque(maxlen=history_limit)
        self._initial_state: CpuState = copy.deepcopy(cpu.get_state())

    def add_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition not in self._breakpoints:
            self._breakpoints.append(condition)

    def remove_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition in self._breakpoints:
            self._breakpoints.remove(condition)

    def get_breakpoints(self) -> List[BreakpointCondition]:
        return list(self._breakpoints)

    def get_history(self) -> List[Snapshot]:
        return list(self._history)

    def get_last_snapshot(self) -> Optional[Snapshot]:
        return self._last_snapshot

    def has_pc_breakpoint(self, pc: int) -> bool:
        return any(
            bp.enabled and bp.condition_type == BreakpointConditionType.PC_MATCH and bp.value == pc
            for bp in self._breakpoints
        )

    def _check_other_breakpoints(self, snapshot: Snapshot, registers: Dict[str, int]) -> bool:
        """
        Snapshotに基づいてPC_MATCH以外のブレークポイントをチェックします。
        """
        for bp in self._breakpoints:
            if not bp.enabled:
                continue

            if bp.condition_type == BreakpointConditionType.MEMORY_READ:
                for access in snapshot.bus_activity:
                    if access.access_type == BusAccessType.READ and access.address == bp.address:
                        return True
            elif bp.condition_type == BreakpointConditionType.MEMORY_WRITE:
                for access in snapshot.bus_activity:
                    if access.access_type == BusAccessType.WRITE and access.address == bp.address:
                        return True
            elif bp.condition_type == BreakpointConditionType.REGISTER_VALUE:
                if bp.register_name in registers and registers[bp.register_name] == bp.value:
                    return True
            elif bp.condition_type == BreakpointConditionType.REGISTER_CHANGE:
                name = bp.register_name
                if name in registers and registers[name] != self._previous_registers.get(name):
                    return True
        return False

    def step_instruction(self) -> Snapshot:
        """
        CPUを1命令分実行し、その結果のSnapshot（状態はコピー）を返します。
        """
        snapshot = self._cpu.step()
        recorded = Snapshot(
            state=copy.deepcopy(snapshot.state),
            operation=snapshot.operation,
            metadata=snapshot.metadata,
            bus_activity=snapshot.bus_activity,
        )
        self._last_snapshot = recorded
        self._history.append(recorded)
        return recorded

    def step_back(self) -> Optional[Snapshot]:
        """
        実行履歴を1つ戻り、CPUとメモリの状態を復元します。
        """
        if not self._history:
            return None

        snapshot_to_revert = self._history.pop()

        # バスアクティビティを逆順にスキャンし、書き込み操作を元に戻す
        bus = self._cpu.bus
        for access in reversed(snapshot_to_revert.bus_activity):
            if access.access_type == BusAccessType.WRITE and access.previous_data is not None:
                bus.load(access.address, access.previous_data)

        if self._history:
            previous_snapshot = self._history[-1]
            self._cpu.restore_state(previous_snapshot.state)
            self._last_snapshot = previous_snapshot
            return previous_snapshot

        self._cpu.restore_state(self._initial_state)
        self._last_snapshot = None
        return None

    # @intent:responsibility 直前に実行した命令の結果と現在のPCを、登録済みのブレークポイントと照合します。
    # @intent:post-condition PCブレークポイントは「次に実行する命令」のアドレスと比較されます。
    def check_breakpoints(self, snapshot: Snapshot) -> bool:
        registers = self._cpu.get_register_map()
        hit = self.has_pc_breakpoint(self._cpu.get_state().pc) or self._check_other_breakpoints(snapshot, registers)
        self._previous_registers = registers
        return hit

    # @intent:responsibility 実行履歴を破棄し、現在の状態をステップバックの起点にします。
    def reset_history(self) -> None:
        self._history.clear()
        self._last_snapshot = None
        self._initial_state = copy.deepcopy(self._cpu.get_state())
        self._previous_registers = self._cpu.get_register_map()

    def run(self, max_steps: Optional[int] = None) -> StopReason:
        """
        ブレークポイントにヒットするか、max_stepsに達するか、stop()が呼ばれるまで実行を継続します。
        開始位置のPCブレークポイントは無視して少なくとも1命令進みます。
        """
        self._running = True
        steps = 0

        while self._running:
            if max_steps is not None and steps >= max_steps:
                self._running = False
                return StopReason.STEP_LIMIT

            snapshot = self.step_instruction()
            steps += 1

            if self.check_breakpoints(snapshot):
                self._running = False
                print(f"Breakpoint hit at PC: {self._cpu.get_state().pc:#05x}")
                return StopReason.BREAKPOINT

        return StopReason.STOPPED

    def stop(self) -> None:
        self._running = False
