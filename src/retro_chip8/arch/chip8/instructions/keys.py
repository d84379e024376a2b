"""
キーパッド命令の実装。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.common.types import NO_KEY
from retro_chip8.arch.chip8.state import Chip8CpuState
from .base import Peripherals, skip_next

# --- SKP Vx (Ex9E) ---
# キーが押されていなければスキップしない。
def execute_skp(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    key = machine.keypad.read_decaying()
    if key != NO_KEY and key == state.v[op.x]:
        skip_next(state)

# --- SKNP Vx (ExA1) ---
# キーが押されていない場合も「異なる」としてスキップする。
def execute_sknp(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    key = machine.keypad.read_decaying()
    if key == NO_KEY or key != state.v[op.x]:
        skip_next(state)

# --- LD Vx, K (Fx0A) ---
# @intent:responsibility キー入力を待ちます。押下がなければPCを戻し、次のティックで同じ命令を再実行させます。
# @intent:rationale 実際には待機せず、タイマーと画面更新はその間も進み続けます。
def execute_ld_v_k(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    key = machine.keypad.read_immediate()
    if key == NO_KEY:
        state.pc = (state.pc - 2) & 0xFFFF
    else:
        state.v[op.x] = key
