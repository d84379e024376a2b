"""
分岐・サブルーチン・条件スキップ命令の実装。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.common.errors import StackOverflowError, StackUnderflowError
from retro_chip8.arch.chip8.state import Chip8CpuState, STACK_SIZE
from .base import Peripherals, skip_next

# --- RET (00EE) ---
def execute_ret(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    if state.sp == 0:
        raise StackUnderflowError(state.pc - 2)
    state.pc = state.stack[state.sp]
    state.sp -= 1

# --- JP (1nnn) ---
def execute_jp(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    state.pc = op.nnn

# --- CALL (2nnn) ---
# @intent:pre-condition ネストは最大 STACK_SIZE - 1 段（stack[0] は使用しない）。
def execute_call(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    if state.sp >= STACK_SIZE - 1:
        raise StackOverflowError(state.pc - 2, state.sp + 1)
    state.sp += 1
    state.stack[state.sp] = state.pc
    state.pc = op.nnn

# --- SE Vx, kk (3xkk) ---
def execute_se_imm(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    if state.v[op.x] == op.kk:
        skip_next(state)

# --- SNE Vx, kk (4xkk) ---
def execute_sne_imm(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    if state.v[op.x] != op.kk:
        skip_next(state)

# --- SE Vx, Vy (5xy0) ---
def execute_se_reg(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    if state.v[op.x] == state.v[op.y]:
        skip_next(state)

# --- SNE Vx, Vy (9xy0) ---
def execute_sne_reg(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    if state.v[op.x] != state.v[op.y]:
        skip_next(state)

# --- JP V0, nnn (Bnnn) ---
# 結果がアドレス空間外になった場合は次のフェッチでMemoryAccessErrorとなる。
def execute_jp_v0(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    state.pc = op.nnn + state.v[0]
