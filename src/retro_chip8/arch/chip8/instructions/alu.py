"""
算術論理演算命令の実装。

VFへのフラグ書き込みは演算結果の格納後に行います。
そのため X が F の場合、VFにはフラグ値が残ります。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.arch.chip8.state import Chip8CpuState
from .base import Peripherals

# --- ADD Vx, kk (7xkk) ---
# フラグは変化しない。
def execute_add_imm(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    state.v[op.x] = (state.v[op.x] + op.kk) & 0xFF

# --- OR / AND / XOR (8xy1, 8xy2, 8xy3) ---
def execute_or(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    state.v[op.x] |= state.v[op.y]
    state.vf = 0

def execute_and(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    state.v[op.x] &= state.v[op.y]
    state.vf = 0

def execute_xor(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    state.v[op.x] ^= state.v[op.y]
    state.vf = 0

# --- ADD Vx, Vy (8xy4) ---
def execute_add_reg(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    total = state.v[op.x] + state.v[op.y]
    state.v[op.x] = total & 0xFF
    state.vf = 1 if total > 0xFF else 0

# --- SUB Vx, Vy (8xy5) ---
def execute_sub(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    vx, vy = state.v[op.x], state.v[op.y]
    state.v[op.x] = (vx - vy) & 0xFF
    state.vf = 1 if vx >= vy else 0

# --- SHR Vx (8xy6) ---
def execute_shr(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    vx = state.v[op.x]
    state.v[op.x] = vx >> 1
    state.vf = vx & 0x1

# --- SUBN Vx, Vy (8xy7) ---
def execute_subn(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    vx, vy = state.v[op.x], state.v[op.y]
    state.v[op.x] = (vy - vx) & 0xFF
    state.vf = 1 if vy >= vx else 0

# --- SHL Vx (8xyE) ---
def execute_shl(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    vx = state.v[op.x]
    state.v[op.x] = (vx << 1) & 0xFF
    state.vf = (vx >> 7) & 0x1

# --- RND Vx, kk (Cxkk) ---
def execute_rnd(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    state.v[op.x] = machine.rng.randrange(0x100) & op.kk
