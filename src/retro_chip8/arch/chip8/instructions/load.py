"""
ロード/ストア命令、インデックスレジスタ操作、タイマー操作の実装。

Iを基点とするメモリアクセスはBus経由で行われ、
4096バイトの範囲外であればMemoryAccessErrorとなります。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.font import font_address
from .base import Peripherals, require_range

# --- LD Vx, kk (6xkk) ---
def execute_ld_imm(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    state.v[op.x] = op.kk

# --- LD Vx, Vy (8xy0) ---
def execute_ld_reg(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    state.v[op.x] = state.v[op.y]

# --- LD I, nnn (Annn) ---
def execute_ld_i(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    state.i = op.nnn

# --- ADD I, Vx (Fx1E) ---
# フラグは変化しない。
def execute_add_i(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    state.i = (state.i + state.v[op.x]) & 0xFFFF

# --- LD F, Vx (Fx29) ---
def execute_ld_f(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    state.i = font_address(state.v[op.x])

# --- LD B, Vx (Fx33) ---
# @intent:responsibility Vxの10進3桁（百、十、一の位）を I, I+1, I+2 に書き込みます。
# @intent:pre-condition I+2 が範囲外なら何も書き込まずにMemoryAccessErrorを送出します。
def execute_ld_b(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    require_range(state.i, 3)
    value = state.v[op.x]
    machine.bus.write(state.i, value // 100)
    machine.bus.write(state.i + 1, (value // 10) % 10)
    machine.bus.write(state.i + 2, value % 10)

# --- LD [I], Vx (Fx55) ---
# V0..Vx（両端含む）をメモリへ。Iは変化しない。
def execute_ld_mem_v(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    require_range(state.i, op.x + 1)
    for offset in range(op.x + 1):
        machine.bus.write(state.i + offset, state.v[offset])

# --- LD Vx, [I] (Fx65) ---
def execute_ld_v_mem(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    require_range(state.i, op.x + 1)
    for offset in range(op.x + 1):
        state.v[offset] = machine.bus.read(state.i + offset)

# --- LD Vx, DT (Fx07) ---
def execute_ld_v_dt(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    state.v[op.x] = state.delay_timer

# --- LD DT, Vx (Fx15) ---
def execute_ld_dt_v(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    state.delay_timer = state.v[op.x]

# --- LD ST, Vx (Fx18) ---
def execute_ld_st_v(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    state.sound_timer = state.v[op.x]
