"""
画面消去とスプライト描画命令の実装。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.arch.chip8.state import Chip8CpuState, DISPLAY_WIDTH, DISPLAY_HEIGHT
from .base import Peripherals, require_range

# --- CLS (00E0) ---
def execute_cls(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    state.clear_framebuffer()

# --- DRW Vx, Vy, n (Dxyn) ---
# @intent:responsibility I から n バイトのスプライトを (Vx, Vy) にXOR描画し、消去されたピクセルがあればVFを1にします。
# @intent:rationale 原点のみ画面サイズで折り返し、はみ出した行・列は折り返さずに切り捨てます。
def execute_drw(state: Chip8CpuState, machine: Peripherals, op: Operation) -> None:
    origin_x = state.v[op.x] % DISPLAY_WIDTH
    origin_y = state.v[op.y] % DISPLAY_HEIGHT
    visible_rows = min(op.n, DISPLAY_HEIGHT - origin_y)
    require_range(state.i, visible_rows)
    sprite = [machine.bus.read(state.i + row) for row in range(visible_rows)]
    collision = 0

    for row, sprite_byte in enumerate(sprite):
        y = origin_y + row
        for column in range(8):
            x = origin_x + column
            if x >= DISPLAY_WIDTH:
                break

            bit = (sprite_byte >> (7 - column)) & 0x1
            if not bit:
                continue

            index = y * DISPLAY_WIDTH + x
            if state.framebuffer[index]:
                collision = 1
            state.framebuffer[index] ^= 1

    state.vf = collision
