import random
from dataclasses import dataclass
from typing import Optional

from retro_chip8.transport.bus import Bus, RAM, MEMORY_SIZE
from retro_chip8.input.keypad import Keypad, KeySource, QueueKeySource, decay_polls_for
from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.debugger.debugger import Debugger
from retro_chip8.timing.clock import Clock
from retro_chip8.timing.controller import TimingController
from retro_chip8.ui.surface import DisplaySurface, ToneSignal
from .models import EmulatorConfig

# @intent:data_structure 組み立て済みのシステム一式。
@dataclass
class System:
    cpu: Chip8Cpu
    bus: Bus
    keypad: Keypad

    def controller(self, config: EmulatorConfig, display: Optional[DisplaySurface] = None,
                   tone: Optional[ToneSignal] = None, clock: Optional[Clock] = None,
                   debugger: Optional[Debugger] = None) -> TimingController:
        return TimingController(
            self.cpu, display=display, tone=tone, clock=clock, debugger=debugger,
            instruction_hz=config.timing.instruction_hz,
            timer_hz=config.timing.timer_hz,
        )

# @intent:utility_function 明示的な設定がなければ、命令実行レートで約1秒保持される回数を返します。
def resolve_decay_polls(config: EmulatorConfig) -> int:
    if config.keypad.decay_polls is not None:
        return config.keypad.decay_polls
    return decay_polls_for(config.timing.instruction_hz)

# @intent:responsibility システム構成（Config）に基づいて、Bus、RAM、キーパッド、CPUを生成・接続します。
class SystemBuilder:
    def build_system(self, config: EmulatorConfig, key_source: Optional[KeySource] = None) -> System:
        bus = Bus()
        bus.register_device(0x000, MEMORY_SIZE - 1, RAM(MEMORY_SIZE))

        keypad = Keypad(
            key_source if key_source is not None else QueueKeySource(),
            key_map=config.keypad.key_map,
            decay_polls=resolve_decay_polls(config),
        )
        rng = random.Random(config.random_seed)
        cpu = Chip8Cpu(bus, keypad=keypad, rng=rng)
        return System(cpu=cpu, bus=bus, keypad=keypad)
