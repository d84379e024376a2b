from dataclasses import dataclass, field
from typing import Dict, Optional

from retro_chip8.input.keypad import DEFAULT_KEY_MAP

@dataclass
class TimingConfig:
    instruction_hz: float = 1024.0
    timer_hz: float = 60.0

@dataclass
class KeypadConfig:
    decay_polls: Optional[int] = None  # None: timing.instruction_hz から約1秒分を算出
    key_map: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_KEY_MAP))

@dataclass
class DisplayConfig:
    scale: int = 10
    foreground: str = "#887ECB"
    background: str = "#50459B"
    headless: bool = False  # True: Qtを使わずTextDisplayで実行

@dataclass
class EmulatorConfig:
    timing: TimingConfig = field(default_factory=TimingConfig)
    keypad: KeypadConfig = field(default_factory=KeypadConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    random_seed: Optional[int] = None
    trace: bool = False
