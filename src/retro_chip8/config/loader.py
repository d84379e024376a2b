import yaml
from typing import Dict, Any, Optional
from .models import EmulatorConfig, TimingConfig, KeypadConfig, DisplayConfig

class ConfigLoader:
    def load_from_file(self, path: str) -> EmulatorConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return self.parse(data or {})

    def load_from_string(self, text: str) -> EmulatorConfig:
        return self.parse(yaml.safe_load(text) or {})

    def parse(self, data: Dict[str, Any]) -> EmulatorConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")

        timing_data = data.get("timing") or {}
        timing = TimingConfig(
            instruction_hz=self._parse_positive(timing_data.get("instruction_hz", TimingConfig.instruction_hz), "instruction_hz"),
            timer_hz=self._parse_positive(timing_data.get("timer_hz", TimingConfig.timer_hz), "timer_hz"),
        )

        keypad_data = data.get("keypad") or {}
        keypad = KeypadConfig()
        if "decay_polls" in keypad_data:
            keypad.decay_polls = self._parse_int(keypad_data["decay_polls"])
            if keypad.decay_polls <= 0:
                raise ValueError(f"decay_polls must be positive: {keypad.decay_polls}")
        if "key_map" in keypad_data:
            keypad.key_map = self._parse_key_map(keypad_data["key_map"])

        display_data = data.get("display") or {}
        display = DisplayConfig(
            scale=self._parse_int(display_data.get("scale", DisplayConfig.scale)),
            foreground=str(display_data.get("foreground", DisplayConfig.foreground)),
            background=str(display_data.get("background", DisplayConfig.background)),
            headless=bool(display_data.get("headless", DisplayConfig.headless)),
        )

        return EmulatorConfig(
            timing=timing,
            keypad=keypad,
            display=display,
            random_seed=self._parse_optional_int(data.get("random_seed")),
            trace=bool(data.get("trace", False)),
        )

    def _parse_key_map(self, value: Any) -> Dict[str, int]:
        if not isinstance(value, dict):
            raise ValueError(f"key_map must be a mapping: {value}")
        key_map = {}
        for symbol, key in value.items():
            code = self._parse_int(key)
            if not 0 <= code <= 0xF:
                raise ValueError(f"Key {symbol!r} maps to {code:#x}, outside 0x0-0xF")
            key_map[str(symbol)] = code
        return key_map

    def _parse_positive(self, value: Any, name: str) -> float:
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ValueError(f"{name} must be a number: {value!r}")
        if number <= 0:
            raise ValueError(f"{name} must be positive: {value}")
        return number

    def _parse_optional_int(self, value: Any) -> Optional[int]:
        if value is None:
            return None
        return self._parse_int(value)

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
