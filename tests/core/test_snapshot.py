# tests/core/test_snapshot.py
"""
retro_chip8.core.snapshotモジュールの単体テスト。
"""
import dataclasses

import pytest

from retro_chip8.core.snapshot import Operation, Metadata, Snapshot
from retro_chip8.core.state import CpuState
from retro_chip8.transport.bus import BusAccess, BusAccessType

class TestOperation:
    def test_text_with_operands(self):
        op = Operation(opcode_hex="6A0F", mnemonic="LD", operands=["VA", "0x0f"])
        assert op.text() == "LD VA, 0x0f"

    def test_text_without_operands(self):
        assert Operation(opcode_hex="00E0", mnemonic="CLS").text() == "CLS"

    def test_defaults(self):
        op = Operation(opcode_hex="00E0", mnemonic="CLS")
        assert op.length == 2
        assert op.cycle_count == 1
        assert op.operands == []

    def test_is_immutable(self):
        op = Operation(opcode_hex="00E0", mnemonic="CLS")
        with pytest.raises(dataclasses.FrozenInstanceError):
            op.mnemonic = "RET"


class TestSnapshot:
    def test_writes_filters_bus_activity(self):
        activity = [
            BusAccess(0x200, 0xF0, BusAccessType.READ),
            BusAccess(0x300, 0x02, BusAccessType.WRITE, previous_data=0x00),
            BusAccess(0x201, 0x33, BusAccessType.READ),
        ]
        snapshot = Snapshot(
            state=CpuState(),
            operation=Operation(opcode_hex="F033", mnemonic="LD", operands=["B", "V0"]),
            metadata=Metadata(cycle_count=1),
            bus_activity=activity,
        )
        assert snapshot.writes() == [activity[1]]

    def test_empty_bus_activity(self):
        snapshot = Snapshot(
            state=CpuState(),
            operation=Operation(opcode_hex="00E0", mnemonic="CLS"),
            metadata=Metadata(cycle_count=3, symbol_info="0x200: CLS"),
        )
        assert snapshot.bus_activity == []
        assert snapshot.writes() == []
        assert snapshot.metadata.symbol_info == "0x200: CLS"
