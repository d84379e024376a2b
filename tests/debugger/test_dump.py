# tests/debugger/test_dump.py
import pytest

from retro_chip8.transport.bus import Bus, RAM
from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.debugger.dump import format_memory, format_framebuffer, format_registers, format_disassembly

class TestDump:
    @pytest.fixture
    def setup_cpu(self):
        bus = Bus()
        bus.register_device(0x000, 0xFFF, RAM(0x1000))
        return Chip8Cpu(bus), bus

    def test_format_memory_font_row(self, setup_cpu):
        _, bus = setup_cpu
        lines = format_memory(bus, 0x000, 0x00F).splitlines()
        assert lines[0].startswith("      | 00 01 02")
        assert lines[2] == "0x000 | F0 90 90 90 F0 20 60 20 20 70 F0 10 F0 80 F0 F0"
        assert len(lines) == 3

    def test_format_memory_partial_line(self, setup_cpu):
        _, bus = setup_cpu
        lines = format_memory(bus, 0x005, 0x007).splitlines()
        assert len(lines) == 3
        assert lines[2].startswith("0x000 | ")
        assert lines[2].endswith("20 60 20")

    def test_format_memory_spans_lines(self, setup_cpu):
        _, bus = setup_cpu
        lines = format_memory(bus, 0x200, 0x21F).splitlines()
        assert [line[:5] for line in lines[2:]] == ["0x200", "0x210"]

    def test_format_memory_does_not_log(self, setup_cpu):
        _, bus = setup_cpu
        format_memory(bus, 0x000, 0x0FF)
        assert bus.get_and_clear_activity_log() == []

    def test_format_framebuffer(self, setup_cpu):
        cpu, _ = setup_cpu
        state = cpu.get_state()
        state.framebuffer[0] = 1
        state.framebuffer[64 * 31 + 63] = 1

        lines = format_framebuffer(state.framebuffer).splitlines()

        assert len(lines) == 32
        assert all(len(line) == 128 for line in lines)
        assert lines[0].startswith("1100")
        assert lines[31].endswith("0011")

    def test_format_registers(self, setup_cpu):
        cpu, _ = setup_cpu
        state = cpu.get_state()
        state.v[0xA] = 0x3C
        state.i = 0x123
        state.delay_timer = 5
        general, others = format_registers(cpu.get_register_map()).splitlines()
        assert general.startswith("V0=00 V1=00")
        assert "VA=3C" in general
        assert len(general.split()) == 16
        assert others == "PC=200 I=123 SP=0 DT=05 ST=00"

    def test_format_disassembly_marks_pc(self, setup_cpu):
        cpu, bus = setup_cpu
        bus.load_block(0x200, bytes([0x60, 0x07, 0x12, 0x00]))
        lines = format_disassembly(cpu.disassemble(0x200, 4), 0x202).splitlines()
        assert lines[0] == "   0x200: 6007  LD V0, 0x07"
        assert lines[1].startswith("-> 0x202: 1200  JP")
