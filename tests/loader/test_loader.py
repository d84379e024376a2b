# tests/loader/test_loader.py
"""
retro_chip8.loader.loaderモジュールの単体テスト。
"""
import pytest

from retro_chip8.transport.bus import Bus, RAM
from retro_chip8.loader.loader import ProgramLoader, MAX_PROGRAM_SIZE
from retro_chip8.common.errors import ProgramTooLargeError

# @intent:test_suite プログラムイメージのロード機能の検証。

class TestProgramLoader:
    @pytest.fixture
    def setup_loader(self):
        bus = Bus()
        ram = RAM(0x1000)
        bus.register_device(0x000, 0xFFF, ram)
        return ProgramLoader(), bus, ram

    def test_load_bytes_at_program_start(self, setup_loader):
        loader, bus, ram = setup_loader
        assert loader.load_bytes(bytes([0x00, 0xE0, 0x12, 0x00]), bus) == 4
        assert [ram.read(a) for a in range(0x200, 0x204)] == [0x00, 0xE0, 0x12, 0x00]
        assert ram.read(0x1FF) == 0
        assert bus.get_and_clear_activity_log() == []

    def test_load_binary(self, setup_loader, tmp_path):
        loader, bus, ram = setup_loader
        rom = tmp_path / "test.ch8"
        rom.write_bytes(bytes([0xA2, 0x2A, 0x60, 0x0C]))
        assert loader.load_binary(str(rom), bus) == 4
        assert ram.read(0x200) == 0xA2
        assert ram.read(0x203) == 0x0C

    def test_largest_program_fits(self, setup_loader):
        loader, bus, ram = setup_loader
        assert MAX_PROGRAM_SIZE == 0xE00
        loader.load_bytes(bytes([0x55]) * MAX_PROGRAM_SIZE, bus)
        assert ram.read(0xFFF) == 0x55

    # @intent:test_case_error メモリに収まらないイメージは拒否され、メモリは変更されません。
    def test_oversize_program_rejected(self, setup_loader):
        loader, bus, ram = setup_loader
        with pytest.raises(ProgramTooLargeError) as excinfo:
            loader.load_bytes(bytes(MAX_PROGRAM_SIZE + 1), bus)
        assert isinstance(excinfo.value, ValueError)
        assert excinfo.value.capacity == MAX_PROGRAM_SIZE
        assert ram.read(0x200) == 0

    def test_missing_file(self, setup_loader, tmp_path):
        loader, bus, _ = setup_loader
        with pytest.raises(FileNotFoundError):
            loader.load_binary(str(tmp_path / "missing.ch8"), bus)

    def test_custom_start_address(self, setup_loader):
        _, bus, ram = setup_loader
        ProgramLoader(start_address=0x600).load_bytes(bytes([0xAB]), bus)
        assert ram.read(0x600) == 0xAB

    def test_default_capacity(self, setup_loader):
        loader, _, _ = setup_loader
        assert loader.capacity == MAX_PROGRAM_SIZE

    def test_max_size_limits_capacity(self, setup_loader):
        _, bus, ram = setup_loader
        loader = ProgramLoader(max_size=4)
        assert loader.capacity == 4
        with pytest.raises(ProgramTooLargeError):
            loader.load_bytes(bytes(5), bus)
        assert loader.load_bytes(bytes([1, 2, 3, 4]), bus) == 4

    def test_capacity_bounded_by_memory_end(self, setup_loader):
        _, bus, _ = setup_loader
        assert ProgramLoader(start_address=0xF00).capacity == 0x100
