# tests/test_cli.py
"""
コマンドラインインターフェースの終了コードを検証します（ヘッドレス実行のみ）。
"""
import io

import pytest

from retro_chip8 import cli
from retro_chip8.cli import main, build_parser
from retro_chip8.input.keypad import QueueKeySource
from retro_chip8.input.terminal import TerminalKeySource


@pytest.fixture
def write_rom(tmp_path):
    def factory(data: bytes, name: str = "test.ch8") -> str:
        path = tmp_path / name
        path.write_bytes(data)
        return str(path)
    return factory


class TestCli:
    def test_parser_defaults(self):
        args = build_parser().parse_args(["game.ch8"])
        assert args.rom == "game.ch8"
        assert args.headless is False
        assert args.steps is None
        assert args.config is None
        assert args.breakpoints == []
        assert args.dump is False

    def test_headless_run_with_step_limit(self, write_rom):
        rom = write_rom(bytes([0x12, 0x00]))  # JP 0x200
        assert main([rom, "--headless", "--steps", "3", "--seed", "1"]) == 0

    def test_unknown_opcode_exit_code(self, write_rom, capsys):
        rom = write_rom(bytes([0x00, 0x00]))
        assert main([rom, "--headless", "--steps", "10"]) == 1
        assert "Unknown opcode 0x0000 at address 0x200" in capsys.readouterr().err

    def test_oversize_rom(self, write_rom, capsys):
        rom = write_rom(bytes(0xE01))
        assert main([rom, "--headless", "--steps", "1"]) == 1
        assert "does not fit" in capsys.readouterr().err

    def test_missing_rom(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.ch8"), "--headless"]) == 1
        assert "cannot read" in capsys.readouterr().err

    def test_invalid_config(self, write_rom, tmp_path):
        rom = write_rom(bytes([0x12, 0x00]))
        config = tmp_path / "bad.yaml"
        config.write_text("timing:\n  instruction_hz: -1\n")
        assert main([rom, "--config", str(config), "--headless", "--steps", "1"]) == 2

    def test_headless_from_config(self, write_rom, tmp_path):
        rom = write_rom(bytes([0x12, 0x00]))
        config = tmp_path / "chip8.yaml"
        config.write_text("display:\n  headless: true\ntiming:\n  instruction_hz: 4096\n")
        assert main([rom, "--config", str(config), "--steps", "2"]) == 0

    def test_usage_error(self):
        with pytest.raises(SystemExit) as excinfo:
            main([])
        assert excinfo.value.code == 2

    def test_parse_breakpoints(self):
        args = build_parser().parse_args(["game.ch8", "--break", "0x2A4", "--break", "520"])
        assert args.breakpoints == [0x2A4, 520]

    @pytest.mark.parametrize("address", ["zz", "0x1000", "-1"])
    def test_invalid_breakpoint_address(self, address):
        with pytest.raises(SystemExit) as excinfo:
            build_parser().parse_args(["game.ch8", "--break", address])
        assert excinfo.value.code == 2

    # @intent:test_case ブレークポイントで停止し、レジスタと逆アセンブルを出力します。
    def test_headless_breakpoint_report(self, write_rom, capsys):
        rom = write_rom(bytes([0x60, 0x07, 0x12, 0x02]))  # LD V0, 0x07 / JP 0x202
        assert main([rom, "--headless", "--trace", "--break", "0x202", "--steps", "100000"]) == 0
        out = capsys.readouterr().out
        assert "Breakpoint hit at PC: 0x202" in out
        assert "V0=07" in out
        assert "PC=202" in out
        assert "-> 0x202: 1202  JP 0x202" in out

    def test_dump_after_step_limit(self, write_rom, capsys):
        rom = write_rom(bytes([0x60, 0x07, 0x12, 0x02]))
        assert main([rom, "--headless", "--trace", "--steps", "2", "--dump"]) == 0
        out = capsys.readouterr().out
        assert "0x200 | 60 07 12 02" in out
        assert "0" * 128 in out

    def test_dump_after_fatal_error(self, write_rom, capsys):
        rom = write_rom(bytes([0x00, 0x00]))
        assert main([rom, "--headless", "--trace", "--steps", "10", "--dump"]) == 1
        assert "-> 0x200: 0000  DW 0x0000" in capsys.readouterr().out

    def test_headless_key_source_without_terminal(self, monkeypatch):
        monkeypatch.setattr(cli.sys, "stdin", io.StringIO())
        assert isinstance(cli._headless_key_source(), QueueKeySource)

    def test_headless_key_source_on_terminal(self, monkeypatch):
        class FakeTerminal(io.StringIO):
            def isatty(self):
                return True

        monkeypatch.setattr(cli.sys, "stdin", FakeTerminal())
        assert isinstance(cli._headless_key_source(), TerminalKeySource)

    # @intent:test_case ヘッドレス実行では端末のキー入力がLD Vx, Kに届きます。
    def test_headless_keys_reach_wait_instruction(self, write_rom, capsys, monkeypatch):
        monkeypatch.setattr(cli, "_headless_key_source",
                            lambda: TerminalKeySource(io.StringIO("v"), ready=lambda: True))
        rom = write_rom(bytes([0xF3, 0x0A, 0x12, 0x02]))  # LD V3, K / JP 0x202
        assert main([rom, "--headless", "--trace", "--break", "0x202", "--steps", "100000"]) == 0
        assert "V3=0F" in capsys.readouterr().out
