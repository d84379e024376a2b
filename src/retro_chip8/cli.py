"""
コマンドラインインターフェース。

    retro-chip8 ROM [--config FILE] [--headless] [--steps N] [--seed N] [--trace]
                    [--break ADDR]... [--dump]

終了コード: 正常終了 0、未定義命令などの致命的エラー 1、引数エラー 2。
"""
import argparse
import logging
import sys
from typing import List, Optional, TextIO

from retro_chip8.common.errors import Chip8Error
from retro_chip8.config.builder import SystemBuilder, System
from retro_chip8.config.loader import ConfigLoader
from retro_chip8.config.models import EmulatorConfig
from retro_chip8.debugger.debugger import Debugger, BreakpointCondition, BreakpointConditionType, StopReason
from retro_chip8.debugger.dump import format_registers, format_disassembly, format_memory, format_framebuffer
from retro_chip8.input.keypad import KeySource, QueueKeySource
from retro_chip8.input.terminal import TerminalKeySource, cbreak_mode
from retro_chip8.loader.loader import ProgramLoader
from retro_chip8.transport.bus import MEMORY_SIZE
from retro_chip8.ui.surface import TextDisplay, BellTone

# @intent:constant ブレーク時に表示する逆アセンブルの範囲（PCからのバイト数）。
REPORT_DISASSEMBLY_BYTES = 16

def _address(text: str) -> int:
    try:
        value = int(text, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid address: {text!r}")
    if not 0 <= value < MEMORY_SIZE:
        raise argparse.ArgumentTypeError(f"address out of range: {text}")
    return value

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="retro-chip8", description="CHIP-8 interpreter")
    parser.add_argument("rom", help="path to the CHIP-8 program image")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--headless", action="store_true", help="render to the terminal instead of a Qt window")
    parser.add_argument("--steps", type=int, default=None, help="stop after N instructions (headless only)")
    parser.add_argument("--seed", type=int, default=None, help="seed for the RND instruction")
    parser.add_argument("--trace", action="store_true", help="log every executed instruction")
    parser.add_argument("--break", dest="breakpoints", type=_address, action="append", default=[],
                        metavar="ADDR", help="pause before executing ADDR (repeatable, e.g. 0x2A4)")
    parser.add_argument("--dump", action="store_true", help="print memory and display dumps when the run ends (headless only)")
    return parser

def _load_config(args: argparse.Namespace) -> EmulatorConfig:
    config = ConfigLoader().load_from_file(args.config) if args.config else EmulatorConfig()
    if args.seed is not None:
        config.random_seed = args.seed
    if args.trace:
        config.trace = True
    if args.headless:
        config.display.headless = True
    return config

# @intent:responsibility ヘッドレス実行用のキー入力源。標準入力が端末でなければキー入力なしで実行します。
def _headless_key_source() -> KeySource:
    if sys.stdin is not None and sys.stdin.isatty():
        return TerminalKeySource()
    return QueueKeySource()

def _make_debugger(system: System, breakpoints: List[int]) -> Optional[Debugger]:
    if not breakpoints:
        return None
    debugger = Debugger(system.cpu)
    for address in breakpoints:
        debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.PC_MATCH, value=address))
    return debugger

# @intent:responsibility Qtを使わずに実行します。steps命令を実行するか（Noneなら中断されるまで）、ブレークポイントで停止します。
def run_headless(controller, steps: Optional[int]) -> StopReason:
    executed = 0
    while steps is None or executed < steps:
        result = controller.run_once()
        if result.stepped:
            executed += 1
        if result.breakpoint:
            return StopReason.BREAKPOINT
    return StopReason.STEP_LIMIT

# @intent:responsibility 停止時点のレジスタとPC周辺の逆アセンブル、必要ならメモリと画面のダンプを出力します。
def write_report(system: System, stream: TextIO, dump: bool = False) -> None:
    cpu = system.cpu
    pc = cpu.get_state().pc
    stream.write(format_registers(cpu.get_register_map()) + "\n")
    stream.write(format_disassembly(cpu.disassemble(pc, REPORT_DISASSEMBLY_BYTES), pc) + "\n")
    if dump:
        stream.write(format_memory(system.bus, 0x000, MEMORY_SIZE - 1) + "\n")
        stream.write(format_framebuffer(cpu.get_framebuffer()) + "\n")
    stream.flush()

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = _load_config(args)
    except (OSError, ValueError) as e:
        print(f"Error: failed to load config: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if config.trace else logging.WARNING,
        format="%(message)s",
    )

    headless = config.display.headless
    key_source = _headless_key_source() if headless else QueueKeySource()
    system = SystemBuilder().build_system(config, key_source=key_source)
    try:
        size = ProgramLoader().load_binary(args.rom, system.bus)
    except OSError as e:
        print(f"Error: cannot read {args.rom}: {e}", file=sys.stderr)
        return 1
    except Chip8Error as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    logging.getLogger(__name__).info("Loaded %d bytes from %s", size, args.rom)

    if not headless:
        from retro_chip8.ui.app import run_gui
        return run_gui(system, key_source, config, breakpoints=args.breakpoints)

    stream = None if config.trace else sys.stdout
    debugger = _make_debugger(system, args.breakpoints)
    controller = system.controller(config, display=TextDisplay(stream), tone=BellTone(), debugger=debugger)
    status = 0
    try:
        with cbreak_mode():
            reason = run_headless(controller, args.steps)
        if reason == StopReason.BREAKPOINT:
            print(f"Breakpoint hit at PC: {system.cpu.get_state().pc:#05x}")
            write_report(system, sys.stdout, dump=args.dump)
        elif args.dump:
            write_report(system, sys.stdout, dump=True)
    except KeyboardInterrupt:
        pass
    except Chip8Error as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.dump:
            write_report(system, sys.stdout, dump=True)
        status = 1
    return status

if __name__ == '__main__':
    sys.exit(main())
