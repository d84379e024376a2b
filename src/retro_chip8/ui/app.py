# src/retro_chip8/ui/app.py
"""
Qtアプリケーションのエントリポイント。
アプリケーションを初期化し、メインウィンドウを起動します。
"""
import sys
from typing import Iterable

from PySide6.QtWidgets import QApplication

from retro_chip8.config.builder import System
from retro_chip8.config.models import EmulatorConfig
from retro_chip8.input.keypad import QueueKeySource
from .main_window import MainWindow

# @intent:responsibility メインウィンドウを表示してイベントループを実行し、終了コードを返します。
def run_gui(system: System, key_source: QueueKeySource, config: EmulatorConfig,
            breakpoints: Iterable[int] = ()) -> int:
    app = QApplication.instance() or QApplication(sys.argv)
    main_win = MainWindow(system, key_source, config, breakpoints=breakpoints)
    main_win.show()
    main_win.start()
    status = app.exec()
    return main_win.exit_code or status

def main():
    from retro_chip8.cli import main as cli_main
    sys.exit(cli_main())

if __name__ == '__main__':
    main()
