# src/retro_chip8/ui/main_window.py
"""
メインウィンドウの実装。
CHIP-8の表示面を中央に、レジスタ・スタック・逆アセンブルのインスペクタを右側に配置し、
GUIスレッド上のゼロ間隔タイマーからタイミングコントローラを駆動します。
命令はデバッガ経由で実行されるため、ブレークポイントでの停止とステップ実行・ステップバックができます。
"""
import time
from typing import Iterable

from PySide6.QtWidgets import QMainWindow, QApplication, QDockWidget, QTabWidget, QLabel, QMessageBox, QToolBar
from PySide6.QtGui import QPalette, QColor, QCloseEvent, QAction
from PySide6.QtCore import Qt, QTimer, Slot

from retro_chip8.common.errors import Chip8Error
from retro_chip8.config.builder import System
from retro_chip8.config.models import EmulatorConfig
from retro_chip8.debugger.debugger import Debugger, BreakpointCondition, BreakpointConditionType
from retro_chip8.input.keypad import QueueKeySource
from retro_chip8.timing.controller import TimingController
from .display_widget import Chip8DisplayWidget, QtDisplaySurface, QtTone
from .register_view import RegisterView
from .stack_view import StackView
from .code_view import CodeView
from .fonts import get_monospace_font_family

# @intent:constant 1回のタイマーコールバックでポーリングループを回す時間（秒）。イベント処理を滞らせないための上限です。
SLICE_SECONDS = 0.005

# @intent:responsibility アプリケーションのメインウィンドウを定義し、UIの主要なコンポーネントを組み立てます。
class MainWindow(QMainWindow):
    def __init__(self, system: System, key_source: QueueKeySource, config: EmulatorConfig,
                 show_dialogs: bool = True, breakpoints: Iterable[int] = (), parent=None):
        super(MainWindow, self).__init__(parent)
        self.setWindowTitle("Retro CHIP-8")
        self.setDockNestingEnabled(True)

        self._system = system
        self.exit_code = 0
        self._show_dialogs = show_dialogs
        self.debugger = Debugger(system.cpu)
        for address in breakpoints:
            self.debugger.add_breakpoint(self._pc_breakpoint(address))

        self.display_widget = Chip8DisplayWidget(
            key_source,
            scale=config.display.scale,
            foreground=config.display.foreground,
            background=config.display.background,
        )
        self.setCentralWidget(self.display_widget)
        self.controller: TimingController = system.controller(
            config, display=QtDisplaySurface(self.display_widget), tone=QtTone(), debugger=self.debugger
        )

        self._set_dark_theme()
        self._create_toolbar()
        self._create_status_inspector()
        self.status_label = QLabel("Ready")
        self.statusBar().addWidget(self.status_label)

        self._timer = QTimer(self)
        self._timer.setInterval(0)
        self._timer.timeout.connect(self._run_slice)
        self._update_ui_state()

    def start(self) -> None:
        self.display_widget.setFocus()
        self._timer.start()
        self._update_ui_state()

    def stop(self) -> None:
        self._timer.stop()
        self._update_ui_state()

    def is_running(self) -> bool:
        return self._timer.isActive()

    # @intent:responsibility 一定時間だけポーリングループを回し、60Hzティックが発生していればインスペクタを更新します。
    @Slot()
    def _run_slice(self):
        deadline = time.perf_counter() + SLICE_SECONDS
        refreshed = False
        try:
            while time.perf_counter() < deadline:
                result = self.controller.run_once()
                refreshed = refreshed or result.refreshed
                if result.breakpoint:
                    self._pause_at_breakpoint()
                    return
        except Chip8Error as e:
            self._halt(e)
            return
        if refreshed:
            self._update_inspector()

    def _pause_at_breakpoint(self):
        self.stop()
        self._update_inspector()
        self.status_label.setText(f"Breakpoint hit at PC: {self._system.cpu.get_state().pc:#05x}")

    # @intent:responsibility 停止中に1命令だけ実行します。タイマーは減算されません。
    @Slot()
    def step_instruction(self):
        if self.is_running():
            return
        try:
            self.controller.step()
        except Chip8Error as e:
            self._halt(e)
            return
        self._refresh_after_manual_step()

    # @intent:responsibility 停止中に1命令分だけ状態とメモリを巻き戻します。
    @Slot()
    def step_back(self):
        if self.is_running():
            return
        self.debugger.step_back()
        self._refresh_after_manual_step()

    def _refresh_after_manual_step(self):
        self.display_widget.set_frame(self._system.cpu.get_framebuffer())
        self._update_inspector()
        self.status_label.setText(f"Paused at PC: {self._system.cpu.get_state().pc:#05x}")

    # @intent:responsibility 指定アドレスのPCブレークポイントを追加・削除し、コードビューに反映します。
    @Slot(int)
    def toggle_breakpoint(self, address: int):
        condition = self._pc_breakpoint(address)
        if condition in self.debugger.get_breakpoints():
            self.debugger.remove_breakpoint(condition)
        else:
            self.debugger.add_breakpoint(condition)
        self.code_view.set_breakpoints(self.breakpoint_addresses())

    def breakpoint_addresses(self):
        return {bp.value for bp in self.debugger.get_breakpoints()
                if bp.condition_type == BreakpointConditionType.PC_MATCH}

    @staticmethod
    def _pc_breakpoint(address: int) -> BreakpointCondition:
        return BreakpointCondition(BreakpointConditionType.PC_MATCH, value=address)

    def _update_inspector(self):
        self.register_view.update_registers()
        self.stack_view.update_stack(self._system.cpu.get_call_stack())
        self.code_view.update_code(self._system.cpu.get_state().pc)
        instruction_time = self.controller.instruction_trigger.last_delta
        frame_time = self.controller.timer_trigger.last_delta
        ips = 1.0 / instruction_time if instruction_time > 0 else 0.0
        fps = 1.0 / frame_time if frame_time > 0 else 0.0
        self.status_label.setText(
            f"IPS: {ips:8.2f} | FPS: {fps:6.2f} | Key: {self._system.keypad.current_key:02X}"
        )

    # @intent:responsibility 致命的エラーで実行を停止し、終了コード1でアプリケーションを終了させます。
    def _halt(self, error: Chip8Error):
        self.exit_code = 1
        self.stop()
        self._update_inspector()
        self.status_label.setText(f"Halted: {error}")
        if self._show_dialogs:
            QMessageBox.critical(self, "CHIP-8 Error", str(error))
        QApplication.instance().exit(self.exit_code)

    # @intent:responsibility 実行制御用のツールバーを作成します。
    def _create_toolbar(self):
        toolbar = QToolBar("Main Toolbar")
        self.addToolBar(toolbar)

        self.run_action = QAction("Run", self)
        self.run_action.triggered.connect(self.start)
        toolbar.addAction(self.run_action)

        self.pause_action = QAction("Pause", self)
        self.pause_action.triggered.connect(self._pause)
        toolbar.addAction(self.pause_action)

        self.step_action = QAction("Step", self)
        self.step_action.setShortcut("F10")
        self.step_action.triggered.connect(self.step_instruction)
        toolbar.addAction(self.step_action)

        self.step_back_action = QAction("Step Back", self)
        self.step_back_action.triggered.connect(self.step_back)
        toolbar.addAction(self.step_back_action)

    @Slot()
    def _pause(self):
        self.stop()
        self._update_inspector()
        self.status_label.setText(f"Paused at PC: {self._system.cpu.get_state().pc:#05x}")

    # @intent:responsibility 実行状態に応じてツールバーの有効/無効を切り替えます。
    def _update_ui_state(self):
        running = self.is_running()
        self.run_action.setEnabled(not running and self.exit_code == 0)
        self.pause_action.setEnabled(running)
        self.step_action.setEnabled(not running and self.exit_code == 0)
        self.step_back_action.setEnabled(not running)

    def _create_status_inspector(self):
        status_dock = QDockWidget("Status Inspector", self)
        status_dock.setAllowedAreas(Qt.RightDockWidgetArea)
        tab_widget = QTabWidget()
        self.register_view = RegisterView()
        self.register_view.set_cpu(self._system.cpu)
        tab_widget.addTab(self.register_view, "Registers")
        self.stack_view = StackView()
        tab_widget.addTab(self.stack_view, "Stack")
        self.code_view = CodeView()
        self.code_view.set_cpu(self._system.cpu)
        self.code_view.set_breakpoints(self.breakpoint_addresses())
        self.code_view.breakpoint_toggled.connect(self.toggle_breakpoint)
        tab_widget.addTab(self.code_view, "Code")
        status_dock.setWidget(tab_widget)
        self.addDockWidget(Qt.RightDockWidgetArea, status_dock)

    def _set_dark_theme(self):
        dark_palette = QPalette()
        dark_palette.setColor(QPalette.Window, QColor(29, 29, 29))
        dark_palette.setColor(QPalette.WindowText, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Base, QColor(30, 30, 30))
        dark_palette.setColor(QPalette.Text, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Button, QColor(53, 53, 53))
        dark_palette.setColor(QPalette.ButtonText, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Highlight, QColor(42, 130, 218))
        QApplication.setPalette(dark_palette)

        font_family = get_monospace_font_family()
        self.setStyleSheet(f"""
            QWidget {{ font-family: '{font_family}', monospace; font-size: 10pt; }}
            QMainWindow {{ background-color: #1D1D1D; border: none; }}
            QDockWidget::title {{ text-align: left; background: #101010; padding: 4px; font-weight: bold; }}
            QTabWidget::pane {{ border-top: 2px solid #2A82DA; }}
        """)

    def closeEvent(self, event: QCloseEvent):
        self.stop()
        event.accept()
