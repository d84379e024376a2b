# tests/ui/test_widgets.py
"""
Qtウィジェット（レジスタビュー、スタックビュー、表示ウィジェット）のロジック検証。
"""
import pytest
from PySide6.QtCore import Qt, QEvent
from PySide6.QtGui import QKeyEvent

from retro_chip8.config.builder import SystemBuilder
from retro_chip8.config.models import EmulatorConfig
from retro_chip8.input.keypad import QueueKeySource
from retro_chip8.ui.register_view import RegisterView
from retro_chip8.ui.stack_view import StackView, format_call_stack
from retro_chip8.ui.display_widget import Chip8DisplayWidget, QtDisplaySurface


@pytest.fixture
def system():
    return SystemBuilder().build_system(EmulatorConfig())


def test_format_call_stack():
    assert format_call_stack([]) == ["(empty)"]
    assert format_call_stack([0x304, 0x202]) == [" 2: 0x304", " 1: 0x202"]


class TestRegisterView:
    def test_layout_and_update(self, qapp, system):
        view = RegisterView()
        view.set_cpu(system.cpu)
        assert view.value_text("PC") == "0x0000"
        assert view.value_text("V0") == "0x00"

        system.bus.load_block(0x200, bytes([0x60, 0x0A]))
        system.cpu.step()
        view.update_registers()

        assert view.value_text("PC") == "0x0202"
        assert view.value_text("V0") == "0x0A"
        assert view.value_text("DT") == "0x00"

    def test_update_without_cpu(self, qapp):
        RegisterView().update_registers()


class TestStackView:
    def test_update_stack(self, qapp, system):
        view = StackView()
        view.update_stack(system.cpu.get_call_stack())
        assert view.editor.toPlainText() == "(empty)"

        system.bus.load_block(0x200, bytes([0x23, 0x00]))
        system.cpu.step()
        view.update_stack(system.cpu.get_call_stack())
        assert view.editor.toPlainText() == " 1: 0x202"


class TestDisplayWidget:
    def test_set_frame_copies(self, qapp):
        widget = Chip8DisplayWidget(QueueKeySource(), scale=4)
        frame = bytearray(64 * 32)
        frame[5] = 1
        widget.set_frame(frame)
        frame[5] = 0
        assert widget.frame()[5] == 1
        assert widget.sizeHint().width() == 256
        assert widget.sizeHint().height() == 128

    def test_surface_adapter(self, qapp, system):
        widget = Chip8DisplayWidget(QueueKeySource())
        system.cpu.get_state().framebuffer[10] = 1
        QtDisplaySurface(widget).render(system.cpu.get_state().framebuffer)
        assert widget.frame()[10] == 1

    def test_paint_does_not_fail(self, qapp):
        widget = Chip8DisplayWidget(QueueKeySource(), scale=2)
        widget.set_frame(bytes([1]) * (64 * 32))
        widget.resize(128, 64)
        widget.grab()

    # @intent:test_case キー押下はキー入力源に渡され、オートリピートは無視されます。
    def test_key_press_feeds_source(self, qapp):
        source = QueueKeySource()
        widget = Chip8DisplayWidget(source)
        widget.keyPressEvent(QKeyEvent(QEvent.KeyPress, Qt.Key_W, Qt.NoModifier, "w"))
        widget.keyPressEvent(QKeyEvent(QEvent.KeyPress, Qt.Key_W, Qt.NoModifier, "w", True))
        widget.keyPressEvent(QKeyEvent(QEvent.KeyPress, Qt.Key_Shift, Qt.NoModifier, ""))
        assert len(source) == 1
        assert source.poll() == "w"
