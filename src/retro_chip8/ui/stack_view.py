# src/retro_chip8/ui/stack_view.py
"""
CHIP-8の呼び出しスタックを表示するウィジェット。
"""
from typing import List

from PySide6.QtWidgets import QWidget, QVBoxLayout, QPlainTextEdit
from PySide6.QtGui import QTextOption

from retro_chip8.ui.fonts import get_monospace_font

# @intent:utility_function スタックの内容を表示用の行に変換します。深い方（最新）が先頭です。
def format_call_stack(return_addresses: List[int]) -> List[str]:
    if not return_addresses:
        return ["(empty)"]
    depth = len(return_addresses)
    return [f"{depth - index:2d}: {address:#05x}" for index, address in enumerate(return_addresses)]

# @intent:responsibility 呼び出しスタックのリターンアドレスを可視化するUIウィジェットを提供します。
class StackView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.layout = QVBoxLayout(self)
        self.layout.setContentsMargins(0, 0, 0, 0)
        self.editor = QPlainTextEdit(self)
        self.editor.setFont(get_monospace_font(10))
        self.editor.setReadOnly(True)
        self.editor.setWordWrapMode(QTextOption.NoWrap)
        self.editor.setStyleSheet("background-color: #101010; color: #BBBBBB;")
        self.layout.addWidget(self.editor)

    def update_stack(self, return_addresses: List[int]) -> None:
        self.editor.setPlainText("\n".join(format_call_stack(return_addresses)))
