"""
逆アセンブルコードを表示するウィジェット。
"""
from typing import List, Set, Tuple

from PySide6.QtWidgets import QWidget, QVBoxLayout, QTableWidget, QTableWidgetItem, QHeaderView
from PySide6.QtGui import QColor
from PySide6.QtCore import Signal

from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.transport.bus import MEMORY_SIZE
from retro_chip8.ui.fonts import get_monospace_font

HIGHLIGHT_COLOR = QColor("#404000")
BREAKPOINT_COLOR = QColor("#501010")
NORMAL_COLOR = QColor("#101010")

# @intent:responsibility 逆アセンブルされたコードを表形式で表示し、現在のPCとブレークポイントを色分けします。
class CodeView(QWidget):
    """
    PCが表示中の範囲にあれば再逆アセンブルせずにハイライトだけを移動します。
    行をダブルクリックすると、そのアドレスのブレークポイント切り替えを要求します。
    """
    breakpoint_toggled = Signal(int)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.layout = QVBoxLayout(self)
        self.layout.setContentsMargins(0, 0, 0, 0)

        self.table = QTableWidget()
        self.table.setColumnCount(3)
        self.table.setHorizontalHeaderLabels(["Address", "Word", "Mnemonic"])
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.ResizeToContents)
        self.table.horizontalHeader().setSectionResizeMode(1, QHeaderView.ResizeToContents)
        self.table.horizontalHeader().setSectionResizeMode(2, QHeaderView.Stretch)
        self.table.setFont(get_monospace_font(10))
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.table.setSelectionBehavior(QTableWidget.SelectRows)
        self.table.setShowGrid(False)
        self.table.setStyleSheet("background-color: #101010; color: #BBBBBB; gridline-color: #303030;")
        self.table.cellDoubleClicked.connect(self._on_double_click)
        self.layout.addWidget(self.table)

        self._cpu = None
        self.current_row = -1
        self.breakpoints: Set[int] = set()
        # 現在表示している逆アセンブルデータ [(addr, word, mnemonic), ...]
        self.disassembled_data: List[Tuple[int, str, str]] = []

    def set_cpu(self, cpu: AbstractCpu) -> None:
        self._cpu = cpu
        self.reset_cache()

    # @intent:responsibility PC周辺のメモリを逆アセンブルして表示を更新します。
    def update_code(self, pc: int) -> None:
        if self._cpu is None:
            return

        previous_row = self.current_row
        row_index = self._row_of(pc)
        if row_index != -1:
            self.current_row = row_index
            self._paint_row(previous_row)
            self._paint_row(row_index)
        else:
            # 命令境界がずれないよう、PCから末尾までを逆アセンブルし直す
            self.disassembled_data = self._cpu.disassemble(pc, MEMORY_SIZE - pc)
            self.table.setRowCount(len(self.disassembled_data))
            for row, (addr, word, mnemonic) in enumerate(self.disassembled_data):
                self.table.setItem(row, 0, QTableWidgetItem(f"{addr:03X}"))
                self.table.setItem(row, 1, QTableWidgetItem(word))
                self.table.setItem(row, 2, QTableWidgetItem(mnemonic))
            row_index = self._row_of(pc)
            self.current_row = row_index
            self._paint_rows()

        if row_index != -1:
            self.table.scrollToItem(self.table.item(row_index, 0), QTableWidget.EnsureVisible)

    def set_breakpoints(self, addresses: Set[int]) -> None:
        self.breakpoints = set(addresses)
        self._paint_rows()

    # @intent:responsibility キャッシュを破棄します。メモリ内容が外部で変更されたときに呼び出します。
    def reset_cache(self) -> None:
        self.disassembled_data = []
        self.current_row = -1
        self.table.setRowCount(0)

    def _row_of(self, address: int) -> int:
        for i, (addr, _, _) in enumerate(self.disassembled_data):
            if addr == address:
                return i
        return -1

    def _paint_rows(self) -> None:
        for row in range(len(self.disassembled_data)):
            self._paint_row(row)

    def _paint_row(self, row: int) -> None:
        if not 0 <= row < len(self.disassembled_data):
            return
        if row == self.current_row:
            color = HIGHLIGHT_COLOR
        elif self.disassembled_data[row][0] in self.breakpoints:
            color = BREAKPOINT_COLOR
        else:
            color = NORMAL_COLOR
        for column in range(3):
            item = self.table.item(row, column)
            if item is not None:
                item.setBackground(color)

    def _on_double_click(self, row: int, column: int) -> None:
        if 0 <= row < len(self.disassembled_data):
            self.breakpoint_toggled.emit(self.disassembled_data[row][0])
