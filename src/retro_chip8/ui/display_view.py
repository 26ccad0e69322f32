# src/retro_chip8/ui/display_view.py
"""
フレームバッファを描画するウィジェット。
真偽値のグリッドを前景色/背景色に対応付け、整数倍に拡大して表示します。
"""
from typing import Sequence
from PySide6.QtWidgets import QWidget
from PySide6.QtGui import QColor, QPainter

from retro_chip8.config.models import DisplayConfig, split_rgba

# @intent:utility_function RRGGBBAA 形式の色値を QColor に変換します。
# @intent:rationale 画面は2色の塗りつぶしのみで合成を行わないため、アルファ成分は無視します。
def to_qcolor(colour: int) -> QColor:
    r, g, b, _ = split_rgba(colour)
    return QColor(r, g, b)

# @intent:responsibility CHIP-8 のフレームバッファを拡大表示します。
class DisplayView(QWidget):
    def __init__(self, config: DisplayConfig, parent=None):
        super().__init__(parent)
        self._config = config
        self._foreground = to_qcolor(config.foreground)
        self._background = to_qcolor(config.background)
        self._rows: Sequence[Sequence[bool]] = ()
        self.setFixedSize(config.width * config.scale, config.height * config.scale)

    @property
    def foreground_color(self) -> QColor:
        return self._foreground

    @property
    def background_color(self) -> QColor:
        return self._background

    # @intent:responsibility 表示するフレームを差し替え、再描画を要求します。
    def update_frame(self, rows: Sequence[Sequence[bool]]) -> None:
        self._rows = rows
        self.update()

    def paintEvent(self, event):
        scale = self._config.scale
        painter = QPainter(self)
        painter.fillRect(self.rect(), self._background)
        for y, row in enumerate(self._rows):
            for x, lit in enumerate(row):
                if lit:
                    painter.fillRect(x * scale, y * scale, scale, scale, self._foreground)
        painter.end()
