# src/retro_chip8/ui/main_window.py
"""
メインウィンドウの実装。
60Hz のタイマーでマシンを駆動し、キー入力をキーパッドへ、フレームバッファを画面へ橋渡しします。
"""
import logging
from typing import Dict

from PySide6.QtWidgets import QMainWindow, QLabel
from PySide6.QtGui import QCloseEvent, QKeyEvent
from PySide6.QtCore import Qt, QTimer, Slot

from retro_chip8.arch.chip8.machine import Chip8Machine, RunState, TIMER_HZ
from retro_chip8.arch.chip8.state import KeyWaitState
from retro_chip8.common.errors import ExecutionFault
from retro_chip8.config.models import MachineConfig
from retro_chip8.debugger.debugger import Debugger
from .display_view import DisplayView

logger = logging.getLogger(__name__)

FRAME_INTERVAL_MS = 1000 // TIMER_HZ

# @intent:utility_function 設定ファイルのキー名（"Q", "1", "Space" など）を Qt のキーコードに変換します。
# @intent:rationale Qt の英数字キーコードは大文字の ASCII コードと一致するため、1文字のキー名は ord() で求めます。
def build_key_code_map(keymap: Dict[str, int]) -> Dict[int, int]:
    key_codes = {}
    for name, index in keymap.items():
        if len(name) == 1:
            code = ord(name.upper())
        else:
            qt_key = getattr(Qt.Key, f"Key_{name.capitalize()}", None)
            if qt_key is None:
                raise ValueError(f"Unknown key name in keymap: '{name}'")
            code = int(qt_key)
        key_codes[code] = index
    return key_codes

# @intent:responsibility エミュレータのメインウィンドウを定義し、ホストループを駆動します。
class MainWindow(QMainWindow):
    def __init__(self, machine: Chip8Machine, config: MachineConfig, parent=None):
        super(MainWindow, self).__init__(parent)
        self.setWindowTitle("Chip8 Emulator")

        self.machine = machine
        self.debugger = Debugger(machine)
        self._key_codes = build_key_code_map(config.keymap)

        self.display_view = DisplayView(config.display, self)
        self.setCentralWidget(self.display_view)

        self.status_label = QLabel(self)
        self.statusBar().addWidget(self.status_label)

        self.frame_timer = QTimer(self)
        self.frame_timer.setInterval(FRAME_INTERVAL_MS)
        self.frame_timer.timeout.connect(self._on_frame)

        self._update_status()

    def start(self) -> None:
        self.frame_timer.start()

    # @intent:responsibility 1フレーム分の命令実行・タイマー更新・画面更新を行います。
    @Slot()
    def _on_frame(self):
        try:
            self.debugger.run_frame()
        except ExecutionFault as e:
            self.frame_timer.stop()
            self.status_label.setText(f"HALTED at {e.address:#05x}: {e}")
            self.display_view.update_frame(self.machine.framebuffer())
            return
        self.display_view.update_frame(self.machine.framebuffer())
        self._update_status()

    # @intent:rationale FX0A の待機中は PC が次の命令を指しているため、待機中の命令のアドレスを表示します。
    def _update_status(self):
        state = self.machine.state
        if state.key_wait != KeyWaitState.IDLE:
            text = f"{self.machine.run_state.value}  WAIT KEY at PC={(state.pc - 2) & 0xFFF:#05x}  I={state.i:#05x}"
        else:
            text = f"{self.machine.run_state.value}  PC={state.pc:#05x}  I={state.i:#05x}"
        if self.machine.sound_active:
            text += "  SOUND"
        self.status_label.setText(text)

    # @intent:responsibility P キーで一時停止と再開を切り替えます。
    def toggle_pause(self) -> None:
        if self.machine.run_state == RunState.RUNNING:
            self.machine.pause()
        elif self.machine.run_state == RunState.PAUSED:
            self.machine.resume()
        self._update_status()

    def keyPressEvent(self, event: QKeyEvent):
        if event.isAutoRepeat():
            return
        key = event.key()
        if key == Qt.Key_Escape:
            self.close()
        elif key == Qt.Key_P:
            self.toggle_pause()
        elif key in self._key_codes:
            self.machine.set_key(self._key_codes[key], True)
        else:
            super().keyPressEvent(event)

    def keyReleaseEvent(self, event: QKeyEvent):
        if event.isAutoRepeat():
            return
        key = event.key()
        if key in self._key_codes:
            self.machine.set_key(self._key_codes[key], False)
        else:
            super().keyReleaseEvent(event)

    # @intent:responsibility ウィンドウが閉じられる際にフレームタイマーを停止します。
    def closeEvent(self, event: QCloseEvent):
        self.frame_timer.stop()
        event.accept()
