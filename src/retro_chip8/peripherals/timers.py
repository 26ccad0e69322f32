# retro_chip8/peripherals/timers.py
"""
ディレイタイマーとサウンドタイマー。

tick() はホストが60Hzごとに一度だけ呼び出します。命令実行側からは呼ばれません。
"""
from dataclasses import dataclass

# @intent:responsibility 2つの独立した8bitカウンタを保持し、0で止まる減算を提供します。
@dataclass
class TimerPair:
    delay: int = 0
    sound: int = 0

    def tick(self) -> None:
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1

    # @intent:responsibility サウンドタイマーが動作中か（ホストがトーンを鳴らすべきか）を返します。
    @property
    def sound_active(self) -> bool:
        return self.sound > 0

    def reset(self) -> None:
        self.delay = 0
        self.sound = 0
