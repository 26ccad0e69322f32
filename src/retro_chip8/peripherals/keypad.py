# retro_chip8/peripherals/keypad.py
"""
16キーの入力ラッチ。ホストが書き込み、インタプリタが読み取ります。
"""
from typing import List, Optional

KEY_COUNT = 16

# @intent:responsibility 16個のキー押下状態を保持します。
class Keypad:
    def __init__(self):
        self._keys: List[bool] = [False] * KEY_COUNT

    # @intent:pre-condition index は 0x0〜0xF の範囲であること。
    def set_key(self, index: int, pressed: bool) -> None:
        if not 0 <= index < KEY_COUNT:
            raise ValueError(f"Key index {index} out of range 0x0-0xF.")
        self._keys[index] = bool(pressed)

    def is_pressed(self, index: int) -> bool:
        return self._keys[index & 0xF]

    # @intent:responsibility 押下中のキーのうち最小のインデックスを返します。押下がなければNone。
    def first_pressed(self) -> Optional[int]:
        for index, pressed in enumerate(self._keys):
            if pressed:
                return index
        return None

    def pressed_keys(self) -> List[int]:
        return [i for i, pressed in enumerate(self._keys) if pressed]

    def reset(self) -> None:
        self._keys = [False] * KEY_COUNT
