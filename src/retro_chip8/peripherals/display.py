# retro_chip8/peripherals/display.py
"""
モノクロフレームバッファ。

DXYN (スプライト描画) と 00E0 (画面クリア) によってのみ変更されます。
ホストは rows() で読み取り専用のビューを取得して描画します。
"""
from typing import List, Sequence, Tuple

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32

# @intent:responsibility W×H のブール値ピクセルグリッドを保持し、XORによるスプライト描画を提供します。
class Framebuffer:
    def __init__(self, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT):
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid framebuffer size {width}x{height}.")
        self._width = width
        self._height = height
        self._pixels: List[bool] = [False] * (width * height)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def clear(self) -> None:
        self._pixels = [False] * (self._width * self._height)

    def get_pixel(self, x: int, y: int) -> bool:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Pixel ({x}, {y}) out of bounds for {self._width}x{self._height} framebuffer.")
        return self._pixels[y * self._width + x]

    # @intent:responsibility スプライトをXORで描画し、衝突（既に点灯していたピクセルを消したか）を返します。
    # @intent:pre-condition origin_x, origin_y は画面内に正規化済みであること。
    # @intent:rationale 行・列とも描画中に剰余で折り返し、画面端をはみ出したスプライトはトーラス状に反対側へ回り込みます。
    def draw_sprite(self, origin_x: int, origin_y: int, sprite: Sequence[int]) -> bool:
        collision = False
        y = origin_y
        for row_byte in sprite:
            x = origin_x
            for bit in range(7, -1, -1):
                if (row_byte >> bit) & 1:
                    index = y * self._width + x
                    if self._pixels[index]:
                        collision = True
                    self._pixels[index] = not self._pixels[index]
                x = (x + 1) % self._width
            y = (y + 1) % self._height
        return collision

    # @intent:responsibility ホスト描画用の読み取り専用ビュー（行優先のタプル）を返します。
    def rows(self) -> Tuple[Tuple[bool, ...], ...]:
        w = self._width
        return tuple(tuple(self._pixels[r * w:(r + 1) * w]) for r in range(self._height))

    def lit_count(self) -> int:
        return sum(self._pixels)
