# tests/peripherals/test_framebuffer.py
"""
retro_chip8.peripherals.displayモジュールの単体テスト。
"""
import pytest
from retro_chip8.peripherals.display import Framebuffer

# @intent:test_suite フレームバッファのXOR描画と折り返しの検証。

def test_invalid_size():
    with pytest.raises(ValueError):
        Framebuffer(0, 32)

def test_draw_sets_and_reports_collision():
    fb = Framebuffer()
    assert fb.draw_sprite(0, 0, [0b10100000]) is False
    assert fb.get_pixel(0, 0) and not fb.get_pixel(1, 0) and fb.get_pixel(2, 0)
    assert fb.draw_sprite(2, 0, [0b10000000]) is True
    assert not fb.get_pixel(2, 0)
    assert fb.lit_count() == 1

def test_wraps_on_both_axes():
    fb = Framebuffer(8, 4)
    fb.draw_sprite(7, 3, [0b11000000, 0b11000000])
    assert fb.get_pixel(7, 3) and fb.get_pixel(0, 3)
    assert fb.get_pixel(7, 0) and fb.get_pixel(0, 0)
    assert fb.lit_count() == 4

def test_rows_view_is_read_only_copy():
    fb = Framebuffer(4, 2)
    fb.draw_sprite(1, 1, [0b10000000])
    rows = fb.rows()
    assert rows == ((False, False, False, False), (False, True, False, False))
    fb.clear()
    assert rows[1][1] is True
    assert fb.lit_count() == 0

def test_get_pixel_out_of_bounds():
    fb = Framebuffer()
    with pytest.raises(IndexError):
        fb.get_pixel(64, 0)
