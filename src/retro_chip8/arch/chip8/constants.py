# retro_chip8/arch/chip8/constants.py
"""
CHIP-8 システム定数とフォントセット。
"""

MEMORY_SIZE = 0x1000
ADDRESS_MASK = MEMORY_SIZE - 1
ENTRY_POINT = 0x200
MAX_PROGRAM_SIZE = MEMORY_SIZE - ENTRY_POINT  # 0xE00

REGISTER_COUNT = 16
STACK_CAPACITY = 12

FONT_BASE = 0x000
FONT_GLYPH_SIZE = 5

# @intent:constant 16進数字 0〜F の 4x5 グリフ。グリフ n はアドレス 5n から始まります。
FONT_SET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])

FONT_END = FONT_BASE + len(FONT_SET) - 1  # 0x04F
