# src/retro_chip8/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通ユーティリティ。

16bit命令語のフィールド分解、パターン判定、および命令実行時に参照する
周辺装置（フレームバッファ、キーパッド、タイマー、乱数源、互換性設定）の束を定義します。
"""
import random
from dataclasses import dataclass, field
from typing import NamedTuple, Optional

from retro_chip8.transport.bus import Bus
from retro_chip8.peripherals.display import Framebuffer
from retro_chip8.peripherals.keypad import Keypad
from retro_chip8.peripherals.timers import TimerPair

# @intent:data_structure 1命令語から取り出したフィールド群。毎サイクル新たに生成され、永続化されません。
class Instruction(NamedTuple):
    opcode: int  # 16bit 命令語全体
    nnn: int     # 下位12bit (アドレス/リテラル)
    nn: int      # 下位8bit
    n: int       # 下位4bit
    x: int       # ビット 8-11 (レジスタ番号)
    y: int       # ビット 4-7 (レジスタ番号)

# @intent:responsibility 16bit命令語をフィールドに分解します。副作用のない純粋関数で、失敗しません。
def decode_fields(word: int) -> Instruction:
    word &= 0xFFFF
    return Instruction(
        opcode=word,
        nnn=word & 0x0FFF,
        nn=word & 0x00FF,
        n=word & 0x000F,
        x=(word >> 8) & 0x0F,
        y=(word >> 4) & 0x0F,
    )

_ALU_PATTERNS = {0x0, 0x1, 0x2, 0x3, 0x4, 0x5, 0x6, 0x7, 0xE}
_MISC_PATTERNS = {0x07, 0x0A, 0x15, 0x18, 0x1E, 0x29, 0x33, 0x55, 0x65}

# @intent:responsibility 命令語を "8XY4" や "FX33" のようなパターン文字列に分類します。
# @intent:return 未割り当てのパターンは None。
# @intent:rationale 上位ニブルで分岐し、0x8 は下位ニブル、0x0/0xE/0xF は下位バイトを二次フィールドとして参照します。
def pattern_of(word: int) -> Optional[str]:
    ins = decode_fields(word)
    top = ins.opcode >> 12
    if top == 0x0:
        if ins.opcode == 0x00E0:
            return "00E0"
        if ins.opcode == 0x00EE:
            return "00EE"
        return "0NNN"
    if top in (0x1, 0x2, 0xA, 0xB):
        return f"{top:X}NNN"
    if top in (0x3, 0x4, 0x6, 0x7, 0xC):
        return f"{top:X}XNN"
    if top in (0x5, 0x9):
        return f"{top:X}XY0" if ins.n == 0 else None
    if top == 0x8:
        return f"8XY{ins.n:X}" if ins.n in _ALU_PATTERNS else None
    if top == 0xD:
        return "DXYN"
    if top == 0xE:
        if ins.nn == 0x9E:
            return "EX9E"
        if ins.nn == 0xA1:
            return "EXA1"
        return None
    # top == 0xF
    return f"FX{ins.nn:02X}" if ins.nn in _MISC_PATTERNS else None

# @intent:utility_function バスから16ビットワードをビッグエンディアン形式で読み込みます。
def read_word(bus: Bus, addr: int, mask: int = 0xFFF) -> int:
    """Big-endian 16-bit read."""
    return (bus.read(addr & mask) << 8) | bus.read((addr + 1) & mask)

# @intent:data_structure 互換性設定 (Quirk)。COSMAC VIP 系と CHIP-48/SCHIP 系で挙動が分かれる点を切り替えます。
@dataclass(frozen=True)
class Quirks:
    shift_uses_vy: bool = True           # 8XY6/8XYE: True なら VY をシフトして VX へ、False なら VX をその場でシフト
    load_store_increments_i: bool = True  # FX55/FX65: True なら転送後 I += X + 1

# @intent:data_structure 命令実行時に参照される周辺装置の束。CPUが所有し、各実行関数へ渡されます。
@dataclass
class Peripherals:
    display: Framebuffer = field(default_factory=Framebuffer)
    keypad: Keypad = field(default_factory=Keypad)
    timers: TimerPair = field(default_factory=TimerPair)
    rng: random.Random = field(default_factory=random.Random)
    quirks: Quirks = field(default_factory=Quirks)
