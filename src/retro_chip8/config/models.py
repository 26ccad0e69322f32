from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from retro_chip8.arch.chip8.instructions import Quirks
from retro_chip8.arch.chip8.machine import DEFAULT_CLOCK_HZ
from retro_chip8.peripherals.display import DISPLAY_WIDTH, DISPLAY_HEIGHT

# @intent:constant COSMAC VIP の 4x4 キーパッド配列を、QWERTY キーボード左側の 4x4 ブロックに割り当てた既定のキーマップ。
DEFAULT_KEYMAP: Dict[str, int] = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "Q": 0x4, "W": 0x5, "E": 0x6, "R": 0xD,
    "A": 0x7, "S": 0x8, "D": 0x9, "F": 0xE,
    "Z": 0xA, "X": 0x0, "C": 0xB, "V": 0xF,
}

# @intent:utility_function RRGGBBAA 形式の32bit色値を (r, g, b, a) に分解します。
def split_rgba(colour: int) -> Tuple[int, int, int, int]:
    return (
        (colour >> 24) & 0xFF,
        (colour >> 16) & 0xFF,
        (colour >> 8) & 0xFF,
        colour & 0xFF,
    )

@dataclass
class DisplayConfig:
    width: int = DISPLAY_WIDTH
    height: int = DISPLAY_HEIGHT
    scale: int = 10
    foreground: int = 0x957DADFF  # RRGGBBAA
    background: int = 0xD291BC00  # RRGGBBAA

@dataclass
class MachineConfig:
    display: DisplayConfig = field(default_factory=DisplayConfig)
    quirks: Quirks = field(default_factory=Quirks)
    clock_hz: int = DEFAULT_CLOCK_HZ
    seed: Optional[int] = None
    keymap: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_KEYMAP))
