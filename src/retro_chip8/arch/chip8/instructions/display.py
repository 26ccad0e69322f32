# src/retro_chip8/arch/chip8/instructions/display.py
"""
表示命令（画面クリア、スプライト描画）の実装。
"""
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.constants import ADDRESS_MASK
from retro_chip8.arch.chip8.state import Chip8CpuState
from .base import Instruction, Peripherals

# --- 00E0: CLS ---
def execute_cls(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    periph.display.clear()

# --- DXYN: DRW Vx, Vy, nibble ---
# @intent:responsibility I から N バイトのスプライトを読み出し、(VX, VY) を起点にXOR描画します。
# @intent:rationale 起点座標は描画開始時に画面サイズで剰余を取り、以降の行・列の折り返しはフレームバッファ側で行います。
#                  VF は描画前に0へ戻し、点灯中のピクセルを消した場合に1を設定します。
def execute_drw(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    display = periph.display
    origin_x = state.v[ins.x] % display.width
    origin_y = state.v[ins.y] % display.height
    state.vf = 0
    sprite = [bus.read((state.i + row) & ADDRESS_MASK) for row in range(ins.n)]
    if display.draw_sprite(origin_x, origin_y, sprite):
        state.vf = 1
