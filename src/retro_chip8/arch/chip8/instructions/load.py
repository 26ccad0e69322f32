# src/retro_chip8/arch/chip8/instructions/load.py
"""
ロード/ストア命令（レジスタ、インデックス、タイマー、メモリ転送）の実装。
"""
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.constants import ADDRESS_MASK, FONT_BASE, FONT_GLYPH_SIZE
from retro_chip8.arch.chip8.state import Chip8CpuState
from .base import Instruction, Peripherals

# --- 6XNN: LD Vx, byte ---
def execute_ld_imm(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    state.v[ins.x] = ins.nn

# --- 8XY0: LD Vx, Vy ---
def execute_ld_reg(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    state.v[ins.x] = state.v[ins.y]

# --- ANNN: LD I, addr ---
def execute_ld_i(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    state.i = ins.nnn

# --- FX07 / FX15 / FX18: タイマー転送 ---
def execute_ld_vx_dt(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    state.v[ins.x] = periph.timers.delay

def execute_ld_dt_vx(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    periph.timers.delay = state.v[ins.x]

def execute_ld_st_vx(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    periph.timers.sound = state.v[ins.x]

# --- FX29: LD F, Vx ---
# @intent:responsibility VX の値に対応するフォントグリフの先頭アドレスを I に設定します。
def execute_ld_font(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    state.i = FONT_BASE + state.v[ins.x] * FONT_GLYPH_SIZE

# --- FX33: LD B, Vx ---
# @intent:responsibility VX を10進数に分解し、百の位・十の位・一の位を I, I+1, I+2 に格納します。
def execute_ld_bcd(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    value = state.v[ins.x]
    bus.write(state.i & ADDRESS_MASK, value // 100)
    bus.write((state.i + 1) & ADDRESS_MASK, (value // 10) % 10)
    bus.write((state.i + 2) & ADDRESS_MASK, value % 10)

# --- FX55: LD [I], Vx ---
# @intent:responsibility V0〜VX を I から始まるメモリへ格納します。
# @intent:rationale I のインクリメントは互換性設定 load_store_increments_i に従います。
def execute_store_regs(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    for r in range(ins.x + 1):
        bus.write((state.i + r) & ADDRESS_MASK, state.v[r])
    if periph.quirks.load_store_increments_i:
        state.i = (state.i + ins.x + 1) & 0xFFFF

# --- FX65: LD Vx, [I] ---
def execute_load_regs(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    for r in range(ins.x + 1):
        state.v[r] = bus.read((state.i + r) & ADDRESS_MASK)
    if periph.quirks.load_store_increments_i:
        state.i = (state.i + ins.x + 1) & 0xFFFF
