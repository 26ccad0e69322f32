# src/retro_chip8/arch/chip8/instructions/alu.py
"""
ALU命令（算術・論理演算、シフト、乱数）の実装。

VF に書き込むフラグは演算結果の書き込み後に設定します。
X が F の場合はフラグの値が VF に残ります。
"""
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from .base import Instruction, Peripherals

# --- 7XNN: ADD Vx, byte (VF は変化しない) ---
def execute_add_imm(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    state.v[ins.x] = (state.v[ins.x] + ins.nn) & 0xFF

# --- 8XY1 / 8XY2 / 8XY3: OR / AND / XOR ---
def execute_or(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    state.v[ins.x] |= state.v[ins.y]

def execute_and(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    state.v[ins.x] &= state.v[ins.y]

def execute_xor(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    state.v[ins.x] ^= state.v[ins.y]

# --- 8XY4: ADD Vx, Vy ---
# @intent:responsibility 加算し、桁上がりを VF に設定します。
def execute_add_reg(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    total = state.v[ins.x] + state.v[ins.y]
    state.v[ins.x] = total & 0xFF
    state.vf = 1 if total > 0xFF else 0

# --- 8XY5: SUB Vx, Vy ---
# @intent:responsibility VX - VY を計算し、借りが発生しなかった (VX >= VY) 場合に VF=1 とします。
def execute_sub(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    vx, vy = state.v[ins.x], state.v[ins.y]
    state.v[ins.x] = (vx - vy) & 0xFF
    state.vf = 1 if vx >= vy else 0

# --- 8XY7: SUBN Vx, Vy ---
def execute_subn(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    vx, vy = state.v[ins.x], state.v[ins.y]
    state.v[ins.x] = (vy - vx) & 0xFF
    state.vf = 1 if vy >= vx else 0

def _shift_source(state: Chip8CpuState, periph: Peripherals, ins: Instruction) -> int:
    return state.v[ins.y] if periph.quirks.shift_uses_vy else state.v[ins.x]

# --- 8XY6: SHR Vx, Vy ---
# @intent:responsibility シフト元を右に1bitシフトして VX に格納し、押し出された最下位ビットを VF に設定します。
def execute_shr(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    src = _shift_source(state, periph, ins)
    state.v[ins.x] = src >> 1
    state.vf = src & 0x01

# --- 8XYE: SHL Vx, Vy ---
def execute_shl(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    src = _shift_source(state, periph, ins)
    state.v[ins.x] = (src << 1) & 0xFF
    state.vf = (src >> 7) & 0x01

# --- CXNN: RND Vx, byte ---
# @intent:rationale 乱数源は Peripherals 経由で注入され、シードを固定すれば再現可能です。
def execute_rnd(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    state.v[ins.x] = periph.rng.randint(0, 0xFF) & ins.nn

# --- FX1E: ADD I, Vx (VF は変化しない) ---
def execute_add_i(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    state.i = (state.i + state.v[ins.x]) & 0xFFFF
