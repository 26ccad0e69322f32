# src/retro_chip8/arch/chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ、キー入力）の実装。
"""
from retro_chip8.transport.bus import Bus
from retro_chip8.peripherals.keypad import Keypad
from retro_chip8.arch.chip8.constants import ADDRESS_MASK
from retro_chip8.arch.chip8.state import Chip8CpuState, KeyWaitState
from .base import Instruction, Peripherals

# 実行関数が呼ばれる時点で state.pc は既に次の命令を指しています (CPU.step で +2 済み)。

def _skip(state: Chip8CpuState) -> None:
    state.pc = (state.pc + 2) & 0xFFFF

# --- 00EE: RET ---
# @intent:responsibility スタックから戻りアドレスをポップしてPCに設定します。空なら StackUnderflowError。
def execute_ret(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    state.pc = state.pop()

# --- 1NNN: JP addr ---
def execute_jp(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    state.pc = ins.nnn

# --- 2NNN: CALL addr ---
# @intent:responsibility 戻りアドレス（次の命令）をプッシュしてからジャンプします。満杯なら StackOverflowError。
def execute_call(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    state.push(state.pc)
    state.pc = ins.nnn

# --- 3XNN / 4XNN: SE/SNE Vx, byte ---
def execute_se_imm(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    if state.v[ins.x] == ins.nn:
        _skip(state)

def execute_sne_imm(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    if state.v[ins.x] != ins.nn:
        _skip(state)

# --- 5XY0 / 9XY0: SE/SNE Vx, Vy ---
def execute_se_reg(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    if state.v[ins.x] == state.v[ins.y]:
        _skip(state)

def execute_sne_reg(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    if state.v[ins.x] != state.v[ins.y]:
        _skip(state)

# --- BNNN: JP V0, addr ---
def execute_jp_v0(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    state.pc = (state.v[0] + ins.nnn) & ADDRESS_MASK

# --- EX9E / EXA1: SKP/SKNP Vx ---
def execute_skp(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    if periph.keypad.is_pressed(state.v[ins.x]):
        _skip(state)

def execute_sknp(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    if not periph.keypad.is_pressed(state.v[ins.x]):
        _skip(state)

# --- FX0A: LD Vx, K ---
# @intent:responsibility キー入力待ちオートマトンを開始し、同じサイクル内で最初のポーリングを行います。
# @intent:rationale PCを巻き戻して同じ命令を再実行する代わりに、以降の step() 冒頭で poll_key_wait を呼び出します。
#                  1ステップにつき1回ポーリングするため、観測されるタイミングは巻き戻し方式と同一です。
def execute_ld_key(state: Chip8CpuState, bus: Bus, periph: Peripherals, ins: Instruction) -> None:
    state.key_wait = KeyWaitState.AWAITING_PRESS
    state.key_wait_register = ins.x
    state.key_wait_key = None
    poll_key_wait(state, periph.keypad)

# @intent:responsibility キー入力待ちオートマトンを1段階進めます。
# @intent:return まだ待機中であれば True。
def poll_key_wait(state: Chip8CpuState, keypad: Keypad) -> bool:
    if state.key_wait == KeyWaitState.AWAITING_PRESS:
        key = keypad.first_pressed()
        if key is not None:
            state.key_wait_key = key
            state.key_wait = KeyWaitState.AWAITING_RELEASE
        return True

    if state.key_wait == KeyWaitState.AWAITING_RELEASE:
        if keypad.is_pressed(state.key_wait_key):
            return True
        state.v[state.key_wait_register] = state.key_wait_key
        state.key_wait = KeyWaitState.IDLE
        state.key_wait_key = None
        return False

    return False
