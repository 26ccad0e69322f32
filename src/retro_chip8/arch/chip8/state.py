# src/retro_chip8/arch/chip8/state.py
"""
CHIP-8 CPU固有の状態定義。
"""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional

from retro_chip8.core.state import CpuState
from retro_chip8.common.errors import StackOverflowError, StackUnderflowError
from retro_chip8.arch.chip8.constants import ENTRY_POINT, REGISTER_COUNT, STACK_CAPACITY

# @intent:responsibility FX0A (キー入力待ち) の進行状態を表すオートマトンの状態。
class KeyWaitState(Enum):
    IDLE = "IDLE"
    AWAITING_PRESS = "AWAITING_PRESS"
    AWAITING_RELEASE = "AWAITING_RELEASE"

# @intent:responsibility CHIP-8 CPUの全てのレジスタ（V0〜VF, I, PC）とコールスタックを保持します。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8 CPUのレジスタ状態を保持するデータクラス。
    sp はスタックに積まれている戻りアドレスの個数（次に書き込む位置）です。
    """
    pc: int = ENTRY_POINT
    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    i: int = 0x0000     # Index Register
    stack: List[int] = field(default_factory=lambda: [0] * STACK_CAPACITY)
    key_wait: KeyWaitState = KeyWaitState.IDLE
    key_wait_register: int = 0
    key_wait_key: Optional[int] = None

    # @intent:accessor フラグレジスタ VF へのアクセサ。
    @property
    def vf(self) -> int:
        return self.v[0xF]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[0xF] = value & 0xFF

    # @intent:responsibility 戻りアドレスをスタックに積みます。
    # @intent:pre-condition スタックに空きがあること。満杯なら状態を変更せずに StackOverflowError を送出します。
    def push(self, address: int) -> None:
        if self.sp >= STACK_CAPACITY:
            raise StackOverflowError(f"Call stack overflow: depth limit {STACK_CAPACITY} reached.")
        self.stack[self.sp] = address & 0xFFFF
        self.sp += 1

    # @intent:pre-condition スタックが空でないこと。空なら StackUnderflowError を送出します。
    def pop(self) -> int:
        if self.sp <= 0:
            raise StackUnderflowError("Call stack underflow: return with empty stack.")
        self.sp -= 1
        return self.stack[self.sp]

    def copy(self) -> "Chip8CpuState":
        return replace(self, v=list(self.v), stack=list(self.stack))
