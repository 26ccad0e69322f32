# retro_chip8/debugger/debugger.py
"""
デバッガ。

Chip8Machine を命令単位またはフレーム単位で進め、条件に一致した時点で
マシンを PAUSED にして実行を止めます。実行結果の Snapshot は固定長の履歴に残ります。
"""
import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, List, Optional

from retro_chip8.arch.chip8.machine import Chip8Machine, RunState
from retro_chip8.arch.chip8.state import KeyWaitState
from retro_chip8.core.snapshot import Snapshot, BusAccessType
from retro_chip8.common.types import RegisterMap

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_SIZE = 1024

class BreakpointConditionType(Enum):
    PC_MATCH = "PC_MATCH"               # 実行前: PC が value と一致
    MEMORY_READ = "MEMORY_READ"         # 実行後: address が読まれた
    MEMORY_WRITE = "MEMORY_WRITE"       # 実行後: address へ書き込まれた
    REGISTER_VALUE = "REGISTER_VALUE"   # 実行後: register_name の値が value
    REGISTER_CHANGE = "REGISTER_CHANGE" # 実行後: register_name の値が直前から変化
    OPCODE_MATCH = "OPCODE_MATCH"       # 実行後: 実行した命令語が value

# @intent:data_structure ブレークポイント1件。不変なので、そのまま一覧の比較や削除のキーに使えます。
@dataclass(frozen=True)
class BreakpointCondition:
    condition_type: BreakpointConditionType
    value: Optional[int] = None
    address: Optional[int] = None
    register_name: Optional[str] = None  # get_register_map() のキー (例: "V3", "I")
    enabled: bool = True

# @intent:responsibility ブレークポイントの管理と、ブレークポイントを監視しながらの実行を行います。
class Debugger:
    def __init__(self, machine: Chip8Machine, history_size: int = DEFAULT_HISTORY_SIZE):
        self._machine = machine
        self._breakpoints: List[BreakpointCondition] = []
        self._history: Deque[Snapshot] = deque(maxlen=history_size)
        self._last_snapshot: Optional[Snapshot] = None
        self._registers_before: RegisterMap = machine.cpu.get_register_map()
        self._hit: Optional[BreakpointCondition] = None
        # 停止位置から再開する最初の1命令だけは PC_MATCH を評価しない
        self._resume_pc: Optional[int] = None

    @property
    def machine(self) -> Chip8Machine:
        return self._machine

    # --- ブレークポイント管理 ---

    def add_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition not in self._breakpoints:
            self._breakpoints.append(condition)

    def update_breakpoint(self, old_condition: BreakpointCondition, new_condition: BreakpointCondition) -> None:
        try:
            self._breakpoints[self._breakpoints.index(old_condition)] = new_condition
        except ValueError:
            pass

    def remove_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition in self._breakpoints:
            self._breakpoints.remove(condition)

    def get_breakpoints(self) -> List[BreakpointCondition]:
        return list(self._breakpoints)

    # --- 実行結果の参照 ---

    def get_history(self) -> List[Snapshot]:
        return list(self._history)

    def get_last_snapshot(self) -> Optional[Snapshot]:
        return self._last_snapshot

    def get_last_hit(self) -> Optional[BreakpointCondition]:
        return self._hit

    # --- 条件判定 ---

    def _enabled(self, condition_type: Optional[BreakpointConditionType] = None) -> List[BreakpointCondition]:
        return [bp for bp in self._breakpoints
                if bp.enabled and (condition_type is None or bp.condition_type == condition_type)]

    # @intent:responsibility 実行後に評価する条件 (PC_MATCH 以外) が成立しているかを判定します。
    def _matches(self, bp: BreakpointCondition, snapshot: Snapshot, registers: RegisterMap) -> bool:
        kind = bp.condition_type
        if kind in (BreakpointConditionType.MEMORY_READ, BreakpointConditionType.MEMORY_WRITE):
            wanted = BusAccessType.READ if kind == BreakpointConditionType.MEMORY_READ else BusAccessType.WRITE
            return any(a.access_type == wanted and a.address == bp.address for a in snapshot.bus_activity)
        if kind == BreakpointConditionType.OPCODE_MATCH:
            return int(snapshot.operation.opcode_hex, 16) == bp.value
        if kind == BreakpointConditionType.REGISTER_VALUE:
            return registers.get(bp.register_name) == bp.value
        if kind == BreakpointConditionType.REGISTER_CHANGE:
            name = bp.register_name
            return (name in registers and name in self._registers_before
                    and registers[name] != self._registers_before[name])
        return False

    def _record(self, snapshot: Snapshot) -> None:
        self._last_snapshot = snapshot
        self._history.append(snapshot)

    # --- 実行制御 ---

    # @intent:responsibility ブレークポイントを評価せずに1命令だけ実行します。
    # @intent:rationale PAUSED 中の単発実行を許すため、実行の間だけ RUNNING に戻します。
    def step_instruction(self) -> Optional[Snapshot]:
        paused = self._machine.run_state == RunState.PAUSED
        if paused:
            self._machine.resume()
        try:
            snapshot = self._machine.step()
        finally:
            if paused:
                self._machine.pause()
        if snapshot is not None:
            self._record(snapshot)
        return snapshot

    # @intent:return 実行を止めるべき場合 (ブレークポイント到達、またはマシンが RUNNING でない) は True。
    # @intent:rationale FX0A の待機中は PC が既に次の命令を指していますが、その命令はまだ実行されません。
    #                  待機が解けるまで PC_MATCH は評価しません。
    def _step_and_check(self) -> bool:
        state = self._machine.state
        pc = state.pc
        resume_pc, self._resume_pc = self._resume_pc, None
        if pc != resume_pc and state.key_wait == KeyWaitState.IDLE:
            for bp in self._enabled(BreakpointConditionType.PC_MATCH):
                if bp.value == pc:
                    self._on_hit(bp, pc)
                    return True

        snapshot = self._machine.step()
        if snapshot is None:
            return True
        self._record(snapshot)

        registers = self._machine.cpu.get_register_map()
        hit = next((bp for bp in self._enabled()
                    if bp.condition_type != BreakpointConditionType.PC_MATCH
                    and self._matches(bp, snapshot, registers)), None)
        self._registers_before = registers
        if hit is not None:
            self._on_hit(hit, snapshot.state.pc)
            return True
        return False

    def _on_hit(self, bp: BreakpointCondition, pc: int) -> None:
        self._hit = bp
        self._resume_pc = self._machine.state.pc
        self._machine.pause()
        logger.info("Breakpoint %s hit at PC: %#06x", bp.condition_type.value, pc)

    # @intent:responsibility ブレークポイントに到達するか max_steps 命令を実行するまで進めます。
    # @intent:return ブレークポイントに到達した場合は True。
    def run(self, max_steps: int) -> bool:
        self._hit = None
        self._resume_pc = self._machine.state.pc
        self._machine.resume()
        for _ in range(max_steps):
            if self._step_and_check():
                break
        return self._hit is not None

    # @intent:responsibility 1フレーム分の命令をブレークポイントを監視しながら実行し、タイマーを1回進めます。
    # @intent:return ブレークポイントに到達した場合は True。RUNNING でなければ何もせず False。
    def run_frame(self) -> bool:
        self._hit = None
        if self._machine.run_state != RunState.RUNNING:
            return False
        for _ in range(self._machine.steps_per_frame):
            if self._step_and_check():
                break
        self._machine.tick_timers()
        return self._hit is not None

    def stop(self) -> None:
        self._machine.pause()
