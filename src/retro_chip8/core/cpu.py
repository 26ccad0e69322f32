# retro_chip8/core/cpu.py
"""
Core Layer (命令サイクル)

フェッチ・デコード・実行の順序と、1サイクルごとの Snapshot 生成を定義します。
命令語の意味づけはアーキテクチャ側 (arch/) のサブクラスが担います。
"""
from abc import ABC, abstractmethod
from typing import Optional, List

from retro_chip8.transport.bus import Bus
from retro_chip8.core.snapshot import Snapshot, Operation, Metadata
from retro_chip8.core.state import CpuState
from retro_chip8.common.errors import ExecutionFault
from retro_chip8.common.types import DisassemblyLine, FlagMap, RegisterLayoutInfo, RegisterMap

# @intent:responsibility 命令サイクルの骨格を提供し、アーキテクチャ固有の処理をサブクラスへ委ねます。
class AbstractCpu(ABC):
    def __init__(self, bus: Bus):
        self._bus = bus
        # 状態は get_state() 経由で公開し、差し替えは reset() のみで行う
        self._state: CpuState = self._create_initial_state()
        self._cycle_count: int = 0

    @abstractmethod
    def _create_initial_state(self) -> CpuState:
        pass

    def reset(self) -> None:
        self._state = self._create_initial_state()
        self._cycle_count = 0

    def get_state(self) -> CpuState:
        return self._state

    def get_cycle_count(self) -> int:
        return self._cycle_count

    # @intent:responsibility 現在のPCが指す命令語を読み出します。PCは進めません。
    @abstractmethod
    def _fetch(self) -> int:
        pass

    @abstractmethod
    def _decode(self, opcode: int) -> Operation:
        pass

    @abstractmethod
    def _execute(self, operation: Operation) -> None:
        pass

    # @intent:responsibility 1命令を実行し、実行後の状態を Snapshot として返します。
    # @intent:rationale 実行関数が呼ばれる時点で PC は既に次の命令を指しているため、
    #                  ジャンプやスキップは PC を上書きまたは加算するだけで済みます。
    # @intent:post-condition ExecutionFault 発生時は PC を障害命令のアドレスに戻し、例外をそのまま送出します。
    def step(self) -> Snapshot:
        self._bus.get_and_clear_activity_log()
        initial_pc = self._state.pc

        waiting = self._handle_wait(initial_pc)
        if waiting is not None:
            return waiting

        operation = self._decode(self._fetch())
        self._update_pc(operation)
        try:
            self._execute(operation)
        except ExecutionFault as fault:
            self._state.pc = initial_pc
            if fault.address is None:
                fault.address = initial_pc
            raise

        return self._create_snapshot(initial_pc, operation)

    # @intent:responsibility 命令のフェッチを止めて待機すべきサイクルを処理するフックです。
    # @intent:return 待機サイクルとして処理した場合はその Snapshot、通常の実行を続ける場合は None。
    def _handle_wait(self, current_pc: int) -> Optional[Snapshot]:
        return None

    def _update_pc(self, operation: Operation) -> None:
        self._state.pc = (self._state.pc + operation.length) & 0xFFFF

    def _create_snapshot(self, initial_pc: int, operation: Operation) -> Snapshot:
        self._cycle_count += operation.cycle_count
        text = operation.mnemonic
        if operation.operands:
            text += " " + ", ".join(operation.operands)
        return Snapshot(
            state=self._state.copy(),
            operation=operation,
            metadata=Metadata(cycle_count=self._cycle_count, symbol_info=f"{initial_pc:#06x}: {text}"),
            bus_activity=self._bus.get_and_clear_activity_log(),
        )

    # --- ホスト/デバッガ向けの参照インターフェース ---

    @abstractmethod
    def get_register_map(self) -> RegisterMap:
        pass

    @abstractmethod
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        pass

    @abstractmethod
    def get_flag_state(self) -> FlagMap:
        pass

    @abstractmethod
    def disassemble(self, start_addr: int, length: int) -> List[DisassemblyLine]:
        pass
