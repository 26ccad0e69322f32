# src/retro_chip8/arch/chip8/machine.py
"""
CHIP-8 マシン（コンポジションルート）。

メモリ（Bus）、CPU、フレームバッファ、キーパッド、タイマーを組み立て、
ホストループに対して load / step / tick_timers / set_key / framebuffer を公開します。
同一インスタンスへの並行呼び出しは想定していません。
"""
import logging
import random
from enum import Enum
from typing import List, Optional, Tuple

from retro_chip8.transport.bus import Bus, RAM, ROM
from retro_chip8.core.snapshot import Snapshot
from retro_chip8.peripherals.display import Framebuffer, DISPLAY_WIDTH, DISPLAY_HEIGHT
from retro_chip8.peripherals.keypad import Keypad
from retro_chip8.peripherals.timers import TimerPair
from retro_chip8.common.errors import ExecutionFault, MachineHaltedError, ProgramTooLargeError
from retro_chip8.loader.loader import BinaryRomLoader
from retro_chip8.arch.chip8.constants import (
    ADDRESS_MASK, ENTRY_POINT, FONT_BASE, FONT_END, FONT_SET, MAX_PROGRAM_SIZE, MEMORY_SIZE,
)
from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.instructions import Peripherals, Quirks

logger = logging.getLogger(__name__)

DEFAULT_CLOCK_HZ = 700
TIMER_HZ = 60

# @intent:responsibility ホストが制御する実行状態。コア自身が自律的に遷移させるのは致命的エラー時の HALTED のみです。
class RunState(Enum):
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"
    HALTED = "HALTED"

# @intent:responsibility CHIP-8 の全構成要素を単一の集約として所有し、ホスト向けの操作を提供します。
class Chip8Machine:
    """
    CHIP-8 仮想マシン。

    ホストは load() でプログラムを読み込んだ後、1フレーム（1/60秒）ごとに
    steps_per_frame 回 step() を呼び、続けて tick_timers() を1回呼びます。
    run_frame() はこの手順をまとめたものです。
    """
    def __init__(self, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT,
                 quirks: Optional[Quirks] = None, seed: Optional[int] = None,
                 clock_hz: int = DEFAULT_CLOCK_HZ):
        if clock_hz <= 0:
            raise ValueError("clock_hz must be a positive integer.")
        self._seed = seed
        self._clock_hz = clock_hz

        # フォント領域は ROM としてマップし、命令からの書き込みを無視させる
        self._bus = Bus()
        self._bus.register_device(FONT_BASE, FONT_END, ROM(len(FONT_SET)))
        self._bus.register_device(FONT_END + 1, ADDRESS_MASK, RAM(MEMORY_SIZE - len(FONT_SET)))

        self._peripherals = Peripherals(
            display=Framebuffer(width, height),
            keypad=Keypad(),
            timers=TimerPair(),
            rng=random.Random(seed),
            quirks=quirks if quirks is not None else Quirks(),
        )
        self._cpu = Chip8Cpu(self._bus, self._peripherals)
        self._run_state = RunState.RUNNING
        self._fault: Optional[ExecutionFault] = None
        self.reset()

    # --- 構成要素へのアクセサ ---

    @property
    def cpu(self) -> Chip8Cpu:
        return self._cpu

    @property
    def bus(self) -> Bus:
        return self._bus

    @property
    def state(self) -> Chip8CpuState:
        return self._cpu.get_state()

    @property
    def display(self) -> Framebuffer:
        return self._peripherals.display

    @property
    def keypad(self) -> Keypad:
        return self._peripherals.keypad

    @property
    def timers(self) -> TimerPair:
        return self._peripherals.timers

    @property
    def quirks(self) -> Quirks:
        return self._peripherals.quirks

    @property
    def run_state(self) -> RunState:
        return self._run_state

    @property
    def fault(self) -> Optional[ExecutionFault]:
        return self._fault

    @property
    def sound_active(self) -> bool:
        return self._peripherals.timers.sound_active

    @property
    def clock_hz(self) -> int:
        return self._clock_hz

    # @intent:responsibility 1フレーム（1/60秒）あたりに実行する命令数を返します。
    @property
    def steps_per_frame(self) -> int:
        return max(1, self._clock_hz // TIMER_HZ)

    # --- ライフサイクル ---

    # @intent:responsibility 全状態をゼロクリアし、フォントを再配置して RUNNING に戻します。
    def reset(self) -> None:
        self._bus.clear()
        for offset, glyph_byte in enumerate(FONT_SET):
            self._bus.load(FONT_BASE + offset, glyph_byte)
        self._cpu.reset()
        self._peripherals.display.clear()
        self._peripherals.keypad.reset()
        self._peripherals.timers.reset()
        if self._seed is not None:
            self._peripherals.rng.seed(self._seed)
        self._run_state = RunState.RUNNING
        self._fault = None

    # @intent:responsibility プログラムをエントリポイント (0x200) に配置し、PCをエントリポイントに設定します。
    # @intent:pre-condition プログラム長が MAX_PROGRAM_SIZE 以下であること。超過時はマシンを変更せずに ProgramTooLargeError を送出します。
    def load(self, program: bytes) -> None:
        if len(program) > MAX_PROGRAM_SIZE:
            raise ProgramTooLargeError(len(program), MAX_PROGRAM_SIZE)
        self.reset()
        for offset, byte in enumerate(program):
            self._bus.load(ENTRY_POINT + offset, byte)
        self._cpu.get_state().pc = ENTRY_POINT
        logger.info("Loaded %d bytes at %#05x", len(program), ENTRY_POINT)

    def load_file(self, path: str) -> None:
        self.load(BinaryRomLoader().load_binary(path))

    # --- 実行制御 ---

    # @intent:responsibility 1命令サイクルを実行します。
    # @intent:return 実行結果のSnapshot。PAUSED 中は何もせず None を返します。
    # @intent:post-condition ExecutionFault 発生時は HALTED へ遷移し、例外をホストへ再送出します。
    def step(self) -> Optional[Snapshot]:
        if self._run_state == RunState.HALTED:
            raise MachineHaltedError("Machine is halted; call reset() or load() first.") from self._fault
        if self._run_state == RunState.PAUSED:
            return None
        try:
            return self._cpu.step()
        except ExecutionFault as fault:
            self._run_state = RunState.HALTED
            self._fault = fault
            logger.error("Execution halted at %#05x: %s", fault.address, fault)
            raise

    # @intent:responsibility 1フレーム分（steps_per_frame 回の step と1回の tick_timers）を実行します。
    def run_frame(self) -> List[Snapshot]:
        if self._run_state != RunState.RUNNING:
            return []
        snapshots = []
        for _ in range(self.steps_per_frame):
            snapshot = self.step()
            if snapshot is None:
                break
            snapshots.append(snapshot)
        self.tick_timers()
        return snapshots

    def tick_timers(self) -> None:
        self._peripherals.timers.tick()

    def pause(self) -> None:
        if self._run_state == RunState.RUNNING:
            self._run_state = RunState.PAUSED
            logger.debug("Machine paused at %#05x", self.state.pc)

    def resume(self) -> None:
        if self._run_state == RunState.PAUSED:
            self._run_state = RunState.RUNNING
            logger.debug("Machine resumed at %#05x", self.state.pc)

    # --- ホスト入出力 ---

    def set_key(self, index: int, pressed: bool) -> None:
        self._peripherals.keypad.set_key(index, pressed)

    # @intent:responsibility ホスト描画用の読み取り専用ビュー (行優先のブール値タプル) を返します。
    def framebuffer(self) -> Tuple[Tuple[bool, ...], ...]:
        return self._peripherals.display.rows()
