# src/retro_chip8/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。
"""
from typing import List, Optional
from retro_chip8.core.snapshot import Operation, Metadata, Snapshot
from retro_chip8.common.types import DisassemblyLine, FlagMap, RegisterLayoutInfo, RegisterMap, RegisterInfo
from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.arch.chip8.state import Chip8CpuState, KeyWaitState
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.instructions import Peripherals, decode_opcode, execute_instruction, read_word
from retro_chip8.arch.chip8.instructions.control import poll_key_wait
from retro_chip8.arch.chip8.constants import ADDRESS_MASK
from retro_chip8.arch.chip8 import disassembler

# @intent:responsibility CHIP-8 CPUの具体的なエミュレーションロジック（フェッチ、デコード、実行）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8 インタプリタの実行エンジン。
    周辺装置（フレームバッファ、キーパッド、タイマー、乱数源）は Peripherals として受け取ります。
    """
    def __init__(self, bus: Bus, peripherals: Optional[Peripherals] = None):
        self._peripherals = peripherals if peripherals is not None else Peripherals()
        super().__init__(bus)

    @property
    def peripherals(self) -> Peripherals:
        return self._peripherals

    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState()

    # @intent:responsibility PCが指す2バイトをビッグエンディアンで読み出します。
    def _fetch(self) -> int:
        return read_word(self._bus, self._state.pc, ADDRESS_MASK)

    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode)

    def _execute(self, operation: Operation) -> None:
        execute_instruction(operation, self._state, self._bus, self._peripherals)

    # @intent:responsibility FX0A によるキー入力待ち中は、フェッチの代わりにオートマトンを1段階進めます。
    # @intent:return 待機中（またはこのステップで待機が解除された）場合はそのSnapshot、通常時はNone。
    def _handle_wait(self, current_pc: int) -> Optional[Snapshot]:
        state = self._state
        if state.key_wait == KeyWaitState.IDLE:
            return None

        register = state.key_wait_register
        poll_key_wait(state, self._peripherals.keypad)
        self._cycle_count += 1
        operation = Operation(
            opcode_hex=f"F{register:X}0A",
            mnemonic="LD",
            operands=[f"V{register:X}", "K"],
            operand_bytes=[0xF0 | register, 0x0A],
        )
        return Snapshot(
            state=state.copy(),
            operation=operation,
            metadata=Metadata(cycle_count=self._cycle_count, symbol_info=f"{current_pc:#06x}: WAIT KEY"),
            bus_activity=self._bus.get_and_clear_activity_log()
        )

    # @intent:responsibility UI/デバッガ用に、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> RegisterMap:
        s = self._state
        registers = {f"V{n:X}": value for n, value in enumerate(s.v)}
        registers.update({
            "I": s.i, "PC": s.pc, "SP": s.sp,
            "DT": self._peripherals.timers.delay, "ST": self._peripherals.timers.sound,
        })
        return registers

    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{n:X}", 8) for n in range(16)]),
            RegisterLayoutInfo("Index/Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [
                RegisterInfo("DT", 8), RegisterInfo("ST", 8)
            ]),
        ]

    def get_flag_state(self) -> FlagMap:
        s = self._state
        return {
            "VF": s.vf != 0,
            "KEY_WAIT": s.key_wait != KeyWaitState.IDLE,
            "SOUND": self._peripherals.timers.sound_active,
        }

    def disassemble(self, start_addr: int, length: int) -> List[DisassemblyLine]:
        return disassembler.disassemble(self._bus, start_addr, length)
