# src/retro_chip8/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from retro_chip8.transport.bus import Bus
from retro_chip8.core.snapshot import Operation
from retro_chip8.arch.chip8.state import Chip8CpuState
from .base import Instruction, Peripherals, Quirks, decode_fields, pattern_of, read_word
from .maps import DECODE_MAP, EXECUTE_MAP

# @intent:responsibility CHIP-8の命令語をデコードします。未割り当てのパターンは "UNKNOWN" になります。
def decode_opcode(opcode: int) -> Operation:
    """
    16bit命令語をデコードし、Operationオブジェクトを返します。
    """
    ins = decode_fields(opcode)
    hi, lo = ins.opcode >> 8, ins.opcode & 0xFF
    entry = DECODE_MAP.get(pattern_of(ins.opcode))
    if entry is None:
        return Operation(opcode_hex=f"{ins.opcode:04X}", mnemonic="UNKNOWN",
                         operands=[f"0x{ins.opcode:04X}"], operand_bytes=[hi, lo])
    mnemonic, templates = entry
    operands = [t.format(**ins._asdict()) for t in templates]
    return Operation(opcode_hex=f"{ins.opcode:04X}", mnemonic=mnemonic, operands=operands, operand_bytes=[hi, lo])

# @intent:responsibility デコードされたCHIP-8命令を実行します。実行関数のない命令は何もしません。
def execute_instruction(operation: Operation, state: Chip8CpuState, bus: Bus, periph: Peripherals) -> None:
    """
    デコードされたCHIP-8命令を実行し、CPUの状態と周辺装置を変更します。
    """
    word = int(operation.opcode_hex, 16)
    executor = EXECUTE_MAP.get(pattern_of(word))
    if executor:
        executor(state, bus, periph, decode_fields(word))
