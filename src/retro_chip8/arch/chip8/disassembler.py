# src/retro_chip8/arch/chip8/disassembler.py
"""
CHIP-8 Disassembler

メモリ上のバイナリデータを解析し、CHIP-8のニーモニックに変換します。
バスアクセスログを汚さないように peek (ログなし読み込み) を使用します。
"""
from typing import List
from retro_chip8.transport.bus import Bus
from retro_chip8.common.types import DisassemblyLine
from retro_chip8.arch.chip8.constants import MEMORY_SIZE
from retro_chip8.arch.chip8.instructions import decode_opcode

# @intent:responsibility 指定されたメモリ範囲を逆アセンブルし、表示用データを生成します。
def disassemble(bus: Bus, start_addr: int, length: int) -> List[DisassemblyLine]:
    """
    指定された範囲のメモリを2バイト単位で逆アセンブルします。

    Returns:
        DisassemblyLine (address, hex_bytes, text) のリスト。
    """
    result = []
    current_addr = start_addr
    end_addr = start_addr + length

    while current_addr < end_addr:
        # 命令の2バイト目がメモリ外に出る場合は打ち切る
        if current_addr + 1 >= MEMORY_SIZE:
            break

        word = (bus.peek(current_addr) << 8) | bus.peek(current_addr + 1)
        operation = decode_opcode(word)

        hex_bytes = " ".join(f"{b:02X}" for b in operation.operand_bytes)
        mnemonic_str = operation.mnemonic
        if operation.operands:
            mnemonic_str += " " + ", ".join(operation.operands)

        result.append(DisassemblyLine(current_addr, hex_bytes, mnemonic_str))
        current_addr += operation.length

    return result
