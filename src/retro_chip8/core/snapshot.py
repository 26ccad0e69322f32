# retro_chip8/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1命令サイクル実行後のCPUとバスの状態を記録した不変のデータ構造を定義します。
ホストへの情報提供と、デバッグ時の状態記録に用いる責務を負います。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from retro_chip8.core.state import CpuState
from retro_chip8.transport.bus import BusAccessType, BusAccess

__all__ = ["Operation", "Metadata", "Snapshot", "BusAccess", "BusAccessType"]


# @intent:responsibility 実行された命令の詳細を記録します。
@dataclass(frozen=True)
class Operation:
    """
    実行された命令の詳細（HEX、ニーモニック、オペランド）を記録するデータクラス。
    """
    opcode_hex: str # 例: "8124"
    mnemonic: str # 例: "ADD"
    operands: List[str] = field(default_factory=list) # 例: ["V1", "V2"]
    operand_bytes: List[int] = field(default_factory=list) # 生の命令バイト (上位, 下位)
    cycle_count: int = 1
    length: int = 2 # CHIP-8 の命令は全て2バイト

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True)
class Metadata:
    cycle_count: int
    symbol_info: Optional[str] = None # 例: "0x0200: LD V1, 0x05"

# @intent:responsibility ある一時点におけるCPUとバスの状態を不変に記録します。
@dataclass(frozen=True)
class Snapshot:
    """
    ある一時点における、CPUとバスの状態を記録した不変のデータ構造。
    state は生成時にコピーされるため、以後のCPU実行の影響を受けません。
    """
    state: CpuState
    operation: Operation
    metadata: Metadata
    bus_activity: List[BusAccess] = field(default_factory=list)
