# retro_chip8/core/state.py
"""
全アーキテクチャ共通のレジスタ状態。
"""
from dataclasses import dataclass, replace

# @intent:responsibility PC と SP のみを持つ基底状態。アーキテクチャ側でフィールドを追加して使います。
@dataclass
class CpuState:
    pc: int = 0
    sp: int = 0

    # @intent:responsibility Snapshot に格納するための独立したコピーを返します。
    # @intent:pre-condition リストなど可変なフィールドを追加したサブクラスは、それらも複製するようオーバーライドすること。
    def copy(self) -> "CpuState":
        return replace(self)
