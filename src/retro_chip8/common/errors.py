# retro_chip8/common/errors.py
"""
例外階層の定義。

ホスト側が「ロード失敗」「実行中の致命的エラー」「停止中の呼び出し」を
区別して扱えるよう、全ての例外は Chip8Error を基底とします。
"""
from typing import Optional


class Chip8Error(Exception):
    """CHIP-8 マシンが送出する全ての例外の基底クラス。"""


# --- ロード系 ---

# @intent:responsibility プログラムのロードに失敗したことを表します。
class LoadError(Chip8Error):
    pass


class ProgramTooLargeError(LoadError):
    """プログラムがエントリポイント以降の空きメモリに収まらない。"""
    def __init__(self, size: int, capacity: int):
        super().__init__(f"Program of {size} bytes exceeds available memory ({capacity} bytes).")
        self.size = size
        self.capacity = capacity


class ProgramIOError(LoadError):
    """プログラムファイルを読み込めなかった。原因となった OSError は __cause__ に保持されます。"""
    def __init__(self, path: str, reason: str):
        super().__init__(f"Could not read program '{path}': {reason}")
        self.path = path


# --- 実行系 ---

# @intent:responsibility 命令実行中に発生した致命的エラーを表します。
# @intent:rationale address には障害を起こした命令のアドレスを保持し、ホストが原因箇所を特定できるようにします。
class ExecutionFault(Chip8Error):
    def __init__(self, message: str, address: Optional[int] = None):
        super().__init__(message)
        self.address = address


class StackOverflowError(ExecutionFault):
    pass


class StackUnderflowError(ExecutionFault):
    pass


class MachineHaltedError(Chip8Error):
    """HALTED 状態のマシンに対して step() が呼ばれた。"""
