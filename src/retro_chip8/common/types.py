# retro_chip8/common/types.py
"""
レイヤー間で共有する型定義。

CPU がデバッガやUIへ状態を公開する際の受け渡し形式をまとめています。
"""
from typing import Dict, List, NamedTuple

# @intent:data_structure レジスタ名 ("V0".."VF", "I", "PC" など) から値への対応。
RegisterMap = Dict[str, int]

# @intent:data_structure フラグ名 ("VF", "KEY_WAIT", "SOUND") から真偽値への対応。
FlagMap = Dict[str, bool]

class RegisterInfo(NamedTuple):
    name: str
    width: int  # ビット幅 (8 or 16)

# @intent:data_structure UIがレジスタ表示欄を組み立てるためのグループ定義。
class RegisterLayoutInfo(NamedTuple):
    group_name: str
    registers: List[RegisterInfo]

# @intent:data_structure 逆アセンブル結果の1行。通常のタプルとしても比較・分解できます。
class DisassemblyLine(NamedTuple):
    address: int
    hex_bytes: str  # 例: "A2 2A"
    text: str       # 例: "LD I, 0x22A"
