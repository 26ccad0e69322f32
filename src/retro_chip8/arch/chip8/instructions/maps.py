# src/retro_chip8/arch/chip8/instructions/maps.py
"""
命令パターンと命令実装のマッピング定義。
"""
from . import load
from . import alu
from . import control
from . import display

# @intent:map 命令パターンから (ニーモニック, オペランド書式) へのマッピングテーブル。
# 書式文字列は Instruction のフィールド名 (x, y, n, nn, nnn) で展開されます。
DECODE_MAP = {
    # Display
    "00E0": ("CLS", []),
    "DXYN": ("DRW", ["V{x:X}", "V{y:X}", "{n}"]),

    # Control
    "0NNN": ("SYS", ["0x{nnn:03X}"]),
    "00EE": ("RET", []),
    "1NNN": ("JP", ["0x{nnn:03X}"]),
    "2NNN": ("CALL", ["0x{nnn:03X}"]),
    "3XNN": ("SE", ["V{x:X}", "0x{nn:02X}"]),
    "4XNN": ("SNE", ["V{x:X}", "0x{nn:02X}"]),
    "5XY0": ("SE", ["V{x:X}", "V{y:X}"]),
    "9XY0": ("SNE", ["V{x:X}", "V{y:X}"]),
    "BNNN": ("JP", ["V0", "0x{nnn:03X}"]),
    "EX9E": ("SKP", ["V{x:X}"]),
    "EXA1": ("SKNP", ["V{x:X}"]),
    "FX0A": ("LD", ["V{x:X}", "K"]),

    # Load/Store
    "6XNN": ("LD", ["V{x:X}", "0x{nn:02X}"]),
    "8XY0": ("LD", ["V{x:X}", "V{y:X}"]),
    "ANNN": ("LD", ["I", "0x{nnn:03X}"]),
    "FX07": ("LD", ["V{x:X}", "DT"]),
    "FX15": ("LD", ["DT", "V{x:X}"]),
    "FX18": ("LD", ["ST", "V{x:X}"]),
    "FX29": ("LD", ["F", "V{x:X}"]),
    "FX33": ("LD", ["B", "V{x:X}"]),
    "FX55": ("LD", ["[I]", "V{x:X}"]),
    "FX65": ("LD", ["V{x:X}", "[I]"]),

    # ALU
    "7XNN": ("ADD", ["V{x:X}", "0x{nn:02X}"]),
    "8XY1": ("OR", ["V{x:X}", "V{y:X}"]),
    "8XY2": ("AND", ["V{x:X}", "V{y:X}"]),
    "8XY3": ("XOR", ["V{x:X}", "V{y:X}"]),
    "8XY4": ("ADD", ["V{x:X}", "V{y:X}"]),
    "8XY5": ("SUB", ["V{x:X}", "V{y:X}"]),
    "8XY6": ("SHR", ["V{x:X}", "V{y:X}"]),
    "8XY7": ("SUBN", ["V{x:X}", "V{y:X}"]),
    "8XYE": ("SHL", ["V{x:X}", "V{y:X}"]),
    "CXNN": ("RND", ["V{x:X}", "0x{nn:02X}"]),
    "FX1E": ("ADD", ["I", "V{x:X}"]),
}

# @intent:map 命令パターンから実行関数へのマッピングテーブル。
# "0NNN" (SYS) は歴史的に無視される命令のため、実行関数を持ちません。
EXECUTE_MAP = {
    # Display
    "00E0": display.execute_cls,
    "DXYN": display.execute_drw,

    # Control
    "00EE": control.execute_ret,
    "1NNN": control.execute_jp,
    "2NNN": control.execute_call,
    "3XNN": control.execute_se_imm,
    "4XNN": control.execute_sne_imm,
    "5XY0": control.execute_se_reg,
    "9XY0": control.execute_sne_reg,
    "BNNN": control.execute_jp_v0,
    "EX9E": control.execute_skp,
    "EXA1": control.execute_sknp,
    "FX0A": control.execute_ld_key,

    # Load/Store
    "6XNN": load.execute_ld_imm,
    "8XY0": load.execute_ld_reg,
    "ANNN": load.execute_ld_i,
    "FX07": load.execute_ld_vx_dt,
    "FX15": load.execute_ld_dt_vx,
    "FX18": load.execute_ld_st_vx,
    "FX29": load.execute_ld_font,
    "FX33": load.execute_ld_bcd,
    "FX55": load.execute_store_regs,
    "FX65": load.execute_load_regs,

    # ALU
    "7XNN": alu.execute_add_imm,
    "8XY1": alu.execute_or,
    "8XY2": alu.execute_and,
    "8XY3": alu.execute_xor,
    "8XY4": alu.execute_add_reg,
    "8XY5": alu.execute_sub,
    "8XY6": alu.execute_shr,
    "8XY7": alu.execute_subn,
    "8XYE": alu.execute_shl,
    "CXNN": alu.execute_rnd,
    "FX1E": alu.execute_add_i,
}
