# src/retro_chip8/arch/chip8/instructions/maps.py
"""
命令語と命令種別、命令種別と実装のマッピング定義。
"""
from typing import Callable, Dict, List, Tuple

from .base import Opcode
from . import alu
from . import control
from . import display
from . import keys
from . import load

# @intent:map 上位4ビットのみで命令種別が決まるグループ。
GROUP_MAP: Dict[int, Opcode] = {
    0x1: Opcode.JP,
    0x2: Opcode.CALL,
    0x3: Opcode.SE_IMM,
    0x4: Opcode.SNE_IMM,
    0x5: Opcode.SE_REG,
    0x6: Opcode.LD_IMM,
    0x7: Opcode.ADD_IMM,
    0x9: Opcode.SNE_REG,
    0xA: Opcode.LD_I,
    0xB: Opcode.JP_V0,
    0xC: Opcode.RND,
    0xD: Opcode.DRW,
}

# @intent:map グループ0（下位12ビットで判別）。
SYSTEM_MAP: Dict[int, Opcode] = {
    0x0E0: Opcode.CLS,
    0x0EE: Opcode.RET,
}

# @intent:map グループ8（下位4ビットで判別）。
ALU_MAP: Dict[int, Opcode] = {
    0x0: Opcode.LD_REG,
    0x1: Opcode.OR,
    0x2: Opcode.AND,
    0x3: Opcode.XOR,
    0x4: Opcode.ADD_REG,
    0x5: Opcode.SUB,
    0x6: Opcode.SHR,
    0x7: Opcode.SUBN,
    0xE: Opcode.SHL,
}

# @intent:map グループE（下位8ビットで判別）。
KEY_MAP: Dict[int, Opcode] = {
    0x9E: Opcode.SKP,
    0xA1: Opcode.SKNP,
}

# @intent:map グループF（下位8ビットで判別）。
MISC_MAP: Dict[int, Opcode] = {
    0x07: Opcode.LD_V_DT,
    0x0A: Opcode.LD_V_K,
    0x15: Opcode.LD_DT_V,
    0x18: Opcode.LD_ST_V,
    0x1E: Opcode.ADD_I,
    0x29: Opcode.LD_F,
    0x33: Opcode.LD_B,
    0x55: Opcode.LD_MEM_V,
    0x65: Opcode.LD_V_MEM,
}

# @intent:map 2段目の判別が必要なグループ: (判別キーを取り出す関数, テーブル)。
SUB_MAPS: Dict[int, Tuple[Callable[[int], int], Dict[int, Opcode]]] = {
    0x0: (lambda word: word & 0x0FFF, SYSTEM_MAP),
    0x8: (lambda word: word & 0x000F, ALU_MAP),
    0xE: (lambda word: word & 0x00FF, KEY_MAP),
    0xF: (lambda word: word & 0x00FF, MISC_MAP),
}

# @intent:map 命令種別から実行関数へのマッピングテーブル。
EXECUTE_MAP = {
    # Control
    Opcode.RET: control.execute_ret,
    Opcode.JP: control.execute_jp,
    Opcode.CALL: control.execute_call,
    Opcode.SE_IMM: control.execute_se_imm,
    Opcode.SNE_IMM: control.execute_sne_imm,
    Opcode.SE_REG: control.execute_se_reg,
    Opcode.SNE_REG: control.execute_sne_reg,
    Opcode.JP_V0: control.execute_jp_v0,

    # ALU
    Opcode.ADD_IMM: alu.execute_add_imm,
    Opcode.OR: alu.execute_or,
    Opcode.AND: alu.execute_and,
    Opcode.XOR: alu.execute_xor,
    Opcode.ADD_REG: alu.execute_add_reg,
    Opcode.SUB: alu.execute_sub,
    Opcode.SHR: alu.execute_shr,
    Opcode.SUBN: alu.execute_subn,
    Opcode.SHL: alu.execute_shl,
    Opcode.RND: alu.execute_rnd,

    # Load/Store
    Opcode.LD_IMM: load.execute_ld_imm,
    Opcode.LD_REG: load.execute_ld_reg,
    Opcode.LD_I: load.execute_ld_i,
    Opcode.ADD_I: load.execute_add_i,
    Opcode.LD_F: load.execute_ld_f,
    Opcode.LD_B: load.execute_ld_b,
    Opcode.LD_MEM_V: load.execute_ld_mem_v,
    Opcode.LD_V_MEM: load.execute_ld_v_mem,
    Opcode.LD_V_DT: load.execute_ld_v_dt,
    Opcode.LD_DT_V: load.execute_ld_dt_v,
    Opcode.LD_ST_V: load.execute_ld_st_v,

    # Display
    Opcode.CLS: display.execute_cls,
    Opcode.DRW: display.execute_drw,

    # Keypad
    Opcode.SKP: keys.execute_skp,
    Opcode.SKNP: keys.execute_sknp,
    Opcode.LD_V_K: keys.execute_ld_v_k,
}

def _vx(f) -> List[str]:
    return [f"V{f['x']:X}"]

def _vx_vy(f) -> List[str]:
    return [f"V{f['x']:X}", f"V{f['y']:X}"]

def _vx_kk(f) -> List[str]:
    return [f"V{f['x']:X}", f"{f['kk']:#04x}"]

def _addr(f) -> List[str]:
    return [f"{f['nnn']:#05x}"]

# @intent:map 逆アセンブル表示用の (ニーモニック, オペランド生成関数)。
FORMAT_MAP = {
    Opcode.CLS: ("CLS", lambda f: []),
    Opcode.RET: ("RET", lambda f: []),
    Opcode.JP: ("JP", _addr),
    Opcode.CALL: ("CALL", _addr),
    Opcode.SE_IMM: ("SE", _vx_kk),
    Opcode.SNE_IMM: ("SNE", _vx_kk),
    Opcode.SE_REG: ("SE", _vx_vy),
    Opcode.LD_IMM: ("LD", _vx_kk),
    Opcode.ADD_IMM: ("ADD", _vx_kk),
    Opcode.LD_REG: ("LD", _vx_vy),
    Opcode.OR: ("OR", _vx_vy),
    Opcode.AND: ("AND", _vx_vy),
    Opcode.XOR: ("XOR", _vx_vy),
    Opcode.ADD_REG: ("ADD", _vx_vy),
    Opcode.SUB: ("SUB", _vx_vy),
    Opcode.SHR: ("SHR", _vx),
    Opcode.SUBN: ("SUBN", _vx_vy),
    Opcode.SHL: ("SHL", _vx),
    Opcode.SNE_REG: ("SNE", _vx_vy),
    Opcode.LD_I: ("LD", lambda f: ["I"] + _addr(f)),
    Opcode.JP_V0: ("JP", lambda f: ["V0"] + _addr(f)),
    Opcode.RND: ("RND", _vx_kk),
    Opcode.DRW: ("DRW", lambda f: _vx_vy(f) + [f"{f['n']:#03x}"]),
    Opcode.SKP: ("SKP", _vx),
    Opcode.SKNP: ("SKNP", _vx),
    Opcode.LD_V_DT: ("LD", lambda f: _vx(f) + ["DT"]),
    Opcode.LD_V_K: ("LD", lambda f: _vx(f) + ["K"]),
    Opcode.LD_DT_V: ("LD", lambda f: ["DT"] + _vx(f)),
    Opcode.LD_ST_V: ("LD", lambda f: ["ST"] + _vx(f)),
    Opcode.ADD_I: ("ADD", lambda f: ["I"] + _vx(f)),
    Opcode.LD_F: ("LD", lambda f: ["F"] + _vx(f)),
    Opcode.LD_B: ("LD", lambda f: ["B"] + _vx(f)),
    Opcode.LD_MEM_V: ("LD", lambda f: ["[I]"] + _vx(f)),
    Opcode.LD_V_MEM: ("LD", lambda f: _vx(f) + ["[I]"]),
}
