"""
共通の型定義を提供するモジュール。
プロジェクト全体で使用される汎用的な型エイリアスや定数を定義します。
"""
from typing import Dict, List, NamedTuple, Sequence

# @intent:data_structure キーパッドの値（0x0-0xF、押下なしはNO_KEY）。
KeyCode = int

# @intent:constant 16個の有効なキーのどれとも異なる「押下なし」を表す番兵値。
NO_KEY: KeyCode = 0x10

# @intent:data_structure フレームバッファの読み取り専用ビュー（1ピクセル1バイト、行優先）。
Framebuffer = Sequence[int]

# @intent:data_structure ホストのキーシンボルからキーパッド値へのマッピング。
KeyMap = Dict[str, KeyCode]

# @intent:data_structure 単一のレジスタの表示定義。UIが動的にフィールドを生成するために使用される。
class RegisterInfo(NamedTuple):
    name: str
    width: int  # ビット幅 (8 or 16)

# @intent:data_structure レジスタグループの表示定義。関連するレジスタ（例: "General", "Timers"）をまとめる。
class RegisterLayoutInfo(NamedTuple):
    group_name: str
    registers: List[RegisterInfo]
