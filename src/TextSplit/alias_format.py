from __future__ import annotations

from .model import Placement, TextItem

TEXT_EFFECT = "テキスト"
DRAW_EFFECT = "標準描画"

# Each character is placed by its own X/Y, so the split objects carry no
# spacing or alignment of their own.
SPLIT_ALIGNMENT = "左寄せ[上]"

# Highest layer the host accepts.
MAX_LAYER = 1000


def format_decimal(value: float, digits: int = 2) -> str:
    return f"{value:.{digits}f}"


def format_flag(value: bool) -> str:
    return "1" if value else "0"


def build_alias(placement: Placement, item: TextItem) -> str:
    """Object alias for one split character.

    Style comes from the placement (already resolved against ``item``), the
    remaining attributes are copied from the source item.
    """
    style = placement.style
    lines = [
        "[Object]",
        f"frame={item.frame_start},{item.frame_end}",
        "[Object.0]",
        f"effect.name={TEXT_EFFECT}",
        f"サイズ={format_decimal(style.size)}",
        "字間=0.00",
        "行間=0.00",
        "表示速度=0.00",
        f"フォント={style.font}",
        f"文字色={style.color}",
        f"影・縁色={item.outline_color}",
        f"文字装飾={item.decoration}",
        f"文字揃え={SPLIT_ALIGNMENT}",
        f"B={format_flag(style.bold)}",
        f"I={format_flag(style.italic)}",
        f"テキスト={placement.char}",
        "文字毎に個別オブジェクト=0",
        "自動スクロール=0",
        "移動座標上に表示=0",
        "オブジェクトの長さを自動調節=0",
        "[Object.1]",
        f"effect.name={DRAW_EFFECT}",
        f"X={format_decimal(placement.x)}",
        f"Y={format_decimal(placement.y)}",
        f"Z={format_decimal(item.z)}",
        "Group=1",
        "中心X=0.00",
        "中心Y=0.00",
        "中心Z=0.00",
        "X軸回転=0.00",
        "Y軸回転=0.00",
        "Z軸回転=0.00",
        "拡大率=100.000",
        "縦横比=0.000",
        f"透明度={format_decimal(item.opacity)}",
        f"合成モード={item.blend}",
    ]
    return "\n".join(lines) + "\n"


def parse_alias(alias: str) -> dict[str, dict[str, str]]:
    """Read an alias back into ``{section: {key: value}}``."""
    sections: dict[str, dict[str, str]] = {}
    current: dict[str, str] | None = None
    for line in alias.split("\n"):
        if not line:
            continue
        if line.startswith("[") and line.endswith("]"):
            current = sections.setdefault(line[1:-1], {})
        elif current is not None and "=" in line:
            key, value = line.split("=", 1)
            current[key] = value
    return sections
