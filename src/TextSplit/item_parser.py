from __future__ import annotations

from pathlib import Path
from typing import List

import yaml

from .model import TextItem

REQUIRED_STYLE_KEYS = ("size", "font", "color")


class ItemError(ValueError):
    """Raised for an items document the splitter cannot use."""


def parse_items_document(text: str) -> List[TextItem]:
    """Parse a YAML list of text objects into ``TextItem``s.

    The root is either a mapping with an ``items`` list or the list itself.
    Scalars are loaded as written (no YAML 1.1 int/bool resolution) so
    colors such as 007700 keep their digits; numbers are converted here.
    """
    data = yaml.load(text, Loader=yaml.BaseLoader) or {}
    if isinstance(data, dict):
        entries = data.get("items")
    else:
        entries = data
    if not isinstance(entries, list):
        raise ItemError("YAML root must be a list of items or a mapping with an 'items' list.")
    return [_build_item(entry, idx) for idx, entry in enumerate(entries)]


def parse_items_file(path: str | Path) -> List[TextItem]:
    return parse_items_document(Path(path).read_text(encoding="utf-8"))


def _build_item(entry, idx: int) -> TextItem:
    if not isinstance(entry, dict):
        raise ItemError(f"Item {idx} must be a mapping.")
    if "text" not in entry:
        raise ItemError(f"Item {idx} is not a text object (no 'text').")
    style = entry.get("style") or {}
    position = entry.get("position") or {}
    if not isinstance(style, dict) or not isinstance(position, dict):
        raise ItemError(f"Item {idx}: 'style' and 'position' must be mappings.")
    missing = [key for key in REQUIRED_STYLE_KEYS if key not in style]
    if missing:
        raise ItemError(f"Item {idx} is missing style attributes: {', '.join(missing)}")

    frame_start, frame_end = _frame_range(entry.get("frame"), idx)
    defaults = TextItem(text="", size=0.0, font="", color="")
    return TextItem(
        text=str(entry["text"]),
        size=_number(style["size"], "size", idx),
        font=str(style["font"]),
        color=_color(style["color"]),
        outline_color=_color(style.get("outline_color", defaults.outline_color)),
        decoration=str(style.get("decoration", defaults.decoration)),
        bold=_flag(style.get("bold", defaults.bold), "bold", idx),
        italic=_flag(style.get("italic", defaults.italic), "italic", idx),
        kerning=_number(style.get("kerning", defaults.kerning), "kerning", idx),
        line_spacing=_number(style.get("line_spacing", defaults.line_spacing), "line_spacing", idx),
        alignment=str(style.get("alignment", defaults.alignment)),
        x=_number(position.get("x", defaults.x), "x", idx),
        y=_number(position.get("y", defaults.y), "y", idx),
        z=_number(position.get("z", defaults.z), "z", idx),
        opacity=_number(position.get("opacity", defaults.opacity), "opacity", idx),
        blend=str(position.get("blend", defaults.blend)),
        layer=int(_number(entry.get("layer", defaults.layer), "layer", idx)),
        frame_start=frame_start,
        frame_end=frame_end,
    )


def _frame_range(value, idx: int) -> tuple[int, int]:
    if value is None:
        return 0, 0
    if isinstance(value, (list, tuple)) and len(value) == 2:
        start, end = (int(_number(v, "frame", idx)) for v in value)
        if end < start:
            raise ItemError(f"Item {idx}: frame end {end} is before start {start}.")
        return start, end
    raise ItemError(f"Item {idx}: 'frame' must be a [start, end] pair.")


def _number(value, name: str, idx: int) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ItemError(f"Item {idx}: '{name}' is not a number: {value!r}") from exc


def _flag(value, name: str, idx: int) -> bool:
    if isinstance(value, bool):
        return value
    label = str(value).lower()
    if label in {"0", "1", "true", "false"}:
        return label in {"1", "true"}
    raise ItemError(f"Item {idx}: '{name}' must be 0/1 or a boolean, got {value!r}")


def _color(value) -> str:
    return str(value).lstrip("#")
