from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Union


class _Keep:
    """Marker for a style field a tag does not mention."""

    def __repr__(self) -> str:
        return "KEEP"


KEEP = _Keep()


class HDir(Enum):
    LEFT = "left"
    MID = "mid"
    RIGHT = "right"


class VDir(Enum):
    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"


@dataclass(frozen=True)
class TextAlignment:
    hdir: HDir = HDir.MID
    vdir: VDir = VDir.CENTER
    is_vert: bool = False


@dataclass(frozen=True)
class Style:
    """Accumulated style while scanning markup. ``None`` means document default."""

    size: float | None = None
    font: str | None = None
    color: str | None = None
    bold: bool | None = None
    italic: bool | None = None


@dataclass(frozen=True)
class StyleOverride:
    """Sparse patch produced by one tag.

    ``KEEP`` leaves the accumulated value alone, ``None`` resets it to the
    document default, anything else replaces it.
    """

    size: Union[float, None, _Keep] = KEEP
    font: Union[str, None, _Keep] = KEEP
    color: Union[str, None, _Keep] = KEEP
    bold: Union[bool, None, _Keep] = KEEP
    italic: Union[bool, None, _Keep] = KEEP

    def apply(self, style: Style) -> Style:
        changes = {f.name: getattr(self, f.name) for f in fields(self)}
        return replace(style, **{k: v for k, v in changes.items() if v is not KEEP})


@dataclass(frozen=True)
class TextRun:
    text: str
    size: float | None = None
    font: str | None = None
    color: str | None = None
    bold: bool | None = None
    italic: bool | None = None

    @classmethod
    def from_style(cls, text: str, style: Style) -> "TextRun":
        return cls(
            text=text,
            size=style.size,
            font=style.font,
            color=style.color,
            bold=style.bold,
            italic=style.italic,
        )

    def as_dict(self) -> dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        return {k: v for k, v in data.items() if v is not None}


@dataclass(frozen=True)
class ResolvedStyle:
    size: float
    font: str
    color: str
    bold: bool = False
    italic: bool = False

    def resolve(self, run: TextRun) -> "ResolvedStyle":
        """Fill the fields a run leaves unset from this style."""
        return ResolvedStyle(
            size=self.size if run.size is None else run.size,
            font=self.font if run.font is None else run.font,
            color=self.color if run.color is None else run.color,
            bold=self.bold if run.bold is None else run.bold,
            italic=self.italic if run.italic is None else run.italic,
        )


@dataclass(frozen=True)
class BlockParams:
    defaults: ResolvedStyle
    kerning: float = 0.0
    line_spacing: float = 0.0
    anchor_x: float = 0.0
    anchor_y: float = 0.0
    hdir: HDir = HDir.MID
    vdir: VDir = VDir.CENTER

    @property
    def base_size(self) -> float:
        return self.defaults.size


@dataclass(frozen=True)
class Placement:
    char: str
    style: ResolvedStyle
    x: float
    y: float
    index: int


@dataclass
class TextItem:
    """One text object read from the host document."""

    text: str
    size: float
    font: str
    color: str
    outline_color: str = "000000"
    decoration: str = "標準文字"
    bold: bool = False
    italic: bool = False
    kerning: float = 0.0
    line_spacing: float = 0.0
    alignment: str = "中央揃え[中]"
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    opacity: float = 0.0
    blend: str = "通常"
    layer: int = 1
    frame_start: int = 0
    frame_end: int = 0

    @property
    def default_style(self) -> ResolvedStyle:
        return ResolvedStyle(
            size=self.size,
            font=self.font,
            color=self.color,
            bold=self.bold,
            italic=self.italic,
        )


@dataclass
class TimelineObject:
    object_id: int
    layer: int
    frame_start: int
    frame_end: int
    alias: str
