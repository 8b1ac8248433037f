from __future__ import annotations

from typing import Iterable, Iterator, List, Sequence, Tuple

from .model import BlockParams, HDir, Placement, TextRun, VDir

NEWLINE_ESCAPE = "\\n"

# Yielded in place of a character for a line break.
LINE_BREAK = None

_H_FACTORS = {HDir.LEFT: 0.0, HDir.MID: 0.5, HDir.RIGHT: 1.0}
_V_FACTORS = {VDir.TOP: 0.0, VDir.CENTER: 0.5, VDir.BOTTOM: 1.0}


def layout(runs: Sequence[TextRun], params: BlockParams) -> List[Placement]:
    """Place every character of ``runs``.

    Character width equals its font size. The block is measured first so the
    anchor can be shifted by the alignment, then each character gets the
    pen position left to right, line by line.
    """
    width, height = measure(runs, params)
    offset_x, offset_y = anchor_offsets(width, height, params.hdir, params.vdir)
    line_start = params.anchor_x - offset_x
    pen_x = line_start
    pen_y = params.anchor_y - offset_y

    placements: List[Placement] = []
    for run, char in _units(runs):
        if char is LINE_BREAK:
            pen_x = line_start
            pen_y += params.base_size + params.line_spacing
            continue
        style = params.defaults.resolve(run)
        placements.append(Placement(char=char, style=style, x=pen_x, y=pen_y, index=len(placements)))
        pen_x += style.size + params.kerning
    return placements


def measure(runs: Iterable[TextRun], params: BlockParams) -> Tuple[float, float]:
    """Return the block's (width, height)."""
    width = 0.0
    height = 0.0
    line_width = 0.0
    line_height = 0.0
    for run, char in _units(runs):
        if char is LINE_BREAK:
            width = max(width, line_width)
            height += (line_height or params.base_size) + params.line_spacing
            line_width = 0.0
            line_height = 0.0
            continue
        size = _run_size(run, params)
        line_width += size + params.kerning
        line_height = max(line_height, size)
    width = max(width, line_width)
    height += line_height or params.base_size
    return width, height


def anchor_offsets(width: float, height: float, hdir: HDir, vdir: VDir) -> Tuple[float, float]:
    return width * _H_FACTORS[hdir], height * _V_FACTORS[vdir]


def _run_size(run: TextRun, params: BlockParams) -> float:
    return params.base_size if run.size is None else run.size


def _units(runs: Iterable[TextRun]) -> Iterator[Tuple[TextRun, str | None]]:
    # Scanned as one stream so an escape split by a tag (a\<#f00>n) still breaks.
    chars = [(run, char) for run in runs for char in run.text]
    i = 0
    while i < len(chars):
        run, char = chars[i]
        if char == NEWLINE_ESCAPE[0] and i + 1 < len(chars) and chars[i + 1][1] == NEWLINE_ESCAPE[1]:
            yield run, LINE_BREAK
            i += len(NEWLINE_ESCAPE)
        elif char == "\n":
            yield run, LINE_BREAK
            i += 1
        else:
            yield run, char
            i += 1
