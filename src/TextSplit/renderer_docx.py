from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Sequence, Tuple

from docx import Document as DocxDocument
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Pt, RGBColor

from .layout import NEWLINE_ESCAPE
from .model import HDir, ResolvedStyle, TextItem, TextRun
from .splitter import block_params

_HEX_RE = re.compile(r"[0-9A-Fa-f]+")

_PARAGRAPH_ALIGNMENT = {
    HDir.LEFT: WD_ALIGN_PARAGRAPH.LEFT,
    HDir.MID: WD_ALIGN_PARAGRAPH.CENTER,
    HDir.RIGHT: WD_ALIGN_PARAGRAPH.RIGHT,
}


def render_preview(items_runs: Iterable[Tuple[TextItem, Sequence[TextRun]]], output_path: str | Path) -> None:
    """Write one DOCX paragraph per item, one styled run per text run."""
    output_path = Path(output_path)
    docx = DocxDocument()
    for item, runs in items_runs:
        _render_item(docx, item, runs)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    docx.save(output_path)


def _render_item(docx: DocxDocument, item: TextItem, runs: Sequence[TextRun]) -> None:
    params = block_params(item)
    paragraph = docx.add_paragraph()
    paragraph.alignment = _PARAGRAPH_ALIGNMENT[params.hdir]
    paragraph.paragraph_format.space_after = Pt(max(0.0, params.line_spacing))
    for text_run in runs:
        style = params.defaults.resolve(text_run)
        lines = text_run.text.replace(NEWLINE_ESCAPE, "\n").split("\n")
        for idx, line in enumerate(lines):
            run = paragraph.add_run(line)
            set_run_style(run, style)
            if idx < len(lines) - 1:
                run.add_break()


def set_run_style(run, style: ResolvedStyle) -> None:
    run.font.name = style.font
    run.font.size = Pt(style.size)
    run.bold = style.bold
    run.italic = style.italic
    color = hex_to_rgb(style.color)
    if color is None:
        logging.warning("Color %r is not 3 or 6 hex digits; leaving it unset", style.color)
    else:
        run.font.color.rgb = color


def hex_to_rgb(value: str) -> RGBColor | None:
    if not _HEX_RE.fullmatch(value or ""):
        return None
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    if len(value) != 6:
        return None
    return RGBColor.from_string(value.upper())
