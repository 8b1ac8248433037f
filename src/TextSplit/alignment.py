from __future__ import annotations

from .model import HDir, TextAlignment, VDir


def parse_alignment(descriptor: str | None) -> TextAlignment:
    """Read block alignment from a host label such as ``左寄せ[上]``.

    English words (``left``, ``right``, ``top``, ``bottom``, ``vertical``) are
    accepted too. Anything unrecognized centers the block on both axes.
    """
    label = (descriptor or "").lower()

    if "左" in label or "left" in label:
        hdir = HDir.LEFT
    elif "右" in label or "right" in label:
        hdir = HDir.RIGHT
    else:
        hdir = HDir.MID

    if "上" in label or "top" in label:
        vdir = VDir.TOP
    elif "下" in label or "bottom" in label:
        vdir = VDir.BOTTOM
    else:
        vdir = VDir.CENTER

    is_vert = "縦書" in label or "vertical" in label
    return TextAlignment(hdir=hdir, vdir=vdir, is_vert=is_vert)
