from __future__ import annotations

import re
from typing import Iterator, List, Tuple, Union

from .model import Style, StyleOverride, TextRun

STYLE_TRIGGER = "<s"
COLOR_OPEN_TRIGGER = "<#"
COLOR_CLOSE_TAG = "<#>"
STYLE_RESET_TAG = "<s>"

_COLOR_RE = re.compile(r"<#([0-9A-Fa-f]+)>")
_NUMBER_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

# A scan step yields either a style patch or a literal text span.
Action = Union[StyleOverride, str]


class ParseError(ValueError):
    """Raised when markup cannot be consumed to the end."""

    def __init__(self, text: str, remainder: str):
        super().__init__(f"Unparsed input remaining: {remainder}")
        self.text = text
        self.remainder = remainder


def parse_markup(text: str) -> List[TextRun]:
    """Split tagged text into runs carrying the style active at each span.

    Tags:
      ``<sSIZE,FONT,FLAGS>`` update size/font/bold+italic (empty token resets one field),
      ``<s>`` resets size, font, bold and italic,
      ``<#HEX>`` sets the color, ``<#>`` resets it.
    Anything else is literal text.
    """
    runs: List[TextRun] = []
    style = Style()
    end = 0
    for action, end in _scan(text):
        if isinstance(action, StyleOverride):
            style = action.apply(style)
        elif action:
            runs.append(TextRun.from_style(action, style))
    if end < len(text):
        raise ParseError(text, text[end:])
    return runs


def _scan(text: str) -> Iterator[Tuple[Action, int]]:
    pos = 0
    while pos < len(text):
        for matcher in _MATCHERS:
            matched = matcher(text, pos)
            if matched is not None:
                break
        else:
            return
        action, new_pos = matched
        if new_pos == pos:
            return
        pos = new_pos
        yield action, pos


def _match_style(text: str, pos: int) -> Tuple[StyleOverride, int] | None:
    if not text.startswith("<", pos):
        return None
    close = text.find(">", pos + 1)
    if close == -1:
        return None
    content = text[pos + 1 : close]
    if not content.startswith("s") or content == "s":
        return None

    parts = content.split(",")
    changes = {"size": _parse_size(parts[0][1:])}
    if len(parts) > 1:
        changes["font"] = parts[1] or None
    if len(parts) > 2:
        flags = parts[2]
        if flags:
            changes["bold"] = "B" in flags
            changes["italic"] = "I" in flags
        else:
            changes["bold"] = None
            changes["italic"] = None
    return StyleOverride(**changes), close + 1


def _match_style_reset(text: str, pos: int) -> Tuple[StyleOverride, int] | None:
    if not text.startswith(STYLE_RESET_TAG, pos):
        return None
    reset = StyleOverride(size=None, font=None, bold=None, italic=None)
    return reset, pos + len(STYLE_RESET_TAG)


def _match_color(text: str, pos: int) -> Tuple[StyleOverride, int] | None:
    match = _COLOR_RE.match(text, pos)
    if not match:
        return None
    return StyleOverride(color=match.group(1)), match.end()


def _match_color_reset(text: str, pos: int) -> Tuple[StyleOverride, int] | None:
    if not text.startswith(COLOR_CLOSE_TAG, pos):
        return None
    return StyleOverride(color=None), pos + len(COLOR_CLOSE_TAG)


def _match_text(text: str, pos: int) -> Tuple[str, int]:
    stop = _next_trigger(text, pos)
    return text[pos:stop], stop


def _next_trigger(text: str, pos: int) -> int:
    """Offset of the nearest place a tag could start; ties keep the first trigger."""
    candidates = []
    for trigger in (STYLE_TRIGGER, COLOR_OPEN_TRIGGER, COLOR_CLOSE_TAG):
        found = text.find(trigger, pos)
        candidates.append(found if found != -1 else len(text))
    return min(candidates)


def _parse_size(token: str) -> float | None:
    if not _NUMBER_RE.fullmatch(token):
        return None
    return float(token)


_MATCHERS = (_match_style, _match_style_reset, _match_color, _match_color_reset, _match_text)
