"""Text helpers for renderers: room names, wrapping, extents, label angles."""

from __future__ import annotations

import math
import re
import textwrap
from collections.abc import Iterable

NAME_WRAP_WIDTH: int = 12
CHAR_WIDTH_EM: float = 0.6
LINE_HEIGHT_EM: float = 1.2

_BRACKETED_RE = re.compile(r"\[([^\]]*)\]")


def room_name(title: Iterable[str]) -> str | None:
    """Name shown for a room: the bracketed part of its title.

    ``[Wehnimer's Landing, Town Square]`` gives ``Town Square``.
    """
    for line in title:
        match = _BRACKETED_RE.search(line)
        if not match:
            continue
        segment = match.group(1)
        if "," in segment:
            segment = segment.rsplit(",", 1)[1]
        segment = segment.strip()
        if segment:
            return segment
    return None


def wrap_text(text: str, width: int = NAME_WRAP_WIDTH) -> list[str]:
    return textwrap.wrap(text, width=width, break_long_words=False) or [text]


def text_extent(text: str, font_size: float) -> tuple[float, float]:
    """Rough (width, height) of one line of text; no font metrics available."""
    return len(text) * font_size * CHAR_WIDTH_EM, font_size * LINE_HEIGHT_EM


def upright_angle(dx: float, dy: float) -> float:
    """Angle of the segment (dx, dy) in degrees, folded into (-90, 90]."""
    angle = math.degrees(math.atan2(dy, dx))
    if angle > 90:
        angle -= 180
    elif angle <= -90:
        angle += 180
    return angle
