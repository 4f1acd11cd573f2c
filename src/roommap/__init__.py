"""roommap: lay out MapDB rooms on a grid and draw them as an SVG map."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from roommap.config import GroupSettings, RenderConfig
from roommap.ir.room import Room
from roommap.layout.engine import full_layout
from roommap.layout.types import GridPosition, Group
from roommap.renderers.svg import SvgRenderer


@dataclass
class MapResult:
    """Rendered document plus the groups a caller needs for offset editing."""

    svg: str
    groups: list[Group]
    positions: dict[int, GridPosition]


def generate_map(
    rooms: Iterable[Room],
    config: RenderConfig | None = None,
    group_settings: Mapping[int, GroupSettings] | None = None,
) -> MapResult:
    """Lay out rooms and render them to SVG.

    Args:
        rooms: Selected rooms, in the order used to break layout ties.
        config: Rendering configuration; defaults to ``RenderConfig()``.
        group_settings: Manual name/offset/label offset per group index.

    Returns:
        A MapResult with the SVG text, the groups and final grid positions.

    Raises:
        ValueError: If there are no rooms or a numeric setting is not positive.
    """
    rooms = list(rooms)
    if not rooms:
        raise ValueError("no rooms selected: nothing to map")
    config = config or RenderConfig()
    config.validate()
    graph, groups, positions = full_layout(rooms, group_settings)
    svg = SvgRenderer().render(graph, groups, positions, config)
    return MapResult(svg=svg, groups=groups, positions=positions)


def render_map(
    rooms: Iterable[Room],
    config: RenderConfig | None = None,
    group_settings: Mapping[int, GroupSettings] | None = None,
) -> str:
    """Lay out rooms and return only the SVG document."""
    return generate_map(rooms, config, group_settings).svg


__all__ = ["GroupSettings", "MapResult", "RenderConfig", "Room", "generate_map", "render_map"]
