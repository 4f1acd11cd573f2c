"""Layout engine convenience functions."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from roommap.config import GroupSettings
from roommap.ir.graph import RoomGraph
from roommap.ir.room import Room
from roommap.layout.grid import GridLayout
from roommap.layout.offsets import apply_manual_offsets, compute_base_layout, with_settings
from roommap.layout.types import GridPosition, Group


def layout_rooms(rooms: Iterable[Room]) -> tuple[RoomGraph, list[Group]]:
    """Build the room graph and run the grid layout, base offsets included."""
    graph = RoomGraph.from_rooms(rooms)
    groups = compute_base_layout(GridLayout().layout(graph))
    return graph, groups


def full_layout(
    rooms: Iterable[Room], manual: Mapping[int, GroupSettings] | None = None
) -> tuple[RoomGraph, list[Group], dict[int, GridPosition]]:
    """Run layout and offset composition; groups come back with settings attached."""
    graph, groups = layout_rooms(rooms)
    groups = with_settings(groups, manual)
    return graph, groups, apply_manual_offsets(groups)
