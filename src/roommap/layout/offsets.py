"""Group offset composition.

Two explicit phases replace any implicit caching:

  1. ``compute_base_layout(groups)`` returns new groups whose ``base_offset``
     lines them up left to right, tops aligned, ``GROUP_GAP`` units apart.
     A group that already carries a base offset keeps it.
  2. ``apply_manual_offsets(groups, manual)`` adds each group's user offset and
     returns the final position of every room.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import replace

from roommap.config import GroupSettings
from roommap.layout.types import GridPosition, Group, LabelAnchor

GROUP_GAP: int = 3
LABEL_RISE: float = 0.6


def compute_base_layout(groups: list[Group]) -> list[Group]:
    """Return copies of ``groups`` with base offsets filled in, in index order."""
    result: list[Group] = []
    prev_max_x: int | None = None
    for group in sorted(groups, key=lambda g: g.index):
        bounds = group.bounds
        base = group.base_offset
        if base is None:
            if prev_max_x is None:
                base = GridPosition(-bounds.min_x, -bounds.min_y)
            else:
                base = GridPosition(prev_max_x + GROUP_GAP - bounds.min_x, -bounds.min_y)
        prev_max_x = bounds.max_x + base.x
        result.append(group if group.base_offset == base else replace(group, base_offset=base))
    return result


def settings_for(group: Group, manual: Mapping[int, GroupSettings] | None) -> GroupSettings:
    if manual and group.index in manual:
        return manual[group.index]
    return group.settings


def with_settings(groups: list[Group], manual: Mapping[int, GroupSettings] | None) -> list[Group]:
    """Attach the caller's per-group settings to the groups they belong to."""
    return [replace(g, settings=settings_for(g, manual)) for g in groups]


def group_translation(group: Group, manual: Mapping[int, GroupSettings] | None = None) -> GridPosition:
    if group.base_offset is None:
        raise ValueError(f"group {group.index} has no base offset; run compute_base_layout first")
    dx, dy = settings_for(group, manual).offset
    return group.base_offset.shifted(dx, dy)


def apply_manual_offsets(
    groups: list[Group], manual: Mapping[int, GroupSettings] | None = None
) -> dict[int, GridPosition]:
    """Final grid position of every room: raw + base offset + manual offset."""
    final: dict[int, GridPosition] = {}
    for group in groups:
        shift = group_translation(group, manual)
        for room_id, pos in group.positions.items():
            final[room_id] = pos + shift
    return final


def group_label_anchors(
    groups: list[Group],
    positions: Mapping[int, GridPosition],
    manual: Mapping[int, GroupSettings] | None = None,
) -> list[LabelAnchor]:
    """Default label spot for each group, then nudged by its label offset.

    The label sits above the group's horizontal centre. If a room occupies the
    cell directly above that centre it moves to the group's left-middle instead.
    """
    occupied = set(positions.values())
    anchors: list[LabelAnchor] = []
    for group in groups:
        settings = settings_for(group, manual)
        bounds = group.bounds.translated(group_translation(group, manual))
        above = GridPosition(math.floor(bounds.center_x + 0.5), bounds.min_y - 1)
        if above in occupied:
            x, y, anchor = bounds.min_x - LABEL_RISE, bounds.center_y, "end"
        else:
            x, y, anchor = bounds.center_x, bounds.min_y - LABEL_RISE, "middle"
        lx, ly = settings.label_offset
        name = settings.name or group.name
        anchors.append(LabelAnchor(index=group.index, text=name, x=x + lx, y=y + ly, anchor=anchor))
    return anchors
