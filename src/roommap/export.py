"""Coordinate files and image coordinates.

A coordinate file records everything a user adjusted for a map so it can be
re-applied to a later render::

    {"mapName": ..., "mapId": ..., "version": ..., "created": ...,
     "groups": [{"index", "name", "offset": {x, y}, "labelOffset": {x, y},
                 "rooms": [{"id", "position": {x, y}}]}],
     "crossGroupConnections": [...], "customLabels": [...], "config": {...}}

Image coordinates list each room's pixel box in the rendered document, for
tools that make a raster copy of the map clickable.
"""

from __future__ import annotations

import json
import math
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from roommap.config import CrossGroupConnection, CustomLabel, GroupSettings, RenderConfig, xy_from_dict, xy_to_dict
from roommap.layout.types import BoundingBox, GridPosition, Group
from roommap.renderers.svg import Frame, room_half_extent


def export_coordinates(
    groups: list[Group],
    config: RenderConfig | None = None,
    map_name: str = "",
    map_id: str = "",
    version: str | None = None,
    created: str | None = None,
) -> dict[str, Any]:
    """Build a coordinate file document from laid-out groups and their settings."""
    config = config or RenderConfig()
    return {
        "mapName": map_name,
        "mapId": map_id,
        "version": version,
        "created": created or datetime.now(timezone.utc).isoformat(),
        "groups": [
            {
                "index": group.index,
                "name": group.name,
                "offset": xy_to_dict(group.settings.offset),
                "labelOffset": xy_to_dict(group.settings.label_offset),
                "rooms": [{"id": rid, "position": group.positions[rid].to_dict()} for rid in group.rooms],
            }
            for group in groups
        ],
        "crossGroupConnections": [c.to_dict() for c in config.cross_group_connections],
        "customLabels": [c.to_dict() for c in config.custom_labels],
        "config": config.to_dict(),
    }


def import_coordinates(
    data: Any, base: RenderConfig | None = None
) -> tuple[dict[int, GroupSettings], RenderConfig]:
    """Read a coordinate file document back into group settings and a config.

    Raises:
        ValueError: If the document has no ``groups`` list.
    """
    if not isinstance(data, dict) or not isinstance(data.get("groups"), list):
        raise ValueError("Invalid coordinate file format: expected an object with a 'groups' list")

    settings: dict[int, GroupSettings] = {}
    for entry in data["groups"]:
        index = int(entry["index"])
        settings[index] = GroupSettings(
            name=entry.get("name") or f"Group {index + 1}",
            offset=xy_from_dict(entry.get("offset")),
            label_offset=xy_from_dict(entry.get("labelOffset")),
        )

    config = base or RenderConfig()
    if isinstance(data.get("config"), dict):
        config = RenderConfig.from_dict(data["config"], config)
    if "crossGroupConnections" in data:
        config = replace(
            config,
            cross_group_connections=tuple(CrossGroupConnection.from_dict(c) for c in data["crossGroupConnections"]),
        )
    if "customLabels" in data:
        config = replace(config, custom_labels=tuple(CustomLabel.from_dict(c) for c in data["customLabels"]))
    return settings, config


def image_coordinates(
    positions: dict[int, GridPosition], config: RenderConfig, image: str = "map.png"
) -> list[dict[str, Any]]:
    """Pixel box ``[left, top, right, bottom]`` of every room in the document."""
    if not positions:
        return []
    frame = Frame(BoundingBox.around(positions.values()), config.edge_length)
    hw, hh = room_half_extent(config.room_shape, config.room_size)
    result: list[dict[str, Any]] = []
    for room_id, pos in positions.items():
        x, y = frame.point(pos.x, pos.y)
        box = [_round_half_up(v) for v in (x - hw, y - hh, x + hw, y + hh)]
        result.append({"id": room_id, "image": image, "image_coords": box})
    return result


def read_json(path: str) -> Any:
    with open(path) as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"invalid JSON in '{path}': {e}") from e


def write_json(path: str, data: Any) -> None:
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
        f.write("\n")


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
