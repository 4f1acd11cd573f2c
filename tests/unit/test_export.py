"""Tests for roommap.export: coordinate files and image coordinates."""

from __future__ import annotations

import json

import pytest

from roommap.config import CrossGroupConnection, CustomLabel, GroupSettings, RenderConfig
from roommap.export import export_coordinates, image_coordinates, import_coordinates, read_json, write_json
from roommap.ir.room import Room
from roommap.layout.engine import full_layout
from roommap.layout.types import GridPosition
from roommap.types import RoomShape


def _groups(settings=None):
    rooms = [Room(id=1, wayto={"2": "east"}), Room(id=2), Room(id=3)]
    _, groups, _ = full_layout(rooms, settings)
    return groups


class TestExportCoordinates:
    def test_document_shape(self):
        doc = export_coordinates(_groups(), map_name="harbor", map_id="id_1-3", created="2024-01-01T00:00:00")
        assert doc["mapName"] == "harbor"
        assert doc["mapId"] == "id_1-3"
        assert doc["created"] == "2024-01-01T00:00:00"
        assert [g["name"] for g in doc["groups"]] == ["Group 1", "Group 2"]
        assert doc["groups"][0]["rooms"] == [
            {"id": 1, "position": {"x": 0, "y": 0}},
            {"id": 2, "position": {"x": 1, "y": 0}},
        ]
        assert doc["groups"][0]["offset"] == {"x": 0, "y": 0}
        assert "config" in doc

    def test_created_filled_in(self):
        assert export_coordinates(_groups())["created"]

    def test_round_trip(self):
        settings = {1: GroupSettings(name="Tower", offset=(2, -1), label_offset=(0, 1))}
        config = RenderConfig(
            edge_length=50,
            cross_group_connections=(CrossGroupConnection(from_id=2, to_id=3),),
            custom_labels=(CustomLabel(text="North Gate"),),
        )
        doc = export_coordinates(_groups(settings), config)
        imported, imported_config = import_coordinates(json.loads(json.dumps(doc)))
        assert imported[1] == settings[1]
        assert imported[0] == GroupSettings(name="Group 1")
        assert imported_config == config

    def test_import_applies_over_base(self):
        base = RenderConfig(room_size=9)
        _, config = import_coordinates({"groups": []}, base)
        assert config == base

    def test_import_rejects_missing_groups(self):
        with pytest.raises(ValueError, match="Invalid coordinate file"):
            import_coordinates({"mapName": "x"})
        with pytest.raises(ValueError):
            import_coordinates([])


class TestImageCoordinates:
    def test_square(self):
        boxes = image_coordinates({7: GridPosition(0, 0)}, RenderConfig(), image="harbor.png")
        assert boxes == [{"id": 7, "image": "harbor.png", "image_coords": [145, 145, 175, 175]}]

    def test_rectangle_rounds_half_up(self):
        config = RenderConfig(room_shape=RoomShape.Rectangle)
        boxes = image_coordinates({7: GridPosition(0, 0)}, config)
        assert boxes[0]["image_coords"] == [138, 145, 183, 175]

    def test_relative_to_bounds(self):
        boxes = image_coordinates({1: GridPosition(-1, 0), 2: GridPosition(0, 0)}, RenderConfig())
        assert [b["image_coords"][0] for b in boxes] == [145, 225]

    def test_empty(self):
        assert image_coordinates({}, RenderConfig()) == []


class TestJsonFiles:
    def test_write_then_read(self, tmp_path):
        path = str(tmp_path / "out.json")
        write_json(path, {"a": [1, 2]})
        assert read_json(path) == {"a": [1, 2]}

    def test_invalid(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{nope")
        with pytest.raises(ValueError, match="invalid JSON"):
            read_json(str(path))
