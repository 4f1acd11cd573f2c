"""Tests for roommap.config: validation, tag colours, themes, and map config documents."""

from __future__ import annotations

from dataclasses import replace

import pytest

from roommap.config import (
    THEMES,
    Colors,
    CrossGroupConnection,
    CustomLabel,
    FontConfig,
    GroupSettings,
    RenderConfig,
    group_settings_from_dict,
    group_settings_to_dict,
)
from roommap.types import BackgroundMode, RoomShape


class TestValidate:
    def test_defaults_are_valid(self):
        RenderConfig().validate()

    @pytest.mark.parametrize("field", ["edge_length", "room_size", "stroke_width", "connection_width"])
    def test_non_positive_rejected(self, field):
        with pytest.raises(ValueError, match=field):
            replace(RenderConfig(), **{field: 0}).validate()

    def test_font_size_rejected(self):
        with pytest.raises(ValueError):
            RenderConfig(label_font=FontConfig(size=-1)).validate()

    def test_tile_size_rejected(self):
        with pytest.raises(ValueError):
            RenderConfig(background_mode=BackgroundMode.Tile, background_tile=(0, 10)).validate()


class TestColorForTags:
    def test_default_without_tags(self):
        assert RenderConfig().color_for_tags(()) == "#ffffff"

    def test_room_tag_order_wins(self):
        config = RenderConfig(tag_colors=(("a", "#aaaaaa"), ("b", "#bbbbbb")))
        assert config.color_for_tags(("b", "a")) == "#bbbbbb"
        assert config.color_for_tags(("x", "a")) == "#aaaaaa"

    def test_unknown_tags_fall_back(self):
        config = RenderConfig(tag_colors=(("a", "#aaaaaa"),))
        assert config.color_for_tags(("x", "y")) == config.colors.default


class TestThemes:
    def test_every_theme_applies(self):
        for name, (colors, tag_colors) in THEMES.items():
            config = RenderConfig().with_theme(name)
            assert config.colors.background == colors.background
            assert config.tag_colors == tag_colors

    def test_border_color_kept(self):
        config = RenderConfig(colors=Colors(border="#123123")).with_theme("dungeon")
        assert config.colors.border == "#123123"

    def test_other_settings_kept(self):
        config = RenderConfig(room_size=9).with_theme("forest")
        assert config.room_size == 9

    def test_unknown_theme(self):
        with pytest.raises(ValueError, match="Unknown theme"):
            RenderConfig().with_theme("neon")


class TestMapConfigDocument:
    def test_round_trip(self):
        config = RenderConfig(
            edge_length=60,
            room_shape=RoomShape.Circle,
            tag_colors=(("shop", "#00ff00"),),
            show_room_names=True,
            background_image="paper.png",
            background_mode=BackgroundMode.Tile,
            background_tile=(128, 64),
            cross_group_connections=(CrossGroupConnection(from_id=1, to_id=2, color="#ff0000"),),
            custom_labels=(CustomLabel(text="Harbor", x=10, y=20, bold=True),),
        )
        assert RenderConfig.from_dict(config.to_dict()) == config

    def test_partial_document_keeps_base(self):
        base = RenderConfig(room_size=20)
        config = RenderConfig.from_dict({"appearance": {"edgeLength": 40}, "colors": {"default": "#eeeeee"}}, base)
        assert config.edge_length == 40
        assert config.room_size == 20
        assert config.colors.default == "#eeeeee"
        assert config.colors.connections == base.colors.connections

    def test_reads_camel_case_sections(self):
        data = {
            "appearance": {"roomShape": "rectangle"},
            "displayOptions": {"showRoomIds": False, "showGroupLabels": False},
            "fonts": {"labels": {"size": 11, "bold": True}},
            "colors": {"tagColors": [["exit", "#ff0000"]]},
        }
        config = RenderConfig.from_dict(data)
        assert config.room_shape == RoomShape.Rectangle
        assert config.show_room_ids is False
        assert config.show_group_labels is False
        assert config.label_font.size == 11
        assert config.label_font.weight == "bold"
        assert config.tag_colors == (("exit", "#ff0000"),)

    def test_cross_group_defaults(self):
        conn = CrossGroupConnection.from_dict({"fromId": "5", "toId": 6})
        assert (conn.from_id, conn.to_id) == (5, 6)
        assert conn.style == "dashed"
        assert conn.dash_spacing == "5,5"

    def test_custom_label_defaults(self):
        label = CustomLabel.from_dict({"text": "Gate"})
        assert (label.x, label.y, label.font_size) == (50, 50, 12)
        assert label.background is True


class TestGroupPositioning:
    def test_read(self):
        data = {
            "offsets": [[0, {"x": 2, "y": -1}]],
            "names": [[1, "Docks"]],
            "labelOffsets": [[1, {"x": 0, "y": 1}]],
        }
        settings = group_settings_from_dict(data)
        assert settings[0] == GroupSettings(offset=(2, -1))
        assert settings[1] == GroupSettings(name="Docks", label_offset=(0, 1))

    def test_round_trip(self):
        settings = {0: GroupSettings(offset=(1, 1)), 3: GroupSettings(name="Keep", label_offset=(-1, 0))}
        assert group_settings_from_dict(group_settings_to_dict(settings)) == settings

    def test_empty(self):
        assert group_settings_from_dict({}) == {}
