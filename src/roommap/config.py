"""Centralized configuration for roommap.

Every setting the renderer needs lives in a frozen ``RenderConfig`` tree that is
passed explicitly into each operation. Variants (themes, imported settings) are
derived with ``dataclasses.replace`` so a config can be shared between renders.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from roommap.types import BackgroundMode, RoomShape


@dataclass(frozen=True)
class Colors:
    default: str = "#ffffff"
    background: str = "#f8f9fa"
    connections: str = "#666666"
    vertical_connections: str = "#999999"
    border: str = "#000000"


@dataclass(frozen=True)
class FontConfig:
    size: float = 10
    color: str = "#000000"
    family: str = "Arial"
    bold: bool = False

    @property
    def weight(self) -> str:
        return "bold" if self.bold else "normal"

    @classmethod
    def from_dict(cls, data: dict[str, Any], base: FontConfig) -> FontConfig:
        return cls(
            size=data.get("size", base.size),
            color=data.get("color", base.color),
            family=data.get("family", base.family),
            bold=bool(data.get("bold", base.bold)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"size": self.size, "color": self.color, "family": self.family, "bold": self.bold}


@dataclass(frozen=True)
class CrossGroupConnection:
    """A manually specified connection drawn as a dashed overlay."""

    from_id: int
    to_id: int
    style: str = "dashed"
    dash_spacing: str = "5,5"
    color: str = "#666666"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CrossGroupConnection:
        return cls(
            from_id=int(data["fromId"]),
            to_id=int(data["toId"]),
            style=data.get("style", "dashed"),
            dash_spacing=data.get("dashSpacing", "5,5"),
            color=data.get("color", "#666666"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "fromId": self.from_id,
            "toId": self.to_id,
            "style": self.style,
            "dashSpacing": self.dash_spacing,
            "color": self.color,
        }


@dataclass(frozen=True)
class CustomLabel:
    """Free-floating text positioned in document pixels."""

    text: str
    x: float = 50
    y: float = 50
    font_size: float = 12
    font_color: str = "#000000"
    font_family: str = "Arial"
    bold: bool = False
    background: bool = True
    background_color: str = "#f8f9fa"
    border_color: str = "#666666"
    border_width: float = 1

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CustomLabel:
        default = cls(text="")
        return cls(
            text=str(data.get("text", "")),
            x=data.get("x", default.x),
            y=data.get("y", default.y),
            font_size=data.get("fontSize", default.font_size),
            font_color=data.get("fontColor", default.font_color),
            font_family=data.get("fontFamily", default.font_family),
            bold=bool(data.get("bold", default.bold)),
            background=bool(data.get("background", default.background)),
            background_color=data.get("backgroundColor", default.background_color),
            border_color=data.get("borderColor", default.border_color),
            border_width=data.get("borderWidth", default.border_width),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "x": self.x,
            "y": self.y,
            "fontSize": self.font_size,
            "fontColor": self.font_color,
            "fontFamily": self.font_family,
            "bold": self.bold,
            "background": self.background,
            "backgroundColor": self.background_color,
            "borderColor": self.border_color,
            "borderWidth": self.border_width,
        }


@dataclass(frozen=True)
class GroupSettings:
    """User-chosen adjustments for one group, keyed externally by group index."""

    name: str | None = None
    offset: tuple[int, int] = (0, 0)
    label_offset: tuple[int, int] = (0, 0)


@dataclass(frozen=True)
class RenderConfig:
    """Configuration for the rendering pipeline."""

    edge_length: float = 80
    room_shape: RoomShape = RoomShape.Square
    room_size: float = 15
    stroke_width: float = 1
    connection_width: float = 2
    colors: Colors = field(default_factory=Colors)
    # Ordered (tag, colour) pairs; lookup follows the room's own tag order.
    tag_colors: tuple[tuple[str, str], ...] = ()
    label_font: FontConfig = field(default_factory=lambda: FontConfig(size=8, color="#444444"))
    room_font: FontConfig = field(default_factory=FontConfig)
    show_room_ids: bool = True
    show_room_names: bool = False
    show_labels: bool = True
    show_connections: bool = True
    show_group_labels: bool = True
    use_background: bool = True
    background_image: str | None = None
    background_mode: BackgroundMode = BackgroundMode.Stretch
    background_tile: tuple[float, float] = (256, 256)
    cross_group_connections: tuple[CrossGroupConnection, ...] = ()
    custom_labels: tuple[CustomLabel, ...] = ()

    def validate(self) -> None:
        """Raise ValueError if a required numeric value is not positive."""
        checks = {
            "edge_length": self.edge_length,
            "room_size": self.room_size,
            "stroke_width": self.stroke_width,
            "connection_width": self.connection_width,
            "label_font.size": self.label_font.size,
            "room_font.size": self.room_font.size,
        }
        for name, value in checks.items():
            if not isinstance(value, (int, float)) or value <= 0:
                raise ValueError(f"config value '{name}' must be a positive number, got {value!r}")
        if self.background_mode == BackgroundMode.Tile and min(self.background_tile) <= 0:
            raise ValueError(f"background tile size must be positive, got {self.background_tile!r}")

    def color_for_tags(self, tags: tuple[str, ...]) -> str:
        """Fill colour for a room: first of its tags with a configured colour."""
        table = dict(self.tag_colors)
        for tag in tags:
            if tag in table:
                return table[tag]
        return self.colors.default

    def with_theme(self, name: str) -> RenderConfig:
        """Return a copy using one of the THEMES palettes."""
        if name not in THEMES:
            raise ValueError(f"Unknown theme '{name}'; use one of: {', '.join(sorted(THEMES))}")
        colors, tag_colors = THEMES[name]
        return replace(self, colors=replace(colors, border=self.colors.border), tag_colors=tag_colors)

    @classmethod
    def from_dict(cls, data: dict[str, Any], base: RenderConfig | None = None) -> RenderConfig:
        """Read a map configuration document; absent sections keep ``base`` values."""
        cfg = base or cls()
        appearance = data.get("appearance", {})
        colors = data.get("colors", {})
        display = data.get("displayOptions", {})
        fonts = data.get("fonts", {})
        background = data.get("backgroundSettings", {})

        shape = appearance.get("roomShape")
        tile = background.get("tileSize")
        return replace(
            cfg,
            edge_length=appearance.get("edgeLength", cfg.edge_length),
            room_shape=RoomShape(shape) if shape else cfg.room_shape,
            room_size=appearance.get("roomSize", cfg.room_size),
            stroke_width=appearance.get("strokeWidth", cfg.stroke_width),
            connection_width=appearance.get("connectionWidth", cfg.connection_width),
            colors=Colors(
                default=colors.get("default", cfg.colors.default),
                background=colors.get("background", cfg.colors.background),
                connections=colors.get("connections", cfg.colors.connections),
                vertical_connections=colors.get("verticalConnections", cfg.colors.vertical_connections),
                border=colors.get("border", cfg.colors.border),
            ),
            tag_colors=(
                tuple((str(tag), str(color)) for tag, color in colors["tagColors"])
                if "tagColors" in colors
                else cfg.tag_colors
            ),
            label_font=FontConfig.from_dict(fonts.get("labels", {}), cfg.label_font),
            room_font=FontConfig.from_dict(fonts.get("rooms", {}), cfg.room_font),
            show_room_ids=display.get("showRoomIds", cfg.show_room_ids),
            show_room_names=display.get("showRoomNames", cfg.show_room_names),
            show_labels=display.get("showLabels", cfg.show_labels),
            show_connections=display.get("showConnections", cfg.show_connections),
            show_group_labels=display.get("showGroupLabels", cfg.show_group_labels),
            use_background=background.get("useBackground", cfg.use_background),
            background_image=background.get("backgroundImage", cfg.background_image),
            background_mode=BackgroundMode(background.get("mode", cfg.background_mode.value)),
            background_tile=tuple(tile) if tile else cfg.background_tile,
            cross_group_connections=(
                tuple(CrossGroupConnection.from_dict(c) for c in data["crossGroupConnections"])
                if "crossGroupConnections" in data
                else cfg.cross_group_connections
            ),
            custom_labels=(
                tuple(CustomLabel.from_dict(c) for c in data["customLabels"])
                if "customLabels" in data
                else cfg.custom_labels
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "appearance": {
                "edgeLength": self.edge_length,
                "roomShape": self.room_shape.value,
                "roomSize": self.room_size,
                "strokeWidth": self.stroke_width,
                "connectionWidth": self.connection_width,
            },
            "colors": {
                "default": self.colors.default,
                "background": self.colors.background,
                "connections": self.colors.connections,
                "verticalConnections": self.colors.vertical_connections,
                "border": self.colors.border,
                "tagColors": [list(pair) for pair in self.tag_colors],
            },
            "displayOptions": {
                "showRoomIds": self.show_room_ids,
                "showRoomNames": self.show_room_names,
                "showLabels": self.show_labels,
                "showConnections": self.show_connections,
                "showGroupLabels": self.show_group_labels,
            },
            "fonts": {"labels": self.label_font.to_dict(), "rooms": self.room_font.to_dict()},
            "backgroundSettings": {
                "useBackground": self.use_background,
                "backgroundImage": self.background_image,
                "mode": self.background_mode.value,
                "tileSize": list(self.background_tile),
            },
            "crossGroupConnections": [c.to_dict() for c in self.cross_group_connections],
            "customLabels": [c.to_dict() for c in self.custom_labels],
        }


def group_settings_from_dict(data: dict[str, Any]) -> dict[int, GroupSettings]:
    """Read a ``groupPositioning`` section made of ``[index, value]`` pairs."""
    names = {int(i): v for i, v in data.get("names", [])}
    offsets = {int(i): xy_from_dict(v) for i, v in data.get("offsets", [])}
    label_offsets = {int(i): xy_from_dict(v) for i, v in data.get("labelOffsets", [])}
    result: dict[int, GroupSettings] = {}
    for index in sorted(set(names) | set(offsets) | set(label_offsets)):
        result[index] = GroupSettings(
            name=names.get(index),
            offset=offsets.get(index, (0, 0)),
            label_offset=label_offsets.get(index, (0, 0)),
        )
    return result


def group_settings_to_dict(settings: dict[int, GroupSettings]) -> dict[str, Any]:
    indices = sorted(settings)
    return {
        "offsets": [[i, xy_to_dict(settings[i].offset)] for i in indices],
        "names": [[i, settings[i].name] for i in indices if settings[i].name is not None],
        "labelOffsets": [[i, xy_to_dict(settings[i].label_offset)] for i in indices],
    }


def xy_from_dict(value: dict[str, Any] | None) -> tuple[int, int]:
    if not value:
        return (0, 0)
    return (int(value.get("x", 0)), int(value.get("y", 0)))


def xy_to_dict(value: tuple[int, int]) -> dict[str, int]:
    return {"x": value[0], "y": value[1]}


# ─── Theme presets ───────────────────────────────────────────────────────────

THEMES: dict[str, tuple[Colors, tuple[tuple[str, str], ...]]] = {
    "maritime": (
        Colors(default="#f0f8ff", background="#e6f3ff", connections="#4682b4", vertical_connections="#6495ed"),
        (("exit", "#ff6b6b"), ("sea", "#1e90ff"), ("beach", "#f4a460"), ("shop", "#90EE90"), ("bank", "#ffd700")),
    ),
    "dungeon": (
        Colors(default="#2c2c2c", background="#1a1a1a", connections="#666666", vertical_connections="#888888"),
        (("exit", "#dc2626"), ("shop", "#16a34a"), ("danger", "#ef4444"), ("treasure", "#eab308")),
    ),
    "forest": (
        Colors(default="#f0f8e8", background="#e8f5e8", connections="#228b22", vertical_connections="#32cd32"),
        (("exit", "#e74c3c"), ("water", "#4a90e2"), ("shop", "#27ae60"), ("tree", "#2d5016")),
    ),
    "high-contrast": (
        Colors(default="#ffffff", background="#000000", connections="#ffffff", vertical_connections="#cccccc"),
        (("exit", "#ff0000"), ("shop", "#00ff00"), ("water", "#0000ff"), ("danger", "#ff00ff")),
    ),
}
