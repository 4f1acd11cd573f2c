"""SVG renderer built on svgwrite.

Layers, back to front:
  1. Background (flat colour, optional stretched or tiled image)
  2. Group labels
  3. Cross-group connections (dashed)
  4. Ordinary connections, one line per room pair
  5. Connection labels
  6. Custom labels
  7. Room shapes
  8. Room text
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import svgwrite

from roommap.config import CrossGroupConnection, RenderConfig
from roommap.ir.graph import RoomGraph
from roommap.layout.offsets import group_label_anchors
from roommap.layout.types import BoundingBox, GridPosition, Group
from roommap.renderers.text import room_name, text_extent, upright_angle, wrap_text
from roommap.types import BackgroundMode, RoomShape

logger = logging.getLogger(__name__)

# ─── Geometry constants ──────────────────────────────────────────────────────

PADDING_UNITS: int = 2
LABEL_GAP: float = 3
BOX_PADDING: float = 4
BASELINE_SHIFT: float = 0.35
GROUP_LABEL_SCALE: float = 1.5


def room_half_extent(shape: RoomShape, size: float) -> tuple[float, float]:
    """Half width and half height of a room shape of the given size."""
    if shape == RoomShape.Rectangle:
        return size * 1.5, size
    return size, size


@dataclass(frozen=True)
class Frame:
    """Maps grid coordinates to document pixels."""

    bounds: BoundingBox
    edge_length: float

    @property
    def width(self) -> float:
        return (self.bounds.width + 2 * PADDING_UNITS) * self.edge_length

    @property
    def height(self) -> float:
        return (self.bounds.height + 2 * PADDING_UNITS) * self.edge_length

    def point(self, x: float, y: float) -> tuple[float, float]:
        return (
            (x - self.bounds.min_x + PADDING_UNITS) * self.edge_length,
            (y - self.bounds.min_y + PADDING_UNITS) * self.edge_length,
        )


# ─── Connection collection ───────────────────────────────────────────────────


@dataclass
class Connection:
    """An undirected room pair drawn as one line."""

    a: int
    b: int
    vertical: bool = False
    labels: list[str] = field(default_factory=list)


def collect_connections(graph: RoomGraph, positions: dict[int, GridPosition]) -> list[Connection]:
    """Drawable exits between positioned rooms, merged per unordered pair."""
    pairs: dict[frozenset[int], Connection] = {}
    for ex in graph.exits():
        if not ex.drawable or ex.source == ex.target:
            continue
        if ex.source not in positions or ex.target not in positions:
            continue
        key = frozenset((ex.source, ex.target))
        conn = pairs.setdefault(key, Connection(a=ex.source, b=ex.target))
        if ex.direction is not None and ex.direction.is_vertical:
            conn.vertical = True
        if ex.label and ex.label not in conn.labels:
            conn.labels.append(ex.label)
    return list(pairs.values())


def collect_cross_group(
    graph: RoomGraph, positions: dict[int, GridPosition], config: RenderConfig
) -> list[CrossGroupConnection]:
    """Configured cross-group connections first, then ``cross-group`` exits."""
    candidates = list(config.cross_group_connections)
    for ex in graph.exits():
        if ex.cross_group:
            candidates.append(CrossGroupConnection(ex.source, ex.target, color=config.colors.connections))

    seen: set[frozenset[int]] = set()
    result: list[CrossGroupConnection] = []
    for conn in candidates:
        key = frozenset((conn.from_id, conn.to_id))
        if key in seen or len(key) < 2:
            continue
        if conn.from_id not in positions or conn.to_id not in positions:
            logger.debug("cross-group connection %s-%s has an unplaced end", conn.from_id, conn.to_id)
            continue
        seen.add(key)
        result.append(conn)
    return result


# ─── Renderer ────────────────────────────────────────────────────────────────


class SvgRenderer:
    """Draws positioned rooms and their connections as an SVG document."""

    def render(
        self,
        graph: RoomGraph,
        groups: list[Group],
        positions: dict[int, GridPosition],
        config: RenderConfig,
    ) -> str:
        config.validate()
        if not positions:
            raise ValueError("nothing to draw: no room has a position")

        frame = Frame(BoundingBox.around(positions.values()), config.edge_length)
        dwg = svgwrite.Drawing(size=(frame.width, frame.height), viewBox=f"0 0 {frame.width} {frame.height}")

        self._paint_background(dwg, frame, config)
        self._paint_group_labels(dwg, frame, groups, positions, config)
        self._paint_cross_group(dwg, frame, collect_cross_group(graph, positions, config), positions, config)

        connections = collect_connections(graph, positions)
        self._paint_connections(dwg, frame, connections, positions, config)
        self._paint_connection_labels(dwg, frame, connections, positions, config)
        self._paint_custom_labels(dwg, config)
        self._paint_rooms(dwg, frame, graph, positions, config)
        self._paint_room_text(dwg, frame, graph, positions, config)

        logger.debug("rendered %d rooms, %d connections", len(positions), len(connections))
        return dwg.tostring()

    def _paint_background(self, dwg: svgwrite.Drawing, frame: Frame, config: RenderConfig) -> None:
        layer = dwg.add(dwg.g(id="background"))
        layer.add(dwg.rect(insert=(0, 0), size=(frame.width, frame.height), fill=config.colors.background))
        if not (config.use_background and config.background_image):
            return
        if config.background_mode == BackgroundMode.Tile:
            tile = config.background_tile
            pattern = dwg.pattern(id="background-tile", insert=(0, 0), size=tile, patternUnits="userSpaceOnUse")
            pattern.add(dwg.image(config.background_image, insert=(0, 0), size=tile))
            dwg.defs.add(pattern)
            layer.add(dwg.rect(insert=(0, 0), size=(frame.width, frame.height), fill=pattern.get_paint_server()))
        else:
            image = dwg.image(config.background_image, insert=(0, 0), size=(frame.width, frame.height))
            image.stretch()
            layer.add(image)

    def _paint_group_labels(
        self,
        dwg: svgwrite.Drawing,
        frame: Frame,
        groups: list[Group],
        positions: dict[int, GridPosition],
        config: RenderConfig,
    ) -> None:
        layer = dwg.add(dwg.g(id="group-labels"))
        if not config.show_group_labels:
            return
        font = config.label_font
        size = font.size * GROUP_LABEL_SCALE
        for anchor in group_label_anchors(groups, positions):
            x, y = frame.point(anchor.x, anchor.y)
            w, h = text_extent(anchor.text, size)
            left = x - w / 2 if anchor.anchor == "middle" else x - w
            layer.add(
                dwg.rect(
                    insert=(left - BOX_PADDING, y - h / 2 - BOX_PADDING),
                    size=(w + 2 * BOX_PADDING, h + 2 * BOX_PADDING),
                    fill=config.colors.background,
                    stroke=config.colors.connections,
                    stroke_width=config.stroke_width,
                    rx=3,
                )
            )
            layer.add(
                dwg.text(
                    anchor.text,
                    insert=(x, y + size * BASELINE_SHIFT),
                    fill=font.color,
                    font_size=size,
                    font_family=font.family,
                    font_weight="bold",
                    text_anchor=anchor.anchor,
                )
            )

    def _paint_cross_group(
        self,
        dwg: svgwrite.Drawing,
        frame: Frame,
        connections: list[CrossGroupConnection],
        positions: dict[int, GridPosition],
        config: RenderConfig,
    ) -> None:
        layer = dwg.add(dwg.g(id="cross-group-connections"))
        for conn in connections:
            start = positions[conn.from_id]
            end = positions[conn.to_id]
            line = dwg.line(
                start=frame.point(start.x, start.y),
                end=frame.point(end.x, end.y),
                stroke=conn.color,
                stroke_width=config.connection_width,
            )
            if conn.style != "solid":
                line["stroke-dasharray"] = conn.dash_spacing
            layer.add(line)

    def _paint_connections(
        self,
        dwg: svgwrite.Drawing,
        frame: Frame,
        connections: list[Connection],
        positions: dict[int, GridPosition],
        config: RenderConfig,
    ) -> None:
        layer = dwg.add(dwg.g(id="connections"))
        if not config.show_connections:
            return
        for conn in connections:
            a = positions[conn.a]
            b = positions[conn.b]
            color = config.colors.vertical_connections if conn.vertical else config.colors.connections
            layer.add(
                dwg.line(
                    start=frame.point(a.x, a.y),
                    end=frame.point(b.x, b.y),
                    stroke=color,
                    stroke_width=config.connection_width,
                )
            )

    def _paint_connection_labels(
        self,
        dwg: svgwrite.Drawing,
        frame: Frame,
        connections: list[Connection],
        positions: dict[int, GridPosition],
        config: RenderConfig,
    ) -> None:
        layer = dwg.add(dwg.g(id="connection-labels"))
        if not config.show_labels:
            return
        font = config.label_font
        for conn in connections:
            if not conn.labels:
                continue
            ax, ay = frame.point(positions[conn.a].x, positions[conn.a].y)
            bx, by = frame.point(positions[conn.b].x, positions[conn.b].y)
            mx, my = (ax + bx) / 2, (ay + by) / 2
            angle = upright_angle(bx - ax, by - ay)
            # First label above the line, a second one stacked below it.
            baselines = [my - LABEL_GAP, my + font.size + LABEL_GAP]
            for text, baseline in zip(conn.labels[:2], baselines):
                layer.add(
                    dwg.text(
                        text,
                        insert=(mx, baseline),
                        fill=font.color,
                        font_size=font.size,
                        font_family=font.family,
                        font_weight=font.weight,
                        text_anchor="middle",
                        transform=f"rotate({angle:.2f},{mx:.2f},{my:.2f})",
                    )
                )

    def _paint_custom_labels(self, dwg: svgwrite.Drawing, config: RenderConfig) -> None:
        layer = dwg.add(dwg.g(id="custom-labels"))
        for label in config.custom_labels:
            if label.background:
                w, h = text_extent(label.text, label.font_size)
                layer.add(
                    dwg.rect(
                        insert=(label.x - w / 2 - BOX_PADDING, label.y - h / 2 - BOX_PADDING),
                        size=(w + 2 * BOX_PADDING, h + 2 * BOX_PADDING),
                        fill=label.background_color,
                        stroke=label.border_color,
                        stroke_width=label.border_width,
                    )
                )
            layer.add(
                dwg.text(
                    label.text,
                    insert=(label.x, label.y + label.font_size * BASELINE_SHIFT),
                    fill=label.font_color,
                    font_size=label.font_size,
                    font_family=label.font_family,
                    font_weight="bold" if label.bold else "normal",
                    text_anchor="middle",
                )
            )

    def _paint_rooms(
        self,
        dwg: svgwrite.Drawing,
        frame: Frame,
        graph: RoomGraph,
        positions: dict[int, GridPosition],
        config: RenderConfig,
    ) -> None:
        layer = dwg.add(dwg.g(id="rooms"))
        hw, hh = room_half_extent(config.room_shape, config.room_size)
        for room_id, pos in positions.items():
            x, y = frame.point(pos.x, pos.y)
            style = {
                "fill": config.color_for_tags(graph.room(room_id).tags),
                "stroke": config.colors.border,
                "stroke_width": config.stroke_width,
            }
            if config.room_shape == RoomShape.Circle:
                shape = dwg.circle(center=(x, y), r=hw, **style)
            else:
                shape = dwg.rect(insert=(x - hw, y - hh), size=(2 * hw, 2 * hh), **style)
            shape["id"] = f"room-{room_id}"
            layer.add(shape)

    def _paint_room_text(
        self,
        dwg: svgwrite.Drawing,
        frame: Frame,
        graph: RoomGraph,
        positions: dict[int, GridPosition],
        config: RenderConfig,
    ) -> None:
        layer = dwg.add(dwg.g(id="room-text"))
        font = config.room_font
        text_style = {
            "fill": font.color,
            "font_size": font.size,
            "font_family": font.family,
            "font_weight": font.weight,
            "text_anchor": "middle",
        }
        _, hh = room_half_extent(config.room_shape, config.room_size)
        for room_id, pos in positions.items():
            x, y = frame.point(pos.x, pos.y)
            if config.show_room_ids:
                layer.add(dwg.text(str(room_id), insert=(x, y + font.size * BASELINE_SHIFT), **text_style))
            if not config.show_room_names:
                continue
            name = room_name(graph.room(room_id).title)
            if name is None:
                continue
            baseline = y + hh + font.size
            for i, line in enumerate(wrap_text(name)):
                layer.add(dwg.text(line, insert=(x, baseline + i * font.size), **text_style))


def render_svg(
    graph: RoomGraph, groups: list[Group], positions: dict[int, GridPosition], config: RenderConfig
) -> str:
    """Render with the default SVG renderer."""
    return SvgRenderer().render(graph, groups, positions, config)
