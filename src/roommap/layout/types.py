"""Layout types shared across the layout engine, offset composer, and renderers."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from roommap.config import GroupSettings


@dataclass(frozen=True)
class GridPosition:
    """An integer position on the room grid (x right, y down)."""

    x: int
    y: int

    def shifted(self, dx: int, dy: int) -> GridPosition:
        return GridPosition(self.x + dx, self.y + dy)

    def __add__(self, other: GridPosition) -> GridPosition:
        return GridPosition(self.x + other.x, self.y + other.y)

    def to_dict(self) -> dict[str, int]:
        return {"x": self.x, "y": self.y}


ORIGIN = GridPosition(0, 0)


@dataclass(frozen=True)
class BoundingBox:
    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @classmethod
    def around(cls, positions: Iterable[GridPosition]) -> BoundingBox:
        points = list(positions)
        if not points:
            raise ValueError("cannot compute a bounding box of no positions")
        return cls(
            min_x=min(p.x for p in points),
            min_y=min(p.y for p in points),
            max_x=max(p.x for p in points),
            max_y=max(p.y for p in points),
        )

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y

    @property
    def center_x(self) -> float:
        return (self.min_x + self.max_x) / 2

    @property
    def center_y(self) -> float:
        return (self.min_y + self.max_y) / 2

    def translated(self, offset: GridPosition) -> BoundingBox:
        return BoundingBox(
            self.min_x + offset.x, self.min_y + offset.y, self.max_x + offset.x, self.max_y + offset.y
        )


@dataclass(frozen=True)
class Group:
    """A connected set of rooms laid out together.

    ``positions`` are relative to the start room at the origin. ``base_offset``
    is filled in once by ``compute_base_layout`` and never recomputed.
    """

    index: int
    rooms: tuple[int, ...]
    positions: dict[int, GridPosition]
    base_offset: GridPosition | None = None
    settings: GroupSettings = field(default_factory=GroupSettings)

    @property
    def bounds(self) -> BoundingBox:
        return BoundingBox.around(self.positions.values())

    @property
    def name(self) -> str:
        return self.settings.name or f"Group {self.index + 1}"


@dataclass(frozen=True)
class LabelAnchor:
    """Where a group's label goes, in (fractional) grid units."""

    index: int
    text: str
    x: float
    y: float
    anchor: str = "middle"
