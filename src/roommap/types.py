"""Shared type definitions for roommap.

Enums and small lookup tables used across the resolver, layout, and renderers.
"""

from __future__ import annotations

from enum import Enum


class Direction(Enum):
    North = "north"
    NorthEast = "northeast"
    East = "east"
    SouthEast = "southeast"
    South = "south"
    SouthWest = "southwest"
    West = "west"
    NorthWest = "northwest"
    Up = "up"
    Down = "down"
    Out = "out"

    @property
    def offset(self) -> tuple[int, int]:
        return DIRECTION_OFFSETS[self]

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.Up, Direction.Down)

    @classmethod
    def parse(cls, text: str) -> Direction | None:
        """Exact, case-insensitive lookup by full name or abbreviation."""
        key = text.strip().lower()
        if key in _BY_NAME:
            return _BY_NAME[key]
        return _ABBREVIATIONS.get(key)


class RoomShape(Enum):
    Circle = "circle"
    Square = "square"
    Rectangle = "rectangle"

    @classmethod
    def default(cls) -> RoomShape:
        return cls.Square


class BackgroundMode(Enum):
    Stretch = "stretch"
    Tile = "tile"


# Grid y grows downwards, so north is negative.
DIRECTION_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.North: (0, -1),
    Direction.NorthEast: (1, -1),
    Direction.East: (1, 0),
    Direction.SouthEast: (1, 1),
    Direction.South: (0, 1),
    Direction.SouthWest: (-1, 1),
    Direction.West: (-1, 0),
    Direction.NorthWest: (-1, -1),
    Direction.Up: (0, -1),
    Direction.Down: (0, 1),
    Direction.Out: (1, 0),
}

# Compound names come first so "northeast" is never read as "north".
SUBSTRING_ORDER: tuple[Direction, ...] = (
    Direction.NorthEast,
    Direction.NorthWest,
    Direction.SouthEast,
    Direction.SouthWest,
    Direction.North,
    Direction.South,
    Direction.East,
    Direction.West,
    Direction.Up,
    Direction.Down,
    Direction.Out,
)

_BY_NAME: dict[str, Direction] = {d.value: d for d in Direction}

_ABBREVIATIONS: dict[str, Direction] = {
    "n": Direction.North,
    "ne": Direction.NorthEast,
    "e": Direction.East,
    "se": Direction.SouthEast,
    "s": Direction.South,
    "sw": Direction.SouthWest,
    "w": Direction.West,
    "nw": Direction.NorthWest,
    "u": Direction.Up,
    "d": Direction.Down,
}
