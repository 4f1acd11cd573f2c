"""Intermediate representation: rooms, exits, and the room graph."""

from roommap.ir.exits import CROSS_GROUP, extract_label, resolve_direction
from roommap.ir.graph import Exit, RoomGraph
from roommap.ir.room import Room

__all__ = [
    "CROSS_GROUP",
    "Exit",
    "Room",
    "RoomGraph",
    "extract_label",
    "resolve_direction",
]
