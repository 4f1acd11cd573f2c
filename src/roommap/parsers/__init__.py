"""Input parsers: MapDB documents and room selection."""

from __future__ import annotations

from roommap.parsers.mapdb import (
    extract_locations,
    load_mapdb,
    map_identifier,
    parse_mapdb,
    parse_room_ranges,
    rooms_by_location,
    select_rooms,
)

__all__ = [
    "extract_locations",
    "load_mapdb",
    "map_identifier",
    "parse_mapdb",
    "parse_room_ranges",
    "rooms_by_location",
    "select_rooms",
]
