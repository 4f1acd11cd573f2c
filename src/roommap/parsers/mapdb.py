"""MapDB loading and room selection.

A MapDB document is a JSON array of room objects. Rooms are picked either by
location name or by id ranges such as ``"35593-35601, 35608"``; ranges can
match alternate ids (uids) instead of ids, and exclusions are applied last.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable
from typing import Any

from roommap.ir.room import Room

logger = logging.getLogger(__name__)

_RANGE_RE = re.compile(r"^(\d+)\s*-\s*(\d+)$")


def parse_mapdb(data: Any) -> list[Room]:
    """Decode a MapDB JSON array, skipping entries without a usable id."""
    if not isinstance(data, list):
        raise ValueError("MapDB document must be a JSON array of rooms")
    rooms: list[Room] = []
    for entry in data:
        if not isinstance(entry, dict) or not str(entry.get("id", "")).lstrip("-").isdigit():
            logger.debug("skipping MapDB entry without a numeric id: %r", entry)
            continue
        rooms.append(Room.from_dict(entry))
    return rooms


def load_mapdb(path: str) -> list[Room]:
    with open(path) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"invalid MapDB JSON in '{path}': {e}") from e
    rooms = parse_mapdb(data)
    logger.info("loaded %d rooms from %s", len(rooms), path)
    return rooms


def extract_locations(rooms: Iterable[Room]) -> list[str]:
    return sorted({room.location for room in rooms if room.location})


def rooms_by_location(rooms: Iterable[Room], location: str) -> list[Room]:
    return [room for room in rooms if room.location == location]


def parse_room_ranges(text: str) -> list[int]:
    """Expand ``"1-3, 7"`` into ``[1, 2, 3, 7]``; malformed parts are ignored."""
    ids: dict[int, None] = {}
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        match = _RANGE_RE.match(part)
        if match:
            start, end = int(match.group(1)), int(match.group(2))
            for room_id in range(start, end + 1):
                ids[room_id] = None
        elif part.isdigit():
            ids[int(part)] = None
        else:
            logger.debug("ignoring malformed room range %r", part)
    return list(ids)


def _matches(room: Room, ids: set[int], use_uid: bool) -> bool:
    if use_uid:
        return any(u in ids for u in room.uid)
    return room.id in ids


def select_rooms(
    rooms: list[Room],
    locations: Iterable[str] | None = None,
    ranges: str | None = None,
    use_uid: bool = False,
    exclude: str | None = None,
    exclude_uid: bool = False,
) -> list[Room]:
    """Pick rooms by location (preferred when given) or by id/uid ranges.

    Raises:
        ValueError: If neither locations nor ranges are supplied.
    """
    locations = list(locations or [])
    if locations:
        selected: list[Room] = []
        seen: set[int] = set()
        for location in locations:
            for room in rooms_by_location(rooms, location):
                if room.id not in seen:
                    seen.add(room.id)
                    selected.append(room)
    elif ranges and ranges.strip():
        ids = set(parse_room_ranges(ranges))
        selected = [room for room in rooms if _matches(room, ids, use_uid)]
    else:
        raise ValueError("select at least one location or a room range")

    if exclude and exclude.strip():
        excluded = set(parse_room_ranges(exclude))
        selected = [room for room in selected if not _matches(room, excluded, exclude_uid)]
    return selected


def map_identifier(
    locations: Iterable[str] | None = None,
    ranges: str | None = None,
    use_uid: bool = False,
    exclude: str | None = None,
) -> str:
    """Stable name for a selection, used for coordinate file names."""
    suffix = ""
    if exclude and exclude.strip():
        suffix = "_exclude_" + re.sub(r"[^0-9,-]", "", exclude)
    locations = sorted(locations or [])
    if locations:
        return f"location_{','.join(locations)}{suffix}"
    return f"{'uid' if use_uid else 'id'}_{(ranges or '').strip()}{suffix}"
