"""Exit interpretation: direction resolution and connection labels.

Both functions are pure; layout and rendering call them independently and rely
on getting the same answer for the same (room, target) pair.

Resolution order for a direction:
  1. ``dirto`` sentinel ``cross-group``  -> CROSS_GROUP
  2. ``dirto`` naming a direction        -> that direction
  3. script command (``;e ...``)         -> no direction
  4. ``wayto`` equal to a direction      -> that direction
  5. ``wayto`` containing a direction    -> first in SUBSTRING_ORDER
"""

from __future__ import annotations

import re
from typing import Final

from roommap.ir.room import Room
from roommap.types import SUBSTRING_ORDER, Direction

SCRIPT_MARKER: Final = ";e"
CROSS_GROUP: Final = "cross-group"
SENTINEL_NONE: Final = "none"
SENTINEL_SKIP: Final = "skip"

MAX_VERBATIM_LABEL: Final = 20

_SCRIPT_MOVE_RE = re.compile(r"\b(?:go|move)\s+['\"]?(?:go\s+)?([A-Za-z][\w-]*)", re.IGNORECASE)
_ACTION_RE = re.compile(r"^(?:go|climb|move)\s+(.+)$", re.IGNORECASE)

Resolution = Direction | str | None


def is_script(command: str) -> bool:
    return command.lstrip().lower().startswith(SCRIPT_MARKER)


def dirto_value(room: Room, target: str) -> str | None:
    value = room.dirto.get(target)
    if value is None:
        return None
    return value.strip().lower()


def dirto_override(room: Room, target: str) -> Direction | None:
    """The explicit direction override for ``target``, ignoring sentinels."""
    value = dirto_value(room, target)
    if value is None or value in (SENTINEL_NONE, SENTINEL_SKIP, CROSS_GROUP):
        return None
    return Direction.parse(value)


def resolve_direction(room: Room, target: str) -> Resolution:
    """Resolve the exit ``room -> target`` to a Direction, CROSS_GROUP or None."""
    if dirto_value(room, target) == CROSS_GROUP:
        return CROSS_GROUP

    override = dirto_override(room, target)
    if override is not None:
        return override

    command = room.wayto.get(target)
    if command is None or is_script(command):
        return None

    text = command.strip().lower()
    exact = Direction.parse(text)
    if exact is not None:
        return exact
    for direction in SUBSTRING_ORDER:
        if direction.value in text:
            return direction
    return None


def is_skipped(room: Room, target: str) -> bool:
    return dirto_value(room, target) == SENTINEL_SKIP


def extract_label(room: Room, target: str) -> str | None:
    """Short human-readable text for the exit ``room -> target``, if any."""
    command = room.wayto.get(target)
    if command is None:
        return None
    override = dirto_override(room, target)

    if is_script(command):
        if dirto_value(room, target) is None:
            return None
        return _script_move_token(command)

    text = command.strip()
    plain = Direction.parse(text)
    if plain is not None:
        if override is not None and override != plain:
            return override.value
        return None

    action = _ACTION_RE.match(text)
    if action:
        return action.group(1).strip()
    if len(text) <= MAX_VERBATIM_LABEL:
        return text or None
    return None


def _script_move_token(command: str) -> str | None:
    for match in _SCRIPT_MOVE_RE.finditer(command):
        word = match.group(1)
        if Direction.parse(word) is None:
            return word
    return None
