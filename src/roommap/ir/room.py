"""Room records as supplied by the caller (MapDB entries)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Room:
    id: int
    wayto: dict[str, str] = field(default_factory=dict)
    dirto: dict[str, str] = field(default_factory=dict)
    uid: tuple[int, ...] = ()
    tags: tuple[str, ...] = ()
    title: tuple[str, ...] = ()
    location: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Room:
        """Build a Room from a MapDB JSON object.

        Optional fields that are missing or of the wrong type fall back to empty
        values. Exit keys are normalised to strings.
        """
        uid = data.get("uid") or ()
        if isinstance(uid, (int, str)):
            uid = (uid,)
        elif not isinstance(uid, (list, tuple)):
            uid = ()
        title = data.get("title") or ()
        if isinstance(title, str):
            title = (title,)
        elif not isinstance(title, (list, tuple)):
            title = ()
        location = data.get("location")
        return cls(
            id=int(data["id"]),
            wayto=_str_map(data.get("wayto")),
            dirto=_str_map(data.get("dirto")),
            uid=tuple(int(u) for u in uid if str(u).lstrip("-").isdigit()),
            tags=tuple(t for t in _list(data.get("tags")) if isinstance(t, str)),
            title=tuple(str(t) for t in title),
            location=location if isinstance(location, str) else None,
        )


def target_id(key: str) -> int | None:
    """Parse a wayto/dirto key into a room id, or None if it is not numeric."""
    text = key.strip()
    if text.lstrip("-").isdigit():
        return int(text)
    return None


def _str_map(value: object) -> dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {str(k): v for k, v in value.items() if isinstance(v, str)}


def _list(value: object) -> list[object]:
    return list(value) if isinstance(value, (list, tuple)) else []
