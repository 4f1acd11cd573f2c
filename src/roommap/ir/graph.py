"""Room graph: resolves every exit once and stores it in a networkx DiGraph.

Nodes are room ids carrying the ``Room`` under ``data``; edges carry an
``Exit`` under ``data``. Only exits whose target is part of the selection are
kept, so off-selection neighbours drop out here and nowhere else. Node and
successor order follow the input order and each room's ``wayto`` order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace

import networkx as nx

from roommap.ir.exits import CROSS_GROUP, extract_label, is_script, is_skipped, resolve_direction
from roommap.ir.room import Room, target_id
from roommap.types import Direction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Exit:
    source: int
    target: int
    command: str
    direction: Direction | None
    cross_group: bool
    skipped: bool
    scripted: bool
    label: str | None

    @property
    def lays_out(self) -> bool:
        """True if this exit positions its target during layout."""
        return self.direction is not None

    @property
    def drawable(self) -> bool:
        """True if this exit is drawn as an ordinary connection."""
        if self.skipped or self.cross_group:
            return False
        return not self.scripted or self.direction is not None


class RoomGraph:
    """The selected rooms and the exits between them."""

    def __init__(self, digraph: nx.DiGraph) -> None:
        self.digraph = digraph

    @classmethod
    def from_rooms(cls, rooms: Iterable[Room]) -> RoomGraph:
        digraph: nx.DiGraph = nx.DiGraph()
        ordered: list[Room] = []
        for room in rooms:
            if room.id in digraph:
                logger.debug("duplicate room id %s ignored", room.id)
                continue
            digraph.add_node(room.id, data=room)
            ordered.append(room)

        for room in ordered:
            for key, command in room.wayto.items():
                tid = target_id(key)
                if tid is None or tid not in digraph:
                    continue
                digraph.add_edge(room.id, tid, data=_resolve_exit(room, key, tid, command))

        # A cross-group marker on either side takes the whole pair out of layout.
        crossing = {frozenset((s, t)) for s, t, ex in digraph.edges(data="data") if ex.cross_group}
        for s, t, ex in list(digraph.edges(data="data")):
            if not ex.cross_group and frozenset((s, t)) in crossing:
                logger.debug("exit %s->%s follows its cross-group reverse", s, t)
                digraph.edges[s, t]["data"] = replace(ex, direction=None, cross_group=True)
        return cls(digraph)

    def __contains__(self, room_id: object) -> bool:
        return room_id in self.digraph

    def node_count(self) -> int:
        return self.digraph.number_of_nodes()

    def room_ids(self) -> list[int]:
        return list(self.digraph.nodes)

    def room(self, room_id: int) -> Room:
        return self.digraph.nodes[room_id]["data"]

    def rooms(self) -> list[Room]:
        return [data for _, data in self.digraph.nodes(data="data")]

    def exit(self, source: int, target: int) -> Exit | None:
        if not self.digraph.has_edge(source, target):
            return None
        return self.digraph.edges[source, target]["data"]

    def exits_from(self, room_id: int) -> list[Exit]:
        return [self.digraph.edges[room_id, t]["data"] for t in self.digraph.successors(room_id)]

    def exits(self) -> Iterator[Exit]:
        for _, _, data in self.digraph.edges(data="data"):
            yield data

    def layout_exits(self, room_id: int) -> list[Exit]:
        return [e for e in self.exits_from(room_id) if e.lays_out]

    def layout_degree(self, room_id: int) -> int:
        return len(self.layout_exits(room_id))


def _resolve_exit(room: Room, key: str, tid: int, command: str) -> Exit:
    resolved = resolve_direction(room, key)
    return Exit(
        source=room.id,
        target=tid,
        command=command,
        direction=resolved if isinstance(resolved, Direction) else None,
        cross_group=resolved == CROSS_GROUP,
        skipped=is_skipped(room, key),
        scripted=is_script(command),
        label=extract_label(room, key),
    )
