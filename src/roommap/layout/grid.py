"""Grid layout engine.

Rooms are placed on an integer grid by walking their directional exits
breadth-first. Each walk produces one Group; walks repeat until every selected
room belongs to a group.

Phases per group:
  1. Start selection (most layout exits, input order breaks ties)
  2. Breadth-first placement along resolved directions
  3. Collision handling with a fixed perturbation sequence
"""

from __future__ import annotations

import logging
from collections import deque

from roommap.ir.graph import RoomGraph
from roommap.layout.types import ORIGIN, GridPosition, Group

logger = logging.getLogger(__name__)

# Applied cumulatively, each step relative to the previous attempt. A room that
# is still blocked after the last step is not placed by that exit.
PERTURBATIONS: tuple[tuple[int, int], ...] = (
    (1, 0),
    (-2, 0),
    (1, 1),
    (0, -2),
    (2, 0),
    (-4, 0),
    (0, 3),
    (2, 2),
)


def perturbed_candidates(candidate: GridPosition) -> list[GridPosition]:
    """Every cell tried for ``candidate``, in order, starting with itself."""
    cells = [candidate]
    for dx, dy in PERTURBATIONS:
        cells.append(cells[-1].shifted(dx, dy))
    return cells


def find_free_cell(candidate: GridPosition, occupied: set[GridPosition]) -> GridPosition | None:
    for cell in perturbed_candidates(candidate):
        if cell not in occupied:
            return cell
    return None


def choose_start(graph: RoomGraph, remaining: list[int]) -> int:
    """Pick the room with the most layout exits; the first one wins ties."""
    return max(remaining, key=graph.layout_degree)


class GridLayout:
    """Assigns grid positions to rooms, one connected group at a time."""

    def layout(self, graph: RoomGraph) -> list[Group]:
        if graph.node_count() == 0:
            raise ValueError("cannot lay out an empty room set")

        placed: set[int] = set()
        groups: list[Group] = []
        order = graph.room_ids()

        while len(placed) < len(order):
            remaining = [rid for rid in order if rid not in placed]
            start = choose_start(graph, remaining)
            positions = self._place_from(graph, start, placed)
            placed.update(positions)
            groups.append(Group(index=len(groups), rooms=tuple(positions), positions=positions))
            logger.debug("group %d: %d rooms from start room %s", len(groups) - 1, len(positions), start)

        return groups

    def _place_from(self, graph: RoomGraph, start: int, placed: set[int]) -> dict[int, GridPosition]:
        positions: dict[int, GridPosition] = {start: ORIGIN}
        occupied: set[GridPosition] = {ORIGIN}
        queue: deque[int] = deque([start])

        while queue:
            current = queue.popleft()
            here = positions[current]
            for ex in graph.layout_exits(current):
                if ex.target in positions or ex.target in placed:
                    continue
                dx, dy = ex.direction.offset
                cell = find_free_cell(here.shifted(dx, dy), occupied)
                if cell is None:
                    logger.debug("no free cell for room %s via %s from room %s", ex.target, ex.direction, current)
                    continue
                positions[ex.target] = cell
                occupied.add(cell)
                queue.append(ex.target)

        return positions


def layout_groups(graph: RoomGraph) -> list[Group]:
    """Run the grid layout with the default engine."""
    return GridLayout().layout(graph)
