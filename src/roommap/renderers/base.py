"""Base renderer protocol."""

from __future__ import annotations

from typing import Protocol

from roommap.config import RenderConfig
from roommap.ir.graph import RoomGraph
from roommap.layout.types import GridPosition, Group


class Renderer(Protocol):
    """Protocol that all renderers must implement."""

    def render(
        self,
        graph: RoomGraph,
        groups: list[Group],
        positions: dict[int, GridPosition],
        config: RenderConfig,
    ) -> str:
        """Render positioned rooms to an output document string."""
        ...
