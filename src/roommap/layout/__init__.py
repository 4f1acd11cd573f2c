"""Grid layout and group offset composition."""

from __future__ import annotations

from roommap.layout.engine import full_layout, layout_rooms
from roommap.layout.grid import PERTURBATIONS, GridLayout, find_free_cell, layout_groups, perturbed_candidates
from roommap.layout.offsets import (
    GROUP_GAP,
    apply_manual_offsets,
    compute_base_layout,
    group_label_anchors,
    with_settings,
)
from roommap.layout.types import ORIGIN, BoundingBox, GridPosition, Group, LabelAnchor

__all__ = [
    "GROUP_GAP",
    "ORIGIN",
    "PERTURBATIONS",
    "BoundingBox",
    "GridLayout",
    "GridPosition",
    "Group",
    "LabelAnchor",
    "apply_manual_offsets",
    "compute_base_layout",
    "find_free_cell",
    "full_layout",
    "group_label_anchors",
    "layout_groups",
    "layout_rooms",
    "perturbed_candidates",
    "with_settings",
]
