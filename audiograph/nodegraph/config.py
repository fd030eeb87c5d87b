"""Editor configuration: timing, sizes and colours of the node canvas."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict

from audiograph.nodegraph.geometry import CONNECT_RADIUS, CURVE_OFFSET, PICK_RADIUS
from audiograph.nodegraph.node import NodeKind

# One evaluation and repaint per display frame at 60 Hz
FRAME_INTERVAL_MS = 16


def _default_kind_colors() -> Dict[NodeKind, str]:
    return {
        NodeKind.INPUT: "#4a90e2",
        NodeKind.MATH: "#f5a623",
        NodeKind.OUTPUT: "#7ed321",
    }


@dataclass(frozen=True)
class EditorConfig:
    """Settings of the node canvas. Colours are '#rrggbb' strings."""
    frame_interval_ms: int = FRAME_INTERVAL_MS
    grid_size: int = 40
    header_height: int = 20
    socket_radius: float = 5.0
    curve_offset: float = CURVE_OFFSET
    pick_radius: float = PICK_RADIUS
    connect_radius: float = CONNECT_RADIUS
    first_match_only: bool = False

    background_color: str = "#0f0f14"
    grid_color: str = "#222222"
    connection_color: str = "#888888"
    drag_line_color: str = "#ffffff"
    body_color: str = "#333333"
    text_color: str = "#ffffff"
    socket_color: str = "#666666"
    hover_color: str = "#ffd35a"
    kind_colors: Dict[NodeKind, str] = field(default_factory=_default_kind_colors)

    def with_overrides(self, **changes) -> "EditorConfig":
        return replace(self, **changes)

    def kind_color(self, kind: NodeKind) -> str:
        return self.kind_colors.get(kind, self.body_color)
