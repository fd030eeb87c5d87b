"""Pointer-driven editing of the node graph.

States:
    IDLE           nothing in progress
    DRAGGING_NODE  a node follows the pointer
    CONNECTING     a new connection line follows the pointer

Pointer handlers run to completion on the UI thread, between frames.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from audiograph import log
from audiograph.nodegraph.geometry import (
    CONNECT_RADIUS,
    PICK_RADIUS,
    Hit,
    HitKind,
    Point,
    find_sockets_near,
    hit_test,
    socket_anchor,
)
from audiograph.nodegraph.graph import NodeGraph
from audiograph.nodegraph.node import GraphNode
from audiograph.nodegraph.socket import Connection


class InteractionState(Enum):
    IDLE = "idle"
    DRAGGING_NODE = "dragging_node"
    CONNECTING = "connecting"


@dataclass
class PendingConnection:
    """Socket a connection drag started from."""
    node: GraphNode
    index: int
    is_input: bool


class InteractionController:
    """
    Translates pointer down/move/up into graph edits.

    Args:
        graph: Graph to edit (shared with the renderer, never copied)
        first_match_only: On release, connect only the first socket in
            range. By default every socket in range is connected, in
            reverse node order then ascending socket index.
        pick_radius: Radius for starting a connection
        connect_radius: Radius for accepting a drop target

    Raises:
        ValueError: connect_radius is not larger than pick_radius
    """

    def __init__(
        self,
        graph: NodeGraph,
        first_match_only: bool = False,
        pick_radius: float = PICK_RADIUS,
        connect_radius: float = CONNECT_RADIUS,
    ):
        if connect_radius <= pick_radius:
            raise ValueError(
                f"connect_radius ({connect_radius}) must exceed pick_radius ({pick_radius})"
            )
        self.graph = graph
        self.first_match_only = first_match_only
        self.pick_radius = pick_radius
        self.connect_radius = connect_radius

        self.state = InteractionState.IDLE
        self.pointer: Point = (0.0, 0.0)
        self.dragging_node: Optional[GraphNode] = None
        self.drag_offset: Point = (0.0, 0.0)
        self.pending: Optional[PendingConnection] = None
        self.hover: Optional[Hit] = None

    def pointer_down(self, x: float, y: float) -> InteractionState:
        """Start a drag or a connection depending on what is under the pointer."""
        self.pointer = (x, y)
        hit = hit_test(self.graph, x, y, self.pick_radius)
        if hit is None:
            return self.state

        if hit.is_socket:
            self.pending = PendingConnection(hit.node, hit.index, hit.kind is HitKind.INPUT)
            self.state = InteractionState.CONNECTING
        else:
            self.dragging_node = hit.node
            self.drag_offset = (x - hit.node.x, y - hit.node.y)
            self.state = InteractionState.DRAGGING_NODE
        return self.state

    def pointer_move(self, x: float, y: float) -> None:
        """Track the pointer; move the dragged node if any."""
        self.pointer = (x, y)
        if self.state is InteractionState.DRAGGING_NODE and self.dragging_node is not None:
            self.graph.move_node(
                self.dragging_node,
                x - self.drag_offset[0],
                y - self.drag_offset[1],
            )
        self.hover = hit_test(self.graph, x, y, self.pick_radius)

    def pointer_up(self, x: float, y: float) -> List[Connection]:
        """
        Finish the current gesture and return to IDLE.

        Returns the connections created by a connection drag (possibly empty).
        """
        self.pointer = (x, y)
        created: List[Connection] = []
        if self.state is InteractionState.CONNECTING and self.pending is not None:
            created = self._finish_connection(x, y)
        self.reset()
        return created

    def reset(self) -> None:
        """Drop any gesture in progress."""
        self.state = InteractionState.IDLE
        self.dragging_node = None
        self.pending = None

    def drag_line(self) -> Optional[Tuple[Point, Point]]:
        """Endpoints of the in-progress connection line, or None."""
        if self.state is not InteractionState.CONNECTING or self.pending is None:
            return None
        origin = self.pending
        start = socket_anchor(origin.node, origin.index, origin.is_input)
        return (start, self.pointer)

    def _finish_connection(self, x: float, y: float) -> List[Connection]:
        origin = self.pending
        # Dragging from an input looks for outputs and vice versa
        targets = find_sockets_near(
            self.graph, x, y,
            want_inputs=not origin.is_input,
            radius=self.connect_radius,
            exclude=origin.node,
        )
        if self.first_match_only:
            targets = targets[:1]

        created = []
        for target in targets:
            if origin.is_input:
                connection = self.graph.connect(target.node, target.index, origin.node, origin.index)
            else:
                connection = self.graph.connect(origin.node, origin.index, target.node, target.index)
            created.append(connection)

        if not created:
            log.debug("Connection drag released with no socket in range")
        return created
