"""Hit-testing against node bodies and socket anchors.

All positions are canvas coordinates. Socket anchors are derived from
the node position on every call, so a node moved by a drag is picked at
its new location immediately.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from audiograph.nodegraph.graph import NodeGraph
from audiograph.nodegraph.node import GraphNode
from audiograph.nodegraph.socket import Connection

Point = Tuple[float, float]

# Radius for starting a connection from a socket
PICK_RADIUS = 10.0
# Radius for accepting a drop target on release; larger than PICK_RADIUS
CONNECT_RADIUS = 15.0
# Horizontal offset of bezier control points from the anchors
CURVE_OFFSET = 50.0


class HitKind(Enum):
    INPUT = "input"
    OUTPUT = "output"
    BODY = "body"


@dataclass(frozen=True)
class Hit:
    """Result of a pick: a node and, for sockets, the socket index."""
    kind: HitKind
    node: GraphNode
    index: int = -1

    @property
    def is_socket(self) -> bool:
        return self.kind is not HitKind.BODY


def input_anchor(node: GraphNode, index: int) -> Point:
    """Canvas position of an input socket."""
    lx, ly = node.inputs[index].local_pos
    return (node.x + lx, node.y + ly)


def output_anchor(node: GraphNode, index: int) -> Point:
    """Canvas position of an output socket."""
    lx, ly = node.outputs[index].local_pos
    return (node.x + lx, node.y + ly)


def socket_anchor(node: GraphNode, index: int, is_input: bool) -> Point:
    if is_input:
        return input_anchor(node, index)
    return output_anchor(node, index)


def node_contains(node: GraphNode, x: float, y: float) -> bool:
    """Strict point-in-rectangle test for the node body."""
    return node.x < x < node.x + node.w and node.y < y < node.y + node.h


def _within(anchor: Point, x: float, y: float, radius: float) -> bool:
    return math.hypot(x - anchor[0], y - anchor[1]) < radius


def hit_test(graph: NodeGraph, x: float, y: float, radius: float = PICK_RADIUS) -> Optional[Hit]:
    """
    Find what lies under the pointer.

    Nodes are tried topmost first (reverse storage order). For each node
    its input sockets, then output sockets, then the body are tested, so
    a socket on the edge of a node wins over the body around it.
    """
    for node in reversed(graph.nodes):
        for i in range(len(node.inputs)):
            if _within(input_anchor(node, i), x, y, radius):
                return Hit(HitKind.INPUT, node, i)
        for i in range(len(node.outputs)):
            if _within(output_anchor(node, i), x, y, radius):
                return Hit(HitKind.OUTPUT, node, i)
        if node_contains(node, x, y):
            return Hit(HitKind.BODY, node)
    return None


def find_sockets_near(
    graph: NodeGraph,
    x: float,
    y: float,
    want_inputs: bool,
    radius: float = CONNECT_RADIUS,
    exclude: Optional[GraphNode] = None,
) -> List[Hit]:
    """
    Every socket of one role within radius of the point.

    Order: reverse storage order of nodes, then ascending socket index.
    """
    hits = []
    kind = HitKind.INPUT if want_inputs else HitKind.OUTPUT
    for node in reversed(graph.nodes):
        if node is exclude:
            continue
        sockets = node.inputs if want_inputs else node.outputs
        for i in range(len(sockets)):
            if _within(socket_anchor(node, i, want_inputs), x, y, radius):
                hits.append(Hit(kind, node, i))
    return hits


def connection_curve(
    graph: NodeGraph,
    connection: Connection,
    offset: float = CURVE_OFFSET,
) -> Optional[Tuple[Point, Point, Point, Point]]:
    """
    Cubic bezier (start, ctrl1, ctrl2, end) for a connection.

    Returns None if either endpoint node is not in the graph.
    """
    source = graph.find_node(connection.source.node_id)
    target = graph.find_node(connection.target.node_id)
    if source is None or target is None:
        return None
    if connection.source.socket_index >= len(source.outputs):
        return None
    x1, y1 = output_anchor(source, connection.source.socket_index)
    x2, y2 = input_anchor(target, connection.target.socket_index)
    return ((x1, y1), (x1 + offset, y1), (x2 - offset, y2), (x2, y2))
