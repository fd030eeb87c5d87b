"""Sockets - connection points on nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Tuple


class SocketRef(NamedTuple):
    """Reference to a socket on another node: (node id, socket index)."""
    node_id: int
    socket_index: int


@dataclass(frozen=True)
class Connection:
    """Directed link from an output socket to an input socket."""
    source: SocketRef
    target: SocketRef


@dataclass
class InputSocket:
    """
    Input connection point (left edge of a node).

    Accepts at most one upstream connection.
    """
    label: str
    local_pos: Tuple[float, float]
    connected_to: Optional[SocketRef] = None

    is_input = True

    def is_connected(self) -> bool:
        return self.connected_to is not None


@dataclass
class OutputSocket:
    """
    Output connection point (right edge of a node).

    Feeds any number of downstream inputs.
    """
    label: str
    local_pos: Tuple[float, float]
    connections: List[SocketRef] = field(default_factory=list)

    is_input = False

    def is_connected(self) -> bool:
        return len(self.connections) > 0
