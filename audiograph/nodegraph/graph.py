"""NodeGraph - node collection and connection bookkeeping.

A connection is stored twice: on the target input socket (connected_to)
and in the source output socket's connection list. Every mutation here
keeps both sides in agreement.

The node list order is the evaluation order and is visible to callers.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Sequence

from audiograph import log
from audiograph.nodegraph.node import GraphNode, NodeKind, MathOp
from audiograph.nodegraph.socket import Connection, SocketRef


class NodeGraphError(Exception):
    """Error in a graph mutation."""
    pass


class UnknownNodeError(NodeGraphError, KeyError):
    """A node id that is not part of the graph."""
    pass


class NodeGraph:
    """
    Ordered collection of nodes plus the connection graph they induce.

    Cycles are allowed. The editor canvas owns the graph; the interaction
    controller and renderer only hold references to it.
    """

    def __init__(self):
        self._nodes: List[GraphNode] = []
        self._by_id: Dict[int, GraphNode] = {}

    # --- Nodes ---

    def add_node(self, node: GraphNode) -> GraphNode:
        """Append a node. Its position in the list is its evaluation slot."""
        if node.id in self._by_id:
            raise NodeGraphError(f"Node id {node.id} already in graph")
        self._nodes.append(node)
        self._by_id[node.id] = node
        return node

    def create_node(
        self,
        kind: NodeKind,
        name: str,
        x: float = 0.0,
        y: float = 0.0,
        **kwargs,
    ) -> GraphNode:
        """Create a node with a fresh id and append it."""
        return self.add_node(GraphNode(kind, name, x, y, **kwargs))

    @property
    def nodes(self) -> List[GraphNode]:
        """Nodes in storage (evaluation) order."""
        return self._nodes.copy()

    def __iter__(self) -> Iterator[GraphNode]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def find_node(self, node_id: int) -> Optional[GraphNode]:
        """Find node by id, or None."""
        return self._by_id.get(node_id)

    def get_node(self, node_id: int) -> GraphNode:
        """Find node by id; raises UnknownNodeError if absent."""
        node = self._by_id.get(node_id)
        if node is None:
            raise UnknownNodeError(node_id)
        return node

    def find_by_name(self, name: str) -> Optional[GraphNode]:
        """First node with the given display name."""
        for node in self._nodes:
            if node.name == name:
                return node
        return None

    def move_node(self, node: GraphNode, x: float, y: float) -> None:
        """Set node position. No canvas bounds are applied."""
        node.set_pos(x, y)

    def reorder(self, node_ids: Sequence[int]) -> None:
        """
        Replace the storage order.

        node_ids must be a permutation of the ids currently in the graph.
        """
        if sorted(node_ids) != sorted(self._by_id):
            raise NodeGraphError("reorder() needs every node id exactly once")
        self._nodes = [self._by_id[node_id] for node_id in node_ids]

    # --- Connections ---

    def connect(
        self,
        source: GraphNode,
        output_index: int,
        target: GraphNode,
        input_index: int,
    ) -> Connection:
        """
        Connect source.outputs[output_index] to target.inputs[input_index].

        An input holds one upstream link: an existing one is replaced and
        its entry in the old source's connection list is removed.
        """
        self._check_member(source)
        self._check_member(target)
        try:
            out_socket = source.outputs[output_index]
            in_socket = target.inputs[input_index]
        except IndexError:
            raise NodeGraphError(
                f"No socket pair out[{output_index}] of {source.name} -> in[{input_index}] of {target.name}"
            ) from None

        source_ref = SocketRef(source.id, output_index)
        target_ref = SocketRef(target.id, input_index)

        if in_socket.connected_to is not None:
            self._drop_forward_ref(in_socket.connected_to, target_ref)

        in_socket.connected_to = source_ref
        out_socket.connections.append(target_ref)
        log.debug(f"connect {source.name}.{out_socket.label} -> {target.name}.{in_socket.label}")
        return Connection(source_ref, target_ref)

    def disconnect_input(self, target: GraphNode, input_index: int) -> Optional[Connection]:
        """Remove the connection feeding an input, if any."""
        in_socket = target.inputs[input_index]
        source_ref = in_socket.connected_to
        if source_ref is None:
            return None
        target_ref = SocketRef(target.id, input_index)
        self._drop_forward_ref(source_ref, target_ref)
        in_socket.connected_to = None
        return Connection(source_ref, target_ref)

    def connections(self) -> List[Connection]:
        """All connections, in target storage order then input index."""
        result = []
        for node in self._nodes:
            for index, in_socket in enumerate(node.inputs):
                if in_socket.connected_to is not None:
                    result.append(Connection(in_socket.connected_to, SocketRef(node.id, index)))
        return result

    def upstream_value(self, node: GraphNode, input_index: int) -> float:
        """
        Current value feeding an input.

        Unconnected inputs and references to absent nodes read as 0.
        """
        ref = node.inputs[input_index].connected_to
        if ref is None:
            return 0.0
        source = self._by_id.get(ref.node_id)
        if source is None:
            return 0.0
        return source.value

    # --- Internal ---

    def _check_member(self, node: GraphNode) -> None:
        if self._by_id.get(node.id) is not node:
            raise UnknownNodeError(node.id)

    def _drop_forward_ref(self, source_ref: SocketRef, target_ref: SocketRef) -> None:
        old_source = self._by_id.get(source_ref.node_id)
        if old_source is None or source_ref.socket_index >= len(old_source.outputs):
            return
        connections = old_source.outputs[source_ref.socket_index].connections
        if target_ref in connections:
            connections.remove(target_ref)


def create_default_graph() -> NodeGraph:
    """Build the editor's startup topology.

    Inputs are stored before the node that reads them, so the first pass
    already sees current values.

    Audio Low -> Multiply.A, Value -> Multiply.B, Multiply -> uDepthStrength.
    """
    graph = NodeGraph()
    audio_low = graph.create_node(NodeKind.INPUT, "Audio Low", 50, 100)
    value = graph.create_node(NodeKind.INPUT, "Value", 50, 250, params={"val": 2.0})
    multiply = graph.create_node(NodeKind.MATH, "Multiply", 300, 150, op=MathOp.MULTIPLY)
    depth = graph.create_node(NodeKind.OUTPUT, "uDepthStrength", 600, 150)

    graph.connect(audio_low, 0, multiply, 0)
    graph.connect(value, 0, multiply, 1)
    graph.connect(multiply, 0, depth, 0)
    return graph
