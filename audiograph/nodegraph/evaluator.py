"""Per-frame pull evaluation of the node graph.

Each node is visited exactly once per pass. MATH and OUTPUT nodes read the
*current* value of their upstream nodes instead of recomputing them, so:

- in STORAGE_ORDER mode (default) nodes run in graph storage order. An
  upstream node stored after its consumer is read as of the previous
  pass: a backward reference lags by one evaluation. Cycles never loop;
  every node on a cycle simply lags its neighbours by one pass.
- in TOPOLOGICAL mode nodes run sources-first and a cycle raises
  InvalidGraph instead of lagging.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, List, Mapping, Optional

from audiograph import log
from audiograph.nodegraph.graph import NodeGraph
from audiograph.nodegraph.node import GraphNode, NodeKind, MathOp

# Constant used by an unbound INPUT node without a "val" parameter
DEFAULT_CONSTANT = 0.5


class InvalidGraph(Exception):
    """Graph cannot be ordered for evaluation (contains a cycle)."""

    def __init__(self, message: str, cycle_nodes: Optional[List[GraphNode]] = None):
        super().__init__(message)
        self.cycle_nodes = cycle_nodes or []


class EvaluationMode(Enum):
    STORAGE_ORDER = "storage_order"
    TOPOLOGICAL = "topological"


def _divide(a: float, b: float) -> float:
    if b == 0:
        return 0.0
    return a / b


OPERATORS: Dict[MathOp, Callable[[float, float], float]] = {
    MathOp.MULTIPLY: lambda a, b: a * b,
    MathOp.ADD: lambda a, b: a + b,
    MathOp.SUBTRACT: lambda a, b: a - b,
    MathOp.DIVIDE: _divide,
    MathOp.MIN: min,
    MathOp.MAX: max,
}


def _evaluate_input(graph: NodeGraph, node: GraphNode, inputs: Mapping[str, float]) -> float:
    if node.binding in inputs:
        return float(inputs[node.binding])
    constant = node.params.get("val")
    if constant is None:
        return DEFAULT_CONSTANT
    return float(constant)


def _evaluate_math(graph: NodeGraph, node: GraphNode, inputs: Mapping[str, float]) -> float:
    operator = OPERATORS.get(node.op)
    if operator is None:
        return 0.0
    a = graph.upstream_value(node, 0)
    b = graph.upstream_value(node, 1)
    return float(operator(a, b))


def _evaluate_output(graph: NodeGraph, node: GraphNode, inputs: Mapping[str, float]) -> float:
    return graph.upstream_value(node, 0)


EVALUATORS = {
    NodeKind.INPUT: _evaluate_input,
    NodeKind.MATH: _evaluate_math,
    NodeKind.OUTPUT: _evaluate_output,
}


def topological_order(graph: NodeGraph) -> List[GraphNode]:
    """
    Order nodes so every node follows its upstream nodes.

    Ties keep storage order. Raises InvalidGraph if a cycle exists.
    """
    nodes = graph.nodes
    in_degree: Dict[int, int] = {node.id: 0 for node in nodes}
    dependents: Dict[int, List[int]] = {node.id: [] for node in nodes}

    for node in nodes:
        for in_socket in node.inputs:
            ref = in_socket.connected_to
            if ref is None or ref.node_id not in in_degree:
                continue
            in_degree[node.id] += 1
            dependents[ref.node_id].append(node.id)

    position = {node.id: i for i, node in enumerate(nodes)}
    ready = [node.id for node in nodes if in_degree[node.id] == 0]
    order: List[GraphNode] = []

    while ready:
        ready.sort(key=position.__getitem__)
        node_id = ready.pop(0)
        order.append(graph.get_node(node_id))
        for dependent in dependents[node_id]:
            in_degree[dependent] -= 1
            if in_degree[dependent] == 0:
                ready.append(dependent)

    if len(order) != len(nodes):
        stuck = [node for node in nodes if in_degree[node.id] > 0]
        names = ", ".join(node.name for node in stuck)
        raise InvalidGraph(f"Cycle in node graph: {names}", stuck)

    return order


class Evaluator:
    """
    Computes every node value once per frame.

    evaluate() returns the exported OUTPUT values keyed by binding key.
    """

    def __init__(self, mode: EvaluationMode = EvaluationMode.STORAGE_ORDER):
        self.mode = mode

    def order(self, graph: NodeGraph) -> List[GraphNode]:
        """Nodes in the order the next pass will visit them."""
        if self.mode is EvaluationMode.TOPOLOGICAL:
            return topological_order(graph)
        return graph.nodes

    def evaluate(self, graph: NodeGraph, inputs: Optional[Mapping[str, float]] = None) -> Dict[str, float]:
        """
        Run one evaluation pass.

        Args:
            graph: Graph to update in place (node.value)
            inputs: External values by binding key (e.g. {"Audio Low": 0.4})

        Returns:
            {binding key: value} for every OUTPUT node.
        """
        inputs = inputs or {}
        exports: Dict[str, float] = {}

        for node in self.order(graph):
            evaluate_node = EVALUATORS.get(node.kind)
            if evaluate_node is None:
                node.value = 0.0
                continue
            try:
                node.value = evaluate_node(graph, node, inputs)
            except Exception as e:
                log.error(e, f"Evaluation failed for node {node.name} ({node.id})")
                node.value = 0.0
            if node.kind is NodeKind.OUTPUT:
                exports[node.binding] = node.value

        return exports
