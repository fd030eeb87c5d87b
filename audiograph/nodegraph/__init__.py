"""Node graph editor and per-frame evaluator."""

from audiograph.nodegraph.node import GraphNode, NodeKind, MathOp
from audiograph.nodegraph.socket import InputSocket, OutputSocket, SocketRef, Connection
from audiograph.nodegraph.graph import NodeGraph, NodeGraphError, UnknownNodeError, create_default_graph
from audiograph.nodegraph.evaluator import Evaluator, EvaluationMode, InvalidGraph
from audiograph.nodegraph.interaction import InteractionController, InteractionState
from audiograph.nodegraph.bridge import GraphBridge

__all__ = [
    "GraphNode",
    "NodeKind",
    "MathOp",
    "InputSocket",
    "OutputSocket",
    "SocketRef",
    "Connection",
    "NodeGraph",
    "NodeGraphError",
    "UnknownNodeError",
    "create_default_graph",
    "Evaluator",
    "EvaluationMode",
    "InvalidGraph",
    "InteractionController",
    "InteractionState",
    "GraphBridge",
]
