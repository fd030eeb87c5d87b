"""GraphNode - typed unit of the node graph holding a scalar value."""

from __future__ import annotations

import itertools
from enum import Enum
from typing import Any, Dict, List, Optional

from audiograph.nodegraph.socket import InputSocket, OutputSocket


class NodeKind(Enum):
    INPUT = "INPUT"
    MATH = "MATH"
    OUTPUT = "OUTPUT"


class MathOp(Enum):
    """Operator applied by a MATH node to its two inputs."""
    MULTIPLY = "Multiply"
    ADD = "Add"
    SUBTRACT = "Subtract"
    DIVIDE = "Divide"
    MIN = "Min"
    MAX = "Max"

    @classmethod
    def from_tag(cls, tag: str) -> Optional["MathOp"]:
        """Parse an operator tag such as "Multiply". Unknown tags give None."""
        for op in cls:
            if op.value == tag:
                return op
        return None


# Socket labels per node kind
NODE_SOCKETS = {
    NodeKind.INPUT: ([], ["Val"]),
    NodeKind.MATH: (["A", "B"], ["Out"]),
    NodeKind.OUTPUT: (["Val"], []),
}

_id_counter = itertools.count(1)


def next_node_id() -> int:
    """Allocate a process-unique node id. Ids are never reused."""
    return next(_id_counter)


class GraphNode:
    """
    A node on the editor canvas.

    Each node has:
    - kind (INPUT, MATH, OUTPUT) selecting how it is evaluated
    - display name shown in the header
    - binding key tying INPUT/OUTPUT nodes to external state
    - input sockets (left edge) and output sockets (right edge)
    - the value computed by the last evaluation
    """

    WIDTH = 120
    HEIGHT = 80
    SOCKET_TOP = 30
    SOCKET_SPACING = 20

    def __init__(
        self,
        kind: NodeKind,
        name: str,
        x: float = 0.0,
        y: float = 0.0,
        binding: Optional[str] = None,
        op: Optional[MathOp] = None,
        params: Optional[Dict[str, Any]] = None,
        node_id: Optional[int] = None,
    ):
        """
        Args:
            kind: Node kind
            name: Display name
            x, y: Canvas position of the top-left corner
            binding: External binding key; defaults to the name
            op: Operator for MATH nodes; defaults to the tag parsed from the name
            params: Free-form parameters (e.g. {"val": 2.0})
            node_id: Explicit id; allocated from the process counter if omitted
        """
        self.id = next_node_id() if node_id is None else node_id
        self.kind = kind
        self.name = name
        self.binding = name if binding is None else binding
        if kind is NodeKind.MATH and op is None:
            op = MathOp.from_tag(name)
        self.op = op
        self.x = float(x)
        self.y = float(y)
        self.w = self.WIDTH
        self.h = self.HEIGHT
        self.value = 0.0
        self.params: Dict[str, Any] = dict(params or {})

        input_labels, output_labels = NODE_SOCKETS[kind]
        self.inputs: List[InputSocket] = [
            InputSocket(label, (0.0, float(self.SOCKET_TOP + i * self.SOCKET_SPACING)))
            for i, label in enumerate(input_labels)
        ]
        self.outputs: List[OutputSocket] = [
            OutputSocket(label, (float(self.WIDTH), float(self.SOCKET_TOP + i * self.SOCKET_SPACING)))
            for i, label in enumerate(output_labels)
        ]

    def rename(self, name: str) -> None:
        """Change the display name. The binding key is left untouched."""
        self.name = name

    def set_pos(self, x: float, y: float) -> None:
        self.x = float(x)
        self.y = float(y)

    def __repr__(self) -> str:
        return f"GraphNode(id={self.id}, kind={self.kind.name}, name={self.name!r})"
