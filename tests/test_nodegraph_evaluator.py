"""
Tests for per-frame evaluation.
"""

import pytest

from audiograph.nodegraph.evaluator import (
    DEFAULT_CONSTANT,
    EvaluationMode,
    Evaluator,
    InvalidGraph,
    topological_order,
)
from audiograph.nodegraph.graph import NodeGraph, create_default_graph
from audiograph.nodegraph.node import NodeKind, MathOp
from audiograph.nodegraph.socket import SocketRef


def chain(order):
    """A (INPUT val=2) -> B (Multiply, both inputs from A) -> C (OUTPUT), stored in `order`."""
    graph = NodeGraph()
    a = graph.create_node(NodeKind.INPUT, "A", params={"val": 2.0})
    b = graph.create_node(NodeKind.MATH, "Multiply")
    c = graph.create_node(NodeKind.OUTPUT, "uDepthStrength")
    graph.connect(a, 0, b, 0)
    graph.connect(a, 0, b, 1)
    graph.connect(b, 0, c, 0)
    nodes = {"A": a, "B": b, "C": c}
    graph.reorder([nodes[name].id for name in order])
    return graph, a, b, c


def test_default_scenario():
    graph = create_default_graph()
    exports = Evaluator().evaluate(graph, {"Audio Low": 0.4})

    assert graph.find_by_name("Multiply").value == pytest.approx(0.8)
    assert graph.find_by_name("uDepthStrength").value == pytest.approx(0.8)
    assert exports == {"uDepthStrength": pytest.approx(0.8)}


def test_input_constant_and_default():
    graph = NodeGraph()
    with_val = graph.create_node(NodeKind.INPUT, "Value", params={"val": 2.0})
    zero_val = graph.create_node(NodeKind.INPUT, "Zero", params={"val": 0.0})
    unset = graph.create_node(NodeKind.INPUT, "Value")
    Evaluator().evaluate(graph)

    assert with_val.value == 2.0
    assert zero_val.value == 0.0
    assert unset.value == DEFAULT_CONSTANT


def test_input_binding_uses_binding_key_not_name():
    graph = NodeGraph()
    node = graph.create_node(NodeKind.INPUT, "Audio Low")
    node.rename("Bass")
    Evaluator().evaluate(graph, {"Audio Low": 0.7, "Bass": 0.1})
    assert node.value == 0.7


@pytest.mark.parametrize("op, expected", [
    (MathOp.MULTIPLY, 6.0),
    (MathOp.ADD, 5.0),
    (MathOp.SUBTRACT, -1.0),
    (MathOp.DIVIDE, 2.0 / 3.0),
    (MathOp.MIN, 2.0),
    (MathOp.MAX, 3.0),
])
def test_operators(op, expected):
    graph = NodeGraph()
    a = graph.create_node(NodeKind.INPUT, "a", params={"val": 2.0})
    b = graph.create_node(NodeKind.INPUT, "b", params={"val": 3.0})
    m = graph.create_node(NodeKind.MATH, "op", op=op)
    graph.connect(a, 0, m, 0)
    graph.connect(b, 0, m, 1)
    Evaluator().evaluate(graph)
    assert m.value == pytest.approx(expected)


def test_divide_by_zero_is_zero():
    graph = NodeGraph()
    a = graph.create_node(NodeKind.INPUT, "a", params={"val": 2.0})
    m = graph.create_node(NodeKind.MATH, "Divide")
    graph.connect(a, 0, m, 0)
    Evaluator().evaluate(graph)
    assert m.value == 0.0


def test_unknown_operator_and_unconnected_inputs():
    graph = NodeGraph()
    unknown = graph.create_node(NodeKind.MATH, "Mystery")
    add = graph.create_node(NodeKind.MATH, "Add")
    out = graph.create_node(NodeKind.OUTPUT, "uHue")
    unknown.value = 5.0
    exports = Evaluator().evaluate(graph)

    assert unknown.value == 0.0
    assert add.value == 0.0
    assert exports == {"uHue": 0.0}


def test_dangling_reference_reads_zero():
    graph = NodeGraph()
    out = graph.create_node(NodeKind.OUTPUT, "uHue")
    out.inputs[0].connected_to = SocketRef(999999, 0)
    assert Evaluator().evaluate(graph) == {"uHue": 0.0}


def test_in_order_chain_has_no_lag():
    graph, a, b, c = chain(["A", "B", "C"])
    evaluator = Evaluator()
    evaluator.evaluate(graph)
    assert c.value == 4.0

    a.params["val"] = 3.0
    exports = evaluator.evaluate(graph)
    assert exports["uDepthStrength"] == 9.0


def test_backward_reference_lags_one_tick():
    # B is stored before A: B reads A's value from the previous pass
    graph, a, b, c = chain(["B", "A", "C"])
    evaluator = Evaluator()

    first = evaluator.evaluate(graph)
    assert first["uDepthStrength"] == 0.0
    second = evaluator.evaluate(graph)
    assert second["uDepthStrength"] == 4.0

    a.params["val"] = 3.0
    changed = evaluator.evaluate(graph)
    assert changed["uDepthStrength"] == 4.0
    settled = evaluator.evaluate(graph)
    assert settled["uDepthStrength"] == 9.0


def test_steady_state_is_deterministic():
    graph, a, b, c = chain(["C", "B", "A"])
    evaluator = Evaluator()
    results = [evaluator.evaluate(graph) for _ in range(4)]
    assert results[2] == results[3]
    assert results[3]["uDepthStrength"] == 4.0


def test_cycle_terminates_and_lags():
    graph = NodeGraph()
    seed = graph.create_node(NodeKind.INPUT, "seed", params={"val": 1.0})
    x = graph.create_node(NodeKind.MATH, "Add")
    y = graph.create_node(NodeKind.MATH, "Add")
    graph.connect(seed, 0, x, 0)
    graph.connect(y, 0, x, 1)
    graph.connect(x, 0, y, 0)

    evaluator = Evaluator()
    values = []
    for _ in range(3):
        evaluator.evaluate(graph)
        values.append((x.value, y.value))
    assert values == [(1.0, 1.0), (2.0, 2.0), (3.0, 3.0)]


def test_topological_mode_removes_lag():
    graph, a, b, c = chain(["C", "B", "A"])
    evaluator = Evaluator(EvaluationMode.TOPOLOGICAL)
    assert [n.name for n in evaluator.order(graph)] == ["A", "B", "uDepthStrength"]
    assert evaluator.evaluate(graph)["uDepthStrength"] == 4.0


def test_topological_mode_rejects_cycles():
    graph = NodeGraph()
    x = graph.create_node(NodeKind.MATH, "Add")
    y = graph.create_node(NodeKind.MATH, "Add")
    graph.connect(x, 0, y, 0)
    graph.connect(y, 0, x, 0)

    with pytest.raises(InvalidGraph) as info:
        topological_order(graph)
    assert set(info.value.cycle_nodes) == {x, y}


def test_failing_node_degrades_to_zero(monkeypatch):
    from audiograph.nodegraph import evaluator as evaluator_module

    def explode(graph, node, inputs):
        raise RuntimeError("boom")

    monkeypatch.setitem(evaluator_module.EVALUATORS, NodeKind.MATH, explode)
    graph = create_default_graph()
    graph.find_by_name("Multiply").value = 7.0

    exports = Evaluator().evaluate(graph, {"Audio Low": 0.4})

    assert graph.find_by_name("Multiply").value == 0.0
    assert exports == {"uDepthStrength": 0.0}
