"""
Tests for the Qt canvas: frame loop, painting and pointer forwarding.
"""

import time

import pytest

pytest.importorskip("PyQt6")

from PyQt6.QtCore import QEvent, QPointF, Qt
from PyQt6.QtGui import QColor, QImage, QMouseEvent, QPainter

from audiograph.nodegraph.canvas import NodeGraphCanvas
from audiograph.nodegraph.config import FRAME_INTERVAL_MS, EditorConfig
from audiograph.nodegraph.geometry import output_anchor
from audiograph.nodegraph.graph import create_default_graph
from audiograph.nodegraph.interaction import InteractionController, InteractionState
from audiograph.nodegraph.node import NodeKind
from audiograph.nodegraph.renderer import GraphRenderer
from audiograph.store import AppStore, AudioBands


def mouse_event(kind, x, y, button=Qt.MouseButton.LeftButton):
    buttons = Qt.MouseButton.NoButton if kind == QEvent.Type.MouseButtonRelease else button
    return QMouseEvent(
        kind,
        QPointF(x, y),
        QPointF(x, y),
        button,
        buttons,
        Qt.KeyboardModifier.NoModifier,
    )


@pytest.fixture
def store():
    store = AppStore()
    store.set_audio(AudioBands(low=0.4))
    return store


@pytest.fixture
def canvas(qapp, store):
    widget = NodeGraphCanvas(store)
    widget.resize(800, 600)
    yield widget
    widget.teardown()


def render(graph, controller=None, config=None, size=(800, 600)):
    image = QImage(size[0], size[1], QImage.Format.Format_ARGB32)
    painter = QPainter(image)
    try:
        GraphRenderer(config).draw(painter, graph, controller, size[0], size[1])
    finally:
        painter.end()
    return image


def test_tick_evaluates_and_exports(canvas, store):
    canvas.tick()
    assert canvas.frame_count == 1
    assert canvas.graph.find_by_name("Multiply").value == pytest.approx(0.8)
    assert store.get_param("uDepthStrength") == pytest.approx(0.8)

    store.set_audio(AudioBands(low=0.1))
    canvas.tick()
    assert store.get_param("uDepthStrength") == pytest.approx(0.2)


def test_tick_survives_failures(canvas, store, monkeypatch):
    def broken(graph, inputs=None):
        raise RuntimeError("evaluator down")

    monkeypatch.setattr(canvas.evaluator, "evaluate", broken)
    canvas.tick()
    canvas.tick()
    assert canvas.frame_count == 2


def test_start_and_idempotent_teardown(canvas):
    canvas.start()
    assert canvas.is_running()

    canvas.teardown()
    canvas.teardown()
    assert canvas.torn_down
    assert not canvas.is_running()

    canvas.start()
    assert not canvas.is_running()


def test_frame_loop_is_paced_to_display_rate(qapp, canvas):
    assert canvas.config.frame_interval_ms == FRAME_INTERVAL_MS
    canvas.show()
    canvas.start()

    deadline = time.monotonic() + 0.5
    while time.monotonic() < deadline:
        qapp.processEvents()

    # 0.5 s at 16 ms per frame is about 31 ticks
    assert canvas.frame_count <= 40


def test_mouse_drag_moves_node(canvas):
    multiply = canvas.graph.find_by_name("Multiply")

    canvas.mousePressEvent(mouse_event(QEvent.Type.MouseButtonPress, 360, 200))
    assert canvas.controller.state is InteractionState.DRAGGING_NODE
    canvas.mouseMoveEvent(mouse_event(QEvent.Type.MouseMove, 410, 180))
    canvas.mouseReleaseEvent(mouse_event(QEvent.Type.MouseButtonRelease, 410, 180))

    assert (multiply.x, multiply.y) == (350.0, 130.0)
    assert canvas.controller.state is InteractionState.IDLE


def test_right_button_is_ignored(canvas):
    canvas.mousePressEvent(mouse_event(QEvent.Type.MouseButtonPress, 360, 200, Qt.MouseButton.RightButton))
    assert canvas.controller.state is InteractionState.IDLE


def test_pointer_ignored_after_teardown(canvas):
    multiply = canvas.graph.find_by_name("Multiply")
    canvas.teardown()
    canvas.mousePressEvent(mouse_event(QEvent.Type.MouseButtonPress, 360, 200))
    canvas.mouseMoveEvent(mouse_event(QEvent.Type.MouseMove, 410, 180))
    assert (multiply.x, multiply.y) == (300.0, 150.0)


def test_grab_paints_without_error(canvas):
    canvas.tick()
    pixmap = canvas.grab()
    assert not pixmap.isNull()


def test_renderer_draws_background_and_headers(qapp):
    config = EditorConfig()
    graph = create_default_graph()
    image = render(graph, config=config)

    assert image.pixelColor(20, 20) == QColor(config.background_color)
    # Right part of the Multiply header band, clear of the label text
    assert image.pixelColor(410, 160) == QColor(config.kind_color(NodeKind.MATH))
    # Body below the header
    assert image.pixelColor(410, 220) == QColor(config.body_color)


def test_renderer_draws_drag_line(qapp):
    config = EditorConfig()
    graph = create_default_graph()
    controller = InteractionController(graph)
    x, y = output_anchor(graph.find_by_name("Multiply"), 0)
    controller.pointer_down(x, y)
    controller.pointer_move(x + 200, y)

    image = render(graph, controller, config)

    assert image.pixelColor(int(x + 150), int(y)) == QColor(config.drag_line_color)
