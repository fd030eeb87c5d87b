"""NodeGraphCanvas - full-size widget running the evaluate/draw loop."""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QPainter, QMouseEvent, QPaintEvent, QCloseEvent
from PyQt6.QtWidgets import QWidget

from audiograph import log
from audiograph.nodegraph.bridge import GraphBridge
from audiograph.nodegraph.config import EditorConfig
from audiograph.nodegraph.evaluator import Evaluator
from audiograph.nodegraph.graph import NodeGraph, create_default_graph
from audiograph.nodegraph.interaction import InteractionController
from audiograph.nodegraph.renderer import GraphRenderer
from audiograph.store import AppStore


class NodeGraphCanvas(QWidget):
    """
    Canvas that evaluates and repaints the graph every frame.

    The canvas owns the graph. The interaction controller and the renderer
    work on the same instance; everything runs on the Qt event loop, so
    mouse handlers and frame ticks never interleave.
    """

    def __init__(
        self,
        store: AppStore,
        graph: Optional[NodeGraph] = None,
        config: Optional[EditorConfig] = None,
        evaluator: Optional[Evaluator] = None,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)

        self.config = config or EditorConfig()
        self.graph = graph if graph is not None else create_default_graph()
        self.controller = InteractionController(
            self.graph,
            first_match_only=self.config.first_match_only,
            pick_radius=self.config.pick_radius,
            connect_radius=self.config.connect_radius,
        )
        self.evaluator = evaluator or Evaluator()
        self.bridge = GraphBridge(store)
        self.renderer = GraphRenderer(self.config)

        self._torn_down = False
        self.frame_count = 0

        self.setMouseTracking(True)
        self.setCursor(Qt.CursorShape.CrossCursor)

        self._timer = QTimer(self)
        self._timer.setInterval(self.config.frame_interval_ms)
        self._timer.timeout.connect(self.tick)

    # --- Frame loop ---

    def start(self) -> None:
        """Start the frame loop."""
        if self._torn_down:
            return
        self._timer.start()

    def is_running(self) -> bool:
        return self._timer.isActive()

    def tick(self) -> None:
        """Evaluate once and schedule a repaint. Errors never stop the loop."""
        try:
            inputs = self.bridge.pull_inputs()
            exports = self.evaluator.evaluate(self.graph, inputs)
            self.bridge.push_outputs(exports)
        except Exception as e:
            log.error(e, "Node graph frame failed")
        self.frame_count += 1
        self.update()

    def teardown(self) -> None:
        """Stop the frame loop and ignore further pointer input. Safe to call twice."""
        if self._torn_down:
            return
        self._torn_down = True
        self._timer.stop()
        self.controller.reset()
        self.setMouseTracking(False)
        log.debug("Node graph canvas torn down")

    @property
    def torn_down(self) -> bool:
        return self._torn_down

    # --- Qt events ---

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        try:
            self.renderer.draw(painter, self.graph, self.controller, self.width(), self.height())
        except Exception as e:
            log.error(e, "Node graph paint failed")
        finally:
            painter.end()

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if self._torn_down or event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        pos = event.position()
        self.controller.pointer_down(pos.x(), pos.y())
        self.update()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        if self._torn_down:
            super().mouseMoveEvent(event)
            return
        pos = event.position()
        self.controller.pointer_move(pos.x(), pos.y())
        self.update()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if self._torn_down or event.button() != Qt.MouseButton.LeftButton:
            super().mouseReleaseEvent(event)
            return
        pos = event.position()
        created = self.controller.pointer_up(pos.x(), pos.y())
        if created:
            log.info(f"Created {len(created)} connection(s)")
        self.update()

    def closeEvent(self, event: QCloseEvent) -> None:
        self.teardown()
        super().closeEvent(event)
