"""GraphRenderer - paints the node graph with QPainter."""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import Qt, QPointF, QRectF
from PyQt6.QtGui import QPainter, QColor, QBrush, QPen, QFont, QPainterPath

from audiograph.nodegraph.config import EditorConfig
from audiograph.nodegraph.geometry import Hit, HitKind, connection_curve, input_anchor, output_anchor
from audiograph.nodegraph.graph import NodeGraph
from audiograph.nodegraph.interaction import InteractionController
from audiograph.nodegraph.node import GraphNode, NodeKind


class GraphRenderer:
    """
    Draws one frame.

    Order: background, grid, connections, drag line, nodes. Connections go
    under nodes so socket circles stay visible above wires.
    """

    CONNECTION_WIDTH = 2.0
    FONT_FAMILY = "monospace"
    FONT_SIZE = 9

    def __init__(self, config: Optional[EditorConfig] = None):
        self.config = config or EditorConfig()

    def draw(
        self,
        painter: QPainter,
        graph: NodeGraph,
        controller: Optional[InteractionController],
        width: int,
        height: int,
    ) -> None:
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.draw_background(painter, width, height)
        self.draw_grid(painter, width, height)
        self.draw_connections(painter, graph)
        if controller is not None:
            self.draw_drag_line(painter, controller)
        hover = controller.hover if controller is not None else None
        for node in graph:
            self.draw_node(painter, node, hover)

    def draw_background(self, painter: QPainter, width: int, height: int) -> None:
        painter.fillRect(QRectF(0, 0, width, height), QColor(self.config.background_color))

    def draw_grid(self, painter: QPainter, width: int, height: int) -> None:
        step = self.config.grid_size
        painter.setPen(QPen(QColor(self.config.grid_color), 1))
        for x in range(0, width, step):
            painter.drawLine(x, 0, x, height)
        for y in range(0, height, step):
            painter.drawLine(0, y, width, y)

    def draw_connections(self, painter: QPainter, graph: NodeGraph) -> None:
        pen = QPen(QColor(self.config.connection_color), self.CONNECTION_WIDTH)
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)

        for connection in graph.connections():
            curve = connection_curve(graph, connection, self.config.curve_offset)
            if curve is None:
                continue
            start, ctrl1, ctrl2, end = (QPointF(*p) for p in curve)
            path = QPainterPath()
            path.moveTo(start)
            path.cubicTo(ctrl1, ctrl2, end)
            painter.drawPath(path)

    def draw_drag_line(self, painter: QPainter, controller: InteractionController) -> None:
        line = controller.drag_line()
        if line is None:
            return
        (x1, y1), (x2, y2) = line
        painter.setPen(QPen(QColor(self.config.drag_line_color), self.CONNECTION_WIDTH))
        painter.drawLine(QPointF(x1, y1), QPointF(x2, y2))

    def draw_node(self, painter: QPainter, node: GraphNode, hover: Optional[Hit] = None) -> None:
        header = self.config.header_height
        painter.setPen(Qt.PenStyle.NoPen)

        # Body and header band
        painter.setBrush(QBrush(QColor(self.config.body_color)))
        painter.drawRect(QRectF(node.x, node.y, node.w, node.h))
        painter.setBrush(QBrush(QColor(self.config.kind_color(node.kind))))
        painter.drawRect(QRectF(node.x, node.y, node.w, header))

        if hover is not None and hover.node is node and not hover.is_socket:
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.setPen(QPen(QColor(self.config.hover_color), 1.5))
            painter.drawRect(QRectF(node.x, node.y, node.w, node.h))

        # Labels
        painter.setPen(QPen(QColor(self.config.text_color)))
        painter.setFont(QFont(self.FONT_FAMILY, self.FONT_SIZE))
        painter.drawText(QPointF(node.x + 5, node.y + 14), node.name)
        if node.kind is NodeKind.INPUT:
            painter.drawText(QPointF(node.x + 5, node.y + 40), f"{node.value:.2f}")

        self._draw_sockets(painter, node, hover)

    def _draw_sockets(self, painter: QPainter, node: GraphNode, hover: Optional[Hit]) -> None:
        radius = self.config.socket_radius
        painter.setPen(Qt.PenStyle.NoPen)

        for i in range(len(node.inputs)):
            painter.setBrush(QBrush(self._socket_color(node, i, True, hover)))
            painter.drawEllipse(QPointF(*input_anchor(node, i)), radius, radius)

        for i in range(len(node.outputs)):
            painter.setBrush(QBrush(self._socket_color(node, i, False, hover)))
            painter.drawEllipse(QPointF(*output_anchor(node, i)), radius, radius)

    def _socket_color(self, node: GraphNode, index: int, is_input: bool, hover: Optional[Hit]) -> QColor:
        if (
            hover is not None
            and hover.is_socket
            and hover.node is node
            and hover.index == index
            and (hover.kind is HitKind.INPUT) == is_input
        ):
            return QColor(self.config.hover_color)
        return QColor(self.config.socket_color)
