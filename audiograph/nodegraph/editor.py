"""NodeGraphEditor - main window hosting the node canvas."""

from __future__ import annotations

from typing import Optional

from PyQt6.QtWidgets import (
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QToolBar,
    QLabel,
    QStatusBar,
)
from PyQt6.QtGui import QAction, QKeySequence, QCloseEvent

from audiograph.editor.settings import EditorSettings
from audiograph.nodegraph.canvas import NodeGraphCanvas
from audiograph.nodegraph.config import EditorConfig
from audiograph.nodegraph.graph import NodeGraph
from audiograph.store import AppStore


class NodeGraphEditor(QMainWindow):
    """
    Window with the node canvas, a toolbar and a status bar.

    Nodes are dragged by their body; a connection is drawn by dragging
    from one socket and releasing over a socket of the opposite role.
    """

    def __init__(
        self,
        store: AppStore,
        graph: Optional[NodeGraph] = None,
        settings: Optional[EditorSettings] = None,
        config: Optional[EditorConfig] = None,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)

        self.setWindowTitle("Node Editor")
        self.setMinimumSize(800, 600)
        self.resize(1200, 800)

        self._store = store
        self._settings = settings
        if config is None:
            config = settings.editor_config() if settings is not None else EditorConfig()

        self._setup_ui(store, graph, config)
        self._setup_toolbar()
        self._restore_geometry()

        self._unsubscribe = store.subscribe(self._on_param_changed)
        self._canvas.start()

    @property
    def canvas(self) -> NodeGraphCanvas:
        return self._canvas

    def _setup_ui(self, store: AppStore, graph: Optional[NodeGraph], config: EditorConfig) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)

        self._canvas = NodeGraphCanvas(store, graph=graph, config=config)
        layout.addWidget(self._canvas)

        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)
        self._status_bar.showMessage("Drag nodes by their body. Drag between sockets to connect.")

    def _setup_toolbar(self) -> None:
        toolbar = QToolBar("Main")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        close_action = QAction("Close Editor", self)
        close_action.setShortcut(QKeySequence("Esc"))
        close_action.triggered.connect(self.close)
        toolbar.addAction(close_action)

        toolbar.addSeparator()

        self._info_label = QLabel("")
        toolbar.addWidget(self._info_label)

    def _restore_geometry(self) -> None:
        if self._settings is None:
            return
        geometry = self._settings.get_window_geometry()
        if geometry:
            self.restoreGeometry(geometry)

    def _on_param_changed(self, key: str, value: float) -> None:
        self._info_label.setText(f"{key} = {value:.3f}")

    def closeEvent(self, event: QCloseEvent) -> None:
        self._canvas.teardown()
        self._unsubscribe()
        if self._settings is not None:
            self._settings.set_window_geometry(self.saveGeometry())
            self._settings.sync()
        super().closeEvent(event)
