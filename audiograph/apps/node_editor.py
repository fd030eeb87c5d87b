"""Standalone node editor: python -m audiograph.apps.node_editor"""

import logging
import sys

import numpy as np
from PyQt6.QtWidgets import QApplication

from audiograph import AppStore, log
from audiograph.audio.feed import AudioBandFeed
from audiograph.editor.settings import EditorSettings
from audiograph.nodegraph.editor import NodeGraphEditor


class _DemoSpectrum:
    """Synthetic spectrum with a slow pulse in the low bins."""

    def __init__(self, bins: int = 256):
        self._bins = bins
        self._phase = 0.0

    def __call__(self):
        self._phase += 0.05
        falloff = np.linspace(1.0, 0.2, self._bins)
        pulse = 0.5 + 0.5 * np.sin(self._phase)
        return np.clip(255.0 * falloff * pulse, 0, 255)


def main(argv=None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    app = QApplication(sys.argv if argv is None else argv)

    store = AppStore()
    feed = AudioBandFeed(store, _DemoSpectrum())
    feed.start()

    editor = NodeGraphEditor(store, settings=EditorSettings.instance())
    editor.show()
    log.info("Node editor started")

    code = app.exec()
    feed.stop()
    return code


if __name__ == "__main__":
    sys.exit(main())
