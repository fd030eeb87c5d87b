"""AudioBandFeed - periodic task publishing band snapshots to the store."""

from __future__ import annotations

from typing import Callable, Optional

from PyQt6 import QtCore

from audiograph import log
from audiograph.audio.bands import compute_bands
from audiograph.store import AppStore

SpectrumSource = Callable[[], Optional[object]]


class AudioBandFeed(QtCore.QObject):
    """
    Polls a spectrum source on a timer and replaces the store snapshot.

    The source returns a magnitude array, or None when no audio is
    playing (the previous snapshot is kept).
    """

    def __init__(
        self,
        store: AppStore,
        source: SpectrumSource,
        interval_ms: int = 16,
        parent: Optional[QtCore.QObject] = None,
    ):
        super().__init__(parent)
        self._store = store
        self._source = source

        self._timer = QtCore.QTimer(self)
        self._timer.timeout.connect(self.poll)
        self._timer.setInterval(interval_ms)

    def start(self) -> None:
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    def is_running(self) -> bool:
        return self._timer.isActive()

    def poll(self) -> None:
        """Read the source once and publish a new snapshot."""
        try:
            spectrum = self._source()
        except Exception as e:
            log.warn(e, "Audio spectrum source failed")
            return
        if spectrum is None:
            return
        self._store.set_audio(compute_bands(spectrum))
