"""
Tests for the editor window, settings and the audio feed.
"""

import numpy as np
import pytest

pytest.importorskip("PyQt6")

from PyQt6.QtCore import QSettings

from audiograph.audio.feed import AudioBandFeed
from audiograph.editor.settings import EditorSettings
from audiograph.nodegraph.config import FRAME_INTERVAL_MS, EditorConfig
from audiograph.nodegraph.editor import NodeGraphEditor
from audiograph.store import AppStore, AudioBands


@pytest.fixture
def settings(qapp, tmp_path):
    return EditorSettings(QSettings(str(tmp_path / "editor.ini"), QSettings.Format.IniFormat))


def test_settings_frame_interval(settings):
    assert settings.get_frame_interval() == FRAME_INTERVAL_MS
    settings.set_frame_interval(16)
    assert settings.get_frame_interval() == 16

    settings.set(EditorSettings.KEY_FRAME_INTERVAL, "not a number")
    assert settings.get_frame_interval(default=5) == 5


def test_settings_editor_config(settings):
    settings.set_frame_interval(8)
    settings.set(EditorSettings.KEY_FIRST_MATCH_ONLY, "true")

    config = settings.editor_config(EditorConfig())

    assert config.frame_interval_ms == 8
    assert config.first_match_only is True
    assert config.pick_radius < config.connect_radius


def test_settings_zero_interval_is_raised_to_one(settings):
    settings.set_frame_interval(0)
    assert settings.get_frame_interval() == 1


def test_stored_first_match_flag_overrides_base(settings):
    assert settings.editor_config(EditorConfig(first_match_only=True)).first_match_only is True

    settings.set(EditorSettings.KEY_FIRST_MATCH_ONLY, "false")
    config = settings.editor_config(EditorConfig(first_match_only=True))
    assert config.first_match_only is False


def test_editor_runs_and_closes(qapp, settings):
    store = AppStore()
    editor = NodeGraphEditor(store, settings=settings)
    editor.show()
    canvas = editor.canvas
    assert canvas.is_running()
    assert canvas.controller.first_match_only is False

    canvas.tick()
    editor.close()

    assert canvas.torn_down
    assert not canvas.is_running()
    assert settings.get_window_geometry() is not None


def test_feed_publishes_snapshots(qapp):
    store = AppStore()
    spectra = [np.full(256, 255.0), None]
    feed = AudioBandFeed(store, lambda: spectra.pop(0))

    feed.poll()
    assert store.audio == AudioBands(1.0, 1.0, 1.0)

    feed.poll()
    assert store.audio == AudioBands(1.0, 1.0, 1.0)


def test_feed_survives_source_errors(qapp):
    store = AppStore()

    def broken():
        raise IOError("device lost")

    feed = AudioBandFeed(store, broken)
    feed.poll()
    assert store.audio == AudioBands()


def test_feed_start_stop(qapp):
    feed = AudioBandFeed(AppStore(), lambda: None, interval_ms=10)
    feed.start()
    assert feed.is_running()
    feed.stop()
    feed.stop()
    assert not feed.is_running()
