"""
Editor settings.

Persists values between sessions with QSettings:
- Windows: registry HKEY_CURRENT_USER\\Software\\Audiograph\\NodeEditor
- Linux: ~/.config/Audiograph/NodeEditor.conf
- macOS: ~/Library/Preferences/com.audiograph.NodeEditor.plist
"""

from __future__ import annotations

from typing import Any

from PyQt6.QtCore import QSettings

from audiograph.nodegraph.config import FRAME_INTERVAL_MS, EditorConfig


class EditorSettings:
    """
    Settings manager.

    Singleton; use EditorSettings.instance().
    """

    _instance: "EditorSettings | None" = None

    KEY_WINDOW_GEOMETRY = "NodeEditor/windowGeometry"
    KEY_FRAME_INTERVAL = "NodeEditor/frameIntervalMs"
    KEY_FIRST_MATCH_ONLY = "NodeEditor/firstMatchOnly"

    def __init__(self, settings: QSettings | None = None):
        self._settings = settings if settings is not None else QSettings("Audiograph", "NodeEditor")

    @classmethod
    def instance(cls) -> "EditorSettings":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def get(self, key: str, default: Any = None) -> Any:
        return self._settings.value(key, default)

    def set(self, key: str, value: Any) -> None:
        self._settings.setValue(key, value)

    def sync(self) -> None:
        """Flush settings to disk."""
        self._settings.sync()

    def get_window_geometry(self) -> bytes | None:
        return self.get(self.KEY_WINDOW_GEOMETRY)

    def set_window_geometry(self, geometry: bytes) -> None:
        self.set(self.KEY_WINDOW_GEOMETRY, geometry)

    def get_frame_interval(self, default: int = FRAME_INTERVAL_MS) -> int:
        """Render timer interval in milliseconds, at least 1; bad stored values give default."""
        value = self.get(self.KEY_FRAME_INTERVAL, default)
        try:
            return max(1, int(value))
        except (TypeError, ValueError):
            return default

    def set_frame_interval(self, interval_ms: int) -> None:
        self.set(self.KEY_FRAME_INTERVAL, int(interval_ms))

    def get_first_match_only(self, default: bool = False) -> bool:
        """Stored flag, or default when the key was never written."""
        if not self._settings.contains(self.KEY_FIRST_MATCH_ONLY):
            return default
        value = self.get(self.KEY_FIRST_MATCH_ONLY)
        # QSettings returns strings from ini backends
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    def editor_config(self, base: EditorConfig | None = None) -> EditorConfig:
        """EditorConfig with the persisted overrides applied."""
        base = base or EditorConfig()
        return base.with_overrides(
            frame_interval_ms=self.get_frame_interval(base.frame_interval_ms),
            first_match_only=self.get_first_match_only(base.first_match_only),
        )
