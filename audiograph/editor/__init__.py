"""Editor-level services (settings)."""

from audiograph.editor.settings import EditorSettings

__all__ = ["EditorSettings"]
