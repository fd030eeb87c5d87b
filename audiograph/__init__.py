"""
Audiograph - audio-reactive parameter graphs.

Modules:
- nodegraph - node graph model, evaluator and Qt editor
- audio - spectrum band analysis
- store - shared parameter registry and audio snapshot
"""

from .store import AppStore, AudioBands

__version__ = '0.1.0'

__all__ = [
    'AppStore',
    'AudioBands',
]
