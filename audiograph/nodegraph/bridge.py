"""GraphBridge - moves values between the store and the node graph."""

from __future__ import annotations

from typing import Dict, List, Mapping

from audiograph.store import AppStore, AudioBands

# Binding keys of INPUT nodes fed by the audio analyzer
AUDIO_BINDINGS = {
    "Audio Low": "low",
    "Audio Mid": "mid",
    "Audio High": "high",
}


def audio_inputs(bands: AudioBands) -> Dict[str, float]:
    """Map an audio snapshot to INPUT binding keys."""
    return {key: getattr(bands, field) for key, field in AUDIO_BINDINGS.items()}


class GraphBridge:
    """
    One-way adapters around the evaluator.

    pull_inputs() reads the current audio snapshot before a pass;
    push_outputs() writes OUTPUT values into the parameter registry after it.
    """

    def __init__(self, store: AppStore):
        self.store = store

    def pull_inputs(self) -> Dict[str, float]:
        # Single read of the snapshot reference; the feed replaces it whole.
        return audio_inputs(self.store.audio)

    def push_outputs(self, exports: Mapping[str, float]) -> List[str]:
        """
        Write exported values for keys the registry already knows.

        Writes happen every frame whether or not the value changed.
        Returns the keys written.
        """
        written = []
        for key, value in exports.items():
            if not self.store.has_param(key):
                continue
            self.store.set_param(key, value)
            written.append(key)
        return written
