"""Audio band analysis feeding the node graph inputs."""

from audiograph.audio.bands import compute_bands

__all__ = ["compute_bands"]
