"""
Band reduction of a magnitude spectrum.

The spectrum holds byte magnitudes (0..255) per frequency bin, as
produced by a 512-point FFT analyser (256 bins). Bins are split into:

    low   [0, n*0.1)
    mid   [n*0.1, n*0.5)
    high  [n*0.5, n)

Each band is the mean magnitude divided by 255.
"""

from __future__ import annotations

import numpy as np

from audiograph.store import AudioBands

LOW_SPLIT = 0.1
MID_SPLIT = 0.5


def _band_mean(values: np.ndarray) -> float:
    if values.size == 0:
        return 0.0
    return float(values.mean() / 255.0)


def compute_bands(spectrum) -> AudioBands:
    """Reduce a spectrum (any 1D array-like) to an AudioBands snapshot."""
    data = np.asarray(spectrum, dtype=np.float64).ravel()
    n = data.size
    low_bound = int(np.floor(n * LOW_SPLIT))
    mid_bound = int(np.floor(n * MID_SPLIT))

    return AudioBands(
        low=_band_mean(data[:low_bound]),
        mid=_band_mean(data[low_bound:mid_bound]),
        high=_band_mean(data[mid_bound:]),
    )
