"""AppStore - shared parameter registry and audio snapshot.

The node editor writes OUTPUT values into the parameter registry; the
renderer reads it. The audio analyzer replaces the band snapshot as a
whole, so a reader always sees a consistent {low, mid, high} triple.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from audiograph import log


@dataclass(frozen=True)
class AudioBands:
    """Unit-range energy of the low, mid and high frequency bands."""
    low: float = 0.0
    mid: float = 0.0
    high: float = 0.0


# Shader uniform defaults consumed by the visualizer.
DEFAULT_PARAMS: Dict[str, float] = {
    # Geometry
    "uDepthStrength": 0.5,
    "uNoiseSpeed": 0.2,
    "uTwistStrength": 0.0,
    "uRippleStrength": 0.0,
    "uRippleFreq": 10.0,
    "uFoldStrength": 0.0,
    "uBulgeStrength": 0.0,
    "uSpikeStrength": 0.0,
    "uExplode": 0.0,
    "uMelt": 0.0,
    "uLFO": 0.0,
    "uJitter": 0.0,
    "uTiles": 1.0,
    "uMirrorX": 0,
    "uMirrorY": 0,
    "uPointSize": 2.0,
    "uAudioGain": 1.0,
    "uTimeFreeze": 0,
    "uBandGeo": 1,
    "uBandAction": 2,
    "uBandDetail": 3,
    # Post-processing
    "uColorShift": 0.0,
    "uRGBShift": 0.0,
    "uGlitchStrength": 0.0,
    "uScanlineStrength": 0.0,
    "uVignetteStrength": 0.5,
    "uBrightness": 0.0,
    "uContrast": 1.0,
    "uSaturation": 1.0,
    "uHue": 0.0,
    "uInvert": 0,
    "uPixelate": 0.0,
    "uBandColor": 1,
    # Glitch
    "uDatamosh": 0.0,
    "uWaveDistort": 0.0,
    "uBarrelDistort": 0.0,
    "uKaleidoscope": 0,
    "uMirrorGlitch": 0.0,
    "uColorBleed": 0.0,
    "uNoiseOverlay": 0.0,
    "uCRT": 0.0,
    "uVHS": 0.0,
    # Bloom
    "uBloomIntensity": 0.5,
    "uBloomThreshold": 0.2,
    "uChromaticAberration": 0.0,
    # Depth of field
    "uDOF": 0.0,
    "uFocusDistance": 0.5,
    "uFilmGrain": 0.0,
    "uGodRays": 0.0,
}

ParamListener = Callable[[str, float], None]


class AppStore:
    """
    Parameter registry plus the latest audio band snapshot.

    Only keys that already exist can be driven by graph outputs; the
    registry is created from DEFAULT_PARAMS (or an explicit mapping).
    """

    def __init__(self, params: Optional[Dict[str, float]] = None):
        self._params: Dict[str, float] = dict(DEFAULT_PARAMS if params is None else params)
        self._audio = AudioBands()
        self._listeners: List[ParamListener] = []

    # --- Parameters ---

    @property
    def params(self) -> Dict[str, float]:
        """Copy of the current parameter mapping."""
        return dict(self._params)

    def has_param(self, key: str) -> bool:
        return key in self._params

    def get_param(self, key: str, default: Optional[float] = None) -> Optional[float]:
        return self._params.get(key, default)

    def set_param(self, key: str, value: float) -> None:
        """Write value through and notify subscribers."""
        self._params[key] = value
        for listener in self._listeners[:]:
            try:
                listener(key, value)
            except Exception as e:
                log.error(e, f"Parameter listener failed for {key}")

    def subscribe(self, listener: ParamListener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- Audio ---

    @property
    def audio(self) -> AudioBands:
        """Latest audio snapshot."""
        return self._audio

    def set_audio(self, bands: AudioBands) -> None:
        """Replace the audio snapshot wholesale."""
        self._audio = bands
