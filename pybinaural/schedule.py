"""Breakpoint schedule and its query functions of time.

Frequency, beat frequency and tone volume are interpolated linearly between
breakpoints and held at the first/last value outside the breakpoint range.
Noise on/off and noise volume are stepped: breakpoint ``i`` applies on
``[time_i, time_{i+1})``.

Breakpoints sharing a time resolve to the later one from that time onward,
so a zero-width interval never takes part in an interpolation.
"""
import logging
import math
from typing import Iterable, List, Sequence, Tuple, Union

import numpy as np

from .errors import ConfigError
from .types import Breakpoint, ChunkInfo, NoiseSetting

logger = logging.getLogger(__name__)

TimeLike = Union[float, np.ndarray]


def stretch_breakpoints(breakpoints: Iterable[Breakpoint], factor: float) -> List[Breakpoint]:
    """Scale every breakpoint time by ``factor``."""
    if not (math.isfinite(factor) and factor > 0):
        raise ConfigError(f"stretch factor must be a positive finite number, got {factor}")
    return [
        Breakpoint(bp.time * factor, bp.frequency, bp.beat_frequency,
                   bp.noise_on, bp.noise_volume, bp.tone_volume)
        for bp in breakpoints
    ]


class Schedule:
    def __init__(self, breakpoints: Sequence[Breakpoint]):
        if not breakpoints:
            raise ConfigError("schedule needs at least one breakpoint")
        self.breakpoints: Tuple[Breakpoint, ...] = tuple(sorted(breakpoints, key=lambda bp: bp.time))
        self._times = np.array([bp.time for bp in self.breakpoints], dtype=np.float64)
        self._freq = np.array([bp.frequency for bp in self.breakpoints], dtype=np.float64)
        self._beat = np.array([bp.beat_frequency for bp in self.breakpoints], dtype=np.float64)
        self._tone_vol = np.array([bp.tone_volume for bp in self.breakpoints], dtype=np.float64)
        self._noise_on = np.array([bp.noise_on for bp in self.breakpoints], dtype=bool)
        self._noise_vol = np.array([bp.noise_volume for bp in self.breakpoints], dtype=np.float64)
        if np.any(np.diff(self._times) == 0):
            logger.debug("schedule has breakpoints sharing a time; later ones win")

    def __len__(self) -> int:
        return len(self.breakpoints)

    def __repr__(self) -> str:
        return f"Schedule({len(self)} breakpoints, {self.total_duration:.2f}s)"

    @property
    def total_duration(self) -> float:
        return float(self._times[-1])

    def total_frames(self, sample_rate: int) -> int:
        return int(round(self.total_duration * sample_rate))

    def _interpolate(self, values: np.ndarray, t: TimeLike) -> TimeLike:
        scalar = np.ndim(t) == 0
        ts = np.atleast_1d(np.asarray(t, dtype=np.float64))
        times = self._times
        out = np.empty(ts.shape, dtype=np.float64)
        before = ts < times[0]
        after = ts >= times[-1]
        out[before] = values[0]
        out[after] = values[-1]
        inside = ~(before | after)
        if np.any(inside):
            ti = ts[inside]
            # hi is the first breakpoint strictly after ti, so times[hi] > times[lo]
            hi = np.searchsorted(times, ti, side="right")
            lo = hi - 1
            frac = (ti - times[lo]) / (times[hi] - times[lo])
            out[inside] = values[lo] + (values[hi] - values[lo]) * frac
        if scalar:
            return float(out[0])
        return out

    def frequency(self, t: TimeLike) -> TimeLike:
        return self._interpolate(self._freq, t)

    def beat_frequency(self, t: TimeLike) -> TimeLike:
        return self._interpolate(self._beat, t)

    def tone_volume(self, t: TimeLike) -> TimeLike:
        return self._interpolate(self._tone_vol, t)

    def right_frequency(self, t: TimeLike) -> TimeLike:
        """Frequency of the right ear: base plus beat."""
        return self.frequency(t) + self.beat_frequency(t)

    def noise(self, t: TimeLike):
        """Return the stepped ``(on, volume)`` noise setting at ``t``.

        Scalar times give a :class:`NoiseSetting`; arrays give a pair of
        arrays ``(on, volume)`` shaped like ``t``.
        """
        ts = np.asarray(t, dtype=np.float64)
        idx = np.searchsorted(self._times, ts, side="right") - 1
        idx = np.clip(idx, 0, len(self._times) - 1)
        if ts.ndim == 0:
            i = int(idx)
            return NoiseSetting(bool(self._noise_on[i]), float(self._noise_vol[i]))
        return self._noise_on[idx], self._noise_vol[idx]

    def status(self, t: float) -> ChunkInfo:
        on, vol = self.noise(t)
        return {
            "type": "status",
            "time": float(t),
            "freq": self.frequency(t),
            "beat": self.beat_frequency(t),
            "tone_volume": self.tone_volume(t),
            "noise_on": on,
            "noise_volume": vol,
        }


def build_schedule(breakpoints: Sequence[Breakpoint]) -> Schedule:
    return Schedule(breakpoints)
