import math
from dataclasses import dataclass, field
from typing import Callable

import numpy as np

from .base import GenBase, HEADROOM

LEFT = 0
RIGHT = 1


@dataclass
class Oscillator(GenBase):
    """Sine tone for one channel with a time-varying frequency and volume.

    Phase is accumulated sample by sample from ``frequency_at`` rather than
    computed as ``2*pi*f*t``, so the waveform stays continuous while the
    frequency moves. Sample ``n`` uses the phase accumulated over samples
    ``0..n-1``; the first sample is therefore ``sin(0)``. The phase is never
    wrapped.
    """
    frequency_at: Callable = None
    volume_at: Callable = None
    channel: int = LEFT
    phase: float = field(default=0.0, init=False)

    def __post_init__(self):
        if self.frequency_at is None or self.volume_at is None:
            raise TypeError("Oscillator needs frequency_at and volume_at")
        if self.channel not in (LEFT, RIGHT):
            raise ValueError(f"channel must be {LEFT} or {RIGHT}, got {self.channel}")

    def read(self, frames: int) -> np.ndarray:
        if frames <= 0:
            return np.zeros((0, 2), dtype=np.float64)
        out = np.zeros((frames, 2), dtype=np.float64)
        t = self._times(frames)
        delta = 2 * math.pi * np.asarray(self.frequency_at(t), dtype=np.float64) / self.sample_rate
        acc = np.cumsum(delta)
        phases = self.phase + np.concatenate(([0.0], acc[:-1]))
        self.phase += acc[-1]
        out[:, self.channel] = np.sin(phases) * self.volume_at(t) * HEADROOM
        return out

    def _info(self):
        return {"type": "tone", "freq": float(self.frequency_at(self.pos / self.sample_rate))}
