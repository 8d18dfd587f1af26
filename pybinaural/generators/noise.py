from dataclasses import dataclass, field
from typing import Callable, Optional, Union

import numpy as np

from .base import GenBase, HEADROOM

ROWS = 5
MAX_KEY = (1 << ROWS) - 1
PINK_SCALE = 0.1

RandomLike = Union[None, int, np.random.Generator]


@dataclass
class PinkNoise(GenBase):
    """Mono pink noise after Voss-McCartney.

    Five held white values are summed; a 5-bit counter is stepped once per
    sample and every row whose bit flips gets a fresh uniform value in
    ``[-1, 1)``. Row ``b`` is therefore redrawn every ``2**b`` samples,
    which gives the roughly 1/f falloff.

    Each block consumes a full ``(frames, 5)`` uniform draw from ``rng``, so
    the output for a given seed does not depend on how reads are sized.
    """
    rng: RandomLike = None
    key: int = field(default=0, init=False)
    white: np.ndarray = field(default=None, init=False)

    def __post_init__(self):
        if not isinstance(self.rng, np.random.Generator):
            self.rng = np.random.default_rng(self.rng)
        self.white = np.zeros(ROWS, dtype=np.float64)

    def read(self, frames: int) -> np.ndarray:
        if frames <= 0:
            return np.zeros(0, dtype=np.float64)
        self.pos += frames
        steps = np.arange(frames + 1)
        keys = (self.key + steps) & MAX_KEY
        diff = keys[:-1] ^ keys[1:]
        self.key = int(keys[-1])

        draws = self.rng.uniform(-1.0, 1.0, size=(frames, ROWS))
        rows = np.empty((frames, ROWS), dtype=np.float64)
        idx = np.arange(frames)
        for b in range(ROWS):
            flipped = (diff >> b) & 1 == 1
            # index of the latest redraw at or before each sample, -1 if none yet
            last = np.maximum.accumulate(np.where(flipped, idx, -1))
            held = draws[np.maximum(last, 0), b]
            rows[:, b] = np.where(last >= 0, held, self.white[b])
            self.white[b] = rows[-1, b]
        return rows.sum(axis=1) * PINK_SCALE

    def next_sample(self) -> float:
        return float(self.read(1)[0])


@dataclass
class NoiseGate(GenBase):
    """Gates a mono noise source with a stepped ``(on, volume)`` setting.

    ``noise_at`` takes an array of times and returns ``(on, volume)`` arrays,
    as :meth:`Schedule.noise` does.
    """
    source: Optional[PinkNoise] = None
    noise_at: Callable = None

    def __post_init__(self):
        if self.source is None or self.noise_at is None:
            raise TypeError("NoiseGate needs source and noise_at")

    def read(self, frames: int) -> np.ndarray:
        mono = self.source.read(frames)
        n = len(mono)
        if n == 0:
            return np.zeros((0, 2), dtype=np.float64)
        on, volume = self.noise_at(self._times(n))
        gated = np.where(on, mono * volume * HEADROOM, 0.0)
        return self._stereo(gated)

    def _info(self):
        on, volume = self.noise_at(np.array([self.pos / self.sample_rate]))
        return {"type": "noise", "noise_on": bool(on[0]), "noise_volume": float(volume[0])}
