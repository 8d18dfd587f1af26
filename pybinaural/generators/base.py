from dataclasses import dataclass, field
from typing import Generator, Tuple

import numpy as np

from ..types import ChunkInfo

DEFAULT_SAMPLE_RATE = 44100
FRAME = 1024
# per-source attenuation applied before mixing
HEADROOM = 0.5


@dataclass
class GenBase:
    sample_rate: int = DEFAULT_SAMPLE_RATE
    frame: int = FRAME
    pos: int = field(default=0, init=False)

    def _times(self, n: int) -> np.ndarray:
        """Session times of the next ``n`` samples; advances ``pos``."""
        t = (self.pos + np.arange(n)) / self.sample_rate
        self.pos += n
        return t

    def _stereo(self, mono: np.ndarray) -> np.ndarray:
        return np.column_stack((mono, mono))

    def _info(self) -> ChunkInfo:
        return {"type": type(self).__name__.lower()}

    def read(self, frames: int) -> np.ndarray:
        raise NotImplementedError

    def generator(self, frame: int = None) -> Generator[Tuple[np.ndarray, ChunkInfo], None, None]:
        frame = frame or self.frame
        while True:
            chunk = self.read(frame)
            if len(chunk) == 0:
                return
            yield chunk, self._info()
