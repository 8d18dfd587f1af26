from dataclasses import dataclass, field
from typing import List

import numpy as np

from .generators.base import GenBase
from .types import SampleSource


def _pad_chunk(chunk: np.ndarray, frame_len: int) -> np.ndarray:
    """Pad a chunk to ``frame_len`` without modifying the input."""
    if chunk.shape[0] == frame_len:
        return chunk
    padded = np.zeros((frame_len, 2), dtype=np.float64)
    padded[: chunk.shape[0]] = chunk
    return padded


@dataclass
class Mixer(GenBase):
    """Sums stereo sources sample by sample.

    No normalisation or limiting is applied; each source carries its own
    headroom. A source that runs short is padded with silence and the mixer
    ends once every source is exhausted.
    """
    sources: List[SampleSource] = field(default_factory=list)

    def add(self, *sources: SampleSource) -> None:
        self.sources.extend(sources)

    def read(self, frames: int) -> np.ndarray:
        chunks = [src.read(frames) for src in self.sources]
        frame_len = max((len(c) for c in chunks), default=0)
        acc = np.zeros((frame_len, 2), dtype=np.float64)
        for chunk in chunks:
            if len(chunk):
                acc += _pad_chunk(chunk, frame_len)
        self.pos += frame_len
        return acc


@dataclass
class BoundedSource(GenBase):
    """Passes through at most ``total_frames`` frames of ``source``."""
    source: SampleSource = None
    total_frames: int = 0

    @property
    def remaining(self) -> int:
        return max(self.total_frames - self.pos, 0)

    @property
    def exhausted(self) -> bool:
        return self.remaining == 0

    def read(self, frames: int) -> np.ndarray:
        n = min(frames, self.remaining)
        if n <= 0:
            return np.zeros((0, 2), dtype=np.float64)
        chunk = self.source.read(n)
        self.pos += len(chunk)
        return chunk

    def _info(self):
        return {"type": "bounded", "time": self.pos / self.sample_rate}
