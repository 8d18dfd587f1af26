from dataclasses import dataclass
from typing import NamedTuple, Protocol, TypedDict

import numpy as np


@dataclass(frozen=True)
class Breakpoint:
    """Parameter values fixed at ``time`` seconds into the session."""
    time: float
    frequency: float
    beat_frequency: float = 0.0
    noise_on: bool = False
    noise_volume: float = 0.0
    tone_volume: float = 0.0


class NoiseSetting(NamedTuple):
    on: bool
    volume: float


class ChunkInfo(TypedDict, total=False):
    type: str
    time: float
    freq: float
    beat: float
    tone_volume: float
    noise_on: bool
    noise_volume: float


class SampleSource(Protocol):
    def read(self, frames: int) -> np.ndarray: ...
