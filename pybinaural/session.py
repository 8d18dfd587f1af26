"""Wires a breakpoint list into a bounded stereo sample stream."""
import logging
import math
from dataclasses import dataclass
from typing import Sequence

from .errors import ConfigError, ZeroDurationError
from .generators.base import DEFAULT_SAMPLE_RATE
from .generators.noise import NoiseGate, PinkNoise, RandomLike
from .generators.oscillator import LEFT, RIGHT, Oscillator
from .mixer import BoundedSource, Mixer
from .schedule import Schedule, build_schedule, stretch_breakpoints
from .types import Breakpoint

logger = logging.getLogger(__name__)


@dataclass
class Session:
    schedule: Schedule
    source: BoundedSource
    sample_rate: int

    @property
    def total_frames(self) -> int:
        return self.source.total_frames

    @property
    def duration(self) -> float:
        return self.schedule.total_duration


def build_session(
    breakpoints: Sequence[Breakpoint],
    stretch: float = 1.0,
    sample_rate: int = DEFAULT_SAMPLE_RATE,
    rng: RandomLike = None,
) -> Session:
    if sample_rate <= 0:
        raise ConfigError(f"sample rate must be positive, got {sample_rate}")
    schedule = build_schedule(stretch_breakpoints(breakpoints, stretch))
    if not math.isfinite(schedule.total_duration):
        raise ConfigError(f"total playback time {schedule.total_duration} is not finite")
    if schedule.total_duration <= 0:
        raise ZeroDurationError("total playback time is zero, check the configuration")

    left = Oscillator(sample_rate=sample_rate, frequency_at=schedule.frequency,
                      volume_at=schedule.tone_volume, channel=LEFT)
    right = Oscillator(sample_rate=sample_rate, frequency_at=schedule.right_frequency,
                       volume_at=schedule.tone_volume, channel=RIGHT)
    noise = NoiseGate(sample_rate=sample_rate,
                      source=PinkNoise(sample_rate=sample_rate, rng=rng),
                      noise_at=schedule.noise)
    mixed = Mixer(sample_rate=sample_rate, sources=[left, right, noise])

    total = schedule.total_frames(sample_rate)
    logger.info("session: %d breakpoints, %.2f s, %d frames at %d Hz",
                len(schedule), schedule.total_duration, total, sample_rate)
    return Session(schedule, BoundedSource(sample_rate=sample_rate, source=mixed, total_frames=total),
                   sample_rate)
