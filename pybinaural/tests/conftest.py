import pytest

from pybinaural.types import Breakpoint


@pytest.fixture
def ramp():
    """Two-breakpoint session from the reference scenario."""
    return [
        Breakpoint(time=0, frequency=300, beat_frequency=10, noise_on=True, noise_volume=0.4, tone_volume=0.1),
        Breakpoint(time=10, frequency=150, beat_frequency=6, noise_on=False, noise_volume=0.0, tone_volume=0.15),
    ]


@pytest.fixture
def three_step():
    return [
        Breakpoint(time=0, frequency=100, beat_frequency=4, noise_on=True, noise_volume=0.2, tone_volume=0.5),
        Breakpoint(time=10, frequency=200, beat_frequency=8, noise_on=True, noise_volume=0.9, tone_volume=1.0),
        Breakpoint(time=20, frequency=200, beat_frequency=8, noise_on=False, noise_volume=0.0, tone_volume=0.0),
    ]
