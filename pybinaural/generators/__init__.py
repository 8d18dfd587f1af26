from .oscillator import Oscillator
from .noise import PinkNoise, NoiseGate

__all__ = [
    "Oscillator",
    "PinkNoise",
    "NoiseGate",
]
