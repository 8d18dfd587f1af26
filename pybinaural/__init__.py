"""Binaural beat synthesis driven by a breakpoint schedule."""
from .errors import ConfigError, ConversionError, PyBinauralError, ZeroDurationError
from .generators import NoiseGate, Oscillator, PinkNoise
from .mixer import BoundedSource, Mixer
from .schedule import Schedule, build_schedule, stretch_breakpoints
from .session import Session, build_session
from .types import Breakpoint, NoiseSetting

__version__ = "0.1.0"

__all__ = [
    "Breakpoint",
    "NoiseSetting",
    "Schedule",
    "build_schedule",
    "stretch_breakpoints",
    "Oscillator",
    "PinkNoise",
    "NoiseGate",
    "Mixer",
    "BoundedSource",
    "Session",
    "build_session",
    "PyBinauralError",
    "ConfigError",
    "ZeroDurationError",
    "ConversionError",
]
