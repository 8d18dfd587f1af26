class PyBinauralError(Exception):
    """Base error for pybinaural."""


class ConfigError(PyBinauralError, ValueError):
    """Raised when a breakpoint list cannot produce a session."""


class ZeroDurationError(ConfigError):
    """Raised when the last breakpoint resolves to time zero."""


class ConversionError(PyBinauralError):
    """Raised when a legacy .sbg session cannot be converted."""
