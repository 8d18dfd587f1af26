"""YAML session loader.

A session file lists its breakpoints under ``frequency_changes``::

    frequency_changes:
      - time: 0
        frequency: 300
        beat_frequency: 10
        pink_noise_on: true
        pink_noise_volume: 0.4
        tone_volume: 0.1
"""
import logging
import math
from typing import Any, List

import yaml

from .errors import ConfigError
from .types import Breakpoint

logger = logging.getLogger(__name__)

CHANGES_KEY = "frequency_changes"
_NUMERIC = {
    "time": "time",
    "frequency": "frequency",
    "beat_frequency": "beat_frequency",
    "pink_noise_volume": "noise_volume",
    "tone_volume": "tone_volume",
}


def _number(entry: dict, key: str, index: int) -> float:
    value = entry.get(key, 0.0)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{CHANGES_KEY}[{index}].{key} must be a number, got {value!r}")
    try:
        number = float(value)
    except OverflowError:
        number = math.inf
    if not math.isfinite(number):
        raise ConfigError(f"{CHANGES_KEY}[{index}].{key} must be finite, got {value!r}")
    return number


def _breakpoint(entry: Any, index: int) -> Breakpoint:
    if not isinstance(entry, dict):
        raise ConfigError(f"{CHANGES_KEY}[{index}] must be a mapping, got {type(entry).__name__}")
    unknown = set(entry) - set(_NUMERIC) - {"pink_noise_on"}
    if unknown:
        logger.warning("%s[%d]: ignoring unknown keys %s", CHANGES_KEY, index, sorted(unknown))
    values = {attr: _number(entry, key, index) for key, attr in _NUMERIC.items()}
    if values["time"] < 0:
        raise ConfigError(f"{CHANGES_KEY}[{index}].time must not be negative")
    noise_on = entry.get("pink_noise_on", False)
    if not isinstance(noise_on, bool):
        raise ConfigError(f"{CHANGES_KEY}[{index}].pink_noise_on must be true or false")
    return Breakpoint(noise_on=noise_on, **values)


def parse_config(text: str) -> List[Breakpoint]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"configuration must be a mapping with a '{CHANGES_KEY}' list")
    changes = data.get(CHANGES_KEY)
    if not isinstance(changes, list) or not changes:
        raise ConfigError(f"'{CHANGES_KEY}' must be a non-empty list")
    breakpoints = [_breakpoint(entry, i) for i, entry in enumerate(changes)]
    breakpoints.sort(key=lambda bp: bp.time)
    return breakpoints


def load_config(path) -> List[Breakpoint]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise ConfigError(f"cannot read configuration file {path}: {e}") from e
    breakpoints = parse_config(text)
    logger.info("loaded %d breakpoints from %s", len(breakpoints), path)
    return breakpoints
