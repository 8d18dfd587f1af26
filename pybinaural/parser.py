"""Converter from legacy SBaGen ``.sbg`` sessions to breakpoint YAML.

Only the parts of a tone-set that map onto a breakpoint are kept: the
binaural carrier and beat, the summed tone amplitude and the pink noise
amplitude. Mix inputs, bells, spin and wave components are dropped.
"""
import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, TextIO, Tuple

import yaml

from .config import CHANGES_KEY
from .errors import ConversionError
from .types import Breakpoint

logger = logging.getLogger(__name__)

_TONE_SET_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9_-]*):\s*(.*)$")
_TIME_SEQ_RE = re.compile(r"^(NOW|[+\d:.]+)\s+([a-zA-Z0-9_-]+)(\s*->)?$")
_TONE_RE = re.compile(r"^(\d+(?:\.\d+)?)([+-])?(\d*(?:\.\d+)?)?(?:/(\d+(?:\.\d+)?))?$")
_IGNORED_PREFIXES = ("mix/", "bell", "spin:", "wave")


@dataclass
class ToneSet:
    name: str
    frequency: float = 0.0
    beat_frequency: float = 0.0
    noise_volume: float = 0.0
    tone_volume: float = 0.0


def _parse_hms(s: str) -> int:
    # "hh:mm" or "hh:mm:ss"
    parts = s.split(":")
    if len(parts) not in (2, 3):
        raise ConversionError(f"time must be in 'hh:mm' or 'hh:mm:ss' format, got '{s}'")
    try:
        ts = [int(x) for x in parts]
    except ValueError:
        raise ConversionError(f"invalid time '{s}'") from None
    if len(ts) == 2:
        ts.append(0)
    h, m, sec = ts
    return h * 3600 + m * 60 + sec


def parse_tone_component(spec: str, tone_set: ToneSet) -> None:
    """Applies a single tone-set component to ``tone_set``."""
    if spec.startswith("pink/"):
        amp_str = spec[len("pink/"):]
        try:
            tone_set.noise_volume = float(amp_str) / 100.0
        except ValueError:
            raise ConversionError(f"invalid pink noise amplitude: '{amp_str}'") from None
        return

    if spec.startswith(_IGNORED_PREFIXES):
        logger.debug("%s: skipping component '%s'", tone_set.name, spec)
        return

    # Binaural tone, e.g. "200+10/50"; a '-' beat sign is treated like '+'
    match = _TONE_RE.match(spec)
    if match is None:
        raise ConversionError(f"invalid tone specification: '{spec}'")
    carrier, _sign, beat, amp = match.groups()
    tone_set.frequency = float(carrier)
    tone_set.beat_frequency = float(beat) if beat else 0.0
    tone_set.tone_volume += float(amp) / 100.0 if amp else 0.0


def parse_tone_set(name: str, specs: str) -> ToneSet:
    tone_set = ToneSet(name)
    if specs.strip() == "-":
        return tone_set
    for part in specs.split():
        try:
            parse_tone_component(part, tone_set)
        except ConversionError as e:
            raise ConversionError(f"error parsing tone-set '{name}': {e}") from None
    return tone_set


def parse_sbg_from_string(s: str) -> Tuple[Dict[str, ToneSet], List[Tuple[str, str]]]:
    """Splits an .sbg session into tone-sets and ``(time, name)`` entries.

    Tone-set definitions come first; the first line that is not one starts
    the time sequence.
    """
    tone_sets: Dict[str, ToneSet] = {}
    sequence: List[Tuple[str, str]] = []
    in_tone_sets = True
    for lineno, raw in enumerate(s.splitlines(), 1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        if in_tone_sets:
            match = _TONE_SET_RE.match(line)
            if match:
                name, specs = match.groups()
                tone_sets[name] = parse_tone_set(name, specs)
                continue
            in_tone_sets = False

        match = _TIME_SEQ_RE.match(line)
        if match is None:
            raise ConversionError(f"line {lineno}: invalid time-sequence line: '{line}'")
        sequence.append((match.group(1), match.group(2)))

    if not tone_sets:
        raise ConversionError("no tone-set definitions found")
    if not sequence:
        raise ConversionError("no time-sequence definitions found")
    return tone_sets, sequence


def to_breakpoints(tone_sets: Dict[str, ToneSet], sequence: List[Tuple[str, str]]) -> List[Breakpoint]:
    """Resolves the time sequence into breakpoints sorted by time.

    ``NOW`` and absolute times set the anchor that ``+`` times count from.
    """
    breakpoints = []
    anchor = 0.0
    for time_spec, name in sequence:
        if time_spec == "NOW":
            when = anchor = 0.0
        elif time_spec.startswith("+"):
            when = anchor + _parse_hms(time_spec[1:])
        else:
            when = anchor = float(_parse_hms(time_spec))

        tone_set = tone_sets.get(name)
        if tone_set is None:
            raise ConversionError(f"tone-set '{name}' not defined")
        breakpoints.append(Breakpoint(
            time=float(when),
            frequency=tone_set.frequency,
            beat_frequency=tone_set.beat_frequency,
            noise_on=tone_set.noise_volume > 0,
            noise_volume=tone_set.noise_volume,
            tone_volume=tone_set.tone_volume,
        ))
    breakpoints.sort(key=lambda bp: bp.time)
    return breakpoints


def dump_breakpoints(breakpoints: List[Breakpoint], stream: Optional[TextIO] = None):
    """Serialises breakpoints in the layout :func:`pybinaural.config.load_config` reads."""
    doc = {CHANGES_KEY: [
        {
            "time": bp.time,
            "frequency": bp.frequency,
            "beat_frequency": bp.beat_frequency,
            "pink_noise_on": bp.noise_on,
            "pink_noise_volume": bp.noise_volume,
            "tone_volume": bp.tone_volume,
        }
        for bp in breakpoints
    ]}
    return yaml.safe_dump(doc, stream, sort_keys=False)


def convert_sbg_string(s: str) -> List[Breakpoint]:
    return to_breakpoints(*parse_sbg_from_string(s))


def convert_sbg(path: str) -> List[Breakpoint]:
    # SBaGen sessions may use Windows-1252, so read as latin-1
    with open(path, "r", encoding="latin-1") as f:
        return convert_sbg_string(f.read())
