import pytest

from pybinaural.config import load_config, parse_config
from pybinaural.errors import ConfigError
from pybinaural.types import Breakpoint

CONFIG = """
frequency_changes:
  - time: 600
    frequency: 150
    beat_frequency: 6
    pink_noise_on: false
    pink_noise_volume: 0
    tone_volume: 0.15
  - time: 0
    frequency: 300
    beat_frequency: 10
    pink_noise_on: true
    pink_noise_volume: 0.4
    tone_volume: 0.1
"""


def test_parse_config_sorts_by_time():
    bps = parse_config(CONFIG)
    assert bps == [
        Breakpoint(0.0, 300.0, 10.0, True, 0.4, 0.1),
        Breakpoint(600.0, 150.0, 6.0, False, 0.0, 0.15),
    ]


def test_missing_keys_default_to_zero_and_off():
    bps = parse_config("frequency_changes:\n  - time: 5\n    frequency: 200\n")
    assert bps == [Breakpoint(5.0, 200.0, 0.0, False, 0.0, 0.0)]


def test_load_config_reads_file(tmp_path):
    path = tmp_path / "session.yaml"
    path.write_text(CONFIG, encoding="utf-8")
    assert len(load_config(path)) == 2


def test_load_config_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="cannot read"):
        load_config(tmp_path / "nope.yaml")


@pytest.mark.parametrize("text, message", [
    ("- 1\n- 2\n", "mapping"),
    ("frequency_changes: []\n", "non-empty"),
    ("other: 1\n", "non-empty"),
    ("frequency_changes:\n  - 3\n", r"frequency_changes\[0\]"),
    ("frequency_changes:\n  - time: soon\n", "must be a number"),
    ("frequency_changes:\n  - time: 1\n  - time: -2\n", r"\[1\]\.time must not be negative"),
    ("frequency_changes:\n  - time: 1\n    pink_noise_on: maybe\n", "true or false"),
    ("frequency_changes: [\n", "invalid YAML"),
    ("frequency_changes:\n  - time: .inf\n", r"\[0\]\.time must be finite"),
    ("frequency_changes:\n  - time: 1\n  - time: .nan\n", r"\[1\]\.time must be finite"),
    ("frequency_changes:\n  - time: 1\n    frequency: -.inf\n", r"\[0\]\.frequency must be finite"),
])
def test_invalid_configs(text, message):
    with pytest.raises(ConfigError, match=message):
        parse_config(text)
