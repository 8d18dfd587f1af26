import numpy as np
import pytest

from pybinaural.errors import ConfigError, ZeroDurationError
from pybinaural.mixer import BoundedSource, Mixer
from pybinaural.session import build_session
from pybinaural.types import Breakpoint


class Constant:
    """Stereo source yielding a fixed frame, optionally finite."""

    def __init__(self, left, right, frames=None):
        self.frame = np.array([left, right], dtype=np.float64)
        self.left = frames

    def read(self, frames):
        n = frames if self.left is None else min(frames, self.left)
        if self.left is not None:
            self.left -= n
        return np.tile(self.frame, (n, 1))


def test_mixer_sums_without_limiting():
    mixer = Mixer(sources=[Constant(0.75, 0.0), Constant(0.0, 0.75), Constant(0.5, 0.5)])
    audio = mixer.read(64)
    assert audio.shape == (64, 2)
    np.testing.assert_allclose(audio, np.tile([1.25, 1.25], (64, 1)))


def test_mixer_pads_short_sources_and_ends_when_all_exhausted():
    mixer = Mixer()
    mixer.add(Constant(0.1, 0.1, frames=10), Constant(0.2, 0.2, frames=4))
    audio = mixer.read(8)
    np.testing.assert_allclose(audio[:4], 0.3)
    np.testing.assert_allclose(audio[4:], 0.1)
    assert len(mixer.read(8)) == 2
    assert len(mixer.read(8)) == 0


def test_bounded_source_never_exceeds_total():
    bounded = BoundedSource(source=Constant(0.1, 0.2), total_frames=1000)
    sizes = []
    while True:
        chunk = bounded.read(300)
        if len(chunk) == 0:
            break
        sizes.append(len(chunk))
    assert sizes == [300, 300, 300, 100]
    assert bounded.exhausted
    assert len(bounded.read(10)) == 0


def test_bounded_source_generator_yields_chunks_with_info():
    bounded = BoundedSource(sample_rate=100, source=Constant(0.0, 0.0), total_frames=250)
    chunks = list(bounded.generator(100))
    assert [len(c) for c, _ in chunks] == [100, 100, 50]
    assert chunks[-1][1]["time"] == 2.5


def test_session_end_to_end(ramp):
    session = build_session(ramp, rng=2024)
    assert session.total_frames == 441000
    assert session.duration == 10

    total = 0
    first = None
    while True:
        chunk = session.source.read(8192)
        if len(chunk) == 0:
            break
        if first is None:
            first = chunk[0]
        assert np.all(np.isfinite(chunk))
        total += len(chunk)
    assert total == 441000
    assert len(session.source.read(8192)) == 0

    # tones start at sin(0); only pink noise is heard on the first frame
    assert first[0] == first[1]
    assert abs(first[0]) <= 0.1 * 0.4 * 0.5

    sched = session.schedule
    assert sched.frequency(220500 / 44100) == 225
    assert sched.right_frequency(220500 / 44100) == 233


def test_session_is_reproducible_with_seed(ramp):
    a = build_session(ramp, sample_rate=8000, rng=5).source.read(4000)
    b = build_session(ramp, sample_rate=8000, rng=5).source.read(4000)
    np.testing.assert_array_equal(a, b)


def test_session_stretch_scales_length(ramp):
    session = build_session(ramp, stretch=0.5, sample_rate=1000)
    assert session.total_frames == 5000
    assert session.schedule.frequency(2.5) == 225


def test_session_zero_duration_is_fatal():
    with pytest.raises(ZeroDurationError):
        build_session([Breakpoint(0, 200, 10)])


def test_session_empty_is_config_error():
    with pytest.raises(ConfigError):
        build_session([])


@pytest.mark.parametrize("rate", [0, -44100])
def test_session_rejects_non_positive_sample_rate(ramp, rate):
    with pytest.raises(ConfigError, match="sample rate"):
        build_session(ramp, sample_rate=rate)


def test_session_rejects_stretch_overflowing_to_infinity(ramp):
    with pytest.raises(ConfigError, match="not finite"):
        build_session(ramp, stretch=1e308)
