"""Audio sinks: WAV export and live playback with a status ticker."""
import logging
import threading
import time
from typing import Callable, Optional

import soundfile as sf

from .generators.base import DEFAULT_SAMPLE_RATE, FRAME
from .schedule import Schedule
from .types import SampleSource

logger = logging.getLogger(__name__)

CHANNELS = 2
STATUS_INTERVAL = 3.0


def format_status(schedule: Schedule, t: float) -> str:
    s = schedule.status(t)
    return (
        f"Time: {t:.2f} s / Total {schedule.total_duration:.2f} s, "
        f"Base Frequency: {s['freq']:.2f} Hz, Beat Frequency: {s['beat']:.2f} Hz, "
        f"Tone Volume: {s['tone_volume']:.2f}, Pink Noise On: {s['noise_on']}, "
        f"Pink Noise Volume: {s['noise_volume']:.2f}"
    )


def write_wav(source: SampleSource, path, sample_rate: int = DEFAULT_SAMPLE_RATE,
              subtype: str = "PCM_16", frame: int = FRAME) -> int:
    """Streams ``source`` into a stereo WAV file until it is exhausted.

    Returns the number of frames written. The source must be bounded.
    """
    written = 0
    with sf.SoundFile(path, mode="w", samplerate=sample_rate, channels=CHANNELS,
                      subtype=subtype, format="WAV") as f:
        while True:
            chunk = source.read(frame)
            if len(chunk) == 0:
                break
            f.write(chunk)
            written += len(chunk)
    logger.info("wrote %d frames (%.2f s) to %s", written, written / sample_rate, path)
    return written


class StatusReporter(threading.Thread):
    """Prints the schedule state at wall-clock time every ``interval`` seconds.

    Only the pure schedule queries are read; generator state is never touched.
    """

    def __init__(self, schedule: Schedule, interval: float = STATUS_INTERVAL,
                 emit: Callable[[str], None] = print, clock: Callable[[], float] = time.monotonic):
        super().__init__(daemon=True)
        self.schedule = schedule
        self.interval = interval
        self.emit = emit
        self.clock = clock
        self.done = threading.Event()
        self.start_time = None

    def tick(self) -> None:
        t = self.clock() - self.start_time
        if t > self.schedule.total_duration:
            return
        self.emit(format_status(self.schedule, t))

    def run(self) -> None:
        self.start_time = self.clock()
        self.tick()
        while not self.done.wait(self.interval):
            self.tick()
        self.tick()

    def stop(self) -> None:
        self.done.set()


def play(source: SampleSource, sample_rate: int = DEFAULT_SAMPLE_RATE,
         schedule: Optional[Schedule] = None, status_interval: float = STATUS_INTERVAL,
         blocksize: int = 0) -> None:
    """Plays ``source`` on the default output device until it is exhausted."""
    import sounddevice as sd

    finished = threading.Event()

    def callback(outdata, frames, time_info, status):
        if status:
            logger.warning("output stream: %s", status)
        chunk = source.read(frames)
        n = len(chunk)
        outdata[:n] = chunk
        if n < frames:
            outdata[n:] = 0
            raise sd.CallbackStop

    reporter = StatusReporter(schedule, status_interval) if schedule is not None else None
    # a tenth of a second per block unless told otherwise
    blocksize = blocksize or sample_rate // 10
    with sd.OutputStream(samplerate=sample_rate, channels=CHANNELS, dtype="float32",
                         blocksize=blocksize, callback=callback,
                         finished_callback=finished.set):
        if reporter is not None:
            reporter.start()
        try:
            finished.wait()
        finally:
            if reporter is not None:
                reporter.stop()
                reporter.join()
