import argparse
import logging
import sys

from .config import load_config
from .errors import ConfigError, ConversionError
from .generators.base import DEFAULT_SAMPLE_RATE
from .output import play, write_wav
from .parser import convert_sbg, dump_breakpoints
from .session import build_session

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Binaural beat generator with pink noise")
    p.add_argument("-c", "--config", default="config.yaml", help="YAML session file")
    p.add_argument("-o", "--output", help="WAV file to write; plays live when omitted")
    p.add_argument("-s", "--stretch", type=float, default=1.0,
                   help="multiply every breakpoint time by this factor")
    p.add_argument("--sample-rate", type=int, default=DEFAULT_SAMPLE_RATE)
    p.add_argument("--seed", type=int, help="seed for the pink noise generator")
    p.add_argument("-v", "--verbose", action="store_true")
    args = p.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        breakpoints = load_config(args.config)
        session = build_session(breakpoints, stretch=args.stretch,
                                sample_rate=args.sample_rate, rng=args.seed)
    except ConfigError as e:
        print(f"Error parsing configuration file: {e}", file=sys.stderr)
        return 2

    if args.output:
        print(f"Exporting audio to {args.output}...")
        write_wav(session.source, args.output, session.sample_rate)
        print("Export completed successfully.")
    else:
        play(session.source, session.sample_rate, schedule=session.schedule)
    return 0


def convert_main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Convert an SBaGen .sbg session to breakpoint YAML")
    p.add_argument("-i", "--input", required=True, help="SBaGen session file")
    p.add_argument("-o", "--output", help="YAML file to write; stdout when omitted")
    p.add_argument("-v", "--verbose", action="store_true")
    args = p.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        breakpoints = convert_sbg(args.input)
    except (OSError, ConversionError) as e:
        print(f"Failed to convert {args.input}: {e}", file=sys.stderr)
        return 1

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            dump_breakpoints(breakpoints, f)
        logger.info("wrote %d breakpoints to %s", len(breakpoints), args.output)
    else:
        sys.stdout.write(dump_breakpoints(breakpoints))
    return 0


if __name__ == "__main__":
    sys.exit(main())
