"""
Print MT19937 outputs

Typical usage:

    # ten auto-seeded outputs
    python main.py

    # reproducible run
    python main.py --seed 5489 --count 5

    # show the seeding pipeline's intermediate values
    python main.py --log-level debug
"""

import argparse
import sys

from config import DEFAULT_OUTPUT_COUNT, LOG_LEVEL
from entropy_sources import EntropySourceError
from logging_utils import configure_root_logger, get_logger
from rng import new

logger = get_logger(__name__)


def _parse_args(argv=None):
    parser = argparse.ArgumentParser(description="MT19937 random number generator")

    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="32-bit seed; 0 (default) seeds from system entropy",
    )
    parser.add_argument(
        "--count",
        type=int,
        default=DEFAULT_OUTPUT_COUNT,
        help=f"Number of outputs to print (default: {DEFAULT_OUTPUT_COUNT})",
    )
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        help="Logging level, e.g. info or debug",
    )

    args = parser.parse_args(argv)
    if args.count < 0:
        parser.error("--count must not be negative")
    return args


def main(argv=None):
    args = _parse_args(argv)
    configure_root_logger(args.log_level)

    try:
        mt = new(args.seed)
    except EntropySourceError as e:
        logger.error("Could not seed generator: %s", e)
        return 1

    for value in mt.generate_sequence(args.count):
        print(value)
    return 0


if __name__ == "__main__":
    sys.exit(main())
