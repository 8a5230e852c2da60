"""
Export MT19937 sequences as numpy datasets
Each sample is an (internal_state, tempered_output) pair, stored as
uint32 arrays (and optionally as LSB-first bit matrices) in a .npz file
"""

import argparse
import os
import sys

import numpy as np
from tqdm import tqdm

from config import DEFAULT_DATASET_PATH, DEFAULT_DATASET_SAMPLES, DEFAULT_DATASET_SEED, LOG_LEVEL
from entropy_sources import EntropySourceError
from logging_utils import configure_root_logger, get_logger
from mt19937 import MASK_32, bits_to_int, int_to_bits
from rng import new

logger = get_logger(__name__)


def generate_sequence_dataset(num_samples, seed=DEFAULT_DATASET_SEED, progress=True):
    """
    Generate (internal, tempered) pairs from one generator
    :param num_samples: number of samples to generate
    :param seed: generator seed (0 seeds from system entropy)
    :param progress: show a tqdm progress bar
    :return: (internal, output) uint32 arrays of shape (N,)
    """
    if num_samples <= 0:
        raise ValueError(f"num_samples must be positive, got {num_samples}")

    mt = new(seed)
    internal = np.empty(num_samples, dtype=np.uint32)
    output = np.empty(num_samples, dtype=np.uint32)

    for i in tqdm(range(num_samples), desc="Sequence", disable=not progress):
        internal[i], output[i] = mt.extract_with_internal()

    return internal, output


def to_bit_matrix(values):
    """
    Stack int_to_bits rows for every value
    :param values: uint32 array of shape (N,)
    :return: uint8 array of shape (N, 32), LSB first
    """
    return np.array([int_to_bits(int(v)) for v in values], dtype=np.uint8).reshape(-1, 32)


def from_bit_matrix(bits):
    """
    Inverse of to_bit_matrix
    :param bits: array of shape (N, 32), LSB first
    :return: uint32 array of shape (N,)
    """
    return np.array([bits_to_int(int(b) for b in row) for row in bits], dtype=np.uint32)


def save_dataset(path, internal, output, seed=None, include_bits=False):
    """
    Write a dataset with np.savez_compressed
    :param path: destination .npz file
    :param internal: uint32 array of internal states
    :param output: uint32 array of tempered outputs
    :param seed: seed recorded alongside the data, if known
    :param include_bits: also store the bit matrices
    """
    directory = os.path.dirname(os.fspath(path))
    if directory:
        os.makedirs(directory, exist_ok=True)

    arrays = {"internal": internal, "output": output}
    if seed is not None:
        # the generator only ever sees the low 32 bits
        arrays["seed"] = np.array(seed & MASK_32, dtype=np.uint32)
    if include_bits:
        arrays["internal_bits"] = to_bit_matrix(internal)
        arrays["output_bits"] = to_bit_matrix(output)

    np.savez_compressed(path, **arrays)
    logger.info("Saved %d samples to %s", len(output), path)


def load_dataset(path):
    """
    Read a dataset, checking stored bit matrices against their values
    :param path: .npz file written by save_dataset
    :return: dict of arrays
    """
    with np.load(path) as data:
        arrays = {key: data[key] for key in data.files}

    for name in ("internal", "output"):
        bits = arrays.get(f"{name}_bits")
        if bits is not None and not np.array_equal(from_bit_matrix(bits), arrays[name]):
            raise ValueError(f"{name}_bits does not match {name} in {path}")
    return arrays


def _parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Export MT19937 sequence datasets")
    parser.add_argument("--samples", type=int, default=DEFAULT_DATASET_SAMPLES)
    parser.add_argument(
        "--seed",
        type=int,
        default=DEFAULT_DATASET_SEED,
        help="Generator seed; 0 seeds from system entropy",
    )
    parser.add_argument("--output", default=str(DEFAULT_DATASET_PATH))
    parser.add_argument("--bits", action="store_true", help="Also store LSB-first bit matrices")
    parser.add_argument("--log-level", default=LOG_LEVEL)

    args = parser.parse_args(argv)
    if args.samples <= 0:
        parser.error("--samples must be positive")
    if not 0 <= args.seed <= MASK_32:
        parser.error(f"--seed must be in [0, {MASK_32}]")
    return args


def main(argv=None):
    args = _parse_args(argv)
    configure_root_logger(args.log_level)

    try:
        internal, output = generate_sequence_dataset(args.samples, seed=args.seed)
    except EntropySourceError as e:
        logger.error("Could not seed generator: %s", e)
        return 1

    # an auto-seeded run does not know its seed
    seed = args.seed if args.seed != 0 else None
    save_dataset(args.output, internal, output, seed=seed, include_bits=args.bits)

    logger.info("First outputs: %s", output[:5].tolist())
    return 0


if __name__ == "__main__":
    sys.exit(main())
