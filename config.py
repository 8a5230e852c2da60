# config.py

"""
Defaults for the command-line tools.

The generator itself takes everything it needs as arguments; these values
are only read by main.py, generate_dataset.py and logging_utils.py, and
every one of them can be overridden from the command line.
"""

from __future__ import annotations

import logging
from pathlib import Path


# -------------------------------------------------------------------
# Paths
# -------------------------------------------------------------------

# Output directory for exported sequence datasets
DATA_DIR: Path = Path("data")

DEFAULT_DATASET_PATH: Path = DATA_DIR / "mt19937_sequence.npz"


# -------------------------------------------------------------------
# Generation defaults
# -------------------------------------------------------------------

# How many outputs main.py prints when --count is not given.
DEFAULT_OUTPUT_COUNT: int = 10

# Reference MT19937 seed, used by generate_dataset.py unless --seed is given.
DEFAULT_DATASET_SEED: int = 5489

DEFAULT_DATASET_SAMPLES: int = 100000


# -------------------------------------------------------------------
# Logging
# -------------------------------------------------------------------

LOG_LEVEL: int = logging.INFO

LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

LOG_DATEFMT: str = "%Y-%m-%d %H:%M:%S"
