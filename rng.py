"""
Public generator entry point

Generator is an MT19937 engine that seeds itself from an EntropyCollector
when it is not given a seed. Either construction fully succeeds or it
raises EntropySourceError; there is no half-seeded generator.
"""

from typing import Optional

from entropy_sources import EntropyCollector, EntropySourceError, create_entropy_collector
from logging_utils import get_logger
from mt19937 import MASK_32, MT19937

logger = get_logger(__name__)

__all__ = ["Generator", "EntropySourceError", "new"]


class Generator(MT19937):
    """
    MT19937 generator with multi-source auto-seeding
    """

    def __init__(self, seed: Optional[int] = None, collector: Optional[EntropyCollector] = None):
        """
        :param seed: explicit 32-bit seed; None or 0 means auto-seed
        :param collector: entropy collector used for auto-seeding
        :raises EntropySourceError: if auto-seeding cannot read the OS random source
        """
        # Only the caller's argument selects auto-seeding; a zero coming
        # out of the collector is a valid seed.
        if seed is None or seed == 0:
            if collector is None:
                collector = create_entropy_collector()
            seed = collector.derive_seed()
            self.auto_seeded = True
        else:
            seed &= MASK_32
            self.auto_seeded = False

        logger.debug("initializing MT19937 (auto_seeded=%s)", self.auto_seeded)
        super().__init__(seed)


def new(seed: int = 0, collector: Optional[EntropyCollector] = None) -> Generator:
    """
    Construct a generator; seed 0 triggers auto-seeding
    """
    return Generator(seed, collector=collector)
