"""
Entropy sources and seed derivation for the MT19937 generator

Four independent sources feed the seed:
1. OS random source - 4 bytes from the platform's preferred RNG
2. Wall clock - milliseconds since the epoch
3. Performance counter - high-resolution monotonic counter
4. CPU cycle counter - low-order timing jitter

The samples are combined with a double-pass FNV-1a mix into one 32-bit
seed. None of this makes the generator a CSPRNG; the pipeline only makes
the seed hard to guess from any single source.
"""

import os
import struct
import time
from typing import Callable, Optional

from logging_utils import get_logger

logger = get_logger(__name__)

MASK_32 = 0xFFFFFFFF

# FNV-1a 32-bit parameters
FNV_OFFSET_BASIS = 0x811C9DC5
FNV_PRIME = 0x01000193

# Number of FNV-1a passes made over the mixed bytes
MIX_PASSES = 2


class EntropySourceError(RuntimeError):
    """The OS random source could not produce bytes."""


class EntropySource:
    """
    Base class for a single entropy source.

    Subclasses return one unsigned 32-bit sample per read().
    """

    name = "abstract"

    def read(self) -> int:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class OsRandomSource(EntropySource):
    """
    Four bytes from the operating system's random source.

    os.urandom() maps to getrandom()/dev/urandom on Linux and
    BCryptGenRandom on Windows. A failing call is not retried.
    """

    name = "os-random"
    NUM_BYTES = 4

    def __init__(self, random_bytes: Callable[[int], bytes] = os.urandom):
        """
        Args:
            random_bytes: Callable returning n random bytes (default os.urandom).
        """
        self._random_bytes = random_bytes

    def read(self) -> int:
        try:
            data = self._random_bytes(self.NUM_BYTES)
        except (OSError, NotImplementedError) as e:
            raise EntropySourceError(f"Failed to read from OS random source: {e}") from e

        if len(data) != self.NUM_BYTES:
            raise EntropySourceError(
                f"OS random source returned {len(data)} bytes, expected {self.NUM_BYTES}"
            )
        return struct.unpack("<I", data)[0]


class WallClockSource(EntropySource):
    """Milliseconds since the Unix epoch, truncated to 32 bits."""

    name = "wall-clock"

    def __init__(self, clock_ns: Callable[[], int] = time.time_ns):
        self._clock_ns = clock_ns

    def read(self) -> int:
        return (self._clock_ns() // 1_000_000) & MASK_32


class PerformanceCounterSource(EntropySource):
    """High-resolution monotonic counter, truncated to 32 bits."""

    name = "performance-counter"

    def __init__(self, counter_ns: Optional[Callable[[], int]] = None):
        # looked up at call time; not every platform has perf_counter_ns
        self._counter_ns = counter_ns if counter_ns is not None else time.perf_counter_ns

    def read(self) -> int:
        return self._counter_ns() & MASK_32


class CycleCounterSource(EntropySource):
    """
    CPU cycle counter folded to 32 bits as value ^ (value >> 12).

    Python cannot execute a timestamp-counter instruction, so the default
    counter is the nanosecond monotonic clock. Only its low-order jitter
    carries anything useful.
    """

    name = "cycle-counter"

    def __init__(self, cycles: Callable[[], int] = time.monotonic_ns):
        self._cycles = cycles

    @staticmethod
    def fold(value: int) -> int:
        return (value ^ (value >> 12)) & MASK_32

    def read(self) -> int:
        return self.fold(self._cycles())


def create_performance_counter_source() -> EntropySource:
    """
    Performance counter if the platform has one, otherwise a second
    wall-clock read.
    """
    if hasattr(time, "perf_counter_ns"):
        return PerformanceCounterSource(time.perf_counter_ns)
    logger.debug("perf_counter_ns unavailable, using wall clock instead")
    return WallClockSource()


def fnv1a(hash_value: int, data: bytes) -> int:
    """
    One FNV-1a pass over data, continuing from hash_value.
    """
    for byte in data:
        hash_value ^= byte
        hash_value = (hash_value * FNV_PRIME) & MASK_32
    return hash_value


def mix(a: int, b: int) -> int:
    """
    Combine two 32-bit values into one 32-bit hash.

    The eight little-endian bytes of a and b are run through FNV-1a
    twice; the second pass starts from the result of the first.

    Args:
        a: First 32-bit value.
        b: Second 32-bit value.

    Returns:
        Mixed unsigned 32-bit value.
    """
    data = struct.pack("<II", a & MASK_32, b & MASK_32)
    hash_value = FNV_OFFSET_BASIS
    for _ in range(MIX_PASSES):
        hash_value = fnv1a(hash_value, data)
    return hash_value


class EntropyCollector:
    """
    Gathers samples from four sources and derives a 32-bit seed.

    Every source is injected, so tests can run the whole pipeline with
    fixed values. Use create_entropy_collector() for the platform defaults.
    """

    def __init__(
        self,
        hardware: Optional[EntropySource] = None,
        wall_clock: Optional[EntropySource] = None,
        performance_counter: Optional[EntropySource] = None,
        cycle_counter: Optional[EntropySource] = None,
    ):
        self.hardware = hardware if hardware is not None else OsRandomSource()
        self.wall_clock = wall_clock if wall_clock is not None else WallClockSource()
        self.performance_counter = (
            performance_counter
            if performance_counter is not None
            else create_performance_counter_source()
        )
        self.cycle_counter = (
            cycle_counter if cycle_counter is not None else CycleCounterSource()
        )

    def gather_hardware_entropy(self) -> int:
        """
        Raises:
            EntropySourceError: If the OS random source fails.
        """
        return self.hardware.read() & MASK_32

    def gather_wall_clock_entropy(self) -> int:
        return self.wall_clock.read() & MASK_32

    def gather_performance_counter_entropy(self) -> int:
        return self.performance_counter.read() & MASK_32

    def gather_cpu_cycle_entropy(self) -> int:
        return self.cycle_counter.read() & MASK_32

    mix = staticmethod(mix)

    def derive_seed(self) -> int:
        """
        Run the seeding pipeline.

        base   = hardware + wall clock (mod 2**32)
        mixed1 = mix(base, performance counter)
        mixed2 = mix(base, cycle counter)
        seed   = mix(base, mixed2)

        mixed1 never reaches the seed. It is still computed and logged so
        the performance counter is sampled at the same point as before.
        A zero seed is returned as-is.

        Returns:
            Unsigned 32-bit seed.

        Raises:
            EntropySourceError: If the OS random source fails.
        """
        hardware = self.gather_hardware_entropy()
        wall_clock = self.gather_wall_clock_entropy()
        base = (hardware + wall_clock) & MASK_32
        logger.debug("time-adjusted hardware entropy: %d", base)

        performance = self.gather_performance_counter_entropy()
        logger.debug("performance counter: %d", performance)
        mixed1 = self.mix(base, performance)
        logger.debug("entropy mix one: %d", mixed1)

        cycles = self.gather_cpu_cycle_entropy()
        logger.debug("cpu timing: %d", cycles)
        mixed2 = self.mix(base, cycles)

        seed = self.mix(base, mixed2)
        logger.debug("final seed: %d", seed)
        return seed


def create_entropy_collector() -> EntropyCollector:
    """
    Factory for a collector wired to the platform's default sources.

    Returns:
        EntropyCollector instance.
    """
    return EntropyCollector(
        hardware=OsRandomSource(),
        wall_clock=WallClockSource(),
        performance_counter=create_performance_counter_source(),
        cycle_counter=CycleCounterSource(),
    )
