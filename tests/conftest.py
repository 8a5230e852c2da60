import pytest

from entropy_sources import EntropyCollector, EntropySource


class FixedSource(EntropySource):
    """Returns the same value on every read and counts the reads."""

    name = "fixed"

    def __init__(self, value):
        self.value = value
        self.reads = 0

    def read(self):
        self.reads += 1
        return self.value


class FailingSource(EntropySource):
    name = "failing"

    def read(self):
        raise AssertionError("source should not have been read")


@pytest.fixture
def fixed_source():
    return FixedSource


@pytest.fixture
def failing_source():
    return FailingSource()


@pytest.fixture
def fixed_collector():
    # derive_seed() of this collector is 0xBBD89355
    return EntropyCollector(
        hardware=FixedSource(0xDEADBEEF),
        wall_clock=FixedSource(0x30000000),
        performance_counter=FixedSource(0x0BADF00D),
        cycle_counter=FixedSource(0x12345678),
    )
