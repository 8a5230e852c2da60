import numpy as np
import pytest

from mt19937 import MASK_32, MT19937, bits_to_int, int_to_bits

# First outputs of the reference MT19937 with seed 5489
REFERENCE_5489 = [3499211612, 581869302, 3890346734, 3586334585, 545404204]


def test_reference_outputs_for_default_seed() -> None:
    mt = MT19937(5489)
    assert mt.generate_sequence(5) == REFERENCE_5489


def test_ten_thousandth_output_for_default_seed() -> None:
    mt = MT19937()
    for _ in range(9999):
        mt.next()
    assert mt.next() == 4123659995


def test_same_seed_same_sequence() -> None:
    a = MT19937(12345)
    b = MT19937(12345)
    assert a.generate_sequence(2000) == b.generate_sequence(2000)


def test_different_seeds_diverge() -> None:
    assert MT19937(1).generate_sequence(10) != MT19937(2).generate_sequence(10)


def test_initialization_recurrence() -> None:
    seed = 19650218
    mt = MT19937(seed)
    expected = (1_812_433_253 * (seed ^ (seed >> 30)) + 1) & MASK_32
    assert mt.mt[0] == seed
    assert mt.mt[1] == expected
    assert mt.mt[1] == 2194844435


def test_fresh_generator_is_exhausted_until_first_output() -> None:
    mt = MT19937(42)
    assert mt.index == MT19937.N
    mt.next()
    assert mt.index == 1


def test_zero_seed_is_a_plain_seed_for_the_engine() -> None:
    mt = MT19937(0)
    assert mt.mt[0] == 0
    assert mt.mt[1] == 1
    assert len(mt.mt) == MT19937.N


def test_max_seed_wraps_without_error() -> None:
    mt = MT19937(0xFFFFFFFF)
    assert len(mt.state_array) == 624
    assert all(isinstance(w, int) and 0 <= w <= MASK_32 for w in mt.mt)
    out = mt.generate_sequence(1300)
    assert all(0 <= v <= MASK_32 for v in out)
    assert all(0 <= w <= MASK_32 for w in mt.mt)


def test_state_matches_numpy_legacy_seeding() -> None:
    for seed in (1, 5489, 19650218, 0xFFFFFFFF):
        key = np.random.RandomState(seed).get_state()[1]
        assert MT19937(seed).mt == key.tolist()


def test_outputs_match_numpy_mt19937() -> None:
    mt = MT19937(20240607)
    bg = np.random.MT19937()
    bg.state = {
        "bit_generator": "MT19937",
        "state": {"key": np.array(mt.mt, dtype=np.uint32), "pos": 624},
    }
    expected = bg.random_raw(1500).tolist()
    assert mt.generate_sequence(1500) == expected


def test_twist_once_every_624_outputs(monkeypatch) -> None:
    mt = MT19937(7)
    calls = []
    original = mt.twist

    def counting_twist():
        calls.append(mt.index)
        original()

    monkeypatch.setattr(mt, "twist", counting_twist)

    for _ in range(624):
        mt.next()
    assert len(calls) == 1
    assert mt.index == 624

    mt.next()
    assert len(calls) == 2
    assert mt.index == 1


def test_twist_wraparound_reads_updated_first_word() -> None:
    mt = MT19937(99)
    before = list(mt.mt)
    mt.twist()

    n, m = MT19937.N, MT19937.M
    y = (before[n - 1] & MT19937.UPPER_MASK) | (mt.mt[0] & MT19937.LOWER_MASK)
    last = mt.mt[m - 1] ^ (y >> 1)
    if y & 1:
        last ^= MT19937.A
    assert mt.mt[n - 1] == last
    assert mt.index == 0


def test_twist_keeps_state_list_in_place() -> None:
    mt = MT19937(3)
    state = mt.mt
    mt.generate_sequence(2000)
    assert mt.mt is state
    assert len(state) == 624


def test_temper_known_values() -> None:
    assert MT19937.temper(0) == 0
    assert MT19937.temper(1) == 0x00400091
    assert MT19937.temper(0xFFFFFFFF) == 0x6FE01BF8


def test_temper_is_pure() -> None:
    mt = MT19937(11)
    state, index = mt.get_state()
    for y in (0x12345678, 0xDEADBEEF, 0x80000000):
        assert mt.temper(y) == mt.temper(y)
    assert mt.get_state() == (state, index)


def test_extract_with_internal_tempers_the_state_word() -> None:
    mt = MT19937(5489)
    internals, outputs = mt.generate_with_states(700)
    assert outputs[:5] == REFERENCE_5489
    assert all(MT19937.temper(i) == o for i, o in zip(internals, outputs))


def test_iterator_protocol() -> None:
    mt = MT19937(5489)
    assert next(mt) == REFERENCE_5489[0]
    it = iter(mt)
    assert [next(it) for _ in range(4)] == REFERENCE_5489[1:]


def test_set_state_restores_sequence() -> None:
    mt = MT19937(31337)
    mt.generate_sequence(100)
    state, index = mt.get_state()
    expected = mt.generate_sequence(1000)

    other = MT19937(1)
    other.set_state(state, index)
    assert other.generate_sequence(1000) == expected


def test_get_state_returns_copy() -> None:
    mt = MT19937(5)
    state, _ = mt.get_state()
    state[0] ^= 1
    assert mt.mt[0] == 5


@pytest.mark.parametrize("index", [-1, 625])
def test_set_state_rejects_bad_index(index) -> None:
    mt = MT19937()
    with pytest.raises(ValueError):
        mt.set_state([0] * 624, index)


def test_set_state_rejects_wrong_length() -> None:
    with pytest.raises(ValueError):
        MT19937().set_state([0] * 623)


def test_bit_helpers() -> None:
    bits = int_to_bits(0xDEADBEEF)
    assert len(bits) == 32
    assert bits[0] == 1  # 0xF, LSB first
    assert bits_to_int(bits) == 0xDEADBEEF
