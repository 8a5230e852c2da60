"""
MT19937 (Mersenne Twister) engine
Seeds a 624-word state array and produces tempered 32-bit outputs
"""

MASK_32 = 0xFFFFFFFF


class MT19937:
    """
    Mersenne Twister MT19937 state machine

    The state array is created once and then only twisted in place.
    index == N means the array is exhausted (or freshly seeded) and
    must be twisted before the next read.
    """

    # MT19937 parameters
    N = 624  # degree of recurrence
    M = 397  # middle word offset
    R = 31  # separation point of one word
    A = 0x9908B0DF  # twist matrix parameter
    F = 1812433253  # initialization multiplier

    # Tempering parameters
    U = 11
    S = 7
    B = 0x9D2C5680
    T = 15
    C = 0xEFC60000
    L = 18

    LOWER_MASK = (1 << R) - 1  # 0x7FFFFFFF
    UPPER_MASK = (~LOWER_MASK) & MASK_32  # 0x80000000

    def __init__(self, seed=5489):
        """
        :param seed: 32-bit initialization seed (default: 5489)
        """
        self.mt = [0] * self.N
        self.index = self.N
        self.initialize(seed)

    @property
    def state_array(self):
        """The 624-word state, twisted in place"""
        return self.mt

    def initialize(self, seed):
        """
        Expand a seed into the state array
        :param seed: seed value, truncated to 32 bits
        """
        mt = self.mt
        mt[0] = seed & MASK_32
        for i in range(1, self.N):
            prev = mt[i - 1]
            mt[i] = (self.F * (prev ^ (prev >> 30)) + i) & MASK_32
        self.index = self.N

    def twist(self):
        """
        Regenerate all N words in place

        The pass is strictly forward, so the wraparound at i = N - 1
        reads mt[0] after it was already rewritten in this pass.
        """
        mt = self.mt
        n = self.N
        for i in range(n):
            y = (mt[i] & self.UPPER_MASK) | (mt[(i + 1) % n] & self.LOWER_MASK)
            value = mt[(i + self.M) % n] ^ (y >> 1)
            if y & 1:
                value ^= self.A
            mt[i] = value
        self.index = 0

    @classmethod
    def temper(cls, y):
        """
        Tempering function: transforms a state word into an output
        :param y: internal state value
        :return: tempered output value
        """
        y ^= y >> cls.U
        y ^= (y << cls.S) & cls.B
        y ^= (y << cls.T) & cls.C
        y ^= y >> cls.L
        return y & MASK_32

    def next(self):
        """
        Extract a tempered value (standard MT19937 output)
        :return: 32-bit random number
        """
        if self.index >= self.N:
            self.twist()

        y = self.mt[self.index]
        self.index += 1
        return self.temper(y)

    def __iter__(self):
        return self

    __next__ = next

    def extract_with_internal(self):
        """
        Extract both internal state and tempered output
        :return: (internal_state, tempered_output) tuple
        """
        if self.index >= self.N:
            self.twist()

        y_internal = self.mt[self.index]
        self.index += 1
        return y_internal, self.temper(y_internal)

    def get_state(self):
        """
        :return: (copy of state array, index)
        """
        return self.mt.copy(), self.index

    def set_state(self, state, index=None):
        """
        Replace the internal state
        :param state: state array (624 values)
        :param index: optional index value in [0, 624]
        """
        if len(state) != self.N:
            raise ValueError(f"State must have {self.N} elements")
        if index is not None and not 0 <= index <= self.N:
            raise ValueError(f"Index must be in [0, {self.N}], got {index}")
        # keep the same list object; the array is never reallocated
        self.mt[:] = [int(word) & MASK_32 for word in state]
        if index is not None:
            self.index = index

    def generate_sequence(self, n):
        """
        :param n: number of values to generate
        :return: list of n random numbers
        """
        return [self.next() for _ in range(n)]

    def generate_with_states(self, n):
        """
        :param n: number of values to generate
        :return: (internal_states, tempered_outputs) tuple of lists
        """
        internals = []
        outputs = []

        for _ in range(n):
            internal, tempered = self.extract_with_internal()
            internals.append(internal)
            outputs.append(tempered)

        return internals, outputs


def int_to_bits(value, num_bits=32):
    """
    Convert integer to bit array
    :param value: integer value
    :param num_bits: number of bits (default 32)
    :return: list of bits [b0, b1, ..., b31] (LSB first)
    """
    return [(value >> i) & 1 for i in range(num_bits)]


def bits_to_int(bits):
    """
    Convert bit array to integer
    :param bits: list of bits (LSB first)
    :return: integer value
    """
    return sum(bit << i for i, bit in enumerate(bits))
