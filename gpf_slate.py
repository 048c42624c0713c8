# gpf_slate.py
"""
A slate is a blank array of unsigned 64 bit integers on which one segment
[a, b) of the interval is worked out. It is allocated once and reset for
every segment, so its capacity bounds the memory used by the whole run.
"""

import numpy as np

from gpf_errors import AllocationError, PreconditionError

UINT64_LIMIT = 1 << 64   # every value on the slate must stay below this
SUM_CHUNK = 1 << 24      # slots per block when summing; keeps each half-word sum under 2**64


def check_segment(a, b, capacity):
    """Raise PreconditionError unless [a, b) is a non-empty segment that fits."""
    if a < 0:
        raise PreconditionError(f"lower bound must be non-negative, got {a}")
    if b <= a:
        raise PreconditionError(f"upper bound must be strictly greater than lower bound, got [{a}, {b})")
    if b - a > capacity:
        raise PreconditionError(f"slate capacity {capacity:,} is smaller than segment length {b - a:,}")
    if b > UINT64_LIMIT:
        raise PreconditionError(f"upper bound {b} does not fit in an unsigned 64 bit slot")


class Slate:
    """Fixed-capacity uint64 working buffer for one segment at a time."""

    WIDTH = np.dtype(np.uint64).itemsize  # bytes per slot

    def __init__(self, capacity):
        if capacity < 1:
            raise PreconditionError(f"slate capacity must be positive, got {capacity}")
        try:
            self.values = np.zeros(capacity, dtype=np.uint64)
        except (MemoryError, ValueError) as e:
            raise AllocationError(f"could not allocate a slate of {capacity:,} slots") from e
        self.capacity = capacity
        self.a = 0
        self.b = 0

    def __len__(self):
        return self.capacity

    @property
    def segment(self):
        return self.a, self.b

    @property
    def active(self):
        """The slots belonging to the current segment."""
        return self.values[:self.b - self.a]

    def set_zero(self):
        self.values[:] = 0
        self.a = self.b = 0

    def reset_to_identity(self, a, b):
        """
        Set the slate to [a, a+1, ..., b-1] and zero the rest.

        Zeroing the tail matters when a short final segment follows a full
        one: the stale values would otherwise end up in the sum.
        """
        check_segment(a, b, self.capacity)
        n = b - a
        self.values[:n] = np.arange(n, dtype=np.uint64)
        self.values[:n] += np.uint64(a)
        self.values[n:] = 0
        self.a, self.b = a, b

    def sum(self):
        """
        Exact sum of every slot, as a Python int.

        Each block is split into high and low 32 bit halves so the numpy sums
        cannot wrap; the halves are recombined with arbitrary precision.
        """
        total = 0
        low_mask = np.uint64(0xFFFFFFFF)
        shift = np.uint64(32)
        for start in range(0, self.capacity, SUM_CHUNK):
            block = self.values[start:start + SUM_CHUNK]
            low = int(np.sum(block & low_mask, dtype=np.uint64))
            high = int(np.sum(block >> shift, dtype=np.uint64))
            total += (high << 32) + low
        return total


def create_slate(capacity):
    return Slate(capacity)
