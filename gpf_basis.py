# gpf_basis.py
"""
The basis is nothing more than a table of booleans giving the primality of
each integer from 0 up to the square root of the overall upper bound. It is
built once per summation and then only read, so a single instance can be
shared by every segment.
"""

import numpy as np

from gpf_arithmetic import is_prime, isqrt
from gpf_errors import AllocationError, PreconditionError


class Basis:
    """Read-only primality flags for 0..limit inclusive."""

    def __init__(self, flags):
        self.table = flags
        self.table.flags.writeable = False
        self.limit = len(flags) - 1
        self._primes = np.flatnonzero(flags)

    def __len__(self):
        return len(self.table)

    def __getitem__(self, i):
        return bool(self.table[i])

    def covers(self, n):
        """True if the table reaches isqrt(n), i.e. it can drive a segment ending at n."""
        return isqrt(n) <= self.limit

    def primes(self, upto=None):
        """List of the primes in the table that are <= upto."""
        if upto is None:
            return self._primes.tolist()
        count = np.searchsorted(self._primes, upto, side='right')
        return self._primes[:count].tolist()


def build_basis(limit):
    """
    Return the Basis for 0..limit inclusive.

    Each entry is decided by trial division. That is quadratic-ish, but limit
    is the square root of the upper bound, so it runs over a small range
    exactly once.
    """
    if limit < 0:
        raise PreconditionError(f"basis limit must be non-negative, got {limit}")
    try:
        flags = np.zeros(limit + 1, dtype=bool)
    except (MemoryError, ValueError) as e:
        raise AllocationError(f"could not allocate a basis of {limit + 1:,} entries") from e

    for i in range(2, limit + 1):
        flags[i] = is_prime(i)

    return Basis(flags)


def basis_for(upper):
    """Basis covering every segment of an interval that ends at upper."""
    return build_basis(isqrt(upper))
