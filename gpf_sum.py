# gpf_sum.py
"""
Sum of the greatest prime factor (GPF) of every integer in [A, B), worked out
segment by segment on a reusable slate.

DISCUSSION: Start with the slate holding every integer of the segment [a, b).
Since 0 and 1 have no prime factors, both are overwritten with 0.

Take the prime p = 2. For every multiple of 2 on the slate other than 2
itself, divide by 2 until it no longer divides. If what is left is 1, the
integer was a power of 2 and its GPF is 2, so 2 is written back; otherwise
the cofactor is written back. Then do the same with p = 3, dividing whatever
the slot holds now, and so on for every prime up to isqrt(b).

What is left in a slot after the last prime is either 0, a prime p written
back when the cofactor hit 1, or a cofactor with no prime factor <= isqrt(b).
Such a cofactor cannot be composite, because a composite has a prime factor
no larger than its own square root, so it is the GPF. The argument never
looks at where the segment starts, so any partition of [A, B) into segments
gives the same total.

An older variant marked multiples of each prime instead of dividing, and
treated unmarked residues as primes. Its total depended on the segment size
whenever segments did not start at 0, and it is not used here.
"""

from collections import namedtuple

import numpy as np
import pandas as pd
from sympy import primefactors

from gpf_arithmetic import divide_out, isqrt, smallest_strict_multiple_not_less_than
from gpf_basis import basis_for
from gpf_errors import ConversionError, PreconditionError, VerificationError
from gpf_slate import Slate, UINT64_LIMIT, check_segment

MAX_SEGMENT_SIZE = 10_000_000    # ceiling on slate capacity (80 MB of uint64)
DEFAULT_SEGMENT_SIZE = 1_000_000
SCALAR_CUTOFF = 4                # views this short are divided out one slot at a time
VERBOSE_PRIME_LIMIT = 1000       # with verbose >= 2, announce each prime below this
HIGHER_PRIMES_MARK = 1013        # and from this prime on, announce the rest once

SegmentResult = namedtuple('SegmentResult', ['segment', 'start', 'end', 'segment_sum', 'running_sum'])


def greatest_prime_factor(n):
    """GPF of a single integer by sympy factorization, 0 for n in {0, 1}."""
    if n < 2:
        return 0
    return primefactors(n)[-1]


def naive_sum_gpf(a, b):
    """Brute force reference sum over [a, b). Only practical for small intervals."""
    if b <= a:
        raise PreconditionError(f"upper bound must be strictly greater than lower bound, got [{a}, {b})")
    return sum(greatest_prime_factor(i) for i in range(max(a, 2), b))


def _divide_out_view(view, p):
    """Divide every slot of view by p until p no longer divides, then map 1 -> p."""
    if len(view) <= SCALAR_CUTOFF:
        for k in range(len(view)):
            u = divide_out(int(view[k]), p)
            view[k] = p if u == 1 else u
        return

    up = np.uint64(p)
    hit = (view % up == 0) & (view != 0)
    while hit.any():
        view[hit] //= up
        hit = (view % up == 0) & (view != 0)
    view[view == 1] = up


def reduce_segment(slate, basis, verbose=0):
    """
    Turn the identity-filled slate for its segment [a, b) into GPF values.

    The slate must have been reset to the segment, and the basis must reach
    isqrt(b). Afterwards slate.active[i - a] == GPF(i) for every i in [a, b).
    """
    a, b = slate.segment
    if b <= a:
        raise PreconditionError("slate has not been reset to a segment")
    if not basis.covers(b):
        raise PreconditionError(f"basis up to {basis.limit:,} does not reach isqrt({b}) = {isqrt(b):,}")

    values = slate.active

    # 0 and 1 have no prime factors.
    if a <= 1:
        values[:2 - a] = 0

    for p in basis.primes(isqrt(b)):
        if verbose >= 2:
            if p < VERBOSE_PRIME_LIMIT:
                print(f"Dividing by {p}...")
            elif p == HIGHER_PRIMES_MARK:
                print("Dividing by higher primes...")

        i = smallest_strict_multiple_not_less_than(p, a)
        if i >= b:
            continue
        _divide_out_view(values[i - a::p], p)

    return slate


def partial_sum_gpf(a, b, slate, basis, verbose=0):
    """
    Sum of GPF(i) for i in [a, b), worked out on the given slate.

    The slate is reset, reduced and summed; its previous contents are lost.
    """
    check_segment(a, b, slate.capacity)
    if verbose:
        print(f"Summing between {a:,} and {b:,}...")
    slate.reset_to_identity(a, b)
    reduce_segment(slate, basis, verbose=verbose)
    return slate.sum()


def check_slate(slate, samples):
    """
    Compare up to `samples` evenly spaced reduced slots against sympy.

    Raises VerificationError on the first disagreement.
    """
    if samples < 1:
        raise PreconditionError(f"need at least one sample to check, got {samples}")
    a, b = slate.segment
    n = b - a
    step = max(1, n // samples)
    for offset in range(0, n, step):
        expected = greatest_prime_factor(a + offset)
        got = int(slate.values[offset])
        if got != expected:
            raise VerificationError(f"GPF({a + offset}) came out as {got}, sympy says {expected}")


def format_sum(total):
    """Decimal rendering of the total."""
    try:
        return str(total)
    except ValueError as e:
        raise ConversionError(f"could not convert the total to a decimal string: {e}") from e


class GPFSummation:
    """
    Drives the summation over [A, B) one segment at a time.

    The run goes through four states:
    1. IDLE - bounds validated, nothing allocated
    2. BASIS_BUILT - primality table up to isqrt(B) and the slate exist
    3. ACCUMULATING - segments are being reduced and added to the running sum
    4. DONE - every segment has been added; `total` is available

    A run that fails part way stays in ACCUMULATING and never exposes its
    running sum as a result.
    """

    IDLE = 'idle'
    BASIS_BUILT = 'basis_built'
    ACCUMULATING = 'accumulating'
    DONE = 'done'

    def __init__(self, a, b, segment_size=DEFAULT_SEGMENT_SIZE, verbose=0, check_samples=0):
        if a < 0:
            raise PreconditionError(f"lower bound must be non-negative, got {a}")
        if b <= a:
            raise PreconditionError(f"upper bound must be strictly greater than lower bound, got [{a}, {b})")
        if b > UINT64_LIMIT:
            raise PreconditionError(f"upper bound {b} does not fit in an unsigned 64 bit slot")
        if segment_size < 1:
            raise PreconditionError(f"segment size must be positive, got {segment_size}")

        self.a = a
        self.b = b
        self.requested_size = segment_size
        self.segment_size = min(segment_size, b - a, MAX_SEGMENT_SIZE)
        self.verbose = verbose
        self.check_samples = check_samples

        self.state = self.IDLE
        self.basis = None
        self.slate = None
        self.results = []
        self._running = 0
        self._total = None

    def prepare(self, basis=None):
        """Build (or adopt) the basis and allocate the slate."""
        if self.state != self.IDLE:
            return
        if basis is None:
            if self.verbose:
                print(f"Building basis up to {isqrt(self.b):,}...")
            basis = basis_for(self.b)
        elif not basis.covers(self.b):
            raise PreconditionError(f"basis up to {basis.limit:,} does not reach isqrt({self.b}) = {isqrt(self.b):,}")
        self.basis = basis
        self.slate = Slate(self.segment_size)
        self.state = self.BASIS_BUILT

    def segments(self):
        """Consecutive [start, end) windows covering [A, B), the last possibly shorter."""
        q, r = divmod(self.b - self.a, self.segment_size)
        for k in range(q):
            yield self.a + k * self.segment_size, self.a + (k + 1) * self.segment_size
        if r > 0:
            yield self.a + q * self.segment_size, self.b

    def run(self):
        """Process every segment and return the total. Repeated calls return the same total."""
        if self.state == self.DONE:
            return self._total
        self.prepare()

        self.state = self.ACCUMULATING
        self._running = 0
        self.results = []
        for k, (start, end) in enumerate(self.segments()):
            segment_sum = partial_sum_gpf(start, end, self.slate, self.basis, verbose=self.verbose)
            if self.check_samples:
                check_slate(self.slate, self.check_samples)
            self._running += segment_sum
            self.results.append(SegmentResult(k, start, end, segment_sum, self._running))
            if self.verbose:
                print(f"running interval:\t[{self.a:,}, {end:,})\nrunning sum:\t{format_sum(self._running)}")

        self._total = self._running
        self.state = self.DONE
        return self._total

    @property
    def total(self):
        if self.state != self.DONE:
            raise PreconditionError("the summation has not completed")
        return self._total

    def report_frame(self):
        """Per-segment results as a DataFrame; sums are kept as Python ints."""
        frame = pd.DataFrame(self.results, columns=SegmentResult._fields)
        for column in ('segment_sum', 'running_sum'):
            frame[column] = frame[column].astype(object)
        return frame

    def export_report(self, path):
        """Write the per-segment table to a CSV file."""
        frame = self.report_frame()
        frame.to_csv(path, index=False)
        if self.verbose:
            print(f"Exported segment report to {path}")
        return path


def total_sum_gpf(a, b, segment_size=DEFAULT_SEGMENT_SIZE, basis=None, verbose=0):
    """
    Sum of GPF(i) over [a, b), using segments of at most segment_size integers.

    The result is an exact Python int regardless of how large it gets.
    """
    summation = GPFSummation(a, b, segment_size, verbose=verbose)
    summation.prepare(basis)
    return summation.run()
