# gpf_arithmetic.py
"""
Small integer helpers shared by the basis builder and the segment reducer.

The trial division primality test is slow, and is only meant for the basis
table, which never grows beyond the square root of the upper bound.
"""

from math import isqrt as _isqrt

from gpf_errors import PreconditionError


def is_prime(n):
    """Trial division primality check. Use sparingly."""
    if n <= 1:
        return False
    i = 2
    while i * i <= n:
        if n % i == 0:
            return False
        i += 1
    return True


def isqrt(n):
    """Integer square root, exact for arbitrarily large n."""
    if n < 0:
        raise PreconditionError(f"isqrt() of negative number {n}")
    return _isqrt(n)


def divide_out(n, f):
    """
    Return n / f^m, where f^m is the greatest power of f dividing n.

    Zero has every power of f as a divisor, so it is returned unchanged.
    """
    if n == 0:
        return n
    if f == 0:
        raise PreconditionError("divide_out() called with a divisor of zero")
    if f == 1:
        raise PreconditionError("divide_out() called with a divisor of one")
    while n % f == 0:
        n //= f
    return n


def smallest_multiple_not_less_than(n, a):
    """Smallest multiple of n that is >= a."""
    if n <= 0:
        raise PreconditionError(f"multiples of {n} are not supported")
    return -(-a // n) * n


def smallest_strict_multiple_not_less_than(n, a):
    """
    Smallest multiple of n that is >= a, skipping 0 and n itself.

    The reducer starts here: n already holds its own GPF, and 0 is pinned
    to zero by convention.
    """
    i = smallest_multiple_not_less_than(n, a)
    if i <= n:
        i = 2 * n
    return i
