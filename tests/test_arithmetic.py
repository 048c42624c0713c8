import pytest
from sympy import isprime

from gpf_arithmetic import (divide_out, is_prime, isqrt, smallest_multiple_not_less_than,
                            smallest_strict_multiple_not_less_than)
from gpf_errors import PreconditionError


def test_is_prime_agrees_with_sympy():
    for n in range(0, 2000):
        assert is_prime(n) == isprime(n), n


def test_isqrt():
    assert isqrt(0) == 0
    assert isqrt(15) == 3
    assert isqrt(16) == 4
    assert isqrt(10**7) == 3162
    assert isqrt((1 << 64) - 1) == (1 << 32) - 1
    with pytest.raises(PreconditionError):
        isqrt(-1)


def test_divide_out():
    assert divide_out(96, 2) == 3
    assert divide_out(81, 3) == 1
    assert divide_out(35, 2) == 35
    assert divide_out(0, 7) == 0


def test_divide_out_rejects_zero_divisor():
    with pytest.raises(PreconditionError):
        divide_out(12, 0)
    # precondition errors are also ValueErrors
    with pytest.raises(ValueError):
        divide_out(12, 0)


def test_smallest_multiple_not_less_than():
    assert smallest_multiple_not_less_than(3, 0) == 0
    assert smallest_multiple_not_less_than(3, 7) == 9
    assert smallest_multiple_not_less_than(3, 9) == 9
    assert smallest_multiple_not_less_than(7, 1) == 7


def test_smallest_strict_multiple_skips_zero_and_self():
    assert smallest_strict_multiple_not_less_than(2, 0) == 4
    assert smallest_strict_multiple_not_less_than(5, 3) == 10
    assert smallest_strict_multiple_not_less_than(5, 5) == 10
    assert smallest_strict_multiple_not_less_than(5, 11) == 15
    assert smallest_strict_multiple_not_less_than(5, 15) == 15
