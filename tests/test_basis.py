import numpy as np
import pytest
from sympy import isprime, primerange

from gpf_basis import basis_for, build_basis
from gpf_errors import AllocationError, PreconditionError


def test_basis_matches_sympy():
    basis = build_basis(500)
    assert len(basis) == 501
    assert basis.limit == 500
    for i in range(501):
        assert basis[i] == isprime(i), i


def test_basis_primes():
    basis = build_basis(100)
    assert basis.primes() == list(primerange(2, 101))
    assert basis.primes(10) == [2, 3, 5, 7]
    assert basis.primes(11) == [2, 3, 5, 7, 11]
    assert basis.primes(1) == []


def test_tiny_bases():
    assert build_basis(0).primes() == []
    assert build_basis(1).primes() == []
    assert build_basis(2).primes() == [2]


def test_basis_is_read_only():
    basis = build_basis(20)
    with pytest.raises(ValueError):
        basis.table[4] = True


def test_basis_for_upper_bound():
    basis = basis_for(10**6)
    assert basis.limit == 1000
    assert basis.covers(10**6)
    assert basis.covers(1000 * 1000 + 2000)
    assert not basis.covers(1001 * 1001)


def test_negative_limit():
    with pytest.raises(PreconditionError):
        build_basis(-1)


def test_primes_are_python_ints():
    assert all(type(p) is int for p in build_basis(50).primes())
    assert build_basis(50).table.dtype == np.bool_


def test_basis_too_large_to_allocate():
    with pytest.raises(AllocationError):
        build_basis(1 << 62)
    with pytest.raises(MemoryError):
        build_basis(1 << 62)
