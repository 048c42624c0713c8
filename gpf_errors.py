# gpf_errors.py
"""
Exceptions raised by the segmented GPF summation engine.

Every failure the engine can hit is a GPFError, so a caller can catch one
type and decide whether to abort or to retry with corrected inputs. None of
these is ever raised after a partial sum has been handed back; a run either
completes every segment or returns nothing.
"""


class GPFError(Exception):
    """Base class for all engine errors."""


class PreconditionError(GPFError, ValueError):
    """A caller passed bounds, sizes or divisors the engine cannot work with."""


class AllocationError(GPFError, MemoryError):
    """The basis table or the slate could not be allocated."""


class ConversionError(GPFError):
    """The running total could not be rendered as a decimal string."""


class VerificationError(GPFError):
    """A reduced slot disagreed with the sympy factorization of its integer."""
