#!/usr/bin/env python3
# Segmented_GPF_Sum.py
"""
Sums the greatest prime factor of every integer in a half-open interval
[A, B), sieving it in segments so that memory stays bounded however large B
gets. GPF(0) and GPF(1) count as 0.

Run as:
    python Segmented_GPF_Sum.py N segment_size           (interval [0, N))
    python Segmented_GPF_Sum.py A B segment_size
    python Segmented_GPF_Sum.py A B segment_bytes --bytes

Options:
    --bytes          segment size is given in bytes of slate (8 bytes per integer)
    --report FILE    write a CSV of every segment's sum and the running sum
    --verify         spot check reduced segments against sympy factorizations, and
                     for intervals of up to VERIFY_LIMIT integers compare the
                     total with a sympy brute force sum
    --quiet          print only the final sum
    --verbose        also print each sieving prime

Example: the GPFs of 0..9 are 0, 0, 2, 3, 2, 5, 3, 7, 2, 3, so
    python Segmented_GPF_Sum.py 10 10
prints 27 as its last line, and adding GPF(10) = 5,
    python Segmented_GPF_Sum.py 2 11 3
prints 32.
"""

import argparse
import sys

from gpf_errors import GPFError, VerificationError
from gpf_slate import Slate
from gpf_sum import GPFSummation, format_sum, naive_sum_gpf

VERIFY_SAMPLES = 16   # slots checked against sympy per segment with --verify
VERIFY_LIMIT = 100_000  # longest interval whose total --verify recomputes by brute force


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='Sum the greatest prime factors of the integers in [A, B) with a segmented sieve',
        epilog='GPF(0) and GPF(1) are taken to be 0.'
    )
    parser.add_argument('bounds', type=int, nargs='+', metavar='INT',
                        help='N segment_size for [0, N), or A B segment_size for [A, B)')
    parser.add_argument('--bytes', action='store_true',
                        help=f'interpret the segment size in bytes ({Slate.WIDTH} per integer)')
    parser.add_argument('--report', metavar='FILE', help='write a per-segment CSV report')
    parser.add_argument('--verify', action='store_true',
                        help=f'check against sympy (the whole total up to {VERIFY_LIMIT:,} integers)')
    parser.add_argument('--quiet', action='store_true', help='suppress progress output')
    parser.add_argument('--verbose', action='store_true', help='also print each sieving prime')

    args = parser.parse_args(argv)
    if len(args.bounds) == 2:
        args.a = 0
        args.b, args.size = args.bounds
    elif len(args.bounds) == 3:
        args.a, args.b, args.size = args.bounds
    else:
        parser.error('expected N segment_size or A B segment_size')
    if args.bytes:
        args.size //= Slate.WIDTH
    return args


def main(argv=None):
    args = parse_args(argv)
    verbose = 0 if args.quiet else (2 if args.verbose else 1)

    try:
        summation = GPFSummation(args.a, args.b, args.size, verbose=verbose,
                                 check_samples=VERIFY_SAMPLES if args.verify else 0)
        total = summation.run()
        if args.verify and args.b - args.a <= VERIFY_LIMIT:
            expected = naive_sum_gpf(args.a, args.b)
            if total != expected:
                raise VerificationError(f"total {total} disagrees with the brute force sum {expected}")
        total = format_sum(total)
        if args.report:
            summation.export_report(args.report)
    except GPFError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if verbose:
        print(f"interval:\t[{args.a:,}, {args.b:,})\ntotal sum:\t{total}")
    print(total)
    return 0


if __name__ == "__main__":
    sys.exit(main())
