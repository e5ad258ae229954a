"""
Instrumented array operations.

Every helper here is a generator meant to be used with `yield from` inside an
algorithm. It updates the run's statistics, performs the operation and yields
exactly one Step describing it. `compare` hands its result back through
`yield from`:

    if (yield from ops.compare(arr, j, j + 1)):
        yield from ops.swap(arr, j, j + 1)

Algorithms never assign into the sequence themselves; `swap` and `write` are
the only mutators.
"""

import random

from .frames import Highlight, Step


class Ops:
    def __init__(self, stats, rng=None):
        self.stats = stats
        self.rng   = rng or random.Random()

    def compare(self, seq, i, j):
        self.stats.count_comparison()
        yield Step((i, j), Highlight.COMPARING)
        return seq[i] > seq[j]

    def swap(self, seq, i, j):
        self.stats.count_access(2)
        seq[i], seq[j] = seq[j], seq[i]
        yield Step((i, j), Highlight.SWAPPING)

    def write(self, seq, i, value):
        self.stats.count_access()
        seq[i] = value
        yield Step((i,), Highlight.SWAPPING)

    def probe(self, *indices):
        """A counted comparison whose decision the caller computes inline."""
        self.stats.count_comparison()
        yield Step(tuple(indices), Highlight.COMPARING)

    def read(self, seq, i):
        """A counted, framed element read (radix/bucket passes)."""
        self.stats.count_access()
        yield Step((i,), Highlight.COMPARING)
        return seq[i]

    def touch(self, n=1):
        """Count accesses that produce no frame."""
        self.stats.count_access(n)
