"""
Algorithm library, driven directly through the instrumented operations.
"""

import random
from collections import Counter
from functools import total_ordering

import pytest

from sortarena.algorithms import Algorithm
from sortarena.frames import Highlight
from sortarena.ops import Ops
from sortarena.stats import Statistics

DETERMINISTIC = [a for a in Algorithm if a is not Algorithm.BOGO]


def drive(algorithm, values, seed=3):
    seq = list(values)
    stats = Statistics()
    steps = list(algorithm.steps(seq, Ops(stats, random.Random(seed))))
    return seq, stats, steps


def _inputs():
    rng = random.Random(42)
    yield "random", [rng.randint(10, 959) for _ in range(57)]
    yield "duplicates", [rng.randint(0, 5) for _ in range(40)]
    yield "all-equal", [7] * 12
    yield "sorted", list(range(0, 60, 3))
    yield "reversed", list(range(30, 0, -1))
    yield "pair", [2, 1]
    yield "single", [7]
    yield "empty", []


@pytest.mark.parametrize("algorithm", DETERMINISTIC, ids=lambda a: a.value)
@pytest.mark.parametrize("label,values", list(_inputs()), ids=[l for l, _ in _inputs()])
def test_sorts_into_permutation_of_input(algorithm, label, values):
    """Every algorithm leaves a sorted permutation of its input."""
    seq, stats, _ = drive(algorithm, values)
    assert seq == sorted(values)
    assert Counter(seq) == Counter(values)
    assert stats.comparisons >= 0 and stats.accesses >= 0


@pytest.mark.parametrize("values", [[3, 1, 2], [5, 4, 4, 1, 0], [9, 2, 7, 2, 5, 1]])
def test_bogo_eventually_sorts_small_inputs(values):
    """Bogo Sort terminates on tiny inputs with a seeded rng."""
    seq, stats, _ = drive(Algorithm.BOGO, values, seed=11)
    assert seq == sorted(values)
    assert stats.comparisons > 0


@pytest.mark.parametrize("algorithm", list(Algorithm), ids=lambda a: a.value)
@pytest.mark.parametrize("values", [[], [7]])
def test_trivial_inputs_cost_nothing(algorithm, values):
    """Empty and single-element inputs make no comparisons or accesses."""
    seq, stats, steps = drive(algorithm, values)
    assert seq == values
    assert (stats.comparisons, stats.accesses) == (0, 0)
    assert steps == []


def test_bubble_example_counts():
    """[5, 3, 8, 1] takes six comparisons and one swap per inversion."""
    seq, stats, steps = drive(Algorithm.BUBBLE, [5, 3, 8, 1])
    assert seq == [1, 3, 5, 8]
    assert stats.comparisons == 6
    swaps = [s for s in steps if s.kind is Highlight.SWAPPING]
    # four inversions: four swaps of two accesses each
    assert len(swaps) == 4
    assert stats.accesses == 8


def test_radix_example():
    """Radix Sort orders a small mixed-width example."""
    seq, stats, steps = drive(Algorithm.RADIX, [170, 45, 75, 90, 802, 24, 2, 66])
    assert seq == [2, 24, 45, 66, 75, 90, 170, 802]
    # three digit passes, each: n framed reads, n counted moves, n writes
    assert stats.accesses == 3 * 3 * 8
    assert stats.comparisons == 0


def test_radix_rejects_negative_values():
    """Radix Sort refuses negative input instead of mis-sorting it."""
    with pytest.raises(ValueError):
        drive(Algorithm.RADIX, [3, -1, 2])


def test_selection_counts_every_inner_comparison():
    """Selection Sort counts and frames n(n-1)/2 comparisons."""
    values = [9, 4, 7, 1, 3, 8, 2, 6, 5, 0]
    _, stats, steps = drive(Algorithm.SELECTION, values)
    assert stats.comparisons == 45
    assert sum(1 for s in steps if s.kind is Highlight.COMPARING) == 45


@pytest.mark.parametrize("algorithm", [Algorithm.BUBBLE, Algorithm.INSERTION, Algorithm.COCKTAIL],
                         ids=lambda a: a.value)
def test_sorted_input_needs_no_swaps(algorithm):
    """Already sorted input produces no swapping frames."""
    _, stats, steps = drive(algorithm, list(range(25)))
    assert [s for s in steps if s.kind is Highlight.SWAPPING] == []
    assert stats.comparisons > 0


def test_cocktail_stops_after_clean_forward_pass():
    """Cocktail Shaker quits after one pass over sorted input."""
    _, stats, _ = drive(Algorithm.COCKTAIL, list(range(10)))
    assert stats.comparisons == 9


def test_comb_gap_shrinks_to_one():
    """Comb Sort finishes with gap-one comparisons."""
    seq, stats, steps = drive(Algorithm.COMB, [4, 3, 2, 1])
    assert seq == [1, 2, 3, 4]
    # gaps 3, 2, 1, then one clean pass at gap 1
    assert stats.comparisons == 1 + 2 + 3 + 3


@total_ordering
class Card:
    def __init__(self, key, tag):
        self.key, self.tag = key, tag

    def __eq__(self, other):
        return self.key == other.key

    def __lt__(self, other):
        return self.key < other.key

    def __repr__(self):
        return f"{self.key}{self.tag}"


@pytest.mark.parametrize("algorithm", [Algorithm.MERGE, Algorithm.INSERTION], ids=lambda a: a.value)
def test_stable_algorithms_keep_equal_keys_in_order(algorithm):
    """Equal keys keep their relative order."""
    cards = [Card(k, t) for t, k in enumerate([3, 1, 3, 2, 1, 3, 2, 1])]
    seq, _, _ = drive(algorithm, cards)
    assert [c.key for c in seq] == [1, 1, 1, 2, 2, 3, 3, 3]
    for key in (1, 2, 3):
        tags = [c.tag for c in seq if c.key == key]
        assert tags == sorted(tags)


def test_every_mutation_is_framed():
    """Each swap or write is followed by a swapping frame."""
    values = [6, 2, 9, 4, 4, 1, 8]
    seq = list(values)
    stats = Statistics()
    prev = list(seq)
    for step in Algorithm.HEAP.steps(seq, Ops(stats)):
        changed = {i for i, (a, b) in enumerate(zip(prev, seq)) if a != b}
        assert changed <= set(step.indices)
        if changed:
            assert step.kind is Highlight.SWAPPING
        prev = list(seq)


def test_algorithm_titles_and_keys():
    """Every algorithm has a display title and a stable key."""
    assert Algorithm("cocktail") is Algorithm.COCKTAIL
    assert len(Algorithm) == 12
    assert all(a.title for a in Algorithm)
