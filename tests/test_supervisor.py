"""
Run supervisor: driving a run, the confirmation sweep, abort and failure.
"""

import random
import time

import pytest
from conftest import RecordingAudio, RecordingViewport, fast_context, supervise

from sortarena.algorithms import Algorithm
from sortarena.frames import Highlight
from sortarena.supervisor import Run, RunState


def test_run_settles_and_sweeps_left_to_right():
    """A finished run settles bars one by one from the left."""
    vp = RecordingViewport()
    run = supervise(Algorithm.QUICK, [4, 9, 1, 7, 3], viewport=vp)
    assert run.state is RunState.SETTLED
    assert run.sequence == [1, 3, 4, 7, 9]

    sweep = vp.frames[-6:]
    assert sweep[0][1] == [Highlight.IDLE] * 5
    for i, (_, tags) in enumerate(sweep[1:], start=1):
        assert tags == [Highlight.SETTLED] * i + [Highlight.IDLE] * (5 - i)


def test_sweep_plays_every_fourth_index():
    """The sweep plays a tone on every fourth bar."""
    audio = RecordingAudio()
    supervise(Algorithm.BUBBLE, list(range(9, 0, -1)), audio=audio)
    assert audio.played[-3:] == [0 / 9, 4 / 9, 8 / 9]


@pytest.mark.parametrize("values", [[], [7]])
def test_trivial_run_settles_with_zero_counts(values):
    """Trivial input settles without any algorithm frames."""
    vp = RecordingViewport()
    run = supervise(Algorithm.BUBBLE, values, viewport=vp)
    assert run.state is RunState.SETTLED
    assert (run.stats.comparisons, run.stats.accesses) == (0, 0)
    assert vp.counts == []


@pytest.mark.parametrize("algorithm", [a for a in Algorithm if a is not Algorithm.BOGO],
                         ids=lambda a: a.value)
def test_counters_never_decrease(algorithm):
    """Published counts never go down."""
    values = random.Random(5).sample(range(1, 200), 40)
    vp = RecordingViewport()
    run = supervise(algorithm, values, viewport=vp)
    assert run.state is RunState.SETTLED
    for (c0, a0), (c1, a1) in zip(vp.counts, vp.counts[1:]):
        assert c1 >= c0 and a1 >= a0
    assert vp.counts[-1] == (run.stats.comparisons, run.stats.accesses)


def test_stop_aborts_at_the_next_frame():
    """A stop aborts at the next frame and the sequence stays put."""
    values = list(range(30, 0, -1))
    ctx = fast_context(values)
    vp = RecordingViewport(on_render=lambda n: n == 5 and ctx.cancel.set())
    run = supervise(Algorithm.BUBBLE, values, viewport=vp, ctx=ctx)

    assert run.state is RunState.ABORTED
    assert len(vp.frames) == 5
    assert sorted(run.sequence) == sorted(values)
    assert run.sequence != sorted(values)

    # at most the one operation pending when the stop was seen has landed
    last_shown = vp.frames[-1][0]
    assert sum(a != b for a, b in zip(last_shown, run.sequence)) <= 2
    frozen = list(run.sequence)
    time.sleep(0.05)
    assert run.sequence == frozen


def test_stop_inside_recursion_unwinds_cleanly():
    """Stopping deep in recursion closes every generator."""
    values = random.Random(1).sample(range(500), 64)
    ctx = fast_context(values)
    vp = RecordingViewport(on_render=lambda n: n == 150 and ctx.cancel.set())
    run = supervise(Algorithm.MERGE, values, viewport=vp, ctx=ctx)
    assert run.state is RunState.ABORTED
    assert len(vp.frames) == 150


def test_stop_during_sweep_aborts():
    """A stop during the sweep marks the run aborted."""
    values = [3, 1, 2]
    ctx = fast_context(values)
    vp = RecordingViewport()
    total = len(supervise(Algorithm.BUBBLE, values, viewport=vp).sequence) + 1
    frames_before_sweep = len(vp.frames) - total

    vp2 = RecordingViewport(on_render=lambda n: n == frames_before_sweep + 2 and ctx.cancel.set())
    run = supervise(Algorithm.BUBBLE, values, viewport=vp2, ctx=ctx)
    assert run.state is RunState.ABORTED
    assert run.sequence == [1, 2, 3]
    assert vp2.frames[-1][1][-1] is not Highlight.SETTLED


def test_internal_fault_marks_run_failed():
    """An exception in the algorithm fails the run."""
    vp = RecordingViewport()
    run = supervise(Algorithm.RADIX, [5, -2, 9], viewport=vp)
    assert run.state is RunState.FAILED
    assert isinstance(run.error, ValueError)
    assert run.sequence == [5, -2, 9]


def test_elapsed_is_reported():
    """Elapsed time reaches the viewport."""
    vp = RecordingViewport()
    run = supervise(Algorithm.INSERTION, [3, 2, 1], viewport=vp)
    assert vp.elapsed
    assert vp.elapsed[-1] <= run.stats.elapsed()


def test_run_owns_a_private_copy():
    """A run never touches the caller's list."""
    values = [3, 2, 1]
    run = Run("A", Algorithm.BUBBLE, values, RecordingViewport())
    run.sequence[0] = 99
    assert values == [3, 2, 1]
    assert run.state is RunState.PENDING and not run.state.terminal
    assert len(run.highlights) == len(run.sequence)
