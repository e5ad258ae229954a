import logging
from enum import Enum

from .frames import HighlightState
from .ops import Ops
from .pacing import wait
from .settings import (ELAPSED_TICK, SWEEP_DELAY_MS, SWEEP_DELAY_FAST_MS,
                       SWEEP_FAST_THRESHOLD, SWEEP_SOUND_EVERY)
from .stats import Statistics, Ticker

log = logging.getLogger(__name__)


class RunState(Enum):
    PENDING = "pending"
    RUNNING = "running"
    SETTLED = "settled"
    ABORTED = "aborted"
    FAILED  = "failed"

    @property
    def terminal(self) -> bool:
        return self not in (RunState.PENDING, RunState.RUNNING)


class Run:
    """One algorithm over one private copy of the source values."""

    def __init__(self, label, algorithm, values, viewport, rng=None):
        self.label      = label
        self.algorithm  = algorithm
        self.sequence   = list(values)
        self.highlights = HighlightState(len(self.sequence))
        self.stats      = Statistics()
        self.viewport   = viewport
        self.rng        = rng
        self.state      = RunState.PENDING
        self.error      = None

    def __repr__(self):
        return (f"<Run {self.label} {self.algorithm.value} {self.state.value} "
                f"n={len(self.sequence)} cmp={self.stats.comparisons} acc={self.stats.accesses}>")


class RunSupervisor:
    """
    Drives one Run to a terminal state.

    PENDING -> RUNNING -> SETTLED | ABORTED | FAILED

    A frame the emitter refuses (stop requested) aborts the run right there:
    the algorithm generator is closed and nothing is rolled back. A normal
    finish is followed by the confirmation sweep, which is cosmetic and
    paced by its own fixed delay rather than the speed setting.
    """

    def __init__(self, run, context, emitter, audio):
        self.run     = run
        self.context = context
        self.emitter = emitter
        self.audio   = audio

    def __call__(self):
        run = self.run
        viewport = run.viewport
        ticker = Ticker(ELAPSED_TICK, lambda: viewport.show_elapsed(run.stats.elapsed()),
                        name=f"elapsed-{run.label}")

        run.stats.restart_clock()
        run.state = RunState.RUNNING
        ticker.start()
        try:
            if not self._drive():
                run.state = RunState.ABORTED
                return
            ticker.stop()
            viewport.show_elapsed(run.stats.elapsed())
            run.state = RunState.SETTLED if self._sweep() else RunState.ABORTED
        except Exception as e:
            run.error = e
            run.state = RunState.FAILED
            log.exception("run %s (%s) failed", run.label, run.algorithm.value)
        finally:
            ticker.stop()
            log.info("run %s %s: %s comparisons, %s accesses, %.2fs",
                     run.label, run.state.value, run.stats.comparisons,
                     run.stats.accesses, run.stats.elapsed())

    def _drive(self) -> bool:
        run = self.run
        steps = run.algorithm.steps(run.sequence, Ops(run.stats, run.rng))
        try:
            for step in steps:
                if not self.emitter.emit(run, step):
                    return False
        finally:
            # unwinds every nested yield-from, recursive ones included
            steps.close()
        return True

    def _sweep(self) -> bool:
        run = self.run
        seq, hl = run.sequence, run.highlights
        n = len(seq)

        hl.clear()
        run.viewport.render(list(seq), hl.snapshot())

        delay = self.context.sweep_delay_ms
        if delay is None:
            delay = SWEEP_DELAY_FAST_MS if n > SWEEP_FAST_THRESHOLD else SWEEP_DELAY_MS

        for i in range(n):
            if self.context.cancel.is_set():
                return False
            hl.settle(i)
            run.viewport.render(list(seq), hl.snapshot())
            if i % SWEEP_SOUND_EVERY == 0 and getattr(self.audio, "enabled", True):
                self.audio.play(i / n)
            wait(delay)
        return True
