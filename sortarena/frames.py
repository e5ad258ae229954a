import logging
import random
from dataclasses import dataclass
from enum import IntEnum

from .pacing import delay_for, wait
from .settings import SOUND_DELAY_THRESHOLD, SOUND_SAMPLE_CUTOFF

log = logging.getLogger(__name__)


class Highlight(IntEnum):
    IDLE      = 0
    COMPARING = 1
    SWAPPING  = 2
    SETTLED   = 3


@dataclass(frozen=True)
class Step:
    """One operation an algorithm wants shown: which indices, and how."""
    indices: tuple
    kind:    Highlight


class HighlightState:
    """
    One tag per sequence index. SETTLED is sticky: `apply` never resets it.
    """

    def __init__(self, size):
        self._tags = [Highlight.IDLE] * size

    def __len__(self):
        return len(self._tags)

    def __getitem__(self, i):
        return self._tags[i]

    def apply(self, indices, kind):
        tags = self._tags
        for i, t in enumerate(tags):
            if t is not Highlight.SETTLED:
                tags[i] = Highlight.IDLE
        for i in indices:
            if 0 <= i < len(tags) and tags[i] is not Highlight.SETTLED:
                tags[i] = kind

    def clear(self):
        self.apply((), Highlight.IDLE)

    def settle(self, i):
        if 0 <= i < len(self._tags):
            self._tags[i] = Highlight.SETTLED

    def snapshot(self) -> list:
        return list(self._tags)


# ============================================================
# ====================== FRAME EMITTER =======================
# ============================================================

class FrameEmitter:
    """
    The only place a run's intermediate state reaches the outside world, and
    the only place cancellation is checked.

    `emit` returns False without publishing anything once the session's stop
    signal is set; the caller is expected to abandon the run.
    """

    def __init__(self, context, audio, rng=None):
        self.context = context
        self.audio   = audio
        self.rng     = rng or random.Random()

    def emit(self, run, step) -> bool:
        if self.context.cancel.is_set():
            log.debug("run %s: frame refused, stop requested", run.label)
            return False

        stats = run.stats
        run.viewport.show_counts(stats.comparisons, stats.accesses)

        run.highlights.apply(step.indices, step.kind)
        run.viewport.render(list(run.sequence), run.highlights.snapshot())

        delay = delay_for(self.context.speed)
        if step.indices:
            self._sound(run, step.indices[0], delay)
        wait(delay)
        return True

    def _sound(self, run, index, delay):
        if not getattr(self.audio, "enabled", True):
            return
        if delay <= SOUND_DELAY_THRESHOLD and self.rng.random() <= SOUND_SAMPLE_CUTOFF:
            return
        if not 0 <= index < len(run.sequence):
            return
        self.audio.play(value_ratio(run.sequence[index], self.context.peak))


def value_ratio(value, peak) -> float:
    if peak <= 0:
        return 0.0
    return max(0.0, min(1.0, value / peak))
