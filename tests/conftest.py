"""
Shared fakes: a viewport and an audio sink that just record what they get.
"""

import threading

import pytest

from sortarena.collaborators import Viewport
from sortarena.frames import FrameEmitter, Highlight
from sortarena.session import SessionContext
from sortarena.supervisor import Run, RunSupervisor


class RecordingViewport(Viewport):
    def __init__(self, on_render=None):
        self.frames   = []
        self.counts   = []
        self.elapsed  = []
        self.on_render = on_render
        self._lock    = threading.Lock()

    def render(self, snapshot, highlights):
        with self._lock:
            self.frames.append((list(snapshot), list(highlights)))
            n = len(self.frames)
        if self.on_render:
            self.on_render(n)

    def show_counts(self, comparisons, accesses):
        self.counts.append((comparisons, accesses))

    def show_elapsed(self, seconds):
        self.elapsed.append(seconds)

    def kinds(self):
        return {tag for _, tags in self.frames for tag in tags}

    def swapping_frames(self):
        return [f for f in self.frames if Highlight.SWAPPING in f[1]]


class RecordingAudio:
    enabled = True

    def __init__(self):
        self.played = []

    def play(self, ratio):
        self.played.append(ratio)


def fast_context(values, **kw):
    kw.setdefault("speed", 100)
    kw.setdefault("sweep_delay_ms", 0)
    kw.setdefault("seed", 7)
    return SessionContext(values=values, **kw)


def supervise(algorithm, values, viewport=None, ctx=None, audio=None):
    """Run one algorithm to a terminal state on the calling thread."""
    ctx = ctx or fast_context(values)
    viewport = viewport or RecordingViewport()
    audio = audio or RecordingAudio()
    run = Run("A", algorithm, values, viewport, rng=ctx.rng("A"))
    RunSupervisor(run, ctx, FrameEmitter(ctx, audio), audio)()
    return run


@pytest.fixture
def viewport():
    return RecordingViewport()
