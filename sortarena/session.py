import logging
import random
import re
import threading
from enum import Enum

from .algorithms import Algorithm
from .collaborators import SilentAudio, Viewport
from .frames import FrameEmitter
from .pacing import clamp_speed
from .settings import (BOGO_SAFE_LIMIT, DEFAULT_ARRAY_SIZE, DEFAULT_SPEED,
                       MAX_ARRAY_SIZE, MIN_ARRAY_SIZE, RANDOM_VALUE_HIGH,
                       RANDOM_VALUE_LOW)
from .supervisor import Run, RunSupervisor

log = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class Mode(Enum):
    SINGLE  = "single"
    COMPARE = "compare"


class SessionStatus(Enum):
    COMPLETE = "Complete"
    ABORTED  = "Aborted"
    DECLINED = "Declined"
    BUSY     = "Busy"


def parse_values(text) -> list:
    """
    Comma separated integers, keeping whatever leads each token with an
    integer ("12abc" -> 12) and dropping the rest.
    """
    values = []
    for token in text.split(","):
        m = _LEADING_INT.match(token)
        if m:
            values.append(int(m.group(1)))
    return values


def random_values(count, rng=random) -> list:
    count = max(MIN_ARRAY_SIZE, min(MAX_ARRAY_SIZE, int(count)))
    return [rng.randint(RANDOM_VALUE_LOW, RANDOM_VALUE_HIGH) for _ in range(count)]


class SessionContext:
    """
    Everything a session shares with its runs. Runs only read it; the speed
    is looked up again on every frame so slider changes apply immediately.
    """

    def __init__(self, values=None, mode=Mode.SINGLE, speed=DEFAULT_SPEED,
                 seed=None, sweep_delay_ms=None):
        self.source  = list(values) if values is not None else random_values(DEFAULT_ARRAY_SIZE)
        self.mode    = mode
        self._speed  = clamp_speed(speed)
        self.cancel  = threading.Event()
        self.seed    = seed
        self.sweep_delay_ms = sweep_delay_ms

    @property
    def speed(self) -> int:
        return self._speed

    @speed.setter
    def speed(self, value):
        self._speed = clamp_speed(value)

    @property
    def peak(self):
        return max(self.source, default=0)

    def rng(self, label):
        if self.seed is None:
            return random.Random()
        return random.Random(f"{self.seed}:{label}")


class SessionController:
    """
    Starts one run (single mode) or two side by side (compare mode) over
    independent copies of the source values and waits for all of them.

    `start` blocks until every run is terminal; front ends call it from a
    worker thread and use `stop` to cut it short.
    """

    LABELS = ("A", "B")

    def __init__(self, context, viewport_factory=None, audio=None):
        self.context = context
        self.viewport_factory = viewport_factory or (lambda label: Viewport())
        self.audio   = audio or SilentAudio()
        self.runs    = []
        self._lock   = threading.Lock()
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    # ---------------- array source ----------------

    def randomize(self, count) -> bool:
        if self._running:
            return False
        self.context.source = random_values(count)
        return True

    def load_manual(self, text) -> bool:
        if self._running:
            return False
        values = parse_values(text)
        if len(values) < 2:
            log.warning("manual input rejected: %d valid value(s)", len(values))
            return False
        self.context.source = values
        return True

    # ---------------- control ----------------

    def needs_confirmation(self, algorithms) -> bool:
        return (Algorithm.BOGO in self._selected(algorithms)
                and len(self.context.source) > BOGO_SAFE_LIMIT)

    def start(self, algorithms, confirm=None, reset_stop=True) -> SessionStatus:
        """
        `algorithms` holds one Algorithm per side; only the first is used in
        single mode. `confirm` is asked before a Bogo Sort on more than
        BOGO_SAFE_LIMIT elements; without a yes nothing starts.

        With `reset_stop=False` a stop requested before this call is kept and
        the runs abort at their first frame; callers that start the session
        on another thread clear the signal themselves before spawning it.
        """
        selected = self._selected(algorithms)
        if self.needs_confirmation(selected) and not (confirm and confirm()):
            log.info("bogo sort on %d elements declined", len(self.context.source))
            return SessionStatus.DECLINED

        with self._lock:
            if self._running:
                return SessionStatus.BUSY
            self._running = True

        ctx = self.context
        try:
            if reset_stop:
                ctx.cancel.clear()
            emitter = FrameEmitter(ctx, self.audio, rng=ctx.rng("audio"))
            self.runs = [Run(label, algo, ctx.source, self.viewport_factory(label), rng=ctx.rng(label))
                         for label, algo in zip(self.LABELS, selected)]
            log.info("session start: mode=%s algorithms=%s n=%d", ctx.mode.value,
                     ",".join(a.value for a in selected), len(ctx.source))

            threads = [threading.Thread(target=RunSupervisor(run, ctx, emitter, self.audio),
                                        name=f"run-{run.label}", daemon=True)
                       for run in self.runs]
            for t in threads: t.start()
            for t in threads: t.join()

            status = SessionStatus.ABORTED if ctx.cancel.is_set() else SessionStatus.COMPLETE
            log.info("session %s", status.value.lower())
            return status
        finally:
            self._running = False

    def stop(self):
        """Ask every run to abort at its next frame. Safe to call any time."""
        self.context.cancel.set()

    def _selected(self, algorithms):
        if isinstance(algorithms, Algorithm):
            algorithms = (algorithms,)
        algorithms = tuple(algorithms)
        count = 2 if self.context.mode is Mode.COMPARE else 1
        if len(algorithms) < count:
            raise ValueError(f"{self.context.mode.value} mode needs {count} algorithm(s)")
        return algorithms[:count]
