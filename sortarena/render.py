import threading

import pygame

from .collaborators import Viewport
from .frames import Highlight
from .settings import (BACKGROUND_COLOR, BAR_SPACING, COMPARE_COLOR, MIN_BAR_HEIGHT,
                       SETTLED_COLOR, SWAP_COLOR, UI_BORDER, UI_SUBTEXT, UI_TEXT)

# ============================================================
# ======================= COLOR / DRAW =======================
# ============================================================

HIGHLIGHT_COLORS = {
    Highlight.COMPARING: COMPARE_COLOR,
    Highlight.SWAPPING:  SWAP_COLOR,
    Highlight.SETTLED:   SETTLED_COLOR,
}


def value_to_color(value, max_value):
    r = max(0.0, min(1.0, value / max_value))
    if r < 0.25: return (0, int(255 * r * 4), 255)
    if r < 0.5:  return (0, 255, int(255 * (1 - (r - 0.25) * 4)))
    if r < 0.75: return (int(255 * (r - 0.5) * 4), 255, 0)
    return (255, int(255 * (1 - (r - 0.75) * 4)), 0)


def bar_color(value, tag, max_value):
    return HIGHLIGHT_COLORS.get(tag) or value_to_color(value, max_value)


def draw_bars(surface, rect, values, highlights, max_value):
    n = len(values)
    if n == 0:
        return
    bw = rect.width / n
    avail = rect.height - 2
    for i, v in enumerate(values):
        h = max(MIN_BAR_HEIGHT, (v / max_value) * avail)
        tag = highlights[i] if i < len(highlights) else Highlight.IDLE
        w = bw - BAR_SPACING if bw > 2 else bw
        pygame.draw.rect(surface, bar_color(v, tag, max_value),
                         (rect.x + i * bw, rect.bottom - 2 - h, max(1, w), h))


class BarViewport(Viewport):
    """
    Renderer + stats display for one side of the sort screen.

    Run threads push state in; the main thread pulls a consistent copy out
    with `state()` and draws it. Redrawing the same state is idempotent.
    """

    def __init__(self, title, values, max_value):
        self.title      = title
        self.max_value  = max(max_value, 10)
        self._lock      = threading.Lock()
        self._values    = list(values)
        self._tags      = [Highlight.IDLE] * len(values)
        self._counts    = (0, 0)
        self._elapsed   = 0.0

    def render(self, snapshot, highlights):
        with self._lock:
            self._values, self._tags = snapshot, highlights

    def show_counts(self, comparisons, accesses):
        with self._lock:
            self._counts = (comparisons, accesses)

    def show_elapsed(self, seconds):
        with self._lock:
            self._elapsed = seconds

    def state(self):
        with self._lock:
            return self._values, self._tags, self._counts, self._elapsed

    def draw(self, surface, rect, fonts):
        values, tags, (cmp_, acc), elapsed = self.state()
        pygame.draw.rect(surface, BACKGROUND_COLOR, rect)
        pygame.draw.rect(surface, UI_BORDER, rect, 1)
        bars = rect.inflate(-8, -8)
        bars.height -= 46
        bars.y += 46
        draw_bars(surface, bars, values, tags, self.max_value)

        surface.blit(fonts['mid'].render(self.title, True, UI_TEXT), (rect.x + 10, rect.y + 8))
        info = f"cmp {cmp_}   acc {acc}   {elapsed:.2f}s"
        surface.blit(fonts['mono_sm'].render(info, True, UI_SUBTEXT), (rect.x + 10, rect.y + 30))
