"""
Interfaces of the things a run talks to. The core only ever calls these
methods; the pygame front end supplies real implementations.
"""


class Viewport:
    """Renderer plus stats display for one run. Default does nothing."""

    def render(self, snapshot, highlights):
        pass

    def show_counts(self, comparisons, accesses):
        pass

    def show_elapsed(self, seconds):
        pass


class SilentAudio:
    enabled = False

    def play(self, ratio):
        pass
