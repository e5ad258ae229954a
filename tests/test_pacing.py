"""
Pacing clock: speed -> per-frame delay (ms).
"""

import time

from sortarena.pacing import clamp_speed, delay_for, speed_label, wait
from sortarena.stats import Statistics, Ticker


def test_delay_known_points():
    """Delay matches the curve at a few known speeds."""
    assert delay_for(1) == 630    # floor(100 ** 1.4)
    assert delay_for(85) == 48    # floor(16 ** 1.4)
    assert delay_for(99) == 2
    assert delay_for(100) == 0


def test_delay_never_increases_with_speed():
    """Faster speed never means a longer delay."""
    delays = [delay_for(s) for s in range(1, 101)]
    assert all(d >= 0 for d in delays)
    assert all(a >= b for a, b in zip(delays, delays[1:]))


def test_out_of_range_speed_is_clamped():
    """Speeds outside 1..100 are clamped."""
    assert clamp_speed(0) == 1
    assert clamp_speed(250) == 100
    assert delay_for(-5) == delay_for(1)
    assert delay_for(500) == 0


def test_zero_wait_does_not_sleep():
    """A zero delay returns without sleeping."""
    t0 = time.monotonic()
    for _ in range(1000):
        wait(0)
    assert time.monotonic() - t0 < 0.5


def test_speed_label():
    """Speed labels cover the whole range."""
    assert speed_label(95) == "Inst"
    assert speed_label(70) == "Fast"
    assert speed_label(20) == "Slow"


def test_statistics_only_grow():
    """Counters only go up."""
    st = Statistics()
    st.count_comparison(); st.count_access(2); st.count_access()
    assert (st.comparisons, st.accesses) == (1, 3)
    assert st.elapsed() >= 0.0


def test_ticker_fires_until_stopped():
    """The ticker calls back until stopped, then goes quiet."""
    calls = []
    t = Ticker(0.01, lambda: calls.append(1))
    t.start()
    time.sleep(0.08)
    t.stop()
    seen = len(calls)
    assert seen >= 1
    assert not t.running
    time.sleep(0.05)
    assert len(calls) == seen


def test_ticker_survives_failing_callback():
    """A raising callback does not kill the ticker."""
    calls = []

    def boom():
        calls.append(1)
        raise RuntimeError("display went away")

    t = Ticker(0.01, boom)
    t.start()
    time.sleep(0.05)
    t.stop()
    assert len(calls) >= 2
