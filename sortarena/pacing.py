import math
import time

from .settings import MIN_SPEED, MAX_SPEED, PACING_EXPONENT


def clamp_speed(speed) -> int:
    return max(MIN_SPEED, min(MAX_SPEED, int(speed)))


def delay_for(speed) -> int:
    """
    Pacing delay in milliseconds for a speed level in [1, 100].

    Nonlinear so the low end gives fine control; speed 100 is instant.
    """
    speed = clamp_speed(speed)
    if speed >= MAX_SPEED:
        return 0
    return math.floor((101 - speed) ** PACING_EXPONENT)


def wait(delay_ms):
    # Not interruptible: a stop request is seen at the next frame.
    if delay_ms > 0:
        time.sleep(delay_ms / 1000.0)


def speed_label(speed) -> str:
    if speed > 90: return "Inst"
    if speed > 50: return "Fast"
    return "Slow"
