"""
Console height animation and its tick scheduler.
"""
import time
from dataclasses import dataclass

TICK_INTERVAL_SECONDS = 0.015
STEP_DIVISOR = 4


@dataclass
class AnimationState:
    current: int = 0
    target: int = 0
    running: bool = False


def animation_step(current, target):
    """Return the signed step from ``current`` toward ``target``."""
    diff = target - current
    if diff == 0:
        return 0
    # int() truncates toward zero, unlike floor division.
    step = int(diff / STEP_DIVISOR)
    if step == 0:
        step = 1 if diff > 0 else -1
    return step


class Animator:
    """Steps a displayed height toward its target, one tick at a time."""

    def __init__(self, height=0):
        self.state = AnimationState(current=height, target=height)

    @property
    def current(self):
        return self.state.current

    @property
    def target(self):
        return self.state.target

    @property
    def running(self):
        return self.state.running

    def set_target(self, target):
        """Change the target height. Returns True when a tick must be armed."""
        self.state.target = max(0, int(target))
        self.state.running = True
        return True

    def tick(self):
        """Advance one step. Returns True when another tick must be armed."""
        if not self.state.running:
            return False
        step = animation_step(self.state.current, self.state.target)
        if step == 0:
            self.state.running = False
            return False
        self.state.current += step
        return True


class TickScheduler:
    """Single pending deadline for the next animation tick."""

    def __init__(self, interval=TICK_INTERVAL_SECONDS, clock=time.monotonic):
        self.interval = interval
        self._clock = clock
        self._deadline = None

    @property
    def armed(self):
        return self._deadline is not None

    def arm(self, now=None):
        now = self._clock() if now is None else now
        deadline = now + self.interval
        if self._deadline is None or deadline < self._deadline:
            self._deadline = deadline

    def due(self, now=None):
        if self._deadline is None:
            return False
        now = self._clock() if now is None else now
        return now >= self._deadline

    def consume(self):
        """Disarm after delivering the tick."""
        self._deadline = None

    def timeout_ms(self, idle_ms, now=None):
        """Input wait in milliseconds until the next tick, capped at ``idle_ms``."""
        if self._deadline is None:
            return idle_ms
        now = self._clock() if now is None else now
        remaining = max(0.0, self._deadline - now)
        return min(idle_ms, int(remaining * 1000))
