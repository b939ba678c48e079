"""Model of the nine hardware timer channels of a SAM3X controller."""

from __future__ import annotations

import enum
import math
from collections.abc import Callable
from dataclasses import dataclass

NUM_TIMERS = 9
DEFAULT_MASTER_CLOCK = 84_000_000


class TimerClock(enum.Enum):
    """Timer clock sources, each the master clock over a fixed divisor."""

    CLOCK1 = 0
    CLOCK2 = 1
    CLOCK3 = 2
    CLOCK4 = 3

    @property
    def divisor(self) -> int:
        return (2, 8, 32, 128)[self.value]


def _round_half_away(value: float) -> int:
    return int(math.floor(abs(value) + 0.5)) * (1 if value >= 0 else -1)


def best_clock(frequency: float, master_clock: float = DEFAULT_MASTER_CLOCK):
    """Pick the clock source that reaches ``frequency`` with least error.

    Returns the clock and the compare value to count to.
    """
    best = TimerClock.CLOCK4
    best_error = math.inf
    for clock in reversed(TimerClock):
        ticks = master_clock / frequency / clock.divisor
        error = clock.divisor * abs(ticks - _round_half_away(ticks))
        if error < best_error:
            best = clock
            best_error = error
    ticks = master_clock / frequency / best.divisor
    return best, _round_half_away(ticks)


@dataclass
class _Channel:
    callback: Callable[[], object] | None = None
    frequency: float = -1.0
    clock: TimerClock | None = None
    compare: int = 0
    running: bool = False


class TimerBank:
    """Shared state of all timer channels: callbacks, settings, run state."""

    def __init__(self, master_clock: float = DEFAULT_MASTER_CLOCK):
        self.master_clock = master_clock
        self._channels = [_Channel() for _ in range(NUM_TIMERS)]

    def channel(self, index: int) -> _Channel:
        if not 0 <= index < NUM_TIMERS:
            raise ValueError(f"timer index must be in 0..{NUM_TIMERS - 1}, got {index}")
        return self._channels[index]

    def running(self, index: int) -> bool:
        """Return whether a timer is counting."""
        return self.channel(index).running

    def fire(self, index: int) -> bool:
        """Deliver a compare interrupt; return whether a callback ran."""
        state = self.channel(index)
        if not state.running or state.callback is None:
            return False
        state.callback()
        return True


_default_bank = TimerBank()


def get_available(bank: TimerBank | None = None) -> DueTimer:
    """Return the first timer without a callback, or timer 0 if all are taken."""
    bank = bank if bank is not None else _default_bank
    for index in range(NUM_TIMERS):
        if bank.channel(index).callback is None:
            return DueTimer(index, bank)
    return DueTimer(0, bank)


class DueTimer:
    """Handle on one timer channel; setters return the timer for chaining."""

    def __init__(self, index: int, bank: TimerBank | None = None):
        self._bank = bank if bank is not None else _default_bank
        self._state = self._bank.channel(index)
        self.index = index

    def attach_interrupt(self, callback: Callable[[], object]) -> DueTimer:
        self._state.callback = callback
        return self

    def detach_interrupt(self) -> DueTimer:
        self.stop()
        self._state.callback = None
        return self

    def start(self, microseconds: float = -1) -> DueTimer:
        """Start counting, first setting the period if one is given."""
        if microseconds > 0:
            self.set_period(microseconds)
        if self._state.frequency <= 0:
            self.set_frequency(1)
        self._state.running = True
        return self

    def stop(self) -> DueTimer:
        self._state.running = False
        return self

    def set_frequency(self, frequency: float) -> DueTimer:
        """Set the interrupt rate in Hz; the achievable rate is recorded."""
        if frequency <= 0:
            frequency = 1
        clock, compare = best_clock(frequency, self._bank.master_clock)
        self._state.clock = clock
        self._state.compare = compare
        self._state.frequency = self._bank.master_clock / clock.divisor / compare
        return self

    def set_period(self, microseconds: float) -> DueTimer:
        """Set the interrupt period in microseconds."""
        if microseconds == 0:
            raise ValueError("period must not be zero")
        return self.set_frequency(1_000_000.0 / microseconds)

    def frequency(self) -> float:
        return self._state.frequency

    def period(self) -> float:
        return 1.0 / self.frequency() * 1_000_000