"""Timer runtime model: the pure countdown state of one group."""

from dataclasses import dataclass
from enum import Enum

DEFAULT_DURATION_SECONDS = 5 * 60
MIN_DURATION_SECONDS = 5
MAX_DURATION_SECONDS = 24 * 60 * 60


class TimerPhase(Enum):
    """Effective state of a timer."""

    IDLE = "idle"
    RUNNING = "running"
    FINISHED = "finished"


@dataclass(slots=True)
class TimerRuntime:
    """Countdown state for one logical timer.

    Times are in milliseconds. ``started_at`` is the clock value the
    countdown is measured from and is set only while running.

    Attributes:
        group_id: ID of the group owning this timer.
        duration_ms: Total configured length.
        remaining_ms: Time left as of the last update.
        running: Whether the countdown is active.
        finished: True once the countdown hit zero and was not reset.
        started_at: Clock value (ms) the running countdown started from.
    """

    group_id: str
    duration_ms: int = DEFAULT_DURATION_SECONDS * 1000
    remaining_ms: int = DEFAULT_DURATION_SECONDS * 1000
    running: bool = False
    finished: bool = False
    started_at: float | None = None

    @classmethod
    def with_duration(cls, group_id: str, seconds: int) -> "TimerRuntime":
        """Create an idle runtime holding a full duration."""
        ms = clamp_seconds(seconds) * 1000
        return cls(group_id=group_id, duration_ms=ms, remaining_ms=ms)

    @property
    def phase(self) -> TimerPhase:
        """Return the effective state."""
        if self.running:
            return TimerPhase.RUNNING
        if self.finished:
            return TimerPhase.FINISHED
        return TimerPhase.IDLE

    @property
    def duration_seconds(self) -> float:
        """Return the duration in seconds (never below the minimum)."""
        return max(MIN_DURATION_SECONDS, self.duration_ms / 1000)

    @property
    def progress_percent(self) -> int:
        """Return remaining/duration as an integer percent in [0, 100]."""
        if self.duration_ms <= 0:
            return 0
        ratio = self.remaining_ms / self.duration_ms * 100
        return int(max(0.0, min(100.0, ratio)) + 0.5)

    def remaining_at(self, now: float) -> int:
        """Return the remaining time at ``now`` without mutating state."""
        if not self.running or self.started_at is None:
            return self.remaining_ms
        elapsed = now - self.started_at
        return int(max(0, min(self.duration_ms, self.duration_ms - elapsed)))

    def set_duration(self, seconds: float) -> None:
        """Replace the duration and refill the remaining time.

        Fractional seconds are kept to the millisecond.
        """
        self.duration_ms = clamp_duration_ms(seconds)
        self.remaining_ms = self.duration_ms
        self.finished = False
        self.started_at = None


def clamp_seconds(seconds: float) -> int:
    """Clamp a duration to the allowed window.

    Args:
        seconds: Requested duration in seconds.

    Returns:
        Whole seconds within [MIN_DURATION_SECONDS, MAX_DURATION_SECONDS].
    """
    return int(min(MAX_DURATION_SECONDS, max(MIN_DURATION_SECONDS, seconds)))


def clamp_duration_ms(seconds: float) -> int:
    """Convert a duration in seconds to clamped whole milliseconds."""
    return round(min(MAX_DURATION_SECONDS, max(MIN_DURATION_SECONDS, seconds)) * 1000)
