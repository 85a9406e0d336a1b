"""Tap/hold gesture detection for dial and key presses.

Each surface has at most one gesture in flight. A press arms a one-shot
hold delay; releasing before it elapses is a tap, otherwise the hold
action fires (and, for repeating actions, keeps firing until release).
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

GestureAction = Callable[[], Awaitable[None]]

HOLD_DELAY = 0.35
HOLD_REPEAT = 0.12


class Gesture(Enum):
    """How a press/release pair was classified."""

    TAP = "tap"
    HOLD = "hold"


@dataclass(slots=True)
class HoldState:
    """In-progress press on one surface."""

    fired_hold: bool = False
    task: "asyncio.Task[None] | None" = None


class GestureDetector:
    """Classifies presses per surface and drives hold repeats.

    Example:
        detector = GestureDetector()
        detector.press("key-1", on_hold=reset_timer)
        gesture = await detector.release("key-1", on_tap=toggle_timer)
    """

    def __init__(self, hold_delay: float = HOLD_DELAY, hold_repeat: float = HOLD_REPEAT) -> None:
        """Initialize the detector.

        Args:
            hold_delay: Seconds a press must last to become a hold.
            hold_repeat: Seconds between repeated hold actions.
        """
        self._hold_delay = hold_delay
        self._hold_repeat = hold_repeat
        self._states: dict[str, HoldState] = {}
        self._inflight: set[asyncio.Task[None]] = set()

    @property
    def hold_delay(self) -> float:
        """Return the hold delay in seconds."""
        return self._hold_delay

    @property
    def hold_repeat(self) -> float:
        """Return the hold repeat period in seconds."""
        return self._hold_repeat

    def is_pending(self, surface_id: str) -> bool:
        """Return True if a press is in progress on the surface."""
        return surface_id in self._states

    def press(
        self,
        surface_id: str,
        on_hold: GestureAction | None = None,
        *,
        repeat: bool = False,
    ) -> None:
        """Start a gesture, tearing down any stale one for the surface.

        Must be called from within a running event loop.

        Args:
            surface_id: The pressed surface.
            on_hold: Action fired when the press becomes a hold.
            repeat: Keep firing ``on_hold`` while the press is held.
        """
        self.cancel(surface_id)
        state = HoldState()
        state.task = asyncio.create_task(self._hold_after_delay(surface_id, state, on_hold, repeat))
        self._states[surface_id] = state

    async def release(self, surface_id: str, on_tap: GestureAction | None = None) -> Gesture:
        """Finish the gesture on a surface.

        A release without a prior press counts as a tap.

        Args:
            surface_id: The released surface.
            on_tap: Action fired if the gesture is a tap.

        Returns:
            How the gesture was classified.
        """
        state = self._states.get(surface_id)
        self.cancel(surface_id)
        if state is not None and state.fired_hold:
            return Gesture.HOLD
        if on_tap is not None:
            await self._run(surface_id, on_tap)
        return Gesture.TAP

    def cancel(self, surface_id: str) -> None:
        """Cancel the pending delay and repeat for a surface."""
        state = self._states.pop(surface_id, None)
        if state is not None and state.task is not None:
            state.task.cancel()

    def cancel_all(self) -> list["asyncio.Task[None]"]:
        """Cancel every gesture and every hold action still running.

        Returns:
            The cancelled tasks, for the caller to await.
        """
        tasks = [state.task for state in self._states.values() if state.task is not None]
        tasks.extend(self._inflight)
        for surface_id in list(self._states):
            self.cancel(surface_id)
        for task in list(self._inflight):
            task.cancel()
        return tasks

    async def _hold_after_delay(
        self,
        surface_id: str,
        state: HoldState,
        on_hold: GestureAction | None,
        repeat: bool,
    ) -> None:
        await asyncio.sleep(self._hold_delay)
        state.fired_hold = True
        if on_hold is None:
            return
        self._spawn(surface_id, on_hold)
        while repeat:
            await asyncio.sleep(self._hold_repeat)
            self._spawn(surface_id, on_hold)

    def _spawn(self, surface_id: str, action: GestureAction) -> None:
        # Runs outside the gesture task: cancelling the gesture leaves it alone.
        task = asyncio.create_task(self._run(surface_id, action))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    async def _run(self, surface_id: str, action: GestureAction) -> None:
        try:
            await action()
        except Exception:
            logger.exception("Gesture action failed for surface %s", surface_id)
