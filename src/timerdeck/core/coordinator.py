"""Group coordinator: timer state transitions and periodic ticking.

All mutations of a group's runtime happen synchronously on the event
loop, so each one is atomic with respect to the others; only the
renders that follow them are asynchronous.
"""

import asyncio
import logging
import time
from collections.abc import Callable

from timerdeck.core.broadcaster import RenderBroadcaster
from timerdeck.core.registry import SurfaceRegistry
from timerdeck.models.group import Group
from timerdeck.models.settings import Action, normalize_step

logger = logging.getLogger(__name__)

TICK_INTERVAL = 0.2

Clock = Callable[[], float]
FinishedHandler = Callable[[str], None]


def monotonic_ms() -> float:
    """Return a monotonic clock reading in milliseconds."""
    return time.monotonic() * 1000


class GroupCoordinator:
    """Applies timer actions to groups and drives their tickers.

    Example:
        coordinator = GroupCoordinator(registry, broadcaster)
        await coordinator.toggle("1")
        await coordinator.adjust("1", 30)
    """

    def __init__(
        self,
        registry: SurfaceRegistry,
        broadcaster: RenderBroadcaster,
        *,
        tick_interval: float = TICK_INTERVAL,
        clock: Clock | None = None,
        on_finished: FinishedHandler | None = None,
    ) -> None:
        """Initialize the coordinator.

        Args:
            registry: Group table.
            broadcaster: Renderer used after each mutation and tick.
            tick_interval: Seconds between ticks of a running group.
            clock: Millisecond clock (defaults to a monotonic clock).
            on_finished: Called with the group ID when a timer expires.
        """
        self._registry = registry
        self._broadcaster = broadcaster
        self._tick_interval = tick_interval
        self._clock = clock or monotonic_ms
        self._on_finished = on_finished
        self._renders: set[asyncio.Task[bool]] = set()

    @property
    def tick_interval(self) -> float:
        """Return the tick interval in seconds."""
        return self._tick_interval

    # -- Actions ---------------------------------------------------------------

    async def perform(self, group_id: str, action: Action, step_seconds: object = None) -> None:
        """Run a tap/hold action against a group.

        Args:
            group_id: Target group.
            action: The action to run; NONE does nothing.
            step_seconds: Step for INC/DEC (normalized to a safe default).
        """
        step = normalize_step(step_seconds)
        if action is Action.TOGGLE:
            await self.toggle(group_id)
        elif action is Action.RESET:
            await self.reset(group_id)
        elif action is Action.INC:
            await self.adjust(group_id, step)
        elif action is Action.DEC:
            await self.adjust(group_id, -step)

    async def toggle(self, group_id: str) -> None:
        """Start, resume, or pause a group's timer."""
        group = self._registry.get_group(group_id)
        if group is None:
            return
        runtime = group.runtime
        now = self._clock()

        if not runtime.running:
            if runtime.remaining_ms <= 0 or runtime.finished:
                runtime.remaining_ms = runtime.duration_ms
                runtime.finished = False
            elapsed = runtime.duration_ms - runtime.remaining_ms
            runtime.started_at = now - elapsed
            runtime.running = True
            self.ensure_ticker(group)
            logger.debug("Timer %s started with %d ms left", group_id, runtime.remaining_ms)
        else:
            runtime.remaining_ms = runtime.remaining_at(now)
            runtime.started_at = None
            runtime.running = False
            logger.debug("Timer %s paused with %d ms left", group_id, runtime.remaining_ms)

        await self._broadcaster.render(group_id, group.bump_version())

    async def reset(self, group_id: str) -> None:
        """Stop a group's timer and refill it to its full duration."""
        group = self._registry.get_group(group_id)
        if group is None:
            return
        runtime = group.runtime
        runtime.remaining_ms = runtime.duration_ms
        runtime.finished = False
        runtime.started_at = None
        runtime.running = False
        await self._broadcaster.render(group_id, group.bump_version())

    async def adjust(self, group_id: str, delta_seconds: float) -> bool:
        """Change a paused timer's duration by a number of seconds.

        Ignored while running. The result is clamped to the allowed
        window and also becomes the remaining time.

        Args:
            group_id: Target group.
            delta_seconds: Seconds to add (negative to subtract).

        Returns:
            True if the duration was changed.
        """
        group = self._registry.get_group(group_id)
        if group is None or group.runtime.running:
            return False
        runtime = group.runtime
        runtime.set_duration(runtime.duration_seconds + delta_seconds)
        self._schedule_render(group_id, group.bump_version())
        return True

    async def increment(self, group_id: str, step_seconds: object = None) -> bool:
        """Add a step to a paused timer's duration."""
        return await self.adjust(group_id, normalize_step(step_seconds))

    async def decrement(self, group_id: str, step_seconds: object = None) -> bool:
        """Subtract a step from a paused timer's duration."""
        return await self.adjust(group_id, -normalize_step(step_seconds))

    async def rotate(self, group_id: str, ticks: int, increment_seconds: object = None) -> bool:
        """Adjust a paused timer by dial ticks times the dial's increment."""
        if not ticks:
            return False
        return await self.adjust(group_id, ticks * normalize_step(increment_seconds))

    # -- Ticking ---------------------------------------------------------------

    def ensure_ticker(self, group: Group) -> None:
        """Start the group's ticker unless one is already alive."""
        if group.is_ticking:
            return
        group.ticker = asyncio.create_task(self._tick_loop(group))

    async def tick(self, group_id: str) -> None:
        """Advance a group's countdown once and render it.

        Renders even when nothing changed so surfaces recover from
        earlier failed updates.
        """
        group = self._registry.get_group(group_id)
        if group is None:
            return
        runtime = group.runtime
        if runtime.running and runtime.started_at is not None:
            runtime.remaining_ms = runtime.remaining_at(self._clock())
            if runtime.remaining_ms <= 0 and not runtime.finished:
                runtime.running = False
                runtime.finished = True
                runtime.started_at = None
                logger.info("Timer %s finished", group_id)
                await self._alert(group)
                if self._on_finished is not None:
                    self._on_finished(group_id)
        await self._broadcaster.render(group_id)

    async def _tick_loop(self, group: Group) -> None:
        while self._registry.get_group(group.id) is group:
            await asyncio.sleep(self._tick_interval)
            try:
                await self.tick(group.id)
            except Exception:
                logger.exception("Tick failed for group %s", group.id)

    async def _alert(self, group: Group) -> None:
        surface = group.representative()
        if surface is None:
            return
        try:
            await surface.show_alert()
        except Exception:
            logger.warning("Error showing alert on %s", surface.id, exc_info=True)

    # -- Renders ---------------------------------------------------------------

    def _schedule_render(self, group_id: str, version: int) -> None:
        task = asyncio.create_task(self._broadcaster.render(group_id, version))
        self._renders.add(task)
        task.add_done_callback(self._renders.discard)

    async def drain(self) -> None:
        """Wait for every scheduled render to finish."""
        while self._renders:
            await asyncio.gather(*list(self._renders), return_exceptions=True)
