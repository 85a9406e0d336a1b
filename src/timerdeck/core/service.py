"""Timer service: the single owner of all engine state.

The service wires the registry, gesture detector, coordinator, and
broadcaster together and routes host events to them. Its lifetime is
the process's; nothing outside it holds group or gesture tables.
"""

import asyncio
import logging
from functools import partial
from typing import Any

from timerdeck.api.events import EventKind, HostEvent
from timerdeck.api.surface import Surface
from timerdeck.core.broadcaster import RenderBroadcaster, layout_for
from timerdeck.core.config import EngineConfig
from timerdeck.core.coordinator import Clock, FinishedHandler, GroupCoordinator
from timerdeck.core.gestures import GestureDetector
from timerdeck.core.registry import GroupRemovedHandler, SurfaceRegistry
from timerdeck.models.group import Group
from timerdeck.models.settings import Action, Role, SurfaceSettings

logger = logging.getLogger(__name__)

_BAR_COLOR_KEYS = ("barFillColor", "barBgColor")


class TimerService:
    """Routes host events into the shared-timer engine.

    Example:
        service = TimerService(EngineConfig())
        await service.dispatch(HostEvent(EventKind.APPEARED, dial, {"groupId": "1"}))
        await service.dispatch(HostEvent(EventKind.KEY_RELEASED, key, {"groupId": "1"}))
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        *,
        clock: Clock | None = None,
        on_finished: FinishedHandler | None = None,
        on_group_removed: GroupRemovedHandler | None = None,
    ) -> None:
        """Initialize the service and its components.

        Args:
            config: Engine tunables (defaults if omitted).
            clock: Millisecond clock for the countdown (monotonic by default).
            on_finished: Called with the group ID when a timer expires.
            on_group_removed: Called with the group ID when a group is discarded.
        """
        self._config = config or EngineConfig()
        self._registry = SurfaceRegistry(
            default_duration_seconds=self._config.default_duration_seconds,
            on_group_removed=on_group_removed,
        )
        self._broadcaster = RenderBroadcaster(self._registry)
        self._coordinator = GroupCoordinator(
            self._registry,
            self._broadcaster,
            tick_interval=self._config.tick_interval,
            clock=clock,
            on_finished=on_finished,
        )
        self._gestures = GestureDetector(self._config.hold_delay, self._config.hold_repeat)

    @property
    def config(self) -> EngineConfig:
        """Return the engine configuration."""
        return self._config

    @property
    def registry(self) -> SurfaceRegistry:
        """Return the surface registry."""
        return self._registry

    @property
    def coordinator(self) -> GroupCoordinator:
        """Return the group coordinator."""
        return self._coordinator

    @property
    def broadcaster(self) -> RenderBroadcaster:
        """Return the render broadcaster."""
        return self._broadcaster

    @property
    def gestures(self) -> GestureDetector:
        """Return the gesture detector."""
        return self._gestures

    def get_group(self, group_id: str) -> Group | None:
        """Get a group by ID."""
        return self._registry.get_group(group_id)

    def group_for_surface(self, surface_id: str) -> Group | None:
        """Return the group a surface is attached to, if any."""
        return self._registry.group_for_surface(surface_id)

    async def dispatch(self, event: HostEvent) -> None:
        """Handle one host event.

        Args:
            event: The inbound event.
        """
        kind = event.kind
        if kind is EventKind.APPEARED:
            await self._on_appeared(event)
        elif kind is EventKind.DISAPPEARED:
            self._on_disappeared(event)
        elif kind is EventKind.DIAL_ROTATED:
            await self._on_rotated(event)
        elif kind.is_press:
            await self._on_pressed(event)
        elif kind.is_release:
            await self._on_released(event)
        elif kind is EventKind.SETTINGS_CHANGED:
            await self._on_settings_changed(event)
        elif kind is EventKind.PLUGIN_MESSAGE:
            await self._on_plugin_message(event)

    async def shutdown(self) -> None:
        """Cancel gestures and tickers and let pending renders finish."""
        cancelled = self._gestures.cancel_all() + self._registry.close()
        await asyncio.gather(*cancelled, return_exceptions=True)
        await self._coordinator.drain()

    # -- Helpers ---------------------------------------------------------------

    @staticmethod
    def _kind_of(surface: Surface) -> Role:
        return Role.DIAL if surface.is_dial else Role.KEY

    def _attach(self, event: HostEvent) -> tuple[Group, SurfaceSettings]:
        """Attach the event's surface to the group its settings name.

        Synchronous, so a handler can act on the group before yielding.
        """
        surface = event.surface
        settings = SurfaceSettings.from_dict(event.settings)
        kind = self._kind_of(surface)
        if settings.role is not None and settings.role is not kind:
            logger.debug(
                "Surface %s declares role %s but is a %s",
                surface.id,
                settings.role.value,
                kind.value,
            )
        group_id = settings.group_id or self._config.default_group_id
        group = self._registry.attach(surface, kind, group_id)
        return group, settings.with_defaults(kind, group_id)

    async def _store_inferred(self, event: HostEvent, settings: SurfaceSettings) -> None:
        """Write an inferred role/group back so the host's settings UI shows them."""
        raw = event.settings
        if raw.get("role") and raw.get("groupId"):
            return
        stored: dict[str, Any] = dict(raw)
        if not raw.get("role") and settings.role is not None:
            stored["role"] = settings.role.value
        stored["groupId"] = settings.group_id
        try:
            await event.surface.set_settings(stored)
        except Exception:
            logger.warning("Error storing settings for %s", event.surface_id, exc_info=True)

    async def _apply_layout(self, group: Group, surface: Surface, settings: SurfaceSettings) -> None:
        layout = layout_for(settings.show_progress_bar)
        if group.dial_layouts.get(surface.id) == layout:
            return
        try:
            await surface.set_feedback_layout(layout)
            group.dial_layouts[surface.id] = layout
        except Exception:
            logger.warning("Error setting layout on dial %s", surface.id, exc_info=True)

    # -- Event handlers --------------------------------------------------------

    async def _on_appeared(self, event: HostEvent) -> None:
        group, settings = self._attach(event)
        group.last_settings[event.surface_id] = settings
        await self._store_inferred(event, settings)
        if event.surface.is_dial:
            await self._apply_layout(group, event.surface, settings)
        await self._broadcaster.render(group.id)

    def _on_disappeared(self, event: HostEvent) -> None:
        self._gestures.cancel(event.surface_id)
        self._registry.forget(event.surface_id)

    async def _on_rotated(self, event: HostEvent) -> None:
        group, settings = self._attach(event)
        await self._coordinator.rotate(group.id, event.ticks, settings.increment_seconds)
        await self._store_inferred(event, settings)

    async def _on_pressed(self, event: HostEvent) -> None:
        group, settings = self._attach(event)
        action = settings.hold_action
        on_hold = None
        if action is not Action.NONE:
            on_hold = partial(self._coordinator.perform, group.id, action, settings.hold_step_seconds)
        self._gestures.press(event.surface_id, on_hold, repeat=action.repeats)
        await self._store_inferred(event, settings)

    async def _on_released(self, event: HostEvent) -> None:
        group, settings = self._attach(event)
        action = settings.press_action
        on_tap = None
        if action is not Action.NONE:
            on_tap = partial(self._coordinator.perform, group.id, action, settings.press_step_seconds)
        gesture = await self._gestures.release(event.surface_id, on_tap)
        logger.debug("Surface %s gesture: %s", event.surface_id, gesture.value)

    async def _on_settings_changed(self, event: HostEvent) -> None:
        surface = event.surface
        group, settings = self._attach(event)
        previous = group.last_settings.get(surface.id)
        group.last_settings[surface.id] = settings
        if previous is not None and not settings.differs_from(previous):
            return

        if surface.is_dial:
            await self._apply_layout(group, surface, settings)
        elif previous is None or previous.display_part is not settings.display_part:
            group.key_states.pop(surface.id, None)

        await self._broadcaster.render(group.id)

    async def _on_plugin_message(self, event: HostEvent) -> None:
        payload = event.payload
        if not payload.get("liveBarUpdate"):
            logger.debug("Ignoring plugin message from %s: %r", event.surface_id, payload)
            return
        surface = event.surface
        try:
            stored = await surface.get_settings()
            for key in _BAR_COLOR_KEYS:
                if payload.get(key):
                    stored[key] = payload[key]
            if payload.get("barOutlineColor") is not None:
                stored["barOutlineColor"] = payload["barOutlineColor"]
            await surface.set_settings(stored)
        except Exception:
            logger.warning("Error applying live bar update on %s", surface.id, exc_info=True)
            return

        group_id = SurfaceSettings.from_dict(stored).group_id or self._config.default_group_id
        await self._broadcaster.render(group_id)
