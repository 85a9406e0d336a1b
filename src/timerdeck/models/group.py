"""Group model: one shared timer plus the surfaces attached to it."""

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from timerdeck.models.runtime import TimerRuntime
from timerdeck.models.settings import SurfaceSettings

if TYPE_CHECKING:
    from timerdeck.api.surface import Surface


@dataclass(slots=True)
class Group:
    """A set of surfaces sharing one logical timer.

    The per-surface caches only suppress redundant host calls; they are
    never the source of truth for what a surface should display.

    Attributes:
        runtime: The shared countdown state.
        dials: Attached dial surfaces by ID, in attach order.
        keys: Attached key surfaces by ID, in attach order.
        update_version: Monotonic counter bumped by every mutation.
        pending_version: Version of the newest outstanding render, if any.
        dial_layouts: Last layout applied per dial.
        key_states: Last discrete state emitted per key.
        last_settings: Last settings snapshot seen per surface.
        ticker: Periodic tick task, if started.
    """

    runtime: TimerRuntime
    dials: dict[str, "Surface"] = field(default_factory=dict)
    keys: dict[str, "Surface"] = field(default_factory=dict)
    update_version: int = 0
    pending_version: int | None = None
    dial_layouts: dict[str, str] = field(default_factory=dict)
    key_states: dict[str, int] = field(default_factory=dict)
    last_settings: dict[str, SurfaceSettings] = field(default_factory=dict)
    ticker: "asyncio.Task[None] | None" = None

    @property
    def id(self) -> str:
        """Return the group ID."""
        return self.runtime.group_id

    @property
    def surface_count(self) -> int:
        """Return the number of attached surfaces."""
        return len(self.dials) + len(self.keys)

    @property
    def is_empty(self) -> bool:
        """Return True if no surface is attached."""
        return self.surface_count == 0

    @property
    def is_ticking(self) -> bool:
        """Return True if the tick task is alive."""
        return self.ticker is not None and not self.ticker.done()

    def contains(self, surface_id: str) -> bool:
        """Return True if the surface is attached in either role."""
        return surface_id in self.dials or surface_id in self.keys

    def representative(self) -> "Surface | None":
        """Return the surface used for group-wide alerts (first dial, else first key)."""
        for surface in self.dials.values():
            return surface
        for surface in self.keys.values():
            return surface
        return None

    def bump_version(self) -> int:
        """Advance the update version and mark a render as outstanding."""
        self.update_version += 1
        self.pending_version = self.update_version
        return self.update_version

    def remove_surface(self, surface_id: str) -> bool:
        """Drop a surface and its cached outputs.

        Returns:
            True if the surface was attached.
        """
        found = self.dials.pop(surface_id, None) is not None
        found = self.keys.pop(surface_id, None) is not None or found
        self.dial_layouts.pop(surface_id, None)
        self.key_states.pop(surface_id, None)
        self.last_settings.pop(surface_id, None)
        return found

    def stop_ticker(self) -> None:
        """Cancel the tick task if it is running."""
        if self.ticker is not None:
            self.ticker.cancel()
            self.ticker = None
