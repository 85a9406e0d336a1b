"""Render broadcaster: pushes a group's timer state to every surface.

Each render computes the display values once, then updates dials and
keys in parallel, each according to its own settings. Renders carry a
version stamp; once a group's version moves past a render's stamp the
render stops before touching any further surface, so a superseded
state never lands after a newer one.
"""

import asyncio
import logging
import math
from dataclasses import dataclass

from timerdeck.api.surface import Surface
from timerdeck.core.registry import SurfaceRegistry
from timerdeck.models.feedback import DialFeedback, ProgressField
from timerdeck.models.group import Group
from timerdeck.models.runtime import TimerRuntime
from timerdeck.models.settings import DisplayPart, SurfaceSettings

logger = logging.getLogger(__name__)

LAYOUT_WITH_PROGRESS = "layouts/timer-progress.json"
LAYOUT_WITHOUT_PROGRESS = "layouts/timer-plain.json"

# Discrete key states
STATE_PAUSED = 0
STATE_RUNNING = 1


def layout_for(show_progress_bar: bool) -> str:
    """Return the dial layout matching the progress bar preference."""
    return LAYOUT_WITH_PROGRESS if show_progress_bar else LAYOUT_WITHOUT_PROGRESS


@dataclass(frozen=True, slots=True)
class TimeDisplay:
    """Display values derived from a runtime, computed once per render."""

    hours: int
    minutes: int
    seconds: int
    percent: int
    running: bool

    @classmethod
    def from_runtime(cls, runtime: TimerRuntime) -> "TimeDisplay":
        """Snapshot a runtime (remaining time rounded up to whole seconds)."""
        total = max(0, math.ceil(runtime.remaining_ms / 1000))
        return cls(
            hours=total // 3600,
            minutes=(total % 3600) // 60,
            seconds=total % 60,
            percent=runtime.progress_percent,
            running=runtime.running,
        )

    @property
    def label(self) -> str:
        """Return the full HH:MM:SS label."""
        return f"{self.hours:02d}:{self.minutes:02d}:{self.seconds:02d}"

    @property
    def status_state(self) -> int:
        """Return the discrete key state for the running flag."""
        return STATE_RUNNING if self.running else STATE_PAUSED

    def text_for(self, part: DisplayPart) -> str:
        """Return the text shown for a display part."""
        if part is DisplayPart.NONE:
            return ""
        if part is DisplayPart.HOURS:
            return f"{self.hours:02d}"
        if part is DisplayPart.MINUTES:
            return f"{self.minutes:02d}"
        if part is DisplayPart.SECONDS:
            return f"{self.seconds:02d}"
        return self.label


def build_dial_feedback(display: TimeDisplay, settings: SurfaceSettings) -> DialFeedback:
    """Build one dial's feedback from its own settings.

    Dials have no discrete state, so ``status`` shows the full label.
    """
    part = DisplayPart.FULL if settings.display_part is DisplayPart.STATUS else settings.display_part
    progress = None
    if settings.show_progress_bar:
        progress = ProgressField(
            percent=display.percent,
            fill_color=settings.bar_fill_color,
            bg_color=settings.bar_bg_color,
            outline_color=settings.bar_outline_color,
        )
    return DialFeedback(time_text=display.text_for(part), progress=progress)


class RenderBroadcaster:
    """Fans a group's state out to its surfaces.

    Example:
        broadcaster = RenderBroadcaster(registry)
        version = group.bump_version()
        await broadcaster.render(group.id, version)
    """

    def __init__(self, registry: SurfaceRegistry) -> None:
        """Initialize the broadcaster.

        Args:
            registry: Source of groups and their attached surfaces.
        """
        self._registry = registry

    @staticmethod
    def _is_stale(group: Group, stamp: int) -> bool:
        return stamp < group.update_version

    async def render(self, group_id: str, version: int | None = None) -> bool:
        """Render a group's current state to all attached surfaces.

        Args:
            group_id: The group to render.
            version: Version the caller produced; None renders under the
                group's current version.

        Returns:
            True if the render ran to completion, False if the group is
            unknown or the render was superseded.
        """
        group = self._registry.get_group(group_id)
        if group is None:
            return False
        stamp = group.update_version if version is None else version
        if self._is_stale(group, stamp):
            logger.debug("Skipping stale render v%d of group %s", stamp, group_id)
            return False

        display = TimeDisplay.from_runtime(group.runtime)

        await asyncio.gather(
            *(self._update_dial(group, dial, display, stamp) for dial in list(group.dials.values()))
        )
        if self._is_stale(group, stamp):
            logger.debug("Render v%d of group %s superseded after dials", stamp, group_id)
            return False

        await asyncio.gather(
            *(self._update_key(group, key, display, stamp) for key in list(group.keys.values()))
        )

        if version is not None and group.pending_version == version:
            group.pending_version = None
        return True

    async def _update_dial(self, group: Group, dial: Surface, display: TimeDisplay, stamp: int) -> None:
        try:
            settings = SurfaceSettings.from_dict(await dial.get_settings())
            if self._is_stale(group, stamp):
                return
            layout = layout_for(settings.show_progress_bar)
            if group.dial_layouts.get(dial.id) != layout:
                await dial.set_feedback_layout(layout)
                group.dial_layouts[dial.id] = layout
                if self._is_stale(group, stamp):
                    return
            await dial.set_feedback(build_dial_feedback(display, settings))
        except Exception:
            logger.warning("Error updating dial %s", dial.id, exc_info=True)

    async def _update_key(self, group: Group, key: Surface, display: TimeDisplay, stamp: int) -> None:
        try:
            settings = SurfaceSettings.from_dict(await key.get_settings())
            if self._is_stale(group, stamp):
                return
            part = settings.display_part
            if part is DisplayPart.STATUS:
                # The discrete state is the only output of a status key; never set its title.
                state = display.status_state
                if group.key_states.get(key.id) != state:
                    await key.set_state(state)
                    group.key_states[key.id] = state
            elif part is not DisplayPart.NONE:
                await key.set_title(display.text_for(part))
        except Exception:
            logger.warning("Error updating key %s", key.id, exc_info=True)
