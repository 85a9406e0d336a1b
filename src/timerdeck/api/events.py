"""Inbound host events.

Every event names the surface it came from and carries the settings
snapshot the host attached to it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from timerdeck.api.surface import Surface


class EventKind(Enum):
    """Kinds of events delivered by the host transport."""

    APPEARED = "appeared"
    DISAPPEARED = "disappeared"
    DIAL_ROTATED = "dial_rotated"
    DIAL_PRESSED = "dial_pressed"
    DIAL_RELEASED = "dial_released"
    KEY_PRESSED = "key_pressed"
    KEY_RELEASED = "key_released"
    SETTINGS_CHANGED = "settings_changed"
    PLUGIN_MESSAGE = "plugin_message"

    @property
    def is_press(self) -> bool:
        """Return True for press-down events."""
        return self in (EventKind.DIAL_PRESSED, EventKind.KEY_PRESSED)

    @property
    def is_release(self) -> bool:
        """Return True for release events."""
        return self in (EventKind.DIAL_RELEASED, EventKind.KEY_RELEASED)


@dataclass(frozen=True, slots=True)
class HostEvent:
    """An input event from the host.

    Attributes:
        kind: What happened.
        surface: The surface the event came from.
        settings: Raw settings snapshot attached by the host.
        ticks: Relative rotation for DIAL_ROTATED (negative = counter-clockwise).
        payload: Opaque payload for PLUGIN_MESSAGE.
    """

    kind: EventKind
    surface: Surface
    settings: dict[str, Any] = field(default_factory=dict)
    ticks: int = 0
    payload: dict[str, Any] = field(default_factory=dict)

    @property
    def surface_id(self) -> str:
        """Return the ID of the originating surface."""
        return self.surface.id
