"""Host transport contract: surfaces and inbound events."""

from timerdeck.api.events import EventKind, HostEvent
from timerdeck.api.loopback import RecordingSurface
from timerdeck.api.surface import Surface

__all__ = ["EventKind", "HostEvent", "RecordingSurface", "Surface"]
