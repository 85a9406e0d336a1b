"""Shared test helpers for timerdeck."""

import asyncio
from typing import Any

from timerdeck.api.events import EventKind, HostEvent
from timerdeck.api.loopback import RecordingSurface

HOLD_DELAY_MS = 60
HOLD_REPEAT_MS = 20


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


def event(kind: EventKind, surface: RecordingSurface, **kwargs: Any) -> HostEvent:
    """Build an event carrying the surface's current settings."""
    return HostEvent(kind, surface, surface.settings, **kwargs)


async def settle(rounds: int = 5) -> None:
    """Let already-scheduled tasks run."""
    for _ in range(rounds):
        await asyncio.sleep(0)
