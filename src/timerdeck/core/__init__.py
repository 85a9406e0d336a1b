"""Core engine layer.

This module contains the shared-timer engine and the Qt bridge that
hosts it.

Classes:
    SurfaceRegistry: Group table and surface memberships.
    GestureDetector: Tap/hold classification per surface.
    GroupCoordinator: Timer actions and periodic ticking.
    RenderBroadcaster: Version-stamped fan-out to surfaces.
    TimerService: Owns the components and routes host events.
    ConfigManager: QSettings wrapper for engine tunables.
    TimerWorker: QThread hosting the service's event loop.
"""

from timerdeck.core.broadcaster import RenderBroadcaster
from timerdeck.core.config import ConfigManager, EngineConfig
from timerdeck.core.coordinator import GroupCoordinator
from timerdeck.core.gestures import Gesture, GestureDetector
from timerdeck.core.registry import SurfaceRegistry
from timerdeck.core.service import TimerService
from timerdeck.core.worker import TimerWorker

__all__ = [
    "ConfigManager",
    "EngineConfig",
    "Gesture",
    "GestureDetector",
    "GroupCoordinator",
    "RenderBroadcaster",
    "SurfaceRegistry",
    "TimerService",
    "TimerWorker",
]
