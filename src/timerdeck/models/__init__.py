"""Data models for timers, groups, surface settings, and dial feedback."""

from timerdeck.models.feedback import DialFeedback, ProgressField
from timerdeck.models.group import Group
from timerdeck.models.runtime import (
    MAX_DURATION_SECONDS,
    MIN_DURATION_SECONDS,
    TimerPhase,
    TimerRuntime,
    clamp_duration_ms,
    clamp_seconds,
)
from timerdeck.models.settings import (
    DEFAULT_GROUP_ID,
    Action,
    DisplayPart,
    Role,
    SurfaceSettings,
    normalize_step,
)

__all__ = [
    "Action",
    "DEFAULT_GROUP_ID",
    "DialFeedback",
    "DisplayPart",
    "Group",
    "MAX_DURATION_SECONDS",
    "MIN_DURATION_SECONDS",
    "ProgressField",
    "Role",
    "SurfaceSettings",
    "TimerPhase",
    "TimerRuntime",
    "clamp_duration_ms",
    "clamp_seconds",
    "normalize_step",
]
