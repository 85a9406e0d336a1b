"""Per-surface settings carried in every host event."""

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

DEFAULT_GROUP_ID = "1"
DEFAULT_STEP_SECONDS = 5
DEFAULT_BAR_FILL_COLOR = "#FFFFFF"
DEFAULT_BAR_BG_COLOR = "#000000"


class Role(Enum):
    """Which kind of control a surface acts as."""

    DIAL = "dial"
    KEY = "key"


class DisplayPart(Enum):
    """Which part of the remaining time a surface shows."""

    FULL = "full"
    HOURS = "hours"
    MINUTES = "minutes"
    SECONDS = "seconds"
    STATUS = "status"
    NONE = "none"


class Action(Enum):
    """Timer action bound to a tap or a hold."""

    NONE = "none"
    TOGGLE = "toggle"
    RESET = "reset"
    INC = "inc"
    DEC = "dec"

    @property
    def repeats(self) -> bool:
        """Return True if the action auto-repeats while held."""
        return self in (Action.INC, Action.DEC)


def normalize_step(value: object, default: int = DEFAULT_STEP_SECONDS) -> float:
    """Coerce a step size to a positive finite number.

    Args:
        value: Raw value from settings (may be None, a string, NaN...).
        default: Value used when the input is unusable.

    Returns:
        The step as a number, or ``default``.
    """
    if isinstance(value, bool):
        return default
    try:
        step = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    if not math.isfinite(step) or step <= 0:
        return default
    return int(step) if step.is_integer() else step


def _enum_or_none(enum_cls: type[Enum], value: object) -> Any:
    try:
        return enum_cls(value)
    except (TypeError, ValueError):
        return None


def _str_or_none(value: object) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


@dataclass(frozen=True, slots=True)
class SurfaceSettings:
    """Typed view of a surface's settings.

    Fields absent from the host snapshot keep their documented defaults;
    ``role`` and ``group_id`` stay None so the caller can infer them.

    Attributes:
        role: Declared role, or None to infer it from the surface kind.
        group_id: Declared group, or None for the default group.
        display_part: Time sub-field to show (default full).
        show_progress_bar: Whether dials show the progress bar.
        bar_fill_color: Progress bar fill color.
        bar_bg_color: Progress bar background color.
        bar_outline_color: Optional progress bar outline color.
        increment_seconds: Seconds per dial rotation tick.
        press_action: Action fired on tap (default toggle).
        press_step_seconds: Step for inc/dec taps.
        hold_action: Action fired on hold (default none).
        hold_step_seconds: Step for inc/dec holds.
    """

    role: Role | None = None
    group_id: str | None = None
    display_part: DisplayPart = DisplayPart.FULL
    show_progress_bar: bool = True
    bar_fill_color: str = DEFAULT_BAR_FILL_COLOR
    bar_bg_color: str = DEFAULT_BAR_BG_COLOR
    bar_outline_color: str | None = None
    increment_seconds: float = DEFAULT_STEP_SECONDS
    press_action: Action = Action.TOGGLE
    press_step_seconds: float = DEFAULT_STEP_SECONDS
    hold_action: Action = Action.NONE
    hold_step_seconds: float = DEFAULT_STEP_SECONDS

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "SurfaceSettings":
        """Build settings from a raw host snapshot.

        Unknown keys are ignored; bad values fall back to defaults.

        Args:
            data: Raw settings mapping (camelCase keys).

        Returns:
            Parsed SurfaceSettings.
        """
        if not data:
            return cls()
        return cls(
            role=_enum_or_none(Role, data.get("role")),
            group_id=_str_or_none(data.get("groupId")),
            display_part=_enum_or_none(DisplayPart, data.get("displayPart")) or DisplayPart.FULL,
            show_progress_bar=data.get("showProgressBar") is not False,
            bar_fill_color=_str_or_none(data.get("barFillColor")) or DEFAULT_BAR_FILL_COLOR,
            bar_bg_color=_str_or_none(data.get("barBgColor")) or DEFAULT_BAR_BG_COLOR,
            bar_outline_color=_str_or_none(data.get("barOutlineColor")),
            increment_seconds=normalize_step(data.get("incrementSeconds")),
            press_action=_enum_or_none(Action, data.get("pressAction")) or Action.TOGGLE,
            press_step_seconds=normalize_step(data.get("pressStepSeconds")),
            hold_action=_enum_or_none(Action, data.get("holdAction")) or Action.NONE,
            hold_step_seconds=normalize_step(data.get("holdStepSeconds")),
        )

    def with_defaults(self, role: Role, group_id: str) -> "SurfaceSettings":
        """Return a copy with role and group filled in where missing."""
        return replace(self, role=self.role or role, group_id=self.group_id or group_id)

    def differs_from(self, other: "SurfaceSettings") -> bool:
        """Return True if any field that affects output changed."""
        return any(
            getattr(self, name) != getattr(other, name)
            for name in (
                "group_id",
                "role",
                "display_part",
                "show_progress_bar",
                "bar_fill_color",
                "bar_bg_color",
                "bar_outline_color",
                "press_action",
                "press_step_seconds",
                "increment_seconds",
            )
        )
