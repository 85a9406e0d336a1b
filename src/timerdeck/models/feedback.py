"""Structured feedback pushed to dial surfaces."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class ProgressField:
    """Progress bar portion of a dial's feedback.

    Attributes:
        percent: Remaining time as an integer percent (0-100).
        fill_color: Bar fill color.
        bg_color: Bar background color.
        outline_color: Optional bar outline color.
    """

    percent: int
    fill_color: str
    bg_color: str
    outline_color: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """Return the host-side representation of the bar."""
        payload: dict[str, Any] = {
            "value": self.percent,
            "bar_fill_c": self.fill_color,
            "bar_bg_c": self.bg_color,
        }
        if self.outline_color:
            payload["bar_border_c"] = self.outline_color
        return payload


@dataclass(frozen=True, slots=True)
class DialFeedback:
    """Feedback for one dial: a time text and an optional progress bar."""

    time_text: str
    progress: ProgressField | None = None

    def to_payload(self) -> dict[str, Any]:
        """Return the host-side feedback mapping."""
        payload: dict[str, Any] = {"time": {"value": self.time_text}}
        if self.progress is not None:
            payload["progress"] = self.progress.to_payload()
        return payload
