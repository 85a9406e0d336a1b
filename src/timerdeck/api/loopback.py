"""In-memory surface that records everything pushed to it.

Used by the demo entry point and by tests in place of a real host.
"""

import asyncio
from collections.abc import Callable
from typing import Any

from timerdeck.models.feedback import DialFeedback

CallObserver = Callable[[str, str, object], None]


class RecordingSurface:
    """Surface implementation that keeps its last outputs and a call log.

    Example:
        dial = RecordingSurface("dial-1", is_dial=True)
        await dial.set_feedback(DialFeedback("00:05:00"))
        assert dial.feedback.time_text == "00:05:00"
    """

    def __init__(
        self,
        surface_id: str,
        *,
        is_dial: bool = False,
        settings: dict[str, Any] | None = None,
        delay: float = 0.0,
        on_call: CallObserver | None = None,
    ) -> None:
        """Initialize the surface.

        Args:
            surface_id: Host identifier of the surface.
            is_dial: True for a dial, False for a key.
            settings: Initial stored settings.
            delay: Seconds each outbound call takes (simulated host latency).
            on_call: Optional observer invoked as (surface_id, method, value).
        """
        self._id = surface_id
        self._is_dial = is_dial
        self._settings: dict[str, Any] = dict(settings or {})
        self._delay = delay
        self._on_call = on_call
        self.calls: list[tuple[str, object]] = []
        self.title: str | None = None
        self.state: int | None = None
        self.layout: str | None = None
        self.feedback: DialFeedback | None = None
        self.alerts = 0

    @property
    def id(self) -> str:
        """Return the surface ID."""
        return self._id

    @property
    def is_dial(self) -> bool:
        """Return True if this is a dial."""
        return self._is_dial

    @property
    def settings(self) -> dict[str, Any]:
        """Return a copy of the stored settings."""
        return dict(self._settings)

    def calls_to(self, method: str) -> list[object]:
        """Return the recorded values passed to one method, in order."""
        return [value for name, value in self.calls if name == method]

    async def _record(self, method: str, value: object) -> None:
        if self._delay:
            await asyncio.sleep(self._delay)
        self.calls.append((method, value))
        if self._on_call is not None:
            self._on_call(self._id, method, value)

    async def get_settings(self) -> dict[str, Any]:
        """Return the stored settings."""
        return dict(self._settings)

    async def set_settings(self, settings: dict[str, Any]) -> None:
        """Replace the stored settings."""
        self._settings = dict(settings)
        await self._record("set_settings", dict(settings))

    async def set_state(self, state: int) -> None:
        """Record a discrete state."""
        await self._record("set_state", state)
        self.state = state

    async def set_title(self, title: str) -> None:
        """Record a title."""
        await self._record("set_title", title)
        self.title = title

    async def set_feedback_layout(self, layout: str) -> None:
        """Record a layout switch."""
        await self._record("set_feedback_layout", layout)
        self.layout = layout

    async def set_feedback(self, feedback: DialFeedback) -> None:
        """Record dial feedback."""
        await self._record("set_feedback", feedback)
        self.feedback = feedback

    async def show_alert(self) -> None:
        """Record an alert."""
        await self._record("show_alert", None)
        self.alerts += 1
