"""Outbound contract for a host rendering surface.

A surface is one dial or key on the control deck. The host transport
supplies objects implementing this protocol; the engine only ever
references them by ``id`` and never manages their lifecycle.
"""

from typing import Any, Protocol, runtime_checkable

from timerdeck.models.feedback import DialFeedback


@runtime_checkable
class Surface(Protocol):
    """A single rendering/input endpoint (dial-like or key-like)."""

    @property
    def id(self) -> str:
        """Return the host-assigned surface identifier."""
        ...

    @property
    def is_dial(self) -> bool:
        """Return True for dial-like surfaces, False for keys."""
        ...

    async def get_settings(self) -> dict[str, Any]:
        """Fetch the surface's stored settings blob."""
        ...

    async def set_settings(self, settings: dict[str, Any]) -> None:
        """Replace the surface's stored settings blob."""
        ...

    async def set_state(self, state: int) -> None:
        """Set the discrete state of a key."""
        ...

    async def set_title(self, title: str) -> None:
        """Set the title text of a key."""
        ...

    async def set_feedback_layout(self, layout: str) -> None:
        """Switch a dial's feedback layout."""
        ...

    async def set_feedback(self, feedback: DialFeedback) -> None:
        """Push structured feedback to a dial."""
        ...

    async def show_alert(self) -> None:
        """Flash the host's alert indicator on this surface."""
        ...
