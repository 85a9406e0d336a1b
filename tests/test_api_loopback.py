"""Tests for the in-memory RecordingSurface."""

import pytest

from timerdeck.api.events import EventKind, HostEvent
from timerdeck.api.loopback import RecordingSurface
from timerdeck.api.surface import Surface
from timerdeck.models.feedback import DialFeedback


class TestRecordingSurface:
    """Tests for RecordingSurface."""

    def test_satisfies_surface_protocol(self) -> None:
        """Test that the recorder implements the Surface protocol."""
        assert isinstance(RecordingSurface("k"), Surface)

    def test_initialization(self) -> None:
        """Test initial state."""
        dial = RecordingSurface("d", is_dial=True, settings={"groupId": "2"})
        assert dial.id == "d"
        assert dial.is_dial is True
        assert dial.settings == {"groupId": "2"}
        assert dial.calls == []

    @pytest.mark.asyncio
    async def test_records_calls(self) -> None:
        """Test that outbound calls are recorded in order."""
        key = RecordingSurface("k")
        await key.set_title("00:01:00")
        await key.set_state(1)
        await key.show_alert()
        assert key.calls == [("set_title", "00:01:00"), ("set_state", 1), ("show_alert", None)]
        assert key.title == "00:01:00"
        assert key.state == 1
        assert key.alerts == 1

    @pytest.mark.asyncio
    async def test_settings_round_trip(self) -> None:
        """Test that stored settings are copies."""
        key = RecordingSurface("k")
        await key.set_settings({"groupId": "3"})
        stored = await key.get_settings()
        stored["groupId"] = "mutated"
        assert key.settings == {"groupId": "3"}

    @pytest.mark.asyncio
    async def test_observer_called(self) -> None:
        """Test that the call observer sees every call."""
        seen: list[tuple[str, str, object]] = []
        dial = RecordingSurface("d", is_dial=True, on_call=lambda *args: seen.append(args))
        feedback = DialFeedback("00:00:05")
        await dial.set_feedback(feedback)
        assert seen == [("d", "set_feedback", feedback)]
        assert dial.calls_to("set_feedback") == [feedback]


class TestHostEvent:
    """Tests for HostEvent."""

    def test_surface_id(self) -> None:
        """Test that the event exposes its surface ID."""
        ev = HostEvent(EventKind.DIAL_ROTATED, RecordingSurface("d", is_dial=True), ticks=3)
        assert ev.surface_id == "d"
        assert ev.ticks == 3
        assert ev.settings == {}

    def test_press_release_kinds(self) -> None:
        """Test press/release classification of event kinds."""
        assert EventKind.KEY_PRESSED.is_press
        assert EventKind.DIAL_PRESSED.is_press
        assert EventKind.DIAL_RELEASED.is_release
        assert not EventKind.DIAL_ROTATED.is_press
        assert not EventKind.SETTINGS_CHANGED.is_release
