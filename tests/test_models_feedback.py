"""Tests for dial feedback models."""

from timerdeck.models.feedback import DialFeedback, ProgressField


class TestDialFeedbackPayload:
    """Test host payload conversion."""

    def test_time_only(self) -> None:
        """Test feedback without a progress bar."""
        payload = DialFeedback("00:05:00").to_payload()
        assert payload == {"time": {"value": "00:05:00"}}

    def test_with_progress(self) -> None:
        """Test feedback with a progress bar and no outline."""
        feedback = DialFeedback("00:02:30", ProgressField(50, "#FFFFFF", "#000000"))
        assert feedback.to_payload() == {
            "time": {"value": "00:02:30"},
            "progress": {"value": 50, "bar_fill_c": "#FFFFFF", "bar_bg_c": "#000000"},
        }

    def test_outline_included_when_set(self) -> None:
        """Test that an outline color is passed through."""
        progress = ProgressField(10, "#FFFFFF", "#000000", outline_color="#FF0000")
        assert progress.to_payload()["bar_border_c"] == "#FF0000"
