"""Tests for ConfigManager using QSettings."""

import pytest

from timerdeck.core.config import ConfigManager, EngineConfig


@pytest.fixture
def config() -> ConfigManager:
    """Return a fresh ConfigManager for each test."""
    # Use unique organization/app to avoid test interference
    config = ConfigManager("TimerDeckTest", "TestConfig")
    config.clear()
    return config


class TestEngineConfig:
    """Test the EngineConfig snapshot."""

    def test_defaults(self) -> None:
        """Test default tunables."""
        engine = EngineConfig()
        assert engine.tick_interval_ms == 200
        assert engine.hold_delay_ms == 350
        assert engine.hold_repeat_ms == 120
        assert engine.default_duration_seconds == 300
        assert engine.default_group_id == "1"

    def test_seconds_properties(self) -> None:
        """Test millisecond to second conversion."""
        engine = EngineConfig(tick_interval_ms=250, hold_delay_ms=500, hold_repeat_ms=100)
        assert engine.tick_interval == 0.25
        assert engine.hold_delay == 0.5
        assert engine.hold_repeat == 0.1


class TestConfigManagerDefaults:
    """Test values read from an empty store."""

    def test_defaults(self, config: ConfigManager) -> None:
        """Test that an empty store yields the built-in defaults."""
        assert config.engine_config() == EngineConfig()


class TestConfigManagerEngine:
    """Test engine settings."""

    def test_tick_interval(self, config: ConfigManager) -> None:
        """Test setting the tick interval."""
        config.set_tick_interval_ms(100)
        assert config.get_tick_interval_ms() == 100

    def test_tick_interval_clamped(self, config: ConfigManager) -> None:
        """Test that the tick interval is clamped."""
        config.set_tick_interval_ms(1)
        assert config.get_tick_interval_ms() == 20
        config.set_tick_interval_ms(10_000)
        assert config.get_tick_interval_ms() == 1000


class TestConfigManagerGestures:
    """Test gesture settings."""

    def test_hold_delay(self, config: ConfigManager) -> None:
        """Test setting and clamping the hold delay."""
        config.set_hold_delay_ms(500)
        assert config.get_hold_delay_ms() == 500
        config.set_hold_delay_ms(0)
        assert config.get_hold_delay_ms() == 50

    def test_hold_repeat(self, config: ConfigManager) -> None:
        """Test setting and clamping the hold repeat period."""
        config.set_hold_repeat_ms(80)
        assert config.get_hold_repeat_ms() == 80
        config.set_hold_repeat_ms(99_999)
        assert config.get_hold_repeat_ms() == 5000

    def test_invalid_stored_value(self, config: ConfigManager) -> None:
        """Test that a corrupted value falls back to the default."""
        config.settings.setValue("gestures/hold_delay_ms", "not-a-number")
        assert config.get_hold_delay_ms() == 350


class TestConfigManagerTimer:
    """Test timer defaults."""

    def test_default_duration(self, config: ConfigManager) -> None:
        """Test setting the default duration."""
        config.set_default_duration_seconds(90)
        assert config.get_default_duration_seconds() == 90

    def test_default_duration_clamped(self, config: ConfigManager) -> None:
        """Test that the default duration stays in the timer window."""
        config.set_default_duration_seconds(1)
        assert config.get_default_duration_seconds() == 5
        config.set_default_duration_seconds(10**6)
        assert config.get_default_duration_seconds() == 86_400

    def test_default_group_id(self, config: ConfigManager) -> None:
        """Test setting the fallback group."""
        config.set_default_group_id("kitchen")
        assert config.get_default_group_id() == "kitchen"

    def test_empty_group_id(self, config: ConfigManager) -> None:
        """Test that an empty group ID falls back to the default."""
        config.set_default_group_id("")
        assert config.get_default_group_id() == "1"

    def test_engine_config_snapshot(self, config: ConfigManager) -> None:
        """Test that engine_config reflects stored values."""
        config.set_hold_delay_ms(400)
        config.set_default_group_id("a")
        engine = config.engine_config()
        assert engine.hold_delay_ms == 400
        assert engine.default_group_id == "a"
        assert engine.tick_interval_ms == 200


class TestConfigManagerPersistence:
    """Test persistence across instances."""

    def test_values_persist(self, config: ConfigManager) -> None:
        """Test that a second manager sees synced values."""
        config.set_default_duration_seconds(120)
        config.sync()

        other = ConfigManager("TimerDeckTest", "TestConfig")
        assert other.get_default_duration_seconds() == 120
