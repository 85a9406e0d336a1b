"""Configuration manager using QSettings for persistent engine tunables.

Per-surface settings are not stored here; they travel with every host
event. This only holds the knobs that shape the engine itself.
"""

import logging
from dataclasses import dataclass

from PySide6.QtCore import QSettings

from timerdeck.models.runtime import (
    DEFAULT_DURATION_SECONDS,
    MAX_DURATION_SECONDS,
    MIN_DURATION_SECONDS,
    clamp_seconds,
)
from timerdeck.models.settings import DEFAULT_GROUP_ID

logger = logging.getLogger(__name__)

# Settings keys
_KEY_TICK_INTERVAL = "engine/tick_interval_ms"
_KEY_HOLD_DELAY = "gestures/hold_delay_ms"
_KEY_HOLD_REPEAT = "gestures/hold_repeat_ms"
_KEY_DEFAULT_DURATION = "timer/default_duration_seconds"
_KEY_DEFAULT_GROUP = "timer/default_group_id"

TICK_INTERVAL_MS = 200
HOLD_DELAY_MS = 350
HOLD_REPEAT_MS = 120


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Tunables consumed by the timer service.

    Attributes:
        tick_interval_ms: Period of each group's ticker.
        hold_delay_ms: How long a press must last to count as a hold.
        hold_repeat_ms: Repeat period of inc/dec holds.
        default_duration_seconds: Duration of newly created groups.
        default_group_id: Group used by surfaces that declare none.
    """

    tick_interval_ms: int = TICK_INTERVAL_MS
    hold_delay_ms: int = HOLD_DELAY_MS
    hold_repeat_ms: int = HOLD_REPEAT_MS
    default_duration_seconds: int = DEFAULT_DURATION_SECONDS
    default_group_id: str = DEFAULT_GROUP_ID

    @property
    def tick_interval(self) -> float:
        """Return the tick interval in seconds."""
        return self.tick_interval_ms / 1000

    @property
    def hold_delay(self) -> float:
        """Return the hold delay in seconds."""
        return self.hold_delay_ms / 1000

    @property
    def hold_repeat(self) -> float:
        """Return the hold repeat period in seconds."""
        return self.hold_repeat_ms / 1000


class ConfigManager:
    """Wrapper around QSettings for type-safe config access.

    QSettings stores config in platform-specific locations:
    - Windows: HKEY_CURRENT_USER\\Software\\TimerDeck\\TimerDeck
    - macOS: ~/Library/Preferences/com.TimerDeck.TimerDeck.plist
    - Linux: ~/.config/TimerDeck/TimerDeck.conf

    Example:
        config = ConfigManager()
        config.set_hold_delay_ms(400)
        service = TimerService(config.engine_config())
    """

    def __init__(self, organization: str = "TimerDeck", application: str = "TimerDeck") -> None:
        """Initialize the config manager.

        Args:
            organization: Organization name for QSettings.
            application: Application name for QSettings.
        """
        self._settings = QSettings(organization, application)

    @property
    def settings(self) -> QSettings:
        """Return the underlying QSettings instance."""
        return self._settings

    def _int_value(self, key: str, default: int, low: int, high: int) -> int:
        value = self._settings.value(key, default)
        try:
            number = int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid value for %s: %r", key, value)
            return default
        return max(low, min(high, number))

    # -- Engine ----------------------------------------------------------------

    def get_tick_interval_ms(self) -> int:
        """Return the ticker period in milliseconds (default 200)."""
        return self._int_value(_KEY_TICK_INTERVAL, TICK_INTERVAL_MS, 20, 1000)

    def set_tick_interval_ms(self, interval_ms: int) -> None:
        """Set the ticker period.

        Args:
            interval_ms: Period in milliseconds (20-1000).
        """
        self._settings.setValue(_KEY_TICK_INTERVAL, max(20, min(1000, interval_ms)))

    # -- Gestures --------------------------------------------------------------

    def get_hold_delay_ms(self) -> int:
        """Return how long a press must last to become a hold (default 350)."""
        return self._int_value(_KEY_HOLD_DELAY, HOLD_DELAY_MS, 50, 5000)

    def set_hold_delay_ms(self, delay_ms: int) -> None:
        """Set the hold delay.

        Args:
            delay_ms: Delay in milliseconds (50-5000).
        """
        self._settings.setValue(_KEY_HOLD_DELAY, max(50, min(5000, delay_ms)))

    def get_hold_repeat_ms(self) -> int:
        """Return the repeat period of held inc/dec actions (default 120)."""
        return self._int_value(_KEY_HOLD_REPEAT, HOLD_REPEAT_MS, 20, 5000)

    def set_hold_repeat_ms(self, repeat_ms: int) -> None:
        """Set the hold repeat period.

        Args:
            repeat_ms: Period in milliseconds (20-5000).
        """
        self._settings.setValue(_KEY_HOLD_REPEAT, max(20, min(5000, repeat_ms)))

    # -- Timer defaults --------------------------------------------------------

    def get_default_duration_seconds(self) -> int:
        """Return the duration given to newly created groups (default 300)."""
        return self._int_value(
            _KEY_DEFAULT_DURATION,
            DEFAULT_DURATION_SECONDS,
            MIN_DURATION_SECONDS,
            MAX_DURATION_SECONDS,
        )

    def set_default_duration_seconds(self, seconds: int) -> None:
        """Set the duration of newly created groups.

        Args:
            seconds: Duration, clamped to the allowed timer window.
        """
        self._settings.setValue(_KEY_DEFAULT_DURATION, clamp_seconds(seconds))

    def get_default_group_id(self) -> str:
        """Return the group used by surfaces without a group ID (default "1")."""
        value = self._settings.value(_KEY_DEFAULT_GROUP, DEFAULT_GROUP_ID, str)
        return str(value) if value else DEFAULT_GROUP_ID

    def set_default_group_id(self, group_id: str) -> None:
        """Set the fallback group ID.

        Args:
            group_id: Non-empty group identifier.
        """
        self._settings.setValue(_KEY_DEFAULT_GROUP, group_id or DEFAULT_GROUP_ID)

    # -- General settings ------------------------------------------------------

    def engine_config(self) -> EngineConfig:
        """Return a snapshot of all engine tunables."""
        return EngineConfig(
            tick_interval_ms=self.get_tick_interval_ms(),
            hold_delay_ms=self.get_hold_delay_ms(),
            hold_repeat_ms=self.get_hold_repeat_ms(),
            default_duration_seconds=self.get_default_duration_seconds(),
            default_group_id=self.get_default_group_id(),
        )

    def clear(self) -> None:
        """Clear all settings (useful for testing or reset)."""
        self._settings.clear()

    def sync(self) -> None:
        """Force settings to be written to disk."""
        self._settings.sync()
