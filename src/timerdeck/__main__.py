"""Demo entry point: run one shared timer against recording surfaces.

Starts the engine in its worker thread, attaches a dial and a key to the
same group, starts the countdown, and logs every update the surfaces
receive until the timer finishes.
"""

import argparse
import logging
import sys
from dataclasses import replace

from PySide6.QtCore import QCoreApplication

from timerdeck.api.events import EventKind, HostEvent
from timerdeck.api.loopback import RecordingSurface
from timerdeck.core.config import ConfigManager, EngineConfig
from timerdeck.core.worker import TimerWorker
from timerdeck.models.feedback import DialFeedback
from timerdeck.models.runtime import clamp_seconds

logger = logging.getLogger(__name__)


def log_call(surface_id: str, method: str, value: object) -> None:
    """Log one outbound surface call."""
    if isinstance(value, DialFeedback):
        value = value.to_payload()
    logger.info("%s <- %s(%s)", surface_id, method, value)


def engine_config_for(config: ConfigManager, duration: int | None = None) -> EngineConfig:
    """Return the stored engine config with a one-off duration override.

    The override only applies to this run; the stored settings are left alone.
    """
    engine_config = config.engine_config()
    if duration is None:
        return engine_config
    return replace(engine_config, default_duration_seconds=clamp_seconds(duration))


def main() -> int:
    """Run the demo.

    Returns:
        Exit code (0 for success).
    """
    app = QCoreApplication(sys.argv)

    parser = argparse.ArgumentParser(
        prog="timerdeck",
        description="TimerDeck: shared countdown for dial and key surfaces",
    )
    parser.add_argument(
        "--duration", type=int, default=None, help="timer length in seconds (5-86400)",
    )
    parser.add_argument("--group", default=None, help="group ID (default: configured default)")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parsed = parser.parse_args(app.arguments()[1:])

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    engine_config = engine_config_for(ConfigManager(), parsed.duration)
    group_id = parsed.group or engine_config.default_group_id

    settings = {"groupId": group_id}
    dial = RecordingSurface(
        "demo-dial", is_dial=True, settings={**settings, "role": "dial"}, on_call=log_call,
    )
    key = RecordingSurface(
        "demo-key",
        settings={**settings, "role": "key", "displayPart": "seconds"},
        on_call=log_call,
    )

    worker = TimerWorker(engine_config)

    def on_ready() -> None:
        logger.info(
            "Starting %ds timer in group %s", engine_config.default_duration_seconds, group_id,
        )
        worker.post_event(HostEvent(EventKind.APPEARED, dial, dial.settings))
        worker.post_event(HostEvent(EventKind.APPEARED, key, key.settings))
        # A release without a press is a tap; the key's tap action is toggle.
        worker.post_event(HostEvent(EventKind.KEY_RELEASED, key, key.settings))

    def on_finished(finished_group: str) -> None:
        logger.info("Timer %s finished", finished_group)
        app.quit()

    def on_error(error: object) -> None:
        logger.error("Engine error: %s", error)

    worker.ready.connect(on_ready)
    worker.timer_finished.connect(on_finished)
    worker.error_occurred.connect(on_error)
    worker.start()

    exit_code = app.exec()

    worker.stop()
    worker.wait()
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
