"""QThread worker hosting the timer engine in a Qt application.

The engine runs on asyncio, while a Qt host delivers input on its own
thread. This worker runs the asyncio event loop in a background thread,
accepts host events thread-safely, and reports engine events back via
Qt signals.
"""

import asyncio
import logging

from PySide6.QtCore import QThread, Signal

from timerdeck.api.events import HostEvent
from timerdeck.core.config import EngineConfig
from timerdeck.core.service import TimerService

logger = logging.getLogger(__name__)


class TimerWorker(QThread):
    """Background thread running a TimerService.

    Example:
        worker = TimerWorker(config.engine_config())
        worker.timer_finished.connect(lambda group_id: print(f"{group_id} done"))
        worker.ready.connect(lambda: worker.post_event(event))
        worker.start()
    """

    ready = Signal()  # Event loop is running and accepting events
    timer_finished = Signal(str)  # Group ID whose countdown hit zero
    group_removed = Signal(str)  # Group ID discarded after its last surface left
    error_occurred = Signal(object)  # Exception

    def __init__(self, config: EngineConfig | None = None) -> None:
        """Initialize the worker.

        Args:
            config: Engine tunables passed to the service.
        """
        super().__init__()
        self._config = config or EngineConfig()
        self._service: TimerService | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._stop_event: asyncio.Event | None = None
        self._should_run = True

    @property
    def config(self) -> EngineConfig:
        """Return the engine configuration."""
        return self._config

    @property
    def service(self) -> TimerService | None:
        """Return the running service, or None before start/after stop."""
        return self._service

    @property
    def is_running(self) -> bool:
        """Return True while the event loop accepts events."""
        return self._loop is not None and self._loop.is_running() and self._service is not None

    def post_event(self, event: HostEvent) -> None:
        """Queue a host event for the engine.

        Thread-safe call from any thread. Dropped while the loop is not running.

        Args:
            event: The host event.
        """
        if self._loop and self._loop.is_running() and self._service:
            asyncio.run_coroutine_threadsafe(self._safe_dispatch(event), self._loop)
        else:
            logger.debug("Dropping %s event: worker not running", event.kind.value)

    def stop(self) -> None:
        """Signal the worker to stop (called from main thread)."""
        self._should_run = False
        if self._loop and self._loop.is_running() and self._stop_event:
            self._loop.call_soon_threadsafe(self._stop_event.set)

    async def _safe_dispatch(self, event: HostEvent) -> None:
        """Dispatch an event, reporting unexpected failures."""
        if self._service is None:
            return
        try:
            await self._service.dispatch(event)
        except Exception as e:
            logger.exception("Failed to handle %s event", event.kind.value)
            self.error_occurred.emit(e)

    def run(self) -> None:
        """Run the worker thread (entry point)."""
        self._loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self._loop)

        try:
            self._loop.run_until_complete(self._serve())
        except Exception as e:
            self.error_occurred.emit(e)
        finally:
            if self._service:
                self._loop.run_until_complete(self._service.shutdown())
            self._loop.close()
            self._loop = None
            self._service = None
            self._stop_event = None

    async def _serve(self) -> None:
        """Create the service and keep the loop alive until stopped."""
        self._stop_event = asyncio.Event()
        self._service = TimerService(
            self._config,
            on_finished=self.timer_finished.emit,
            on_group_removed=self.group_removed.emit,
        )
        if not self._should_run:
            return
        self.ready.emit()
        await self._stop_event.wait()
