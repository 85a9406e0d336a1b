"""Test fixtures for timerdeck tests."""

import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio

# Qt tests run headless
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from helpers import HOLD_DELAY_MS, HOLD_REPEAT_MS, FakeClock  # noqa: E402

from timerdeck.api.loopback import RecordingSurface  # noqa: E402
from timerdeck.core.config import EngineConfig  # noqa: E402
from timerdeck.core.service import TimerService  # noqa: E402


@pytest.fixture
def clock() -> FakeClock:
    """Return a hand-driven millisecond clock."""
    return FakeClock()


@pytest.fixture
def engine_config() -> EngineConfig:
    """Engine config with short gesture timings and an effectively idle ticker."""
    return EngineConfig(
        tick_interval_ms=60_000,
        hold_delay_ms=HOLD_DELAY_MS,
        hold_repeat_ms=HOLD_REPEAT_MS,
    )


@pytest.fixture
def finished() -> list[str]:
    """Group IDs reported as finished."""
    return []


@pytest.fixture
def removed() -> list[str]:
    """Group IDs reported as removed."""
    return []


@pytest_asyncio.fixture
async def service(
    engine_config: EngineConfig,
    clock: FakeClock,
    finished: list[str],
    removed: list[str],
) -> AsyncGenerator[TimerService, None]:
    """Fresh TimerService on the virtual clock, shut down after the test."""
    svc = TimerService(
        engine_config,
        clock=clock,
        on_finished=finished.append,
        on_group_removed=removed.append,
    )
    yield svc
    await svc.shutdown()


@pytest.fixture
def dial() -> RecordingSurface:
    """A dial in group 1."""
    return RecordingSurface("dial-1", is_dial=True, settings={"role": "dial", "groupId": "1"})


@pytest.fixture
def key() -> RecordingSurface:
    """A key in group 1 showing the full label."""
    return RecordingSurface("key-1", settings={"role": "key", "groupId": "1"})
