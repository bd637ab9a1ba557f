"""Pytest fixtures for engine tests."""
from typing import Any, Callable

import pytest

from cellbreak.logic.engine import DifficultyEngine
from cellbreak.logic.rng import RNGBase, SeededRNG
from cellbreak.telemetry import TelemetryService


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (large statistical samples)"
    )


class ScriptedRNG(RNGBase):
    """RNG that replays a fixed list of draws, cycling when exhausted."""

    def __init__(self, values: list[float]):
        self._values = list(values)
        self._index = 0
        self.calls = 0

    def random(self) -> float:
        value = self._values[self._index % len(self._values)]
        self._index += 1
        self.calls += 1
        return value


class RecordingSink:
    """Telemetry sink that keeps every event in memory."""

    def __init__(self):
        self.events: list[tuple[str, dict[str, Any]]] = []

    def emit(self, event_name: str, data: dict[str, Any]) -> None:
        self.events.append((event_name, data))

    def named(self, event_name: str) -> list[dict[str, Any]]:
        return [data for name, data in self.events if name == event_name]

    def clear(self) -> None:
        self.events.clear()


class FailingSink:
    """Telemetry sink that always raises."""

    def emit(self, event_name: str, data: dict[str, Any]) -> None:
        raise RuntimeError("sink down")


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def telemetry(recording_sink: RecordingSink) -> TelemetryService:
    return TelemetryService(sink=recording_sink, enabled=True)


@pytest.fixture
def quiet_telemetry() -> TelemetryService:
    return TelemetryService(sink=RecordingSink(), enabled=False)


@pytest.fixture
def make_engine(quiet_telemetry: TelemetryService) -> Callable[..., DifficultyEngine]:
    """Factory: engine over scripted draws (or a seed) with telemetry muted."""

    def _make(values: list[float] | None = None, seed: int | None = None) -> DifficultyEngine:
        if seed is not None:
            rng: RNGBase = SeededRNG(seed=seed)
        else:
            rng = ScriptedRNG(values if values is not None else [0.5])
        return DifficultyEngine(rng=rng, telemetry=quiet_telemetry)

    return _make


@pytest.fixture
def engine(make_engine) -> DifficultyEngine:
    """Engine whose draws are all 0.5 (speed jitter exactly neutral)."""
    return make_engine([0.5])
