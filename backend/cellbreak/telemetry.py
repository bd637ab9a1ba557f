"""Session telemetry for the pacing engine."""
import logging
from dataclasses import dataclass
from typing import Any, Protocol

from cellbreak.config import settings


logger = logging.getLogger(__name__)


class TelemetrySink(Protocol):
    """Protocol for telemetry sinks."""

    def emit(self, event_name: str, data: dict[str, Any]) -> None:
        """Emit a telemetry event."""
        ...


class LoggingTelemetrySink:
    """Default sink that logs telemetry events."""

    def emit(self, event_name: str, data: dict[str, Any]) -> None:
        """Log telemetry event."""
        logger.info("TELEMETRY %s: %s", event_name, data)


class NullTelemetrySink:
    """Sink that drops every event (bulk simulation)."""

    def emit(self, event_name: str, data: dict[str, Any]) -> None:
        pass


@dataclass
class WaveGeneratedEvent:
    """wave_generated telemetry event."""

    session_id: str
    config_hash: str
    wave_number: int
    enemy_count: int
    spawn_rate: float
    special_event: str  # "none" | "bonus" | "boss" | "swarm" | "speed"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for emission."""
        return {
            "session_id": self.session_id,
            "config_hash": self.config_hash,
            "wave_number": self.wave_number,
            "enemy_count": self.enemy_count,
            "spawn_rate": self.spawn_rate,
            "special_event": self.special_event,
        }


@dataclass
class ComboMilestoneEvent:
    """combo_milestone telemetry event."""

    session_id: str
    config_hash: str
    combo: int
    bonus: int
    message: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for emission."""
        return {
            "session_id": self.session_id,
            "config_hash": self.config_hash,
            "combo": self.combo,
            "bonus": self.bonus,
            "message": self.message,
        }


@dataclass
class WaveCompletedEvent:
    """wave_completed telemetry event."""

    session_id: str
    config_hash: str
    wave_number: int
    enemies_killed: int
    total_enemies: int
    bonus: int
    perfect: bool

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for emission."""
        return {
            "session_id": self.session_id,
            "config_hash": self.config_hash,
            "wave_number": self.wave_number,
            "enemies_killed": self.enemies_killed,
            "total_enemies": self.total_enemies,
            "bonus": self.bonus,
            "perfect": self.perfect,
        }


@dataclass
class PowerUpDrawnEvent:
    """power_up_drawn telemetry event."""

    session_id: str
    config_hash: str
    wave_number: int
    power_up_type: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for emission."""
        return {
            "session_id": self.session_id,
            "config_hash": self.config_hash,
            "wave_number": self.wave_number,
            "power_up_type": self.power_up_type,
        }


@dataclass
class TensionFiredEvent:
    """tension_fired telemetry event."""

    session_id: str
    config_hash: str
    event_type: str  # "warning" | "alert" | "danger" | "critical"
    score: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for emission."""
        return {
            "session_id": self.session_id,
            "config_hash": self.config_hash,
            "event_type": self.event_type,
            "score": self.score,
        }


@dataclass
class SessionResetEvent:
    """session_reset telemetry event."""

    session_id: str
    config_hash: str
    waves_played: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for emission."""
        return {
            "session_id": self.session_id,
            "config_hash": self.config_hash,
            "waves_played": self.waves_played,
        }


class TelemetryService:
    """Service for emitting engine telemetry events."""

    def __init__(self, sink: TelemetrySink | None = None, enabled: bool | None = None):
        self._sink = sink or LoggingTelemetrySink()
        self._sink_errors = 0  # Counter for sink failures
        self.enabled = settings.enable_telemetry if enabled is None else enabled

    @property
    def sink_errors(self) -> int:
        return self._sink_errors

    def set_sink(self, sink: TelemetrySink) -> None:
        """Set the telemetry sink (useful for testing)."""
        self._sink = sink

    def _safe_emit(self, event_name: str, data: dict[str, Any]) -> None:
        """
        Emit event with exception safety.

        Sink failures MUST NOT break the game loop.
        """
        if not self.enabled:
            return
        try:
            self._sink.emit(event_name, data)
        except Exception as e:
            self._sink_errors += 1
            logger.warning(
                "Telemetry sink error (count=%d): %s - %s",
                self._sink_errors,
                event_name,
                str(e),
            )

    def emit_wave_generated(self, event: WaveGeneratedEvent) -> None:
        self._safe_emit("wave_generated", event.to_dict())

    def emit_combo_milestone(self, event: ComboMilestoneEvent) -> None:
        self._safe_emit("combo_milestone", event.to_dict())

    def emit_wave_completed(self, event: WaveCompletedEvent) -> None:
        self._safe_emit("wave_completed", event.to_dict())

    def emit_power_up_drawn(self, event: PowerUpDrawnEvent) -> None:
        self._safe_emit("power_up_drawn", event.to_dict())

    def emit_tension_fired(self, event: TensionFiredEvent) -> None:
        self._safe_emit("tension_fired", event.to_dict())

    def emit_session_reset(self, event: SessionResetEvent) -> None:
        self._safe_emit("session_reset", event.to_dict())


# Global instance
telemetry_service = TelemetryService()
