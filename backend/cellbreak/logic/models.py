"""Session state and value objects for the pacing engine."""
from enum import Enum

from pydantic import BaseModel, ConfigDict


class SpecialEvent(str, Enum):
    """Wave modifier; exactly one per wave."""
    NONE = "none"
    BONUS = "bonus"
    BOSS = "boss"
    SWARM = "swarm"
    SPEED = "speed"


class PowerUpType(str, Enum):
    """Power-up catalog keys."""
    SHIELD = "shield"
    RAPID_FIRE = "rapid_fire"
    MULTI_SHOT = "multi_shot"
    SLOW_TIME = "slow_time"
    NUKE = "nuke"
    MAGNET = "magnet"
    DOUBLE_POINTS = "double_points"


class TensionEventType(str, Enum):
    """Severity token of a tension event."""
    WARNING = "warning"
    ALERT = "alert"
    DANGER = "danger"
    CRITICAL = "critical"


class SessionState(BaseModel):
    """
    Per-session counters owned by one engine.

    Tracks:
    - wave_number (0 before the first wave)
    - combo_count (current kill streak, 0 when idle)
    - last_kill_timestamp (ms, 0 before the first kill)
    """
    wave_number: int = 0
    combo_count: int = 0
    last_kill_timestamp: int = 0


class WaveConfig(BaseModel):
    """Configuration of one wave; produced fresh on each transition."""
    wave_number: int
    enemy_count: int
    enemy_speed: float
    spawn_rate: float  # ms between spawns
    power_up_chance: float
    bonus_multiplier: float
    special_event: SpecialEvent = SpecialEvent.NONE


class PowerUp(BaseModel):
    """Catalog entry; duration 0 means the effect is instantaneous."""
    model_config = ConfigDict(frozen=True)

    type: PowerUpType
    duration: int
    color: str
    effect: str


class KillResult(BaseModel):
    """Outcome of a registered kill."""
    combo: int
    bonus: int
    message: str | None = None


class WaveBonus(BaseModel):
    """End-of-wave score."""
    bonus: int
    perfect: bool = False


class TensionEvent(BaseModel):
    """Narrative alert flourish."""
    model_config = ConfigDict(frozen=True)

    type: TensionEventType
    message: str
