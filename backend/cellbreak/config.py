"""Engine configuration derived from the tuning table and environment."""
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Pacing engine settings; defaults are the shipped game feel."""

    model_config = ConfigDict(env_prefix="CELLBREAK_")

    # Runtime
    debug: bool = False
    log_level: str = "INFO"

    # Combo tracker
    combo_window_ms: int = 2000  # max gap between kills that keeps a streak

    # Wave generator
    max_enemy_count: int = 50
    base_enemy_speed: float = 1.0
    base_spawn_rate_ms: int = 1000
    min_spawn_rate_ms: int = 200

    # Wave bonus
    wave_complete_bonus: int = 500
    perfect_wave_bonus: int = 1000

    # Tension sampler
    tension_event_chance: float = 0.02  # per call

    # Telemetry
    enable_telemetry: bool = True


settings = Settings()
