"""Config hash shared by telemetry and the audit CSV.

The hash MUST be computed identically in both locations so that an audit row
can be matched to the sessions that produced telemetry under the same tuning.
"""
import hashlib
import json

from cellbreak.config import settings


def get_config_hash() -> str:
    """
    Generate hash of the current tuning snapshot.

    Returns 16-char hex hash of config snapshot.
    Used for:
    - audit CSV config_hash column
    - config_hash field on every telemetry event
    """
    config_snapshot = {
        "combo_window_ms": settings.combo_window_ms,
        "max_enemy_count": settings.max_enemy_count,
        "base_enemy_speed": settings.base_enemy_speed,
        "base_spawn_rate_ms": settings.base_spawn_rate_ms,
        "min_spawn_rate_ms": settings.min_spawn_rate_ms,
        "wave_complete_bonus": settings.wave_complete_bonus,
        "perfect_wave_bonus": settings.perfect_wave_bonus,
        "tension_event_chance": settings.tension_event_chance,
    }
    canonical = json.dumps(config_snapshot, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode()).hexdigest()[:16]
