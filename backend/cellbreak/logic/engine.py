"""Difficulty and reward engine for CellBreak session pacing."""
import math
import uuid
from typing import Callable, TypeVar

from cellbreak.config import settings
from cellbreak.config_hash import get_config_hash
from cellbreak.logic.catalog import (
    COMBO_MILESTONES,
    POWER_UP_CATALOG,
    POWER_UP_TOTAL_WEIGHT,
    TENSION_EVENTS,
)
from cellbreak.logic.models import (
    KillResult,
    PowerUp,
    SessionState,
    SpecialEvent,
    TensionEvent,
    WaveBonus,
    WaveConfig,
)
from cellbreak.logic.rng import ProductionRNG, RNGBase
from cellbreak.telemetry import (
    ComboMilestoneEvent,
    PowerUpDrawnEvent,
    SessionResetEvent,
    TelemetryService,
    TensionFiredEvent,
    WaveCompletedEvent,
    WaveGeneratedEvent,
    telemetry_service,
)


T = TypeVar("T")

# === CONFIG VALUES (via settings) ===
COMBO_WINDOW_MS = settings.combo_window_ms
MAX_ENEMY_COUNT = settings.max_enemy_count
BASE_ENEMY_SPEED = settings.base_enemy_speed
BASE_SPAWN_RATE_MS = settings.base_spawn_rate_ms
MIN_SPAWN_RATE_MS = settings.min_spawn_rate_ms
WAVE_COMPLETE_BONUS = settings.wave_complete_bonus
PERFECT_WAVE_BONUS = settings.perfect_wave_bonus
TENSION_EVENT_CHANCE = settings.tension_event_chance

# Speed plateaus: (first wave, speed), ascending
SPEED_PLATEAUS: tuple[tuple[int, float], ...] = (
    (5, 1.2),
    (10, 1.5),
    (15, 1.8),
    (20, 2.0),
    (30, 2.5),
    (40, 3.0),
    (50, 3.5),
)
SPEED_JITTER_MIN = 0.9
SPEED_JITTER_SPAN = 0.2

SPAWN_RATE_DECAY = 0.05
COMBO_BASE_BONUS = 10

# Ordered ladders: first matching predicate wins.
# The mod-10 power-up branch sits behind mod-5 and never fires; keep the order.
POWER_UP_CHANCE_LADDER: list[tuple[Callable[[int], bool], float]] = [
    (lambda w: w % 5 == 0, 0.3),
    (lambda w: w % 10 == 0, 0.5),
]

BONUS_MULTIPLIER_LADDER: list[tuple[Callable[[int], bool], float]] = [
    (lambda w: w % 10 == 0, 3.0),
    (lambda w: w % 5 == 0, 2.0),
]

SPECIAL_EVENT_LADDER: list[tuple[Callable[[int], bool], SpecialEvent]] = [
    (lambda w: w % 25 == 0, SpecialEvent.BOSS),
    (lambda w: w % 10 == 0, SpecialEvent.BONUS),
    (lambda w: w % 7 == 0, SpecialEvent.SWARM),
    (lambda w: w % 5 == 3, SpecialEvent.SPEED),
]


def first_match(ladder: list[tuple[Callable[[int], bool], T]], wave: int, default: T) -> T:
    """Return the result of the first ladder rung whose predicate holds."""
    for predicate, result in ladder:
        if predicate(wave):
            return result
    return default


def enemy_count_for(wave: int) -> int:
    """Tiered enemy count, capped at MAX_ENEMY_COUNT in every tier."""
    if wave <= 3:
        count = 5 + wave
    elif wave <= 10:
        count = 8 + math.floor(wave * 1.5)
    elif wave <= 20:
        count = 15 + wave * 2
    else:
        count = 20 + math.floor(wave * 2.5)
    return min(MAX_ENEMY_COUNT, count)


def base_speed_for(wave: int) -> float:
    """Plateau speed before jitter."""
    speed = BASE_ENEMY_SPEED
    for threshold, plateau_speed in SPEED_PLATEAUS:
        if wave >= threshold:
            speed = plateau_speed
    return speed


def spawn_rate_for(wave: int) -> float:
    """Milliseconds between spawns, floored at MIN_SPAWN_RATE_MS."""
    rate = BASE_SPAWN_RATE_MS / (1 + wave * SPAWN_RATE_DECAY)
    return max(MIN_SPAWN_RATE_MS, rate)


def power_up_chance_for(wave: int) -> float:
    chance = first_match(POWER_UP_CHANCE_LADDER, wave, None)
    if chance is None:
        chance = min(1.0, 0.1 + wave * 0.005)
    return chance


def bonus_multiplier_for(wave: int) -> float:
    multiplier = first_match(BONUS_MULTIPLIER_LADDER, wave, None)
    if multiplier is None:
        multiplier = 1 + wave * 0.02
    return multiplier


def special_event_for(wave: int) -> SpecialEvent:
    return first_match(SPECIAL_EVENT_LADDER, wave, SpecialEvent.NONE)


class DifficultyEngine:
    """
    Session pacing engine.

    Implements:
    - Wave generation (escalating WaveConfig per transition)
    - Combo tracking (time-windowed kill streaks, milestone bonuses)
    - Wave completion bonus
    - Weighted power-up selection
    - Tension event sampling

    One instance per game session. The engine owns its SessionState and
    holds no entity or rendering state.
    """

    def __init__(
        self,
        rng: RNGBase | None = None,
        telemetry: TelemetryService | None = None,
        session_id: str | None = None,
    ):
        self.rng = rng or ProductionRNG()
        self.telemetry = telemetry or telemetry_service
        self.session_id = session_id or uuid.uuid4().hex
        self.config_hash = get_config_hash()
        self._state = SessionState()

    @property
    def state(self) -> SessionState:
        """Snapshot of the session counters."""
        return self._state.model_copy()

    def reset(self) -> None:
        """Return the session to its zero state (game restart)."""
        self.telemetry.emit_session_reset(
            SessionResetEvent(
                session_id=self.session_id,
                config_hash=self.config_hash,
                waves_played=self._state.wave_number,
            )
        )
        self._state = SessionState()

    def get_next_wave(self) -> WaveConfig:
        """Advance the wave counter and build the new wave's configuration."""
        self._state.wave_number += 1
        wave = self._state.wave_number

        jitter = SPEED_JITTER_MIN + self.rng.random() * SPEED_JITTER_SPAN
        config = WaveConfig(
            wave_number=wave,
            enemy_count=enemy_count_for(wave),
            enemy_speed=base_speed_for(wave) * jitter,
            spawn_rate=spawn_rate_for(wave),
            power_up_chance=power_up_chance_for(wave),
            bonus_multiplier=bonus_multiplier_for(wave),
            special_event=special_event_for(wave),
        )

        self.telemetry.emit_wave_generated(
            WaveGeneratedEvent(
                session_id=self.session_id,
                config_hash=self.config_hash,
                wave_number=wave,
                enemy_count=config.enemy_count,
                spawn_rate=config.spawn_rate,
                special_event=config.special_event.value,
            )
        )
        return config

    def register_kill(self, timestamp: int) -> KillResult:
        """
        Update the combo streak for a kill at ``timestamp`` (ms).

        Timestamps must come from one monotonic clock in non-decreasing order.
        A gap of at most COMBO_WINDOW_MS extends the streak, anything longer
        starts a new streak at 1.
        """
        state = self._state
        if timestamp - state.last_kill_timestamp <= COMBO_WINDOW_MS:
            state.combo_count += 1
        else:
            state.combo_count = 1
        state.last_kill_timestamp = timestamp

        combo = state.combo_count
        bonus = COMBO_BASE_BONUS * combo
        message = COMBO_MILESTONES.get(combo)
        if message is not None:
            bonus *= 2
            self.telemetry.emit_combo_milestone(
                ComboMilestoneEvent(
                    session_id=self.session_id,
                    config_hash=self.config_hash,
                    combo=combo,
                    bonus=bonus,
                    message=message,
                )
            )

        return KillResult(combo=combo, bonus=bonus, message=message)

    def get_wave_complete_bonus(self, enemies_killed: int, total_enemies: int) -> WaveBonus:
        """
        Score the wave that just ended.

        A full clear pays PERFECT_WAVE_BONUS; anything else pays the kill
        share of WAVE_COMPLETE_BONUS, rounded down. total_enemies must be > 0.
        """
        percentage = enemies_killed / total_enemies
        if percentage == 1:
            result = WaveBonus(bonus=PERFECT_WAVE_BONUS, perfect=True)
        else:
            result = WaveBonus(bonus=math.floor(WAVE_COMPLETE_BONUS * percentage), perfect=False)

        self.telemetry.emit_wave_completed(
            WaveCompletedEvent(
                session_id=self.session_id,
                config_hash=self.config_hash,
                wave_number=self._state.wave_number,
                enemies_killed=enemies_killed,
                total_enemies=total_enemies,
                bonus=result.bonus,
                perfect=result.perfect,
            )
        )
        return result

    def get_random_power_up(self) -> PowerUp:
        """
        Draw a power-up from the weighted catalog.

        Whether a power-up spawns at all is decided by the caller using
        WaveConfig.power_up_chance.
        """
        power_up = self._draw_power_up()
        self.telemetry.emit_power_up_drawn(
            PowerUpDrawnEvent(
                session_id=self.session_id,
                config_hash=self.config_hash,
                wave_number=self._state.wave_number,
                power_up_type=power_up.type.value,
            )
        )
        return power_up

    def _draw_power_up(self) -> PowerUp:
        remaining = self.rng.random() * POWER_UP_TOTAL_WEIGHT
        for power_up, weight in POWER_UP_CATALOG:
            remaining -= weight
            if remaining <= 0:
                return power_up
        # Float rounding can leave a sliver past the last weight
        return POWER_UP_CATALOG[0][0]

    def get_tension_event(self, score: int) -> TensionEvent | None:
        """
        Roll for a tension event; fires on TENSION_EVENT_CHANCE of calls.

        ``score`` is accepted but does not affect the roll or the pick.
        Whether it should scale the frequency is undecided.
        """
        if self.rng.random() >= TENSION_EVENT_CHANCE:
            return None

        event = TENSION_EVENTS[int(self.rng.random() * len(TENSION_EVENTS))]
        self.telemetry.emit_tension_fired(
            TensionFiredEvent(
                session_id=self.session_id,
                config_hash=self.config_hash,
                event_type=event.type.value,
                score=score,
            )
        )
        return event
