"""Wave generator tests: tier curves, ladders and invariants."""
import pytest

from cellbreak.logic.engine import (
    MAX_ENEMY_COUNT,
    MIN_SPAWN_RATE_MS,
    base_speed_for,
    bonus_multiplier_for,
    enemy_count_for,
    power_up_chance_for,
    special_event_for,
    spawn_rate_for,
)
from cellbreak.logic.models import SpecialEvent


def waves_up_to(engine, n):
    return [engine.get_next_wave() for _ in range(n)]


class TestWaveCounter:
    """get_next_wave increments before computing."""

    def test_first_call_is_wave_one(self, engine):
        assert engine.get_next_wave().wave_number == 1
        assert engine.state.wave_number == 1

    @pytest.mark.parametrize("n", [1, 7, 25, 120])
    def test_nth_call_reports_wave_n(self, engine, n):
        configs = waves_up_to(engine, n)
        assert configs[-1].wave_number == n
        assert [c.wave_number for c in configs] == list(range(1, n + 1))

    def test_one_draw_per_wave(self, make_engine):
        engine = make_engine([0.5])
        waves_up_to(engine, 10)
        assert engine.rng.calls == 10


class TestEnemyCount:
    """Tiered enemy count with the 50 cap."""

    @pytest.mark.parametrize(
        "wave,expected",
        [
            (1, 6), (3, 8),            # 5 + w
            (4, 14), (5, 15), (10, 23),  # 8 + floor(1.5w)
            (11, 37), (17, 49),        # 15 + 2w
            (18, 50), (20, 50),        # capped inside the 11..20 tier
            (21, 50), (100, 50),       # min(50, 20 + floor(2.5w))
        ],
    )
    def test_tier_values(self, wave, expected):
        assert enemy_count_for(wave) == expected

    def test_non_decreasing_and_capped(self, engine):
        counts = [c.enemy_count for c in waves_up_to(engine, 150)]
        assert all(b >= a for a, b in zip(counts, counts[1:]))
        assert max(counts) == MAX_ENEMY_COUNT


class TestEnemySpeed:
    """Plateau table times jitter in [0.9, 1.1]."""

    @pytest.mark.parametrize(
        "wave,expected",
        [(1, 1.0), (4, 1.0), (5, 1.2), (9, 1.2), (10, 1.5), (15, 1.8),
         (20, 2.0), (29, 2.0), (30, 2.5), (40, 3.0), (50, 3.5), (500, 3.5)],
    )
    def test_plateaus(self, wave, expected):
        assert base_speed_for(wave) == expected

    def test_neutral_jitter(self, make_engine):
        engine = make_engine([0.5])
        speeds = [c.enemy_speed for c in waves_up_to(engine, 10)]
        assert speeds[0] == pytest.approx(1.0)
        assert speeds[4] == pytest.approx(1.2)
        assert speeds[9] == pytest.approx(1.5)

    def test_jitter_bounds(self, make_engine):
        low = make_engine([0.0]).get_next_wave()
        high = make_engine([0.999999]).get_next_wave()
        assert low.enemy_speed == pytest.approx(0.9)
        assert high.enemy_speed == pytest.approx(1.1, abs=1e-6)

    def test_seeded_speeds_stay_in_band(self, make_engine):
        engine = make_engine(seed=7)
        for config in waves_up_to(engine, 200):
            base = base_speed_for(config.wave_number)
            assert 0.9 * base <= config.enemy_speed <= 1.1 * base


class TestSpawnRate:
    """1000 / (1 + 0.05w), floored at 200ms."""

    def test_first_wave(self):
        assert spawn_rate_for(1) == pytest.approx(1000 / 1.05)

    def test_floor_reached_at_wave_80(self):
        assert spawn_rate_for(79) > MIN_SPAWN_RATE_MS
        assert spawn_rate_for(80) == pytest.approx(MIN_SPAWN_RATE_MS)
        assert spawn_rate_for(300) == MIN_SPAWN_RATE_MS

    def test_non_increasing_and_floored(self, engine):
        rates = [c.spawn_rate for c in waves_up_to(engine, 150)]
        assert all(b <= a for a, b in zip(rates, rates[1:]))
        assert min(rates) >= MIN_SPAWN_RATE_MS


class TestPowerUpChance:
    """Mod-5 rung is checked before mod-10, so mod-10 never fires."""

    @pytest.mark.parametrize("wave", [5, 10, 20, 50, 100])
    def test_multiples_of_five(self, wave):
        assert power_up_chance_for(wave) == 0.3

    @pytest.mark.parametrize("wave,expected", [(1, 0.105), (7, 0.135), (99, 0.595)])
    def test_linear_growth(self, wave, expected):
        assert power_up_chance_for(wave) == pytest.approx(expected)

    def test_clamped_to_one(self):
        assert power_up_chance_for(179) == pytest.approx(0.995)
        assert power_up_chance_for(181) == 1.0
        assert power_up_chance_for(999) == 1.0


class TestBonusMultiplier:
    @pytest.mark.parametrize(
        "wave,expected",
        [(10, 3.0), (20, 3.0), (50, 3.0), (5, 2.0), (15, 2.0), (25, 2.0), (1, 1.02), (3, 1.06), (49, 1.98)],
    )
    def test_ladder(self, wave, expected):
        assert bonus_multiplier_for(wave) == pytest.approx(expected)


class TestSpecialEvent:
    """First matching rung wins: boss, bonus, swarm, speed."""

    @pytest.mark.parametrize(
        "wave,expected",
        [
            (1, SpecialEvent.NONE),
            (3, SpecialEvent.SPEED),
            (7, SpecialEvent.SWARM),
            (8, SpecialEvent.SPEED),
            (10, SpecialEvent.BONUS),
            (25, SpecialEvent.BOSS),
            (28, SpecialEvent.SWARM),  # swarm beats speed (28 % 5 == 3)
            (50, SpecialEvent.BOSS),   # boss beats bonus
            (70, SpecialEvent.BONUS),  # bonus beats swarm
            (75, SpecialEvent.BOSS),
        ],
    )
    def test_priority(self, wave, expected):
        assert special_event_for(wave) == expected

    def test_engine_reports_one_event_per_wave(self, engine):
        configs = waves_up_to(engine, 50)
        assert configs[24].special_event == SpecialEvent.BOSS
        assert configs[49].special_event == SpecialEvent.BOSS
        assert all(isinstance(c.special_event, SpecialEvent) for c in configs)
