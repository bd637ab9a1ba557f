#!/usr/bin/env python3
"""
Pacing audit simulation.

Drives a seeded DifficultyEngine headless and writes one CSV row of observed
rates next to the configured ones, so tuning changes can be diffed run to run.

Usage:
    python -m scripts.audit_sim --rounds 100000 --waves 200 --seed AUDIT_2026 --out out/audit.csv
    python -m scripts.audit_sim --rounds 100000 --waves 200 --seed AUDIT_2026 --out out/audit.csv --skip-if-cached
"""
import argparse
import csv
import hashlib
import subprocess
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cellbreak.config import settings
from cellbreak.config_hash import get_config_hash
from cellbreak.errors import EngineError
from cellbreak.logic.catalog import POWER_UP_CATALOG, POWER_UP_TOTAL_WEIGHT
from cellbreak.logic.engine import COMBO_WINDOW_MS, MAX_ENEMY_COUNT, MIN_SPAWN_RATE_MS, DifficultyEngine
from cellbreak.logic.rng import SeededRNG
from cellbreak.telemetry import NullTelemetrySink, TelemetryService
from cellbreak.validators import validate_simulation_args


@dataclass
class SimulationStats:
    """Statistics accumulated during simulation."""
    rounds: int = 0
    waves: int = 0
    power_up_counts: dict[str, int] = field(
        default_factory=lambda: {p.type.value: 0 for p, _ in POWER_UP_CATALOG}
    )
    tension_fired: int = 0
    tension_types: dict[str, int] = field(default_factory=dict)
    max_enemy_count: int = 0
    min_spawn_rate: float = float(settings.base_spawn_rate_ms)
    enemy_count_monotonic: bool = True
    spawn_rate_monotonic: bool = True
    special_events: dict[str, int] = field(default_factory=dict)
    combo_peak: int = 0
    milestones_hit: int = 0

    def power_up_share(self, power_up_type: str) -> float:
        return self.power_up_counts[power_up_type] / self.rounds if self.rounds > 0 else 0.0

    @property
    def tension_rate(self) -> float:
        return self.tension_fired / self.rounds if self.rounds > 0 else 0.0


def get_git_commit() -> str:
    """Get current git commit hash (short)."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            capture_output=True,
            text=True,
            cwd=Path(__file__).parent.parent.parent,
            timeout=5,
        )
        if result.returncode == 0:
            return result.stdout.strip()
    except (subprocess.TimeoutExpired, FileNotFoundError):
        pass
    return "unknown"


def get_timestamp_iso() -> str:
    """Get ISO 8601 UTC timestamp."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def seed_to_int(seed_str: str) -> int:
    """Convert string seed to integer deterministically."""
    return int(hashlib.sha256(seed_str.encode()).hexdigest(), 16) % (2**31)


def check_cached_result(output_path: str, config_hash: str, rounds: int, waves: int, seed: str) -> bool:
    """
    Check if valid cached result exists.

    Returns True if cache is valid (same config_hash, rounds, waves, seed).
    """
    path = Path(output_path)
    if not path.exists():
        return False

    try:
        with open(path, "r") as f:
            reader = csv.DictReader(f)
            row = next(reader, None)
            if row is None:
                return False

            if row.get("config_hash") != config_hash:
                return False
            if int(row.get("rounds", 0)) != rounds:
                return False
            if int(row.get("waves", 0)) != waves:
                return False
            if row.get("seed") != seed:
                return False

            return True
    except (OSError, csv.Error, ValueError):
        return False


def make_engine(seed_str: str) -> DifficultyEngine:
    """Seeded engine with telemetry muted for bulk runs."""
    rng = SeededRNG(seed=seed_to_int(seed_str))
    telemetry = TelemetryService(sink=NullTelemetrySink())
    return DifficultyEngine(rng=rng, telemetry=telemetry, session_id=f"audit-{seed_str}")


def run_simulation(
    rounds: int,
    waves: int,
    seed_str: str,
    verbose: bool = False,
) -> SimulationStats:
    """
    Run headless simulation.

    Args:
        rounds: Number of power-up draws and tension samples
        waves: Number of waves to generate
        seed_str: Seed string for reproducibility
        verbose: Print progress

    Returns:
        SimulationStats with aggregated results
    """
    validate_simulation_args(rounds, waves, seed_str)
    engine = make_engine(seed_str)
    stats = SimulationStats(rounds=rounds, waves=waves)

    # 1) Wave curve
    prev_count = 0
    prev_rate = float("inf")
    for _ in range(waves):
        config = engine.get_next_wave()
        if config.enemy_count < prev_count:
            stats.enemy_count_monotonic = False
        if config.spawn_rate > prev_rate:
            stats.spawn_rate_monotonic = False
        prev_count = config.enemy_count
        prev_rate = config.spawn_rate
        stats.max_enemy_count = max(stats.max_enemy_count, config.enemy_count)
        stats.min_spawn_rate = min(stats.min_spawn_rate, config.spawn_rate)
        event = config.special_event.value
        stats.special_events[event] = stats.special_events.get(event, 0) + 1

    # 2) Synthetic kill stream: gaps drawn from 0..1.5x the combo window
    timestamp = 0
    for _ in range(rounds):
        timestamp += int(engine.rng.random() * COMBO_WINDOW_MS * 1.5)
        kill = engine.register_kill(timestamp)
        stats.combo_peak = max(stats.combo_peak, kill.combo)
        if kill.message is not None:
            stats.milestones_hit += 1

    # 3) Power-up draws and tension samples
    progress_interval = max(1, rounds // 100)
    for round_count in range(rounds):
        if verbose and round_count % progress_interval == 0:
            pct = (round_count / rounds) * 100
            print(f"\rProgress: {pct:.1f}%", end="", flush=True)

        power_up = engine.get_random_power_up()
        stats.power_up_counts[power_up.type.value] += 1

        tension = engine.get_tension_event(score=round_count)
        if tension is not None:
            stats.tension_fired += 1
            key = tension.type.value
            stats.tension_types[key] = stats.tension_types.get(key, 0) + 1

    if verbose:
        print("\rProgress: 100.0%")

    return stats


def invariant_failures(stats: SimulationStats) -> list[str]:
    """Return human-readable invariant violations (empty when clean)."""
    failures = []
    if stats.max_enemy_count > MAX_ENEMY_COUNT:
        failures.append(f"max_enemy_count ({stats.max_enemy_count}) > MAX_ENEMY_COUNT ({MAX_ENEMY_COUNT})")
    if stats.min_spawn_rate < MIN_SPAWN_RATE_MS:
        failures.append(f"min_spawn_rate ({stats.min_spawn_rate}) < MIN_SPAWN_RATE_MS ({MIN_SPAWN_RATE_MS})")
    if not stats.enemy_count_monotonic:
        failures.append("enemy_count decreased between consecutive waves")
    if not stats.spawn_rate_monotonic:
        failures.append("spawn_rate increased between consecutive waves")
    return failures


def generate_csv(
    rounds: int,
    waves: int,
    seed_str: str,
    stats: SimulationStats,
    output_path: str,
) -> None:
    """Write the audit row."""
    row = {
        "timestamp": get_timestamp_iso(),
        "git_commit": get_git_commit(),
        "config_hash": get_config_hash(),
        "rounds": rounds,
        "waves": waves,
        "seed": seed_str,
    }
    for power_up, weight in POWER_UP_CATALOG:
        key = power_up.type.value
        row[f"share_{key}"] = f"{stats.power_up_share(key):.6f}"
        row[f"target_{key}"] = f"{weight / POWER_UP_TOTAL_WEIGHT:.6f}"
    row.update({
        "tension_rate": f"{stats.tension_rate:.6f}",
        "tension_target": f"{settings.tension_event_chance:.6f}",
        "max_enemy_count": stats.max_enemy_count,
        "min_spawn_rate": f"{stats.min_spawn_rate:.2f}",
        "boss_waves": stats.special_events.get("boss", 0),
        "combo_peak": stats.combo_peak,
        "milestones_hit": stats.milestones_hit,
    })

    # Ensure output directory exists
    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    with open(output_file, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=row.keys())
        writer.writeheader()
        writer.writerow(row)

    print(f"CSV written to: {output_path}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Pacing engine audit simulation")
    parser.add_argument("--rounds", type=int, required=True, help="Power-up draws / tension samples")
    parser.add_argument("--waves", type=int, default=200, help="Waves to generate")
    parser.add_argument("--seed", type=str, required=True, help="Seed string for reproducibility")
    parser.add_argument("--out", type=str, required=True, help="Output CSV path")
    parser.add_argument("--verbose", action="store_true", help="Show progress")
    parser.add_argument(
        "--skip-if-cached",
        action="store_true",
        help="Skip simulation if valid cached result exists",
    )

    args = parser.parse_args(argv)

    config_hash = get_config_hash()
    print(f"Running simulation: rounds={args.rounds}, waves={args.waves}, seed={args.seed}")
    print(f"Config hash: {config_hash}")

    if args.skip_if_cached:
        if check_cached_result(args.out, config_hash, args.rounds, args.waves, args.seed):
            print(f"Using cached result: {args.out}")
            return 0

    try:
        stats = run_simulation(
            rounds=args.rounds,
            waves=args.waves,
            seed_str=args.seed,
            verbose=args.verbose,
        )
    except EngineError as e:
        print(f"ERROR {e.code.value}: {e.message}")
        return 2

    generate_csv(
        rounds=args.rounds,
        waves=args.waves,
        seed_str=args.seed,
        stats=stats,
        output_path=args.out,
    )

    print("\nSummary:")
    for power_up, weight in POWER_UP_CATALOG:
        key = power_up.type.value
        print(f"  {key:<14} {stats.power_up_share(key):.4%} (target {weight / POWER_UP_TOTAL_WEIGHT:.4%})")
    print(f"  Tension rate: {stats.tension_rate:.4%} (target {settings.tension_event_chance:.4%})")
    print(f"  Max enemy count: {stats.max_enemy_count}")
    print(f"  Min spawn rate: {stats.min_spawn_rate:.2f}ms")
    print(f"  Combo peak: {stats.combo_peak} ({stats.milestones_hit} milestones)")

    failures = invariant_failures(stats)
    if failures:
        for failure in failures:
            print(f"ASSERTION FAILED: {failure}")
        return 1

    print("\nASSERTION PASSED: wave curve invariants hold")
    return 0


if __name__ == "__main__":
    sys.exit(main())
