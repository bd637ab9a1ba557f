#!/usr/bin/env python3
"""
Pacing report: the wave curve as a text table.

This is a NON-GATE workflow for eyeballing tuning changes.

Usage:
    python -m scripts.pacing_report --waves 60
    python -m scripts.pacing_report --waves 30 --seed PACING_2026 --log-telemetry
"""
import argparse
import hashlib
import logging
import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cellbreak.config import settings
from cellbreak.config_hash import get_config_hash
from cellbreak.errors import EngineError
from cellbreak.logic.engine import DifficultyEngine, base_speed_for
from cellbreak.logic.models import WaveConfig
from cellbreak.logic.rng import SeededRNG
from cellbreak.telemetry import LoggingTelemetrySink, NullTelemetrySink, TelemetryService
from cellbreak.validators import validate_seed, validate_waves


DEFAULT_SEED = "PACING_2026"
DEFAULT_WAVES = 60

HEADER = f"{'wave':>4}  {'enemies':>7}  {'speed':>5}  {'spawn_ms':>8}  {'powerup':>7}  {'mult':>5}  event"


def seed_to_int(seed_str: str) -> int:
    """Convert string seed to integer deterministically."""
    return int(hashlib.sha256(seed_str.encode()).hexdigest(), 16) % (2**31)


def format_row(config: WaveConfig) -> str:
    """One table line; speed is the plateau value without jitter."""
    event = config.special_event.value if config.special_event.value != "none" else ""
    return (
        f"{config.wave_number:>4}  {config.enemy_count:>7}  "
        f"{base_speed_for(config.wave_number):>5.2f}  {config.spawn_rate:>8.1f}  "
        f"{config.power_up_chance:>7.3f}  {config.bonus_multiplier:>5.2f}  {event}"
    ).rstrip()


def build_report(waves: int, seed_str: str, log_telemetry: bool = False) -> list[str]:
    """Generate ``waves`` waves from a fresh engine and render them."""
    validate_waves(waves)
    validate_seed(seed_str)

    sink = LoggingTelemetrySink() if log_telemetry else NullTelemetrySink()
    engine = DifficultyEngine(
        rng=SeededRNG(seed=seed_to_int(seed_str)),
        telemetry=TelemetryService(sink=sink),
        session_id=f"pacing-{seed_str}",
    )

    lines = [
        f"CellBreak pacing report (seed={seed_str}, config_hash={get_config_hash()})",
        HEADER,
    ]
    for _ in range(waves):
        lines.append(format_row(engine.get_next_wave()))
    return lines


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print the wave pacing curve")
    parser.add_argument("--waves", type=int, default=DEFAULT_WAVES, help="Waves to list")
    parser.add_argument("--seed", type=str, default=DEFAULT_SEED, help="Seed for speed jitter")
    parser.add_argument(
        "--log-telemetry",
        action="store_true",
        help="Log wave_generated telemetry while building the table",
    )
    args = parser.parse_args(argv)

    if args.log_telemetry:
        logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s %(message)s")

    try:
        lines = build_report(args.waves, args.seed, log_telemetry=args.log_telemetry)
    except EngineError as e:
        print(f"ERROR {e.code.value}: {e.message}")
        return 2

    print("\n".join(lines))
    return 0


if __name__ == "__main__":
    sys.exit(main())
