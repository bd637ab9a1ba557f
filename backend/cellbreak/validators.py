"""Argument validators for simulation tooling."""
from cellbreak.errors import ErrorCode, EngineError


# Audit run bounds
MAX_AUDIT_ROUNDS = 10_000_000
MAX_AUDIT_WAVES = 100_000


def validate_rounds(rounds: int) -> None:
    """
    Validate the number of sampling rounds.

    Raises INVALID_ROUNDS if rounds is not in 1..MAX_AUDIT_ROUNDS.
    """
    if rounds < 1 or rounds > MAX_AUDIT_ROUNDS:
        raise EngineError(
            ErrorCode.INVALID_ROUNDS,
            f"Rounds {rounds} out of range. Allowed: 1..{MAX_AUDIT_ROUNDS}",
        )


def validate_waves(waves: int) -> None:
    """
    Validate the number of generated waves.

    Raises INVALID_WAVES if waves is not in 1..MAX_AUDIT_WAVES.
    """
    if waves < 1 or waves > MAX_AUDIT_WAVES:
        raise EngineError(
            ErrorCode.INVALID_WAVES,
            f"Waves {waves} out of range. Allowed: 1..{MAX_AUDIT_WAVES}",
        )


def validate_seed(seed: str) -> None:
    """Raises INVALID_SEED for a blank seed string."""
    if not seed or not seed.strip():
        raise EngineError(ErrorCode.INVALID_SEED, "Seed must be a non-empty string.")


def validate_simulation_args(rounds: int, waves: int, seed: str) -> None:
    """Run all validations on simulation arguments."""
    validate_rounds(rounds)
    validate_waves(waves)
    validate_seed(seed)
