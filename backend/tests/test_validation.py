"""Validator tests for simulation arguments."""
import pytest

from cellbreak.errors import EngineError, ErrorCode
from cellbreak.validators import (
    MAX_AUDIT_ROUNDS,
    MAX_AUDIT_WAVES,
    validate_rounds,
    validate_seed,
    validate_simulation_args,
    validate_waves,
)


class TestValidators:
    @pytest.mark.parametrize("rounds", [0, -1, MAX_AUDIT_ROUNDS + 1])
    def test_invalid_rounds(self, rounds):
        with pytest.raises(EngineError) as exc:
            validate_rounds(rounds)
        assert exc.value.code == ErrorCode.INVALID_ROUNDS

    @pytest.mark.parametrize("waves", [0, MAX_AUDIT_WAVES + 1])
    def test_invalid_waves(self, waves):
        with pytest.raises(EngineError) as exc:
            validate_waves(waves)
        assert exc.value.code == ErrorCode.INVALID_WAVES

    @pytest.mark.parametrize("seed", ["", "   "])
    def test_blank_seed(self, seed):
        with pytest.raises(EngineError) as exc:
            validate_seed(seed)
        assert exc.value.code == ErrorCode.INVALID_SEED

    def test_valid_args_pass(self):
        validate_simulation_args(1, 1, "AUDIT")
        validate_simulation_args(MAX_AUDIT_ROUNDS, MAX_AUDIT_WAVES, "AUDIT")


class TestEngineError:
    def test_to_dict(self):
        error = EngineError(ErrorCode.INVALID_WAVES, "bad waves")
        assert error.to_dict() == {"code": "INVALID_WAVES", "message": "bad waves"}
        assert str(error) == "bad waves"

    def test_default_message(self):
        assert EngineError(ErrorCode.INVALID_REQUEST).message == "Error: INVALID_REQUEST"
