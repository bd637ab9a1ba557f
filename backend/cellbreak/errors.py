"""Error codes and exceptions for the engine tooling."""
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes raised by validators."""

    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_ROUNDS = "INVALID_ROUNDS"
    INVALID_WAVES = "INVALID_WAVES"
    INVALID_SEED = "INVALID_SEED"


class EngineError(Exception):
    """Base error for rejected tooling input."""

    def __init__(self, code: ErrorCode, message: str | None = None):
        self.code = code
        self.message = message or f"Error: {code.value}"
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dict for CLI output."""
        return {"code": self.code.value, "message": self.message}
