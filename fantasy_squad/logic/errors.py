from __future__ import annotations

from enum import Enum
from typing import Any


class RejectionCode(str, Enum):
    SQUAD_FULL = "SquadFull"
    BENCH_FULL = "BenchFull"
    DUPLICATE_PLAYER = "DuplicatePlayer"
    BUDGET_EXCEEDED = "BudgetExceeded"
    TOP_PLAYER_LIMIT_EXCEEDED = "TopPlayerLimitExceeded"
    BENCH_NEEDS_GOALKEEPER = "BenchNeedsGoalkeeper"
    BENCH_GOALKEEPER_LIMIT_EXCEEDED = "BenchGoalkeeperLimitExceeded"
    INVALID_POSITION = "InvalidPosition"
    POSITION_CHOICE_REQUIRED = "PositionChoiceRequired"
    PLAYER_NOT_FOUND = "NotFound"
    NOT_A_STARTER = "NotAStarter"
    SELF_CAPTAINCY_FORBIDDEN = "SelfCaptaincyForbidden"
    SAVE_NOT_READY = "SaveNotReady"


class SquadRuleError(Exception):
    """Structured rejection of a squad mutation.

    The draft that was passed in is never modified; callers keep using it and
    show `message` (or build their own text from `code` + `detail`).
    """

    code: RejectionCode

    def __init__(self, message: str, detail: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.detail = detail or {}

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def as_dict(self) -> dict[str, Any]:
        return {"code": self.code.value, "message": self.message, "detail": self.detail}


class SquadFull(SquadRuleError):
    code = RejectionCode.SQUAD_FULL


class BenchFull(SquadRuleError):
    code = RejectionCode.BENCH_FULL


class DuplicatePlayer(SquadRuleError):
    code = RejectionCode.DUPLICATE_PLAYER


class BudgetExceeded(SquadRuleError):
    code = RejectionCode.BUDGET_EXCEEDED


class TopPlayerLimitExceeded(SquadRuleError):
    code = RejectionCode.TOP_PLAYER_LIMIT_EXCEEDED


class BenchNeedsGoalkeeper(SquadRuleError):
    code = RejectionCode.BENCH_NEEDS_GOALKEEPER


class BenchGoalkeeperLimitExceeded(SquadRuleError):
    code = RejectionCode.BENCH_GOALKEEPER_LIMIT_EXCEEDED


class InvalidPosition(SquadRuleError):
    code = RejectionCode.INVALID_POSITION


class PositionChoiceRequired(SquadRuleError):
    code = RejectionCode.POSITION_CHOICE_REQUIRED


class PlayerNotFound(SquadRuleError):
    code = RejectionCode.PLAYER_NOT_FOUND


class NotAStarter(SquadRuleError):
    code = RejectionCode.NOT_A_STARTER


class SelfCaptaincyForbidden(SquadRuleError):
    code = RejectionCode.SELF_CAPTAINCY_FORBIDDEN


class SaveNotReady(SquadRuleError):
    code = RejectionCode.SAVE_NOT_READY
