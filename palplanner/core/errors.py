"""Rejection taxonomy and user-facing messages for refused actions.

Store operations never raise for ordinary domain conditions. They return False
(or None) and callers that need to explain the refusal map the reason through
describe_rejection().
"""

from enum import Enum

from pydantic import BaseModel


class RejectionReason(Enum):
    """Why a store refused to apply an action."""

    UNKNOWN_TASK = "unknown_task"
    TASK_NOT_PENDING = "task_not_pending"
    UNKNOWN_ITEM = "unknown_item"
    ALREADY_OWNED = "already_owned"
    INSUFFICIENT_POINTS = "insufficient_points"
    ITEM_NOT_OWNED = "item_not_owned"
    NO_FOOD_EQUIPPED = "no_food_equipped"
    INVALID_NAME = "invalid_name"


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ErrorCode:
    """Error codes for specific error conditions."""

    # Task errors
    ERR_UNKNOWN_TASK = "ERR_UNKNOWN_TASK"
    ERR_TASK_NOT_PENDING = "ERR_TASK_NOT_PENDING"

    # Shop errors
    ERR_UNKNOWN_ITEM = "ERR_UNKNOWN_ITEM"
    ERR_ALREADY_OWNED = "ERR_ALREADY_OWNED"
    ERR_INSUFFICIENT_POINTS = "ERR_INSUFFICIENT_POINTS"
    ERR_ITEM_NOT_OWNED = "ERR_ITEM_NOT_OWNED"

    # Pet errors
    ERR_NO_FOOD_EQUIPPED = "ERR_NO_FOOD_EQUIPPED"
    ERR_INVALID_NAME = "ERR_INVALID_NAME"


class ErrorResponse(BaseModel):
    """Structured error response with user-friendly messaging."""

    code: str
    message: str
    suggestion: str
    severity: ErrorSeverity


_RESPONSES: dict[RejectionReason, ErrorResponse] = {
    RejectionReason.UNKNOWN_TASK: ErrorResponse(
        code=ErrorCode.ERR_UNKNOWN_TASK,
        message="That task no longer exists.",
        suggestion="Pick a task from today's list.",
        severity=ErrorSeverity.LOW,
    ),
    RejectionReason.TASK_NOT_PENDING: ErrorResponse(
        code=ErrorCode.ERR_TASK_NOT_PENDING,
        message="This task is already finished.",
        suggestion="Completed and failed tasks can't be changed. Add a new task instead.",
        severity=ErrorSeverity.LOW,
    ),
    RejectionReason.UNKNOWN_ITEM: ErrorResponse(
        code=ErrorCode.ERR_UNKNOWN_ITEM,
        message="That item isn't sold in the shop.",
        suggestion="Browse the shop categories to find an item.",
        severity=ErrorSeverity.LOW,
    ),
    RejectionReason.ALREADY_OWNED: ErrorResponse(
        code=ErrorCode.ERR_ALREADY_OWNED,
        message="You already own this item.",
        suggestion="Equip it from your inventory.",
        severity=ErrorSeverity.LOW,
    ),
    RejectionReason.INSUFFICIENT_POINTS: ErrorResponse(
        code=ErrorCode.ERR_INSUFFICIENT_POINTS,
        message="Not enough PalPoints.",
        suggestion="Complete tasks to earn more PalPoints.",
        severity=ErrorSeverity.LOW,
    ),
    RejectionReason.ITEM_NOT_OWNED: ErrorResponse(
        code=ErrorCode.ERR_ITEM_NOT_OWNED,
        message="You don't own this item yet.",
        suggestion="Buy it in the shop first.",
        severity=ErrorSeverity.LOW,
    ),
    RejectionReason.NO_FOOD_EQUIPPED: ErrorResponse(
        code=ErrorCode.ERR_NO_FOOD_EQUIPPED,
        message="Your pet has no food equipped.",
        suggestion="Equip a food item from your inventory, then feed your pet.",
        severity=ErrorSeverity.MEDIUM,
    ),
    RejectionReason.INVALID_NAME: ErrorResponse(
        code=ErrorCode.ERR_INVALID_NAME,
        message="Your pet needs a name.",
        suggestion="Enter at least one character.",
        severity=ErrorSeverity.LOW,
    ),
}


def describe_rejection(reason: RejectionReason) -> ErrorResponse:
    """Return the user-facing response for a rejection reason.

    Args:
        reason: The reason a store refused an action

    Returns:
        ErrorResponse with code, message, suggestion, and severity
    """
    return _RESPONSES[reason].model_copy()
