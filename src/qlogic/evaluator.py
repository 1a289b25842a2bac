"""
Condition Evaluator and Logic Aggregator.

Evaluates rules against an AnswerSnapshot.

EVALUATION CONTRACT (non-throwing, default-false):
    - Every call returns a bool; nothing here raises
    - Unknown operators, non-numeric comparison operands and
      malformed conditions evaluate to False
    - A condition on an unanswered question is True only for is_empty
"""

import logging
import math
from typing import Any, Optional

from qlogic.answers import (
    AnswerSnapshot,
    AnswerValue,
    BooleanValue,
    DateTimeValue,
    DateValue,
    JsonValue,
    MissingValue,
    NumberValue,
    TextValue,
    TimeValue,
)
from qlogic.conditions import (
    ConditionalLogic,
    ConditionOperator,
    LogicCondition,
    LogicOperator,
)

logger = logging.getLogger(__name__)


def strict_equals(left: Any, right: Any) -> bool:
    """
    Equality without Python's bool/int coercion.

    True never equals 1, and None only equals None.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if left is None or right is None:
        return left is None and right is None
    try:
        return bool(left == right)
    except Exception:
        return False


def parse_float(raw: Any) -> Optional[float]:
    """Parse a comparison operand as float, or None when it is not numeric."""
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, (int, float)):
        number = float(raw)
    elif isinstance(raw, str):
        try:
            number = float(raw.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number):
        return None
    return number


def _numeric_operand(value: AnswerValue) -> Optional[float]:
    if isinstance(value, (BooleanValue, MissingValue)):
        return None
    if isinstance(value, (NumberValue, TextValue, DateValue, TimeValue, DateTimeValue, JsonValue)):
        return parse_float(value.payload)
    return None


def _is_empty(value: Optional[AnswerValue]) -> bool:
    if value is None or isinstance(value, MissingValue):
        return True
    payload = value.payload
    if isinstance(payload, str):
        return payload == ""
    if isinstance(payload, (list, tuple)):
        return len(payload) == 0
    # False and 0 are answers, not blanks
    return payload is None


def _contains(value: AnswerValue, needle: Any) -> bool:
    payload = value.payload
    if isinstance(payload, str) and isinstance(needle, str):
        return needle.lower() in payload.lower()
    if isinstance(payload, (list, tuple)) and not isinstance(needle, (list, tuple)):
        return any(strict_equals(item, needle) for item in payload)
    return False


def _evaluate(condition: LogicCondition, snapshot: AnswerSnapshot) -> bool:
    operator = condition.operator
    value = snapshot.resolve(condition.question_id)

    if value is None:
        # No answer recorded for the referenced question
        return operator is ConditionOperator.IS_EMPTY

    if operator is ConditionOperator.EQUALS:
        return strict_equals(value.payload, condition.value)

    if operator is ConditionOperator.NOT_EQUALS:
        return not strict_equals(value.payload, condition.value)

    if operator is ConditionOperator.CONTAINS:
        return _contains(value, condition.value)

    if operator is ConditionOperator.NOT_CONTAINS:
        return not _contains(value, condition.value)

    if operator in (ConditionOperator.GREATER_THAN, ConditionOperator.LESS_THAN):
        left = _numeric_operand(value)
        right = parse_float(condition.value)
        if left is None or right is None:
            return False
        if operator is ConditionOperator.GREATER_THAN:
            return left > right
        return left < right

    if operator is ConditionOperator.IS_EMPTY:
        return _is_empty(value)

    if operator is ConditionOperator.IS_NOT_EMPTY:
        return not _is_empty(value)

    logger.debug("Unknown condition operator %r on question %s", operator, condition.question_id)
    return False


def evaluate_condition(condition: LogicCondition, snapshot: AnswerSnapshot) -> bool:
    """
    Evaluate one atomic condition against the snapshot.

    Args:
        condition: LogicCondition to test
        snapshot: Current answers

    Returns:
        True if the condition holds, False otherwise (including on any
        malformed input)
    """
    try:
        return _evaluate(condition, snapshot)
    except Exception:
        logger.warning(
            "Condition on question %s could not be evaluated; treating as false",
            getattr(condition, "question_id", None),
            exc_info=True,
        )
        return False


def aggregate_logic(logic: ConditionalLogic, snapshot: AnswerSnapshot) -> bool:
    """
    Combine a rule's conditions into one boolean.

    AND over no conditions is True; OR over no conditions is False.
    An unknown combining operator evaluates to False.
    """
    results = [evaluate_condition(c, snapshot) for c in logic.conditions]

    if logic.operator is LogicOperator.AND:
        return all(results)
    if logic.operator is LogicOperator.OR:
        return any(results)

    logger.debug("Unknown logic operator %r; treating rule as false", logic.operator)
    return False
