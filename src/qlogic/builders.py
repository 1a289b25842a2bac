"""
Shorthand constructors for common rules.

    question 2 shown only when question 1 == "yes":
        show_if(1, "yes")

    question 3 required when question 1 > 5 and question 2 is answered:
        all_of(LogicAction.REQUIRE,
               condition(1, "greater_than", 5),
               condition(2, "is_not_empty"))
"""

from typing import Any, Optional, Union

from qlogic.conditions import (
    ConditionalLogic,
    ConditionOperator,
    LogicAction,
    LogicCondition,
    LogicOperator,
)


def condition(
    question_id: int,
    operator: Union[ConditionOperator, str] = ConditionOperator.EQUALS,
    value: Any = None,
) -> LogicCondition:
    """Build a condition; operator may be given by name, e.g. "contains"."""
    if not isinstance(operator, ConditionOperator):
        operator = ConditionOperator(operator)
    return LogicCondition(question_id=question_id, operator=operator, value=value)


def all_of(
    action: LogicAction,
    *conditions: LogicCondition,
    target_question_id: Optional[int] = None,
) -> ConditionalLogic:
    return ConditionalLogic(
        conditions=conditions,
        operator=LogicOperator.AND,
        action=action,
        target_question_id=target_question_id,
    )


def any_of(
    action: LogicAction,
    *conditions: LogicCondition,
    target_question_id: Optional[int] = None,
) -> ConditionalLogic:
    return ConditionalLogic(
        conditions=conditions,
        operator=LogicOperator.OR,
        action=action,
        target_question_id=target_question_id,
    )


def show_if(question_id: int, value: Any, operator=ConditionOperator.EQUALS) -> ConditionalLogic:
    """Show the owning question only while `question_id` matches `value`."""
    return all_of(LogicAction.SHOW, condition(question_id, operator, value))


def hide_if(question_id: int, value: Any, operator=ConditionOperator.EQUALS) -> ConditionalLogic:
    """Hide the owning question while `question_id` matches `value`."""
    return all_of(LogicAction.HIDE, condition(question_id, operator, value))


def require_if(question_id: int, value: Any, operator=ConditionOperator.EQUALS) -> ConditionalLogic:
    """Make the owning question required only while `question_id` matches `value`."""
    return all_of(LogicAction.REQUIRE, condition(question_id, operator, value))


def skip_to_if(
    question_id: int,
    value: Any,
    target_question_id: int,
    operator=ConditionOperator.EQUALS,
) -> ConditionalLogic:
    """Jump from the owning question to `target_question_id` when `question_id` matches `value`."""
    return all_of(
        LogicAction.SKIP_TO,
        condition(question_id, operator, value),
        target_question_id=target_question_id,
    )
