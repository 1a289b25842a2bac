"""
Conditional Logic Vocabulary

Every rule attached to a question is represented as plain, immutable
objects, never as strings or callables.

A rule has two levels:
    - LogicCondition: one atomic predicate over another question's answer
    - ConditionalLogic: a list of conditions, combined with AND/OR,
      plus the action the combined result drives

ARCHITECTURAL RULE:
    These objects carry structure only.
    Evaluation belongs in qlogic.evaluator.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Tuple, Union


class ConditionOperator(Enum):
    """
    Predicates a single condition can apply to a referenced answer.

    Closed set. Adding an operator means adding a branch in
    qlogic.evaluator.evaluate_condition as well.
    """

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    IS_EMPTY = "is_empty"
    IS_NOT_EMPTY = "is_not_empty"


class LogicOperator(Enum):
    """How the results of a rule's conditions are combined."""

    AND = "AND"
    OR = "OR"


class LogicAction(Enum):
    """
    What a rule does when its conditions hold.

        SHOW:    question visible only while the rule holds
        HIDE:    question hidden while the rule holds
        REQUIRE: question required only while the rule holds
        SKIP_TO: navigation from this question jumps to target_question_id
    """

    SHOW = "show"
    HIDE = "hide"
    REQUIRE = "require"
    SKIP_TO = "skip_to"


@dataclass(frozen=True)
class LogicCondition:
    """
    One atomic predicate against the answer of another question.

    Example:
        "question 1 equals Yes"

    Becomes:
        LogicCondition(question_id=1, operator=ConditionOperator.EQUALS, value="Yes")

    Properties:
        question_id: Question whose answer is inspected
        operator: ConditionOperator, or the raw string when storage held
            an operator this package does not know (always evaluates False)
        value: Comparison operand; unused by is_empty / is_not_empty

    IMPORTANT:
        The referenced question is not required to exist.
        A dangling reference simply behaves like an unanswered question.
    """

    question_id: int
    operator: Union[ConditionOperator, str]
    value: Any = None


@dataclass(frozen=True)
class ConditionalLogic:
    """
    A rule attached to a question.

    Governs that question's own visibility or requiredness, or, for
    SKIP_TO, where navigation goes after it.

    Properties:
        conditions: Atomic predicates, in declaration order
        operator: LogicOperator combining the condition results
        action: LogicAction driven by the combined result
        target_question_id: Jump target, only meaningful for SKIP_TO
    """

    conditions: Tuple[LogicCondition, ...] = field(default_factory=tuple)
    operator: Union[LogicOperator, str] = LogicOperator.AND
    action: Union[LogicAction, str] = LogicAction.SHOW
    target_question_id: Optional[int] = None

    def __post_init__(self):
        # Lists are accepted for convenience but stored as a tuple
        if not isinstance(self.conditions, tuple):
            object.__setattr__(self, "conditions", tuple(self.conditions))

    def referenced_question_ids(self) -> Tuple[int, ...]:
        """Question ids this rule reads answers from, in declaration order."""
        return tuple(c.question_id for c in self.conditions)
