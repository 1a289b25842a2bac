"""
Tests for the rule builder helpers.
"""

import pytest
from qlogic.builders import all_of, any_of, condition, hide_if, require_if, show_if, skip_to_if
from qlogic.conditions import ConditionOperator, LogicAction, LogicOperator


def test_condition_accepts_operator_name():
    c = condition(1, "contains", "x")
    assert c.operator is ConditionOperator.CONTAINS
    assert c.value == "x"


def test_condition_rejects_unknown_operator_name():
    """Authoring helpers are strict; only loaded data tolerates unknown operators."""
    with pytest.raises(ValueError):
        condition(1, "starts_with", "x")


def test_show_if():
    logic = show_if(1, "yes")
    assert logic.action is LogicAction.SHOW
    assert logic.operator is LogicOperator.AND
    assert len(logic.conditions) == 1
    assert logic.conditions[0].question_id == 1
    assert logic.conditions[0].operator is ConditionOperator.EQUALS
    assert logic.conditions[0].value == "yes"


def test_hide_and_require_if():
    assert hide_if(1, "no").action is LogicAction.HIDE
    required = require_if(2, 5, operator=ConditionOperator.GREATER_THAN)
    assert required.action is LogicAction.REQUIRE
    assert required.conditions[0].operator is ConditionOperator.GREATER_THAN


def test_skip_to_if():
    logic = skip_to_if(1, "skip", 5)
    assert logic.action is LogicAction.SKIP_TO
    assert logic.target_question_id == 5


def test_all_of_and_any_of():
    a = condition(1, "is_not_empty")
    b = condition(2, "equals", "x")
    assert all_of(LogicAction.SHOW, a, b).operator is LogicOperator.AND
    combined = any_of(LogicAction.SKIP_TO, a, b, target_question_id=9)
    assert combined.operator is LogicOperator.OR
    assert combined.conditions == (a, b)
    assert combined.target_question_id == 9
