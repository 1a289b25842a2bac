"""
Tests for Core Model Objects

These tests verify:
    - Question and Questionnaire creation and retrieval
    - Rule objects are immutable
    - Answer resolution into tagged values
    - AnswerSnapshot behaves as a read-only mapping
"""

import pytest
from qlogic.answers import (
    Answer,
    AnswerSnapshot,
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
    LogicAction,
    LogicCondition,
    LogicOperator,
)
from qlogic.model import Question, Questionnaire


class TestConditions:
    """Test rule objects."""

    def test_condition_defaults(self):
        c = LogicCondition(question_id=1, operator=ConditionOperator.IS_EMPTY)
        assert c.value is None

    def test_condition_immutable(self):
        c = LogicCondition(question_id=1, operator=ConditionOperator.EQUALS, value="Yes")
        with pytest.raises(AttributeError):
            c.value = "No"

    def test_logic_defaults(self):
        logic = ConditionalLogic()
        assert logic.conditions == ()
        assert logic.operator is LogicOperator.AND
        assert logic.action is LogicAction.SHOW
        assert logic.target_question_id is None

    def test_logic_stores_conditions_as_tuple(self):
        conditions = [
            LogicCondition(question_id=1, operator=ConditionOperator.EQUALS, value="a"),
            LogicCondition(question_id=2, operator=ConditionOperator.IS_EMPTY),
        ]
        logic = ConditionalLogic(conditions=conditions)
        conditions.append(LogicCondition(question_id=3, operator=ConditionOperator.IS_EMPTY))
        assert isinstance(logic.conditions, tuple)
        assert logic.referenced_question_ids() == (1, 2)

    def test_operator_values_match_storage(self):
        """Enum values are the strings the storage layer writes."""
        assert {op.value for op in ConditionOperator} == {
            "equals",
            "not_equals",
            "contains",
            "not_contains",
            "greater_than",
            "less_than",
            "is_empty",
            "is_not_empty",
        }
        assert {a.value for a in LogicAction} == {"show", "hide", "require", "skip_to"}
        assert {o.value for o in LogicOperator} == {"AND", "OR"}


class TestQuestionnaire:
    """Test Question and Questionnaire objects."""

    def test_question_defaults(self):
        q = Question(id=1, order_num=1)
        assert q.required is False
        assert q.text == ""
        assert q.conditional_logic is None

    def test_get_question(self):
        questionnaire = Questionnaire(
            name="Test",
            questions=[Question(id=1, order_num=1), Question(id=2, order_num=2)],
        )
        assert questionnaire.get_question(2).id == 2
        assert questionnaire.get_question(3) is None

    def test_ordered_questions(self):
        questionnaire = Questionnaire(
            name="Test",
            questions=[Question(id=1, order_num=3), Question(id=2, order_num=1), Question(id=3, order_num=2)],
        )
        assert [q.id for q in questionnaire.ordered_questions()] == [2, 3, 1]


class TestAnswerResolution:
    """Test the boolean -> numeric -> date -> time -> datetime -> json -> text chain."""

    @pytest.mark.parametrize(
        "answer, expected",
        [
            (Answer(question_id=1, value="t"), TextValue("t")),
            (Answer(question_id=1, numeric_value=2), NumberValue(2)),
            (Answer(question_id=1, boolean_value=False), BooleanValue(False)),
            (Answer(question_id=1, date_value="2024-01-01"), DateValue("2024-01-01")),
            (Answer(question_id=1, time_value="10:00"), TimeValue("10:00")),
            (Answer(question_id=1, datetime_value="2024-01-01T10:00"), DateTimeValue("2024-01-01T10:00")),
            (Answer(question_id=1, json_value={"k": 1}), JsonValue({"k": 1})),
            (Answer(question_id=1), MissingValue()),
        ],
    )
    def test_single_field(self, answer, expected):
        assert answer.resolve() == expected

    def test_precedence(self):
        answer = Answer(question_id=1, value="text", numeric_value=0, date_value="2024-01-01")
        assert answer.resolve() == NumberValue(0)

        answer = Answer(question_id=1, value="text", numeric_value=3, boolean_value=False)
        assert answer.resolve() == BooleanValue(False)

        answer = Answer(question_id=1, value="text", json_value=[])
        assert answer.resolve() == JsonValue([])

    def test_get_property(self):
        answer = Answer(question_id=1, value="v", numeric_value=1.5, json_value=[1])
        assert answer.get_property("text") == "v"
        assert answer.get_property("value") == "v"
        assert answer.get_property("number") == 1.5
        assert answer.get_property("json") == [1]
        assert answer.get_property("date") is None
        assert answer.get_property("whatever") == "v"


class TestAnswerSnapshot:
    """Test the snapshot mapping."""

    def test_lookup(self):
        snapshot = AnswerSnapshot([Answer(question_id=1, value="a"), Answer(question_id=2, value="b")])
        assert len(snapshot) == 2
        assert 1 in snapshot
        assert 3 not in snapshot
        assert snapshot[2].value == "b"
        assert snapshot.get(3) is None

    def test_last_answer_wins(self):
        snapshot = AnswerSnapshot([Answer(question_id=1, value="a"), Answer(question_id=1, value="b")])
        assert snapshot[1].value == "b"

    def test_resolve(self):
        snapshot = AnswerSnapshot([Answer(question_id=1, numeric_value=4)])
        assert snapshot.resolve(1) == NumberValue(4)
        assert snapshot.resolve(2) is None

    def test_snapshot_is_independent_of_source_list(self):
        answers = [Answer(question_id=1, value="a")]
        snapshot = AnswerSnapshot(answers)
        answers.append(Answer(question_id=2, value="b"))
        assert 2 not in snapshot
