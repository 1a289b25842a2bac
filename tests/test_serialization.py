"""
Tests for serialization and deserialization of questionnaire objects.

These tests ensure lossless JSON/YAML round-trip, tolerance of unknown
enum values coming from storage, and clear errors for broken documents.
"""

import json

import pytest
from qlogic.answers import Answer
from qlogic.builders import condition, hide_if, skip_to_if
from qlogic.conditions import ConditionalLogic, ConditionOperator, LogicAction, LogicOperator
from qlogic.engine import ConditionalLogicEngine
from qlogic.model import Question, Questionnaire
from qlogic.serialization import (
    SerializationError,
    answer_from_dict,
    answers_from_json,
    answers_to_json,
    logic_from_dict,
    question_from_dict,
    questionnaire_from_dict,
    questionnaire_from_json,
    questionnaire_from_yaml,
    questionnaire_to_dict,
    questionnaire_to_json,
    questionnaire_to_yaml,
)


def build_sample_questionnaire() -> Questionnaire:
    questionnaire = Questionnaire(name="Serialization Test Questionnaire")
    questionnaire.questions = [
        Question(id=1, order_num=1, required=True, text="Do you smoke?", type="yes_no"),
        Question(id=2, order_num=2, text="How many per day?", conditional_logic=hide_if(1, "No")),
        Question(
            id=3,
            order_num=3,
            text="Symptoms",
            conditional_logic=ConditionalLogic(
                conditions=(
                    condition(1, ConditionOperator.EQUALS, "Yes"),
                    condition(2, ConditionOperator.GREATER_THAN, 10),
                ),
                operator=LogicOperator.OR,
                action=LogicAction.REQUIRE,
            ),
        ),
        Question(id=4, order_num=4, text="Done", conditional_logic=skip_to_if(1, "No", 6)),
    ]
    questionnaire.metadata = {"source": "unit-test"}
    return questionnaire


def test_json_roundtrip():
    questionnaire = build_sample_questionnaire()
    before = questionnaire_to_dict(questionnaire)
    restored = questionnaire_from_json(questionnaire_to_json(questionnaire))
    assert questionnaire_to_dict(restored) == before


def test_yaml_roundtrip():
    questionnaire = build_sample_questionnaire()
    before = questionnaire_to_dict(questionnaire)
    restored = questionnaire_from_yaml(questionnaire_to_yaml(questionnaire))
    assert questionnaire_to_dict(restored) == before


def test_roundtrip_restores_enums():
    restored = questionnaire_from_json(questionnaire_to_json(build_sample_questionnaire()))
    logic = restored.get_question(3).conditional_logic
    assert logic.operator is LogicOperator.OR
    assert logic.action is LogicAction.REQUIRE
    assert logic.conditions[1].operator is ConditionOperator.GREATER_THAN


def test_storage_shape_question():
    """Rows as stored by the API layer load directly."""
    row = {
        "id": 7,
        "questionnaire_id": 1,
        "text": "Why?",
        "type": "text",
        "required": 1,
        "order_num": 3,
        "conditional_logic": json.dumps(
            {
                "conditions": [{"question_id": 6, "operator": "is_not_empty", "value": ""}],
                "operator": "AND",
                "action": "show",
            }
        ),
        "created_at": "2024-01-01T00:00:00Z",
    }
    question = question_from_dict(row)
    assert question.id == 7
    assert question.required is True
    assert question.conditional_logic.action is LogicAction.SHOW
    assert question.conditional_logic.conditions[0].operator is ConditionOperator.IS_NOT_EMPTY


def test_unknown_operator_kept_raw_and_evaluates_false():
    logic = logic_from_dict(
        {
            "conditions": [{"question_id": 1, "operator": "starts_with", "value": "a"}],
            "operator": "AND",
            "action": "show",
        }
    )
    assert logic.conditions[0].operator == "starts_with"

    questions = [Question(id=1, order_num=1), Question(id=2, order_num=2, conditional_logic=logic)]
    engine = ConditionalLogicEngine(questions, [Answer(question_id=1, value="abc")])
    assert engine.is_question_visible(2) is False


def test_answers_roundtrip_ignores_extra_columns():
    rows = [
        {"id": 1, "response_id": 9, "question_id": 1, "value": "Sam", "has_files": False},
        {"id": 2, "response_id": 9, "question_id": 2, "numeric_value": 4.5},
        {"id": 3, "response_id": 9, "question_id": 3, "json_value": ["a", "b"]},
    ]
    answers = answers_from_json(json.dumps(rows))
    assert answers[0] == Answer(question_id=1, value="Sam")
    assert answers[1].numeric_value == 4.5
    assert answers[2].json_value == ["a", "b"]
    assert answers_from_json(answers_to_json(answers)) == answers


def test_question_without_id_raises():
    with pytest.raises(SerializationError):
        question_from_dict({"text": "orphan"})


def test_answer_without_question_id_raises():
    with pytest.raises(SerializationError):
        answer_from_dict({"value": "x"})


def test_bad_logic_json_raises():
    with pytest.raises(SerializationError):
        logic_from_dict("{not json")


def test_questionnaire_must_be_mapping():
    with pytest.raises(SerializationError):
        questionnaire_from_dict(["not", "a", "mapping"])
