"""
Serialization helpers for questionnaire objects (Question, Answer, rules).

Converts between model objects and the storage shape handed over by the
persistence layer, via an intermediate dict representation, with JSON/YAML
wrappers on top.

Enum values that this package does not know (for instance an operator
written by a newer editor) are kept as raw strings instead of failing the
load; the evaluator treats them as false. Only structurally broken
documents raise SerializationError.
"""
from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any, Dict, List, Type

import yaml

from qlogic.answers import Answer
from qlogic.conditions import (
    ConditionalLogic,
    ConditionOperator,
    LogicAction,
    LogicCondition,
    LogicOperator,
)
from qlogic.model import Question, Questionnaire

logger = logging.getLogger(__name__)

ANSWER_FIELDS = (
    "value",
    "numeric_value",
    "boolean_value",
    "date_value",
    "time_value",
    "datetime_value",
    "json_value",
)


class SerializationError(Exception):
    """Raised when a document cannot be turned into model objects."""
    pass


def _require(d: Any, key: str, kind: str) -> Any:
    if not isinstance(d, dict):
        raise SerializationError(f"Expected a mapping for {kind}, got {type(d).__name__}")
    if key not in d or d[key] is None:
        raise SerializationError(f"{kind} is missing required field '{key}'")
    return d[key]


def _enum_or_raw(enum_cls: Type[Enum], raw: Any) -> Any:
    try:
        return enum_cls(raw)
    except ValueError:
        logger.warning("Unknown %s %r kept as-is", enum_cls.__name__, raw)
        return raw


def _enum_value(member: Any) -> Any:
    return member.value if isinstance(member, Enum) else member


def condition_to_dict(c: LogicCondition) -> Dict[str, Any]:
    return {
        "question_id": c.question_id,
        "operator": _enum_value(c.operator),
        "value": c.value,
    }


def condition_from_dict(d: Dict[str, Any]) -> LogicCondition:
    return LogicCondition(
        question_id=_require(d, "question_id", "condition"),
        operator=_enum_or_raw(ConditionOperator, d.get("operator")),
        value=d.get("value"),
    )


def logic_to_dict(logic: ConditionalLogic | None) -> Dict[str, Any] | None:
    if logic is None:
        return None
    return {
        "conditions": [condition_to_dict(c) for c in logic.conditions],
        "operator": _enum_value(logic.operator),
        "action": _enum_value(logic.action),
        "target_question_id": logic.target_question_id,
    }


def logic_from_dict(d: Dict[str, Any] | None) -> ConditionalLogic | None:
    if d is None:
        return None
    if isinstance(d, str):
        # Some stores keep conditional_logic as a JSON text column
        try:
            d = json.loads(d)
        except ValueError as e:
            raise SerializationError(f"conditional_logic is not valid JSON: {e}")
    if not isinstance(d, dict):
        raise SerializationError(f"Expected a mapping for conditional_logic, got {type(d).__name__}")
    return ConditionalLogic(
        conditions=tuple(condition_from_dict(c) for c in d.get("conditions") or []),
        operator=_enum_or_raw(LogicOperator, d.get("operator", "AND")),
        action=_enum_or_raw(LogicAction, d.get("action", "show")),
        target_question_id=d.get("target_question_id"),
    )


def question_to_dict(q: Question) -> Dict[str, Any]:
    return {
        "id": q.id,
        "order_num": q.order_num,
        "required": q.required,
        "text": q.text,
        "type": q.type,
        "section_id": q.section_id,
        "conditional_logic": logic_to_dict(q.conditional_logic),
    }


def question_from_dict(d: Dict[str, Any]) -> Question:
    question_id = _require(d, "id", "question")
    return Question(
        id=question_id,
        order_num=d.get("order_num", question_id),
        required=bool(d.get("required", False)),
        text=d.get("text") or "",
        conditional_logic=logic_from_dict(d.get("conditional_logic")),
        type=d.get("type"),
        section_id=d.get("section_id"),
    )


def answer_to_dict(a: Answer) -> Dict[str, Any]:
    d = {"question_id": a.question_id}
    for name in ANSWER_FIELDS:
        d[name] = getattr(a, name)
    return d


def answer_from_dict(d: Dict[str, Any]) -> Answer:
    question_id = _require(d, "question_id", "answer")
    # Extra storage columns (id, response_id, created_at, ...) are ignored
    return Answer(question_id=question_id, **{name: d.get(name) for name in ANSWER_FIELDS})


def answers_from_list(items: List[Dict[str, Any]]) -> List[Answer]:
    return [answer_from_dict(item) for item in items or []]


def answers_from_json(s: str) -> List[Answer]:
    return answers_from_list(json.loads(s))


def answers_to_json(answers: List[Answer]) -> str:
    return json.dumps([answer_to_dict(a) for a in answers], sort_keys=True)


def questionnaire_to_dict(q: Questionnaire) -> Dict[str, Any]:
    return {
        "name": q.name,
        "questions": [question_to_dict(question) for question in q.questions],
        "metadata": q.metadata,
    }


def questionnaire_from_dict(d: Dict[str, Any]) -> Questionnaire:
    if not isinstance(d, dict):
        raise SerializationError(f"Expected a mapping for questionnaire, got {type(d).__name__}")
    q = Questionnaire(name=d.get("name", ""))
    q.questions = [question_from_dict(question) for question in d.get("questions") or []]
    q.metadata = d.get("metadata") or {}
    return q


def questionnaire_to_json(q: Questionnaire) -> str:
    return json.dumps(questionnaire_to_dict(q), sort_keys=True)


def questionnaire_from_json(s: str) -> Questionnaire:
    d = json.loads(s)
    return questionnaire_from_dict(d)


def questionnaire_to_yaml(q: Questionnaire) -> str:
    return yaml.safe_dump(questionnaire_to_dict(q))


def questionnaire_from_yaml(s: str) -> Questionnaire:
    d = yaml.safe_load(s)
    return questionnaire_from_dict(d)
