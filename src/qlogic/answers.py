"""
Answers and the Answer Snapshot.

An Answer arrives from storage as a bag of optional typed fields.
Rule evaluation never looks at that bag directly: it asks the Answer to
resolve itself into exactly one tagged AnswerValue, and dispatches on the
variant.

Resolution order (first non-null field wins):
    boolean_value -> numeric_value -> date_value -> time_value
    -> datetime_value -> json_value -> value

This is a fixed fallback chain, not type inference.
"""

from abc import ABC
from dataclasses import dataclass
from collections.abc import Mapping
from typing import Any, Dict, Iterable, Iterator, Optional


class AnswerValue(ABC):
    """
    Base class for resolved answer values.

    Every variant is a frozen dataclass holding a single `payload`.
    """
    pass


@dataclass(frozen=True)
class TextValue(AnswerValue):
    payload: Any


@dataclass(frozen=True)
class NumberValue(AnswerValue):
    payload: float


@dataclass(frozen=True)
class BooleanValue(AnswerValue):
    payload: bool


@dataclass(frozen=True)
class DateValue(AnswerValue):
    payload: Any


@dataclass(frozen=True)
class TimeValue(AnswerValue):
    payload: Any


@dataclass(frozen=True)
class DateTimeValue(AnswerValue):
    payload: Any


@dataclass(frozen=True)
class JsonValue(AnswerValue):
    """Structured answers, e.g. the list of options ticked in a multi-select."""

    payload: Any


@dataclass(frozen=True)
class MissingValue(AnswerValue):
    """An answer row exists but every field is null."""

    payload: None = None


# Answer field read by each {{ref.prop}} interpolation property
PROPERTY_FIELDS: Dict[str, str] = {
    "text": "value",
    "value": "value",
    "number": "numeric_value",
    "date": "date_value",
    "time": "time_value",
    "datetime": "datetime_value",
    "boolean": "boolean_value",
    "json": "json_value",
}


@dataclass(frozen=True)
class Answer:
    """
    The answer currently recorded for one question.

    Properties:
        question_id: Question this answer belongs to
        value: Generic / free-text value
        numeric_value, boolean_value: Typed scalar values
        date_value, time_value, datetime_value: As stored (usually ISO strings)
        json_value: Structured value (lists for multi-select, dicts, ...)
    """

    question_id: int
    value: Any = None
    numeric_value: Optional[float] = None
    boolean_value: Optional[bool] = None
    date_value: Any = None
    time_value: Any = None
    datetime_value: Any = None
    json_value: Any = None

    def resolve(self) -> AnswerValue:
        """Return the "best" value of this answer as a tagged variant."""
        if self.boolean_value is not None:
            return BooleanValue(self.boolean_value)
        if self.numeric_value is not None:
            return NumberValue(self.numeric_value)
        if self.date_value is not None:
            return DateValue(self.date_value)
        if self.time_value is not None:
            return TimeValue(self.time_value)
        if self.datetime_value is not None:
            return DateTimeValue(self.datetime_value)
        if self.json_value is not None:
            return JsonValue(self.json_value)
        if self.value is not None:
            return TextValue(self.value)
        return MissingValue()

    def get_property(self, prop: str) -> Any:
        """
        Read the raw field named by an interpolation property.

        Unknown properties fall back to the generic `value` field.
        """
        return getattr(self, PROPERTY_FIELDS.get(prop, "value"))


class AnswerSnapshot(Mapping):
    """
    Point-in-time mapping of question id to its recorded Answer.

    Built once from an answer list and never mutated afterwards; the engine
    replaces the whole snapshot on every update. If the list holds more than
    one answer for a question, the last one wins.
    """

    def __init__(self, answers: Iterable[Answer] = ()):
        self._answers: Dict[int, Answer] = {a.question_id: a for a in answers}

    def __getitem__(self, question_id: int) -> Answer:
        return self._answers[question_id]

    def __iter__(self) -> Iterator[int]:
        return iter(self._answers)

    def __len__(self) -> int:
        return len(self._answers)

    def __repr__(self) -> str:
        return f"AnswerSnapshot({list(self._answers.values())!r})"

    def resolve(self, question_id: int) -> Optional[AnswerValue]:
        """Resolved value for a question, or None when it has no answer."""
        answer = self._answers.get(question_id)
        if answer is None:
            return None
        return answer.resolve()
