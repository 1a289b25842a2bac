"""
Questionnaire Conditional Logic Package

Rule evaluation for a questionnaire in progress: which questions are
visible, which are required, where navigation goes next, what dynamic text
renders, and whether the response set is complete.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - HTTP routing or authentication
    - Persistence (questions and answers are handed in as snapshots)
    - Scoring, risk classification or analysis
    - UI rendering

Everything operates on in-memory snapshots, synchronously.
"""

from qlogic.answers import Answer, AnswerSnapshot
from qlogic.conditions import ConditionalLogic, ConditionOperator, LogicAction, LogicCondition, LogicOperator
from qlogic.engine import ConditionalLogicEngine, EngineConfig, Progress, ValidationResult
from qlogic.model import Question, Questionnaire

__version__ = "0.1.0"

__all__ = [
    "Answer",
    "AnswerSnapshot",
    "ConditionalLogic",
    "ConditionalLogicEngine",
    "ConditionOperator",
    "EngineConfig",
    "LogicAction",
    "LogicCondition",
    "LogicOperator",
    "Progress",
    "Question",
    "Questionnaire",
    "ValidationResult",
]
