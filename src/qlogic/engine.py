"""
Conditional Logic Engine.

Drives a questionnaire in progress from one source of truth:
    - Visibility (show / hide rules), memoized per engine instance
    - Requiredness (static flag, or a require rule), visible questions only
    - Navigation (skip_to rules, then ordinal scan over visible questions)
    - Dynamic question text ({{ref.prop}} tokens)
    - Progress and required-question validation

Data flows one way:
    AnswerSnapshot -> evaluator -> visibility -> navigation / text / reports

CONCURRENCY:
    One engine per questionnaire-filling session. update_answers mutates the
    snapshot and cache in place; do not share an instance across concurrent
    callers.

Nothing in this module raises on malformed rules or answers. Bad input
degrades to False, to fall-through navigation, or to text left as-is.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from qlogic.answers import Answer, AnswerSnapshot
from qlogic.conditions import LogicAction
from qlogic.evaluator import aggregate_logic
from qlogic.interpolation import interpolate
from qlogic.model import Question, Questionnaire

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineConfig:
    """
    Tunables for a ConditionalLogicEngine.

    Properties:
        max_path_steps: Upper bound on the number of questions
            get_question_path will walk before giving up
    """

    max_path_steps: int = 1000


@dataclass
class Progress:
    """Completion of the currently visible questions."""

    current: int = 0
    total: int = 0
    percentage: int = 0


@dataclass
class ValidationResult:
    """Outcome of validate_required_questions."""

    is_valid: bool = True
    missing_questions: List[Question] = field(default_factory=list)


class ConditionalLogicEngine:
    """
    Rule evaluation for one questionnaire-filling session.

    Args:
        questions: Full question registry, conditional_logic already parsed
        answers: Initial answers
        config: Optional EngineConfig
    """

    def __init__(
        self,
        questions: Sequence[Question],
        answers: Iterable[Answer] = (),
        config: Optional[EngineConfig] = None,
    ):
        self.config = config or EngineConfig()
        self.questions: List[Question] = list(questions)
        self._by_id: Dict[int, Question] = {}
        for question in self.questions:
            self._by_id.setdefault(question.id, question)
        self._ordered: List[Question] = sorted(self.questions, key=lambda q: q.order_num)
        self.snapshot = AnswerSnapshot(answers)
        self._visibility_cache: Dict[int, bool] = {}

    @classmethod
    def from_questionnaire(
        cls,
        questionnaire: Questionnaire,
        answers: Iterable[Answer] = (),
        config: Optional[EngineConfig] = None,
    ) -> "ConditionalLogicEngine":
        return cls(questionnaire.questions, answers, config)

    def get_question(self, question_id: int) -> Optional[Question]:
        return self._by_id.get(question_id)

    # =========================================================================
    # MUTATION
    # =========================================================================

    def update_answers(self, answers: Iterable[Answer]) -> None:
        """
        Replace the answer snapshot wholesale.

        The visibility cache is cleared entirely; every later query sees
        only the new answers.
        """
        self.snapshot = AnswerSnapshot(answers)
        self._visibility_cache.clear()

    # =========================================================================
    # VISIBILITY & REQUIREDNESS
    # =========================================================================

    def is_question_visible(self, question_id: int) -> bool:
        """
        Whether a question should currently be presented.

        Questions without a rule, unknown questions, and questions whose
        rule is require / skip_to are always visible.
        """
        cached = self._visibility_cache.get(question_id)
        if cached is not None:
            return cached

        question = self._by_id.get(question_id)
        logic = question.conditional_logic if question is not None else None

        if logic is None:
            visible = True
        elif logic.action is LogicAction.SHOW:
            visible = aggregate_logic(logic, self.snapshot)
        elif logic.action is LogicAction.HIDE:
            visible = not aggregate_logic(logic, self.snapshot)
        else:
            visible = True

        self._visibility_cache[question_id] = visible
        return visible

    def is_question_required(self, question_id: int) -> bool:
        """
        Whether a question must be answered before submission.

        A require rule replaces the static flag with its own result.
        Hidden and unknown questions are never required.
        """
        question = self._by_id.get(question_id)
        if question is None:
            return False

        required = question.required
        logic = question.conditional_logic
        if logic is not None and logic.action is LogicAction.REQUIRE:
            required = aggregate_logic(logic, self.snapshot)

        return required and self.is_question_visible(question_id)

    def get_visible_questions(self) -> List[Question]:
        """All currently visible questions, sorted by order_num."""
        return [q for q in self._ordered if self.is_question_visible(q.id)]

    # =========================================================================
    # NAVIGATION
    # =========================================================================

    def _skip_target(self, question: Question) -> Optional[Question]:
        logic = question.conditional_logic
        if logic is None or logic.action is not LogicAction.SKIP_TO:
            return None
        if logic.target_question_id is None:
            return None
        if not aggregate_logic(logic, self.snapshot):
            return None

        target = self._by_id.get(logic.target_question_id)
        if target is None:
            logger.warning(
                "Question %s skips to unknown question %s; continuing in order",
                question.id,
                logic.target_question_id,
            )
            return None
        if not self.is_question_visible(target.id):
            logger.debug("Skip target %s of question %s is hidden", target.id, question.id)
            return None
        return target

    def get_next_question(self, current_question_id: int) -> Optional[Question]:
        """
        The question to present after `current_question_id`.

        An active skip_to rule wins if its target is visible. Otherwise the
        first visible question after the current one in order_num order.

        Returns:
            Question, or None at the end of the questionnaire or for an
            unknown current question
        """
        current = self._by_id.get(current_question_id)
        if current is None:
            return None

        target = self._skip_target(current)
        if target is not None:
            return target

        position = next(i for i, q in enumerate(self._ordered) if q is current)
        for candidate in self._ordered[position + 1:]:
            if self.is_question_visible(candidate.id):
                return candidate
        return None

    def get_question_path(self, start_question_id: Optional[int] = None) -> List[Question]:
        """
        Questions a respondent would be shown, following get_next_question.

        Starts at `start_question_id`, or at the first visible question.
        The walk stops at the end of the questionnaire, when a question
        would be shown a second time (skip cycle), or after
        config.max_path_steps questions.
        """
        if start_question_id is None:
            visible = self.get_visible_questions()
            current = visible[0] if visible else None
        else:
            current = self._by_id.get(start_question_id)

        path: List[Question] = []
        seen = set()
        while current is not None:
            if current.id in seen:
                logger.warning(
                    "Navigation cycle detected at question %s: %s",
                    current.id,
                    " -> ".join(str(q.id) for q in path + [current]),
                )
                break
            if len(path) >= self.config.max_path_steps:
                logger.warning("Navigation path exceeded %d steps", self.config.max_path_steps)
                break
            path.append(current)
            seen.add(current.id)
            current = self.get_next_question(current.id)
        return path

    # =========================================================================
    # DYNAMIC TEXT
    # =========================================================================

    def get_dynamic_question_text(self, question_id: int) -> str:
        """Question text with {{ref.prop}} tokens substituted; '' if unknown."""
        question = self._by_id.get(question_id)
        if question is None:
            return ""
        return interpolate(question.text, self.questions, self.snapshot)

    # =========================================================================
    # PROGRESS & VALIDATION
    # =========================================================================

    def get_progress(self) -> Progress:
        """How many visible questions have a recorded answer."""
        visible = self.get_visible_questions()
        total = len(visible)
        current = sum(1 for q in visible if q.id in self.snapshot)
        percentage = math.floor(current / total * 100 + 0.5) if total else 0
        return Progress(current=current, total=total, percentage=percentage)

    def validate_required_questions(self) -> ValidationResult:
        """
        Collect visible, required questions that have no answer.

        An empty missing_questions list is the only success signal.
        """
        missing = [
            q
            for q in self.get_visible_questions()
            if self.is_question_required(q.id) and q.id not in self.snapshot
        ]
        if missing:
            logger.debug("Missing required questions: %s", [q.id for q in missing])
        return ValidationResult(is_valid=not missing, missing_questions=missing)
