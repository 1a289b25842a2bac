"""
Core Questionnaire Model Objects

Defines the static question registry the logic engine evaluates against:
    - Questions (ordered nodes, optionally carrying a rule)
    - Questionnaires (root container)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about storage, HTTP or rendering
        - Carry structure, not behavior
        - Are fully serializable (see qlogic.serialization)
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .conditions import ConditionalLogic


@dataclass
class Question:
    """
    A single question of a questionnaire.

    Properties:
        id:
            Unique, stable identifier within the questionnaire

        order_num:
            Presentation order; navigation and listing sort by it

        required:
            Static requiredness. A REQUIRE rule overrides it.

        text:
            Question text, may contain {{ref.prop}} tokens

        conditional_logic:
            Optional rule governing this question's visibility,
            requiredness, or the navigation away from it
            If None: always visible

        type, section_id:
            Carried through for callers, never interpreted by the engine
    """

    id: int
    order_num: int
    required: bool = False
    text: str = ""
    conditional_logic: Optional[ConditionalLogic] = None
    type: Optional[str] = None
    section_id: Optional[int] = None


@dataclass
class Questionnaire:
    """
    Root container for a questionnaire definition.

    Properties:
        name: Questionnaire title
        questions: Question registry, in any order
        metadata: Arbitrary key-value pairs

    INVARIANTS:
        - Question ids are unique
        - skip_to targets should name a question in `questions`
          (not enforced here; see qlogic.analyzer)
    """

    name: str
    questions: List[Question] = field(default_factory=list)
    metadata: Dict[str, str] = field(default_factory=dict)

    def get_question(self, question_id: int) -> Optional[Question]:
        """
        Retrieve a question by ID.

        Args:
            question_id: Question identifier

        Returns:
            Question object or None if not found
        """
        for question in self.questions:
            if question.id == question_id:
                return question
        return None

    def ordered_questions(self) -> List[Question]:
        """Questions sorted by order_num (stable for equal order_num)."""
        return sorted(self.questions, key=lambda q: q.order_num)
