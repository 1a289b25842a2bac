"""
Dynamic question text.

Rewrites {{ref.prop}} tokens in question text with previously recorded
answers. `ref` is a question's order_num or id (first question in registry
order matching either wins); `prop` picks the answer field, see
qlogic.answers.PROPERTY_FIELDS.

Tokens that cannot be resolved are left in the text verbatim.
"""

import json
import logging
import re
from typing import Any, Optional, Sequence

from qlogic.answers import AnswerSnapshot
from qlogic.model import Question

logger = logging.getLogger(__name__)

TOKEN_RE = re.compile(r"\{\{(\w+)\.(\w+)\}\}", re.ASCII)


def find_referenced_question(ref: str, questions: Sequence[Question]) -> Optional[Question]:
    """Resolve a token reference against order_num or id."""
    for question in questions:
        if str(question.order_num) == ref or str(question.id) == ref:
            return question
    return None


def format_answer_value(raw: Any) -> Optional[str]:
    """
    Render an answer field for display, or None if there is nothing to show.
    """
    if raw is None or raw == "":
        return None
    if isinstance(raw, (list, tuple)) and not raw:
        return None
    if isinstance(raw, bool):
        return "true" if raw else "false"
    if isinstance(raw, float) and raw.is_integer():
        return str(int(raw))
    if isinstance(raw, (list, tuple)) and all(isinstance(item, (str, int, float)) for item in raw):
        return ", ".join(format_answer_value(item) or "" for item in raw)
    if isinstance(raw, (dict, list, tuple)):
        try:
            return json.dumps(raw, sort_keys=True, default=str)
        except TypeError:
            # Keys of mixed types cannot be sorted
            return json.dumps(raw, default=str)
    return str(raw)


def interpolate(text: str, questions: Sequence[Question], snapshot: AnswerSnapshot) -> str:
    """
    Substitute every resolvable {{ref.prop}} token in `text`.

    Args:
        text: Raw question text
        questions: Question registry used to resolve refs
        snapshot: Current answers

    Returns:
        Text with tokens replaced where an answer value exists
    """

    def _replace(match: "re.Match[str]") -> str:
        ref, prop = match.group(1), match.group(2)
        question = find_referenced_question(ref, questions)
        if question is None:
            logger.debug("Unresolved text reference %s", match.group(0))
            return match.group(0)
        answer = snapshot.get(question.id)
        if answer is None:
            return match.group(0)
        try:
            rendered = format_answer_value(answer.get_property(prop))
        except (TypeError, ValueError):
            logger.warning("Could not render %s; left as-is", match.group(0), exc_info=True)
            return match.group(0)
        return match.group(0) if rendered is None else rendered

    return TOKEN_RE.sub(_replace, text or "")
