"""
Example questionnaire builder.

Builds a small wellbeing screening questionnaire exercising every rule
action: show, hide, require and skip_to, plus dynamic question text.

    1  Name
    2  Are you currently employed?            (Yes / No)
    3  Hours worked per week                  shown if 2 == "Yes"
    4  Describe your job, {{1.value}}          required if 2 == "Yes" and 3 > 40
    5  Reasons for not working                hidden if 2 == "Yes"
    6  Any sleep problems?                    skip to 8 if == "No"
    7  Which sleep problems?                  required if 6 == "Yes"
    8  Anything else to add?
"""
from qlogic.answers import Answer
from qlogic.builders import condition, hide_if, require_if, show_if, skip_to_if
from qlogic.conditions import ConditionalLogic, ConditionOperator, LogicAction, LogicOperator
from qlogic.model import Question, Questionnaire


def build_example_screening_questionnaire() -> Questionnaire:
    questionnaire = Questionnaire(
        name="Wellbeing Screening",
        metadata={"source": "example"},
    )

    questionnaire.questions = [
        Question(id=1, order_num=1, required=True, text="What is your first name?", type="text"),
        Question(id=2, order_num=2, required=True, text="Are you currently employed?", type="yes_no"),
        Question(
            id=3,
            order_num=3,
            required=True,
            text="How many hours do you work per week?",
            type="number",
            conditional_logic=show_if(2, "Yes"),
        ),
        Question(
            id=4,
            order_num=4,
            text="Describe your job, {{1.value}}.",
            type="textarea",
            conditional_logic=ConditionalLogic(
                conditions=(
                    condition(2, ConditionOperator.EQUALS, "Yes"),
                    condition(3, ConditionOperator.GREATER_THAN, 40),
                ),
                operator=LogicOperator.AND,
                action=LogicAction.REQUIRE,
            ),
        ),
        Question(
            id=5,
            order_num=5,
            text="Why are you not working at the moment?",
            type="text",
            conditional_logic=hide_if(2, "Yes"),
        ),
        Question(
            id=6,
            order_num=6,
            required=True,
            text="Do you have any sleep problems?",
            type="yes_no",
            conditional_logic=skip_to_if(6, "No", target_question_id=8),
        ),
        Question(
            id=7,
            order_num=7,
            text="Which sleep problems do you have?",
            type="multiple_choice",
            conditional_logic=require_if(6, "Yes"),
        ),
        Question(id=8, order_num=8, text="Anything else you would like to add?", type="textarea"),
    ]

    return questionnaire


def build_example_answers(employed: bool = True, hours: int = 45) -> list:
    """Answers for the first part of the example questionnaire."""
    answers = [
        Answer(question_id=1, value="Sam"),
        Answer(question_id=2, value="Yes" if employed else "No"),
    ]
    if employed:
        answers.append(Answer(question_id=3, numeric_value=hours))
    return answers
