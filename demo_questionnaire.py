"""
Demo: Analyze the example questionnaire, then replay a respondent session.
"""

import logging

from qlogic.analyzer import analyze_questionnaire
from qlogic.answers import Answer
from qlogic.engine import ConditionalLogicEngine
from qlogic.examples import build_example_answers, build_example_screening_questionnaire
from qlogic.serialization import questionnaire_to_yaml


def print_report(report):
    """Pretty-print a LogicReport."""
    print()
    print("=" * 70)
    print(f"LOGIC ANALYSIS REPORT: {report.questionnaire_name}")
    print("=" * 70)
    print()

    print("📊 BASIC METRICS")
    print(f"  Total Questions:       {report.total_questions}")
    print(f"  Questions with Logic:  {report.questions_with_logic}")
    print(f"  Required Questions:    {report.required_questions}")
    print()

    print("🔀 RULES BY ACTION")
    for action, count in sorted(report.rules_by_action.items()):
        print(f"    {action}: {count}")
    print()

    print("🔗 NAVIGATION")
    print(f"  Backward Skips:        {report.backward_skips or 'None'}")
    print(f"  Has Skip Cycle:        {'YES' if report.has_skip_cycle else 'NO'}")
    if report.has_skip_cycle and report.cycle_example:
        print(f"    Example: {' -> '.join(str(q) for q in report.cycle_example)}")
    print()

    if report.warnings:
        print("⚠️  WARNINGS")
        for i, warning in enumerate(report.warnings, 1):
            print(f"  {i}. {warning}")
    else:
        print("✨ NO WARNINGS - Questionnaire logic looks clean!")
    print()


def print_session(engine):
    """Pretty-print what a respondent currently sees."""
    print("🧭 PATH")
    for question in engine.get_question_path():
        marker = "*" if engine.is_question_required(question.id) else " "
        answered = "✔" if question.id in engine.snapshot else " "
        print(f"  [{answered}]{marker} {question.id}: {engine.get_dynamic_question_text(question.id)}")

    progress = engine.get_progress()
    print(f"  Progress: {progress.current}/{progress.total} ({progress.percentage}%)")

    result = engine.validate_required_questions()
    if result.is_valid:
        print("  ✅ Ready to submit")
    else:
        print(f"  ❌ Missing: {[q.id for q in result.missing_questions]}")
    print()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    questionnaire = build_example_screening_questionnaire()
    print_report(analyze_questionnaire(questionnaire))

    answers = build_example_answers(employed=True, hours=45)
    engine = ConditionalLogicEngine.from_questionnaire(questionnaire, answers)
    print_session(engine)

    # Respondent reports no sleep problems and describes their job
    answers += [Answer(question_id=4, value="Nurse"), Answer(question_id=6, value="No")]
    engine.update_answers(answers)
    print_session(engine)

    yaml_str = questionnaire_to_yaml(questionnaire)
    with open("example_questionnaire_output.yaml", "w") as f:
        f.write(yaml_str)
    print("✅ Questionnaire exported to example_questionnaire_output.yaml")
