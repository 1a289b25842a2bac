"""
Questionnaire Analyzer: static diagnostics of conditional logic.

This module inspects a Questionnaire's rules without any answers:
    - Rule inventory per action
    - Conditions referencing unknown questions or their own question
    - skip_to rules with a missing or unknown target, or jumping backwards
    - Cycles in the skip_to graph
    - Warning flags for authoring mistakes

IMPORTANT: This is read-only. It never modifies the questionnaire, and the
engine does not depend on it; a questionnaire with warnings still runs.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from qlogic.conditions import ConditionOperator, LogicAction, LogicOperator
from qlogic.model import Questionnaire


def _find_cycles_dfs(graph: Dict[int, List[int]], start: int, visited: Set[int],
                     rec_stack: Set[int], path: List[int]) -> Optional[List[int]]:
    """DFS to find a cycle starting from a node."""
    visited.add(start)
    rec_stack.add(start)
    path.append(start)

    for neighbor in graph.get(start, []):
        if neighbor not in visited:
            cycle = _find_cycles_dfs(graph, neighbor, visited, rec_stack, path[:])
            if cycle:
                return cycle
        elif neighbor in rec_stack:
            cycle_start_idx = path.index(neighbor)
            return path[cycle_start_idx:] + [neighbor]

    rec_stack.remove(start)
    return None


@dataclass
class LogicReport:
    """Analysis report for a questionnaire's conditional logic."""

    questionnaire_name: str
    total_questions: int = 0
    questions_with_logic: int = 0
    required_questions: int = 0

    # Rule inventory
    rules_by_action: Dict[str, int] = field(default_factory=dict)
    unknown_operators: Set[str] = field(default_factory=set)
    empty_rules: List[int] = field(default_factory=list)

    # References
    dangling_references: Dict[int, Set[int]] = field(default_factory=dict)
    self_references: List[int] = field(default_factory=list)

    # Navigation
    missing_skip_targets: List[int] = field(default_factory=list)
    dangling_skip_targets: Dict[int, int] = field(default_factory=dict)
    backward_skips: List[Tuple[int, int]] = field(default_factory=list)
    has_skip_cycle: bool = False
    cycle_example: Optional[List[int]] = None

    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def analyze_questionnaire(questionnaire: Questionnaire) -> LogicReport:
    """
    Analyze the rules of a Questionnaire.

    Returns a LogicReport with inventory and warnings.
    """
    report = LogicReport(questionnaire_name=questionnaire.name)
    report.total_questions = len(questionnaire.questions)

    by_id = {q.id: q for q in questionnaire.questions}
    rules_by_action: Dict[str, int] = defaultdict(int)
    skip_graph: Dict[int, List[int]] = defaultdict(list)

    # =========================================================================
    # 1. RULE INVENTORY & REFERENCES
    # =========================================================================

    for question in questionnaire.questions:
        if question.required:
            report.required_questions += 1

        logic = question.conditional_logic
        if logic is None:
            continue
        report.questions_with_logic += 1

        action = logic.action.value if isinstance(logic.action, LogicAction) else str(logic.action)
        rules_by_action[action] += 1

        if not isinstance(logic.operator, LogicOperator):
            report.unknown_operators.add(str(logic.operator))

        if not logic.conditions:
            report.empty_rules.append(question.id)

        for condition in logic.conditions:
            if not isinstance(condition.operator, ConditionOperator):
                report.unknown_operators.add(str(condition.operator))
            if condition.question_id == question.id:
                # A skip_to rule may read its own answer; visibility rules may not
                if logic.action is not LogicAction.SKIP_TO and question.id not in report.self_references:
                    report.self_references.append(question.id)
            elif condition.question_id not in by_id:
                report.dangling_references.setdefault(question.id, set()).add(condition.question_id)

        # =====================================================================
        # 2. SKIP TARGETS
        # =====================================================================

        if logic.action is LogicAction.SKIP_TO:
            target_id = logic.target_question_id
            if target_id is None:
                report.missing_skip_targets.append(question.id)
            elif target_id not in by_id:
                report.dangling_skip_targets[question.id] = target_id
            else:
                skip_graph[question.id].append(target_id)
                if by_id[target_id].order_num <= question.order_num:
                    report.backward_skips.append((question.id, target_id))

    report.rules_by_action = dict(rules_by_action)

    # =========================================================================
    # 3. SKIP CYCLES
    # =========================================================================

    visited: Set[int] = set()
    for question_id in list(skip_graph.keys()):
        if question_id not in visited:
            cycle = _find_cycles_dfs(skip_graph, question_id, visited, set(), [])
            if cycle:
                report.has_skip_cycle = True
                report.cycle_example = cycle
                break

    # =========================================================================
    # 4. WARNING FLAGS
    # =========================================================================

    if report.dangling_references:
        refs = sorted({r for targets in report.dangling_references.values() for r in targets})
        report.add_warning(
            f"Conditions reference unknown questions: {', '.join(str(r) for r in refs)}"
        )

    if report.self_references:
        report.add_warning(
            f"Conditions reference their own question: {', '.join(str(q) for q in report.self_references)}"
        )

    if report.unknown_operators:
        report.add_warning(
            f"Unknown operators (always false): {', '.join(sorted(report.unknown_operators))}"
        )

    if report.empty_rules:
        report.add_warning(
            f"Rules without conditions: {', '.join(str(q) for q in report.empty_rules)}"
        )

    if report.missing_skip_targets:
        report.add_warning(
            f"skip_to without target: {', '.join(str(q) for q in report.missing_skip_targets)}"
        )

    if report.dangling_skip_targets:
        pairs = sorted(report.dangling_skip_targets.items())
        report.add_warning(
            f"skip_to unknown question: {', '.join(f'{src} -> {dst}' for src, dst in pairs)}"
        )

    if report.backward_skips:
        report.add_warning(
            f"Backward skips: {', '.join(f'{src} -> {dst}' for src, dst in report.backward_skips)}"
        )

    if report.has_skip_cycle:
        report.add_warning(
            f"Skip cycle detected: {' -> '.join(str(q) for q in report.cycle_example)}"
        )

    return report
