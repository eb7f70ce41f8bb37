"""TriggerEvaluator — decides which trigger rules fire for an Answer Set.

The validator calls :meth:`fired` to find out which elaboration fields
are mandatory given the current answers.  A rule whose question has not
been answered never fires.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from questionnaire_forms.models.form import FormData
from questionnaire_forms.models.rule import Predicate, TriggerRule

logger = logging.getLogger(__name__)


class TriggerEvaluator:
    """Evaluates trigger predicates against answers."""

    def fired(self, rules: Iterable[TriggerRule], answers: FormData) -> list[TriggerRule]:
        """Return the rules whose predicate holds, in declaration order."""
        return [rule for rule in rules if self.holds(rule, answers)]

    def holds(self, rule: TriggerRule, answers: FormData) -> bool:
        """True if ``rule.when`` is satisfied by the answer to ``rule.question_id``."""
        answer = answers.get(rule.question_id)
        if answer is None or answer == "":
            return False
        return self._eval_predicate(rule.when, answer)

    # ------------------------------------------------------------------
    # Predicate evaluation
    # ------------------------------------------------------------------

    def _eval_predicate(self, pred: Predicate, answer: Any) -> bool:
        return self._compare(pred.op, answer, pred.value)

    @staticmethod
    def _compare(op: str, answer: Any, value: Any) -> bool:
        """Apply an operator to an answer and an expected value.

        Membership operators accept a scalar answer too and treat it as
        a one-element selection.
        """
        if op == "eq":
            return answer == value

        if op == "ne":
            return answer != value

        selected = answer if isinstance(answer, list) else [answer]

        if op == "contains":
            return value in selected

        if op == "contains_any":
            return any(v in selected for v in value)

        if op == "contains_other_than":
            # value is the sentinel (or list of sentinels) that doesn't count
            ignored = value if isinstance(value, list) else [value]
            return any(v not in ignored for v in selected)

        logger.warning("Unknown predicate operator: %s", op)
        return False
