"""Attribute-based trigger evaluator.

A small stand-in for a full expression engine, good enough for local runs
and tests. Expressions are evaluated against a flat dict of attributes:

- key = value      (case-insensitive string equality)
- key != value     (inequality)
- key              (attribute is truthy)
- true / false     (literals)
- a && b, a || b   (&& binds tighter than ||; no parentheses)

Unknown attributes and empty clauses raise EvaluationError.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from nudge.errors import EvaluationError

_LITERALS = {"true": True, "false": False}


class AttributeExpressionEvaluator:
    """ExpressionEvaluator over a fixed attribute mapping."""

    def __init__(self, attributes: Optional[Mapping[str, Any]] = None) -> None:
        self._attributes = dict(attributes or {})

    def eval_boolean(self, expression: str) -> bool:
        if not expression or not expression.strip():
            raise EvaluationError(expression, "empty expression")

        return any(
            all(self._evaluate_clause(expression, clause) for clause in branch.split("&&"))
            for branch in expression.split("||")
        )

    def _evaluate_clause(self, expression: str, clause: str) -> bool:
        clause = clause.strip()
        if not clause:
            raise EvaluationError(expression, "empty clause")

        # Check != before = so "a != b" is not split on its "=".
        if "!=" in clause:
            key, _, expected = clause.partition("!=")
            return not self._compare(expression, key, expected)
        if "=" in clause:
            key, _, expected = clause.partition("=")
            return self._compare(expression, key, expected)

        literal = _LITERALS.get(clause.lower())
        if literal is not None:
            return literal
        return bool(self._resolve(expression, clause))

    def _compare(self, expression: str, key: str, expected: str) -> bool:
        key = key.strip()
        expected = expected.strip()
        if not key or not expected:
            raise EvaluationError(expression, "comparison needs both sides")
        actual = self._resolve(expression, key)
        return str(actual).lower() == expected.lower()

    def _resolve(self, expression: str, key: str) -> Any:
        if key not in self._attributes:
            raise EvaluationError(expression, f"unknown attribute {key!r}")
        return self._attributes[key]
