"""Trigger evaluation for candidate messages (core domain)."""

from __future__ import annotations

import logging

from nudge.models import Message
from nudge.ports import ExpressionEvaluator

LOGGER = logging.getLogger(__name__)


class EligibilityEvaluator:
    """Decides whether every trigger of a message currently holds."""

    def is_eligible(self, message: Message, evaluator: ExpressionEvaluator) -> bool:
        """Return True when all triggers evaluate to True.

        A message without triggers is always eligible. Evaluation failures
        mark the message ineligible and are never raised to the caller.
        """

        try:
            return all(evaluator.eval_boolean(expression) for expression in message.triggers)
        except Exception:
            LOGGER.info("Treating message %s as ineligible (trigger evaluation failed)", message.id, exc_info=True)
            return False
