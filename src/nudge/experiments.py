"""Experiment-aware selection (core domain)."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from nudge.eligibility import EligibilityEvaluator
from nudge.models import Message
from nudge.ports import ExpressionEvaluator

LOGGER = logging.getLogger(__name__)

# An experiment id ending with this marker names a family of variant ids.
VARIANT_PREFIX_MARKER = "-"


class ExperimentGate:
    """Picks the first showable candidate while recording exposures."""

    def __init__(self, eligibility: Optional[EligibilityEvaluator] = None) -> None:
        self._eligibility = eligibility or EligibilityEvaluator()

    def is_under_experiment(self, message: Message, experiment_id: Optional[str]) -> bool:
        """Return True if the message belongs to the active experiment.

        Matching rules:
        - No experiment id (None or blank): never under experiment.
        - An id ending with "-" matches every message id it prefixes,
          e.g. "onboarding-" matches "onboarding-control".
        - Otherwise the ids must be equal.
        """

        if not experiment_id or not experiment_id.strip():
            return False
        if experiment_id.endswith(VARIANT_PREFIX_MARKER):
            return message.id.startswith(experiment_id)
        return message.id == experiment_id

    def select_with_exposure(
        self,
        candidates: Iterable[Message],
        experiment_id: Optional[str],
        record_exposure: Callable[[], None],
        evaluator: ExpressionEvaluator,
    ) -> Optional[Message]:
        """Return the first eligible, non-control candidate.

        Every eligible message under the experiment records one exposure,
        control variants included; control variants are then skipped.
        Messages outside the experiment are returned without bookkeeping,
        except control variants, which are never returned; a control left
        over from an inactive experiment is skipped without an exposure.
        """

        for message in candidates:
            if not self._eligibility.is_eligible(message, evaluator):
                continue

            if not self.is_under_experiment(message, experiment_id):
                if message.data.is_control:
                    LOGGER.info("Skipping control message %s (no active experiment)", message.id)
                    continue
                return message

            record_exposure()
            if message.data.is_control:
                LOGGER.info("Skipping control message %s (exposure recorded)", message.id)
                continue
            return message

        return None
