"""Core message selection entry point.

This module is integration-agnostic. It only relies on ports for metadata,
trigger evaluation and the experiment platform, enabling different hosts or
adapters without changes here.
"""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional

from nudge.catalog import MessageCatalogBuilder
from nudge.eligibility import EligibilityEvaluator
from nudge.experiments import ExperimentGate
from nudge.models import Message, Metadata
from nudge.ports import ExperimentFeature, ExpressionEvaluator, MetadataStore
from nudge.sanitizer import Sanitizer


class MessageSelector:
    """Composes catalog building, eligibility and the experiment gate."""

    def __init__(
        self,
        metadata_store: MetadataStore,
        evaluator: ExpressionEvaluator,
        feature: ExperimentFeature,
        sanitizer: Optional[Sanitizer] = None,
        catalog_builder: Optional[MessageCatalogBuilder] = None,
        eligibility: Optional[EligibilityEvaluator] = None,
        gate: Optional[ExperimentGate] = None,
    ) -> None:
        self._metadata_store = metadata_store
        self._evaluator = evaluator
        self._feature = feature
        self._sanitizer = sanitizer or Sanitizer()
        self._catalog_builder = catalog_builder or MessageCatalogBuilder(self._sanitizer)
        self._eligibility = eligibility or EligibilityEvaluator()
        self._gate = gate or ExperimentGate(self._eligibility)

    def get_messages(self) -> List[Message]:
        """Return the current candidate list, highest priority first."""

        return self._catalog_builder.build_messages(
            self._feature.value(),
            self._metadata_store.get_metadata(),
        )

    def get_next_message(
        self,
        candidates: Iterable[Message],
        evaluator: Optional[ExpressionEvaluator] = None,
    ) -> Optional[Message]:
        """Return the message to show next, or None.

        ``evaluator`` overrides the injected one for this call, e.g. to
        evaluate triggers against attributes of the current display surface.
        """

        return self._gate.select_with_exposure(
            candidates,
            self._feature.value().message_under_experiment,
            self._feature.record_exposure,
            evaluator or self._evaluator,
        )

    def update_metadata(self, entry: Metadata) -> None:
        self._metadata_store.update_metadata(entry)

    def sanitize_action(self, key: str, actions: Mapping[str, str]) -> Optional[str]:
        return self._sanitizer.sanitize_action(key, actions)

    def sanitize_triggers(
        self, keys: Iterable[str], triggers: Mapping[str, str]
    ) -> Optional[List[str]]:
        return self._sanitizer.sanitize_triggers(keys, triggers)

    def is_message_eligible(
        self, message: Message, evaluator: Optional[ExpressionEvaluator] = None
    ) -> bool:
        return self._eligibility.is_eligible(message, evaluator or self._evaluator)

    def is_message_under_experiment(self, message: Message, experiment_id: Optional[str]) -> bool:
        return self._gate.is_under_experiment(message, experiment_id)
