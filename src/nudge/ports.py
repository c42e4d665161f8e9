"""Ports (interfaces) used by the core selector.

Ports define the minimal contracts for metadata storage, trigger evaluation
and the experiment platform so that the core can be reused with different
backends.
"""

from __future__ import annotations

from typing import List, Protocol

from nudge.config import RawMessagingConfig
from nudge.models import Metadata


class MetadataStore(Protocol):
    """Per-message state persistence required by the selector."""

    def get_metadata(self) -> List[Metadata]:
        ...

    def update_metadata(self, entry: Metadata) -> None:
        ...


class ExpressionEvaluator(Protocol):
    """Evaluates a trigger expression; raises EvaluationError on bad input."""

    def eval_boolean(self, expression: str) -> bool:
        ...


class ExperimentFeature(Protocol):
    """Query interface of the remote config / experiment platform."""

    def value(self) -> RawMessagingConfig:
        ...

    def record_exposure(self) -> None:
        ...
