"""JSON-file experiment feature adapter.

Implements the core ExperimentFeature port on top of the ``messaging``
section of the JSON config file. The file is re-read on every ``value()``
call so edits behave like a remote configuration refresh.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Optional, Protocol

from nudge.config import RawMessagingConfig, build_messaging_config
from nudge.errors import ConfigError

LOGGER = logging.getLogger(__name__)


class ExposureSink(Protocol):
    def save_exposure(self, experiment_id: Optional[str]) -> None:
        ...


def load_config_file(path: str) -> dict[str, Any]:
    """Load the JSON config file and check its top-level shape."""

    if not os.path.exists(path):
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as handle:
            config = json.load(handle)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Config file is not valid JSON: {path} ({exc})") from exc

    if not isinstance(config, dict):
        raise ConfigError(f"Config file must contain a JSON object: {path}")
    return config


class JsonMessagingFeature:
    """Experiment feature backed by a local JSON file.

    Exposures are attributed to the experiment id of the most recent
    ``value()`` snapshot, i.e. the one the selector matched against.
    """

    def __init__(self, config_path: str, exposures: ExposureSink) -> None:
        self._config_path = config_path
        self._exposures = exposures
        self._snapshot: Optional[RawMessagingConfig] = None

    def value(self) -> RawMessagingConfig:
        messaging = load_config_file(self._config_path).get("messaging", {})
        if not isinstance(messaging, dict):
            raise ConfigError(f"'messaging' must be an object in {self._config_path}")
        self._snapshot = build_messaging_config(messaging)
        return self._snapshot

    def record_exposure(self) -> None:
        snapshot = self._snapshot if self._snapshot is not None else self.value()
        experiment_id = snapshot.message_under_experiment
        self._exposures.save_exposure(experiment_id)
        LOGGER.info("Exposure recorded for experiment %s", experiment_id)
