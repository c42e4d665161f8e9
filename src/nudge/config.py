"""Core configuration dataclasses.

We keep config file handling outside the core, but these dataclasses define
the shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from nudge.models import MessageData, StyleData

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_DISPLAY_COUNT = 5


@dataclass(frozen=True)
class RawMessagingConfig:
    """One snapshot of the remote messaging configuration."""

    triggers: Dict[str, str] = field(default_factory=dict)
    styles: Dict[str, StyleData] = field(default_factory=dict)
    actions: Dict[str, str] = field(default_factory=dict)
    messages: Dict[str, MessageData] = field(default_factory=dict)
    message_under_experiment: Optional[str] = None


def _require_int(value: Any, name: str) -> int:
    # bool is a subclass of int; "true" is not a count.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    return value


def _require_bool(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{name} must be true or false, got {value!r}")
    return value


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = raw.get(name) or {}
    if not isinstance(section, dict):
        LOGGER.warning("Ignoring messaging.%s (expected an object, got %s)", name, type(section).__name__)
        return {}
    return section


def _build_style(raw: dict) -> StyleData:
    return StyleData(
        priority=_require_int(raw.get("priority", 0), "priority"),
        max_display_count=_require_int(
            raw.get("max_display_count", DEFAULT_MAX_DISPLAY_COUNT), "max_display_count"
        ),
    )


def _build_message(raw: dict, styles: Dict[str, StyleData]) -> MessageData:
    style_key = str(raw.get("style") or "")
    # Messages without their own limit inherit the style's limit.
    max_display_count = raw.get("max_display_count")
    if max_display_count is None:
        style = styles.get(style_key)
        max_display_count = style.max_display_count if style else DEFAULT_MAX_DISPLAY_COUNT

    trigger = raw.get("trigger", []) or []
    if isinstance(trigger, str):
        trigger = [trigger]

    return MessageData(
        action=str(raw.get("action") or ""),
        style=style_key,
        trigger=[str(key) for key in trigger],
        max_display_count=_require_int(max_display_count, "max_display_count"),
        is_control=_require_bool(raw.get("is_control", False), "is_control"),
        title=raw.get("title"),
        text=raw.get("text"),
        button_label=raw.get("button_label"),
    )


def build_messaging_config(raw: Dict[str, Any]) -> RawMessagingConfig:
    """Normalize the JSON ``messaging`` section into a RawMessagingConfig.

    Missing references default to empty values so the sanitizer can drop the
    entry later. Entries whose counts or flags have the wrong JSON type are
    skipped here with a warning, and sections that are not objects are read
    as empty; neither fails the whole config.
    """

    styles: Dict[str, StyleData] = {}
    for key, entry in _section(raw, "styles").items():
        try:
            styles[key] = _build_style(entry or {})
        except (TypeError, ValueError, AttributeError):
            LOGGER.warning("Skipping style %s (invalid values)", key)

    messages: Dict[str, MessageData] = {}
    for message_id, entry in _section(raw, "messages").items():
        try:
            messages[message_id] = _build_message(entry or {}, styles)
        except (TypeError, ValueError, AttributeError):
            LOGGER.warning("Skipping message %s (invalid values)", message_id)

    experiment = raw.get("message_under_experiment")
    return RawMessagingConfig(
        triggers={str(k): str(v) for k, v in _section(raw, "triggers").items()},
        styles=styles,
        actions={str(k): str(v) for k, v in _section(raw, "actions").items()},
        messages=messages,
        message_under_experiment=str(experiment) if experiment is not None else None,
    )
