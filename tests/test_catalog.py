from __future__ import annotations

from typing import Optional

from nudge.catalog import MessageCatalogBuilder
from nudge.config import RawMessagingConfig
from nudge.models import MessageData, Metadata, StyleData


def _message_data(
    *,
    action: str = "action-1",
    style: str = "style-1",
    trigger: Optional[list[str]] = None,
    max_display_count: int = 5,
) -> MessageData:
    return MessageData(
        action=action,
        style=style,
        trigger=["trigger-1"] if trigger is None else trigger,
        max_display_count=max_display_count,
    )


def _config(
    messages: dict[str, MessageData],
    styles: Optional[dict[str, StyleData]] = None,
) -> RawMessagingConfig:
    return RawMessagingConfig(
        triggers={"trigger-1": "trigger-1-expression"},
        styles=styles or {"style-1": StyleData(priority=1)},
        actions={"action-1": "action-1-url"},
        messages=messages,
    )


def _ids(messages) -> list[str]:
    return [message.id for message in messages]


def test_builds_message_with_resolved_references_and_metadata() -> None:
    config = _config({"message-1": _message_data()})

    results = MessageCatalogBuilder().build_messages(config, [Metadata(id="message-1", display_count=1)])

    assert len(results) == 1
    message = results[0]
    assert message.id == "message-1"
    assert message.metadata.id == "message-1"
    assert message.metadata.display_count == 1
    assert message.action == "action-1-url"
    assert message.triggers == ["trigger-1-expression"]
    assert message.style.priority == 1


def test_missing_metadata_gets_defaults() -> None:
    config = _config({"message-1": _message_data()})

    message = MessageCatalogBuilder().build_messages(config, [])[0]

    assert message.metadata == Metadata(id="message-1")


def test_sorts_by_priority_descending() -> None:
    config = _config(
        {
            "low-message": _message_data(style="low-priority"),
            "high-message": _message_data(style="high-priority"),
            "medium-message": _message_data(style="medium-priority"),
        },
        styles={
            "high-priority": StyleData(priority=100),
            "medium-priority": StyleData(priority=50),
            "low-priority": StyleData(priority=1),
        },
    )

    results = MessageCatalogBuilder().build_messages(config, [Metadata(id="message-1")])

    assert _ids(results) == ["high-message", "medium-message", "low-message"]


def test_equal_priorities_keep_config_order() -> None:
    config = _config(
        {
            "first": _message_data(style="shared"),
            "top": _message_data(style="top"),
            "second": _message_data(style="shared"),
            "third": _message_data(style="shared"),
        },
        styles={"shared": StyleData(priority=10), "top": StyleData(priority=20)},
    )

    results = MessageCatalogBuilder().build_messages(config, [])

    assert _ids(results) == ["top", "first", "second", "third"]


def test_drops_malformed_messages_and_keeps_the_rest() -> None:
    config = _config(
        {
            "unknown-action": _message_data(action="missing"),
            "blank-action": _message_data(action=" "),
            "unknown-trigger": _message_data(trigger=["trigger-1", "missing"]),
            "unknown-style": _message_data(style="missing"),
            "empty": MessageData(),
            "message-1": _message_data(),
            "no-triggers": _message_data(trigger=[]),
        }
    )

    results = MessageCatalogBuilder().build_messages(config, [])

    assert _ids(results) == ["message-1", "no-triggers"]
    assert results[1].triggers == []


def test_filters_pressed_messages() -> None:
    config = _config({"pressed-message": _message_data(), "normal-message": _message_data()})
    metadata = [
        Metadata(id="pressed-message", pressed=True),
        Metadata(id="normal-message", pressed=False),
    ]

    results = MessageCatalogBuilder().build_messages(config, metadata)

    assert _ids(results) == ["normal-message"]


def test_filters_dismissed_messages() -> None:
    config = _config({"dismissed-message": _message_data(), "normal-message": _message_data()})
    metadata = [
        Metadata(id="dismissed-message", dismissed=True),
        Metadata(id="normal-message", dismissed=False),
    ]

    results = MessageCatalogBuilder().build_messages(config, metadata)

    assert _ids(results) == ["normal-message"]


def test_filters_messages_over_max_display_count() -> None:
    config = _config(
        {
            "shown-many-times-message": _message_data(max_display_count=2),
            "normal-message": _message_data(),
        }
    )
    metadata = [
        Metadata(id="shown-many-times-message", display_count=10),
        Metadata(id="normal-message", display_count=0),
    ]

    results = MessageCatalogBuilder().build_messages(config, metadata)

    assert _ids(results) == ["normal-message"]


def test_display_count_equal_to_max_is_exhausted() -> None:
    config = _config({"message-1": _message_data(max_display_count=3)})

    assert MessageCatalogBuilder().build_messages(config, [Metadata(id="message-1", display_count=3)]) == []
    assert _ids(
        MessageCatalogBuilder().build_messages(config, [Metadata(id="message-1", display_count=2)])
    ) == ["message-1"]


def test_metadata_for_unknown_ids_is_ignored() -> None:
    config = _config({"message-1": _message_data()})

    results = MessageCatalogBuilder().build_messages(config, [Metadata(id="gone", pressed=True)])

    assert _ids(results) == ["message-1"]
