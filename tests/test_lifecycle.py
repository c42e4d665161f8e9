from __future__ import annotations

from datetime import datetime, timezone

from nudge.config import RawMessagingConfig
from nudge.lifecycle import MessageLifecycle
from nudge.models import Message, MessageData, Metadata, StyleData
from nudge.selector import MessageSelector


class FakeMetadataStore:
    def __init__(self) -> None:
        self.updated: list[Metadata] = []

    def get_metadata(self) -> list[Metadata]:
        return list(self.updated)

    def update_metadata(self, entry: Metadata) -> None:
        self.updated.append(entry)


class FakeFeature:
    def value(self) -> RawMessagingConfig:
        return RawMessagingConfig()

    def record_exposure(self) -> None:
        pass


class AlwaysTrue:
    def eval_boolean(self, expression: str) -> bool:
        return True


def _lifecycle() -> tuple[MessageLifecycle, FakeMetadataStore]:
    store = FakeMetadataStore()
    selector = MessageSelector(metadata_store=store, evaluator=AlwaysTrue(), feature=FakeFeature())
    return MessageLifecycle(selector), store


def _message(display_count: int = 0) -> Message:
    return Message(
        id="message-1",
        data=MessageData(action="action", style="style"),
        action="action",
        style=StyleData(priority=1),
        triggers=[],
        metadata=Metadata(id="message-1", display_count=display_count),
    )


def test_on_displayed_increments_count_and_stamps_time() -> None:
    lifecycle, store = _lifecycle()
    shown_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
    message = _message(display_count=2)

    entry = lifecycle.on_displayed(message, now=shown_at)

    assert entry == Metadata(id="message-1", display_count=3, last_time_shown=shown_at)
    assert store.updated == [entry]
    assert message.metadata.display_count == 2


def test_on_displayed_defaults_to_current_utc_time() -> None:
    lifecycle, _ = _lifecycle()

    entry = lifecycle.on_displayed(_message())

    assert entry.last_time_shown is not None
    assert entry.last_time_shown.tzinfo is timezone.utc


def test_on_pressed_marks_pressed() -> None:
    lifecycle, store = _lifecycle()

    entry = lifecycle.on_pressed(_message(display_count=1))

    assert entry.pressed
    assert not entry.dismissed
    assert entry.display_count == 1
    assert store.updated == [entry]


def test_on_dismissed_marks_dismissed() -> None:
    lifecycle, store = _lifecycle()

    entry = lifecycle.on_dismissed(_message())

    assert entry.dismissed
    assert not entry.pressed
    assert store.updated == [entry]
