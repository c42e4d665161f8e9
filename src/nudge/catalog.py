"""Message catalog construction and ordering (core domain)."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from nudge.config import RawMessagingConfig
from nudge.models import Message, MessageData, Metadata
from nudge.sanitizer import Sanitizer

LOGGER = logging.getLogger(__name__)


def is_exhausted(message: Message) -> bool:
    """Return True once a message must never be offered again."""

    metadata = message.metadata
    return (
        metadata.pressed
        or metadata.dismissed
        or metadata.display_count >= message.data.max_display_count
    )


class MessageCatalogBuilder:
    """Builds the ordered candidate list from raw config and metadata."""

    def __init__(self, sanitizer: Optional[Sanitizer] = None) -> None:
        self._sanitizer = sanitizer or Sanitizer()

    def build_messages(
        self, config: RawMessagingConfig, metadata_list: Iterable[Metadata]
    ) -> List[Message]:
        """Return validated, unexhausted messages sorted by priority.

        Malformed entries are skipped one by one; they never abort the rest
        of the catalog.
        """

        metadata_by_id: Dict[str, Metadata] = {entry.id: entry for entry in metadata_list}

        messages: List[Message] = []
        for message_id, data in config.messages.items():
            metadata = metadata_by_id.get(message_id) or Metadata(id=message_id)
            message = self._build_message(message_id, data, metadata, config)
            if message is not None:
                messages.append(message)

        available = [message for message in messages if not is_exhausted(message)]
        # sorted() is stable, so equal priorities keep config order.
        return sorted(available, key=lambda message: message.style.priority, reverse=True)

    def _build_message(
        self,
        message_id: str,
        data: MessageData,
        metadata: Metadata,
        config: RawMessagingConfig,
    ) -> Optional[Message]:
        style = config.styles.get(data.style)
        if style is None:
            LOGGER.info("Dropping message %s (unknown style %r)", message_id, data.style)
            return None

        action = self._sanitizer.sanitize_action(data.action, config.actions)
        if action is None:
            LOGGER.info("Dropping message %s (unknown action %r)", message_id, data.action)
            return None

        triggers = self._sanitizer.sanitize_triggers(data.trigger, config.triggers)
        if triggers is None:
            LOGGER.info("Dropping message %s (unknown trigger in %r)", message_id, data.trigger)
            return None

        return Message(
            id=message_id,
            data=data,
            action=action,
            style=style,
            triggers=triggers,
            metadata=metadata,
        )
