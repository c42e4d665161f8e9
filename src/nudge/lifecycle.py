"""Metadata transitions for shown, pressed and dismissed messages."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional

from nudge.models import Message, Metadata
from nudge.selector import MessageSelector

LOGGER = logging.getLogger(__name__)


class MessageLifecycle:
    """Applies user-interaction transitions and forwards them to storage.

    Messages are never modified; each transition builds a new Metadata value
    from the one captured in the message and hands it to the selector.
    """

    def __init__(self, selector: MessageSelector) -> None:
        self._selector = selector

    def on_displayed(self, message: Message, now: Optional[datetime] = None) -> Metadata:
        """Count one more display and stamp the display time."""

        shown_at = now or datetime.now(timezone.utc)
        entry = replace(
            message.metadata,
            display_count=message.metadata.display_count + 1,
            last_time_shown=shown_at,
        )
        self._selector.update_metadata(entry)
        LOGGER.info("Message %s displayed (%s times)", message.id, entry.display_count)
        return entry

    def on_pressed(self, message: Message) -> Metadata:
        entry = replace(message.metadata, pressed=True)
        self._selector.update_metadata(entry)
        LOGGER.info("Message %s pressed", message.id)
        return entry

    def on_dismissed(self, message: Message) -> Metadata:
        entry = replace(message.metadata, dismissed=True)
        self._selector.update_metadata(entry)
        LOGGER.info("Message %s dismissed", message.id)
        return entry
