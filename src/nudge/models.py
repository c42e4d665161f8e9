"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any storage or delivery-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass(frozen=True)
class StyleData:
    """A named priority tier shared across messages."""

    priority: int
    max_display_count: int = 5


@dataclass(frozen=True)
class MessageData:
    """Raw, unvalidated message entry as it arrives from remote config."""

    action: str = ""
    style: str = ""
    trigger: List[str] = field(default_factory=list)
    max_display_count: int = 5
    is_control: bool = False
    title: Optional[str] = None
    text: Optional[str] = None
    button_label: Optional[str] = None


@dataclass(frozen=True)
class Metadata:
    """Mutable per-message state, persisted by the metadata store."""

    id: str
    display_count: int = 0
    pressed: bool = False
    dismissed: bool = False
    last_time_shown: Optional[datetime] = None


@dataclass(frozen=True)
class Message:
    """A validated message with every reference resolved."""

    id: str
    data: MessageData
    action: str
    style: StyleData
    triggers: List[str]
    metadata: Metadata
