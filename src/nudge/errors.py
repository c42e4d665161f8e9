"""Error types shared by the core and adapters."""

from __future__ import annotations


class NudgeError(Exception):
    """Base class for nudge errors."""


class EvaluationError(NudgeError):
    """A trigger expression could not be evaluated to a boolean."""

    def __init__(self, expression: str, reason: str) -> None:
        super().__init__(f"Cannot evaluate {expression!r}: {reason}")
        self.expression = expression
        self.reason = reason


class ConfigError(NudgeError):
    """The messaging config file is missing or structurally invalid."""
