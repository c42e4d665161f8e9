"""Reference resolution for raw messaging config (core domain)."""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional


def _resolve(key: str, values: Mapping[str, str]) -> Optional[str]:
    if not key or not key.strip():
        return None
    return values.get(key)


class Sanitizer:
    """Resolves raw keys against their maps; any miss yields None."""

    def sanitize_action(self, key: str, actions: Mapping[str, str]) -> Optional[str]:
        """Return the action for ``key`` or None if blank or unknown."""

        return _resolve(key, actions)

    def sanitize_triggers(
        self, keys: Iterable[str], triggers: Mapping[str, str]
    ) -> Optional[List[str]]:
        """Resolve every trigger key in order.

        A single blank or unknown key fails the whole list; there is no
        partial result. An empty key list resolves to an empty list.
        """

        resolved: List[str] = []
        for key in keys:
            expression = _resolve(key, triggers)
            if expression is None:
                return None
            resolved.append(expression)
        return resolved
