"""Mapping of long identifiers to compact consecutive integers."""

from __future__ import annotations

import threading


class Registry:
    """Assigns consecutive numbers, starting at 0, to identifiers on first use.

    Lookups are thread-safe.
    """

    def __init__(self) -> None:
        self._identifiers: dict[str, int] = {}
        self._lock = threading.Lock()

    def __getitem__(self, identifier: str) -> int:
        with self._lock:
            number = self._identifiers.get(identifier)
            if number is None:
                number = len(self._identifiers)
                self._identifiers[identifier] = number
            return number

    def __len__(self) -> int:
        return len(self._identifiers)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._identifiers

    def clear(self) -> None:
        """Forget all identifiers and restart numbering at 0."""
        with self._lock:
            self._identifiers.clear()