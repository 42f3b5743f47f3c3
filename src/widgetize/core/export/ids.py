"""Element id generation."""

from __future__ import annotations

import secrets


class IdGenerator:
    """
    Issues Elementor element ids, unique within one export.

    Ids are seven lowercase hex characters, the shape Elementor itself
    produces.
    """

    LENGTH = 7

    def __init__(self) -> None:
        self._issued: set[str] = set()

    def next(self) -> str:
        """Return a fresh id not issued before by this generator."""
        while True:
            candidate = secrets.token_hex(4)[: self.LENGTH]
            if candidate not in self._issued:
                self._issued.add(candidate)
                return candidate

    @property
    def issued(self) -> int:
        """Count of ids issued so far."""
        return len(self._issued)
