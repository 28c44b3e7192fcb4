from __future__ import annotations

from abc import ABC, abstractmethod


class LabelMatcher(ABC):
    """Strategy Pattern: decide whether a stored record label refers to a slot."""

    name: str = "base"

    @abstractmethod
    def matches(self, *, label: str, slot_name: str) -> bool:
        raise NotImplementedError
