from __future__ import annotations

import copy
from typing import Any, Dict, Optional

from .repository import ThresholdRepository


class InMemoryThresholdRepository(ThresholdRepository):
    def __init__(self, initial: Optional[Dict[str, Dict[str, Any]]] = None):
        self._items: Dict[str, Dict[str, Any]] = copy.deepcopy(initial or {})

    def get(self, activity_id: str) -> Optional[Dict[str, Any]]:
        payload = self._items.get(str(activity_id))
        return copy.deepcopy(payload) if payload is not None else None

    def save(self, activity_id: str, payload: Dict[str, Any]) -> None:
        self._items[str(activity_id)] = copy.deepcopy(payload)
